from __future__ import annotations

from typing import Tuple


# 10x12 mailbox: two padding rows above and below, one padding column each side.
BOARD_CELLS = 120
OFF_BOARD = 0xFF
EMPTY = 0
NO_SQUARE = -1


def index_from_rank_file(rank: int, file: int) -> int:
    """Map a 0-based (rank, file) pair to its mailbox index (a1 = 21, h8 = 98)."""
    return 21 + file + 10 * rank


def _build_tables() -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    ranks = [OFF_BOARD] * BOARD_CELLS
    files = [OFF_BOARD] * BOARD_CELLS
    for rank in range(8):
        for file in range(8):
            idx = index_from_rank_file(rank, file)
            ranks[idx] = rank
            files[idx] = file
    return tuple(ranks), tuple(files)


# Shared by every board; OFF_BOARD marks border cells.
RANK_OF, FILE_OF = _build_tables()

INTERIOR: Tuple[int, ...] = tuple(i for i in range(BOARD_CELLS) if RANK_OF[i] != OFF_BOARD)


def is_interior(idx: int) -> bool:
    return 0 <= idx < BOARD_CELLS and RANK_OF[idx] != OFF_BOARD
