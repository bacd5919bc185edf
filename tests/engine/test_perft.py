from __future__ import annotations

import pytest

from mailbox_chess.engine.board import BoardState
from mailbox_chess.engine.notation import STARTPOS_FEN
from mailbox_chess.engine.perft import perft


@pytest.mark.parametrize("depth,nodes", [(0, 1), (1, 20), (2, 400), (3, 8902)])
def test_startpos_perft(depth: int, nodes: int) -> None:
    # No checks or pins can arise in the first three plies, so the
    # pseudo-legal counts match the standard figures.
    assert perft(BoardState.startpos(), depth) == nodes


def test_perft_does_not_mutate_board() -> None:
    b = BoardState.startpos()
    perft(b, 2)
    assert b.export_fen() == STARTPOS_FEN


def test_perft_counts_castles() -> None:
    b = BoardState.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    # Rooks: a1 has 7 up + 3 right, h1 has 7 up + 2 left; king: 5 steps + 2 castles.
    assert perft(b, 1) == 26


def test_negative_depth_raises() -> None:
    with pytest.raises(ValueError):
        perft(BoardState.startpos(), -1)
