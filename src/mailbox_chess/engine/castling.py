from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .pieces import Color


WHITE_KINGSIDE = 1
WHITE_QUEENSIDE = 2
BLACK_KINGSIDE = 4
BLACK_QUEENSIDE = 8
ALL_RIGHTS = WHITE_KINGSIDE | WHITE_QUEENSIDE | BLACK_KINGSIDE | BLACK_QUEENSIDE

# Canonical FEN order is KQkq.
FEN_CASTLING: Tuple[Tuple[str, int], ...] = (
    ("K", WHITE_KINGSIDE),
    ("Q", WHITE_QUEENSIDE),
    ("k", BLACK_KINGSIDE),
    ("q", BLACK_QUEENSIDE),
)


@dataclass(frozen=True)
class CastlingSide:
    """Fixed squares of one castle (mailbox indices)."""

    mask: int
    color: Color
    king_from: int
    king_to: int
    rook_from: int
    rook_to: int
    transit: Tuple[int, ...]


CASTLING_SIDES: Tuple[CastlingSide, ...] = (
    # e1g1, h1f1
    CastlingSide(WHITE_KINGSIDE, Color.WHITE, 25, 27, 28, 26, (26, 27)),
    # e1c1, a1d1
    CastlingSide(WHITE_QUEENSIDE, Color.WHITE, 25, 23, 21, 24, (22, 23, 24)),
    # e8g8, h8f8
    CastlingSide(BLACK_KINGSIDE, Color.BLACK, 95, 97, 98, 96, (96, 97)),
    # e8c8, a8d8
    CastlingSide(BLACK_QUEENSIDE, Color.BLACK, 95, 93, 91, 94, (92, 93, 94)),
)

# Rights forfeited once anything moves from (or lands on) a home square.
RIGHTS_TOUCHED_BY_SQUARE: Dict[int, int] = {}
for _side in CASTLING_SIDES:
    for _sq in (_side.king_from, _side.rook_from):
        RIGHTS_TOUCHED_BY_SQUARE[_sq] = RIGHTS_TOUCHED_BY_SQUARE.get(_sq, 0) | _side.mask


def sides_for(color: Color) -> Tuple[CastlingSide, ...]:
    return tuple(s for s in CASTLING_SIDES if s.color is color)


def side_for_king_move(from_sq: int, to_sq: int) -> CastlingSide | None:
    for side in CASTLING_SIDES:
        if side.king_from == from_sq and side.king_to == to_sq:
            return side
    return None
