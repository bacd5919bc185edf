from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict

from .squares import FILE_OF, RANK_OF


class Color(IntEnum):
    WHITE = 8
    BLACK = 16

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE


class PieceType(IntEnum):
    NONE = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


COLOR_MASK = Color.WHITE | Color.BLACK
TYPE_MASK = 0b111

TYPE_TO_CHAR: Dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

# FEN letter <-> piece code; uppercase is White.
CHAR_TO_CODE: Dict[str, int] = {}
for _ptype, _ch in TYPE_TO_CHAR.items():
    CHAR_TO_CODE[_ch.upper()] = Color.WHITE | _ptype
    CHAR_TO_CODE[_ch] = Color.BLACK | _ptype
CODE_TO_CHAR: Dict[int, str] = {v: k for k, v in CHAR_TO_CODE.items()}


def make_code(color: Color, ptype: PieceType) -> int:
    return int(color) | int(ptype)


def color_of(code: int) -> Color:
    return Color(code & COLOR_MASK)


def type_of(code: int) -> PieceType:
    return PieceType(code & TYPE_MASK)


@dataclass(frozen=True)
class Piece:
    """A piece as read off the board array.

    Holds no reference to the board: it is a snapshot of the code stored at
    ``index`` and goes stale as soon as the board is mutated.
    """

    color: Color
    type: PieceType
    index: int

    @property
    def code(self) -> int:
        return make_code(self.color, self.type)

    @property
    def rank(self) -> int:
        return RANK_OF[self.index]

    @property
    def file(self) -> int:
        return FILE_OF[self.index]

    @property
    def symbol(self) -> str:
        return CODE_TO_CHAR[self.code]
