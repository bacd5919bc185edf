"""Mailbox (10x12) chess rules engine with FEN I/O and a small HTTP service."""

from __future__ import annotations

from .engine.board import BoardState, index_from_rank_file
from .engine.errors import ChessRuleError, IllegalMove, MalformedFen, OutOfBoundsSquare
from .engine.game import Game
from .engine.movegen import MoveOptions, legal_moves
from .engine.notation import (
    STARTPOS_FEN,
    algebraic_to_index,
    index_to_algebraic,
    parse_fen,
    serialize_fen,
)
from .engine.pieces import Color, Piece, PieceType
from .engine.turn import MoveRecord, apply_move

__all__ = [
    "BoardState",
    "ChessRuleError",
    "Color",
    "Game",
    "IllegalMove",
    "MalformedFen",
    "MoveOptions",
    "MoveRecord",
    "OutOfBoundsSquare",
    "Piece",
    "PieceType",
    "STARTPOS_FEN",
    "algebraic_to_index",
    "apply_move",
    "index_from_rank_file",
    "index_to_algebraic",
    "legal_moves",
    "parse_fen",
    "serialize_fen",
]

__version__ = "0.1.0"
