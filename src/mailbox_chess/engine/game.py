from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .board import BoardState
from .errors import IllegalMove
from .movegen import MoveOptions
from .move import Move
from .notation import index_to_algebraic
from .pieces import Color, PieceType
from .turn import MoveRecord


logger = logging.getLogger(__name__)


@dataclass
class Game:
    """Session wrapper owning one board.

    Responsibility: validate caller moves against generated moves, apply them
    through the turn controller, keep history for undo.
    """

    board: BoardState
    move_stack: List[MoveRecord] = field(default_factory=list)
    _snapshots: List[BoardState] = field(default_factory=list, repr=False)

    @classmethod
    def new(cls) -> "Game":
        return cls(board=BoardState.startpos())

    @classmethod
    def from_fen(cls, fen: str) -> "Game":
        return cls(board=BoardState.from_fen(fen))

    def to_fen(self) -> str:
        return self.board.export_fen()

    @property
    def turn(self) -> Color:
        return self.board.current_turn

    def moves_from(self, square: int) -> MoveOptions:
        return self.board.moves_from(square)

    def legal_moves(self) -> List[Move]:
        """All pseudo-legal moves of the side to move, quiet moves first per piece."""
        moves: List[Move] = []
        for piece in self.board.pieces(self.board.current_turn):
            options = self.board.legal_moves(piece)
            moves.extend(Move(piece.index, to) for to in options.all())
        return moves

    def pieces_of(self, color: Color, ptype: PieceType) -> List[tuple[int, int]]:
        return self.board.pieces_of(color, ptype)

    def apply_move(self, move: Move) -> MoveRecord:
        piece = self.board.piece_at(move.from_sq)
        if piece is None:
            raise IllegalMove(f"no piece on {index_to_algebraic(move.from_sq)}")
        if piece.color != self.board.current_turn:
            raise IllegalMove("piece does not belong to the side to move")
        if move.to_sq not in self.board.legal_moves(piece):
            raise IllegalMove("illegal move")

        self._snapshots.append(self.board.copy())
        record = self.board.apply_move(move.from_sq, move.to_sq)
        self.move_stack.append(record)
        logger.debug("applied %s, fen now %s", move.to_uci(), self.to_fen())
        return record

    def undo_move(self) -> MoveRecord:
        if not self.move_stack:
            raise IllegalMove("no moves to undo")
        record = self.move_stack.pop()
        self.board = self._snapshots.pop()
        logger.debug("undid %s", _record_uci(record))
        return record

    def last_move(self) -> Optional[str]:
        return _record_uci(self.move_stack[-1]) if self.move_stack else None

    def move_history_uci(self) -> List[str]:
        return [_record_uci(r) for r in self.move_stack]


def _record_uci(record: MoveRecord) -> str:
    return Move(record.from_sq, record.to_sq).to_uci()
