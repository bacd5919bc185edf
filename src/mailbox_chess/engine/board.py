from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from . import movegen, turn
from .movegen import MoveOptions
from .notation import STARTPOS_FEN, parse_fen, serialize_fen
from .pieces import COLOR_MASK, Color, Piece, PieceType, color_of, make_code, type_of
from .squares import (
    BOARD_CELLS,
    EMPTY,
    FILE_OF,
    INTERIOR,
    OFF_BOARD,
    RANK_OF,
    index_from_rank_file,
    is_interior,
)

__all__ = ["BoardState", "STARTPOS_FEN", "index_from_rank_file"]


@dataclass
class BoardState:
    """Mailbox board plus the FEN metadata of one game.

    Notes:
    - ``cells`` has 120 entries; the 64 interior squares hold a piece code
      (``color | type``) or 0, every border cell holds ``OFF_BOARD``.
    - Interior index is ``21 + file + 10 * rank`` with rank 0 = rank "1", so
      a1 = 21 and h8 = 98.
    - Only :mod:`mailbox_chess.engine.turn` writes to ``cells`` after
      construction.
    """

    cells: List[int]
    current_turn: Color
    castling_availability: int  # K=1, Q=2, k=4, q=8
    en_passant_target: int  # -1 when absent
    halfmove_clock: int
    current_move: int

    @classmethod
    def from_fen(cls, fen: str = STARTPOS_FEN) -> "BoardState":
        """Build a board from FEN.

        Raises:
            MalformedFen: If ``fen`` cannot be parsed; no board is created.
        """
        record = parse_fen(fen)
        return cls(
            cells=list(record.cells),
            current_turn=record.current_turn,
            castling_availability=record.castling_availability,
            en_passant_target=record.en_passant_target,
            halfmove_clock=record.halfmove_clock,
            current_move=record.current_move,
        )

    @classmethod
    def startpos(cls) -> "BoardState":
        return cls.from_fen(STARTPOS_FEN)

    def copy(self) -> "BoardState":
        """Return an independent clone for analysis or undo."""
        return BoardState(
            cells=list(self.cells),
            current_turn=self.current_turn,
            castling_availability=self.castling_availability,
            en_passant_target=self.en_passant_target,
            halfmove_clock=self.halfmove_clock,
            current_move=self.current_move,
        )

    # --- Queries ---
    index_from_rank_file = staticmethod(index_from_rank_file)

    def export_fen(self) -> str:
        return serialize_fen(self)

    def pieces_of(self, color: Color, ptype: PieceType) -> List[Tuple[int, int]]:
        """Return ``(rank, file)`` of every square holding exactly ``color | ptype``."""
        code = make_code(color, ptype)
        return [(RANK_OF[i], FILE_OF[i]) for i in range(BOARD_CELLS) if self.cells[i] == code]

    def piece_at(self, idx: int) -> Optional[Piece]:
        """Return the piece on ``idx``, or ``None`` for an empty or border cell."""
        if not is_interior(idx):
            return None
        code = self.cells[idx]
        if code == EMPTY or code == OFF_BOARD:
            return None
        return Piece(color=color_of(code), type=type_of(code), index=idx)

    def pieces(self, color: Optional[Color] = None) -> Iterator[Piece]:
        for idx in INTERIOR:
            code = self.cells[idx]
            if code == EMPTY:
                continue
            if color is not None and (code & COLOR_MASK) != color:
                continue
            yield Piece(color=color_of(code), type=type_of(code), index=idx)

    def legal_moves(self, piece: Piece) -> MoveOptions:
        return movegen.legal_moves(piece, self)

    def moves_from(self, idx: int) -> MoveOptions:
        """Pseudo-legal moves of whatever stands on ``idx``; empty if nothing does."""
        piece = self.piece_at(idx)
        if piece is None:
            return MoveOptions()
        return movegen.legal_moves(piece, self)

    # --- Mutation ---
    def apply_move(self, from_idx: int, to_idx: int) -> turn.MoveRecord:
        """Apply an already validated move; see :func:`turn.apply_move`."""
        return turn.apply_move(self, from_idx, to_idx)
