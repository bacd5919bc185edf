from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from .castling import RIGHTS_TOUCHED_BY_SQUARE, side_for_king_move
from .movegen import PAWN_RULES
from .pieces import Color, PieceType, color_of, type_of
from .squares import EMPTY, FILE_OF, NO_SQUARE

if TYPE_CHECKING:
    from .board import BoardState


@dataclass(frozen=True)
class MoveRecord:
    """What a single applied move did to the board."""

    from_sq: int
    to_sq: int
    piece: int
    captured: int = EMPTY
    captured_sq: int = NO_SQUARE
    rook_from: Optional[int] = None
    rook_to: Optional[int] = None

    @property
    def is_capture(self) -> bool:
        return self.captured != EMPTY

    @property
    def is_castle(self) -> bool:
        return self.rook_from is not None


def apply_move(board: "BoardState", from_sq: int, to_sq: int) -> MoveRecord:
    """Apply a move to ``board`` in place and advance the turn.

    The caller guarantees that ``from_sq`` holds a piece of the side to move
    and that ``to_sq`` is one of its generated destinations; nothing is
    re-validated here.

    Updates, in order: piece placement (including the castling rook and an
    en-passant victim), castling rights, en-passant target, halfmove clock,
    fullmove number, side to move.
    """
    cells = board.cells
    code = cells[from_sq]
    color = color_of(code)
    ptype = type_of(code)

    captured = cells[to_sq]
    captured_sq = to_sq if captured != EMPTY else NO_SQUARE
    rook_from: Optional[int] = None
    rook_to: Optional[int] = None

    cells[to_sq] = code
    cells[from_sq] = EMPTY

    if ptype == PieceType.PAWN and to_sq == board.en_passant_target and captured == EMPTY:
        # The passed pawn sits one rank behind the target from the mover's view.
        victim_sq = to_sq - PAWN_RULES[color].push
        captured = cells[victim_sq]
        captured_sq = victim_sq
        cells[victim_sq] = EMPTY
    elif ptype == PieceType.KING and abs(FILE_OF[to_sq] - FILE_OF[from_sq]) > 1:
        side = side_for_king_move(from_sq, to_sq)
        if side is not None:
            rook_from, rook_to = side.rook_from, side.rook_to
            cells[rook_to] = cells[rook_from]
            cells[rook_from] = EMPTY

    lost = RIGHTS_TOUCHED_BY_SQUARE.get(from_sq, 0) | RIGHTS_TOUCHED_BY_SQUARE.get(to_sq, 0)
    board.castling_availability &= ~lost

    board.en_passant_target = NO_SQUARE
    if ptype == PieceType.PAWN and abs(to_sq - from_sq) == 20:
        board.en_passant_target = (from_sq + to_sq) // 2

    if ptype == PieceType.PAWN:
        board.halfmove_clock = 0
    else:
        board.halfmove_clock += 1

    if board.current_turn == Color.BLACK:
        board.current_move += 1
    board.current_turn = board.current_turn.opponent

    return MoveRecord(
        from_sq=from_sq,
        to_sq=to_sq,
        piece=code,
        captured=captured,
        captured_sq=captured_sq,
        rook_from=rook_from,
        rook_to=rook_to,
    )
