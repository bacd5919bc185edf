from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple, TYPE_CHECKING

from .castling import sides_for
from .pieces import COLOR_MASK, Color, Piece, PieceType, make_code
from .squares import EMPTY, OFF_BOARD, RANK_OF

if TYPE_CHECKING:
    from .board import BoardState


N, E, S, W = 10, 1, -10, -1


@dataclass(frozen=True)
class Movement:
    offsets: Tuple[int, ...]
    sliding: bool


MOVEMENT: Dict[PieceType, Movement] = {
    PieceType.KNIGHT: Movement(
        (N + N + E, E + N + E, E + S + E, S + S + E, S + S + W, W + S + W, W + N + W, N + N + W),
        sliding=False,
    ),
    PieceType.BISHOP: Movement((N + E, S + E, S + W, N + W), sliding=True),
    PieceType.ROOK: Movement((N, E, S, W), sliding=True),
    PieceType.QUEEN: Movement((N, E, S, W, N + E, S + E, S + W, N + W), sliding=True),
    PieceType.KING: Movement((N, E, S, W, N + E, S + E, S + W, N + W), sliding=False),
}


@dataclass(frozen=True)
class PawnRules:
    push: int
    start_rank: int
    captures: Tuple[int, int]


PAWN_RULES: Dict[Color, PawnRules] = {
    Color.WHITE: PawnRules(push=N, start_rank=1, captures=(N + W, N + E)),
    Color.BLACK: PawnRules(push=S, start_rank=6, captures=(S + E, S + W)),
}


@dataclass
class MoveOptions:
    """Destinations (mailbox indices) available to one piece."""

    quiet: List[int] = field(default_factory=list)
    captures: List[int] = field(default_factory=list)

    def __contains__(self, index: object) -> bool:
        return index in self.quiet or index in self.captures

    def all(self) -> List[int]:
        return self.quiet + self.captures


def legal_moves(piece: Piece, board: "BoardState") -> MoveOptions:
    """Enumerate pseudo-legal destinations for ``piece`` on ``board``.

    Moves that leave the mover's own king attacked are not filtered out.
    ``piece`` is trusted to describe what is currently on its square.
    """
    if piece.type == PieceType.PAWN:
        return _pawn_moves(piece, board)
    if piece.type in MOVEMENT:
        moves = _step_moves(piece, board.cells, MOVEMENT[piece.type])
        if piece.type == PieceType.KING:
            _add_castles(piece, board, moves)
        return moves
    return MoveOptions()


def _pawn_moves(piece: Piece, board: "BoardState") -> MoveOptions:
    cells = board.cells
    rules = PAWN_RULES[piece.color]
    origin = piece.index
    moves = MoveOptions()

    one = origin + rules.push
    two = one + rules.push
    if RANK_OF[origin] == rules.start_rank and cells[one] == EMPTY and cells[two] == EMPTY:
        moves.quiet.append(two)
    if cells[one] == EMPTY:
        moves.quiet.append(one)

    for offset in rules.captures:
        target = origin + offset
        code = cells[target]
        if code == OFF_BOARD:
            continue
        if code != EMPTY and (code & COLOR_MASK) != piece.color:
            moves.captures.append(target)
        elif target == board.en_passant_target:
            moves.captures.append(target)
    return moves


def _step_moves(piece: Piece, cells: Sequence[int], movement: Movement) -> MoveOptions:
    moves = MoveOptions()
    for offset in movement.offsets:
        target = piece.index
        while True:
            target += offset
            code = cells[target]
            if code == OFF_BOARD:
                break
            if code != EMPTY:
                if (code & COLOR_MASK) != piece.color:
                    moves.captures.append(target)
                break
            moves.quiet.append(target)
            if not movement.sliding:
                break
    return moves


def _add_castles(king: Piece, board: "BoardState", moves: MoveOptions) -> None:
    cells = board.cells
    rook = make_code(king.color, PieceType.ROOK)
    for side in sides_for(king.color):
        if not board.castling_availability & side.mask:
            continue
        if king.index != side.king_from or cells[side.rook_from] != rook:
            continue
        if all(cells[sq] == EMPTY for sq in side.transit):
            moves.quiet.append(side.king_to)
