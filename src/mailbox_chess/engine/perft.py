from __future__ import annotations

from .board import BoardState


def perft(board: BoardState, depth: int) -> int:
    """Count leaf nodes of the pseudo-legal move tree below ``board``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over every pseudo-legal move of the side to
      move of perft(depth - 1) on a clone with that move applied.

    Note: moves leaving the own king in check are counted, so results exceed
    the published legal-move perft figures once checks become possible.
    ``board`` itself is never mutated.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for piece in list(board.pieces(board.current_turn)):
        for to_sq in board.legal_moves(piece).all():
            child = board.copy()
            child.apply_move(piece.index, to_sq)
            nodes += perft(child, depth - 1)
    return nodes
