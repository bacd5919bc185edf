from __future__ import annotations

from dataclasses import dataclass

from .errors import IllegalMove, OutOfBoundsSquare
from .notation import algebraic_to_index, index_to_algebraic


@dataclass(frozen=True)
class Move:
    """A move between two mailbox squares.

    Attributes:
        from_sq (int): Origin mailbox index.
        to_sq (int): Destination mailbox index.
    """

    from_sq: int
    to_sq: int

    def to_uci(self) -> str:
        """Serialize the move into long algebraic form such as ``"e2e4"``."""
        return index_to_algebraic(self.from_sq) + index_to_algebraic(self.to_sq)


def parse_uci(uci: str) -> Move:
    """Parse a long algebraic move string.

    Args:
        uci (str): Move such as ``"e2e4"``.

    Returns:
        Move: Parsed move in mailbox indices.

    Raises:
        IllegalMove: If the string is not four characters long (promotion
            suffixes are not supported).
        OutOfBoundsSquare: If either half is not a board square.
    """
    if not isinstance(uci, str) or len(uci) != 4:
        raise IllegalMove(f"invalid move text: {uci!r}")
    try:
        return Move(algebraic_to_index(uci[0:2]), algebraic_to_index(uci[2:4]))
    except OutOfBoundsSquare as e:
        raise OutOfBoundsSquare(f"invalid move text: {uci!r}") from e
