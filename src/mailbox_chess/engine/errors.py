from __future__ import annotations


class ChessRuleError(ValueError):
    """Base class for errors raised by the rules engine and game session."""


class MalformedFen(ChessRuleError):
    """FEN text with the wrong field count or an unrecognized character."""


class OutOfBoundsSquare(ChessRuleError):
    """Square name or mailbox index outside a1..h8."""


class IllegalMove(ChessRuleError):
    """Move rejected by the game session (wrong side, not generated, no history)."""
