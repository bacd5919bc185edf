from __future__ import annotations

from mailbox_chess.engine.board import BoardState
from mailbox_chess.engine.castling import (
    BLACK_KINGSIDE,
    BLACK_QUEENSIDE,
    WHITE_KINGSIDE,
    WHITE_QUEENSIDE,
)
from mailbox_chess.engine.notation import algebraic_to_index as sq
from mailbox_chess.engine.pieces import Color, PieceType

OPEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"


def king_quiet(b: BoardState, square: str) -> list[int]:
    return b.moves_from(sq(square)).quiet


def test_castling_destinations_generated_when_clear() -> None:
    b = BoardState.from_fen(OPEN)
    assert sq("g1") in king_quiet(b, "e1")
    assert sq("c1") in king_quiet(b, "e1")
    assert sq("g8") in king_quiet(b, "e8")
    assert sq("c8") in king_quiet(b, "e8")


def test_castling_blocked_by_transit_piece() -> None:
    b = BoardState.from_fen("rn2k1nr/8/8/8/8/8/8/R2QKB1R w KQkq - 0 1")
    assert sq("g1") not in king_quiet(b, "e1")
    assert sq("c1") not in king_quiet(b, "e1")
    assert sq("g8") not in king_quiet(b, "e8")
    assert sq("c8") not in king_quiet(b, "e8")


def test_queenside_b_file_must_be_empty() -> None:
    b = BoardState.from_fen("4k3/8/8/8/8/8/8/RN2K3 w Q - 0 1")
    assert sq("c1") not in king_quiet(b, "e1")


def test_castling_requires_right() -> None:
    b = BoardState.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1")
    assert sq("g1") in king_quiet(b, "e1")
    assert sq("c1") not in king_quiet(b, "e1")
    assert sq("g8") not in king_quiet(b, "e8")
    assert sq("c8") in king_quiet(b, "e8")


def test_startpos_has_no_castles() -> None:
    b = BoardState.startpos()
    assert king_quiet(b, "e1") == []


def test_white_kingside_castle_moves_rook_and_clears_rights() -> None:
    b = BoardState.from_fen(OPEN)
    record = b.apply_move(sq("e1"), sq("g1"))
    assert record.is_castle
    assert b.cells[sq("g1")] == Color.WHITE | PieceType.KING
    assert b.cells[sq("f1")] == Color.WHITE | PieceType.ROOK
    assert b.cells[sq("h1")] == 0
    assert b.cells[sq("e1")] == 0
    assert not b.castling_availability & (WHITE_KINGSIDE | WHITE_QUEENSIDE)
    assert b.castling_availability == BLACK_KINGSIDE | BLACK_QUEENSIDE
    assert b.export_fen() == "r3k2r/8/8/8/8/8/8/R4RK1 b kq - 1 1"


def test_black_queenside_castle() -> None:
    b = BoardState.from_fen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 3 9")
    b.apply_move(sq("e8"), sq("c8"))
    assert b.export_fen() == "2kr3r/8/8/8/8/8/8/R3K2R w KQ - 4 10"


def test_rook_move_clears_only_its_side() -> None:
    b = BoardState.from_fen(OPEN)
    b.apply_move(sq("h1"), sq("h2"))
    assert b.castling_availability == WHITE_QUEENSIDE | BLACK_KINGSIDE | BLACK_QUEENSIDE
    b.apply_move(sq("a8"), sq("a7"))
    assert b.castling_availability == WHITE_QUEENSIDE | BLACK_KINGSIDE


def test_rights_never_come_back() -> None:
    b = BoardState.from_fen(OPEN)
    b.apply_move(sq("h1"), sq("h2"))
    b.apply_move(sq("e8"), sq("e7"))
    b.apply_move(sq("h2"), sq("h1"))
    b.apply_move(sq("e7"), sq("e8"))
    assert b.export_fen().split()[2] == "Q"
    assert sq("g1") not in king_quiet(b, "e1")


def test_capturing_home_rook_clears_its_right() -> None:
    b = BoardState.from_fen(OPEN)
    b.apply_move(sq("a1"), sq("a8"))
    # White loses Q (rook left a1), Black loses q (rook captured on a8).
    assert b.export_fen().split()[2] == "Kk"
