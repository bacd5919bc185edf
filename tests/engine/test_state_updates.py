from __future__ import annotations

from mailbox_chess.engine.board import BoardState
from mailbox_chess.engine.notation import algebraic_to_index as sq
from mailbox_chess.engine.pieces import Color, PieceType


def test_halfmove_and_fullmove_counters() -> None:
    b = BoardState.startpos()
    assert b.halfmove_clock == 0 and b.current_move == 1

    # e2e4: pawn move resets halfmove, side -> black, fullmove unchanged
    b.apply_move(sq("e2"), sq("e4"))
    assert b.halfmove_clock == 0
    assert b.current_turn == Color.BLACK
    assert b.current_move == 1

    # g8f6: knight move increments halfmove, fullmove -> 2 after black
    b.apply_move(sq("g8"), sq("f6"))
    assert b.halfmove_clock == 1
    assert b.current_turn == Color.WHITE
    assert b.current_move == 2

    b.apply_move(sq("g1"), sq("f3"))
    assert b.halfmove_clock == 2
    assert b.current_move == 2

    # e7e5: pawn move resets halfmove
    b.apply_move(sq("e7"), sq("e5"))
    assert b.halfmove_clock == 0
    assert b.current_move == 3
    assert b.export_fen() == "rnbqkb1r/pppp1ppp/5n2/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq e6 0 3"


def test_capture_replaces_destination_piece() -> None:
    b = BoardState.from_fen("4k3/8/8/3p4/4P3/8/8/4K3 w - - 5 20")
    record = b.apply_move(sq("e4"), sq("d5"))
    assert record.captured == Color.BLACK | PieceType.PAWN
    assert record.captured_sq == sq("d5")
    assert b.pieces_of(Color.BLACK, PieceType.PAWN) == []
    assert b.export_fen() == "4k3/8/8/3P4/8/8/8/4K3 b - - 0 20"


def test_non_pawn_capture_increments_halfmove() -> None:
    b = BoardState.from_fen("4k3/8/8/3p4/8/8/8/3RK3 w - - 7 4")
    b.apply_move(sq("d1"), sq("d5"))
    assert b.halfmove_clock == 8


def test_king_move_clears_both_rights_of_its_color() -> None:
    b = BoardState.from_fen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
    b.apply_move(sq("e8"), sq("f8"))
    assert b.export_fen().split()[2] == "KQ"


def test_turn_alternates() -> None:
    b = BoardState.startpos()
    seq = [("b1", "c3"), ("b8", "c6"), ("c3", "b1"), ("c6", "b8")]
    turns = []
    for a, z in seq:
        b.apply_move(sq(a), sq(z))
        turns.append(b.current_turn)
    assert turns == [Color.BLACK, Color.WHITE, Color.BLACK, Color.WHITE]
    assert b.export_fen() == "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 4 3"
