from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union, TYPE_CHECKING

from .castling import FEN_CASTLING
from .errors import MalformedFen, OutOfBoundsSquare
from .pieces import CHAR_TO_CODE, CODE_TO_CHAR, Color
from .squares import BOARD_CELLS, EMPTY, INTERIOR, NO_SQUARE, OFF_BOARD, index_from_rank_file

if TYPE_CHECKING:
    from .board import BoardState


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

FILE_LETTERS = "abcdefgh"
RANK_DIGITS = "12345678"
TURN_TO_CHAR = {Color.WHITE: "w", Color.BLACK: "b"}
CHAR_TO_TURN = {v: k for k, v in TURN_TO_CHAR.items()}


def algebraic_to_index(notation: str) -> int:
    """Convert a square name such as ``"e4"`` into its mailbox index.

    Args:
        notation (str): Two-character square name, file ``a``-``h`` then rank
            ``1``-``8``.

    Returns:
        int: Mailbox index, ``(rank + 1) * 10 + file`` with files numbered
            from 1 (so ``a1`` is 21 and ``h8`` is 98).

    Raises:
        OutOfBoundsSquare: If the text is not a square on the board.
    """
    if (
        not isinstance(notation, str)
        or len(notation) != 2
        or notation[0] not in FILE_LETTERS
        or notation[1] not in RANK_DIGITS
    ):
        raise OutOfBoundsSquare(f"invalid square: {notation!r}")
    file_offset = FILE_LETTERS.index(notation[0]) + 1
    rank = int(notation[1])
    return (rank + 1) * 10 + file_offset


def index_to_algebraic(index: int) -> str:
    """Convert a mailbox index into its square name.

    Raises:
        OutOfBoundsSquare: If ``index`` is a border cell or outside the grid.
    """
    file_offset = index % 10
    rank = index // 10 - 1
    if file_offset < 1 or file_offset > 8 or rank < 1 or rank > 8:
        raise OutOfBoundsSquare(f"index {index} is not a board square")
    return FILE_LETTERS[file_offset - 1] + str(rank)


@dataclass(frozen=True)
class FenRecord:
    """Decoded FEN fields with the placement expanded onto the mailbox grid.

    Attribute names mirror :class:`~mailbox_chess.engine.board.BoardState` so
    either can be handed to :func:`serialize_fen`.
    """

    cells: Tuple[int, ...]
    current_turn: Color
    castling_availability: int
    en_passant_target: int
    halfmove_clock: int
    current_move: int


def parse_fen(fen: str) -> FenRecord:
    """Parse a Forsyth-Edwards Notation string.

    Args:
        fen (str): Six space-separated fields: placement, side to move,
            castling rights, en-passant target, halfmove clock, fullmove
            number.

    Returns:
        FenRecord: The decoded position.

    Raises:
        MalformedFen: On a wrong field count, an unknown placement or castling
            character, ranks that do not cover exactly 8 files, or invalid
            turn, en-passant or counter fields.
    """
    if not fen or not isinstance(fen, str):
        raise MalformedFen("FEN must be a non-empty string")
    fields = fen.split()
    if len(fields) != 6:
        raise MalformedFen(f"FEN must have 6 fields, got {len(fields)}")
    placement, turn, castling, ep, halfmove, fullmove = fields

    cells = _parse_placement(placement)

    if turn not in CHAR_TO_TURN:
        raise MalformedFen(f"side to move must be 'w' or 'b', got {turn!r}")

    rights = _parse_castling(castling)

    if ep == "-":
        ep_target = NO_SQUARE
    else:
        try:
            ep_target = algebraic_to_index(ep)
        except OutOfBoundsSquare as e:
            raise MalformedFen(f"invalid en passant square: {ep!r}") from e

    if not _is_counter(halfmove) or not _is_counter(fullmove):
        raise MalformedFen("move counters must be non-negative integers")

    return FenRecord(
        cells=tuple(cells),
        current_turn=CHAR_TO_TURN[turn],
        castling_availability=rights,
        en_passant_target=ep_target,
        halfmove_clock=int(halfmove),
        current_move=int(fullmove),
    )


def _is_counter(text: str) -> bool:
    return text.isascii() and text.isdecimal()


def _parse_placement(placement: str) -> List[int]:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedFen(f"FEN placement must have 8 ranks, got {len(ranks)}")
    cells = [OFF_BOARD] * BOARD_CELLS
    for idx in INTERIOR:
        cells[idx] = EMPTY
    # First rank in the text is rank 8.
    for rank, text in zip(range(7, -1, -1), ranks):
        file = 0
        for ch in text:
            if ch in CHAR_TO_CODE:
                if file >= 8:
                    raise MalformedFen(f"too many squares in FEN rank {rank + 1}")
                cells[index_from_rank_file(rank, file)] = CHAR_TO_CODE[ch]
                file += 1
            elif ch in RANK_DIGITS:
                file += int(ch)
            else:
                raise MalformedFen(f"invalid character in FEN placement: {ch!r}")
        if file != 8:
            raise MalformedFen(f"FEN rank {rank + 1} covers {file} files, expected 8")
    return cells


def _parse_castling(castling: str) -> int:
    if castling == "-":
        return 0
    letters = dict(FEN_CASTLING)
    rights = 0
    for ch in castling:
        if ch not in letters:
            raise MalformedFen(f"invalid castling character: {ch!r}")
        rights |= letters[ch]
    return rights


def serialize_fen(state: Union["BoardState", FenRecord]) -> str:
    """Serialize a position into FEN.

    Castling letters come out in ``KQkq`` order regardless of the order they
    were parsed in; piece letter case encodes color.
    """
    rows: List[str] = []
    for rank in range(7, -1, -1):
        rows.append(_serialize_rank(state.cells, rank))
    placement = "/".join(rows)

    castling = "".join(ch for ch, mask in FEN_CASTLING if state.castling_availability & mask)
    ep = (
        index_to_algebraic(state.en_passant_target)
        if state.en_passant_target != NO_SQUARE
        else "-"
    )
    return " ".join(
        [
            placement,
            TURN_TO_CHAR[state.current_turn],
            castling or "-",
            ep,
            str(state.halfmove_clock),
            str(state.current_move),
        ]
    )


def _serialize_rank(cells: Sequence[int], rank: int) -> str:
    out: List[str] = []
    run = 0
    for file in range(8):
        code = cells[index_from_rank_file(rank, file)]
        if code == EMPTY:
            run += 1
            continue
        if run:
            out.append(str(run))
            run = 0
        out.append(CODE_TO_CHAR[code])
    if run:
        out.append(str(run))
    return "".join(out)
