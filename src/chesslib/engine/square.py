from __future__ import annotations

from .errors import InvalidCoordinate


FILES = "abcdefgh"
RANKS = "12345678"


def index_of(file: int, rank: int) -> int:
    """Return the linear square index for zero-based ``file`` and ``rank``."""
    return rank * 8 + file


def file_of(sq: int) -> int:
    return sq % 8


def rank_of(sq: int) -> int:
    return sq // 8


def parse_square(s: str) -> int:
    """Map a square name like ``"e4"`` to its bit index (a1 = 0, h8 = 63).

    Only lower-case files a..h followed by ranks 1..8 are accepted.

    Raises:
        InvalidCoordinate: For any other text.
    """
    if not isinstance(s, str) or len(s) != 2 or s[0] not in FILES or s[1] not in RANKS:
        raise InvalidCoordinate(f"invalid square: {s!r}")
    return index_of(ord(s[0]) - ord("a"), int(s[1]) - 1)


def square_name(idx: int) -> str:
    """Inverse of :func:`parse_square`: ``28`` becomes ``"e4"``.

    Raises:
        InvalidCoordinate: If ``idx`` is off the board.
    """
    check_index(idx)
    return file_letter(file_of(idx)) + str(rank_of(idx) + 1)


def file_letter(file: int) -> str:
    """Return the letter of a zero-based file.

    Raises:
        InvalidCoordinate: If ``file`` is not in 0..7.
    """
    if file < 0 or file > 7:
        raise InvalidCoordinate(f"invalid file index: {file}")
    return FILES[file]


def to_bit(sq: int) -> int:
    """Return a bitboard with only ``sq`` set."""
    check_index(sq)
    return 1 << sq


def check_index(idx: int) -> None:
    """Raise ``InvalidCoordinate`` unless ``idx`` is a square on the board."""
    if idx < 0 or idx > 63:
        raise InvalidCoordinate(f"invalid square index: {idx}")
