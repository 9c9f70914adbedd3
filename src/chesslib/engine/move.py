from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidCoordinate, InvalidMoveFormat
from .square import check_index, parse_square, square_name


@dataclass(frozen=True)
class Move:
    """A piece displacement from one square index to another.

    There is no promotion, castling or en-passant flag; a move is fully
    described by its two squares, each in 0..63.

    Raises:
        InvalidCoordinate: On construction, if either square is off the board.
    """

    from_sq: int
    to_sq: int

    def __post_init__(self) -> None:
        check_index(self.from_sq)
        check_index(self.to_sq)

    def to_text(self) -> str:
        """Source and target square names run together, e.g. ``"g1f3"``."""
        return square_name(self.from_sq) + square_name(self.to_sq)

    def __str__(self) -> str:
        return self.to_text()


def parse_move(text: str) -> Move:
    """Build a :class:`Move` from exactly four characters such as ``"e2e4"``.

    Raises:
        InvalidMoveFormat: On any other length, or when either two-character
            half does not name a square. Suffixes like ``"e7e8q"`` are rejected.
    """
    if not isinstance(text, str) or len(text) != 4:
        raise InvalidMoveFormat(f"invalid move length: {text!r}")
    try:
        return Move(parse_square(text[0:2]), parse_square(text[2:4]))
    except InvalidCoordinate as e:
        raise InvalidMoveFormat(f"invalid move squares: {text!r}") from e
