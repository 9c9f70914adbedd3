from __future__ import annotations


class ChessError(Exception):
    """Base class for errors raised by the engine core."""


class InvalidCoordinate(ChessError, ValueError):
    """Square text is not a file a..h followed by a rank 1..8, or an index is off the board."""


class InvalidMoveFormat(ChessError, ValueError):
    """Move text is not exactly four characters of two valid squares."""


class TurnViolation(ChessError, RuntimeError):
    """A piece of the side not to move was asked to move.

    Moves taken from ``Board.generate_moves()`` never trigger this; seeing it
    means the caller broke the board's contract.
    """


class EmptySourceSquare(ChessError, ValueError):
    """No piece stands on the source square of a strictly applied move."""
