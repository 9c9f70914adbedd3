from __future__ import annotations

from .bitboard import bitboard_to_string
from .board import STARTPOS_FEN, Board
from .errors import (
    ChessError,
    EmptySourceSquare,
    InvalidCoordinate,
    InvalidMoveFormat,
    TurnViolation,
)
from .move import Move, parse_move
from .square import file_letter, index_of, parse_square, square_name, to_bit

__all__ = [
    "Board",
    "STARTPOS_FEN",
    "Move",
    "parse_move",
    "parse_square",
    "square_name",
    "index_of",
    "file_letter",
    "to_bit",
    "bitboard_to_string",
    "ChessError",
    "InvalidCoordinate",
    "InvalidMoveFormat",
    "TurnViolation",
    "EmptySourceSquare",
]
