from __future__ import annotations

from typing import Dict, Tuple


# Piece indices for bitboards
WP, WN, WB, WR, WQ, WK, BP, BN, BB, BR, BQ, BK = range(12)
WHITE_PIECES: Tuple[int, ...] = (WP, WN, WB, WR, WQ, WK)
BLACK_PIECES: Tuple[int, ...] = (BP, BN, BB, BR, BQ, BK)

# Order in which masks are checked when looking up the piece on a square
LOOKUP_ORDER: Tuple[int, ...] = (WP, BP, WN, BN, WB, BB, WR, BR, WQ, BQ, WK, BK)

PIECE_TO_CHAR: Dict[int, str] = {
    WP: "P",
    WN: "N",
    WB: "B",
    WR: "R",
    WQ: "Q",
    WK: "K",
    BP: "p",
    BN: "n",
    BB: "b",
    BR: "r",
    BQ: "q",
    BK: "k",
}
CHAR_TO_PIECE: Dict[str, int] = {v: k for k, v in PIECE_TO_CHAR.items()}

PIECE_TO_GLYPH: Dict[int, str] = {
    WP: "♙",
    WN: "♘",
    WB: "♗",
    WR: "♖",
    WQ: "♕",
    WK: "♔",
    BP: "♟",
    BN: "♞",
    BB: "♝",
    BR: "♜",
    BQ: "♛",
    BK: "♚",
}
EMPTY_GLYPH = " "


def color_of(piece: int) -> str:
    """Return ``"w"`` or ``"b"`` for a piece index."""
    return "w" if piece < BP else "b"
