from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .bitboard import FULL_BOARD, is_bit_set
from .errors import EmptySourceSquare, InvalidMoveFormat, TurnViolation
from .move import Move, parse_move
from .movegen import generate_moves
from .pieces import (
    BLACK_PIECES,
    CHAR_TO_PIECE,
    EMPTY_GLYPH,
    LOOKUP_ORDER,
    PIECE_TO_CHAR,
    PIECE_TO_GLYPH,
    WHITE_PIECES,
    BB,
    BK,
    BN,
    BP,
    BQ,
    BR,
    WB,
    WK,
    WN,
    WP,
    WQ,
    WR,
    color_of,
)
from .square import parse_square, square_name


logger = logging.getLogger(__name__)


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1"

# Standard starting masks, indexed like Board.bb
STARTING_BITBOARDS: List[int] = [0] * 12
STARTING_BITBOARDS[WP] = 0xFF << 8
STARTING_BITBOARDS[WN] = (1 << 1) | (1 << 6)
STARTING_BITBOARDS[WB] = (1 << 2) | (1 << 5)
STARTING_BITBOARDS[WR] = (1 << 0) | (1 << 7)
STARTING_BITBOARDS[WQ] = 1 << 3
STARTING_BITBOARDS[WK] = 1 << 4
STARTING_BITBOARDS[BP] = 0xFF << 48
STARTING_BITBOARDS[BN] = STARTING_BITBOARDS[WN] << 56
STARTING_BITBOARDS[BB] = STARTING_BITBOARDS[WB] << 56
STARTING_BITBOARDS[BR] = STARTING_BITBOARDS[WR] << 56
STARTING_BITBOARDS[BQ] = STARTING_BITBOARDS[WQ] << 56
STARTING_BITBOARDS[BK] = STARTING_BITBOARDS[WK] << 56


@dataclass
class Board:
    """Board state with bitboards and FEN I/O.

    Notes:
    - Squares are 0..63 (a1=0 .. h8=63), rank-major from white's perspective.
    - ``any_white``, ``any_black`` and ``empty`` are derived from ``bb`` and
      refreshed after every mutation; never assign them directly.
    - Moves are pseudo-legal only: no check, castling, en passant or promotion.
    """

    # 12 piece bitboards, indexed by the constants in .pieces
    bb: List[int]
    side_to_move: str = "w"  # 'w' or 'b'
    any_white: int = field(default=0, init=False)
    any_black: int = field(default=0, init=False)
    empty: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if len(self.bb) != 12:
            raise ValueError("board needs exactly 12 piece bitboards")
        if self.side_to_move not in ("w", "b"):
            raise ValueError("side to move must be 'w' or 'b'")
        seen = 0
        for mask in self.bb:
            if mask < 0 or mask > FULL_BOARD:
                raise ValueError("bitboard does not fit in 64 bits")
            if seen & mask:
                raise ValueError("piece bitboards overlap")
            seen |= mask
        self.bb = list(self.bb)
        self._update_composites()

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board initialized to the standard chess starting position.

        Returns:
            Board: Board instance representing the standard starting position.
        """
        return cls(bb=list(STARTING_BITBOARDS), side_to_move="w")

    @classmethod
    def from_bitboards(cls, bb: Iterable[int], side_to_move: str = "w") -> "Board":
        """Rebuild a board from twelve piece masks.

        Raises:
            ValueError: If there are not twelve masks, a mask exceeds 64 bits,
                two masks share a square, or ``side_to_move`` is unknown.
        """
        return cls(bb=list(bb), side_to_move=side_to_move)

    @classmethod
    def from_fen(cls, fen: str) -> "Board":
        """Create a board from a Forsyth–Edwards Notation (FEN) string.

        Only piece placement and side to move are modelled. Castling, en
        passant and the move counters may be present but are ignored.

        Raises:
            ValueError: If ``fen`` is empty, lacks a side to move, or contains
                invalid piece placement.
        """
        if not fen or not isinstance(fen, str):
            raise ValueError("FEN must be a non-empty string")
        parts = fen.strip().split()
        if len(parts) < 2 or len(parts) > 6:
            raise ValueError("FEN must have between 2 and 6 fields")
        placement, stm = parts[0], parts[1]

        ranks = placement.split("/")
        if len(ranks) != 8:
            raise ValueError("FEN board must have 8 ranks")
        bb = [0] * 12
        for rank_idx, rank in enumerate(ranks[::-1]):  # start from rank 1 (bottom)
            file_idx = 0
            for ch in rank:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > 8:
                        raise ValueError("invalid empty count in FEN rank")
                    file_idx += n
                else:
                    if ch not in CHAR_TO_PIECE:
                        raise ValueError(f"invalid piece in FEN: {ch!r}")
                    if file_idx >= 8:
                        raise ValueError("too many squares in FEN rank")
                    bb[CHAR_TO_PIECE[ch]] |= 1 << (rank_idx * 8 + file_idx)
                    file_idx += 1
            if file_idx != 8:
                raise ValueError("rank does not sum to 8 squares in FEN")

        if stm not in ("w", "b"):
            raise ValueError("side to move must be 'w' or 'b'")
        return cls(bb=bb, side_to_move=stm)

    def to_fen(self) -> str:
        """Serialize the position into a FEN string.

        Castling and en passant are always ``-`` and the counters ``0 1``.
        """
        ranks_str: List[str] = []
        for rank_idx in range(7, -1, -1):  # 7..0 maps to ranks 8..1
            run = 0
            row = []
            for file_idx in range(8):
                piece = self.piece_at(rank_idx * 8 + file_idx)
                if piece is None:
                    run += 1
                else:
                    if run > 0:
                        row.append(str(run))
                        run = 0
                    row.append(PIECE_TO_CHAR[piece])
            if run > 0:
                row.append(str(run))
            ranks_str.append("".join(row))
        return f"{'/'.join(ranks_str)} {self.side_to_move} - - 0 1"

    def copy(self) -> "Board":
        return Board(bb=list(self.bb), side_to_move=self.side_to_move)

    # --- Lookup ---

    def piece_at(self, sq: int) -> Optional[int]:
        """Return the piece index on ``sq`` or ``None`` when empty."""
        for idx in LOOKUP_ORDER:
            if is_bit_set(self.bb[idx], sq):
                return idx
        return None

    def piece_unicode_at(self, coordinate: str) -> str:
        """Return the glyph of the piece on ``coordinate`` (``" "`` when empty).

        Raises:
            InvalidCoordinate: If ``coordinate`` is not a square name.
        """
        piece = self.piece_at(parse_square(coordinate))
        return EMPTY_GLYPH if piece is None else PIECE_TO_GLYPH[piece]

    def glyph_rows(self) -> List[str]:
        """Return eight strings of glyphs, rank 8 first."""
        rows = []
        for rank_idx in range(7, -1, -1):
            row = ""
            for file_idx in range(8):
                piece = self.piece_at(rank_idx * 8 + file_idx)
                row += EMPTY_GLYPH if piece is None else PIECE_TO_GLYPH[piece]
            rows.append(row)
        return rows

    def __str__(self) -> str:
        lines = [f"{8 - i} {row}" for i, row in enumerate(self.glyph_rows())]
        lines.append("  abcdefgh")
        return "\n".join(lines)

    # --- Mutation ---

    def apply(self, move: Move, *, strict: bool = False) -> None:
        """Apply ``move`` in place and hand the turn to the other side.

        Args:
            move (Move): Move to play. Only occupancy is checked, not legality.
            strict (bool): Raise instead of ignoring a move whose source
                square is empty.

        Raises:
            TurnViolation: If the piece on the source square belongs to the side
                not to move. Nothing is modified in that case.
            EmptySourceSquare: If ``strict`` and the source square is empty.
        """
        from_sq, to_sq = move.from_sq, move.to_sq
        moved_piece = self.piece_at(from_sq)
        if moved_piece is None:
            if strict:
                raise EmptySourceSquare(f"no piece on {square_name(from_sq)}")
            logger.debug("ignoring move %s: source square is empty", move.to_text())
            return

        if color_of(moved_piece) != self.side_to_move:
            raise TurnViolation(
                f"attempted to move a {'white' if color_of(moved_piece) == 'w' else 'black'} "
                f"piece during {'white' if self.side_to_move == 'w' else 'black'}'s turn"
            )

        # Remove whatever stands on the target square (either colour)
        captured_piece = self.piece_at(to_sq)
        if captured_piece is not None:
            self.bb[captured_piece] &= ~(1 << to_sq)

        self.bb[moved_piece] &= ~(1 << from_sq)
        self.bb[moved_piece] |= 1 << to_sq

        self._update_composites()
        self.side_to_move = "b" if self.side_to_move == "w" else "w"

    def apply_text(self, text: str) -> None:
        """Parse and apply a move string; unparsable text is skipped."""
        try:
            move = parse_move(text)
        except InvalidMoveFormat:
            logger.debug("ignoring unparsable move %r", text)
            return
        self.apply(move)

    def apply_moves(self, moves: Iterable[Move]) -> None:
        for move in moves:
            self.apply(move)

    def apply_texts(self, texts: Iterable[str]) -> None:
        for text in texts:
            self.apply_text(text)

    def _update_composites(self) -> None:
        white = 0
        for idx in WHITE_PIECES:
            white |= self.bb[idx]
        black = 0
        for idx in BLACK_PIECES:
            black |= self.bb[idx]
        self.any_white = white
        self.any_black = black
        self.empty = ~(white | black) & FULL_BOARD

    # --- Enumeration ---

    def generate_moves(self) -> List[Move]:
        """Return every pseudo-legal move for the side to move."""
        return generate_moves(self)

    def generate_move_strings(self) -> List[str]:
        return [m.to_text() for m in generate_moves(self)]

    def sample_moves(self, count: int, rng: Optional[random.Random] = None) -> List[str]:
        """Return up to ``count`` distinct moves drawn uniformly at random.

        Args:
            count (int): ``-1`` for the full enumeration in generation order,
                ``0`` for none, otherwise the maximum number of moves.
            rng (Optional[random.Random]): Random source; the global
                ``random`` module when omitted.

        Raises:
            ValueError: If ``count`` is below ``-1``.
        """
        if count < -1:
            raise ValueError(f"invalid move count: {count}")
        moves = self.generate_move_strings()
        if count == -1:
            return moves
        if count == 0:
            return []
        source = rng if rng is not None else random
        return source.sample(moves, min(count, len(moves)))

    def next_move(self, rng: Optional[random.Random] = None) -> str:
        """Return one randomly chosen move.

        Raises:
            ValueError: If the side to move has no moves at all.
        """
        picked = self.sample_moves(1, rng)
        if not picked:
            raise ValueError("no moves available")
        return picked[0]
