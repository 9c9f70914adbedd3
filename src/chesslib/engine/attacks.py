"""
Move-mask generators.

Every function here is pure: bitboards in, bitboard out. Edge files are masked
off *before* a diagonal shift, since the shift itself would carry an h-file
bit onto the a-file of the next rank (and vice versa).
"""

from __future__ import annotations

from typing import List, Tuple

from .bitboard import FULL_BOARD, NOT_A_FILE, NOT_H_FILE, RANK_4, RANK_5, iter_bits


KNIGHT_DELTAS: Tuple[Tuple[int, int], ...] = (
    (-1, 2),
    (1, 2),
    (-2, 1),
    (2, 1),
    (-2, -1),
    (2, -1),
    (-1, -2),
    (1, -2),
)
KING_DELTAS: Tuple[Tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)
BISHOP_DIRS: Tuple[Tuple[int, int], ...] = ((-1, -1), (1, -1), (-1, 1), (1, 1))
ROOK_DIRS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: Tuple[Tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


def _offset_table(deltas: Tuple[Tuple[int, int], ...]) -> List[int]:
    table = [0] * 64
    for sq in range(64):
        f, r = sq % 8, sq // 8
        mask = 0
        for df, dr in deltas:
            tf, tr = f + df, r + dr
            if 0 <= tf < 8 and 0 <= tr < 8:
                mask |= 1 << (tr * 8 + tf)
        table[sq] = mask
    return table


# Per-square target tables
KNIGHT_ATTACKS: List[int] = _offset_table(KNIGHT_DELTAS)
KING_ATTACKS: List[int] = _offset_table(KING_DELTAS)


# --- Pawns: captures ---


def white_pawn_east_attacks(wp: int) -> int:
    return ((wp & NOT_H_FILE) << 9) & FULL_BOARD


def white_pawn_west_attacks(wp: int) -> int:
    return ((wp & NOT_A_FILE) << 7) & FULL_BOARD


def black_pawn_east_attacks(bp: int) -> int:
    return (bp & NOT_H_FILE) >> 7


def black_pawn_west_attacks(bp: int) -> int:
    return (bp & NOT_A_FILE) >> 9


def white_pawn_attacks(wp: int) -> int:
    return white_pawn_east_attacks(wp) | white_pawn_west_attacks(wp)


def black_pawn_attacks(bp: int) -> int:
    return black_pawn_east_attacks(bp) | black_pawn_west_attacks(bp)


def white_pawn_capture_targets(wp: int, black_pieces: int) -> int:
    """Return squares White pawns can capture on, given Black's occupancy."""
    return white_pawn_attacks(wp) & black_pieces


def black_pawn_capture_targets(bp: int, white_pieces: int) -> int:
    """Return squares Black pawns can capture on, given White's occupancy."""
    return black_pawn_attacks(bp) & white_pieces


# --- Pawns: pushes (these return the *source* pawns, not targets) ---


def white_pawns_able_to_push(wp: int, empty: int) -> int:
    return (empty >> 8) & wp


def black_pawns_able_to_push(bp: int, empty: int) -> int:
    return ((empty << 8) & FULL_BOARD) & bp


def white_pawns_able_to_double_push(wp: int, empty: int) -> int:
    """Return White pawns whose one- and two-step squares are both empty.

    Only pawns on rank 2 can qualify: the two-step square must be on rank 4,
    so the intermediate square is on rank 3.
    """
    empty_rank3 = ((empty & RANK_4) >> 8) & empty
    return white_pawns_able_to_push(wp, empty_rank3)


def black_pawns_able_to_double_push(bp: int, empty: int) -> int:
    """Return Black pawns on rank 7 with empty squares on ranks 6 and 5."""
    empty_rank6 = ((empty & RANK_5) << 8) & empty
    return black_pawns_able_to_push(bp, empty_rank6)


# --- Knights and kings ---


def knight_moves(knights: int, own: int) -> int:
    """Return every square the given knight(s) can reach, minus own pieces."""
    targets = 0
    for sq in iter_bits(knights):
        targets |= KNIGHT_ATTACKS[sq]
    return targets & ~own & FULL_BOARD


def king_moves(king: int, own: int) -> int:
    targets = 0
    for sq in iter_bits(king):
        targets |= KING_ATTACKS[sq]
    return targets & ~own & FULL_BOARD


# --- Sliders ---


def slide_targets(
    pieces: int, own: int, enemy: int, dirs: Tuple[Tuple[int, int], ...]
) -> int:
    """Ray-cast from every piece in ``pieces`` along ``dirs``.

    A ray collects empty squares and stops at the first occupied one, which is
    kept only when it holds an enemy piece. Rays end at the board edge.
    """
    targets = 0
    for from_sq in iter_bits(pieces):
        f = from_sq % 8
        r = from_sq // 8
        for df, dr in dirs:
            tf, tr = f, r
            while True:
                tf += df
                tr += dr
                if not (0 <= tf < 8 and 0 <= tr < 8):
                    break
                to_bit = 1 << (tr * 8 + tf)
                if own & to_bit:
                    break
                targets |= to_bit
                if enemy & to_bit:
                    break
    return targets


def bishop_moves(bishops: int, own: int, enemy: int) -> int:
    return slide_targets(bishops, own, enemy, BISHOP_DIRS)


def rook_moves(rooks: int, own: int, enemy: int) -> int:
    return slide_targets(rooks, own, enemy, ROOK_DIRS)


def queen_moves(queens: int, own: int, enemy: int) -> int:
    return slide_targets(queens, own, enemy, QUEEN_DIRS)
