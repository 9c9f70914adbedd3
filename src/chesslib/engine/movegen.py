from __future__ import annotations

from typing import TYPE_CHECKING, Callable, List

from .attacks import (
    bishop_moves,
    black_pawn_east_attacks,
    black_pawn_west_attacks,
    black_pawns_able_to_double_push,
    black_pawns_able_to_push,
    king_moves,
    knight_moves,
    queen_moves,
    rook_moves,
    white_pawn_east_attacks,
    white_pawn_west_attacks,
    white_pawns_able_to_double_push,
    white_pawns_able_to_push,
)
from .bitboard import iter_bits
from .move import Move
from .pieces import BB, BK, BN, BP, BQ, BR, WB, WK, WN, WP, WQ, WR

if TYPE_CHECKING:
    from .board import Board


SliderFn = Callable[[int, int, int], int]


def bitboard_to_moves(source: int, targets: int) -> List[Move]:
    """Expand a (source, targets) bitboard pair into individual moves.

    Args:
        source (int): Bitboard holding the moving piece; normally one bit.
        targets (int): Bitboard of destination squares.

    Returns:
        List[Move]: One move per (source bit, target bit) combination.
    """
    moves: List[Move] = []
    for from_sq in iter_bits(source):
        for to_sq in iter_bits(targets):
            moves.append(Move(from_sq, to_sq))
    return moves


def offset_moves(sources: int, offset: int) -> List[Move]:
    """Turn a bitboard of sources into moves that all travel ``offset`` squares."""
    return [Move(from_sq, from_sq + offset) for from_sq in iter_bits(sources)]


def pawn_moves(board: "Board", white: bool) -> List[Move]:
    """Generate pawn pushes, double pushes and captures in bulk.

    Captures are decomposed per diagonal so two pawns hitting the same square
    each yield their own move.
    """
    moves: List[Move] = []
    if white:
        pawns = board.bb[WP]
        moves += offset_moves(white_pawns_able_to_push(pawns, board.empty), 8)
        moves += offset_moves(white_pawns_able_to_double_push(pawns, board.empty), 16)
        east = white_pawn_east_attacks(pawns) & board.any_black
        west = white_pawn_west_attacks(pawns) & board.any_black
        moves += [Move(to_sq - 9, to_sq) for to_sq in iter_bits(east)]
        moves += [Move(to_sq - 7, to_sq) for to_sq in iter_bits(west)]
    else:
        pawns = board.bb[BP]
        moves += offset_moves(black_pawns_able_to_push(pawns, board.empty), -8)
        moves += offset_moves(black_pawns_able_to_double_push(pawns, board.empty), -16)
        east = black_pawn_east_attacks(pawns) & board.any_white
        west = black_pawn_west_attacks(pawns) & board.any_white
        moves += [Move(to_sq + 7, to_sq) for to_sq in iter_bits(east)]
        moves += [Move(to_sq + 9, to_sq) for to_sq in iter_bits(west)]
    return moves


def generate_moves(board: "Board") -> List[Move]:
    """Enumerate pseudo-legal moves for the side to move.

    Returns:
        List[Move]: Pawn moves first, then knights, bishops, rooks, queens and
            the king. King safety is not checked.
    """
    white = board.side_to_move == "w"
    if white:
        own, enemy = board.any_white, board.any_black
        knights, bishops, rooks, queens, kings = (board.bb[p] for p in (WN, WB, WR, WQ, WK))
    else:
        own, enemy = board.any_black, board.any_white
        knights, bishops, rooks, queens, kings = (board.bb[p] for p in (BN, BB, BR, BQ, BK))

    moves = pawn_moves(board, white)

    # Knights one at a time
    for sq in iter_bits(knights):
        moves += bitboard_to_moves(1 << sq, knight_moves(1 << sq, own))

    sliders: List[tuple[int, SliderFn]] = [
        (bishops, bishop_moves),
        (rooks, rook_moves),
        (queens, queen_moves),
    ]
    for pieces, slide in sliders:
        for sq in iter_bits(pieces):
            moves += bitboard_to_moves(1 << sq, slide(1 << sq, own, enemy))

    for sq in iter_bits(kings):
        moves += bitboard_to_moves(1 << sq, king_moves(1 << sq, own))

    return moves
