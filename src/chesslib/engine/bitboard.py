"""
Bitboard helpers.

Layout (rank-major, a1 = bit 0):

  8 | 56 57 58 59 60 61 62 63
  7 | 48 49 50 51 52 53 54 55
  ...
  2 |  8  9 10 11 12 13 14 15
  1 |  0  1  2  3  4  5  6  7
    +------------------------
       a  b  c  d  e  f  g  h

Python ints are unbounded, so anything shifted left is clipped back to
64 bits with ``FULL_BOARD``.
"""

from __future__ import annotations

from typing import Iterator


FULL_BOARD = (1 << 64) - 1

A_FILE = 0x0101010101010101
H_FILE = 0x8080808080808080
NOT_A_FILE = ~A_FILE & FULL_BOARD
NOT_H_FILE = ~H_FILE & FULL_BOARD

# landing ranks of white and black double pushes
RANK_4 = 0xFF << 24
RANK_5 = 0xFF << 32


def is_bit_set(bb: int, sq: int) -> bool:
    return (bb >> sq) & 1 == 1


def popcount(bb: int) -> int:
    return bin(bb).count("1")


def iter_bits(bb: int) -> Iterator[int]:
    """Yield set-bit indices, lowest first, clearing each as it goes."""
    while bb:
        yield (bb & -bb).bit_length() - 1
        bb &= bb - 1


def bitboard_to_string(bb: int) -> str:
    """Render a mask as an 8x8 grid of ``1`` and ``.``, rank 8 first.

    Every row, including the last, ends with a newline.
    """
    rows = []
    for rank in range(7, -1, -1):
        row = "".join("1" if is_bit_set(bb, rank * 8 + file) else "." for file in range(8))
        rows.append(row + "\n")
    return "".join(rows)
