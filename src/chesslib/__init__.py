"""Bitboard chess position and pseudo-legal move generator."""

__version__ = "0.1.0"
