from __future__ import annotations

import random

import pytest

from chesslib.engine.board import Board


def test_sample_zero_is_empty() -> None:
    assert Board.startpos().sample_moves(0) == []


def test_sample_minus_one_returns_full_enumeration() -> None:
    b = Board.startpos()
    assert b.sample_moves(-1) == b.generate_move_strings()


def test_sample_is_distinct_subset() -> None:
    b = Board.startpos()
    all_moves = set(b.generate_move_strings())
    picked = b.sample_moves(5, random.Random(3))
    assert len(picked) == 5
    assert len(set(picked)) == 5
    assert set(picked) <= all_moves


def test_sample_more_than_available() -> None:
    b = Board.startpos()
    picked = b.sample_moves(100, random.Random(0))
    assert sorted(picked) == sorted(b.generate_move_strings())


def test_sample_is_reproducible_with_seeded_rng() -> None:
    b = Board.startpos()
    assert b.sample_moves(4, random.Random(42)) == b.sample_moves(4, random.Random(42))


def test_sample_rejects_negative_counts() -> None:
    with pytest.raises(ValueError):
        Board.startpos().sample_moves(-2)


def test_next_move() -> None:
    b = Board.startpos()
    assert b.next_move(random.Random(9)) in b.generate_move_strings()


def test_next_move_without_pieces() -> None:
    with pytest.raises(ValueError):
        Board.from_fen("8/8/8/8/8/8/8/8 w - - 0 1").next_move()


def test_sample_without_moves_is_empty() -> None:
    assert Board.from_fen("8/8/8/8/8/8/8/8 b - - 0 1").sample_moves(3) == []
