from __future__ import annotations

from typing import List

from chesslib.engine.board import Board
from chesslib.engine.move import Move
from chesslib.engine.movegen import bitboard_to_moves, offset_moves
from chesslib.engine.square import parse_square


def sq(name: str) -> int:
    return 1 << parse_square(name)


def moves_from(b: Board, square: str) -> List[str]:
    return [t for t in b.generate_move_strings() if t.startswith(square)]


def test_startpos_has_twenty_moves() -> None:
    moves = Board.startpos().generate_move_strings()
    assert len(moves) == 20
    assert len(set(moves)) == 20
    expected = {f"{f}2{f}3" for f in "abcdefgh"} | {f"{f}2{f}4" for f in "abcdefgh"}
    expected |= {"b1a3", "b1c3", "g1f3", "g1h3"}
    assert set(moves) == expected


def test_black_reply_count() -> None:
    b = Board.startpos()
    b.apply_text("e2e4")
    moves = b.generate_move_strings()
    assert len(moves) == 20
    assert {"e7e5", "g8f6", "b8c6"}.issubset(moves)


def test_generation_order_is_pawns_first() -> None:
    moves = Board.startpos().generate_move_strings()
    assert all(m[1] == "2" for m in moves[:16])
    assert set(moves[16:]) == {"b1a3", "b1c3", "g1f3", "g1h3"}


def test_bitboard_to_moves_expands_each_target() -> None:
    moves = bitboard_to_moves(sq("e4"), sq("f6") | sq("d6") | sq("c5"))
    assert sorted(m.to_text() for m in moves) == ["e4c5", "e4d6", "e4f6"]


def test_bitboard_to_moves_empty_targets() -> None:
    assert bitboard_to_moves(sq("e4"), 0) == []
    assert bitboard_to_moves(0, sq("e4")) == []


def test_offset_moves() -> None:
    assert offset_moves(sq("a2") | sq("h2"), 8) == [Move(8, 16), Move(15, 23)]


def test_knight_surrounded_by_own_pawns() -> None:
    # Knight e4; own pawns on five of its targets, enemy knight on f6
    b = Board.from_fen("8/8/5n2/6P1/4N3/2P3P1/3P1P2/8 w - - 0 1")
    assert sorted(moves_from(b, "e4")) == ["e4c5", "e4d6", "e4f6"]


def test_pawn_captures_both_diagonals() -> None:
    b = Board.from_fen("8/8/8/3p1p2/4P3/8/8/8 w - - 0 1")
    assert sorted(moves_from(b, "e4")) == ["e4d5", "e4e5", "e4f5"]


def test_two_pawns_capturing_the_same_square() -> None:
    b = Board.from_fen("8/8/8/3p4/2P1P3/8/8/8 w - - 0 1")
    moves = b.generate_move_strings()
    assert "c4d5" in moves
    assert "e4d5" in moves


def test_black_pawns_capturing_the_same_square() -> None:
    b = Board.from_fen("8/8/8/2p1p3/3P4/8/8/8 b - - 0 1")
    moves = b.generate_move_strings()
    assert "c5d4" in moves
    assert "e5d4" in moves


def test_pawn_captures_do_not_wrap() -> None:
    # a4 pawn must not "capture" the rook on h4, h4 pawn must not reach a6
    b = Board.from_fen("8/8/n7/8/P6r/8/8/8 w - - 0 1")
    assert moves_from(b, "a4") == ["a4a5"]
    b = Board.from_fen("8/8/r7/8/7P/8/8/8 w - - 0 1")
    assert moves_from(b, "h4") == ["h4h5"]


def test_double_push_blocked() -> None:
    b = Board.from_fen("8/8/8/8/4p3/8/4P3/8 w - - 0 1")
    assert moves_from(b, "e2") == ["e2e3"]
    b = Board.from_fen("8/8/8/8/8/4p3/4P3/8 w - - 0 1")
    assert moves_from(b, "e2") == []


def test_pawn_on_last_rank_is_stuck() -> None:
    b = Board.from_fen("8/4P3/8/8/8/8/8/k7 w - - 0 1")
    assert moves_from(b, "e7") == ["e7e8"]
    b.apply_texts(["e7e8", "a1a2"])
    assert moves_from(b, "e8") == []


def test_lone_king_moves() -> None:
    b = Board.from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
    assert sorted(b.generate_move_strings()) == ["e1d1", "e1d2", "e1e2", "e1f1", "e1f2"]


def test_rook_stops_at_blockers() -> None:
    b = Board.from_fen("8/8/8/8/8/8/P7/R2n4 w - - 0 1")
    assert sorted(moves_from(b, "a1")) == ["a1b1", "a1c1", "a1d1"]


def test_moves_are_pseudo_legal() -> None:
    # King may step next to an attacking rook
    b = Board.from_fen("3r4/8/8/8/8/8/8/4K3 w - - 0 1")
    assert "e1d1" in b.generate_move_strings()


def test_no_pieces_no_moves() -> None:
    assert Board.from_fen("8/8/8/8/8/8/8/8 w - - 0 1").generate_moves() == []
