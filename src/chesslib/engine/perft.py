from __future__ import annotations

from typing import Dict

from .board import Board


def perft(board: Board, depth: int) -> int:
    """Compute the pseudo-legal perft node count for ``board`` at ``depth``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all child positions' perft(depth-1).

    Note: children come from the pseudo-legal generator, so counts match the
    standard tables only while no side can leave its king en prise and no
    castling, en passant or promotion is reachable (e.g. startpos up to
    depth 2).
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for m in board.generate_moves():
        child = board.copy()
        child.apply(m)
        nodes += perft(child, depth - 1)
    return nodes


def divide(board: Board, depth: int) -> Dict[str, int]:
    """Return the perft count below each root move, keyed by move text."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    counts: Dict[str, int] = {}
    for m in board.generate_moves():
        child = board.copy()
        child.apply(m)
        counts[m.to_text()] = perft(child, depth - 1)
    return counts
