#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import os
import sys
import time

# Allow running this script directly via `python scripts/perft.py`
# by adding src/ (which contains `chesslib/`) to sys.path.
SRC_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from chesslib.engine.board import Board, STARTPOS_FEN
from chesslib.engine.perft import perft


def main() -> None:
    parser = argparse.ArgumentParser(description="Run pseudo-legal perft on a FEN at each depth")
    parser.add_argument(
        "--fen", type=str, default=STARTPOS_FEN, help="FEN string (default: startpos)"
    )
    parser.add_argument("--max-depth", type=int, default=3, help="Deepest level (default: 3)")
    args = parser.parse_args()

    board = Board.from_fen(args.fen)
    for depth in range(1, args.max_depth + 1):
        start = time.perf_counter()
        nodes = perft(board, depth)
        dt = time.perf_counter() - start
        print(f"depth={depth} nodes={nodes} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
