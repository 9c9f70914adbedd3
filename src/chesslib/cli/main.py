from __future__ import annotations

import argparse
import logging
import os
import time
from typing import List, Optional

import uvicorn

from ..engine.board import STARTPOS_FEN, Board
from ..engine.perft import divide, perft
from ..protocol.uci.loop import run_uci


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chesslib", description="Bitboard chess engine")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("CHESSLIB_LOG_LEVEL", "INFO"),
        help="Logging level (env CHESSLIB_LOG_LEVEL, default: INFO)",
    )
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument(
        "--host",
        default=os.environ.get("CHESSLIB_HOST", "127.0.0.1"),
        help="Bind address (env CHESSLIB_HOST, default: 127.0.0.1)",
    )
    serve.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("CHESSLIB_PORT", "8000")),
        help="Port (env CHESSLIB_PORT, default: 8000)",
    )

    sub.add_parser("uci", help="Speak UCI on stdin/stdout")

    perft_cmd = sub.add_parser("perft", help="Count pseudo-legal move tree nodes")
    perft_cmd.add_argument("--fen", default=STARTPOS_FEN, help="FEN string (default: startpos)")
    perft_cmd.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    perft_cmd.add_argument("--divide", action="store_true", help="Print counts per root move")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = str(args.log_level).upper()
    command = args.command or "serve"

    if command == "serve":
        host = getattr(args, "host", os.environ.get("CHESSLIB_HOST", "127.0.0.1"))
        port = getattr(args, "port", int(os.environ.get("CHESSLIB_PORT", "8000")))
        os.environ["CHESSLIB_LOG_LEVEL"] = level
        uvicorn.run(
            "chesslib.protocol.http.app:create_app",
            factory=True,
            host=host,
            port=port,
            log_level=level.lower(),
        )
        return 0

    logging.basicConfig(level=level)

    if command == "uci":
        run_uci()
        return 0

    board = Board.from_fen(args.fen)
    start = time.perf_counter()
    if args.divide:
        counts = divide(board, args.depth)
        for move, count in counts.items():
            print(f"{move}: {count}")
        nodes = sum(counts.values())
    else:
        nodes = perft(board, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
