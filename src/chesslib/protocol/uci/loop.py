from __future__ import annotations

import logging
import sys
from typing import Callable, Dict, List, Optional, TextIO, Tuple

from ...engine.game import Game
from ...engine.move import parse_move


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]


def _split_at(tokens: List[str], keyword: str) -> Tuple[List[str], List[str]]:
    """Split ``tokens`` at the first ``keyword``; the keyword itself is dropped."""
    if keyword in tokens:
        i = tokens.index(keyword)
        return tokens[:i], tokens[i + 1 :]
    return tokens, []


class UCIEngine:
    """Text-protocol front end for a single :class:`Game`.

    There is no search: ``go`` replies at once with a move sampled from the
    pseudo-legal enumeration, using the game's seeded random source. The
    ``Seed`` option fixes that source so replies can be reproduced.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self.game: Game = Game.new(seed)

    def cmd_uci(self, write: Writer) -> None:
        for line in (
            "id name chesslib",
            "id author chesslib developers",
            "option name Seed type string default <empty>",
            "uciok",
        ):
            write(line)

    def cmd_isready(self, write: Writer) -> None:
        write("readyok")

    def cmd_ucinewgame(self) -> None:
        self.game = Game.new(self.seed)

    def cmd_position(self, args: List[str]) -> None:
        """``position (startpos | fen <fields>) [moves <m1> <m2> ...]``"""
        setup, moves = _split_at(args, "moves")
        if not setup:
            return
        kind, fields = setup[0], setup[1:]
        if kind == "startpos":
            self.game = Game.new(self.seed)
        elif kind == "fen":
            fen = " ".join(fields)
            try:
                self.game = Game.from_fen(fen, self.seed)
            except ValueError:
                logger.debug("ignoring position with bad FEN %r", fen)
                return
        else:
            logger.debug("unknown position kind %r", kind)
            return

        for text in moves:
            try:
                self.game.apply_move(parse_move(text))
            except ValueError:
                # moves after an unusable one cannot be trusted
                logger.debug("move list cut at %r", text)
                break

    def cmd_setoption(self, args: List[str]) -> None:
        """``setoption name <id> [value <x>]``; only ``Seed`` is known."""
        _, rest = _split_at(args, "name")
        name_tokens, value_tokens = _split_at(rest, "value")
        if " ".join(name_tokens).lower() != "seed":
            logger.debug("unknown option %r", " ".join(name_tokens))
            return
        value = " ".join(value_tokens)
        if value in ("", "<empty>"):
            self.seed = None
        else:
            try:
                self.seed = int(value)
            except ValueError:
                logger.debug("seed must be an integer, got %r", value)
                return
        self.game.reseed(self.seed)

    def cmd_go(self, args: List[str], write: Writer) -> None:
        # limits such as depth/movetime are accepted and ignored
        move = self.game.pick_move()
        write("bestmove " + (move.to_text() if move is not None else "(none)"))

    def cmd_d(self, write: Writer) -> None:
        for line in str(self.game.board).splitlines():
            write(line)
        write(f"Fen: {self.game.to_fen()}")

    def handle(self, line: str, write: Writer) -> bool:
        """Run one input line. Returns ``False`` once ``quit`` arrives."""
        tokens = line.split()
        if not tokens:
            return True
        cmd, args = tokens[0], tokens[1:]
        if cmd == "quit":
            return False

        handlers: Dict[str, Callable[[], None]] = {
            "uci": lambda: self.cmd_uci(write),
            "isready": lambda: self.cmd_isready(write),
            "ucinewgame": self.cmd_ucinewgame,
            "position": lambda: self.cmd_position(args),
            "setoption": lambda: self.cmd_setoption(args),
            "go": lambda: self.cmd_go(args, write),
            "d": lambda: self.cmd_d(write),
            "stop": lambda: None,
        }
        handler = handlers.get(cmd)
        if handler is None:
            logger.debug("ignoring unknown command %r", cmd)
        else:
            handler()
        return True


def _default_writer(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run_uci(stream: Optional[TextIO] = None, write: Writer = _default_writer) -> None:
    """Serve UCI over ``stream`` (stdin by default) until ``quit`` or EOF."""
    engine = UCIEngine()
    for line in stream if stream is not None else sys.stdin:
        if not engine.handle(line, write):
            break
