from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import Board
from .move import Move


logger = logging.getLogger(__name__)


@dataclass
class Game:
    """Game wrapper around a board with helper operations.

    Responsibility: track board state, expose available moves, apply moves,
    and own the random source used to pick moves.
    """

    board: Board
    move_stack: List[Move] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    _snapshots: List[Tuple[List[int], str]] = field(default_factory=list, repr=False)

    @classmethod
    def new(cls, seed: Optional[int] = None) -> "Game":
        return cls(board=Board.startpos(), rng=random.Random(seed))

    @classmethod
    def from_fen(cls, fen: str, seed: Optional[int] = None) -> "Game":
        return cls(board=Board.from_fen(fen), rng=random.Random(seed))

    def to_fen(self) -> str:
        return self.board.to_fen()

    def reseed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def legal_moves(self) -> List[Move]:
        """Pseudo-legal moves for the side to move (king safety unchecked)."""
        return self.board.generate_moves()

    def apply_move(self, move: Move) -> None:
        if move not in self.board.generate_moves():
            raise ValueError(f"move not available: {move.to_text()}")
        self._snapshots.append((list(self.board.bb), self.board.side_to_move))
        self.board.apply(move)
        self.move_stack.append(move)
        logger.debug("applied %s -> %s", move.to_text(), self.board.to_fen())

    def undo_move(self) -> None:
        if not self.move_stack:
            raise ValueError("no moves to undo")
        self.move_stack.pop()
        bb, stm = self._snapshots.pop()
        self.board = Board.from_bitboards(bb, stm)

    def sample_moves(self, count: int) -> List[str]:
        return self.board.sample_moves(count, self.rng)

    def pick_move(self) -> Optional[Move]:
        """Return one randomly chosen move, or ``None`` when there is none."""
        moves = self.legal_moves()
        if not moves:
            return None
        return self.rng.choice(moves)

    def move_history_text(self) -> List[str]:
        return [m.to_text() for m in self.move_stack]
