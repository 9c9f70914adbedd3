from __future__ import annotations

import threading
import uuid
from typing import Dict, Optional

from ...engine.game import Game


class InMemorySessionStore:
    """Games keyed by a generated id, shared by all request handlers.

    The lock protects the id -> game mapping only; two requests against the
    same game id are not serialized against each other.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._by_id: Dict[str, Game] = {}

    def create(self, game: Optional[Game] = None) -> str:
        """Register ``game`` (a fresh startpos game by default) and return its id."""
        new_id = uuid.uuid4().hex
        with self._lock:
            self._by_id[new_id] = game or Game.new()
        return new_id

    def get(self, game_id: str) -> Optional[Game]:
        with self._lock:
            return self._by_id.get(game_id)

    def replace(self, game_id: str, game: Game) -> None:
        """Swap the game stored under an existing id.

        Raises:
            KeyError: If ``game_id`` was never created or has been deleted.
        """
        with self._lock:
            if game_id not in self._by_id:
                raise KeyError(game_id)
            self._by_id[game_id] = game

    def delete(self, game_id: str) -> bool:
        with self._lock:
            return self._by_id.pop(game_id, None) is not None
