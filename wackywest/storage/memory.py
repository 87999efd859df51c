"""In-memory game store, for tests and single-process servers."""

from __future__ import annotations
import copy
import threading
from typing import Any

from .base import GameStore


class InMemoryGameStore(GameStore):
    """
    Keeps encoded games in a dict.

    Games are stored encoded, so every load returns an independent copy.
    """

    def __init__(self):
        self._games: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def _read(self, game_id: str) -> dict[str, Any] | None:
        with self._lock:
            data = self._games.get(game_id)
            return copy.deepcopy(data) if data is not None else None

    def _write(self, game_id: str, data: dict[str, Any]) -> None:
        with self._lock:
            self._games[game_id] = copy.deepcopy(data)

    def list_games(self) -> list[str]:
        with self._lock:
            return sorted(self._games)

    def clear(self):
        with self._lock:
            self._games.clear()
