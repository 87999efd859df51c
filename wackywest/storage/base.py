"""Abstract base class for game stores."""

from __future__ import annotations
import logging
import time
from abc import ABC, abstractmethod
from typing import Any

from ..engine_core.errors import GameNotFoundError
from ..engine_core.state import GameState
from .codec import state_from_dict, state_to_dict

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


class GameStore(ABC):
    """
    Persistence for game aggregates, keyed by game id.

    Every save stamps the state with a last_update strictly greater than
    the one already stored, so pollers can tell new data from stale.
    """

    @abstractmethod
    def _read(self, game_id: str) -> dict[str, Any] | None:
        """
        Read the raw encoded game.

        Returns:
            The stored dict, or None if the game does not exist
        """
        pass

    @abstractmethod
    def _write(self, game_id: str, data: dict[str, Any]) -> None:
        """
        Write the raw encoded game, replacing any previous version.

        Raises:
            StoreError on I/O failure
        """
        pass

    @abstractmethod
    def list_games(self) -> list[str]:
        """IDs of every stored game."""
        pass

    def exists(self, game_id: str) -> bool:
        return self._read(game_id) is not None

    def load_game(self, game_id: str) -> GameState:
        """
        Load the current state of a game.

        Raises:
            GameNotFoundError if no game has this id
            StoreError if the stored data is unreadable
        """
        data = self._read(game_id)
        if data is None:
            raise GameNotFoundError(f"Game {game_id} not found")
        return state_from_dict(data)

    def save_game(self, game_id: str, state: GameState) -> GameState:
        """
        Persist a game and return it with its refreshed last_update.
        """
        previous = self._read(game_id)
        floor = max(state.last_update, previous["last_update"] if previous else 0)
        stamped = state._copy_with(last_update=max(now_ms(), floor + 1))

        self._write(game_id, state_to_dict(stamped))
        logger.debug("Saved game %s (last_update=%d)", game_id, stamped.last_update)
        return stamped
