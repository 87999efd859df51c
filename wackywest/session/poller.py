"""
State Poller - Client-side view of a shared game.

Participants re-read the store periodically. A freshly loaded state is
adopted only if its last_update is strictly newer than what the poller
already holds, so a slow read never rolls the view back.
"""

from __future__ import annotations
import logging

from ..engine_core.state import GameState
from ..storage import GameStore

logger = logging.getLogger(__name__)


class StatePoller:
    def __init__(self, store: GameStore, game_id: str, state: GameState | None = None):
        self.store = store
        self.game_id = game_id
        self.state = state

    @property
    def last_update(self) -> int:
        return self.state.last_update if self.state else 0

    def offer(self, candidate: GameState) -> bool:
        """Adopt candidate if it is newer. Returns True when adopted."""
        if candidate.last_update > self.last_update:
            self.state = candidate
            return True
        return False

    def poll(self) -> GameState | None:
        """
        Load the game and adopt it if it changed.

        Returns:
            The new state if one was adopted, otherwise None
        """
        candidate = self.store.load_game(self.game_id)
        if self.offer(candidate):
            logger.debug("Game %s advanced to %d", self.game_id, self.last_update)
            return candidate
        return None
