"""
Game Manager - Funnels player actions through the reducer and the store.

LIFECYCLE:
1. Host creates a game -> gets a 6-character shareable code
2. Other players join with the code (up to 4, only while waiting)
3. Host starts the game -> tiles and secret buildings are dealt
4. Players place tiles and vote on outhouses
5. Game ends -> scores are available

Every mutating call is load -> Reducer.apply -> save, serialized per
game id so two actions on the same game never interleave in-process.
A rejected action raises its GameError and nothing is saved.
"""

from __future__ import annotations
import logging
import re
import secrets
import string
import threading
import time
from dataclasses import dataclass, replace

from ..engine_core.action import Action, ActionResult
from ..engine_core.errors import GameError, GameNotFoundError, ValidationError
from ..engine_core.move_validator import Placement, legal_placements
from ..engine_core.placement import lookup_tile
from ..engine_core.reducer import Reducer
from ..engine_core.scoring import PlayerScore, score_players
from ..engine_core.setup import new_game
from ..engine_core.state import GameState
from ..storage import GameStore, InMemoryGameStore

logger = logging.getLogger(__name__)


GAME_ID_LENGTH = 6
GAME_ID_ALPHABET = string.ascii_uppercase + string.digits
PLAYER_ID_LENGTH = 8
PLAYER_ID_ALPHABET = string.ascii_lowercase + string.digits

_GAME_ID_RE = re.compile(rf"^[A-Z0-9]{{{GAME_ID_LENGTH}}}$")


def generate_game_id() -> str:
    return "".join(secrets.choice(GAME_ID_ALPHABET) for _ in range(GAME_ID_LENGTH))


def generate_player_id() -> str:
    return "".join(secrets.choice(PLAYER_ID_ALPHABET) for _ in range(PLAYER_ID_LENGTH))


def is_valid_game_id(game_id: str) -> bool:
    return bool(_GAME_ID_RE.match(game_id))


def normalize_game_id(game_id: str) -> str:
    """Codes are shared by humans; accept any case and stray spaces."""
    return game_id.strip().upper()


@dataclass
class Seat:
    """A player's handle on a game: the code, their token and the state."""
    game_id: str
    player_id: str
    state: GameState


class GameManager:
    """
    Manages games on top of a GameStore.

    Responsibilities:
    - Issue game codes and player tokens
    - Run actions through the reducer
    - Persist every successful transition
    """

    MAX_ID_ATTEMPTS = 20

    def __init__(self, store: GameStore | None = None, reducer: Reducer | None = None):
        self.store = store or InMemoryGameStore()
        self.reducer = reducer or Reducer()
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, game_id: str) -> threading.Lock:
        """Per-game lock. Only games that exist in the store get one."""
        with self._locks_guard:
            lock = self._locks.get(game_id)
            if lock is None:
                if not self.store.exists(game_id):
                    raise GameNotFoundError(f"Game {game_id} not found")
                lock = self._locks[game_id] = threading.Lock()
            return lock

    def _checked_id(self, game_id: str) -> str:
        """Normalize a code; malformed codes can never name a game."""
        game_id = normalize_game_id(game_id)
        if not is_valid_game_id(game_id):
            raise GameNotFoundError(f"Game {game_id} not found")
        return game_id

    def create_game(self, host_name: str, random_seed: int | None = None) -> Seat:
        """
        Create a new game with the host seated.

        Returns:
            Seat with the new game code and the host's player token
        """
        if not host_name or not host_name.strip():
            raise ValidationError("Please enter your name")

        for _ in range(self.MAX_ID_ATTEMPTS):
            game_id = generate_game_id()
            if not self.store.exists(game_id):
                break
        else:
            raise GameError("Could not allocate a free game code")

        player_id = generate_player_id()
        state = new_game(game_id, player_id, host_name.strip(), random_seed=random_seed)
        state = self.store.save_game(game_id, state)

        logger.info("Created game %s for %s", game_id, host_name)
        return Seat(game_id=game_id, player_id=player_id, state=state)

    def join_game(self, game_id: str, name: str) -> Seat:
        game_id = self._checked_id(game_id)
        player_id = generate_player_id()
        state = self.apply(game_id, Action.join(player_id, name))
        return Seat(game_id=game_id, player_id=player_id, state=state)

    def start_game(self, game_id: str, player_id: str) -> GameState:
        return self.apply(game_id, Action.start(player_id))

    def place_tile(self, game_id: str, player_id: str, tile_id: str, row: int, col: int) -> GameState:
        return self.apply(game_id, Action.place(player_id, tile_id, row, col))

    def submit_vote(self, game_id: str, player_id: str, card_id: str) -> GameState:
        return self.apply(game_id, Action.vote(player_id, card_id))

    def apply(self, game_id: str, action: Action) -> GameState:
        """Apply an action and return the saved state."""
        return self.apply_result(game_id, action).new_state

    def apply_result(self, game_id: str, action: Action) -> ActionResult:
        """
        Load, reduce and save one action.

        Returns:
            The successful ActionResult, with new_state as saved

        Raises:
            GameNotFoundError if the game does not exist
            GameError subclass if the action is rejected
        """
        game_id = self._checked_id(game_id)
        if action.timestamp is None:
            action = replace(action, timestamp=time.time())
        with self._lock_for(game_id):
            state = self.store.load_game(game_id)
            result = self.reducer.apply(state, action)
            if not result.success:
                raise result.exception or GameError(result.error, code=result.error_code)
            result.new_state = self.store.save_game(game_id, result.new_state)
            return result

    def get_state(self, game_id: str) -> GameState:
        return self.store.load_game(self._checked_id(game_id))

    def legal_placements(self, game_id: str, player_id: str, tile_id: str) -> list[Placement]:
        """Where the given tile from the player's hand could go right now."""
        state = self.get_state(game_id)
        tile = lookup_tile(state, player_id, tile_id)
        return legal_placements(tile, state.workers, state.board)

    def final_scores(self, game_id: str) -> list[PlayerScore]:
        return score_players(self.get_state(game_id))

    def list_games(self) -> list[str]:
        return self.store.list_games()
