"""
Game State - The aggregate the reducer operates on.

Design principles:
- Immutable: every container is a tuple and every dataclass is frozen,
  so a state handed to the reducer can never be changed behind its back
- Serializable: see storage.codec for the JSON mapping
- All mutations go through _copy_with / with_* helpers that return new state
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .board import Board, BuildingType, Position, TileFamily


MIN_PLAYERS = 2
MAX_PLAYERS = 4


class GamePhase(Enum):
    """High-level game phases."""
    WAITING = "waiting"
    PLAYING = "playing"
    VOTING = "voting"
    ENDED = "ended"


class VoteCardKind(Enum):
    YES = "yes"
    NO = "no"
    JOKER = "joker"
    QUESTION = "question"


@dataclass(frozen=True)
class Tile:
    """A tile in a player's hand. Length is 1, 2 or 3 cells."""
    tile_id: str
    family: TileFamily
    length: int


@dataclass(frozen=True)
class Worker:
    """
    Marker whose position decides where its family's tiles can go next.

    Retired workers (active=False) never move again.
    """
    worker_id: str
    family: TileFamily
    position: Position
    active: bool = True


@dataclass(frozen=True)
class VoteCard:
    card_id: str
    kind: VoteCardKind
    weight: int
    label: str
    used: bool = False

    @property
    def reusable(self) -> bool:
        """The question card can be played in every vote."""
        return self.kind == VoteCardKind.QUESTION


@dataclass(frozen=True)
class Vote:
    player_id: str
    card: VoteCard


@dataclass(frozen=True)
class VotingTile:
    """A placement waiting on the group vote because it covers an outhouse."""
    tile: Tile
    row: int
    col: int
    player_id: str


@dataclass(frozen=True)
class PlayerState:
    """State for a single player."""
    player_id: str
    name: str
    secret_building: BuildingType | None = None
    hand: tuple[Tile, ...] = ()
    vote_cards: tuple[VoteCard, ...] = ()
    ready: bool = False

    def has_tile(self, tile_id: str) -> bool:
        return any(t.tile_id == tile_id for t in self.hand)

    def get_tile(self, tile_id: str) -> Tile | None:
        for tile in self.hand:
            if tile.tile_id == tile_id:
                return tile
        return None

    def get_vote_card(self, card_id: str) -> VoteCard | None:
        for card in self.vote_cards:
            if card.card_id == card_id:
                return card
        return None

    @property
    def available_vote_cards(self) -> tuple[VoteCard, ...]:
        return tuple(c for c in self.vote_cards if not c.used)

    def without_tile(self, tile_id: str) -> PlayerState:
        return replace(self, hand=tuple(t for t in self.hand if t.tile_id != tile_id))

    def with_card_used(self, card_id: str) -> PlayerState:
        """Return new player with the card spent. Question cards stay fresh."""
        cards = tuple(
            replace(c, used=True) if c.card_id == card_id and not c.reusable else c
            for c in self.vote_cards
        )
        return replace(self, vote_cards=cards)


def initial_workers() -> tuple[Worker, ...]:
    """The four workers, one per board corner."""
    return (
        Worker(worker_id="railroad-1", family=TileFamily.RAILROAD, position=(9, 0)),
        Worker(worker_id="railroad-2", family=TileFamily.RAILROAD, position=(0, 14)),
        Worker(worker_id="river-1", family=TileFamily.RIVER, position=(0, 0)),
        Worker(worker_id="street-1", family=TileFamily.STREET, position=(9, 14)),
    )


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str

    # Game phase
    phase: GamePhase = GamePhase.WAITING
    turn_number: int = 0
    current_player_idx: int = 0

    # Players, in seat order. players[0] is the host.
    players: tuple[PlayerState, ...] = ()

    # Shared table
    board: Board = field(default_factory=Board.initial)
    workers: tuple[Worker, ...] = field(default_factory=initial_workers)

    # Vote sub-protocol
    voting_tile: VotingTile | None = None
    votes: tuple[Vote, ...] = ()

    # History (for replay and logging)
    action_history: tuple[Any, ...] = ()

    # Seed for the start-of-game shuffle
    random_seed: int = 0

    # Set by the store on every save (milliseconds, strictly increasing)
    last_update: int = 0

    @property
    def current_player(self) -> PlayerState:
        """Get the current player."""
        return self.players[self.current_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def host(self) -> PlayerState | None:
        return self.players[0] if self.players else None

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.ENDED

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def player_index(self, player_id: str) -> int | None:
        for idx, p in enumerate(self.players):
            if p.player_id == player_id:
                return idx
        return None

    def has_voted(self, player_id: str) -> bool:
        return any(v.player_id == player_id for v in self.votes)

    def active_worker(self, family: TileFamily) -> Worker | None:
        """First active worker of the family, in creation order."""
        for worker in self.workers:
            if worker.active and worker.family == family:
                return worker
        return None

    def with_player(self, player: PlayerState) -> GameState:
        """Return new state with updated player."""
        new_players = tuple(
            player if p.player_id == player.player_id else p
            for p in self.players
        )
        return self._copy_with(players=new_players)

    def with_worker(self, worker: Worker) -> GameState:
        """Return new state with updated worker."""
        new_workers = tuple(
            worker if w.worker_id == worker.worker_id else w
            for w in self.workers
        )
        return self._copy_with(workers=new_workers)

    def advance_player(self) -> GameState:
        return self._copy_with(
            current_player_idx=(self.current_player_idx + 1) % self.num_players
        )

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
