"""
Pytest fixtures for Wacky Wacky West tests.
"""

from dataclasses import replace

import pytest

from ..engine_core.action import Action
from ..engine_core.board import Board, BuildingType, TileFamily
from ..engine_core.reducer import apply_action
from ..engine_core.setup import create_player, new_game
from ..engine_core.state import GamePhase, GameState, Tile, initial_workers
from ..storage import InMemoryGameStore
from ..session import GameManager


PLAYER_IDS = ["alice", "bob", "carol", "dave"]


def make_tiles(family: TileFamily, length: int, count: int, prefix: str = "") -> list[Tile]:
    """Tiles with predictable ids, e.g. railroad-1-a0."""
    return [
        Tile(tile_id=f"{family.value}-{length}-{prefix}{i}", family=family, length=length)
        for i in range(count)
    ]


def make_state(
    hands: list[list[Tile]],
    board: Board | None = None,
    workers=None,
    current: int = 0,
    buildings: list[BuildingType] | None = None,
    phase: GamePhase = GamePhase.PLAYING,
) -> GameState:
    """A started game with hand-picked hands instead of a shuffled deal."""
    players = []
    for idx, hand in enumerate(hands):
        player = create_player(PLAYER_IDS[idx], PLAYER_IDS[idx].capitalize())
        players.append(replace(
            player,
            secret_building=buildings[idx] if buildings else None,
            hand=tuple(hand),
            ready=True,
        ))

    return GameState(
        game_id="TEST01",
        phase=phase,
        current_player_idx=current,
        players=tuple(players),
        board=board or Board.initial(),
        workers=tuple(workers) if workers is not None else initial_workers(),
    )


def apply_ok(state: GameState, action: Action) -> GameState:
    """Apply an action that must succeed."""
    result = apply_action(state, action)
    assert result.success, result.error
    return result.new_state


@pytest.fixture
def waiting_state() -> GameState:
    """Fresh game with only the host seated."""
    return new_game("TEST01", "alice", "Alice", random_seed=42)


@pytest.fixture
def two_player_waiting(waiting_state) -> GameState:
    return apply_ok(waiting_state, Action.join("bob", "Bob"))


@pytest.fixture
def two_player_state(two_player_waiting) -> GameState:
    """A dealt two-player game, Alice to move."""
    return apply_ok(two_player_waiting, Action.start("alice"))


@pytest.fixture
def store() -> InMemoryGameStore:
    return InMemoryGameStore()


@pytest.fixture
def manager(store) -> GameManager:
    return GameManager(store=store)


def outhouse_state(num_players: int = 2, alice_tiles: int = 2, others_tiles: int = 1) -> GameState:
    """Alice's railroad worker stands right below the outhouse at (8, 6)."""
    workers = tuple(
        replace(w, position=(9, 6)) if w.worker_id == "railroad-1" else w
        for w in initial_workers()
    )
    hands = [make_tiles(TileFamily.RAILROAD, 1, alice_tiles)]
    for idx in range(1, num_players):
        hands.append(make_tiles(TileFamily.RIVER, 1, others_tiles, prefix=f"p{idx}-"))
    return make_state(hands, workers=workers)
