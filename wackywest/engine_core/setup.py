"""
Game Setup - Creates the initial state and deals the game out.

This module handles:
- Creating a fresh game in the waiting room
- Generating the tile supply for the player count
- Shuffling with the game's seed for determinism
- Dealing hands and secret buildings at start
"""

from __future__ import annotations
import random

from .board import Board, BuildingType, TileFamily
from .errors import ValidationError
from .state import (
    GamePhase,
    GameState,
    MAX_PLAYERS,
    MIN_PLAYERS,
    PlayerState,
    Tile,
    initial_workers,
)
from .voting import create_vote_cards


# player count -> {length: tiles per family}
TILE_COUNTS: dict[int, dict[int, int]] = {
    2: {3: 6, 2: 12, 1: 12},
    3: {3: 4, 2: 8, 1: 8},
    4: {3: 3, 2: 6, 1: 6},
}


def create_player(player_id: str, name: str) -> PlayerState:
    """A player as they sit down: full vote hand, no tiles yet."""
    return PlayerState(
        player_id=player_id,
        name=name,
        vote_cards=create_vote_cards(),
    )


def new_game(
    game_id: str,
    host_id: str,
    host_name: str,
    random_seed: int | None = None,
) -> GameState:
    """
    Set up a new game in the waiting room with the host seated.

    Args:
        game_id: Shareable game code
        host_id: Player token of the host
        host_name: Display name of the host
        random_seed: Seed for the start-of-game shuffle

    Returns:
        GameState in the WAITING phase
    """
    if random_seed is None:
        random_seed = random.randrange(2**31)

    return GameState(
        game_id=game_id,
        phase=GamePhase.WAITING,
        players=(create_player(host_id, host_name),),
        board=Board.initial(),
        workers=initial_workers(),
        random_seed=random_seed,
    )


def generate_tiles(num_players: int, rng: random.Random) -> list[Tile]:
    """Create and shuffle the full tile supply for the player count."""
    if num_players not in TILE_COUNTS:
        raise ValidationError(f"Games need {MIN_PLAYERS}-{MAX_PLAYERS} players, not {num_players}")

    counts = TILE_COUNTS[num_players]
    tiles = []
    for family in TileFamily:
        for length in (3, 2, 1):
            for i in range(counts[length]):
                tiles.append(
                    Tile(tile_id=f"{family.value}-{length}-{i}", family=family, length=length)
                )

    rng.shuffle(tiles)
    return tiles


def deal(state: GameState) -> GameState:
    """
    Deal tiles and secret buildings and move to PLAYING.

    Every player gets the same number of tiles; any remainder that does
    not divide evenly is left out of the game.
    """
    rng = random.Random(state.random_seed)
    num_players = state.num_players

    buildings = list(BuildingType)
    rng.shuffle(buildings)

    tiles = generate_tiles(num_players, rng)
    per_player = len(tiles) // num_players

    players = tuple(
        PlayerState(
            player_id=p.player_id,
            name=p.name,
            secret_building=buildings[idx],
            hand=tuple(tiles[idx * per_player:(idx + 1) * per_player]),
            vote_cards=p.vote_cards,
            ready=True,
        )
        for idx, p in enumerate(state.players)
    )

    return state._copy_with(
        players=players,
        phase=GamePhase.PLAYING,
        current_player_idx=0,
        turn_number=0,
    )
