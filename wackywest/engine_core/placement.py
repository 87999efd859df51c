"""
Placement Resolver - Commits a tile placement to the state.

Resolving a placement:
1. Writes the tile's family into every cell of the run
2. Moves the worker to the far end of the run
3. Retires the worker if it is now walled in on all four sides
4. Removes the tile from the proposer's hand
5. Passes the turn and bumps the turn counter
6. Ends the game when every hand is empty or every worker is retired
"""

from __future__ import annotations
import logging
from dataclasses import replace

from .board import PlacedTile
from .errors import ValidationError
from .move_validator import Placement, active_worker, find_placement
from .state import GamePhase, GameState, Tile

logger = logging.getLogger(__name__)


def lookup_tile(state: GameState, player_id: str, tile_id: str) -> Tile:
    """Find a tile in the player's hand or raise ValidationError."""
    player = state.get_player(player_id)
    if player is None:
        raise ValidationError(f"Player {player_id} not found", code="UNKNOWN_PLAYER")
    tile = player.get_tile(tile_id)
    if tile is None:
        raise ValidationError(f"Tile {tile_id} not in hand", code="TILE_NOT_IN_HAND")
    return tile


def resolve_placement(
    state: GameState,
    player_id: str,
    tile_id: str,
    row: int,
    col: int,
) -> GameState:
    """
    Apply a placement and return the new state.

    The placement is re-validated against the current board, so the
    same call serves both direct placements and approved votes.
    """
    tile = lookup_tile(state, player_id, tile_id)
    placement = find_placement(tile, state.workers, state.board, row, col)
    return _commit(state, player_id, tile, placement)


def _commit(state: GameState, player_id: str, tile: Tile, placement: Placement) -> GameState:
    board = state.board
    for r, c in placement.cells:
        board = board.occupy(r, c, PlacedTile(family=tile.family))

    worker = active_worker(state.workers, tile.family)
    end_row, end_col = placement.cells[-1]
    moved = replace(worker, position=(end_row, end_col))
    if board.is_walled_in(end_row, end_col):
        moved = replace(moved, active=False)
        logger.info("Worker %s retired at (%d, %d)", worker.worker_id, end_row, end_col)

    player = state.get_player(player_id).without_tile(tile.tile_id)

    new_state = (
        state._copy_with(board=board)
        .with_worker(moved)
        .with_player(player)
        .advance_player()
    )
    new_state = new_state._copy_with(turn_number=state.turn_number + 1)

    logger.debug(
        "Game %s: %s placed %s on %s",
        state.game_id, player_id, tile.tile_id, list(placement.cells),
    )

    if is_game_over(new_state):
        logger.info("Game %s ended after turn %d", state.game_id, new_state.turn_number)
        new_state = new_state._copy_with(phase=GamePhase.ENDED)

    return new_state


def is_game_over(state: GameState) -> bool:
    """Every hand is empty, or every worker is retired."""
    hands_empty = all(not p.hand for p in state.players)
    workers_retired = all(not w.active for w in state.workers)
    return hands_empty or workers_retired
