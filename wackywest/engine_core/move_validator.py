"""
Move Validator - Computes where a tile may legally go.

A tile is always laid next to the active worker of its family and
extends straight away from that worker for tile.length cells. The run
is legal when every cell is on the board and none already holds a tile.
Buildings and outhouses are legal targets; they get covered.

Also home of the ActionGenerator, which enumerates every legal Action
for a state (used by bots, the API's move listing and tests).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from .action import Action
from .board import Board, Direction, Position, TileFamily
from .errors import ValidationError
from .state import GamePhase, GameState, MIN_PLAYERS, Tile, Worker


@dataclass(frozen=True)
class Placement:
    """A legal spot for a tile: the anchor cell plus the full run."""
    row: int
    col: int
    cells: tuple[Position, ...]
    direction: Direction


def active_worker(workers: Iterable[Worker], family: TileFamily) -> Worker | None:
    """First active worker of the family, in creation order."""
    for worker in workers:
        if worker.active and worker.family == family:
            return worker
    return None


def compute_run(worker_position: Position, direction: Direction, length: int) -> tuple[Position, ...]:
    """Cells a tile of `length` covers when laid from the worker in `direction`."""
    return tuple(direction.step(worker_position, i + 1) for i in range(length))


def is_run_clear(board: Board, cells: Iterable[Position]) -> bool:
    return all(
        board.in_bounds(row, col) and not board.is_tile(row, col)
        for row, col in cells
    )


def covers_outhouse(board: Board, cells: Iterable[Position]) -> bool:
    """True if any cell of the run is a still-uncovered outhouse."""
    return any(board.is_outhouse(row, col) for row, col in cells)


def legal_placements(tile: Tile, workers: Iterable[Worker], board: Board) -> list[Placement]:
    """
    All legal placements for a tile.

    Returns an empty list when the family's worker has retired.
    Placements are ordered UP, DOWN, LEFT, RIGHT around the worker.
    """
    worker = active_worker(workers, tile.family)
    if worker is None:
        return []

    placements = []
    for direction in Direction:
        anchor = direction.step(worker.position)
        if not board.in_bounds(*anchor) or board.is_tile(*anchor):
            continue
        cells = compute_run(worker.position, direction, tile.length)
        if is_run_clear(board, cells):
            placements.append(
                Placement(row=anchor[0], col=anchor[1], cells=cells, direction=direction)
            )
    return placements


def find_placement(
    tile: Tile,
    workers: Iterable[Worker],
    board: Board,
    row: int,
    col: int,
) -> Placement:
    """
    Resolve an anchor cell chosen by a player into a Placement.

    Raises ValidationError explaining why the spot is not legal.
    """
    workers = tuple(workers)
    worker = active_worker(workers, tile.family)
    if worker is None:
        raise ValidationError(
            f"No active worker for {tile.family.value} tiles",
            code="NO_ACTIVE_WORKER",
        )

    direction = Direction.between(worker.position, (row, col))
    if direction is None:
        raise ValidationError("Must place adjacent to worker", code="NOT_ADJACENT")

    for placement in legal_placements(tile, workers, board):
        if placement.direction == direction:
            return placement

    raise ValidationError(
        f"{tile.tile_id} does not fit at ({row}, {col})",
        code="NO_LEGAL_PLACEMENT",
    )


class ActionGenerator:
    """
    Generates legal actions for the current game state.

    In WAITING: the host's start action (once enough players joined).
    In PLAYING: one placement action per tile in hand per legal spot.
    In VOTING: one vote action per unused card per player yet to vote.
    """

    def generate(self, state: GameState) -> list[Action]:
        if state.phase == GamePhase.ENDED:
            return []

        if state.phase == GamePhase.WAITING:
            return self._generate_start_actions(state)

        if state.phase == GamePhase.VOTING:
            return self._generate_vote_actions(state)

        return self._generate_place_actions(state, state.current_player.player_id)

    def generate_for_player(self, state: GameState, player_id: str) -> list[Action]:
        """Only the actions the given player may take right now."""
        return [a for a in self.generate(state) if a.payload.player_id == player_id]

    def _generate_start_actions(self, state: GameState) -> list[Action]:
        if state.num_players < MIN_PLAYERS:
            return []
        return [Action.start(state.host.player_id)]

    def _generate_vote_actions(self, state: GameState) -> list[Action]:
        actions = []
        for player in state.players:
            if state.has_voted(player.player_id):
                continue
            for card in player.available_vote_cards:
                actions.append(Action.vote(player.player_id, card.card_id))
        return actions

    def _generate_place_actions(self, state: GameState, player_id: str) -> list[Action]:
        player = state.get_player(player_id)
        if not player:
            return []

        actions = []
        for tile in player.hand:
            for placement in legal_placements(tile, state.workers, state.board):
                actions.append(Action.place(player_id, tile.tile_id, placement.row, placement.col))
        return actions


def legal_actions(state: GameState) -> list[Action]:
    """Convenience function to get legal actions."""
    return ActionGenerator().generate(state)


def is_legal(state: GameState, action: Action) -> bool:
    """Check if a specific action is legal."""
    return any(
        a.action_type == action.action_type and a.payload == action.payload
        for a in legal_actions(state)
    )
