"""
Tests for the reducer (state transitions).

Tests:
- Lobby actions (join, start)
- Tile placement and worker movement
- Turn rotation
- End of game
- Rejected actions leave state untouched
"""

from dataclasses import replace

import pytest

from ..engine_core.action import Action
from ..engine_core.board import Board, Building, BuildingType, Direction, PlacedTile, TileFamily
from ..engine_core.errors import CapacityError, NotYourTurnError, ValidationError, WrongPhaseError
from ..engine_core.move_validator import legal_placements
from ..engine_core.reducer import Reducer, apply_action
from ..engine_core.state import GamePhase, initial_workers
from .conftest import apply_ok, make_state, make_tiles


RAIL = PlacedTile(family=TileFamily.RAILROAD)


def moved_workers(**positions):
    """initial_workers() with some workers moved, keyed by id with '_' for '-'."""
    moves = {key.replace("_", "-"): pos for key, pos in positions.items()}
    return tuple(
        replace(w, position=moves[w.worker_id]) if w.worker_id in moves else w
        for w in initial_workers()
    )


class TestJoin:
    """Tests for joining the waiting room."""

    def test_join_adds_player(self, waiting_state):
        state = apply_ok(waiting_state, Action.join("bob", "Bob"))

        assert state.num_players == 2
        assert state.players[1].name == "Bob"
        assert len(state.players[1].vote_cards) == 8
        assert state.phase == GamePhase.WAITING

    def test_fifth_player_rejected(self, waiting_state):
        state = waiting_state
        for pid in ["bob", "carol", "dave"]:
            state = apply_ok(state, Action.join(pid, pid.capitalize()))

        result = apply_action(state, Action.join("eve", "Eve"))

        assert not result.success
        assert isinstance(result.exception, CapacityError)
        assert result.error_code == "GAME_FULL"

    def test_join_after_start_rejected(self, two_player_state):
        result = apply_action(two_player_state, Action.join("carol", "Carol"))

        assert not result.success
        assert result.error_code == "GAME_STARTED"

    def test_join_after_end_rejected(self):
        state = make_state([[], []], phase=GamePhase.ENDED)

        result = apply_action(state, Action.join("carol", "Carol"))

        assert not result.success
        assert isinstance(result.exception, CapacityError)
        assert result.error_code == "GAME_STARTED"

    def test_duplicate_player_id_rejected(self, waiting_state):
        result = apply_action(waiting_state, Action.join("alice", "Alice again"))
        assert not result.success

    def test_blank_name_rejected(self, waiting_state):
        result = apply_action(waiting_state, Action.join("bob", "   "))
        assert not result.success


class TestStart:
    """Tests for starting the game."""

    def test_host_starts(self, two_player_state):
        state = two_player_state

        assert state.phase == GamePhase.PLAYING
        assert state.current_player_idx == 0
        assert state.turn_number == 0
        assert all(p.ready for p in state.players)
        assert all(p.hand for p in state.players)
        assert all(p.secret_building is not None for p in state.players)

    def test_non_host_cannot_start(self, two_player_waiting):
        result = apply_action(two_player_waiting, Action.start("bob"))

        assert not result.success
        assert result.error_code == "NOT_HOST"
        assert two_player_waiting.phase == GamePhase.WAITING

    def test_cannot_start_alone(self, waiting_state):
        result = apply_action(waiting_state, Action.start("alice"))
        assert not result.success

    def test_cannot_start_twice(self, two_player_state):
        result = apply_action(two_player_state, Action.start("alice"))

        assert not result.success
        assert isinstance(result.exception, WrongPhaseError)


class TestPlaceTile:
    """Tests for placing tiles."""

    @pytest.fixture
    def state(self):
        return make_state([
            make_tiles(TileFamily.RAILROAD, 1, 2) + make_tiles(TileFamily.RAILROAD, 3, 1),
            make_tiles(TileFamily.RIVER, 1, 2),
        ])

    def test_place_single_tile(self, state):
        new_state = apply_ok(state, Action.place("alice", "railroad-1-0", 9, 1))

        assert new_state.board.cell_at(9, 1) == RAIL
        assert new_state.active_worker(TileFamily.RAILROAD).position == (9, 1)
        assert not new_state.get_player("alice").has_tile("railroad-1-0")
        assert new_state.current_player_idx == 1
        assert new_state.turn_number == 1

    def test_long_tile_moves_worker_to_far_end(self, state):
        new_state = apply_ok(state, Action.place("alice", "railroad-3-0", 8, 0))

        for row in (8, 7, 6):
            assert new_state.board.cell_at(row, 0) == RAIL
        assert new_state.active_worker(TileFamily.RAILROAD).position == (6, 0)

    def test_tile_covers_building(self):
        state = make_state(
            [make_tiles(TileFamily.RAILROAD, 1, 1), make_tiles(TileFamily.RIVER, 1, 1)],
            workers=moved_workers(railroad_1=(9, 1)),
        )
        assert state.board.cell_at(8, 1) == Building(BuildingType.JAIL, 1)

        new_state = apply_ok(state, Action.place("alice", "railroad-1-0", 8, 1))

        assert new_state.board.cell_at(8, 1) == RAIL

    def test_not_your_turn(self, state):
        result = apply_action(state, Action.place("bob", "river-1-0", 0, 1))

        assert not result.success
        assert isinstance(result.exception, NotYourTurnError)
        assert result.error_code == "NOT_YOUR_TURN"

    def test_tile_not_in_hand(self, state):
        result = apply_action(state, Action.place("alice", "river-1-0", 0, 1))

        assert not result.success
        assert result.error_code == "TILE_NOT_IN_HAND"

    def test_non_adjacent_rejected(self, state):
        result = apply_action(state, Action.place("alice", "railroad-1-0", 5, 5))

        assert not result.success
        assert isinstance(result.exception, ValidationError)
        assert result.error_code == "NOT_ADJACENT"

    def test_rejected_action_leaves_state_unchanged(self, state):
        result = apply_action(state, Action.place("alice", "railroad-1-0", 9, 2))

        assert not result.success
        assert result.new_state is None
        assert state.board == make_state([[], []]).board
        assert state.get_player("alice").has_tile("railroad-1-0")
        assert state.current_player_idx == 0

    def test_input_state_is_not_mutated(self, state):
        apply_ok(state, Action.place("alice", "railroad-1-0", 9, 1))

        assert state.board.cell_at(9, 1) is None
        assert state.turn_number == 0
        assert state.get_player("alice").has_tile("railroad-1-0")

    def test_action_recorded_in_history(self, state):
        action = Action.place("alice", "railroad-1-0", 9, 1)
        new_state = apply_ok(state, action)

        assert new_state.action_history == (action,)

    def test_unknown_player(self, state):
        result = apply_action(state, Action.place("zed", "railroad-1-0", 9, 1))
        assert result.error_code == "UNKNOWN_PLAYER"


class TestWorkerRetirement:
    """Tests for workers getting walled in."""

    def test_worker_retires_when_walled_in(self):
        board = Board.initial()
        for row, col in [(0, 0), (1, 1), (0, 2)]:
            board = board.occupy(row, col, PlacedTile(family=TileFamily.RIVER))
        state = make_state(
            [make_tiles(TileFamily.RIVER, 1, 2), make_tiles(TileFamily.STREET, 1, 1)],
            board=board,
        )

        new_state = apply_ok(state, Action.place("alice", "river-1-0", 0, 1))

        river = next(w for w in new_state.workers if w.worker_id == "river-1")
        assert river.position == (0, 1)
        assert not river.active
        assert new_state.phase == GamePhase.PLAYING

    def test_retired_worker_tiles_cannot_be_placed(self):
        workers = [
            replace(w, active=False) if w.family == TileFamily.RIVER else w
            for w in initial_workers()
        ]
        state = make_state(
            [make_tiles(TileFamily.RIVER, 1, 1), make_tiles(TileFamily.STREET, 1, 1)],
            workers=workers,
        )

        result = apply_action(state, Action.place("alice", "river-1-0", 0, 1))

        assert not result.success
        assert result.error_code == "NO_ACTIVE_WORKER"

    def test_last_worker_retiring_ends_game(self):
        board = Board.initial()
        for row, col in [(0, 0), (1, 1), (0, 2)]:
            board = board.occupy(row, col, PlacedTile(family=TileFamily.RIVER))
        workers = [
            w if w.family == TileFamily.RIVER else replace(w, active=False)
            for w in initial_workers()
        ]
        state = make_state(
            [make_tiles(TileFamily.RIVER, 1, 3), make_tiles(TileFamily.STREET, 1, 3)],
            board=board,
            workers=workers,
        )

        new_state = apply_ok(state, Action.place("alice", "river-1-0", 0, 1))

        assert new_state.phase == GamePhase.ENDED
        assert new_state.get_player("bob").hand


HORIZONTAL = {
    TileFamily.RAILROAD: Direction.RIGHT,
    TileFamily.RIVER: Direction.RIGHT,
    TileFamily.STREET: Direction.LEFT,
}


def play_horizontal(state):
    """Current player lays their first tile sideways along the edge row."""
    player = state.current_player
    tile = player.hand[0]
    placement = next(
        p for p in legal_placements(tile, state.workers, state.board)
        if p.direction == HORIZONTAL[tile.family]
    )
    return apply_ok(state, Action.place(player.player_id, tile.tile_id, placement.row, placement.col))


class TestTurnRotation:
    """The current player after N placements is N mod P."""

    @pytest.mark.parametrize("families", [
        [TileFamily.RAILROAD, TileFamily.RIVER],
        [TileFamily.RAILROAD, TileFamily.RIVER, TileFamily.STREET],
        [TileFamily.RAILROAD, TileFamily.RIVER, TileFamily.STREET, TileFamily.RIVER],
    ])
    def test_rotation(self, families):
        hands = [
            make_tiles(family, 1, 3, prefix=f"p{idx}-")
            for idx, family in enumerate(families)
        ]
        state = make_state(hands)
        num_players = len(families)

        for placed in range(1, 3 * num_players):
            state = play_horizontal(state)
            assert state.turn_number == placed
            assert state.current_player_idx == placed % num_players
            assert state.phase == GamePhase.PLAYING


class TestEndOfGame:
    """Scenario: two players with twelve single tiles each."""

    def test_game_ends_on_last_placement(self):
        state = make_state([
            make_tiles(TileFamily.RAILROAD, 1, 12),
            make_tiles(TileFamily.RIVER, 1, 12),
        ])

        for placed in range(1, 25):
            assert state.phase == GamePhase.PLAYING
            state = play_horizontal(state)

        assert state.phase == GamePhase.ENDED
        assert state.turn_number == 24
        assert all(not p.hand for p in state.players)
        for col in range(1, 13):
            assert state.board.is_tile(9, col)
            assert state.board.is_tile(0, col)
        assert state.active_worker(TileFamily.RAILROAD).position == (9, 12)

    def test_no_actions_after_end(self):
        state = make_state([[], []], phase=GamePhase.ENDED)

        result = Reducer().apply(state, Action.place("alice", "railroad-1-0", 9, 1))

        assert not result.success
        assert isinstance(result.exception, WrongPhaseError)
