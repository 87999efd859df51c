"""
Tests for the session layer.

Tests:
- Game codes and player tokens
- GameManager lifecycle
- Rejected actions are not persisted
- StatePoller only moves forward
"""

import pytest

from ..engine_core.errors import (
    CapacityError,
    GameNotFoundError,
    NotYourTurnError,
    ValidationError,
    WrongPhaseError,
)
from ..engine_core.move_validator import legal_actions
from ..engine_core.state import GamePhase
from ..session import GameManager, StatePoller, generate_game_id, generate_player_id, is_valid_game_id


class TestIds:
    def test_game_id_format(self):
        for _ in range(50):
            game_id = generate_game_id()
            assert len(game_id) == 6
            assert game_id == game_id.upper()
            assert is_valid_game_id(game_id)

    def test_invalid_game_ids(self):
        assert not is_valid_game_id("abc123")
        assert not is_valid_game_id("ABC12")
        assert not is_valid_game_id("ABC-12")

    def test_player_ids_are_unique(self):
        assert len({generate_player_id() for _ in range(100)}) == 100


@pytest.fixture
def started(manager):
    """A started two-player game: (game_id, host_id, guest_id)."""
    host = manager.create_game("Alice", random_seed=3)
    guest = manager.join_game(host.game_id, "Bob")
    manager.start_game(host.game_id, host.player_id)
    return host.game_id, host.player_id, guest.player_id


class TestGameManager:
    """Tests for GameManager."""

    def test_create_game(self, manager, store):
        seat = manager.create_game("Alice")

        assert is_valid_game_id(seat.game_id)
        assert seat.state.phase == GamePhase.WAITING
        assert seat.state.host.player_id == seat.player_id
        assert seat.state.last_update > 0
        assert store.exists(seat.game_id)

    def test_create_requires_name(self, manager):
        with pytest.raises(ValidationError):
            manager.create_game("  ")

    def test_join_with_lowercase_code(self, manager):
        host = manager.create_game("Alice")
        seat = manager.join_game(host.game_id.lower(), "Bob")

        assert seat.game_id == host.game_id
        assert seat.state.num_players == 2

    def test_join_unknown_game(self, manager):
        with pytest.raises(GameNotFoundError):
            manager.join_game("ZZZZZZ", "Bob")

    @pytest.mark.parametrize("game_id", ["ab/../c", "ABC12", "ABCDEFG", "AB CD1", ""])
    def test_malformed_code_is_not_found(self, manager, game_id):
        with pytest.raises(GameNotFoundError):
            manager.join_game(game_id, "Bob")
        with pytest.raises(GameNotFoundError):
            manager.get_state(game_id)

    def test_unknown_game_gets_no_lock(self, manager):
        with pytest.raises(GameNotFoundError):
            manager.join_game("ZZZZZZ", "Bob")
        with pytest.raises(GameNotFoundError):
            manager.start_game("ab/../c", "alice")

        assert manager._locks == {}

    def test_lock_reused_per_game(self, manager):
        host = manager.create_game("Alice")
        manager.join_game(host.game_id, "Bob")
        manager.join_game(host.game_id, "Carol")

        assert list(manager._locks) == [host.game_id]

    def test_actions_are_timestamped(self, manager):
        host = manager.create_game("Alice")
        manager.join_game(host.game_id, "Bob")

        join = manager.get_state(host.game_id).action_history[-1]
        assert isinstance(join.timestamp, float)
        assert join.timestamp > 0

    def test_join_full_game(self, manager):
        host = manager.create_game("Alice")
        for name in ["Bob", "Carol", "Dave"]:
            manager.join_game(host.game_id, name)

        with pytest.raises(CapacityError):
            manager.join_game(host.game_id, "Eve")

    def test_start(self, manager, started):
        game_id, host_id, _ = started
        state = manager.get_state(game_id)

        assert state.phase == GamePhase.PLAYING
        assert state.current_player.player_id == host_id

    def test_guest_cannot_start(self, manager):
        host = manager.create_game("Alice")
        guest = manager.join_game(host.game_id, "Bob")

        with pytest.raises(ValidationError) as exc:
            manager.start_game(host.game_id, guest.player_id)
        assert exc.value.code == "NOT_HOST"

    def test_place_tile(self, manager, started):
        game_id, host_id, guest_id = started
        before = manager.get_state(game_id)
        action = legal_actions(before)[0]

        after = manager.place_tile(
            game_id, host_id, action.payload.tile_id, action.payload.row, action.payload.col
        )

        assert after.last_update > before.last_update
        assert manager.get_state(game_id) == after
        assert after.current_player.player_id in (guest_id, host_id)

    def test_rejected_action_is_not_saved(self, manager, started):
        game_id, _, guest_id = started
        before = manager.get_state(game_id)
        tile = before.get_player(guest_id).hand[0]

        with pytest.raises(NotYourTurnError):
            manager.place_tile(game_id, guest_id, tile.tile_id, 0, 1)

        assert manager.get_state(game_id) == before

    def test_legal_placements(self, manager, started):
        game_id, host_id, _ = started
        state = manager.get_state(game_id)
        tile = state.get_player(host_id).hand[0]

        placements = manager.legal_placements(game_id, host_id, tile.tile_id)

        assert placements
        assert all(len(p.cells) == tile.length for p in placements)

    def test_scores_before_end(self, manager, started):
        with pytest.raises(WrongPhaseError):
            manager.final_scores(started[0])

    def test_list_games(self, manager):
        first = manager.create_game("Alice")
        second = manager.create_game("Bob")
        assert set(manager.list_games()) == {first.game_id, second.game_id}

    def test_apply_result_reports_changes(self, manager, started):
        game_id, _, _ = started
        action = legal_actions(manager.get_state(game_id))[0]

        result = manager.apply_result(game_id, action)

        assert result.success
        assert result.state_changes


class TestStatePoller:
    """Tests for StatePoller."""

    def test_first_poll_adopts(self, manager):
        seat = manager.create_game("Alice")
        poller = StatePoller(manager.store, seat.game_id)

        assert poller.poll() == seat.state
        assert poller.last_update == seat.state.last_update

    def test_unchanged_poll_returns_none(self, manager):
        seat = manager.create_game("Alice")
        poller = StatePoller(manager.store, seat.game_id, state=seat.state)

        assert poller.poll() is None

    def test_poll_sees_new_action(self, manager):
        seat = manager.create_game("Alice")
        poller = StatePoller(manager.store, seat.game_id, state=seat.state)

        manager.join_game(seat.game_id, "Bob")
        state = poller.poll()

        assert state is not None
        assert state.num_players == 2

    def test_stale_state_is_ignored(self, manager):
        seat = manager.create_game("Alice")
        joined = manager.join_game(seat.game_id, "Bob").state
        poller = StatePoller(manager.store, seat.game_id, state=joined)

        assert not poller.offer(seat.state)
        assert poller.state == joined

    def test_unknown_game(self, manager):
        with pytest.raises(GameNotFoundError):
            StatePoller(manager.store, "NOPE00").poll()


def test_manager_defaults_to_memory_store():
    manager = GameManager()
    seat = manager.create_game("Alice")
    assert manager.get_state(seat.game_id).game_id == seat.game_id
