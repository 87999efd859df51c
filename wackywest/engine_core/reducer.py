"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying
- Returns ActionResult with success/failure
- A rejected action leaves the input state untouched

Phase machine:
    WAITING --start--> PLAYING --place (covers outhouse)--> VOTING
    VOTING --last vote--> PLAYING (or ENDED if the approved placement ends it)
    PLAYING --place (last tile / last worker)--> ENDED
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

from .action import Action, ActionResult, ActionType
from .errors import (
    CapacityError,
    DuplicateVoteError,
    GameError,
    NotYourTurnError,
    ValidationError,
    WrongPhaseError,
)
from .move_validator import covers_outhouse, find_placement
from .placement import lookup_tile, resolve_placement
from .setup import create_player, deal
from .state import GamePhase, GameState, MAX_PLAYERS, MIN_PLAYERS, Vote, VotingTile
from .voting import tally_votes

logger = logging.getLogger(__name__)


# Which action types each phase accepts
PHASE_ACTIONS: dict[GamePhase, set[ActionType]] = {
    GamePhase.WAITING: {ActionType.JOIN, ActionType.START_GAME},
    GamePhase.PLAYING: {ActionType.PLACE_TILE},
    GamePhase.VOTING: {ActionType.SUBMIT_VOTE},
    GamePhase.ENDED: set(),
}


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        try:
            self._validate_action(state, action)
            result = handler(state, action)
        except GameError as e:
            logger.warning(
                "Game %s: rejected %s from %s: %s",
                state.game_id, action.action_type.value, action.payload.player_id, e,
            )
            return ActionResult.failure(str(e), error_code=e.code, exception=e)

        # Log action to history if successful
        result.new_state = result.new_state._copy_with(
            action_history=state.action_history + (action,)
        )
        return result

    def _validate_action(self, state: GameState, action: Action) -> None:
        """
        Validate that an action is legal in the current state.

        Raises a GameError subclass if not.
        """
        if action.action_type == ActionType.JOIN and state.phase != GamePhase.WAITING:
            raise CapacityError("Game already started", code="GAME_STARTED")

        if state.phase == GamePhase.ENDED:
            raise WrongPhaseError("Game is over - no actions allowed")

        if action.action_type in PHASE_ACTIONS[state.phase]:
            return

        if action.action_type == ActionType.PLACE_TILE:
            raise NotYourTurnError(f"Not your turn - the game is {state.phase.value}")
        raise WrongPhaseError(
            f"Cannot {action.action_type.value} while the game is {state.phase.value}"
        )

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.JOIN: self._handle_join,
            ActionType.START_GAME: self._handle_start,
            ActionType.PLACE_TILE: self._handle_place,
            ActionType.SUBMIT_VOTE: self._handle_vote,
        }
        return handlers.get(action_type)

    def _require_player(self, state: GameState, player_id: str | None):
        player = state.get_player(player_id) if player_id else None
        if player is None:
            raise ValidationError(f"Player {player_id} not found", code="UNKNOWN_PLAYER")
        return player

    def _handle_join(self, state: GameState, action: Action) -> ActionResult:
        """Seat a new player in the waiting room."""
        player_id = action.payload.player_id
        name = (action.payload.name or "").strip()

        if state.num_players >= MAX_PLAYERS:
            raise CapacityError(f"Game is full ({MAX_PLAYERS} players max)")
        if not player_id or not name:
            raise ValidationError("Player id and name are required")
        if state.get_player(player_id):
            raise ValidationError(f"Player {player_id} already joined")

        new_state = state._copy_with(
            players=state.players + (create_player(player_id, name),)
        )
        logger.info("Game %s: %s joined (%d players)", state.game_id, name, new_state.num_players)
        return ActionResult.success_with_state(new_state, changes=[f"{name} joined the game"])

    def _handle_start(self, state: GameState, action: Action) -> ActionResult:
        """Host deals the game out."""
        self._require_player(state, action.payload.player_id)
        if action.payload.player_id != state.host.player_id:
            raise ValidationError("Only the host can start the game", code="NOT_HOST")
        if state.num_players < MIN_PLAYERS:
            raise ValidationError(f"Need at least {MIN_PLAYERS} players to start")

        new_state = deal(state)
        logger.info("Game %s started with %d players", state.game_id, state.num_players)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Game started. {new_state.current_player.name} goes first"],
        )

    def _handle_place(self, state: GameState, action: Action) -> ActionResult:
        """
        Handle a tile placement.

        Placements that cover an outhouse go to a vote first; everything
        else resolves immediately.
        """
        payload = action.payload
        player = self._require_player(state, payload.player_id)
        if player.player_id != state.current_player.player_id:
            raise NotYourTurnError(f"Not {player.name}'s turn")

        tile = lookup_tile(state, player.player_id, payload.tile_id)
        placement = find_placement(tile, state.workers, state.board, payload.row, payload.col)

        if covers_outhouse(state.board, placement.cells):
            new_state = state._copy_with(
                phase=GamePhase.VOTING,
                voting_tile=VotingTile(
                    tile=tile, row=placement.row, col=placement.col, player_id=player.player_id,
                ),
                votes=(),
            )
            logger.info(
                "Game %s: %s wants to cover an outhouse, vote opened",
                state.game_id, player.name,
            )
            return ActionResult.success_with_state(
                new_state,
                changes=[f"{player.name}'s {tile.tile_id} would cover an outhouse - vote!"],
            )

        new_state = resolve_placement(state, player.player_id, tile.tile_id, payload.row, payload.col)
        changes = [f"{player.name} placed {tile.tile_id} at ({payload.row}, {payload.col})"]
        if new_state.phase == GamePhase.ENDED:
            changes.append("Game over")
        return ActionResult.success_with_state(new_state, changes=changes)

    def _handle_vote(self, state: GameState, action: Action) -> ActionResult:
        """Record a vote card; resolve the vote once everyone has voted."""
        player = self._require_player(state, action.payload.player_id)

        if state.has_voted(player.player_id):
            raise DuplicateVoteError(f"{player.name} already voted")

        card = player.get_vote_card(action.payload.card_id or "")
        if card is None:
            raise ValidationError(f"Unknown vote card {action.payload.card_id}", code="UNKNOWN_CARD")
        if card.used:
            raise ValidationError(f"{card.label} was already played", code="CARD_USED")

        new_state = state.with_player(player.with_card_used(card.card_id))
        new_state = new_state._copy_with(
            votes=state.votes + (Vote(player_id=player.player_id, card=card),)
        )
        changes = [f"{player.name} voted"]

        if len(new_state.votes) == new_state.num_players:
            new_state, outcome = self._resolve_vote(new_state)
            changes.append(outcome)

        return ActionResult.success_with_state(new_state, changes=changes)

    def _resolve_vote(self, state: GameState) -> tuple[GameState, str]:
        tally = tally_votes(state.votes)
        voting_tile = state.voting_tile
        cleared = state._copy_with(phase=GamePhase.PLAYING, voting_tile=None, votes=())

        logger.info(
            "Game %s: vote %s (%d yes / %d no)",
            state.game_id, "approved" if tally.approved else "rejected",
            tally.yes_total, tally.no_total,
        )

        if tally.approved:
            new_state = resolve_placement(
                cleared,
                voting_tile.player_id,
                voting_tile.tile.tile_id,
                voting_tile.row,
                voting_tile.col,
            )
            return new_state, f"Vote approved ({tally.yes_total} to {tally.no_total})"

        return (
            cleared.advance_player(),
            f"Vote rejected ({tally.yes_total} to {tally.no_total})",
        )


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
