"""
Action System - Actions, payloads, and results.

Actions represent everything a player can do to a game:
1. Lobby actions (join, start)
2. Turn actions (place a tile)
3. Vote actions (submit a vote card while a placement is on hold)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    JOIN = "join"
    START_GAME = "start_game"
    PLACE_TILE = "place_tile"
    SUBMIT_VOTE = "submit_vote"


@dataclass(frozen=True)
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    Validation happens in the reducer.
    """
    player_id: str | None = None

    # JOIN
    name: str | None = None

    # PLACE_TILE
    tile_id: str | None = None
    row: int | None = None
    col: int | None = None

    # SUBMIT_VOTE
    card_id: str | None = None


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload
    timestamp: float | None = None

    @classmethod
    def join(cls, player_id: str, name: str) -> Action:
        """Factory for join action."""
        return cls(
            action_type=ActionType.JOIN,
            payload=ActionPayload(player_id=player_id, name=name),
        )

    @classmethod
    def start(cls, player_id: str) -> Action:
        """Factory for start action."""
        return cls(
            action_type=ActionType.START_GAME,
            payload=ActionPayload(player_id=player_id),
        )

    @classmethod
    def place(cls, player_id: str, tile_id: str, row: int, col: int) -> Action:
        """Factory for tile placement."""
        return cls(
            action_type=ActionType.PLACE_TILE,
            payload=ActionPayload(player_id=player_id, tile_id=tile_id, row=row, col=col),
        )

    @classmethod
    def vote(cls, player_id: str, card_id: str) -> Action:
        """Factory for vote submission."""
        return cls(
            action_type=ActionType.SUBMIT_VOTE,
            payload=ActionPayload(player_id=player_id, card_id=card_id),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Error message and code (if failed)
    - Human-readable changes (for logs and UI)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None
    exception: Exception | None = None

    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        exception: Exception | None = None,
    ) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code, exception=exception)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
        )
