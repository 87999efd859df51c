"""
Game Errors - Exception taxonomy for rejected actions.

Every error here is recoverable: the action that raised it is rejected
and the game state is left exactly as it was. The reducer turns these
into failed ActionResults; the session layer re-raises them so the API
can map them to status codes.
"""

from __future__ import annotations


class GameError(Exception):
    """Base class for all rule violations."""

    code = "GAME_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class ValidationError(GameError):
    """Illegal move: wrong phase, not adjacent, tile not in hand, etc."""

    code = "INVALID_ACTION"


class NotYourTurnError(ValidationError):
    code = "NOT_YOUR_TURN"


class WrongPhaseError(ValidationError):
    code = "WRONG_PHASE"


class DuplicateVoteError(GameError):
    """A player tried to vote twice in the same voting episode."""

    code = "DUPLICATE_VOTE"


class CapacityError(GameError):
    """Game is full or already started."""

    code = "GAME_FULL"


class GameNotFoundError(GameError):
    code = "GAME_NOT_FOUND"


class OutOfBoundsError(GameError):
    code = "OUT_OF_BOUNDS"


class StoreError(GameError):
    """Persistence failed (I/O or corrupt data)."""

    code = "STORE_ERROR"
