"""
Engine Core - Deterministic game state management and move resolution.

The engine is the runtime that:
1. Creates a GameState for a new game
2. Generates legal placements and actions
3. Applies actions via the reducer
4. Runs the outhouse vote
5. Scores the finished game
"""

from .board import Board, Building, BuildingType, Direction, Outhouse, PlacedTile, TileFamily
from .state import GamePhase, GameState, PlayerState, Tile, Vote, VoteCard, VoteCardKind, VotingTile, Worker
from .action import Action, ActionType, ActionPayload, ActionResult
from .errors import (
    GameError,
    ValidationError,
    NotYourTurnError,
    WrongPhaseError,
    DuplicateVoteError,
    CapacityError,
    GameNotFoundError,
    OutOfBoundsError,
    StoreError,
)
from .move_validator import ActionGenerator, Placement, legal_actions, legal_placements
from .reducer import Reducer, apply_action
from .scoring import PlayerScore, score_players, winners
from .setup import new_game
from .voting import VoteTally, tally_votes

__all__ = [
    "Board",
    "Building",
    "BuildingType",
    "Direction",
    "Outhouse",
    "PlacedTile",
    "TileFamily",
    "GamePhase",
    "GameState",
    "PlayerState",
    "Tile",
    "Vote",
    "VoteCard",
    "VoteCardKind",
    "VotingTile",
    "Worker",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "GameError",
    "ValidationError",
    "NotYourTurnError",
    "WrongPhaseError",
    "DuplicateVoteError",
    "CapacityError",
    "GameNotFoundError",
    "OutOfBoundsError",
    "StoreError",
    "ActionGenerator",
    "Placement",
    "legal_actions",
    "legal_placements",
    "Reducer",
    "apply_action",
    "PlayerScore",
    "score_players",
    "winners",
    "new_game",
    "VoteTally",
    "tally_votes",
]
