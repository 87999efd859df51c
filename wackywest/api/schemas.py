"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between game clients and the engine.
Every participant sees the full state (including other players' secret
buildings); hiding them is left to client discipline.

Error Codes:
- INVALID_ACTION / NOT_ADJACENT / NO_LEGAL_PLACEMENT / ...: illegal move
- NOT_YOUR_TURN: placement by someone other than the current player
- WRONG_PHASE: action not accepted in the current phase
- DUPLICATE_VOTE: player already voted in this vote
- GAME_FULL / GAME_STARTED: cannot join
- GAME_NOT_FOUND: unknown game code
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class GamePhase(str, Enum):
    """Game phase values."""
    WAITING = "waiting"
    PLAYING = "playing"
    VOTING = "voting"
    ENDED = "ended"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_ACTION = "INVALID_ACTION"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    WRONG_PHASE = "WRONG_PHASE"
    NOT_HOST = "NOT_HOST"
    UNKNOWN_PLAYER = "UNKNOWN_PLAYER"
    TILE_NOT_IN_HAND = "TILE_NOT_IN_HAND"
    NO_ACTIVE_WORKER = "NO_ACTIVE_WORKER"
    NOT_ADJACENT = "NOT_ADJACENT"
    NO_LEGAL_PLACEMENT = "NO_LEGAL_PLACEMENT"
    UNKNOWN_CARD = "UNKNOWN_CARD"
    CARD_USED = "CARD_USED"
    DUPLICATE_VOTE = "DUPLICATE_VOTE"
    GAME_FULL = "GAME_FULL"
    GAME_STARTED = "GAME_STARTED"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    STORE_ERROR = "STORE_ERROR"
    GAME_ERROR = "GAME_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class TileInfo(BaseModel):
    tile_id: str
    family: str
    length: int


class VoteCardInfo(BaseModel):
    card_id: str
    kind: str = Field(description="yes, no, joker, question")
    weight: int
    label: str
    used: bool = False


class CellInfo(BaseModel):
    """A non-empty board square."""
    type: str = Field(description="building, outhouse, tile")
    building_type: Optional[str] = None
    value: Optional[int] = None
    family: Optional[str] = None


class WorkerInfo(BaseModel):
    worker_id: str
    family: str
    row: int
    col: int
    active: bool


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    secret_building: Optional[str] = None
    hand: list[TileInfo] = Field(default_factory=list)
    vote_cards: list[VoteCardInfo] = Field(default_factory=list)
    ready: bool = False
    is_current_turn: bool = False
    has_voted: bool = False


class VotingTileInfo(BaseModel):
    tile: TileInfo
    row: int
    col: int
    player_id: str


class VoteInfo(BaseModel):
    player_id: str
    card: VoteCardInfo


class PlacementInfo(BaseModel):
    """A legal anchor cell and the run the tile would cover."""
    row: int
    col: int
    direction: str
    cells: list[tuple[int, int]]
    covers_outhouse: bool = False


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """POST /api/v1/games"""
    name: str = Field(min_length=1, max_length=20)
    random_seed: Optional[int] = None


class JoinGameRequest(BaseModel):
    """POST /api/v1/games/{game_id}/players"""
    name: str = Field(min_length=1, max_length=20)


class StartGameRequest(BaseModel):
    """POST /api/v1/games/{game_id}/start"""
    player_id: str


class PlaceTileRequest(BaseModel):
    """POST /api/v1/games/{game_id}/placements"""
    player_id: str
    tile_id: str
    row: int
    col: int


class VoteRequest(BaseModel):
    """POST /api/v1/games/{game_id}/votes"""
    player_id: str
    card_id: str


# =============================================================================
# Response Models
# =============================================================================

class GameStateResponse(BaseModel):
    """Complete game state. Clients poll and keep the highest last_update."""
    game_id: str
    phase: GamePhase
    turn_number: int
    current_player_id: Optional[str] = None
    players: list[PlayerInfo]
    board: list[list[Optional[CellInfo]]]
    workers: list[WorkerInfo]
    voting_tile: Optional[VotingTileInfo] = None
    votes: list[VoteInfo] = Field(default_factory=list)
    last_update: int


class SeatResponse(BaseModel):
    """Returned on create/join: keep player_id, it identifies you."""
    game_id: str
    player_id: str
    game: GameStateResponse


class ActionResponse(BaseModel):
    success: bool = True
    changes: list[str] = Field(default_factory=list)
    game: GameStateResponse


class MovesResponse(BaseModel):
    tile_id: str
    placements: list[PlacementInfo]


class ScoreInfo(BaseModel):
    player_id: str
    name: str
    secret_building: Optional[str] = None
    score: int


class ScoresResponse(BaseModel):
    scores: list[ScoreInfo]
    winners: list[str]


class GameListResponse(BaseModel):
    games: list[str]
    count: int


class ErrorResponse(BaseModel):
    """Standard error body."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
