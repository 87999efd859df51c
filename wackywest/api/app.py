"""
FastAPI Application - REST API for game clients.

Endpoints:
    POST   /api/v1/games                       Create a game (host seated)
    GET    /api/v1/games                       List stored game codes
    GET    /api/v1/games/{id}                  Get game state (poll)
    POST   /api/v1/games/{id}/players          Join a game
    POST   /api/v1/games/{id}/start            Host starts the game
    GET    /api/v1/games/{id}/moves            Legal placements for a tile
    POST   /api/v1/games/{id}/placements       Place a tile
    POST   /api/v1/games/{id}/votes            Submit a vote card
    GET    /api/v1/games/{id}/scores           Final ranking

Polling:
    Clients poll GET /api/v1/games/{id}?since=<last_update>. The server
    answers 304 when nothing newer exists, so a client never steps back
    to an older state.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional
import logging
import os

from ..engine_core.errors import (
    CapacityError,
    DuplicateVoteError,
    GameError,
    GameNotFoundError,
    NotYourTurnError,
    StoreError,
    WrongPhaseError,
)

# Environment configuration
WACKYWEST_ENV = os.getenv("WACKYWEST_ENV", "development")
WACKYWEST_STORE_DIR = os.getenv("WACKYWEST_STORE_DIR", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


# GameError subclass -> HTTP status; first match wins
ERROR_STATUS: list[tuple[type, int]] = [
    (GameNotFoundError, 404),
    (NotYourTurnError, 403),
    (DuplicateVoteError, 409),
    (CapacityError, 409),
    (WrongPhaseError, 409),
    (StoreError, 500),
    (GameError, 400),
]


def status_for(error: GameError) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 400


def create_store():
    """File store when WACKYWEST_STORE_DIR is set, memory otherwise."""
    from ..storage import FileGameStore, InMemoryGameStore

    if WACKYWEST_STORE_DIR:
        return FileGameStore(store_dir=WACKYWEST_STORE_DIR)
    return InMemoryGameStore()


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional GameService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI, Query, Request, Response
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse

    from ..session import GameManager
    from .service import GameService
    from .schemas import (
        ActionResponse,
        CreateGameRequest,
        ErrorCode,
        ErrorResponse,
        GameListResponse,
        GameStateResponse,
        HealthResponse,
        JoinGameRequest,
        MovesResponse,
        PlaceTileRequest,
        ScoresResponse,
        SeatResponse,
        StartGameRequest,
        VoteRequest,
    )

    app = FastAPI(
        title="Wacky Wacky West API",
        description="""
Rule engine for a 2-4 player tile placement game.

## Turn Flow

1. Host creates a game and shares the 6-character code
2. Players join, the host starts the game
3. On your turn, `GET /moves` for a tile, then `POST /placements`
4. A placement over an outhouse opens a vote: every player `POST /votes`
5. When all hands are empty or every worker is boxed in, `GET /scores`

## Error Codes

| Code | Description |
|------|-------------|
| `NOT_YOUR_TURN` | Placement by someone other than the current player |
| `WRONG_PHASE` | Action not accepted in the current phase |
| `DUPLICATE_VOTE` | You already voted on this placement |
| `GAME_FULL` | Four players already seated |
| `GAME_NOT_FOUND` | Game code does not exist |
        """,
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Service instance
    api_service = service or GameService(manager=GameManager(store=create_store()))
    app.state.service = api_service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(GameError)
    async def game_error_handler(request: Request, exc: GameError) -> JSONResponse:
        try:
            code = ErrorCode(exc.code)
        except ValueError:
            code = ErrorCode.GAME_ERROR
        status = status_for(exc)
        if status >= 500:
            logger.error("Request %s failed: %s", request.url.path, exc)
        return make_error_response(code, str(exc), status_code=status)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=SeatResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Create a new game",
    )
    async def create_game(body: CreateGameRequest) -> SeatResponse:
        """Create a game and seat the caller as host."""
        return api_service.create_game(body)

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List games",
    )
    async def list_games() -> GameListResponse:
        return api_service.list_games()

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameStateResponse,
        responses={
            304: {"description": "No state newer than `since`"},
            404: {"model": ErrorResponse},
        },
        tags=["Games"],
        summary="Get game state",
    )
    async def get_game(
        game_id: str,
        since: Annotated[Optional[int], Query(description="Last known last_update")] = None,
    ):
        """Full game state. With `since`, returns 304 unless something changed."""
        response = api_service.get_game(game_id)
        if since is not None and response.last_update <= since:
            return Response(status_code=304)
        return response

    @app.post(
        "/api/v1/games/{game_id}/players",
        response_model=SeatResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Join a game",
    )
    async def join_game(game_id: str, body: JoinGameRequest) -> SeatResponse:
        return api_service.join_game(game_id, body)

    @app.post(
        "/api/v1/games/{game_id}/start",
        response_model=ActionResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Start the game (host only)",
    )
    async def start_game(game_id: str, body: StartGameRequest) -> ActionResponse:
        return api_service.start_game(game_id, body)

    # =========================================================================
    # Turn Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/games/{game_id}/moves",
        response_model=MovesResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Turns"],
        summary="Legal placements for a tile",
    )
    async def get_moves(
        game_id: str,
        player_id: Annotated[str, Query(description="Your player id")],
        tile_id: Annotated[str, Query(description="Tile from your hand")],
    ) -> MovesResponse:
        return api_service.get_moves(game_id, player_id, tile_id)

    @app.post(
        "/api/v1/games/{game_id}/placements",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Illegal placement"},
            403: {"model": ErrorResponse, "description": "Not your turn"},
            404: {"model": ErrorResponse},
        },
        tags=["Turns"],
        summary="Place a tile",
    )
    async def place_tile(game_id: str, body: PlaceTileRequest) -> ActionResponse:
        """
        Place a tile next to its worker.

        If the tile would cover an outhouse the game switches to voting
        instead and the tile stays in hand until the vote is decided.
        """
        return api_service.place_tile(game_id, body)

    @app.post(
        "/api/v1/games/{game_id}/votes",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Already voted"},
        },
        tags=["Turns"],
        summary="Submit a vote card",
    )
    async def submit_vote(game_id: str, body: VoteRequest) -> ActionResponse:
        return api_service.submit_vote(game_id, body)

    @app.get(
        "/api/v1/games/{game_id}/scores",
        response_model=ScoresResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Turns"],
        summary="Final ranking",
    )
    async def get_scores(game_id: str) -> ScoresResponse:
        return api_service.get_scores(game_id)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="wackywest-engine",
            version=API_VERSION,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Wacky Wacky West API",
            "version": API_VERSION,
            "env": WACKYWEST_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
