"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to GameManager calls
2. Formats engine state as response schemas

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Rejected actions propagate as GameError; the web layer maps them.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..engine_core.action import Action, ActionResult
from ..engine_core.board import Building, Outhouse
from ..engine_core.move_validator import covers_outhouse
from ..engine_core.scoring import winners
from ..engine_core.state import GameState, PlayerState, Tile, VoteCard
from ..session import GameManager, Seat
from .schemas import (
    ActionResponse,
    CellInfo,
    CreateGameRequest,
    GameListResponse,
    GameStateResponse,
    JoinGameRequest,
    MovesResponse,
    PlaceTileRequest,
    PlacementInfo,
    PlayerInfo,
    ScoreInfo,
    ScoresResponse,
    SeatResponse,
    StartGameRequest,
    TileInfo,
    VoteCardInfo,
    VoteInfo,
    VoteRequest,
    VotingTileInfo,
    WorkerInfo,
)


@dataclass
class GameService:
    """
    Main API service.

    Usage:
        service = GameService()

        seat = service.create_game(CreateGameRequest(name="Sheriff"))
        service.join_game(seat.game_id, JoinGameRequest(name="Outlaw"))
        service.start_game(seat.game_id, StartGameRequest(player_id=seat.player_id))
    """
    manager: GameManager = field(default_factory=GameManager)

    def create_game(self, request: CreateGameRequest) -> SeatResponse:
        seat = self.manager.create_game(request.name, random_seed=request.random_seed)
        return self._seat_to_response(seat)

    def join_game(self, game_id: str, request: JoinGameRequest) -> SeatResponse:
        seat = self.manager.join_game(game_id, request.name)
        return self._seat_to_response(seat)

    def start_game(self, game_id: str, request: StartGameRequest) -> ActionResponse:
        return self._apply(game_id, Action.start(request.player_id))

    def place_tile(self, game_id: str, request: PlaceTileRequest) -> ActionResponse:
        return self._apply(
            game_id,
            Action.place(request.player_id, request.tile_id, request.row, request.col),
        )

    def submit_vote(self, game_id: str, request: VoteRequest) -> ActionResponse:
        return self._apply(game_id, Action.vote(request.player_id, request.card_id))

    def get_game(self, game_id: str) -> GameStateResponse:
        return self._state_to_response(self.manager.get_state(game_id))

    def get_moves(self, game_id: str, player_id: str, tile_id: str) -> MovesResponse:
        """Legal placements for one tile in the player's hand."""
        state = self.manager.get_state(game_id)
        placements = self.manager.legal_placements(game_id, player_id, tile_id)
        return MovesResponse(
            tile_id=tile_id,
            placements=[
                PlacementInfo(
                    row=p.row,
                    col=p.col,
                    direction=p.direction.name.lower(),
                    cells=list(p.cells),
                    covers_outhouse=covers_outhouse(state.board, p.cells),
                )
                for p in placements
            ],
        )

    def get_scores(self, game_id: str) -> ScoresResponse:
        scores = self.manager.final_scores(game_id)
        return ScoresResponse(
            scores=[
                ScoreInfo(
                    player_id=s.player_id,
                    name=s.name,
                    secret_building=s.secret_building.value if s.secret_building else None,
                    score=s.score,
                )
                for s in scores
            ],
            winners=[s.player_id for s in winners(scores)],
        )

    def list_games(self) -> GameListResponse:
        games = self.manager.list_games()
        return GameListResponse(games=games, count=len(games))

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _apply(self, game_id: str, action: Action) -> ActionResponse:
        result: ActionResult = self.manager.apply_result(game_id, action)
        return ActionResponse(
            success=True,
            changes=result.state_changes,
            game=self._state_to_response(result.new_state),
        )

    def _seat_to_response(self, seat: Seat) -> SeatResponse:
        return SeatResponse(
            game_id=seat.game_id,
            player_id=seat.player_id,
            game=self._state_to_response(seat.state),
        )

    def _state_to_response(self, state: GameState) -> GameStateResponse:
        """Build complete game state response."""
        current_id = state.current_player.player_id if state.players else None
        voting_tile = None
        if state.voting_tile:
            voting_tile = VotingTileInfo(
                tile=_tile_info(state.voting_tile.tile),
                row=state.voting_tile.row,
                col=state.voting_tile.col,
                player_id=state.voting_tile.player_id,
            )

        return GameStateResponse(
            game_id=state.game_id,
            phase=state.phase.value,
            turn_number=state.turn_number,
            current_player_id=current_id,
            players=[self._player_info(state, p, current_id) for p in state.players],
            board=[[_cell_info(cell) for cell in row] for row in state.board.grid],
            workers=[
                WorkerInfo(
                    worker_id=w.worker_id,
                    family=w.family.value,
                    row=w.position[0],
                    col=w.position[1],
                    active=w.active,
                )
                for w in state.workers
            ],
            voting_tile=voting_tile,
            votes=[VoteInfo(player_id=v.player_id, card=_card_info(v.card)) for v in state.votes],
            last_update=state.last_update,
        )

    def _player_info(self, state: GameState, player: PlayerState, current_id: str | None) -> PlayerInfo:
        return PlayerInfo(
            player_id=player.player_id,
            name=player.name,
            secret_building=player.secret_building.value if player.secret_building else None,
            hand=[_tile_info(t) for t in player.hand],
            vote_cards=[_card_info(c) for c in player.vote_cards],
            ready=player.ready,
            is_current_turn=player.player_id == current_id,
            has_voted=state.has_voted(player.player_id),
        )


def _tile_info(tile: Tile) -> TileInfo:
    return TileInfo(tile_id=tile.tile_id, family=tile.family.value, length=tile.length)


def _card_info(card: VoteCard) -> VoteCardInfo:
    return VoteCardInfo(
        card_id=card.card_id,
        kind=card.kind.value,
        weight=card.weight,
        label=card.label,
        used=card.used,
    )


def _cell_info(cell) -> CellInfo | None:
    if cell is None:
        return None
    if isinstance(cell, Building):
        return CellInfo(type="building", building_type=cell.building_type.value, value=cell.value)
    if isinstance(cell, Outhouse):
        return CellInfo(type="outhouse")
    return CellInfo(type="tile", family=cell.family.value)
