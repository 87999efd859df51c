"""
Scoring - Final ranking once the game has ended.

A player scores the value of every building of their secret type that
is still uncovered. Covered buildings score for nobody. Players are
ranked by score, highest first; equal scores keep seat order.
"""

from __future__ import annotations
from dataclasses import dataclass

from .board import BuildingType
from .errors import WrongPhaseError
from .state import GamePhase, GameState


@dataclass(frozen=True)
class PlayerScore:
    player_id: str
    name: str
    secret_building: BuildingType | None
    score: int


def building_score(state: GameState, building_type: BuildingType | None) -> int:
    if building_type is None:
        return 0
    return sum(
        building.value
        for _, _, building in state.board.buildings()
        if building.building_type == building_type
    )


def score_players(state: GameState) -> list[PlayerScore]:
    """Ranked scores. Only available after the game has ended."""
    if state.phase != GamePhase.ENDED:
        raise WrongPhaseError("Scores are only available once the game has ended")

    scores = [
        PlayerScore(
            player_id=p.player_id,
            name=p.name,
            secret_building=p.secret_building,
            score=building_score(state, p.secret_building),
        )
        for p in state.players
    ]
    # sorted() is stable: ties stay in seat order
    return sorted(scores, key=lambda s: s.score, reverse=True)


def winners(scores: list[PlayerScore]) -> list[PlayerScore]:
    """Everyone tied for the top score."""
    if not scores:
        return []
    best = scores[0].score
    return [s for s in scores if s.score == best]
