"""
Session Module - Shared games on top of the engine and a store.

A game is created by a host and shared by a 6-character code. Every
player action is funneled through the GameManager; other participants
follow along with a StatePoller.
"""

from .manager import (
    GameManager,
    Seat,
    generate_game_id,
    generate_player_id,
    is_valid_game_id,
)
from .poller import StatePoller

__all__ = [
    "GameManager",
    "Seat",
    "StatePoller",
    "generate_game_id",
    "generate_player_id",
    "is_valid_game_id",
]
