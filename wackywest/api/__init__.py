"""
API Module - HTTP interface for game clients.

Exposes the engine via REST API. Clients:
1. Create or join a game by code
2. Poll the game state
3. Place tiles and vote on outhouses
4. Read the final scores

All game logic lives in engine_core; this layer only translates.
"""

from .service import GameService
from .app import create_app

__all__ = [
    "GameService",
    "create_app",
]
