"""
Storage Module - Persists game aggregates between actions.

The engine itself never touches storage. The session layer loads a
game, runs the reducer and saves the result; other participants poll
the store and adopt a state only if its last_update moved forward.
"""

from .base import GameStore
from .codec import state_from_dict, state_to_dict
from .file import FileGameStore
from .memory import InMemoryGameStore

__all__ = [
    "GameStore",
    "FileGameStore",
    "InMemoryGameStore",
    "state_from_dict",
    "state_to_dict",
]
