"""
Bots module - Automated players.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy / FirstLegalPolicy: baseline policies
- play_out: drive a game to the end with a policy
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy, PlayoutResult, play_out

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "PlayoutResult",
    "play_out",
]
