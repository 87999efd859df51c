"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a game state and the legal actions and picks one.
Bots drive self-play simulations and randomized engine tests; they act
for whichever player the chosen action belongs to, so one policy can
play every seat (including every voter during an outhouse vote).
"""

from __future__ import annotations
import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..engine_core.action import Action
from ..engine_core.move_validator import legal_actions
from ..engine_core.reducer import Reducer
from ..engine_core.state import GamePhase, GameState

logger = logging.getLogger(__name__)


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The action to take
    - Explanation (for UI/debugging)
    - How many options were considered
    """
    action: Action
    explanation: str = ""
    evaluated_actions: int = 0


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects actions.
    """

    @abstractmethod
    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        """
        Select an action from the legal actions.

        Args:
            state: Current game state
            legal_actions: List of legal actions to choose from

        Returns:
            BotDecision with the selected action
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects actions uniformly at random.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        action = self.rng.choice(legal_actions)
        return BotDecision(
            action=action,
            explanation="Selected randomly",
            evaluated_actions=len(legal_actions),
        )


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always selects the first legal action.

    Used for deterministic testing.
    """

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        return BotDecision(
            action=legal_actions[0],
            explanation="Selected first legal action",
            evaluated_actions=1,
        )


@dataclass
class PlayoutResult:
    final_state: GameState
    actions_applied: int
    stalled: bool  # current player had no legal move before the game ended


def play_out(
    state: GameState,
    policy: BotPolicy,
    max_actions: int = 1000,
    reducer: Reducer | None = None,
) -> PlayoutResult:
    """
    Play a game forward with one policy acting for every seat.

    Stops when the game ends, when no legal action exists, or after
    max_actions.
    """
    reducer = reducer or Reducer()
    applied = 0

    while state.phase != GamePhase.ENDED and applied < max_actions:
        actions = legal_actions(state)
        if not actions:
            logger.info("Game %s stalled in %s at turn %d", state.game_id, state.phase.value, state.turn_number)
            return PlayoutResult(final_state=state, actions_applied=applied, stalled=True)

        decision = policy.select_action(state, actions)
        result = reducer.apply(state, decision.action)
        if not result.success:
            raise RuntimeError(f"Generated action was rejected: {result.error}")
        state = result.new_state
        applied += 1

    return PlayoutResult(final_state=state, actions_applied=applied, stalled=False)
