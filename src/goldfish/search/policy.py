"""
Prior policies for the Monte-Carlo planner.

A policy maps a state and its candidate actions to one probability per
candidate, in the same order.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
import random

from ..bots import escape_bot_action
from ..engine import GameState
from ..types import Action

MIRROR_WEIGHT = 0.6


class Policy(ABC):
    """
    Abstract base class for prior policies.

    Attributes:
        name: Display name used in logs and on the command line.
    """

    name = "policy"

    @abstractmethod
    def priors(self, state: GameState, candidates: List[Action]) -> List[float]:
        """
        Return a probability distribution over ``candidates``.

        Args:
            state: Current game state (read-only)
            candidates: Non-empty list of candidate actions

        Returns:
            One non-negative weight per candidate, summing to 1.
        """

    def __call__(self, state: GameState, candidates: List[Action]) -> List[float]:
        return self.priors(state, candidates)

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class UniformPolicy(Policy):
    """Equal prior over all candidates."""

    name = "uniform"

    def priors(self, state: GameState, candidates: List[Action]) -> List[float]:
        if not candidates:
            return []
        p = 1.0 / len(candidates)
        return [p] * len(candidates)


class MirrorPolicy(Policy):
    """
    Puts most of the mass on the escape bot's choice.

    The bot's action gets ``weight`` and the rest is split evenly over the
    other candidates. If the bot picks something outside the candidate set
    this is the uniform policy.
    """

    name = "mirror"

    def __init__(self, weight: float = MIRROR_WEIGHT, rng: Optional[random.Random] = None):
        self.weight = weight
        self.rng = rng or random.Random()

    def priors(self, state: GameState, candidates: List[Action]) -> List[float]:
        if len(candidates) <= 1:
            return [1.0] * len(candidates)
        choice = escape_bot_action(state, self.rng)
        if choice not in candidates:
            return UniformPolicy().priors(state, candidates)
        rest = (1.0 - self.weight) / (len(candidates) - 1)
        return [self.weight if action == choice else rest for action in candidates]

    def __repr__(self):
        return f"MirrorPolicy(weight={self.weight})"


POLICIES = {
    UniformPolicy.name: UniformPolicy,
    MirrorPolicy.name: MirrorPolicy,
}


def make_policy(name: str, rng: Optional[random.Random] = None) -> Policy:
    """
    Build a policy by its command-line name.

    Raises:
        ValueError: If ``name`` is not a known policy.
    """
    if name == MirrorPolicy.name:
        return MirrorPolicy(rng=rng)
    if name == UniformPolicy.name:
        return UniformPolicy()
    raise ValueError(f"Unknown policy: {name!r} (expected one of {sorted(POLICIES)})")
