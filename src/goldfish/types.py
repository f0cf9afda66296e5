"""
Shared type definitions for the engine and the search code.

This module contains the fundamental value types used across submodules
to avoid circular import issues.

Types:
    Play: Play a card from hand, optionally targeting a friendly minion
    Choose: Pick one card from a pending "choose one" offer
    EndTurn: Pass the turn
    Action: Union of the three
    Plan: Result of the deterministic win solver
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Play:
    """Play the card at ``index`` in hand.

    Attributes:
        index: Position of the card in hand.
        target: Board position of the targeted minion, for cards that need one.
    """
    index: int
    target: Optional[int] = None


@dataclass(frozen=True)
class Choose:
    """Draw the offered card at ``index`` of the pending offer."""
    index: int


@dataclass(frozen=True)
class EndTurn:
    pass


Action = Union[Play, Choose, EndTurn]


class PlanOutcome(Enum):
    WIN = "win"
    LOSE = "lose"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class Plan:
    """
    Outcome of a deterministic win search.

    ``LOSE`` is a proof that no deterministic line wins; ``TIMEOUT`` means the
    time budget ran out before either a win or that proof was found.

    Attributes:
        outcome: WIN, LOSE or TIMEOUT.
        actions: For WIN, the actions to take in order. Empty otherwise.
    """
    outcome: PlanOutcome
    actions: Tuple[Action, ...] = ()

    @classmethod
    def win(cls, actions=()) -> "Plan":
        return cls(PlanOutcome.WIN, tuple(actions))

    @classmethod
    def lose(cls) -> "Plan":
        return cls(PlanOutcome.LOSE)

    @classmethod
    def timeout(cls) -> "Plan":
        return cls(PlanOutcome.TIMEOUT)

    @property
    def is_win(self) -> bool:
        return self.outcome is PlanOutcome.WIN

    @property
    def is_lose(self) -> bool:
        return self.outcome is PlanOutcome.LOSE

    @property
    def is_timeout(self) -> bool:
        return self.outcome is PlanOutcome.TIMEOUT


LOSE = Plan.lose()
TIMEOUT = Plan.timeout()


__all__ = ['Play', 'Choose', 'EndTurn', 'Action', 'PlanOutcome', 'Plan', 'LOSE', 'TIMEOUT']
