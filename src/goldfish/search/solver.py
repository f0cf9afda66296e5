#!/usr/bin/env python3
"""
Deterministic win solver.

Depth-first search over the actions whose outcome does not depend on the
deck order, looking for a line that takes the opponent to zero life.

Usage:
    from goldfish.search import solve_deterministic

    plan = solve_deterministic(state, time_budget=10.0)
    if plan.is_win:
        for action in plan.actions:
            state = apply_action(state, action)

Answers:
    WIN      - ``plan.actions`` is the line, in execution order
    LOSE     - no deterministic line wins from this state
    TIMEOUT  - the time budget ran out before either was proven

Solved states are memoized in a TranspositionTable keyed by Zobrist hash, so
different move orders that reach the same state are only expanded once.
WIN and LOSE entries are proofs and can be shared between calls.
"""

from dataclasses import dataclass
from typing import Optional
import logging
import random
import time

from ..engine import GameState, apply_action, is_deterministic, legal_actions
from ..types import LOSE, TIMEOUT, Plan
from ..utils.hashing import ZobristHasher
from .transposition import TranspositionTable

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class SolverConfig:
    """
    Configuration for the deterministic solver.

    Attributes:
        time_budget: Wall-clock seconds before the search reports TIMEOUT.
        table_size: Maximum transposition entries when the solver creates
            its own table.
    """
    time_budget: float = 10.0
    table_size: int = 1_000_000


@dataclass
class SolverStats:
    """
    Counters for one solve.

    Attributes:
        expanded: States whose children were generated.
        cache_hits: Transposition lookups that returned a proof.
        cache_misses: Transposition lookups that found nothing.
        max_depth: Deepest line examined.
        duration: Seconds spent in the search.
        timed_out: Whether the deadline was reached.
    """
    expanded: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    max_depth: int = 0
    duration: float = 0.0
    timed_out: bool = False


# =============================================================================
# SOLVER
# =============================================================================

class DeterministicSolver:
    """
    Backtracking search for forced wins.

    The table is passed in by the caller (or created per solver), never
    global, so independent solvers never see each other's entries.
    """

    def __init__(
        self,
        config: Optional[SolverConfig] = None,
        table: Optional[TranspositionTable] = None,
        hasher: Optional[ZobristHasher] = None,
    ):
        self.config = config or SolverConfig()
        self.table = table if table is not None else TranspositionTable(self.config.table_size)
        self.hasher = hasher or ZobristHasher()
        self.stats = SolverStats()
        self._deadline = 0.0
        # Deterministic actions never consume randomness.
        self._rng = random.Random(0)

    def solve(self, state: GameState) -> Plan:
        """Search from ``state`` and return the plan in execution order."""
        self.stats = SolverStats()
        start = time.perf_counter()
        self._deadline = start + self.config.time_budget

        plan = self._search(state, 0)

        self.stats.duration = time.perf_counter() - start
        if plan.is_timeout:
            self.stats.timed_out = True
            logger.debug(f"Solver timed out after {self.stats.duration:.2f}s")
        logger.debug(
            f"Solver: {plan.outcome.value}, {self.stats.expanded} states expanded, "
            f"{self.stats.cache_hits} cache hits, {self.stats.cache_misses} misses"
        )
        if plan.is_win:
            return Plan.win(reversed(plan.actions))
        return plan

    def _search(self, state: GameState, depth: int) -> Plan:
        """Returns WIN plans suffix-first: the last action comes first."""
        if state.is_win():
            return Plan.win()
        if time.perf_counter() > self._deadline:
            return TIMEOUT

        if depth > self.stats.max_depth:
            self.stats.max_depth = depth

        state_hash = self.hasher.hash_state(state)
        entry = self.table.lookup(state_hash)
        if entry is not None:
            self.stats.cache_hits += 1
            return entry.plan
        self.stats.cache_misses += 1
        self.stats.expanded += 1

        for action in legal_actions(state):
            if not is_deterministic(state, action):
                continue
            child = apply_action(state, action, self._rng)
            result = self._search(child, depth + 1)
            if result.is_timeout:
                return TIMEOUT
            if result.is_win:
                plan = Plan.win(result.actions + (action,))
                self.table.store(state_hash, plan, depth)
                return plan

        self.table.store(state_hash, LOSE, depth)
        return LOSE


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def solve_deterministic(
    state: GameState,
    time_budget: float = 10.0,
    table: Optional[TranspositionTable] = None,
) -> Plan:
    """
    Convenience function for a one-off solve.

    Args:
        state: State to solve from.
        time_budget: Seconds before giving up with TIMEOUT.
        table: Optional transposition table shared with other solves.

    Returns:
        WIN with the line in execution order, LOSE, or TIMEOUT.
    """
    solver = DeterministicSolver(SolverConfig(time_budget=time_budget), table=table)
    return solver.solve(state)


def replay_plan(
    state: GameState,
    plan: Plan,
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    Apply every action of a WIN plan and return the final state.

    Raises:
        ValueError: If ``plan`` is not a WIN.
        IllegalActionError: If an action of the plan is illegal on the way.
    """
    if not plan.is_win:
        raise ValueError(f"Only winning plans can be replayed, got {plan.outcome.value}")
    for action in plan.actions:
        state = apply_action(state, action, rng)
    return state
