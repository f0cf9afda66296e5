#!/usr/bin/env python3
"""
Monte-Carlo planner.

Plays out random futures from a state, choosing actions with a PUCT rule
over a policy prior, and returns the action with the best mean reward.
Statistics are kept per GameState value, so playouts that reach the same
state by different routes share them.

A playout ends when:
    - the turn horizon is reached (reward 0), or
    - the state is (or has been) proven a deterministic win, with reward
      ``horizon - turn``, so faster wins score higher.

Proofs come from short solver runs at the start of each newly seen turn.

Usage:
    from goldfish.search import MCTS, MirrorPolicy

    planner = MCTS(MirrorPolicy(), rng=random.Random(7))
    action = planner.best_action(state)
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging
import math
import random
import time

from ..engine import GameState, apply_action, non_kill_actions, turn_is_fresh
from ..types import Action, Plan
from ..utils.hashing import ZobristHasher
from .policy import Policy
from .solver import DeterministicSolver, SolverConfig
from .transposition import TranspositionTable

logger = logging.getLogger(__name__)

# Keeps the exploration term non-zero on a state nobody has visited.
VISIT_EPSILON = 0.01


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class PlannerConfig:
    """
    Configuration for the Monte-Carlo planner.

    Attributes:
        horizon: Turn at which a playout gives up with reward 0.
        exploration: PUCT exploration constant C.
        playouts: Playouts per decision.
        solve_budget: Seconds for each embedded deterministic solve.
    """
    horizon: int = 10
    exploration: float = 1.0
    playouts: int = 200
    solve_budget: float = 0.1


@dataclass
class EdgeStats:
    """Statistics for one candidate action of a state."""
    prior: float
    mean_reward: float = 0.0
    visits: int = 0

    def update(self, reward: float) -> None:
        self.mean_reward = (self.mean_reward * self.visits + reward) / (self.visits + 1)
        self.visits += 1


@dataclass
class StateStats:
    """
    Everything the planner has learned about one state.

    Attributes:
        actions: Candidate actions, in enumeration order.
        edges: One EdgeStats per candidate.
        proven_win: A deterministic win was found; nothing else is tracked.
        plan: The winning plan when ``proven_win`` is set.
    """
    actions: List[Action] = field(default_factory=list)
    edges: List[EdgeStats] = field(default_factory=list)
    proven_win: bool = False
    plan: Optional[Plan] = None

    @property
    def total_visits(self) -> int:
        return sum(edge.visits for edge in self.edges)

    @classmethod
    def proven(cls, plan: Plan) -> "StateStats":
        return cls(proven_win=True, plan=plan)


# =============================================================================
# PLANNER
# =============================================================================

class MCTS:
    """
    Monte-Carlo planner with a transposition-shared statistics map.

    The map lives as long as the planner, so reusing one planner across
    decisions keeps what earlier decisions learned.

    Attributes:
        policy: Prior over candidate actions.
        config: PlannerConfig.
        stats: Map from state to StateStats.
        table: Transposition table shared by the embedded solves.
        hasher: Zobrist hasher shared by the embedded solves.
    """

    def __init__(
        self,
        policy: Policy,
        config: Optional[PlannerConfig] = None,
        rng: Optional[random.Random] = None,
        table: Optional[TranspositionTable] = None,
    ):
        self.policy = policy
        self.config = config or PlannerConfig()
        self.rng = rng or random.Random()
        self.table = table if table is not None else TranspositionTable()
        self.hasher = ZobristHasher()
        self.stats: Dict[GameState, StateStats] = {}
        self.solves = 0
        self.proofs = 0

    def terminal_reward(self, state: GameState) -> float:
        return float(max(0, self.config.horizon - state.turn))

    def _try_solve(self, state: GameState) -> Optional[Plan]:
        self.solves += 1
        solver = DeterministicSolver(
            SolverConfig(time_budget=self.config.solve_budget),
            table=self.table,
            hasher=self.hasher,
        )
        plan = solver.solve(state)
        if plan.is_win:
            self.proofs += 1
            return plan
        return None

    def _expand(self, state: GameState) -> StateStats:
        actions = non_kill_actions(state)
        priors = self.policy.priors(state, actions)
        node = StateStats(actions=actions, edges=[EdgeStats(prior=p) for p in priors])
        self.stats[state] = node
        return node

    def _select(self, node: StateStats) -> int:
        """
        Index of the edge maximizing the PUCT score.

        score(a) = mean(a) + C * sqrt(0.01 + N) * prior(a) / (1 + n(a))
        """
        sqrt_total = math.sqrt(VISIT_EPSILON + node.total_visits)
        best_score = float('-inf')
        best_index = 0
        for i, edge in enumerate(node.edges):
            exploration = self.config.exploration * sqrt_total * edge.prior / (1 + edge.visits)
            score = edge.mean_reward + exploration
            if score > best_score:
                best_score = score
                best_index = i
        return best_index

    def playout(self, state: GameState) -> float:
        """Run one playout from ``state`` and return its reward."""
        if state.turn >= self.config.horizon:
            return 0.0
        if state.is_win():
            return self.terminal_reward(state)

        node = self.stats.get(state)
        if node is None:
            if turn_is_fresh(state):
                plan = self._try_solve(state)
                if plan is not None:
                    self.stats[state] = StateStats.proven(plan)
                    return self.terminal_reward(state)
            node = self._expand(state)

        if node.proven_win:
            return self.terminal_reward(state)

        index = self._select(node)
        child = apply_action(state, node.actions[index], self.rng)
        reward = self.playout(child)
        node.edges[index].update(reward)
        return reward

    def best_action(self, state: GameState, playouts: Optional[int] = None) -> Action:
        """
        Run the playout budget from ``state`` and pick an action.

        Returns the candidate with the highest mean reward. A proven win at
        the root returns the first action of the win.
        """
        playouts = self.config.playouts if playouts is None else playouts
        start = time.perf_counter()
        for _ in range(playouts):
            self.playout(state)

        node = self.stats.get(state)
        if node is None:
            return non_kill_actions(state)[0]
        if node.proven_win:
            if node.plan is not None and node.plan.actions:
                return node.plan.actions[0]
            return non_kill_actions(state)[0]

        best_index = 0
        for i, edge in enumerate(node.edges):
            if edge.mean_reward > node.edges[best_index].mean_reward:
                best_index = i

        logger.debug(
            f"MCTS: {playouts} playouts in {time.perf_counter() - start:.2f}s, "
            f"{len(self.stats)} states, {self.proofs}/{self.solves} solves won"
        )
        for action, edge in zip(node.actions, node.edges):
            logger.debug(
                f"  {action}: prior={edge.prior:.2f} mean={edge.mean_reward:.3f} visits={edge.visits}"
            )
        return node.actions[best_index]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def mcts_best_action(
    state: GameState,
    policy: Policy,
    playouts: int = 200,
    rng: Optional[random.Random] = None,
    config: Optional[PlannerConfig] = None,
) -> Action:
    """
    Convenience function for a single decision with a fresh planner.

    Args:
        state: State to decide for.
        policy: Prior over candidate actions.
        playouts: Playout budget.
        rng: Random source for card draws during playouts.
        config: Planner settings (``playouts`` overrides its budget).

    Returns:
        A legal action for ``state``.
    """
    planner = MCTS(policy, config=config, rng=rng)
    return planner.best_action(state, playouts=playouts)
