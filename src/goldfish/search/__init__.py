"""
Search algorithms for finding and playing towards wins.

This module provides:
- Deterministic win solver (solver.py)
- Transposition table for memoization (transposition.py)
- Prior policies (policy.py)
- Monte-Carlo planner (mcts.py)
- Parallel evaluation across many games (parallel.py)
"""

from .transposition import (
    TranspositionEntry,
    TranspositionTable,
)

from .solver import (
    SolverConfig,
    SolverStats,
    DeterministicSolver,
    solve_deterministic,
    replay_plan,
)

from .policy import (
    Policy,
    UniformPolicy,
    MirrorPolicy,
    make_policy,
)

from .mcts import (
    PlannerConfig,
    EdgeStats,
    StateStats,
    MCTS,
    mcts_best_action,
)

__all__ = [
    # Transposition
    'TranspositionEntry',
    'TranspositionTable',
    # Solver
    'SolverConfig',
    'SolverStats',
    'DeterministicSolver',
    'solve_deterministic',
    'replay_plan',
    # Policy
    'Policy',
    'UniformPolicy',
    'MirrorPolicy',
    'make_policy',
    # MCTS
    'PlannerConfig',
    'EdgeStats',
    'StateStats',
    'MCTS',
    'mcts_best_action',
]
