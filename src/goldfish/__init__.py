"""
Goldfish: lethal search and turn planning for Pillager Rogue.

Models our side of the game against a passive opponent ("goldfish") and
searches for the fastest kill.

Submodules:
    cards   - Closed card catalog and stock decklists
    engine  - Immutable game state and transition rules
    search  - Deterministic win solver, Monte-Carlo planner, evaluation
    utils   - Zobrist hashing

Usage:
    from goldfish import GameState, solve_deterministic
    from goldfish.cards import Card

    state = GameState.from_snapshot({"mana": 4, "life": 30, "hand": [...]})
    plan = solve_deterministic(state, time_budget=10.0)
"""

from .cards import Card, STARTING_DECK, PILLAGER_DECK
from .errors import GoldfishError, IllegalActionError
from .types import Action, Choose, EndTurn, Play, Plan, PlanOutcome
from .engine import (
    CardInstance,
    GameState,
    apply_action,
    legal_actions,
    new_going_first,
    new_going_random,
    new_going_second,
)
from .search import (
    MCTS,
    MirrorPolicy,
    PlannerConfig,
    TranspositionTable,
    UniformPolicy,
    mcts_best_action,
    replay_plan,
    solve_deterministic,
)

__version__ = "0.1.0"

__all__ = [
    'Card',
    'STARTING_DECK',
    'PILLAGER_DECK',
    'GoldfishError',
    'IllegalActionError',
    'Action',
    'Choose',
    'EndTurn',
    'Play',
    'Plan',
    'PlanOutcome',
    'CardInstance',
    'GameState',
    'apply_action',
    'legal_actions',
    'new_going_first',
    'new_going_random',
    'new_going_second',
    'MCTS',
    'MirrorPolicy',
    'PlannerConfig',
    'TranspositionTable',
    'UniformPolicy',
    'mcts_best_action',
    'replay_plan',
    'solve_deterministic',
]
