"""
Game state and transition rules.

This module provides:
- Immutable game states and their initializers (state.py)
- Legal action enumeration and the transition function (actions.py)
"""

from .state import (
    BOARD_LIMIT,
    HAND_LIMIT,
    MAX_MANA,
    STARTING_LIFE,
    CardInstance,
    GameState,
    StateBuilder,
    new_going_first,
    new_going_random,
    new_going_second,
    turn_is_fresh,
)
from .actions import (
    apply_action,
    can_play,
    card_cost,
    describe_action,
    is_deterministic,
    legal_actions,
    non_kill_actions,
    plays,
)

__all__ = [
    'BOARD_LIMIT',
    'HAND_LIMIT',
    'MAX_MANA',
    'STARTING_LIFE',
    'CardInstance',
    'GameState',
    'StateBuilder',
    'new_going_first',
    'new_going_random',
    'new_going_second',
    'turn_is_fresh',
    'apply_action',
    'can_play',
    'card_cost',
    'describe_action',
    'is_deterministic',
    'legal_actions',
    'non_kill_actions',
    'plays',
]
