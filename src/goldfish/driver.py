"""
Game driver: plays one goldfish game to a win or the turn horizon.

Each step first asks the deterministic solver whether the game can be won
from here, and otherwise takes one action suggested by the Monte-Carlo
planner.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import logging
import random

from .engine import (
    GameState,
    apply_action,
    describe_action,
    is_deterministic,
    turn_is_fresh,
)
from .search.mcts import MCTS, PlannerConfig
from .search.policy import Policy
from .search.solver import DeterministicSolver, SolverConfig
from .search.transposition import TranspositionTable
from .types import Action

logger = logging.getLogger(__name__)


@dataclass
class PlayConfig:
    """
    Configuration for one game.

    Attributes:
        horizon: Last turn on which a win counts.
        solve_budget: Seconds for each solver call made by the driver.
        planner: Settings for the Monte-Carlo planner.
    """
    horizon: int = 10
    solve_budget: float = 1.0
    planner: PlannerConfig = field(default_factory=PlannerConfig)


@dataclass
class GameRecord:
    """
    Outcome of one game.

    Attributes:
        won: Whether life reached zero by the horizon.
        turn: Turn on which the game ended.
        actions: Every action taken, in order.
        final_state: State at the end of the game.
        log: Readable description of each action.
    """
    won: bool
    turn: int
    actions: List[Action]
    final_state: GameState
    log: List[str] = field(default_factory=list)


def play_game(
    state: GameState,
    policy: Policy,
    rng: Optional[random.Random] = None,
    config: Optional[PlayConfig] = None,
) -> GameRecord:
    """
    Play from ``state`` until a win or the horizon.

    The solver runs at the start of every turn and after every action
    whose outcome was random; nothing else can turn a LOSE into a WIN.
    """
    rng = rng or random.Random()
    config = config or PlayConfig()
    table = TranspositionTable()
    actions: List[Action] = []
    log: List[str] = []
    should_solve = True

    def take(action: Action) -> GameState:
        text = describe_action(state, action)
        logger.info(f"Turn {state.turn}: {text}")
        actions.append(action)
        log.append(text)
        return apply_action(state, action, rng)

    while not state.is_win():
        if should_solve:
            solver = DeterministicSolver(SolverConfig(time_budget=config.solve_budget), table=table)
            plan = solver.solve(state)
            if plan.is_win:
                logger.info(f"Turn {state.turn}: found a win in {len(plan.actions)} actions")
                for action in plan.actions:
                    state = take(action)
                break

        if state.turn >= config.horizon:
            break

        planner = MCTS(policy, config=config.planner, rng=rng, table=table)
        action = planner.best_action(state)
        should_solve = not is_deterministic(state, action)
        state = take(action)
        should_solve = should_solve or turn_is_fresh(state)

    won = state.is_win()
    if won:
        logger.info(f"Won on turn {state.turn}")
    else:
        logger.info(f"No win by turn {state.turn}")
    return GameRecord(won=won, turn=state.turn, actions=actions, final_state=state, log=log)
