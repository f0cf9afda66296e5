#!/usr/bin/env python3
"""
Parallel evaluation: play many independent games and histogram win turns.

Distributes games across multiple processes. Game ``i`` is seeded with
``seed + i``, so a run is reproducible regardless of the worker count.

Usage:
    from goldfish.search.parallel import evaluate, ParallelConfig

    result = evaluate(ParallelConfig(num_games=100, num_workers=8))
    print(result.win_turns)

Architecture:
    Main Process:
        - Splits game indices into batches
        - Distributes batches to worker pool
        - Merges per-game results into an EvaluationResult

    Worker Process:
        - Receives a batch of game indices
        - For each index: deal a starting hand and play the game out
        - Returns one GameResult per game
"""

import multiprocessing as mp
from multiprocessing import Pool
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import logging
import random
import time

from ..cards import PILLAGER_DECK, Card
from ..driver import PlayConfig, play_game
from ..engine import new_going_first, new_going_random, new_going_second
from ..errors import IllegalActionError
from .policy import make_policy

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s [%(processName)s] %(levelname)s: %(message)s'

STARTERS = {
    "first": new_going_first,
    "second": new_going_second,
    "random": new_going_random,
}


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class ParallelConfig:
    """Configuration for a parallel evaluation run.

    Attributes:
        num_games: Number of games to play.
        num_workers: Number of processes (default: CPU count). 1 plays
            in-process.
        seed: Seed of game 0; game i uses seed + i.
        deck: Decklist every game starts from.
        going: "first", "second" or "random".
        policy: Prior policy name for the planner ("uniform" or "mirror").
        play: Per-game driver settings.
        batch_size: Games per worker batch (default: auto-calculated).
        progress_interval: Seconds between progress updates (default: 10).
    """
    num_games: int = 100
    num_workers: Optional[int] = None
    seed: int = 0
    deck: Tuple[Card, ...] = PILLAGER_DECK
    going: str = "random"
    policy: str = "mirror"
    play: PlayConfig = field(default_factory=PlayConfig)
    batch_size: Optional[int] = None
    progress_interval: float = 10.0

    def __post_init__(self):
        if self.going not in STARTERS:
            raise ValueError(f"going must be one of {sorted(STARTERS)}, got {self.going!r}")
        if self.num_workers is None:
            self.num_workers = mp.cpu_count()
        if self.batch_size is None:
            # Aim for ~4 batches per worker for load balancing
            self.batch_size = max(1, self.num_games // (self.num_workers * 4))


@dataclass
class GameResult:
    """Result of a single game.

    Attributes:
        index: Game number within the run.
        seed: Seed used for the game.
        won: Whether the game was won by the horizon.
        turn: Turn the game ended on.
        num_actions: Actions taken.
        duration_ms: Time spent on this game in milliseconds.
        error: Exception text if the game crashed, else None.
    """
    index: int
    seed: int
    won: bool
    turn: int
    num_actions: int
    duration_ms: float
    error: Optional[str] = None


@dataclass
class EvaluationResult:
    """Aggregated results from an evaluation run.

    Attributes:
        num_games: Games played.
        wins: Games won by the horizon.
        failures: Games not won (including crashed ones).
        errors: Games that raised.
        win_turns: Histogram mapping turn -> games won on that turn.
        average_win_turn: Mean turn over won games (0.0 if none).
        duration_seconds: Total wall-clock time.
        games: Per-game results, ordered by index.
    """
    num_games: int
    wins: int
    failures: int
    errors: int
    win_turns: Dict[int, int]
    average_win_turn: float
    duration_seconds: float
    games: List[GameResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # JSON object keys must be strings
        data["win_turns"] = {str(turn): count for turn, count in sorted(self.win_turns.items())}
        return data


# =============================================================================
# WORKER FUNCTION
# =============================================================================

# Global worker state (initialized per-process)
_worker_config: Optional[ParallelConfig] = None


def _worker_init(config: ParallelConfig, log_level: int = logging.WARNING):
    """Initialize worker process with shared configuration.

    Called once per worker at pool creation time.
    """
    global _worker_config
    _worker_config = config
    logging.basicConfig(level=log_level, format=LOG_FORMAT)


def _play_one(index: int) -> GameResult:
    """Play game ``index`` of the run."""
    config = _worker_config
    seed = config.seed + index
    start_time = time.perf_counter()
    rng = random.Random(seed)

    try:
        state = STARTERS[config.going](config.deck, rng)
        policy = make_policy(config.policy, rng)
        record = play_game(state, policy, rng, config.play)
    except IllegalActionError:
        logger.error(f"Illegal action in game {index} (seed {seed})", exc_info=True)
        raise
    except Exception as e:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.warning(f"Error in game {index} (seed {seed}): {e}")
        return GameResult(index, seed, False, 0, 0, duration_ms, error=repr(e))

    duration_ms = (time.perf_counter() - start_time) * 1000
    return GameResult(
        index=index,
        seed=seed,
        won=record.won,
        turn=record.turn,
        num_actions=len(record.actions),
        duration_ms=duration_ms,
    )


def _worker_batch(indices: List[int]) -> List[GameResult]:
    """Play a batch of games in a single worker."""
    return [_play_one(index) for index in indices]


# =============================================================================
# MAIN EVALUATION
# =============================================================================

def summarize(games: List[GameResult], duration: float) -> EvaluationResult:
    """Aggregate per-game results."""
    games = sorted(games, key=lambda g: g.index)
    win_turns: Dict[int, int] = {}
    for game in games:
        if game.won:
            win_turns[game.turn] = win_turns.get(game.turn, 0) + 1
    wins = sum(win_turns.values())
    total_turns = sum(turn * count for turn, count in win_turns.items())
    return EvaluationResult(
        num_games=len(games),
        wins=wins,
        failures=len(games) - wins,
        errors=sum(1 for g in games if g.error is not None),
        win_turns=dict(sorted(win_turns.items())),
        average_win_turn=total_turns / wins if wins else 0.0,
        duration_seconds=duration,
        games=games,
    )


def evaluate(config: ParallelConfig) -> EvaluationResult:
    """Play ``config.num_games`` games across a process pool.

    Args:
        config: ParallelConfig with game count, workers and settings.

    Returns:
        EvaluationResult with the win-turn histogram and per-game results.
    """
    start_time = time.perf_counter()
    indices = list(range(config.num_games))
    batches = [indices[i:i + config.batch_size] for i in range(0, len(indices), config.batch_size)]
    logger.info(f"Playing {config.num_games} games in {len(batches)} batches")

    all_results: List[GameResult] = []

    if config.num_workers == 1:
        _worker_init(config, logging.getLogger().level)
        for batch in batches:
            all_results.extend(_worker_batch(batch))
        return summarize(all_results, time.perf_counter() - start_time)

    logger.info(f"Starting {config.num_workers} worker processes")
    with Pool(
        processes=config.num_workers,
        initializer=_worker_init,
        initargs=(config,),
    ) as pool:

        async_results = [pool.apply_async(_worker_batch, (batch,)) for batch in batches]

        completed = 0
        last_progress = time.perf_counter()

        for async_result in async_results:
            all_results.extend(async_result.get())
            completed = len(all_results)

            now = time.perf_counter()
            if now - last_progress >= config.progress_interval:
                elapsed = now - start_time
                rate = completed / elapsed
                eta = (config.num_games - completed) / rate if rate > 0 else 0
                logger.info(
                    f"Progress: {completed:,}/{config.num_games:,} games "
                    f"({100*completed/config.num_games:.1f}%) - "
                    f"Rate: {rate:.2f} games/sec - "
                    f"ETA: {eta:.0f}s"
                )
                last_progress = now

    result = summarize(all_results, time.perf_counter() - start_time)
    logger.info(f"Completed {result.num_games} games in {result.duration_seconds:.1f}s")
    logger.info(f"Wins: {result.wins}, failures: {result.failures}")
    logger.info(f"Average win turn: {result.average_win_turn:.2f}")
    return result
