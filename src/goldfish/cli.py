#!/usr/bin/env python3
"""
Command-line interface.

Usage:
    goldfish solve --mana 4 --life 30 --hand "Foxy Fraud" Shadowstep ...
    goldfish play --seed 7 --going second --policy mirror
    goldfish evaluate --games 100 --workers 8 --output results.json

Card names are display names ("Spectral Pillager") or catalog keys
("PILLAGER", case-insensitive).
"""

import argparse
import json
import logging
import random
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from .cards import Card, DECKS
from .driver import PlayConfig, play_game
from .engine import GameState, apply_action, describe_action
from .search.mcts import PlannerConfig
from .search.parallel import LOG_FORMAT, STARTERS, ParallelConfig, evaluate
from .search.policy import POLICIES, make_policy
from .search.solver import DeterministicSolver, SolverConfig
from .sentry_config import capture_exception, capture_message, init_sentry

logger = logging.getLogger(__name__)


class CardNameError(ValueError):
    """A card name on the command line is not in the catalog."""


def parse_card(name: str) -> Card:
    key = name.strip().upper().replace(" ", "_").replace("'", "")
    if key in Card.__members__:
        return Card[key]
    card = Card.from_name(name)
    if card is Card.UNKNOWN and name != Card.UNKNOWN.display_name:
        raise CardNameError(f"Unknown card: {name!r}")
    return card


def parse_cards(names: Optional[Sequence[str]]) -> List[Card]:
    return [parse_card(name) for name in names or ()]


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_solve(args) -> int:
    state = GameState.from_snapshot({
        "mana": args.mana,
        "life": args.life,
        "hand": parse_cards(args.hand),
        "board": parse_cards(args.board),
        "deck": parse_cards(args.deck),
    })
    print(state)
    print()

    solver = DeterministicSolver(SolverConfig(time_budget=args.time_budget))
    plan = solver.solve(state)
    stats = solver.stats

    if plan.is_win:
        print("Winning line:")
        for i, action in enumerate(plan.actions, 1):
            print(f"  {i}. {describe_action(state, action)}")
            state = apply_action(state, action)
    elif plan.is_lose:
        print("Cannot win.")
    else:
        print(f"Timeout after {args.time_budget}s.")
    print(f"({stats.expanded:,} states, {stats.cache_hits:,} cache hits, {stats.duration:.2f}s)")
    return 0


def cmd_play(args) -> int:
    rng = random.Random(args.seed)
    deck = DECKS[args.deck_name]
    state = STARTERS[args.going](deck, rng)
    print(state)
    print()

    config = PlayConfig(
        horizon=args.horizon,
        planner=PlannerConfig(horizon=args.horizon, playouts=args.playouts),
    )
    record = play_game(state, make_policy(args.policy, rng), rng, config)

    for line in record.log:
        print(f"  {line}")
    if record.won:
        print(f"Won on turn {record.turn}.")
    else:
        print(f"No win by turn {record.turn}.")
    return 0


def cmd_evaluate(args) -> int:
    config = ParallelConfig(
        num_games=args.games,
        num_workers=args.workers,
        seed=args.seed,
        deck=DECKS[args.deck_name],
        going=args.going,
        policy=args.policy,
        play=PlayConfig(
            horizon=args.horizon,
            planner=PlannerConfig(horizon=args.horizon, playouts=args.playouts),
        ),
    )
    result = evaluate(config)

    print(f"\n{'='*60}")
    print("EVALUATION COMPLETE")
    print(f"{'='*60}")
    for turn, count in result.win_turns.items():
        print(f"turn {turn}: {count} wins")
    print(f"failed:             {result.failures}")
    print(f"average win turn:   {result.average_win_turn:.2f}")
    print(f"duration:           {result.duration_seconds:.1f}s")

    if result.errors:
        logger.warning(f"{result.errors} games raised an error")
        capture_message(f"evaluate: {result.errors}/{result.num_games} games raised an error", level="warning")

    if args.output:
        output_path = Path(args.output)
        data = {
            "meta": {
                "timestamp": datetime.now().isoformat(),
                "games": args.games,
                "seed": args.seed,
                "deck": args.deck_name,
                "going": args.going,
                "policy": args.policy,
                "playouts": args.playouts,
            },
            "result": result.to_dict(),
        }
        with open(output_path, "w") as f:
            json.dump(data, f, indent=2)
        print(f"\nResults saved to: {output_path}")
    return 0


# =============================================================================
# ENTRY POINT
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="goldfish", description="Pillager combo solver and planner")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    solve = sub.add_parser("solve", help="Search for a deterministic win this turn")
    solve.add_argument("--mana", type=int, required=True)
    solve.add_argument("--life", type=int, required=True, help="Opponent's remaining health")
    solve.add_argument("--hand", nargs="+", required=True, metavar="CARD")
    solve.add_argument("--board", nargs="*", default=[], metavar="CARD")
    solve.add_argument("--deck", nargs="*", default=[], metavar="CARD",
                       help="Cards left in deck (default: empty)")
    solve.add_argument("--time-budget", type=float, default=10.0, help="Seconds (default: 10)")
    solve.set_defaults(func=cmd_solve)

    def add_game_options(p):
        p.add_argument("--seed", type=int, default=0)
        p.add_argument("--deck-name", choices=sorted(DECKS), default="pillager")
        p.add_argument("--going", choices=sorted(STARTERS), default="random")
        p.add_argument("--policy", choices=sorted(POLICIES), default="mirror")
        p.add_argument("--playouts", type=int, default=200, help="Playouts per decision")
        p.add_argument("--horizon", type=int, default=10, help="Last turn that counts")

    play = sub.add_parser("play", help="Play one game against a goldfish")
    add_game_options(play)
    play.set_defaults(func=cmd_play)

    ev = sub.add_parser("evaluate", help="Play many games and histogram win turns")
    add_game_options(ev)
    ev.add_argument("--games", type=int, default=100)
    ev.add_argument("--workers", "-w", type=int, default=None,
                    help="Number of worker processes (default: CPU count)")
    ev.add_argument("--output", "-o", type=str, default=None, help="JSON summary file")
    ev.set_defaults(func=cmd_evaluate)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the goldfish CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )
    if init_sentry():
        logger.debug("Sentry initialized")

    try:
        return args.func(args)
    except CardNameError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        capture_exception(e)
        raise


if __name__ == "__main__":
    exit(main())
