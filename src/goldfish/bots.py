"""
Rule-based "escape" bot.

Digs through the deck with card draw and setup spells and never commits
minions. The mirror policy uses its choice as a prior.
"""

import random
from typing import Optional

from .cards import Card
from .engine import GameState, can_play
from .engine.state import CardInstance
from .types import Action, Choose, EndTurn, Play

# Draw spells that get better once something has been played this turn.
STORM_CARDS = frozenset({Card.SWINDLE, Card.GONE_FISHIN})

USEFUL_CARDS = frozenset({
    Card.CUTLASS,
    Card.DOOR,
    Card.EVASION,
    Card.EXTORTION,
    Card.PREPARATION,
    Card.SECRET_PASSAGE,
    Card.SHROUD,
})


def _is_useful(ci: CardInstance) -> bool:
    # A passage Coin goes back to the deck anyway.
    if ci.card is Card.COIN:
        return ci.from_passage
    return ci.card in USEFUL_CARDS


def escape_bot_action(state: GameState, rng: Optional[random.Random] = None) -> Action:
    """Pick the bot's action for ``state``. Always legal."""
    if state.fish:
        rng = rng or random.Random()
        return Choose(rng.randrange(len(state.fish)))

    if state.storm > 0:
        for i, ci in enumerate(state.hand):
            if ci.card in STORM_CARDS and can_play(state, i):
                return Play(i)

    for i, ci in enumerate(state.hand):
        if _is_useful(ci) and can_play(state, i):
            return Play(i)

    return EndTurn()
