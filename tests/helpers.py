"""Card lists and state builders shared by the test modules."""

from goldfish.cards import Card
from goldfish.engine import GameState

# Hands from known kill turns
FOXY_SHADOWSTEP_HAND = [
    Card.FOXY,
    Card.SHADOWSTEP,
    Card.SCABBS,
    Card.SHARK,
    Card.TENWU,
    Card.PILLAGER,
    Card.PILLAGER,
]
NO_SHADOWSTEP_HAND = [
    Card.FOXY,
    Card.SCABBS,
    Card.SHARK,
    Card.TENWU,
    Card.PILLAGER,
    Card.PILLAGER,
]

# Solver budget for tests that need a proof; generous so slow machines still finish.
PROOF_BUDGET = 120.0


def make_state(mana=0, life=30, hand=(), board=(), deck=(), turn=0) -> GameState:
    """Build a state from card lists. The deck defaults to empty."""
    return GameState.from_snapshot({
        "mana": mana,
        "life": life,
        "hand": list(hand),
        "board": list(board),
        "deck": list(deck),
        "turn": turn,
    })
