#!/usr/bin/env python3
"""
Zobrist hashing for game states.

Each state component (a card at a hand position, a counter value, ...) gets
a deterministic random 64-bit key; a state's hash is the XOR of the keys of
its components. States reached by different action orders that end up
identical hash identically, which is what the transposition table relies on.

Ordering rules:
    - hand, board, passage and pending offer are positional
    - the deck is hashed as a multiset (draws are uniformly random, so its
      order carries no information)

Usage:
    from goldfish.utils import ZobristHasher

    hasher = ZobristHasher(seed=42)
    h = hasher.hash_state(state)

References:
    - Zobrist, A. (1970). "A New Hashing Method with Application for Game Playing"
"""

from collections import Counter
from typing import Dict, Tuple
import random

from ..engine.state import CardInstance, GameState

# Scalar fields folded into the hash, by name.
COUNTER_FIELDS = (
    "life",
    "mana",
    "turn",
    "storm",
    "foxy",
    "scabbs",
    "next_scabbs",
)

ComponentKey = Tuple


class ZobristHasher:
    """
    Zobrist hash generator for GameState values.

    Keys are generated lazily from a sub-seed derived from the component, so
    the same seed yields the same hash in every process.

    Attributes:
        seed: Random seed for reproducible key generation.
    """

    def __init__(self, seed: int = 42):
        self.seed = seed
        self._keys: Dict[ComponentKey, int] = {}

    def _key(self, component: ComponentKey) -> int:
        key = self._keys.get(component)
        if key is None:
            # String seeds are hashed with sha512 by random.Random, unlike hash().
            sub_rng = random.Random(f"{self.seed}:{component!r}")
            key = sub_rng.getrandbits(64)
            self._keys[component] = key
        return key

    @staticmethod
    def _instance_component(zone: str, position: int, ci: CardInstance) -> ComponentKey:
        return (zone, position, int(ci.card), ci.potion, ci.tenwu,
                ci.cost_reduction, ci.from_passage)

    def hash_state(self, state: GameState) -> int:
        """Compute the full hash of ``state``."""
        h = 0
        for i, ci in enumerate(state.hand):
            h ^= self._key(self._instance_component("hand", i, ci))
        for i, ci in enumerate(state.passage):
            h ^= self._key(self._instance_component("passage", i, ci))
        for i, card in enumerate(state.board):
            h ^= self._key(("board", i, int(card)))
        for i, card in enumerate(state.fish):
            h ^= self._key(("fish", i, int(card)))

        # Multiset: the k-th copy of a card has its own key.
        for card, count in Counter(state.deck).items():
            for k in range(count):
                h ^= self._key(("deck", int(card), k))

        for name in COUNTER_FIELDS:
            h ^= self._key((name, getattr(state, name)))
        if state.prep_pending:
            h ^= self._key(("prep_pending",))
        return h

    def __call__(self, state: GameState) -> int:
        return self.hash_state(state)

    @property
    def keys_generated(self) -> int:
        return len(self._keys)


_default_hasher = ZobristHasher()


def state_hash(state: GameState) -> int:
    """Hash ``state`` with the shared default hasher."""
    return _default_hasher.hash_state(state)


__all__ = ['ZobristHasher', 'state_hash', 'COUNTER_FIELDS']
