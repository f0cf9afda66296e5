"""
Transposition table for memoizing solved states.

Keys are Zobrist hashes of GameState values. Only proofs (WIN or LOSE) are
stored; a TIMEOUT says nothing about the state itself.
"""

from typing import Dict, Optional
from dataclasses import dataclass

from ..types import Plan


@dataclass
class TranspositionEntry:
    """
    Cached solver result for a state.

    Note: Intentionally mutable (not frozen). The visit_count field is
    incremented on cache hits to track access frequency for eviction decisions.

    Attributes:
        state_hash: Zobrist hash of the state.
        plan: WIN (with the actions from this state) or LOSE.
        creation_depth: Number of actions between the search root and this
            state when it was solved.
        visit_count: How many times we've seen this state (mutated on lookup).
    """
    state_hash: int
    plan: Plan
    creation_depth: int = 0
    visit_count: int = 1


class TranspositionTable:
    """
    Hash table of solved states.

    If the same state is reached via different action orders, its answer
    is identical, so the second visit is a lookup.

    Attributes:
        table: Dictionary mapping state hashes to TranspositionEntry
        max_size: Maximum number of entries before eviction
        hits: Number of successful lookups
        misses: Number of failed lookups
    """

    def __init__(self, max_size: int = 1_000_000):
        """
        Args:
            max_size: Maximum entries before eviction triggers.
        """
        self.table: Dict[int, TranspositionEntry] = {}
        self.max_size = max_size
        self.hits = 0
        self.misses = 0

    def lookup(self, state_hash: int) -> Optional[TranspositionEntry]:
        """
        Check if a state has been solved.

        Returns:
            TranspositionEntry if found, None otherwise.
            Note: visit_count is incremented on hit.
        """
        entry = self.table.get(state_hash)
        if entry:
            self.hits += 1
            entry.visit_count += 1
            return entry
        self.misses += 1
        return None

    def store(self, state_hash: int, plan: Plan, depth: int = 0):
        """
        Store a proof for a state.

        Raises:
            ValueError: If ``plan`` is a TIMEOUT.
        """
        if plan.is_timeout:
            raise ValueError("Timeouts are not proofs and cannot be cached.")
        if state_hash not in self.table and len(self.table) >= self.max_size:
            self._evict()
        self.table[state_hash] = TranspositionEntry(
            state_hash=state_hash,
            plan=plan,
            creation_depth=depth,
        )

    def _evict(self):
        """
        Remove least valuable entries when full.

        Entries created deeper in the search and entries hit more often are
        kept. Removes bottom 10% by (creation_depth, visit_count).
        """
        if not self.table:
            return

        sorted_entries = sorted(
            self.table.items(),
            key=lambda x: (x[1].creation_depth, x[1].visit_count)
        )

        to_remove = max(1, len(sorted_entries) // 10)
        for key, _ in sorted_entries[:to_remove]:
            del self.table[key]

    def clear(self):
        """Clear all entries and reset statistics."""
        self.table.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> dict:
        """
        Return cache statistics.

        Returns:
            Dictionary with size, hits, misses, hit_rate and the number of
            stored wins and losses.
        """
        total = self.hits + self.misses
        wins = sum(1 for entry in self.table.values() if entry.plan.is_win)
        return {
            "size": len(self.table),
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hits / total if total > 0 else 0.0,
            "wins": wins,
            "losses": len(self.table) - wins,
        }

    def __len__(self) -> int:
        return len(self.table)

    def __contains__(self, state_hash: int) -> bool:
        """Check if a hash exists in the table (without updating stats)."""
        return state_hash in self.table
