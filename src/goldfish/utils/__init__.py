"""
Shared utilities for the search code.

This module provides:
- Zobrist hashing for state comparison (hashing.py)
"""

from .hashing import (
    ZobristHasher,
    state_hash,
)

__all__ = [
    'ZobristHasher',
    'state_hash',
]
