"""
Card-specific data for the engine.

This module provides:
- The closed card enumeration and its catalog facts (catalog.py)
- Stock decklists
"""

from .catalog import (
    Card,
    CardKind,
    CardInfo,
    CATALOG,
    STARTING_DECK,
    PILLAGER_DECK,
    DECKS,
)

__all__ = [
    'Card',
    'CardKind',
    'CardInfo',
    'CATALOG',
    'STARTING_DECK',
    'PILLAGER_DECK',
    'DECKS',
]
