#!/usr/bin/env python3
"""
Static card catalog for the Pillager Rogue card set.

Every card the engine knows about is a member of the closed ``Card``
enumeration. Per-card facts (cost, type, combo/target/trade flags and the
client-facing name) live in ``CATALOG`` and are exposed as properties on
``Card`` so engine code can write ``card.cost`` or ``card.is_minion``.

Usage:
    from goldfish.cards import Card

    Card.from_name("Spectral Pillager")   # -> Card.PILLAGER
    Card.from_card_id("DMF_511")          # -> Card.FOXY
    Card.PILLAGER.cost                    # -> 6
"""

from enum import Enum, IntEnum, auto
from dataclasses import dataclass
from typing import Dict, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class CardKind(Enum):
    """Exactly one of these applies to every card."""
    MINION = "minion"
    SPELL = "spell"
    WEAPON = "weapon"


class Card(IntEnum):
    """
    All the cards we handle.

    Members are listed roughly in the order you expect to play them.
    """
    COIN = auto()
    SHARK = auto()
    DANCER = auto()
    FOXY = auto()
    SCABBS = auto()
    PILLAGER = auto()
    POTION = auto()
    SHADOWSTEP = auto()
    TENWU = auto()
    GONE_FISHIN = auto()
    SHROUD = auto()
    SECRET_PASSAGE = auto()
    SWINDLE = auto()
    EVASION = auto()
    DOOR = auto()
    CUTLASS = auto()
    EXTORTION = auto()
    PREPARATION = auto()
    UNKNOWN = auto()

    @property
    def info(self) -> "CardInfo":
        return CATALOG[self]

    @property
    def display_name(self) -> str:
        return CATALOG[self].name

    @property
    def cost(self) -> int:
        """Base mana cost before any discounts."""
        return CATALOG[self].cost

    @property
    def is_minion(self) -> bool:
        return CATALOG[self].kind is CardKind.MINION

    @property
    def is_spell(self) -> bool:
        return CATALOG[self].kind is CardKind.SPELL

    @property
    def is_weapon(self) -> bool:
        return CATALOG[self].kind is CardKind.WEAPON

    @property
    def combo(self) -> bool:
        """Combo cards are discounted by foxy stacks."""
        return CATALOG[self].combo

    @property
    def must_target(self) -> bool:
        """Playing the card requires a friendly minion target."""
        return CATALOG[self].must_target

    @property
    def trade(self) -> bool:
        """Trade plays do not count towards storm."""
        return CATALOG[self].trade

    def __str__(self) -> str:
        return CATALOG[self].name

    @classmethod
    def from_name(cls, name: str) -> "Card":
        """Resolve a display name as it appears in the game client.

        Unrecognised names map to ``Card.UNKNOWN``.
        """
        card = _CARD_FOR_NAME.get(name)
        if card is not None:
            return card
        logger.warning(f"unknown card name: {name}")
        return cls.UNKNOWN

    @classmethod
    def from_card_id(cls, card_id: str) -> "Card":
        """Resolve a client card id (or, for some cards, the display name)."""
        card = _CARD_FOR_ID.get(card_id)
        if card is not None:
            return card
        logger.warning(f"unknown card id: {card_id}")
        return cls.UNKNOWN


@dataclass(frozen=True)
class CardInfo:
    """
    Catalog facts for one card.

    Attributes:
        name: Display name used by the game client.
        cost: Base mana cost.
        kind: Minion, spell or weapon.
        combo: Cost reduced by foxy stacks, and consumes them.
        must_target: Needs a friendly board target when played.
        trade: Does not add to storm when played.
        card_id: Identifier the client writes in its logs.
    """
    name: str
    cost: int
    kind: CardKind
    combo: bool = False
    must_target: bool = False
    trade: bool = False
    card_id: Optional[str] = None


CATALOG: Dict[Card, CardInfo] = {
    Card.COIN: CardInfo("The Coin", 0, CardKind.SPELL, card_id="The Coin"),
    Card.SHARK: CardInfo("Spirit of the Shark", 4, CardKind.MINION, card_id="Spirit of the Shark"),
    Card.DANCER: CardInfo("Mailbox Dancer", 2, CardKind.MINION, card_id="Mailbox Dancer"),
    Card.FOXY: CardInfo("Foxy Fraud", 2, CardKind.MINION, card_id="DMF_511"),
    Card.SCABBS: CardInfo("Scabbs Cutterbutter", 4, CardKind.MINION, combo=True,
                          card_id="Scabbs Cutterbutter"),
    Card.PILLAGER: CardInfo("Spectral Pillager", 6, CardKind.MINION, combo=True,
                            card_id="Spectral Pillager"),
    Card.POTION: CardInfo("Potion of Illusion", 4, CardKind.SPELL, card_id="Potion of Illusion"),
    Card.SHADOWSTEP: CardInfo("Shadowstep", 0, CardKind.SPELL, must_target=True,
                              card_id="Shadowstep"),
    Card.TENWU: CardInfo("Tenwu of the Red Smoke", 2, CardKind.MINION, must_target=True,
                         card_id="Tenwu of the Red Smoke"),
    Card.GONE_FISHIN: CardInfo("Gone Fishin'", 1, CardKind.SPELL, card_id="TSC_916"),
    Card.SHROUD: CardInfo("Shroud of Concealment", 3, CardKind.SPELL,
                          card_id="Shroud of Concealment"),
    Card.SECRET_PASSAGE: CardInfo("Secret Passage", 1, CardKind.SPELL, card_id="Secret Passage"),
    Card.SWINDLE: CardInfo("Swindle", 2, CardKind.SPELL, card_id="DMF_515"),
    Card.EVASION: CardInfo("Evasion", 2, CardKind.SPELL, card_id="LOOT_214"),
    Card.DOOR: CardInfo("Door of Shadows", 1, CardKind.SPELL, card_id="Door of Shadows"),
    Card.CUTLASS: CardInfo("Blackwater Cutlass", 1, CardKind.WEAPON, trade=True,
                           card_id="Blackwater Cutlass"),
    Card.EXTORTION: CardInfo("SI:7 Extortion", 1, CardKind.SPELL, trade=True, card_id="EX1_593"),
    Card.PREPARATION: CardInfo("Preparation", 0, CardKind.SPELL, card_id="CORE_EX1_145"),
    # Unrecognised cards are kept in hand but priced out of play.
    Card.UNKNOWN: CardInfo("Unknown", 20, CardKind.SPELL),
}


def _build_name_index() -> Dict[str, Card]:
    index = {info.name: card for card, info in CATALOG.items()}
    index["Counterfeit Coin"] = Card.COIN
    return index


def _build_id_index() -> Dict[str, Card]:
    index = {info.card_id: card for card, info in CATALOG.items() if info.card_id}
    index["Counterfeit Coin"] = Card.COIN
    return index


_CARD_FOR_NAME: Dict[str, Card] = _build_name_index()
_CARD_FOR_ID: Dict[str, Card] = _build_id_index()


# The core Pillager package.
STARTING_DECK: Tuple[Card, ...] = (
    Card.COIN,
    Card.COIN,
    Card.SHADOWSTEP,
    Card.SHADOWSTEP,
    Card.FOXY,
    Card.DANCER,
    Card.TENWU,
    Card.POTION,
    Card.SCABBS,
    Card.SHARK,
    Card.PILLAGER,
    Card.PILLAGER,
)

# A full 30-card list: the core package plus draw and setup spells.
PILLAGER_DECK: Tuple[Card, ...] = STARTING_DECK + (
    Card.FOXY,
    Card.DANCER,
    Card.PREPARATION,
    Card.PREPARATION,
    Card.SECRET_PASSAGE,
    Card.SECRET_PASSAGE,
    Card.GONE_FISHIN,
    Card.GONE_FISHIN,
    Card.SWINDLE,
    Card.SWINDLE,
    Card.DOOR,
    Card.DOOR,
    Card.EXTORTION,
    Card.EXTORTION,
    Card.CUTLASS,
    Card.SHROUD,
    Card.SHROUD,
    Card.EVASION,
)

DECKS: Dict[str, Tuple[Card, ...]] = {
    "starting": STARTING_DECK,
    "pillager": PILLAGER_DECK,
}


__all__ = [
    'Card',
    'CardKind',
    'CardInfo',
    'CATALOG',
    'STARTING_DECK',
    'PILLAGER_DECK',
    'DECKS',
]
