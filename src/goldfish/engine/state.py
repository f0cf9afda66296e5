from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Sequence

from ..cards import Card, STARTING_DECK

HAND_LIMIT = 10
BOARD_LIMIT = 7
MAX_MANA = 10
STARTING_LIFE = 30


@dataclass(frozen=True)
class CardInstance:
    """One card in hand, with the modifiers that apply only to this copy.

    Attributes:
        card: The card kind.
        potion: Created by Potion of Illusion; costs 1.
        tenwu: Returned by Tenwu this turn; costs 1.
        cost_reduction: Flat discount stacked on this copy.
        from_passage: Drawn by Secret Passage; goes back to the deck at end of turn.
    """
    card: Card
    potion: bool = False
    tenwu: bool = False
    cost_reduction: int = 0
    from_passage: bool = False

    @property
    def cost(self) -> int:
        base = 1 if (self.potion or self.tenwu) else self.card.cost
        return max(0, base - self.cost_reduction)

    def __str__(self) -> str:
        text = str(self.card)
        if self.potion:
            text += " (potion)"
        if self.tenwu:
            text += " (tenwu)"
        if self.cost_reduction:
            text += f" (-{self.cost_reduction})"
        return text


@dataclass(frozen=True)
class GameState:
    """
    Everything the search needs to know about our side of the game.

    States are immutable values: transitions build a new state. Two states
    compare (and hash) equal exactly when every field matches, including the
    order of the hand.
    """
    board: tuple[Card, ...] = ()
    hand: tuple[CardInstance, ...] = ()
    passage: tuple[CardInstance, ...] = ()
    deck: tuple[Card, ...] = ()
    life: int = STARTING_LIFE
    mana: int = 0
    turn: int = 0
    storm: int = 0
    foxy: int = 0
    scabbs: int = 0
    next_scabbs: int = 0
    prep_pending: bool = False
    fish: tuple[Card, ...] = ()

    @staticmethod
    def new(deck: Iterable[Card] = STARTING_DECK, life: int = STARTING_LIFE) -> "GameState":
        return GameState(deck=tuple(deck), life=life)

    @staticmethod
    def from_snapshot(snapshot: dict) -> "GameState":
        """Build a state from an observation.

        Cards may be given as ``Card`` members or display names. Only the keys
        present in the snapshot override the defaults of ``GameState.new``.
        """

        def parse_cards(values: Any) -> tuple[Card, ...]:
            if values is None:
                return ()
            return tuple(v if isinstance(v, Card) else Card.from_name(str(v)) for v in values)

        deck = parse_cards(snapshot["deck"]) if "deck" in snapshot else STARTING_DECK
        state = GameState.new(deck=deck, life=int(snapshot.get("life", STARTING_LIFE)))
        builder = StateBuilder.from_state(state)
        builder.mana = int(snapshot.get("mana", 0))
        builder.turn = int(snapshot.get("turn", 0))
        builder.board = list(parse_cards(snapshot.get("board")))
        builder.add_cards(parse_cards(snapshot.get("hand")))
        return builder.freeze()

    def add_cards_to_hand(self, cards: Iterable[Card]) -> "GameState":
        return self.add_instances_to_hand(CardInstance(card) for card in cards)

    def add_instances_to_hand(self, instances: Iterable[CardInstance]) -> "GameState":
        builder = StateBuilder.from_state(self)
        builder.add_instances(instances)
        return builder.freeze()

    def with_hand(self, cards: Iterable[Card]) -> "GameState":
        """Replace the hand with fresh copies of ``cards`` (capped at the hand limit)."""
        builder = StateBuilder.from_state(self)
        builder.hand = []
        builder.add_cards(cards)
        return builder.freeze()

    def is_win(self) -> bool:
        return self.life <= 0

    def minions_in_deck(self) -> int:
        return sum(1 for card in self.deck if card.is_minion)

    def hand_string(self) -> str:
        return ", ".join(str(ci) for ci in self.hand)

    def __str__(self) -> str:
        lines = [
            f"board: {', '.join(str(c) for c in self.board)}",
            f"hand: {self.hand_string()}",
            f"life: {self.life}",
            f"mana: {self.mana}",
        ]
        if self.passage:
            lines.append(f"passage: {', '.join(str(ci) for ci in self.passage)}")
        if self.fish:
            lines.append(f"fish: {', '.join(str(c) for c in self.fish)}")
        for name in ("storm", "foxy", "scabbs", "next_scabbs"):
            value = getattr(self, name)
            if value > 0:
                lines.append(f"{name}: {value}")
        if self.prep_pending:
            lines.append("prep_pending")
        return "\n".join(lines)


def turn_is_fresh(state: GameState) -> bool:
    """True when nothing has been played yet this turn."""
    return state.storm == 0 and not state.fish


@dataclass
class StateBuilder:
    """Mutable working copy of a GameState used while resolving a transition."""
    board: list[Card]
    hand: list[CardInstance]
    passage: list[CardInstance]
    deck: list[Card]
    life: int
    mana: int
    turn: int
    storm: int
    foxy: int
    scabbs: int
    next_scabbs: int
    prep_pending: bool
    fish: list[Card] = field(default_factory=list)

    @staticmethod
    def from_state(state: GameState) -> "StateBuilder":
        return StateBuilder(
            board=list(state.board),
            hand=list(state.hand),
            passage=list(state.passage),
            deck=list(state.deck),
            life=state.life,
            mana=state.mana,
            turn=state.turn,
            storm=state.storm,
            foxy=state.foxy,
            scabbs=state.scabbs,
            next_scabbs=state.next_scabbs,
            prep_pending=state.prep_pending,
            fish=list(state.fish),
        )

    def freeze(self) -> GameState:
        return GameState(
            board=tuple(self.board),
            hand=tuple(self.hand),
            passage=tuple(self.passage),
            deck=tuple(self.deck),
            life=self.life,
            mana=self.mana,
            turn=self.turn,
            storm=self.storm,
            foxy=self.foxy,
            scabbs=self.scabbs,
            next_scabbs=self.next_scabbs,
            prep_pending=self.prep_pending,
            fish=tuple(self.fish),
        )

    # Cards past the hand limit are discarded.
    def add_instances(self, instances: Iterable[CardInstance]) -> None:
        for ci in instances:
            if len(self.hand) >= HAND_LIMIT:
                break
            self.hand.append(ci)

    def add_instance(self, ci: CardInstance) -> None:
        self.add_instances((ci,))

    def add_cards(self, cards: Iterable[Card]) -> None:
        self.add_instances(CardInstance(card) for card in cards)

    def add_card(self, card: Card) -> None:
        self.add_instance(CardInstance(card))

    def take_from_deck(self, index: int, from_passage: bool = False) -> Card:
        card = self.deck.pop(index)
        self.add_instance(CardInstance(card, from_passage=from_passage))
        return card

    def draw_from(
        self,
        rng: random.Random,
        pred: Callable[[Card], bool] = lambda card: True,
        from_passage: bool = False,
    ) -> bool:
        """Draw a uniformly random deck card satisfying ``pred``.

        Returns whether a card was drawn.
        """
        index = random_index_where(self.deck, pred, rng)
        if index is None:
            return False
        self.take_from_deck(index, from_passage=from_passage)
        return True

    def draw(self, rng: random.Random) -> bool:
        return self.draw_from(rng)

    def begin_turn(self, rng: random.Random) -> None:
        self.turn += 1
        self.mana = min(self.turn, MAX_MANA)
        self.draw(rng)


def random_index_where(
    items: Sequence[Any],
    pred: Callable[[Any], bool],
    rng: random.Random,
) -> int | None:
    """Index of a uniformly chosen item satisfying ``pred``, or None."""
    matches = [i for i, item in enumerate(items) if pred(item)]
    if not matches:
        return None
    return rng.choice(matches)


def new_going_first(
    deck: Iterable[Card] = STARTING_DECK,
    rng: random.Random | None = None,
) -> GameState:
    rng = rng or random.Random()
    builder = StateBuilder.from_state(GameState.new(deck))
    for _ in range(3):
        builder.draw(rng)
    builder.begin_turn(rng)
    return builder.freeze()


def new_going_second(
    deck: Iterable[Card] = STARTING_DECK,
    rng: random.Random | None = None,
) -> GameState:
    rng = rng or random.Random()
    builder = StateBuilder.from_state(GameState.new(deck))
    for _ in range(4):
        builder.draw(rng)
    builder.add_card(Card.COIN)
    builder.begin_turn(rng)
    return builder.freeze()


def new_going_random(
    deck: Iterable[Card] = STARTING_DECK,
    rng: random.Random | None = None,
) -> GameState:
    rng = rng or random.Random()
    if rng.random() < 0.5:
        return new_going_first(deck, rng)
    return new_going_second(deck, rng)
