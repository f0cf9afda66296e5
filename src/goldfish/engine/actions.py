"""Rules of the game: what can be played, and what playing it does.

Every transition goes through ``apply_action``, which validates the action
against the state before resolving it on a ``StateBuilder`` working copy.
"""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Callable

from ..cards import Card
from ..errors import IllegalActionError
from ..types import Action, Choose, EndTurn, Play
from .state import BOARD_LIMIT, CardInstance, GameState, StateBuilder, random_index_where

FISH_OFFER_SIZE = 3
PASSAGE_DRAWS = 4

# Cards whose resolution samples the deck.
RANDOM_CARDS = frozenset({
    Card.GONE_FISHIN,
    Card.SECRET_PASSAGE,
    Card.SWINDLE,
    Card.DOOR,
    Card.CUTLASS,
    Card.EXTORTION,
})


def card_cost(state: GameState, index: int) -> int:
    """Mana cost of the card at ``index`` in hand, after all discounts."""
    ci = state.hand[index]
    cost = ci.cost - state.scabbs * 3
    if ci.card.combo:
        cost -= state.foxy * 2
    if ci.card.is_spell and state.prep_pending:
        cost -= 2
    return max(cost, 0)


def can_play(state: GameState, index: int) -> bool:
    card = state.hand[index].card
    if card.is_minion and len(state.board) >= BOARD_LIMIT:
        return False
    return state.mana >= card_cost(state, index)


def plays(state: GameState) -> list[Play]:
    """Every legal Play action, in hand order."""
    if state.fish:
        return []
    answer = []
    for index, ci in enumerate(state.hand):
        if not can_play(state, index):
            continue
        if ci.card.must_target:
            answer.extend(Play(index, target) for target in range(len(state.board)))
        else:
            answer.append(Play(index))
    return answer


def legal_actions(state: GameState) -> list[Action]:
    """All actions that ``apply_action`` accepts for this state.

    A pending offer must be resolved first; otherwise every playable card is
    listed, followed by EndTurn.
    """
    if state.fish:
        return [Choose(i) for i in range(len(state.fish))]
    actions: list[Action] = list(plays(state))
    actions.append(EndTurn())
    return actions


def non_kill_actions(state: GameState) -> list[Action]:
    """Candidate actions for turn planning.

    Minions and Shadowstep are held back for the kill turn.
    """
    if state.fish:
        return legal_actions(state)
    actions: list[Action] = [
        p for p in plays(state)
        if not state.hand[p.index].card.is_minion
        and state.hand[p.index].card is not Card.SHADOWSTEP
    ]
    actions.append(EndTurn())
    return actions


def is_deterministic(state: GameState, action: Action) -> bool:
    """Whether resolving ``action`` never depends on the random source."""
    if isinstance(action, EndTurn):
        return False
    if isinstance(action, Choose):
        return True
    card = state.hand[action.index].card
    if card in RANDOM_CARDS:
        return False
    if card is Card.SHROUD:
        return state.minions_in_deck() <= 2
    return True


def describe_action(state: GameState, action: Action) -> str:
    if isinstance(action, EndTurn):
        return "End turn"
    if isinstance(action, Choose):
        return f"Choose {state.fish[action.index]}"
    text = str(state.hand[action.index])
    if action.target is not None:
        text += f" -> {state.board[action.target]}"
    return text


# =============================================================================
# CARD EFFECTS
# =============================================================================

EffectFn = Callable[[StateBuilder, Play, random.Random], None]

BATTLECRIES: dict[Card, Callable[[StateBuilder], None]] = {}
CARD_EFFECTS: dict[Card, EffectFn] = {}


def register_battlecry(card: Card):
    def decorator(fn):
        BATTLECRIES[card] = fn
        return fn
    return decorator


def register_effect(card: Card):
    def decorator(fn):
        CARD_EFFECTS[card] = fn
        return fn
    return decorator


@register_battlecry(Card.DANCER)
def _dancer(b: StateBuilder) -> None:
    b.add_card(Card.COIN)


@register_battlecry(Card.FOXY)
def _foxy(b: StateBuilder) -> None:
    b.foxy += 1


@register_battlecry(Card.PILLAGER)
def _pillager(b: StateBuilder) -> None:
    b.life -= b.storm


@register_battlecry(Card.SCABBS)
def _scabbs(b: StateBuilder) -> None:
    if b.storm > 0:
        b.scabbs += 1
        b.next_scabbs += 1


@register_effect(Card.COIN)
def _coin(b: StateBuilder, play: Play, rng: random.Random) -> None:
    b.mana += 1


@register_effect(Card.POTION)
def _potion(b: StateBuilder, play: Play, rng: random.Random) -> None:
    b.add_instances([CardInstance(card, potion=True) for card in b.board])


@register_effect(Card.PREPARATION)
def _preparation(b: StateBuilder, play: Play, rng: random.Random) -> None:
    b.prep_pending = True


@register_effect(Card.SHADOWSTEP)
def _shadowstep(b: StateBuilder, play: Play, rng: random.Random) -> None:
    returned = b.board.pop(play.target)
    b.add_instance(CardInstance(returned, cost_reduction=2))


@register_effect(Card.SHROUD)
def _shroud(b: StateBuilder, play: Play, rng: random.Random) -> None:
    if sum(1 for card in b.deck if card.is_minion) <= 2:
        # Forced outcome: take whatever minions are left, lowest index first.
        for _ in range(2):
            index = next((i for i, card in enumerate(b.deck) if card.is_minion), None)
            if index is None:
                break
            b.take_from_deck(index)
    else:
        b.draw_from(rng, lambda card: card.is_minion)
        b.draw_from(rng, lambda card: card.is_minion)


@register_effect(Card.SWINDLE)
def _swindle(b: StateBuilder, play: Play, rng: random.Random) -> None:
    b.draw_from(rng, lambda card: card.is_spell)
    if b.storm > 0:
        b.draw_from(rng, lambda card: card.is_minion)


@register_effect(Card.DOOR)
def _door(b: StateBuilder, play: Play, rng: random.Random) -> None:
    b.draw_from(rng, lambda card: card.is_spell)


@register_effect(Card.EXTORTION)
def _extortion(b: StateBuilder, play: Play, rng: random.Random) -> None:
    b.draw(rng)


@register_effect(Card.CUTLASS)
def _cutlass(b: StateBuilder, play: Play, rng: random.Random) -> None:
    b.draw(rng)
    index = random_index_where(b.hand, lambda ci: ci.card.is_spell and ci.cost > 0, rng)
    if index is not None:
        ci = b.hand[index]
        b.hand[index] = replace(ci, cost_reduction=ci.cost_reduction + 1)


@register_effect(Card.GONE_FISHIN)
def _gone_fishin(b: StateBuilder, play: Play, rng: random.Random) -> None:
    if len(b.deck) <= FISH_OFFER_SIZE:
        b.fish = list(b.deck)
    else:
        b.fish = [b.deck[i] for i in rng.sample(range(len(b.deck)), FISH_OFFER_SIZE)]


@register_effect(Card.SECRET_PASSAGE)
def _secret_passage(b: StateBuilder, play: Play, rng: random.Random) -> None:
    b.passage.extend(b.hand)
    b.hand = []
    for _ in range(PASSAGE_DRAWS):
        b.draw_from(rng, from_passage=True)


# =============================================================================
# TRANSITIONS
# =============================================================================

def apply_action(
    state: GameState,
    action: Action,
    rng: random.Random | None = None,
) -> GameState:
    """Return the state reached by taking ``action``.

    Raises:
        IllegalActionError: If the action is not legal in ``state``.
    """
    if rng is None:
        rng = random.Random()
    if isinstance(action, Play):
        return _apply_play(state, action, rng)
    if isinstance(action, Choose):
        return _apply_choose(state, action)
    if isinstance(action, EndTurn):
        return _apply_end_turn(state, rng)
    raise IllegalActionError(f"Unknown action: {action!r}")


def _validate_play(state: GameState, play: Play) -> None:
    if state.fish:
        raise IllegalActionError("A choice is pending; cards cannot be played.")
    if not 0 <= play.index < len(state.hand):
        raise IllegalActionError(f"Hand index out of range: {play.index}")
    card = state.hand[play.index].card
    if card.is_minion and len(state.board) >= BOARD_LIMIT:
        raise IllegalActionError("The board is full.")
    if card.must_target:
        if play.target is None or not 0 <= play.target < len(state.board):
            raise IllegalActionError(f"{card} needs a target on the board, got {play.target}.")
    elif play.target is not None:
        raise IllegalActionError(f"{card} does not take a target.")


def _apply_play(state: GameState, play: Play, rng: random.Random) -> GameState:
    _validate_play(state, play)
    cost = card_cost(state, play.index)
    b = StateBuilder.from_state(state)
    b.mana -= cost
    if b.mana < 0:
        raise IllegalActionError(
            f"Not enough mana for {state.hand[play.index]}: cost {cost}, have {state.mana}."
        )
    card = b.hand.pop(play.index).card
    b.scabbs = b.next_scabbs
    b.next_scabbs = 0

    if card is Card.TENWU:
        returned = b.board.pop(play.target)
        b.add_instance(CardInstance(returned, tenwu=True))

    if card.is_minion:
        b.board.append(card)
    elif card.is_spell:
        b.prep_pending = False

    if card.combo:
        b.foxy = 0

    battlecry = BATTLECRIES.get(card)
    if battlecry is not None:
        battlecry(b)
        if Card.SHARK in b.board:
            battlecry(b)

    effect = CARD_EFFECTS.get(card)
    if effect is not None:
        effect(b, play, rng)

    if not card.trade:
        b.storm += 1
    return b.freeze()


def _apply_choose(state: GameState, choose: Choose) -> GameState:
    if not state.fish:
        raise IllegalActionError("No choice is pending.")
    if not 0 <= choose.index < len(state.fish):
        raise IllegalActionError(f"Choice index out of range: {choose.index}")
    card = state.fish[choose.index]
    if card not in state.deck:
        raise IllegalActionError(f"{card} is offered but no longer in the deck.")
    b = StateBuilder.from_state(state)
    b.fish = []
    b.take_from_deck(b.deck.index(card))
    return b.freeze()


def _apply_end_turn(state: GameState, rng: random.Random) -> GameState:
    if state.fish:
        raise IllegalActionError("Cannot end the turn with a choice pending.")
    b = StateBuilder.from_state(state)

    kept = []
    for ci in b.hand:
        if ci.from_passage:
            b.deck.append(ci.card)
        else:
            kept.append(replace(ci, tenwu=False) if ci.tenwu else ci)
    restored = []
    for ci in b.passage:
        # Borrowed by an earlier Secret Passage this turn.
        if ci.from_passage:
            b.deck.append(ci.card)
        else:
            restored.append(replace(ci, tenwu=False) if ci.tenwu else ci)
    b.hand = []
    b.passage = []
    b.add_instances(restored + kept)

    b.foxy = 0
    b.scabbs = 0
    b.next_scabbs = 0
    b.prep_pending = False
    b.storm = 0
    b.begin_turn(rng)
    return b.freeze()
