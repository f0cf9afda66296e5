#!/usr/bin/env python3
"""Unit tests for the transition rules."""

import random
import unittest
from dataclasses import replace

from goldfish.cards import Card
from goldfish.engine import (
    CardInstance,
    GameState,
    apply_action,
    card_cost,
    describe_action,
    is_deterministic,
    legal_actions,
    non_kill_actions,
)
from goldfish.errors import IllegalActionError
from goldfish.types import Choose, EndTurn, Play

from helpers import make_state


def cards(state):
    return [ci.card for ci in state.hand]


class TestCost(unittest.TestCase):
    """Effective cost after discounts."""

    def test_foxy_discounts_combo_only(self):
        state = GameState(hand=(CardInstance(Card.PILLAGER), CardInstance(Card.SHARK)), foxy=1)
        self.assertEqual(card_cost(state, 0), 4)
        self.assertEqual(card_cost(state, 1), 4)

    def test_scabbs_discounts_everything(self):
        state = GameState(hand=(CardInstance(Card.PILLAGER), CardInstance(Card.SHARK)), scabbs=1)
        self.assertEqual(card_cost(state, 0), 3)
        self.assertEqual(card_cost(state, 1), 1)

    def test_prep_discounts_spells_only(self):
        state = GameState(
            hand=(CardInstance(Card.POTION), CardInstance(Card.SHARK)),
            prep_pending=True,
        )
        self.assertEqual(card_cost(state, 0), 2)
        self.assertEqual(card_cost(state, 1), 4)

    def test_discounts_stack_and_floor(self):
        state = GameState(hand=(CardInstance(Card.SCABBS),), foxy=2, scabbs=1)
        self.assertEqual(card_cost(state, 0), 0)


class TestLegalActions(unittest.TestCase):

    def test_end_turn_always_offered(self):
        self.assertEqual(legal_actions(make_state()), [EndTurn()])

    def test_unaffordable_skipped(self):
        state = make_state(mana=1, hand=[Card.PILLAGER, Card.COIN])
        self.assertEqual(legal_actions(state), [Play(1), EndTurn()])

    def test_targets_enumerated(self):
        state = make_state(mana=2, hand=[Card.SHADOWSTEP], board=[Card.FOXY, Card.SHARK])
        self.assertEqual(legal_actions(state), [Play(0, 0), Play(0, 1), EndTurn()])

    def test_targeted_card_needs_board(self):
        state = make_state(mana=2, hand=[Card.SHADOWSTEP, Card.TENWU])
        self.assertEqual(legal_actions(state), [EndTurn()])

    def test_full_board_blocks_minions(self):
        state = make_state(mana=10, hand=[Card.FOXY, Card.COIN], board=[Card.DANCER] * 7)
        self.assertEqual(legal_actions(state), [Play(1), EndTurn()])

    def test_fish_only_choices(self):
        state = GameState(
            hand=(CardInstance(Card.COIN),),
            fish=(Card.FOXY, Card.SHARK),
            deck=(Card.FOXY, Card.SHARK),
        )
        self.assertEqual(legal_actions(state), [Choose(0), Choose(1)])

    def test_non_kill_actions(self):
        state = make_state(
            mana=5,
            hand=[Card.FOXY, Card.SHADOWSTEP, Card.COIN, Card.PILLAGER],
            board=[Card.SHARK],
        )
        self.assertEqual(non_kill_actions(state), [Play(2), EndTurn()])


class TestBasicPlays(unittest.TestCase):
    """Mana, storm and the simple cards."""

    def test_coin(self):
        state = apply_action(make_state(hand=[Card.COIN]), Play(0))
        self.assertEqual(state.mana, 1)
        self.assertEqual(state.storm, 1)
        self.assertEqual(state.hand, ())

    def test_minion_goes_to_board(self):
        state = apply_action(make_state(mana=2, hand=[Card.FOXY]), Play(0))
        self.assertEqual(state.board, (Card.FOXY,))
        self.assertEqual(state.mana, 0)
        self.assertEqual(state.foxy, 1)

    def test_source_state_unchanged(self):
        before = make_state(mana=2, hand=[Card.FOXY])
        apply_action(before, Play(0))
        self.assertEqual(before.board, ())
        self.assertEqual(len(before.hand), 1)

    def test_pillager_uses_storm_before_itself(self):
        state = make_state(mana=5, hand=[Card.COIN, Card.PILLAGER])
        state = apply_action(state, Play(0))
        state = apply_action(state, Play(0))
        self.assertEqual(state.life, 29)
        self.assertEqual(state.storm, 2)
        self.assertEqual(state.mana, 0)

    def test_combo_resets_foxy(self):
        state = make_state(mana=6, hand=[Card.FOXY, Card.SCABBS])
        state = apply_action(state, Play(0))
        state = apply_action(state, Play(0))
        self.assertEqual(state.foxy, 0)
        self.assertEqual(state.mana, 2)

    def test_dancer_doubled_by_shark(self):
        state = make_state(mana=2, hand=[Card.DANCER], board=[Card.SHARK])
        state = apply_action(state, Play(0))
        self.assertEqual(cards(state), [Card.COIN, Card.COIN])

    def test_potion_copies_board(self):
        state = make_state(mana=4, hand=[Card.POTION], board=[Card.FOXY, Card.SHARK])
        state = apply_action(state, Play(0))
        self.assertEqual(cards(state), [Card.FOXY, Card.SHARK])
        self.assertTrue(all(ci.potion and ci.cost == 1 for ci in state.hand))

    def test_potion_respects_hand_cap(self):
        state = make_state(
            mana=4,
            hand=[Card.POTION] + [Card.EVASION] * 9,
            board=[Card.FOXY, Card.SHARK],
        )
        state = apply_action(state, Play(0))
        self.assertEqual(len(state.hand), 10)
        self.assertEqual(state.hand[-1], CardInstance(Card.FOXY, potion=True))

    def test_preparation_discounts_next_spell(self):
        state = make_state(mana=2, hand=[Card.PREPARATION, Card.POTION])
        state = apply_action(state, Play(0))
        self.assertTrue(state.prep_pending)
        state = apply_action(state, Play(0))
        self.assertFalse(state.prep_pending)
        self.assertEqual(state.mana, 0)

    def test_preparation_survives_minions(self):
        state = make_state(mana=2, hand=[Card.PREPARATION, Card.FOXY, Card.EVASION])
        state = apply_action(state, Play(0))
        state = apply_action(state, Play(0))
        self.assertTrue(state.prep_pending)
        self.assertEqual(card_cost(state, 0), 0)

    def test_shadowstep_returns_discounted(self):
        state = make_state(hand=[Card.SHADOWSTEP], board=[Card.PILLAGER])
        state = apply_action(state, Play(0, 0))
        self.assertEqual(state.board, ())
        self.assertEqual(state.hand, (CardInstance(Card.PILLAGER, cost_reduction=2),))
        self.assertEqual(card_cost(state, 0), 4)

    def test_tenwu_bounces_and_stays(self):
        state = make_state(mana=2, hand=[Card.TENWU], board=[Card.FOXY, Card.PILLAGER])
        state = apply_action(state, Play(0, 1))
        self.assertEqual(state.board, (Card.FOXY, Card.TENWU))
        self.assertEqual(state.hand, (CardInstance(Card.PILLAGER, tenwu=True),))
        self.assertEqual(card_cost(state, 0), 1)

    def test_evasion_only_adds_storm(self):
        state = apply_action(make_state(mana=2, hand=[Card.EVASION]), Play(0))
        self.assertEqual(state.storm, 1)
        self.assertEqual(state.mana, 0)


class TestScabbs(unittest.TestCase):
    """The staggered discount."""

    def test_no_storm_no_stack(self):
        state = apply_action(make_state(mana=4, hand=[Card.SCABBS]), Play(0))
        self.assertEqual(state.scabbs, 0)
        self.assertEqual(state.next_scabbs, 0)

    def test_discount_applies_to_next_two_plays(self):
        state = make_state(mana=4, hand=[Card.COIN, Card.SCABBS, Card.EVASION, Card.EVASION, Card.EVASION])
        state = apply_action(state, Play(0))   # coin: 5 mana
        state = apply_action(state, Play(0))   # scabbs: 1 mana
        self.assertEqual((state.scabbs, state.next_scabbs), (1, 1))
        self.assertEqual(card_cost(state, 0), 0)

        state = apply_action(state, Play(0))   # rolls next_scabbs into scabbs
        self.assertEqual((state.scabbs, state.next_scabbs), (1, 0))
        self.assertEqual(card_cost(state, 0), 0)

        state = apply_action(state, Play(0))
        self.assertEqual((state.scabbs, state.next_scabbs), (0, 0))
        self.assertEqual(card_cost(state, 0), 2)
        self.assertEqual(state.mana, 1)

    def test_doubled_by_shark(self):
        state = make_state(mana=4, hand=[Card.SCABBS], board=[Card.SHARK])
        state = replace(state, storm=1)
        state = apply_action(state, Play(0))
        self.assertEqual((state.scabbs, state.next_scabbs), (2, 2))


class TestTrades(unittest.TestCase):

    def test_extortion_draws_without_storm(self):
        state = make_state(mana=1, hand=[Card.EXTORTION], deck=[Card.COIN])
        state = apply_action(state, Play(0), random.Random(0))
        self.assertEqual(state.storm, 0)
        self.assertEqual(cards(state), [Card.COIN])
        self.assertEqual(state.deck, ())

    def test_cutlass_discounts_a_spell(self):
        state = make_state(mana=1, hand=[Card.CUTLASS, Card.POTION])
        state = apply_action(state, Play(0), random.Random(0))
        self.assertEqual(state.storm, 0)
        self.assertEqual(state.hand, (CardInstance(Card.POTION, cost_reduction=1),))

    def test_cutlass_keeps_preparation(self):
        state = GameState(hand=(CardInstance(Card.CUTLASS),), mana=1, prep_pending=True)
        state = apply_action(state, Play(0), random.Random(0))
        self.assertTrue(state.prep_pending)


class TestDraws(unittest.TestCase):
    """Card draw effects."""

    def test_shroud_forced_when_two_minions(self):
        state = make_state(mana=3, hand=[Card.SHROUD], deck=[Card.COIN, Card.SHARK, Card.DOOR, Card.FOXY])
        self.assertTrue(is_deterministic(state, Play(0)))
        state = apply_action(state, Play(0))
        self.assertEqual(cards(state), [Card.SHARK, Card.FOXY])
        self.assertEqual(state.deck, (Card.COIN, Card.DOOR))

    def test_shroud_random_with_many_minions(self):
        state = make_state(mana=3, hand=[Card.SHROUD], deck=[Card.FOXY, Card.SHARK, Card.DANCER, Card.COIN])
        self.assertFalse(is_deterministic(state, Play(0)))
        state = apply_action(state, Play(0), random.Random(5))
        self.assertEqual(len(state.hand), 2)
        self.assertTrue(all(ci.card.is_minion for ci in state.hand))
        self.assertEqual(state.deck.count(Card.COIN), 1)

    def test_swindle_without_storm(self):
        state = make_state(mana=2, hand=[Card.SWINDLE], deck=[Card.COIN, Card.FOXY])
        state = apply_action(state, Play(0), random.Random(1))
        self.assertEqual(cards(state), [Card.COIN])

    def test_swindle_with_storm(self):
        state = make_state(mana=2, hand=[Card.COIN, Card.SWINDLE], deck=[Card.DOOR, Card.FOXY])
        state = apply_action(state, Play(0))
        state = apply_action(state, Play(0), random.Random(1))
        self.assertEqual(cards(state), [Card.DOOR, Card.FOXY])

    def test_door_draws_spell(self):
        state = make_state(mana=1, hand=[Card.DOOR], deck=[Card.FOXY, Card.SHARK, Card.POTION])
        state = apply_action(state, Play(0), random.Random(2))
        self.assertEqual(cards(state), [Card.POTION])

    def test_draw_from_empty_deck(self):
        state = apply_action(make_state(mana=1, hand=[Card.DOOR]), Play(0), random.Random(2))
        self.assertEqual(state.hand, ())


class TestGoneFishin(unittest.TestCase):

    def setUp(self):
        self.state = make_state(
            mana=1,
            hand=[Card.GONE_FISHIN],
            deck=[Card.FOXY, Card.SHARK, Card.COIN],
        )

    def test_small_deck_offers_everything(self):
        state = apply_action(self.state, Play(0), random.Random(0))
        self.assertEqual(state.fish, (Card.FOXY, Card.SHARK, Card.COIN))
        self.assertEqual(legal_actions(state), [Choose(0), Choose(1), Choose(2)])

    def test_offer_sampled_from_deck(self):
        deck = [Card.FOXY, Card.SHARK, Card.COIN, Card.DOOR, Card.PILLAGER, Card.POTION]
        state = make_state(mana=1, hand=[Card.GONE_FISHIN], deck=deck)
        state = apply_action(state, Play(0), random.Random(7))
        self.assertEqual(len(state.fish), 3)
        for card in state.fish:
            self.assertIn(card, deck)

    def test_choose_draws_card(self):
        state = apply_action(self.state, Play(0), random.Random(0))
        state = apply_action(state, Choose(1))
        self.assertEqual(cards(state), [Card.SHARK])
        self.assertEqual(state.deck, (Card.FOXY, Card.COIN))
        self.assertEqual(state.fish, ())

    def test_end_turn_rejected_with_offer(self):
        state = apply_action(self.state, Play(0), random.Random(0))
        with self.assertRaises(IllegalActionError):
            apply_action(state, EndTurn())

    def test_play_rejected_with_offer(self):
        state = apply_action(self.state, Play(0), random.Random(0))
        state = state.add_cards_to_hand([Card.COIN])
        with self.assertRaises(IllegalActionError):
            apply_action(state, Play(0))

    def test_choose_is_deterministic(self):
        state = apply_action(self.state, Play(0), random.Random(0))
        self.assertTrue(is_deterministic(state, Choose(0)))
        self.assertFalse(is_deterministic(self.state, Play(0)))


class TestSecretPassage(unittest.TestCase):

    def setUp(self):
        self.state = make_state(
            mana=1,
            turn=3,
            hand=[Card.SECRET_PASSAGE, Card.PILLAGER, Card.FOXY],
            deck=[Card.COIN, Card.COIN, Card.DOOR, Card.EVASION, Card.SHARK],
        )

    def test_hand_swapped(self):
        state = apply_action(self.state, Play(0), random.Random(3))
        self.assertEqual([ci.card for ci in state.passage], [Card.PILLAGER, Card.FOXY])
        self.assertEqual(len(state.hand), 4)
        self.assertTrue(all(ci.from_passage for ci in state.hand))
        self.assertEqual(len(state.deck), 1)

    def test_end_turn_restores_hand(self):
        state = apply_action(self.state, Play(0), random.Random(3))
        state = apply_action(state, EndTurn(), random.Random(3))
        self.assertEqual(state.passage, ())
        self.assertEqual(cards(state)[:2], [Card.PILLAGER, Card.FOXY])
        self.assertEqual(len(state.hand), 3)
        self.assertFalse(any(ci.from_passage for ci in state.hand))
        # 1 left + 4 returned - 1 drawn
        self.assertEqual(len(state.deck), 4)

    def test_played_passage_cards_stay_played(self):
        state = apply_action(self.state, Play(0), random.Random(3))
        coin = next(i for i, ci in enumerate(state.hand) if ci.card is Card.COIN)
        state = apply_action(state, Play(coin))
        state = apply_action(state, EndTurn(), random.Random(3))
        self.assertEqual(len(state.deck), 3)

    def test_second_passage_returns_borrowed_cards(self):
        # The first passage draws the whole deck, including a second passage.
        state = make_state(
            mana=2,
            turn=3,
            hand=[Card.SECRET_PASSAGE, Card.PILLAGER],
            deck=[Card.SECRET_PASSAGE, Card.COIN, Card.DOOR, Card.EVASION],
        )
        state = apply_action(state, Play(0), random.Random(1))
        self.assertEqual(state.deck, ())
        second = next(i for i, ci in enumerate(state.hand) if ci.card is Card.SECRET_PASSAGE)
        state = apply_action(state, Play(second), random.Random(1))
        self.assertEqual(state.hand, ())

        state = apply_action(state, EndTurn(), random.Random(1))
        self.assertEqual(state.passage, ())
        self.assertFalse(any(ci.from_passage for ci in state.hand))
        self.assertEqual(cards(state)[0], Card.PILLAGER)
        self.assertEqual(len(state.hand), 2)
        # 3 borrowed cards returned, 1 drawn
        self.assertEqual(len(state.deck), 2)


class TestEndTurn(unittest.TestCase):

    def test_counters_reset(self):
        state = GameState(
            hand=(CardInstance(Card.PILLAGER, tenwu=True),),
            deck=(Card.COIN,),
            turn=3, mana=0, storm=4, foxy=2, scabbs=1, next_scabbs=1, prep_pending=True,
        )
        state = apply_action(state, EndTurn(), random.Random(0))
        self.assertEqual(state.turn, 4)
        self.assertEqual(state.mana, 4)
        self.assertEqual((state.storm, state.foxy, state.scabbs, state.next_scabbs), (0, 0, 0, 0))
        self.assertFalse(state.prep_pending)
        self.assertEqual(state.hand, (CardInstance(Card.PILLAGER), CardInstance(Card.COIN)))

    def test_mana_capped(self):
        state = apply_action(GameState(turn=12), EndTurn(), random.Random(0))
        self.assertEqual(state.mana, 10)

    def test_not_deterministic(self):
        self.assertFalse(is_deterministic(GameState(), EndTurn()))


class TestIllegalActions(unittest.TestCase):

    def test_bad_index(self):
        with self.assertRaises(IllegalActionError):
            apply_action(make_state(hand=[Card.COIN]), Play(3))

    def test_insufficient_mana(self):
        with self.assertRaises(IllegalActionError):
            apply_action(make_state(mana=5, hand=[Card.PILLAGER]), Play(0))

    def test_missing_target(self):
        with self.assertRaises(IllegalActionError):
            apply_action(make_state(hand=[Card.SHADOWSTEP], board=[Card.FOXY]), Play(0))

    def test_unexpected_target(self):
        with self.assertRaises(IllegalActionError):
            apply_action(make_state(hand=[Card.COIN], board=[Card.FOXY]), Play(0, 0))

    def test_full_board(self):
        with self.assertRaises(IllegalActionError):
            apply_action(make_state(mana=2, hand=[Card.FOXY], board=[Card.DANCER] * 7), Play(0))

    def test_choose_without_offer(self):
        with self.assertRaises(IllegalActionError):
            apply_action(make_state(), Choose(0))


class TestDescribe(unittest.TestCase):

    def test_descriptions(self):
        state = make_state(hand=[Card.TENWU], board=[Card.PILLAGER])
        self.assertEqual(
            describe_action(state, Play(0, 0)),
            "Tenwu of the Red Smoke -> Spectral Pillager",
        )
        self.assertEqual(describe_action(state, EndTurn()), "End turn")
        offer = GameState(fish=(Card.FOXY,))
        self.assertEqual(describe_action(offer, Choose(0)), "Choose Foxy Fraud")


if __name__ == "__main__":
    unittest.main()
