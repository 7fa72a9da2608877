import unittest

from casino.core.games import blackjack
from casino.core.games.blackjack import BlackjackRound, Hand, calculate_hand_value
from tests.helpers import bj, bj_deck


def make_round(player, dealer, deck=()):
    return BlackjackRound(
        player_hand=Hand.from_cards([bj(r) for r in player]),
        dealer_hand=Hand.from_cards([bj(r) for r in dealer]),
        deck=bj_deck(*deck),
    )


class TestHandValue(unittest.TestCase):

    def test_pair_of_aces_is_soft_twelve(self):
        self.assertEqual(calculate_hand_value([bj("A"), bj("A")]), (12, True))

    def test_ace_king_is_soft_blackjack(self):
        self.assertEqual(calculate_hand_value([bj("A"), bj("K")]), (21, True))
        self.assertTrue(Hand.from_cards([bj("A"), bj("K")]).blackjack)

    def test_ace_reduced_when_busting(self):
        value = calculate_hand_value([bj("A"), bj("K"), bj("5")])
        self.assertEqual(value.value, 16)
        self.assertFalse(value.soft)

    def test_three_card_twenty_one_is_not_blackjack(self):
        hand = Hand.from_cards([bj("7"), bj("7"), bj("7")])
        self.assertEqual(hand.value, 21)
        self.assertFalse(hand.blackjack)

    def test_busted_flag(self):
        self.assertTrue(Hand.from_cards([bj("K"), bj("Q"), bj("2")]).busted)

    def test_hand_value_is_pure(self):
        cards = [bj("A"), bj("6"), bj("A")]
        self.assertEqual(calculate_hand_value(cards), calculate_hand_value(cards))
        self.assertEqual(calculate_hand_value(cards), (18, True))

    def test_add_recomputes_from_all_cards(self):
        hand = Hand.from_cards([bj("A"), bj("6")])
        self.assertEqual((hand.value, hand.soft), (17, True))
        hand = hand.add(bj("9"))
        self.assertEqual((hand.value, hand.soft), (16, False))


class TestDeal(unittest.TestCase):

    def test_fresh_deck_has_52_unique_cards(self):
        deck = blackjack.create_deck()
        self.assertEqual(len(deck), 52)
        self.assertEqual(len(set(deck)), 52)

    def test_deal_leaves_48_cards(self):
        game = blackjack.start_game()
        self.assertEqual(len(game.player_hand.cards), 2)
        self.assertEqual(len(game.dealer_hand.cards), 2)
        self.assertEqual(len(game.deck), 48)

    def test_cards_alternate_player_dealer(self):
        game = blackjack.start_game(bj_deck("10", "9", "6", "8", "2"))
        self.assertEqual([c.rank for c in game.player_hand.cards], ["10", "6"])
        self.assertEqual([c.rank for c in game.dealer_hand.cards], ["9", "8"])
        self.assertEqual(game.status, blackjack.PLAYING)

    def test_player_natural(self):
        game = blackjack.start_game(bj_deck("A", "9", "K", "7", "2"))
        self.assertEqual(game.status, blackjack.BLACKJACK)
        self.assertTrue(game.finished)

    def test_both_naturals_push(self):
        game = blackjack.start_game(bj_deck("A", "A", "K", "Q", "2"))
        self.assertEqual(game.status, blackjack.PUSH)

    def test_dealer_natural(self):
        game = blackjack.start_game(bj_deck("10", "A", "9", "K", "2"))
        self.assertEqual(game.status, blackjack.DEALER_WIN)

    def test_card_picker_chooses_second_player_card(self):
        deck = bj_deck("10", "9", "6", "8", "2", "3")
        chosen = deck[0]  # the "3", which would otherwise be dealt last

        def picker(player_total, dealer_total, remaining):
            self.assertEqual((player_total, dealer_total), (10, 9))
            return chosen

        game = blackjack.start_game(deck, pick_player_card=picker)
        self.assertEqual([c.rank for c in game.player_hand.cards], ["10", "3"])
        self.assertEqual([c.rank for c in game.dealer_hand.cards], ["9", "6"])
        self.assertNotIn(chosen, game.deck)
        self.assertEqual(len(game.deck), 2)


class TestActions(unittest.TestCase):

    def test_hit_draws_from_deck(self):
        game = make_round(["10", "2"], ["10", "7"], ["5", "K"])
        after = blackjack.hit(game)
        self.assertEqual(after.player_hand.value, 17)
        self.assertEqual(after.status, blackjack.PLAYING)
        self.assertEqual(len(after.deck), 1)
        # Original snapshot untouched
        self.assertEqual(len(game.player_hand.cards), 2)
        self.assertEqual(len(game.deck), 2)

    def test_hit_to_bust(self):
        game = make_round(["10", "6"], ["10", "7"], ["K"])
        self.assertEqual(blackjack.hit(game).status, blackjack.PLAYER_BUSTED)

    def test_actions_on_finished_round_are_noops(self):
        game = blackjack.hit(make_round(["10", "6"], ["10", "7"], ["K", "5"]))
        self.assertIs(blackjack.hit(game), game)
        self.assertIs(blackjack.stand(game), game)

    def test_dealer_draws_to_seventeen_then_stops(self):
        game = blackjack.stand(make_round(["10", "8"], ["10", "6"], ["5", "9"]))
        self.assertEqual(game.dealer_hand.value, 21)
        self.assertEqual(len(game.dealer_hand.cards), 3)
        self.assertEqual(len(game.deck), 1)
        self.assertEqual(game.status, blackjack.DEALER_WIN)

    def test_dealer_stands_on_soft_seventeen(self):
        game = blackjack.stand(make_round(["10", "8"], ["A", "6"], ["10"]))
        self.assertEqual(len(game.dealer_hand.cards), 2)
        self.assertEqual(game.status, blackjack.PLAYER_WIN)

    def test_dealer_bust(self):
        game = blackjack.stand(make_round(["10", "2"], ["10", "6"], ["K"]))
        self.assertEqual(game.status, blackjack.DEALER_BUSTED)

    def test_equal_totals_push(self):
        game = blackjack.stand(make_round(["10", "8"], ["10", "8"]))
        self.assertEqual(game.status, blackjack.PUSH)

    def test_multipliers(self):
        self.assertEqual(blackjack.get_multiplier(blackjack.BLACKJACK), 2.5)
        self.assertEqual(blackjack.get_multiplier(blackjack.PLAYER_WIN), 2)
        self.assertEqual(blackjack.get_multiplier(blackjack.DEALER_BUSTED), 2)
        self.assertEqual(blackjack.get_multiplier(blackjack.PUSH), 1)
        self.assertEqual(blackjack.get_multiplier(blackjack.PLAYER_BUSTED), 0)
        self.assertEqual(blackjack.get_multiplier(blackjack.DEALER_WIN), 0)
        self.assertEqual(blackjack.get_multiplier(blackjack.PLAYING), 0)

    def test_hidden_hole_card_while_playing(self):
        view = make_round(["10", "2"], ["9", "7"]).to_dict()
        self.assertEqual(view["dealer_hand"]["value"], 9)
        self.assertEqual(view["dealer_hand"]["cards"][1], {"hidden": True})
