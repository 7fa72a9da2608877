import unittest
from unittest.mock import patch

from casino.core.games.roulette import ROULETTE_NUMBERS, RouletteGame, roulette_game
from casino.core.rng import rng


class TestRouletteTable(unittest.TestCase):

    def test_zero_is_green(self):
        self.assertEqual(roulette_game.get_number_color(0), "green")

    def test_red_and_black_partition_the_numbers(self):
        red = RouletteGame.RED_NUMBERS
        black = RouletteGame.BLACK_NUMBERS
        self.assertEqual(len(red), 18)
        self.assertEqual(len(black), 18)
        self.assertFalse(red & black)
        self.assertEqual(red | black, set(range(1, 37)))

    def test_color_of_every_pocket(self):
        for entry in ROULETTE_NUMBERS:
            number = entry["number"]
            if number == 0:
                expected = "green"
            elif number in RouletteGame.RED_NUMBERS:
                expected = "red"
            else:
                expected = "black"
            self.assertEqual(entry["color"], expected)
        self.assertEqual(len(ROULETTE_NUMBERS), 37)

    def test_bet_multipliers(self):
        self.assertEqual(roulette_game.get_bet_multiplier("number"), 36)
        for bet_type in ("red", "black", "odd", "even", "1-18", "19-36"):
            self.assertEqual(roulette_game.get_bet_multiplier(bet_type), 2)
        for bet_type in ("1st12", "2nd12", "3rd12"):
            self.assertEqual(roulette_game.get_bet_multiplier(bet_type), 3)
        self.assertEqual(roulette_game.get_bet_multiplier("corner"), 0)

    def test_zero_loses_outside_bets(self):
        for bet_type in ("red", "black", "odd", "even", "1-18", "19-36", "1st12", "2nd12", "3rd12"):
            self.assertFalse(roulette_game.check_bet_win(bet_type, 0))

    def test_range_bets(self):
        self.assertTrue(roulette_game.check_bet_win("1st12", 12))
        self.assertFalse(roulette_game.check_bet_win("1st12", 13))
        self.assertTrue(roulette_game.check_bet_win("2nd12", 13))
        self.assertTrue(roulette_game.check_bet_win("3rd12", 36))
        self.assertTrue(roulette_game.check_bet_win("1-18", 18))
        self.assertTrue(roulette_game.check_bet_win("19-36", 19))
        self.assertTrue(roulette_game.check_bet_win("odd", 35))
        self.assertTrue(roulette_game.check_bet_win("even", 36))

    def test_straight_bet_without_numbers_never_wins(self):
        self.assertFalse(roulette_game.check_bet_win("number", 7))
        self.assertTrue(roulette_game.check_bet_win("number", 7, [7, 8]))


class TestRouletteSpin(unittest.TestCase):

    def test_spin_in_range(self):
        for _ in range(500):
            self.assertTrue(0 <= roulette_game.generate_outcome() <= 36)

    def test_spin_uses_rng(self):
        with patch.object(rng, "random_int", return_value=17) as mock_int:
            result = roulette_game.play([{"type": "number", "numbers": [17], "amount": 10}])
        mock_int.assert_called_once_with(0, 36)
        self.assertEqual(result["number"], 17)
        self.assertEqual(result["total_payout"], 360)

    def test_multiple_bets_settle_independently(self):
        bets = [
            {"type": "red", "amount": 10},
            {"type": "1st12", "amount": 5},
            {"type": "number", "numbers": [0], "amount": 1},
            {"type": "even", "amount": 2.5},
        ]
        result = roulette_game.play(bets, forced_number=3)

        self.assertEqual(result["color"], "red")
        self.assertEqual([b["win"] for b in result["bets"]], [True, True, False, False])
        self.assertEqual([b["payout"] for b in result["bets"]], [20, 15, 0, 0])
        self.assertEqual(result["total_payout"], 35)
        self.assertTrue(result["win"])

    def test_total_matches_sum_of_bet_payouts(self):
        bets = [
            {"type": "odd", "amount": 0.15},
            {"type": "1-18", "amount": 0.3},
            {"type": "number", "numbers": [5, 6], "amount": 0.1},
        ]
        for number in range(37):
            result = roulette_game.play(bets, forced_number=number)
            expected = round(sum(b["payout"] for b in result["bets"]), 2)
            self.assertEqual(result["total_payout"], expected)

    def test_losing_spin(self):
        result = roulette_game.play([{"type": "black", "amount": 10}], forced_number=0)
        self.assertEqual(result["total_payout"], 0)
        self.assertFalse(result["win"])
