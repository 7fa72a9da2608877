from typing import Dict, FrozenSet, List, Optional

from casino.core.money import payout_for, sum_cents
from casino.core.rng import rng


class RouletteGame:
    """
    European Roulette (37 pockets: 0-36).
    Any number of bets per spin; each is settled independently against the same pocket.
    """

    # Red numbers on European roulette wheel
    RED_NUMBERS = frozenset({1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36})
    BLACK_NUMBERS = frozenset({2, 4, 6, 8, 10, 11, 13, 15, 17, 20, 22, 24, 26, 28, 29, 31, 33, 35})
    POCKETS = tuple(range(37))

    # Payout multipliers (includes original bet return)
    PAYOUTS = {
        "number": 36,  # Straight up (35:1 + bet)
        "red": 2,
        "black": 2,
        "odd": 2,
        "even": 2,
        "1-18": 2,
        "19-36": 2,
        "1st12": 3,  # Dozens (2:1 + bet)
        "2nd12": 3,
        "3rd12": 3,
    }

    # Pockets each outside bet covers
    COVERAGE = {
        "red": RED_NUMBERS,
        "black": BLACK_NUMBERS,
        "odd": frozenset(n for n in range(1, 37) if n % 2 == 1),
        "even": frozenset(n for n in range(1, 37) if n % 2 == 0),
        "1-18": frozenset(range(1, 19)),
        "19-36": frozenset(range(19, 37)),
        "1st12": frozenset(range(1, 13)),
        "2nd12": frozenset(range(13, 25)),
        "3rd12": frozenset(range(25, 37)),
    }

    def get_number_color(self, number: int) -> str:
        """Get the color of a roulette number."""
        if number == 0:
            return "green"
        elif number in self.RED_NUMBERS:
            return "red"
        else:
            return "black"

    def get_bet_multiplier(self, bet_type: str) -> int:
        """Unknown bet types pay nothing."""
        return self.PAYOUTS.get(bet_type, 0)

    def covered_numbers(self, bet_type: str, numbers: Optional[List[int]] = None) -> FrozenSet[int]:
        if bet_type == "number":
            return frozenset(n for n in numbers or () if 0 <= n <= 36)
        return self.COVERAGE.get(bet_type, frozenset())

    def check_bet_win(self, bet_type: str, number: int, numbers: Optional[List[int]] = None) -> bool:
        return number in self.covered_numbers(bet_type, numbers)

    def spin(self) -> int:
        return rng.random_int(0, 36)

    def generate_outcome(self, forced_number: Optional[int] = None) -> int:
        if forced_number is not None:
            return forced_number
        return self.spin()

    def compute_result(self, bets: List[Dict], number: int) -> Dict:
        """
        Settle every bet against the drawn pocket.

        Args:
            bets: [{"type": ..., "numbers": [...]?, "amount": ...}, ...]
            number: Winning pocket

        Returns:
            Dict with the pocket, its color, per-bet results and the summed payout
        """
        bet_results = []
        for bet in bets:
            bet_type = bet["type"]
            win = self.check_bet_win(bet_type, number, bet.get("numbers"))
            payout = payout_for(bet["amount"], self.get_bet_multiplier(bet_type)) if win else 0.0
            bet_results.append({
                "type": bet_type,
                "numbers": list(bet.get("numbers") or []),
                "amount": bet["amount"],
                "win": win,
                "payout": payout,
            })

        total_payout = sum_cents(b["payout"] for b in bet_results)

        return {
            "number": number,
            "color": self.get_number_color(number),
            "bets": bet_results,
            "total_payout": total_payout,
            "win": total_payout > 0,
        }

    def play(self, bets: List[Dict], forced_number: Optional[int] = None) -> Dict:
        number = self.generate_outcome(forced_number)
        return self.compute_result(bets, number)


# Singleton instance
roulette_game = RouletteGame()

ROULETTE_NUMBERS = [
    {"number": n, "color": roulette_game.get_number_color(n)} for n in RouletteGame.POCKETS
]
