"""
Dice - roll 1-100 and bet on the result landing over or under a target.
The multiplier depends only on target and direction, so it can be shown before betting.
"""

from typing import Dict, Optional

from casino.config import settings
from casino.core.money import payout_for
from casino.core.rng import rng


class DiceGame:
    """Over/under dice with a flat house edge baked into the multiplier."""

    MIN_ROLL = 1
    MAX_ROLL = 100
    MIN_TARGET = 1
    MAX_TARGET = 99

    def _get_config(self) -> dict:
        """Get game configuration from settings."""
        return settings.games.dice.model_dump()

    def house_edge(self) -> float:
        return self._get_config().get("house_edge", 0.02)

    def win_chance(self, target: int, is_over: bool) -> float:
        """Probability (0-1) that a fair roll beats the target."""
        chance = (100 - target) / 100 if is_over else target / 100
        return min(max(chance, 0.0), 1.0)

    def calculate_multiplier(self, target: int, is_over: bool) -> float:
        chance = self.win_chance(target, is_over)
        if chance <= 0:
            return 0.0
        return (1 - self.house_edge()) / chance

    @staticmethod
    def is_winning_roll(roll: int, target: int, is_over: bool) -> bool:
        # Landing exactly on the target loses in both directions
        return roll > target if is_over else roll < target

    def generate_outcome(self, forced_roll: Optional[int] = None) -> int:
        if forced_roll is not None:
            return forced_roll
        return rng.random_int(self.MIN_ROLL, self.MAX_ROLL)

    def compute_result(self, bet: float, target: int, is_over: bool, roll: int) -> Dict:
        win = self.is_winning_roll(roll, target, is_over)
        multiplier = self.calculate_multiplier(target, is_over)

        return {
            "roll": roll,
            "target": target,
            "is_over": is_over,
            "win": win,
            "multiplier": multiplier,
            "payout": payout_for(bet, multiplier) if win else 0.0,
            "bet": bet,
        }

    def play(self, bet: float, target: int, is_over: bool, forced_roll: Optional[int] = None) -> Dict:
        """
        Roll the dice and resolve the bet.

        Args:
            bet: Amount wagered
            target: 1-99
            is_over: True to win on rolls above the target, False for below
            forced_roll: Pre-drawn roll (from the rigging layer) to use instead of a fresh one

        Returns:
            Dict with roll, win status, multiplier and payout
        """
        roll = self.generate_outcome(forced_roll)
        return self.compute_result(bet, target, is_over, roll)


# Singleton instance
dice_game = DiceGame()
