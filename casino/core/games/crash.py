"""
Crash - a multiplier climbs from 1.00x until it crashes; cash out before it does.
The crash point is drawn up front and kept server-side for the whole round.
"""

from typing import Dict

from casino.config import settings
from casino.core.money import floor_cents, payout_for
from casino.core.rng import rng


class CrashGame:
    """
    Crash point generation:
    - `house_edge` of rounds bust instantly at exactly 1.00x
    - the rest map uniform(0,1) ** skew_exponent onto [1.01, max_multiplier],
      a power law with most rounds ending low and a long tail of big multipliers
    """

    INSTANT_CRASH = 1.00
    MIN_MULTIPLIER = 1.01

    def _get_config(self) -> dict:
        """Get game configuration from settings."""
        return settings.games.crash.model_dump()

    def generate_crash_point(self) -> float:
        config = self._get_config()
        house_edge = config.get("house_edge", 0.03)
        max_multiplier = config.get("max_multiplier", 100.0)
        exponent = config.get("skew_exponent", 2.6)

        if rng.random_float() < house_edge:
            return self.INSTANT_CRASH

        skew = rng.random_float() ** exponent
        point = self.MIN_MULTIPLIER + (max_multiplier - self.MIN_MULTIPLIER) * skew
        return max(self.INSTANT_CRASH, floor_cents(point))

    def generate_outcome(self) -> float:
        return self.generate_crash_point()

    def compute_result(self, bet: float, cash_out_at: float, crash_point: float) -> Dict:
        """
        Resolve a cash-out request against the round's crash point.
        Cashing out at exactly the crash point still counts.
        """
        cashed_out = cash_out_at <= crash_point
        cash_out_multiplier = cash_out_at if cashed_out else 0.0

        return {
            "crash_point": crash_point,
            "cash_out_at": cash_out_at,
            "cashed_out": cashed_out,
            "cash_out_multiplier": cash_out_multiplier,
            "win": cashed_out,
            "payout": payout_for(bet, cash_out_multiplier) if cashed_out else 0.0,
            "bet": bet,
        }

    def play(self, bet: float, cash_out_at: float, crash_point: float) -> Dict:
        return self.compute_result(bet, cash_out_at, crash_point)


# Singleton instance
crash_game = CrashGame()
