"""
5-reel, 3-row video slot.
Wins pay on four fixed lines: the three rows plus one zig-zag, and only for runs
that start on the first reel.
"""

from decimal import Decimal
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from casino.core.money import payout_for, to_decimal
from casino.core.rng import rng


class SlotSymbol(NamedTuple):
    id: str
    emoji: str
    multiplier: float


Grid = Tuple[Tuple[str, ...], ...]


class SlotsGame:
    """
    Symbols are listed rarest first; a symbol's reel weight grows as its payout shrinks.
    A run of N >= 3 matching symbols from the left pays multiplier * (N - 2).
    """

    ROWS = 3
    COLS = 5
    MIN_RUN = 3

    SYMBOLS = (
        SlotSymbol("seven", "7️⃣", 10),
        SlotSymbol("diamond", "💎", 5),
        SlotSymbol("bell", "🔔", 3),
        SlotSymbol("cherry", "🍒", 2),
        SlotSymbol("lemon", "🍋", 1.5),
        SlotSymbol("orange", "🍊", 1.2),
        SlotSymbol("grape", "🍇", 1),
    )
    WEIGHTS = (1, 2, 3, 4, 5, 6, 7)

    # (row, col) cells of the zig-zag line, paid as line 4
    DIAGONAL = ((0, 0), (1, 1), (2, 2), (1, 3), (0, 4))

    def __init__(self):
        self._by_id = {symbol.id: symbol for symbol in self.SYMBOLS}

    @property
    def symbol_ids(self) -> List[str]:
        return [symbol.id for symbol in self.SYMBOLS]

    def get_symbol(self, symbol_id: str) -> Optional[SlotSymbol]:
        return self._by_id.get(symbol_id)

    def random_symbol(self) -> str:
        """Draw one reel position from the weighted symbol distribution."""
        return self.SYMBOLS[rng.weighted_index(self.WEIGHTS)].id

    def generate_grid(self) -> Grid:
        return tuple(
            tuple(self.random_symbol() for _ in range(self.COLS)) for _ in range(self.ROWS)
        )

    def generate_outcome(self, forced_grid: Optional[Sequence[Sequence[str]]] = None) -> Grid:
        if forced_grid is not None:
            return tuple(tuple(row) for row in forced_grid)
        return self.generate_grid()

    @staticmethod
    def check_line(symbols: Sequence[str]) -> int:
        """Length of the run of identical symbols starting at the first reel."""
        first = symbols[0]
        count = 1
        for symbol in symbols[1:]:
            if symbol != first:
                break
            count += 1
        return count

    def get_lines(self, grid: Sequence[Sequence[str]]) -> List[Tuple[int, List[str]]]:
        """Every payline as (line number, symbols), rows first then the zig-zag."""
        lines = [(row + 1, list(grid[row])) for row in range(self.ROWS)]
        lines.append((self.ROWS + 1, [grid[r][c] for r, c in self.DIAGONAL]))
        return lines

    def evaluate_lines(self, grid: Sequence[Sequence[str]]) -> Tuple[List[Dict], Decimal]:
        win_lines = []
        total = Decimal(0)

        for line, symbols in self.get_lines(grid):
            count = self.check_line(symbols)
            symbol = self.get_symbol(symbols[0])
            if count < self.MIN_RUN or symbol is None:
                continue

            line_multiplier = to_decimal(symbol.multiplier) * (count - 2)
            win_lines.append({
                "line": line,
                "symbol": symbol.id,
                "emoji": symbol.emoji,
                "count": count,
                "multiplier": float(line_multiplier),
            })
            total += line_multiplier

        return win_lines, total

    def compute_result(self, bet: float, grid: Sequence[Sequence[str]]) -> Dict:
        win_lines, total_multiplier = self.evaluate_lines(grid)

        return {
            "grid": [list(row) for row in grid],
            "win_lines": win_lines,
            "total_multiplier": float(total_multiplier),
            "payout": payout_for(bet, total_multiplier),
            "win": total_multiplier > 0,
            "bet": bet,
        }

    def play(self, bet: float, forced_grid: Optional[Sequence[Sequence[str]]] = None) -> Dict:
        """
        Spin the slot machine.

        Args:
            bet: Amount wagered
            forced_grid: 3x5 grid of symbol ids from the rigging layer, used instead of a spin

        Returns:
            Dict with the grid, winning lines, total multiplier and payout
        """
        grid = self.generate_outcome(forced_grid)
        return self.compute_result(bet, grid)


# Singleton instance
slots_game = SlotsGame()
