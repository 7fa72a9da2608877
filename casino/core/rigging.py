"""
Policy-driven outcome selection.

Each adapter asks `should_win` once, then draws a result from the subset of
outcomes that produces the decided win or loss, keeping the draw uniform
within that subset. When the subset is empty the adapter falls back to an
unconstrained draw. In normal mode every adapter is a plain fair draw.
"""

from typing import Dict, List, Sequence

from casino.core.games.cards import Card, Deck
from casino.core.games.roulette import roulette_game
from casino.core.games.slots import Grid, slots_game
from casino.core.logger import get_logger
from casino.core.odds import OddsPolicy, should_win
from casino.core.rng import rng

logger = get_logger("rigging")

# Attempts at a losing slots grid before giving up on the zig-zag check
MAX_LOSING_GRID_ATTEMPTS = 100


def rig_dice_roll(policy: OddsPolicy, target: int, is_over: bool) -> int:
    if not policy.is_rigged:
        return rng.random_int(1, 100)

    forced_win = should_win(policy)

    # Inclusive ranges; landing on the target loses in both directions
    if is_over:
        low, high = (target + 1, 100) if forced_win else (1, target)
    else:
        low, high = (1, target - 1) if forced_win else (target, 100)

    logger.debug(f"Dice rigged to {'win' if forced_win else 'lose'}: {low}-{high}")

    if low > high:
        return rng.random_int(1, 100)
    return rng.random_int(low, high)


def rig_roulette_number(policy: OddsPolicy, bets: Sequence[Dict]) -> int:
    if not policy.is_rigged:
        return roulette_game.spin()

    covered = set()
    for bet in bets:
        covered |= roulette_game.covered_numbers(bet["type"], bet.get("numbers"))

    winning_numbers = sorted(covered)
    losing_numbers = [n for n in roulette_game.POCKETS if n not in covered]

    forced_win = should_win(policy)
    candidates = winning_numbers if forced_win else losing_numbers

    logger.debug(f"Roulette rigged to {'win' if forced_win else 'lose'}: {len(candidates)} pockets")

    if candidates:
        return rng.random_choice(candidates)
    return roulette_game.spin()


def _winning_grid() -> Grid:
    symbol = rng.random_choice(slots_game.symbol_ids)
    win_row = rng.random_int(0, slots_game.ROWS - 1)
    run_length = rng.random_int(slots_game.MIN_RUN, slots_game.COLS)

    return tuple(
        tuple(
            symbol if row == win_row and col < run_length else slots_game.random_symbol()
            for col in range(slots_game.COLS)
        )
        for row in range(slots_game.ROWS)
    )


def _losing_row() -> List[str]:
    row: List[str] = []
    for _ in range(slots_game.COLS):
        symbol = slots_game.random_symbol()
        # A third copy of the opening symbol would complete a paying run
        while len(row) == 2 and row[0] == row[1] == symbol:
            symbol = slots_game.random_symbol()
        row.append(symbol)
    return row


def _losing_grid() -> Grid:
    for _ in range(MAX_LOSING_GRID_ATTEMPTS):
        grid = tuple(tuple(_losing_row()) for _ in range(slots_game.ROWS))
        _, multiplier = slots_game.evaluate_lines(grid)
        if multiplier == 0:
            return grid
    return grid


def rig_slots_grid(policy: OddsPolicy) -> Grid:
    if not policy.is_rigged:
        return slots_game.generate_grid()

    forced_win = should_win(policy)
    logger.debug(f"Slots rigged to {'win' if forced_win else 'lose'}")

    return _winning_grid() if forced_win else _losing_grid()


def rig_blackjack_card(policy: OddsPolicy, player_total: int, dealer_total: int, deck: Deck) -> Card:
    """
    Pick the next player card from the deck. A forced win takes a card that raises
    the total without passing 21; a forced loss takes one that pushes it past 21.
    """
    if not policy.is_rigged:
        return rng.random_choice(deck)

    forced_win = should_win(policy)

    if forced_win:
        candidates = [card for card in deck if player_total < player_total + card.value <= 21]
    else:
        candidates = [card for card in deck if player_total + card.value > 21]

    logger.debug(
        f"Blackjack deal rigged to {'win' if forced_win else 'lose'} "
        f"(player {player_total}, dealer {dealer_total}): {len(candidates)} cards"
    )

    if candidates:
        return rng.random_choice(candidates)
    return rng.random_choice(deck)
