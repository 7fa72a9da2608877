"""
Jacks or Better video poker: deal five, hold any, draw once.
"""

from collections import Counter
from typing import Dict, Iterable, List, Sequence, Tuple

from casino.core.games.cards import Card, Deck, build_deck, draw_front

RANKS = ["2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A"]

HAND_SIZE = 5

ROYAL_FLUSH = "Royal Flush"
STRAIGHT_FLUSH = "Straight Flush"
FOUR_OF_A_KIND = "Four of a Kind"
FULL_HOUSE = "Full House"
FLUSH = "Flush"
STRAIGHT = "Straight"
THREE_OF_A_KIND = "Three of a Kind"
TWO_PAIR = "Two Pair"
JACKS_OR_BETTER = "Jacks or Better"
LOW_PAIR = "Low Pair"
HIGH_CARD = "High Card"

PAYTABLE = [
    (ROYAL_FLUSH, 800),
    (STRAIGHT_FLUSH, 50),
    (FOUR_OF_A_KIND, 25),
    (FULL_HOUSE, 9),
    (FLUSH, 6),
    (STRAIGHT, 4),
    (THREE_OF_A_KIND, 3),
    (TWO_PAIR, 2),
    (JACKS_OR_BETTER, 1),
]

_PAYOUTS = dict(PAYTABLE)

WHEEL = [2, 3, 4, 5, 14]
ACE = 14
JACK = 11


def rank_value(rank: str) -> int:
    """2-10 at face value, J=11, Q=12, K=13, A=14 (ace high)."""
    return RANKS.index(rank) + 2


def create_deck() -> Deck:
    return build_deck(RANKS, rank_value)


def is_straight(values: Iterable[int]) -> bool:
    ordered = sorted(values)
    if ordered == WHEEL:
        return True
    return all(b - a == 1 for a, b in zip(ordered, ordered[1:]))


def _ranked(label: str) -> Dict:
    return {"rank": label, "multiplier": _PAYOUTS.get(label, 0)}


def evaluate_hand(cards: Sequence[Card]) -> Dict:
    """Classify a five-card hand against the paytable. Returns {"rank", "multiplier"}."""
    values = [card.value for card in cards]
    counts = Counter(values)
    shape = sorted(counts.values(), reverse=True)

    flush = len({card.suit for card in cards}) == 1
    straight = len(counts) == HAND_SIZE and is_straight(values)

    if flush and straight and max(values) == ACE and min(values) == 10:
        return _ranked(ROYAL_FLUSH)
    if flush and straight:
        return _ranked(STRAIGHT_FLUSH)
    if shape[0] == 4:
        return _ranked(FOUR_OF_A_KIND)
    if shape[:2] == [3, 2]:
        return _ranked(FULL_HOUSE)
    if flush:
        return _ranked(FLUSH)
    if straight:
        return _ranked(STRAIGHT)
    if shape[0] == 3:
        return _ranked(THREE_OF_A_KIND)
    if shape[:2] == [2, 2]:
        return _ranked(TWO_PAIR)
    if shape[0] == 2:
        pair_value = next(value for value, count in counts.items() if count == 2)
        return _ranked(JACKS_OR_BETTER if pair_value >= JACK else LOW_PAIR)

    return _ranked(HIGH_CARD)


def deal_hand(deck: Deck) -> Tuple[List[Card], Deck]:
    """First five cards become the hand; the rest is kept for the draw."""
    hand = []
    for _ in range(HAND_SIZE):
        card, deck = draw_front(deck)
        hand.append(card)
    return hand, deck


def redraw(hand: Sequence[Card], deck: Deck, hold_indices: Iterable[int]) -> Tuple[List[Card], Deck]:
    """Replace every position not in `hold_indices` with the next card of the deck."""
    held = set(hold_indices)
    new_hand = list(hand)

    for position in range(len(new_hand)):
        if position not in held:
            new_hand[position], deck = draw_front(deck)

    return new_hand, deck
