"""
Playing cards shared by blackjack and video poker.
Each game supplies its own rank-to-value mapping; nothing here decides what a card is worth.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Tuple

from casino.core.exceptions import DeckExhaustedError
from casino.core.rng import rng

SUITS = ("hearts", "diamonds", "clubs", "spades")

SUIT_SYMBOLS = {
    "hearts": "♥",
    "diamonds": "♦",
    "clubs": "♣",
    "spades": "♠",
}


@dataclass(frozen=True)
class Card:
    """A dealt card. `value` is whatever the owning game's rank mapping says."""

    suit: str
    rank: str
    value: int

    def to_dict(self) -> Dict:
        return {"suit": self.suit, "rank": self.rank, "value": self.value, "display": card_display(self)}

    def __repr__(self):
        return card_display(self)


Deck = Tuple[Card, ...]


def build_deck(ranks: Sequence[str], value_of: Callable[[str], int]) -> Deck:
    """Create and shuffle a standard 52-card deck."""
    cards = [Card(suit, rank, value_of(rank)) for suit in SUITS for rank in ranks]
    return tuple(rng.shuffle(cards))


def draw_top(deck: Deck) -> Tuple[Card, Deck]:
    """Take the last card of the deck. Returns (card, remaining deck)."""
    if not deck:
        raise DeckExhaustedError("Cannot draw from an empty deck")
    return deck[-1], deck[:-1]


def draw_front(deck: Deck) -> Tuple[Card, Deck]:
    """Take the first card of the deck. Returns (card, remaining deck)."""
    if not deck:
        raise DeckExhaustedError("Cannot draw from an empty deck")
    return deck[0], deck[1:]


def remove_card(deck: Deck, card: Card) -> Deck:
    """Return the deck without one copy of `card`."""
    index = deck.index(card)
    return deck[:index] + deck[index + 1:]


def card_display(card: Card) -> str:
    return f"{card.rank}{SUIT_SYMBOLS[card.suit]}"


def is_red_suit(suit: str) -> bool:
    return suit in ("hearts", "diamonds")
