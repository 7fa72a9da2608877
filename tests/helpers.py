"""Card and grid builders shared by the game tests."""

from casino.core.games import blackjack, poker
from casino.core.games.cards import Card


def bj(rank: str, suit: str = "spades") -> Card:
    return Card(suit, rank, blackjack.card_value(rank))


def pk(rank: str, suit: str = "spades") -> Card:
    return Card(suit, rank, poker.rank_value(rank))


def pk_hand(spec: str):
    """'10h Jh Qh Kh Ah' -> five poker cards."""
    suits = {"h": "hearts", "d": "diamonds", "c": "clubs", "s": "spades"}
    return [pk(token[:-1], suits[token[-1]]) for token in spec.split()]


def bj_deck(*ranks: str):
    """Deck whose first rank listed is dealt first (cards come off the end)."""
    return tuple(bj(rank) for rank in reversed(ranks))
