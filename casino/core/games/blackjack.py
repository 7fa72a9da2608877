"""
Blackjack - single deck, dealer stands on all 17s, naturals pay 3:2.
Rounds are immutable snapshots: deal/hit/stand take a round and return the next one.
"""

from dataclasses import dataclass, replace
from typing import Callable, Dict, NamedTuple, Optional, Sequence, Tuple

from casino.core.games.cards import Card, Deck, build_deck, draw_top, remove_card

RANKS = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]

PLAYING = "playing"
PLAYER_BUSTED = "player_busted"
DEALER_BUSTED = "dealer_busted"
PLAYER_WIN = "player_win"
DEALER_WIN = "dealer_win"
PUSH = "push"
BLACKJACK = "blackjack"

STATUSES = (PLAYING, PLAYER_BUSTED, DEALER_BUSTED, PLAYER_WIN, DEALER_WIN, PUSH, BLACKJACK)

MULTIPLIERS = {
    BLACKJACK: 2.5,
    PLAYER_WIN: 2,
    DEALER_BUSTED: 2,
    PUSH: 1,
}

# (player_total, dealer_total, deck) -> card to deal from that deck
CardPicker = Callable[[int, int, Deck], Card]


def card_value(rank: str) -> int:
    """Blackjack value of a rank. Aces count 11 here and are reduced per hand."""
    if rank == "A":
        return 11
    if rank in ("J", "Q", "K"):
        return 10
    return int(rank)


class HandValue(NamedTuple):
    value: int
    soft: bool


def calculate_hand_value(cards: Sequence[Card]) -> HandValue:
    """Best total for the cards, counting aces as 1 only while the hand would bust."""
    total = 0
    aces = 0

    for card in cards:
        if card.rank == "A":
            aces += 1
            total += 11
        else:
            total += card.value

    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return HandValue(total, aces > 0)


@dataclass(frozen=True)
class Hand:
    cards: Tuple[Card, ...]
    value: int
    soft: bool
    busted: bool
    blackjack: bool

    @classmethod
    def from_cards(cls, cards: Sequence[Card]) -> "Hand":
        cards = tuple(cards)
        value, soft = calculate_hand_value(cards)
        return cls(
            cards=cards,
            value=value,
            soft=soft,
            busted=value > 21,
            blackjack=len(cards) == 2 and value == 21,
        )

    def add(self, card: Card) -> "Hand":
        return Hand.from_cards(self.cards + (card,))

    def to_dict(self) -> Dict:
        return {
            "cards": [card.to_dict() for card in self.cards],
            "value": self.value,
            "soft": self.soft,
            "busted": self.busted,
            "blackjack": self.blackjack,
        }


@dataclass(frozen=True)
class BlackjackRound:
    player_hand: Hand
    dealer_hand: Hand
    deck: Deck
    status: str = PLAYING

    @property
    def finished(self) -> bool:
        return self.status != PLAYING

    def to_dict(self, reveal_dealer: Optional[bool] = None) -> Dict:
        """Client view of the round. The dealer's hole card stays hidden while playing."""
        if reveal_dealer is None:
            reveal_dealer = self.finished

        if reveal_dealer:
            dealer = self.dealer_hand.to_dict()
        else:
            up_card = self.dealer_hand.cards[0]
            dealer = {"cards": [up_card.to_dict(), {"hidden": True}], "value": up_card.value}

        return {
            "player_hand": self.player_hand.to_dict(),
            "dealer_hand": dealer,
            "status": self.status,
        }


def create_deck() -> Deck:
    return build_deck(RANKS, card_value)


def _initial_status(player: Hand, dealer: Hand) -> str:
    if player.blackjack and dealer.blackjack:
        return PUSH
    if player.blackjack:
        return BLACKJACK
    if dealer.blackjack:
        return DEALER_WIN
    return PLAYING


def start_game(deck: Optional[Deck] = None, pick_player_card: Optional[CardPicker] = None) -> BlackjackRound:
    """
    Deal two cards each, alternating player and dealer.

    Args:
        deck: Shuffled deck to deal from; a fresh one is built when omitted
        pick_player_card: Chooses the player's second card from the deck instead of
            taking the top card. Only the opening deal consults it.
    """
    if deck is None:
        deck = create_deck()

    first, deck = draw_top(deck)
    up_card, deck = draw_top(deck)

    if pick_player_card is not None:
        second = pick_player_card(first.value, up_card.value, deck)
        deck = remove_card(deck, second)
    else:
        second, deck = draw_top(deck)

    hole_card, deck = draw_top(deck)

    player = Hand.from_cards((first, second))
    dealer = Hand.from_cards((up_card, hole_card))

    return BlackjackRound(player, dealer, deck, _initial_status(player, dealer))


def hit(game: BlackjackRound) -> BlackjackRound:
    if game.status != PLAYING:
        return game

    card, deck = draw_top(game.deck)
    player = game.player_hand.add(card)

    return replace(game, deck=deck, player_hand=player, status=PLAYER_BUSTED if player.busted else PLAYING)


def stand(game: BlackjackRound) -> BlackjackRound:
    if game.status != PLAYING:
        return game

    deck = game.deck
    dealer = game.dealer_hand

    # Dealer stands on soft and hard 17
    while dealer.value < 17:
        card, deck = draw_top(deck)
        dealer = dealer.add(card)

    player_value = game.player_hand.value

    if dealer.busted:
        status = DEALER_BUSTED
    elif dealer.value > player_value:
        status = DEALER_WIN
    elif player_value > dealer.value:
        status = PLAYER_WIN
    else:
        status = PUSH

    return replace(game, deck=deck, dealer_hand=dealer, status=status)


def get_multiplier(status: str) -> float:
    return MULTIPLIERS.get(status, 0)
