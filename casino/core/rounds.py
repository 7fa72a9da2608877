"""
Round orchestration: validate the bet, take the stake, draw the outcome
(through the rigging layer when the user's policy asks for it), pay out,
and record the round.

Single-request games settle inside one call. Crash, blackjack and poker keep
their state in the injected RoundStore between calls.
"""

from functools import partial
from typing import Dict, List, Optional

from casino.core.games import blackjack, poker
from casino.core.games.crash import crash_game
from casino.core.games.dice import dice_game
from casino.core.games.roulette import roulette_game
from casino.core.games.slots import slots_game
from casino.core.ledger import Ledger
from casino.core.logger import get_logger
from casino.core.money import payout_for, sum_cents
from casino.core.odds import OddsStore
from casino.core.rigging import rig_blackjack_card, rig_dice_roll, rig_roulette_number, rig_slots_grid
from casino.core.schemas import (
    BetRequest,
    CrashCashOut,
    DiceBet,
    PokerDraw,
    RouletteBet,
    check_cash_out,
    check_limits,
    validate_bet,
)
from casino.core.sessions import RoundStore

logger = get_logger("rounds")


class RoundOrchestrator:
    def __init__(
        self,
        ledger: Optional[Ledger] = None,
        odds: Optional[OddsStore] = None,
        rounds: Optional[RoundStore] = None,
    ):
        self.ledger = ledger or Ledger()
        self.odds = odds or OddsStore()
        self.rounds = rounds or RoundStore()

    # ==================== Helpers ====================

    def _stake(self, user_id: str, game: str, amount: float) -> None:
        check_limits(game, amount)
        self.ledger.withdraw(user_id, amount, game)

    def _settle(self, user_id: str, game: str, bet: float, payout: float, details: Dict) -> Dict:
        """Credit the payout, write history, and return the balance after the round."""
        balance = self.ledger.deposit(user_id, payout, game)
        net = sum_cents([payout, -bet])
        self.ledger.record_game(user_id, game, bet, net, details)
        logger.info(f"User {user_id} {game}: bet {bet:.2f}, payout {payout:.2f}")
        return {"new_balance": balance, "net": net}

    # ==================== Dice ====================

    def play_dice(self, user_id: str, amount: float, target: int, is_over: bool) -> Dict:
        bet = validate_bet(DiceBet, amount=amount, target=target, is_over=is_over)
        self._stake(user_id, "dice", bet.amount)

        policy = self.odds.get_policy(user_id)
        forced_roll = rig_dice_roll(policy, bet.target, bet.is_over) if policy.is_rigged else None

        result = dice_game.play(bet.amount, bet.target, bet.is_over, forced_roll)
        result.update(self._settle(user_id, "dice", bet.amount, result["payout"], {
            "roll": result["roll"],
            "target": bet.target,
            "is_over": bet.is_over,
            "multiplier": result["multiplier"],
        }))
        return result

    # ==================== Crash ====================

    def start_crash(self, user_id: str, amount: float) -> Dict:
        """
        Take the stake and fix the crash point for a new round.
        The crash point is returned so the client can animate toward it.
        """
        bet = validate_bet(BetRequest, amount=amount)
        self._stake(user_id, "crash", bet.amount)

        crash_point = crash_game.generate_crash_point()
        stored = self.rounds.create(user_id, "crash", bet.amount, crash_point)

        return {
            "round_id": stored.round_id,
            "crash_point": crash_point,
            "bet": bet.amount,
            "new_balance": self.ledger.get_balance(user_id),
        }

    def cash_out_crash(self, user_id: str, round_id: str, cash_out_at: float) -> Dict:
        request = validate_bet(CrashCashOut, round_id=round_id, cash_out_at=cash_out_at)
        check_cash_out(request.cash_out_at)
        stored = self.rounds.take(request.round_id, user_id, "crash")

        result = crash_game.play(stored.bet, request.cash_out_at, stored.state)
        result["round_id"] = stored.round_id
        result.update(self._settle(user_id, "crash", stored.bet, result["payout"], {
            "crash_point": stored.state,
            "cash_out_at": request.cash_out_at,
            "cashed_out": result["cashed_out"],
        }))
        return result

    def crash_round(self, user_id: str, round_id: str) -> Dict:
        """The multiplier reached the crash point before the player cashed out."""
        stored = self.rounds.take(round_id, user_id, "crash")

        result = {
            "round_id": stored.round_id,
            "crash_point": stored.state,
            "cashed_out": False,
            "cash_out_multiplier": 0.0,
            "win": False,
            "payout": 0.0,
            "bet": stored.bet,
        }
        result.update(self._settle(user_id, "crash", stored.bet, 0.0, {
            "crash_point": stored.state,
            "cash_out_at": None,
            "cashed_out": False,
        }))
        return result

    # ==================== Roulette ====================

    def play_roulette(self, user_id: str, bets: List[Dict]) -> Dict:
        request = validate_bet(RouletteBet, bets=bets)
        total_bet = sum_cents(bet.amount for bet in request.bets)
        self._stake(user_id, "roulette", total_bet)

        placed = [bet.as_dict() for bet in request.bets]
        policy = self.odds.get_policy(user_id)
        forced_number = rig_roulette_number(policy, placed) if policy.is_rigged else None

        result = roulette_game.play(placed, forced_number)
        result["bet"] = total_bet
        result.update(self._settle(user_id, "roulette", total_bet, result["total_payout"], {
            "number": result["number"],
            "color": result["color"],
            "bets": result["bets"],
        }))
        return result

    # ==================== Slots ====================

    def play_slots(self, user_id: str, amount: float) -> Dict:
        bet = validate_bet(BetRequest, amount=amount)
        self._stake(user_id, "slots", bet.amount)

        policy = self.odds.get_policy(user_id)
        forced_grid = rig_slots_grid(policy) if policy.is_rigged else None

        result = slots_game.play(bet.amount, forced_grid)
        result.update(self._settle(user_id, "slots", bet.amount, result["payout"], {
            "grid": result["grid"],
            "win_lines": result["win_lines"],
            "total_multiplier": result["total_multiplier"],
        }))
        return result

    # ==================== Blackjack ====================

    def _blackjack_view(self, stored, game: blackjack.BlackjackRound) -> Dict:
        view = game.to_dict()
        view.update({"round_id": stored.round_id, "bet": stored.bet, "game_over": False})
        return view

    def _finish_blackjack(self, stored, game: blackjack.BlackjackRound) -> Dict:
        multiplier = blackjack.get_multiplier(game.status)
        payout = payout_for(stored.bet, multiplier)

        view = game.to_dict(reveal_dealer=True)
        view.update({
            "round_id": stored.round_id,
            "bet": stored.bet,
            "multiplier": multiplier,
            "payout": payout,
            "win": multiplier > 1,
            "game_over": True,
        })
        view.update(self._settle(stored.user_id, "blackjack", stored.bet, payout, {
            "player_value": game.player_hand.value,
            "dealer_value": game.dealer_hand.value,
            "status": game.status,
            "multiplier": multiplier,
        }))
        return view

    def start_blackjack(self, user_id: str, amount: float) -> Dict:
        bet = validate_bet(BetRequest, amount=amount)
        self._stake(user_id, "blackjack", bet.amount)

        # Only the opening deal is steered; hits and the dealer's draw stay fair
        policy = self.odds.get_policy(user_id)
        picker = partial(rig_blackjack_card, policy) if policy.is_rigged else None

        game = blackjack.start_game(pick_player_card=picker)
        stored = self.rounds.create(user_id, "blackjack", bet.amount, game)

        if game.finished:
            self.rounds.take(stored.round_id, user_id, "blackjack")
            return self._finish_blackjack(stored, game)
        return self._blackjack_view(stored, game)

    def hit_blackjack(self, user_id: str, round_id: str) -> Dict:
        stored = self.rounds.take(round_id, user_id, "blackjack")
        game = blackjack.hit(stored.state)

        if game.finished:
            return self._finish_blackjack(stored, game)

        stored.state = game
        self.rounds.put(stored)
        return self._blackjack_view(stored, game)

    def stand_blackjack(self, user_id: str, round_id: str) -> Dict:
        stored = self.rounds.take(round_id, user_id, "blackjack")
        return self._finish_blackjack(stored, blackjack.stand(stored.state))

    # ==================== Video Poker ====================

    def deal_poker(self, user_id: str, amount: float) -> Dict:
        bet = validate_bet(BetRequest, amount=amount)
        self._stake(user_id, "poker", bet.amount)

        hand, deck = poker.deal_hand(poker.create_deck())
        stored = self.rounds.create(user_id, "poker", bet.amount, (tuple(hand), deck))

        return {
            "round_id": stored.round_id,
            "hand": [card.to_dict() for card in hand],
            "bet": bet.amount,
            "phase": "draw",
        }

    def draw_poker(self, user_id: str, round_id: str, hold_indices: Optional[List[int]] = None) -> Dict:
        request = validate_bet(PokerDraw, round_id=round_id, hold_indices=hold_indices or [])
        stored = self.rounds.take(request.round_id, user_id, "poker")

        hand, deck = stored.state
        new_hand, _ = poker.redraw(hand, deck, request.hold_indices)
        ranked = poker.evaluate_hand(new_hand)
        payout = payout_for(stored.bet, ranked["multiplier"])

        result = {
            "round_id": stored.round_id,
            "hand": [card.to_dict() for card in new_hand],
            "held": request.hold_indices,
            "rank": ranked["rank"],
            "multiplier": ranked["multiplier"],
            "payout": payout,
            "win": payout > 0,
            "bet": stored.bet,
            "phase": "complete",
        }
        result.update(self._settle(user_id, "poker", stored.bet, payout, {
            "hand": [repr(card) for card in new_hand],
            "hand_rank": ranked["rank"],
            "multiplier": ranked["multiplier"],
        }))
        return result
