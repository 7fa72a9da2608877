"""
In-memory balances, transaction log and game history.
Stands in for the persistent store; amounts are kept as Decimal and exposed as floats.
The transaction log and game history only ever grow, for the lifetime of the process.
"""

import threading
import time
from decimal import Decimal
from typing import Dict, List, Optional

import orjson

from casino.config import settings
from casino.core.exceptions import InsufficientFundsError
from casino.core.logger import get_logger
from casino.core.money import floor_cents, to_decimal

logger = get_logger("ledger")


class Ledger:
    def __init__(self, starting_balance: Optional[float] = None):
        if starting_balance is None:
            starting_balance = settings.economy.starting_balance
        self.starting_balance = to_decimal(starting_balance)
        self._balances: Dict[str, Decimal] = {}
        self._transactions: List[Dict] = []
        self._history: List[Dict] = []
        self._lock = threading.RLock()

    def _wallet(self, user_id: str) -> Decimal:
        """Current balance, opening a wallet with the starting balance on first use."""
        return self._balances.setdefault(user_id, self.starting_balance)

    def open_account(self, user_id: str, balance: Optional[float] = None) -> float:
        with self._lock:
            self._balances[user_id] = self.starting_balance if balance is None else to_decimal(balance)
            return float(self._balances[user_id])

    def get_balance(self, user_id: str) -> float:
        with self._lock:
            return float(self._wallet(user_id))

    def log_transaction(self, user_id: str, tx_type: str, amount: float, game: str = None):
        self._transactions.append({
            "user_id": user_id,
            "type": tx_type,
            "amount": amount,
            "game": game,
            "timestamp": time.time(),
        })

    def withdraw(self, user_id: str, amount: float, game: str = None) -> float:
        """Take a stake. Returns the new balance."""
        stake = to_decimal(amount)
        with self._lock:
            balance = self._wallet(user_id)
            if balance < stake:
                raise InsufficientFundsError(user_id, float(balance), float(stake))
            self._balances[user_id] = balance - stake
            self.log_transaction(user_id, "bet", -float(stake), game)
            return float(self._balances[user_id])

    def deposit(self, user_id: str, amount: float, game: str = None, tx_type: str = "win") -> float:
        """Credit winnings (or any other amount). Zero amounts leave no transaction."""
        credit = to_decimal(floor_cents(amount))
        with self._lock:
            balance = self._wallet(user_id) + credit
            self._balances[user_id] = balance
            if credit > 0:
                self.log_transaction(user_id, tx_type, float(credit), game)
            return float(balance)

    def record_game(self, user_id: str, game: str, bet: float, result: float, details: Dict) -> Dict:
        """
        Append a history entry. `details` is stored as serialized JSON.

        `result` is the signed net of the round (payout minus bet), not the gross
        payout, so a loss shows as the negative stake and a push as 0.
        """
        entry = {
            "user_id": user_id,
            "game": game,
            "bet": bet,
            "result": result,
            "details": orjson.dumps(details, default=str).decode("utf-8"),
            "timestamp": time.time(),
        }
        with self._lock:
            self._history.append(entry)
        return entry

    def get_transactions(self, user_id: str, limit: int = 50) -> List[Dict]:
        with self._lock:
            return [t for t in reversed(self._transactions) if t["user_id"] == user_id][:limit]

    def get_history(self, user_id: str, limit: int = 50) -> List[Dict]:
        with self._lock:
            return [h for h in reversed(self._history) if h["user_id"] == user_id][:limit]

    @staticmethod
    def load_details(entry: Dict) -> Dict:
        return orjson.loads(entry["details"])
