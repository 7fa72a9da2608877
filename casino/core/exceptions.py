class CasinoError(Exception):
    """Base class for errors raised by the casino engine."""


class InvalidBetError(CasinoError, ValueError):
    """Bet parameters rejected at the boundary, before any money moves."""

    kind = "invalid_parameters"

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.message = message
        self.field = field


class InvalidPolicyError(InvalidBetError):
    """An administrator tried to assign an odds policy with an unknown mode or win rate."""


class InsufficientFundsError(CasinoError):
    def __init__(self, user_id: str, balance: float, required: float):
        super().__init__(f"Insufficient balance: {balance:.2f} < {required:.2f}")
        self.user_id = user_id
        self.balance = balance
        self.required = required


class RoundNotFoundError(CasinoError, KeyError):
    """Unknown, expired, or foreign round id."""

    def __init__(self, round_id: str):
        super().__init__(round_id)
        self.round_id = round_id

    def __str__(self):
        return f"Round not found or expired: {self.round_id}"


class DeckExhaustedError(CasinoError, RuntimeError):
    """A round tried to draw from an empty deck. Never expected in play."""
