"""
Bet models validated at the boundary.
Anything that reaches a game module has already passed through here.
"""

from typing import Annotated, List, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from casino.config import settings
from casino.core.exceptions import InvalidBetError

RouletteBetType = Literal[
    "number", "red", "black", "odd", "even", "1-18", "19-36", "1st12", "2nd12", "3rd12"
]

Pocket = Annotated[int, Field(ge=0, le=36)]
HoldIndex = Annotated[int, Field(ge=0, le=4)]


class BetRequest(BaseModel):
    amount: float = Field(gt=0, allow_inf_nan=False)


class DiceBet(BetRequest):
    target: int = Field(ge=1, le=99)
    is_over: bool


class CrashCashOut(BaseModel):
    round_id: str = Field(min_length=1)
    cash_out_at: float = Field(ge=1.01, allow_inf_nan=False)


class RouletteBetItem(BetRequest):
    type: RouletteBetType
    numbers: Optional[List[Pocket]] = None

    @model_validator(mode="after")
    def straight_bets_need_numbers(self):
        if self.type == "number" and not self.numbers:
            raise ValueError("a 'number' bet must list at least one number")
        return self

    def as_dict(self) -> dict:
        return {"type": self.type, "numbers": self.numbers, "amount": self.amount}


class RouletteBet(BaseModel):
    bets: List[RouletteBetItem] = Field(min_length=1)

    @property
    def amount(self) -> float:
        return sum(bet.amount for bet in self.bets)


class PokerDraw(BaseModel):
    round_id: str = Field(min_length=1)
    hold_indices: List[HoldIndex] = Field(default_factory=list)

    @field_validator("hold_indices")
    @classmethod
    def unique_positions(cls, value):
        if len(set(value)) != len(value):
            raise ValueError("hold positions must be unique")
        return sorted(value)


Model = TypeVar("Model", bound=BaseModel)


def validate_bet(model: Type[Model], **data) -> Model:
    """Build a bet model, turning pydantic errors into InvalidBetError."""
    try:
        return model(**data)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or None
        raise InvalidBetError(f"Invalid bet parameters: {error['msg']}", field=field) from e


def check_limits(game: str, amount: float) -> None:
    """Enforce the game's enabled flag and configured stake range."""
    config = getattr(settings.games, game)

    if not config.enabled:
        raise InvalidBetError(f"{game} is currently disabled", field="game")

    if amount < config.min_bet or amount > config.max_bet:
        raise InvalidBetError(
            f"Bet must be between {config.min_bet} and {config.max_bet}", field="amount"
        )


def check_cash_out(cash_out_at: float) -> None:
    """Reject crash cash-outs below the configured minimum multiplier."""
    minimum = settings.games.crash.min_cash_out

    if cash_out_at < minimum:
        raise InvalidBetError(f"Cash-out must be at least {minimum:.2f}x", field="cash_out_at")
