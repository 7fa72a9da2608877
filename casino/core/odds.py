"""
Per-user odds policies.
An administrator assigns a policy out-of-band; each round reads it once and
hands it to the rigging layer when the mode is anything but normal.
"""

import threading
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from casino.core.exceptions import InvalidPolicyError
from casino.core.logger import get_logger
from casino.core.rng import rng

logger = get_logger("odds")


class OddsMode(str, Enum):
    NORMAL = "normal"
    ALWAYS_WIN = "always_win"
    ALWAYS_LOSE = "always_lose"
    CUSTOM = "custom"


class OddsPolicy(BaseModel):
    """win_rate is a percentage and only matters in custom mode."""

    model_config = ConfigDict(frozen=True)

    mode: OddsMode = OddsMode.NORMAL
    win_rate: float = Field(default=50.0, ge=0, le=100)

    @property
    def is_rigged(self) -> bool:
        return self.mode != OddsMode.NORMAL


DEFAULT_POLICY = OddsPolicy()


def should_win(policy: OddsPolicy, natural_win_chance: Optional[float] = None) -> bool:
    """
    Decide whether the next round is a win under the policy.

    Args:
        policy: The user's odds policy
        natural_win_chance: Fair win chance in percent, used in normal mode;
            a coin flip when omitted
    """
    if policy.mode == OddsMode.ALWAYS_WIN:
        return True
    if policy.mode == OddsMode.ALWAYS_LOSE:
        return False
    if policy.mode == OddsMode.CUSTOM:
        return rng.random_float() * 100 < policy.win_rate
    if natural_win_chance is not None:
        return rng.random_float() * 100 < natural_win_chance
    return rng.random_float() < 0.5


class OddsStore:
    """In-memory policy store keyed by user id. Absent users get the default policy."""

    def __init__(self):
        self._policies: Dict[str, OddsPolicy] = {}
        self._lock = threading.Lock()

    def get_policy(self, user_id: str) -> OddsPolicy:
        with self._lock:
            return self._policies.get(user_id, DEFAULT_POLICY)

    def set_policy(self, user_id: str, mode: str, win_rate: float = 50.0) -> OddsPolicy:
        try:
            policy = OddsPolicy(mode=mode, win_rate=win_rate)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or None
            raise InvalidPolicyError(f"Invalid odds policy: {error['msg']}", field=field) from e

        with self._lock:
            self._policies[user_id] = policy

        logger.warning(f"Odds policy for user {user_id} set to {policy.mode.value} ({policy.win_rate}%)")
        return policy

    def reset_policy(self, user_id: str) -> None:
        with self._lock:
            removed = self._policies.pop(user_id, None)
        if removed is not None:
            logger.warning(f"Odds policy for user {user_id} reset to normal")

    def list_policies(self) -> Dict[str, OddsPolicy]:
        with self._lock:
            return dict(self._policies)
