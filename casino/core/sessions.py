"""
Storage for rounds that span more than one request (crash, blackjack, poker).
Rounds expire after a TTL so abandoned games don't accumulate.
"""

import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from casino.config import settings
from casino.core.exceptions import RoundNotFoundError
from casino.core.logger import get_logger

logger = get_logger("sessions")


@dataclass
class StoredRound:
    round_id: str
    user_id: str
    game: str
    bet: float
    state: Any
    started_at: float = field(default=0.0)


class RoundStore:
    """
    In-progress rounds keyed by round id.

    A step removes its round with `take()` and puts the successor back with
    `put()`, so a second concurrent step on the same round finds nothing.
    """

    def __init__(self, ttl_seconds: Optional[int] = None, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.sessions.round_ttl_seconds
        self._clock = clock
        self._rounds: Dict[str, StoredRound] = {}
        self._lock = threading.Lock()

    def _prune(self):
        """Remove rounds older than the TTL. Caller holds the lock."""
        now = self._clock()
        expired = [rid for rid, r in self._rounds.items() if now - r.started_at > self.ttl_seconds]
        for rid in expired:
            del self._rounds[rid]
        if expired:
            logger.info(f"Expired {len(expired)} abandoned round(s)")

    def _lookup(self, round_id: str, user_id: str, game: Optional[str]) -> StoredRound:
        stored = self._rounds.get(round_id)
        if stored is None or stored.user_id != user_id or (game and stored.game != game):
            raise RoundNotFoundError(round_id)
        return stored

    def create(self, user_id: str, game: str, bet: float, state: Any) -> StoredRound:
        stored = StoredRound(
            round_id=uuid.uuid4().hex,
            user_id=user_id,
            game=game,
            bet=bet,
            state=state,
            started_at=self._clock(),
        )
        with self._lock:
            self._prune()
            self._rounds[stored.round_id] = stored
        return stored

    def get(self, round_id: str, user_id: str, game: Optional[str] = None) -> StoredRound:
        with self._lock:
            self._prune()
            return self._lookup(round_id, user_id, game)

    def take(self, round_id: str, user_id: str, game: Optional[str] = None) -> StoredRound:
        """Remove and return a round owned by `user_id`."""
        with self._lock:
            self._prune()
            stored = self._lookup(round_id, user_id, game)
            del self._rounds[round_id]
            return stored

    def put(self, stored: StoredRound) -> None:
        """Store the next state of a round previously taken. Its TTL is not refreshed."""
        with self._lock:
            self._rounds[stored.round_id] = stored

    def __len__(self):
        with self._lock:
            self._prune()
            return len(self._rounds)
