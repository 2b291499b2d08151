"""
Rate Limiter

Sliding-window admission control keyed by client identifier (the
originating address of a login request).

An attempt counts against a client while its age is strictly below the
window; an attempt exactly one window old has expired.
"""

import math
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional

from core.logger import get_logger

logger = get_logger(__name__)

WINDOW_SECONDS = 60.0
MAX_ATTEMPTS = 3
LOCK_STRIPES = 64


@dataclass(frozen=True)
class RateLimitDecision:
    """Result of an admission check."""
    allowed: bool
    remaining_attempts: int
    retry_after_seconds: Optional[int] = None


class RateLimiter:
    """
    Per-client sliding-window limiter.

    The table of attempt timestamps is guarded by a single lock. Callers
    that need admit -> record -> clear to happen as one unit for a client
    wrap the sequence in ``hold(client_id)``, which takes one of a fixed
    set of striped locks.
    """

    def __init__(
        self,
        window_seconds: float = WINDOW_SECONDS,
        max_attempts: int = MAX_ATTEMPTS,
        clock: Callable[[], float] = time.time,
        lock_stripes: int = LOCK_STRIPES,
    ):
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if max_attempts <= 0:
            raise ValueError("max_attempts must be positive")
        if lock_stripes <= 0:
            raise ValueError("lock_stripes must be positive")

        self.window_seconds = window_seconds
        self.max_attempts = max_attempts
        self._clock = clock

        self._attempts: Dict[str, List[float]] = {}
        self._lock = threading.Lock()
        # Fixed pool; clients hashing to the same stripe share a lock
        self._client_locks: List[threading.Lock] = [threading.Lock() for _ in range(lock_stripes)]

    def _recent(self, client_id: str, now: float) -> List[float]:
        """Prune expired timestamps for a client. Caller holds ``_lock``."""
        attempts = self._attempts.get(client_id)
        if not attempts:
            return []

        recent = [t for t in attempts if now - t < self.window_seconds]
        if recent:
            self._attempts[client_id] = recent
        else:
            del self._attempts[client_id]
        return recent

    def admit(self, client_id: str) -> RateLimitDecision:
        """Decide whether another attempt from this client may proceed."""
        now = self._clock()
        with self._lock:
            recent = self._recent(client_id, now)

        if len(recent) >= self.max_attempts:
            retry_after = math.ceil(recent[0] + self.window_seconds - now)
            retry_after = max(1, min(retry_after, math.ceil(self.window_seconds)))
            return RateLimitDecision(
                allowed=False,
                remaining_attempts=0,
                retry_after_seconds=retry_after,
            )

        return RateLimitDecision(
            allowed=True,
            remaining_attempts=self.max_attempts - len(recent),
        )

    def record_attempt(self, client_id: str) -> None:
        """Record an attempt from this client at the current time."""
        now = self._clock()
        with self._lock:
            attempts = self._attempts.setdefault(client_id, [])
            # Keep timestamps ordered even if the clock steps backwards
            if attempts and now < attempts[-1]:
                now = attempts[-1]
            attempts.append(now)

    def clear(self, client_id: str) -> None:
        """Forget every recorded attempt for this client."""
        with self._lock:
            self._attempts.pop(client_id, None)
        logger.debug(f"Rate limit cleared for {client_id}")

    def attempt_count(self, client_id: str) -> int:
        """Number of attempts from this client still inside the window."""
        now = self._clock()
        with self._lock:
            return len(self._recent(client_id, now))

    def has_entry(self, client_id: str) -> bool:
        """Whether any timestamps are stored for this client."""
        with self._lock:
            return client_id in self._attempts

    @contextmanager
    def hold(self, client_id: str) -> Iterator[None]:
        """Serialize a read-modify-write sequence for one client."""
        with self._client_locks[hash(client_id) % len(self._client_locks)]:
            yield
