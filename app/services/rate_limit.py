"""Pluggable login throttle: N failed attempts per email+IP within a decay window.

Applied by the HTTP layer around the unified login; the orchestrator itself has no
retry or backoff logic.
"""

import logging
import math
import time
from collections.abc import Callable
from threading import Lock
from typing import Protocol

logger = logging.getLogger(__name__)


class LoginRateLimiter(Protocol):
    def too_many_attempts(self, key: str) -> bool: ...

    def hit(self, key: str) -> int: ...

    def clear(self, key: str) -> None: ...

    def available_in(self, key: str) -> int: ...


def throttle_key(email: str, ip_address: str) -> str:
    """Limiter key for one email from one client address."""
    return f"{email.strip().lower()}|{ip_address}"


class InMemoryLoginRateLimiter:
    """
    Fixed-window counter per key, kept in process memory.

    The first hit opens a window of decay_seconds; once max_attempts hits land in it
    the key is locked until the window expires. Thread-safe.

    hit() also sweeps the expired windows of every other key, at most once per
    decay_seconds, so keys that are never seen again do not accumulate.
    """

    def __init__(
        self,
        max_attempts: int,
        decay_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_attempts = max_attempts
        self.decay_seconds = decay_seconds
        self._clock = clock
        self._lock = Lock()
        # key -> (hits, window expiry)
        self._windows: dict[str, tuple[int, float]] = {}
        self._next_sweep_at = clock() + decay_seconds

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)

    def _current(self, key: str, now: float) -> tuple[int, float] | None:
        window = self._windows.get(key)
        if window is None:
            return None
        if window[1] <= now:
            del self._windows[key]
            return None
        return window

    def _sweep(self, now: float) -> None:
        expired = [key for key, (_, expires_at) in self._windows.items() if expires_at <= now]
        for key in expired:
            del self._windows[key]
        self._next_sweep_at = now + self.decay_seconds
        if expired:
            logger.debug("Swept expired throttle windows: removed=%d kept=%d", len(expired), len(self._windows))

    def too_many_attempts(self, key: str) -> bool:
        with self._lock:
            window = self._current(key, self._clock())
            return window is not None and window[0] >= self.max_attempts

    def hit(self, key: str) -> int:
        """Count one failed attempt; returns the hits in the current window."""
        with self._lock:
            now = self._clock()
            if now >= self._next_sweep_at:
                self._sweep(now)
            window = self._current(key, now)
            if window is None:
                window = (0, now + self.decay_seconds)
            hits = window[0] + 1
            self._windows[key] = (hits, window[1])
        if hits == self.max_attempts:
            logger.warning("Login throttle engaged: key=%s", key)
        return hits

    def clear(self, key: str) -> None:
        with self._lock:
            self._windows.pop(key, None)

    def available_in(self, key: str) -> int:
        """Seconds until the key's window expires (0 if none)."""
        with self._lock:
            now = self._clock()
            window = self._current(key, now)
            if window is None:
                return 0
            return max(0, math.ceil(window[1] - now))
