"""Transient status message with a single replaceable expiry deadline."""

from __future__ import annotations

import time
from collections.abc import Callable

SUCCESS_MESSAGE_SECONDS = 2.0
ERROR_MESSAGE_SECONDS = 3.0


class NotificationTimer:
    """Hold one message and the monotonic time at which it expires.

    ``show`` replaces both message and deadline at once, so a newer message
    never inherits an older expiry. The owner calls ``tick`` from its loop.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self.message = ""
        self._expires_at: float | None = None

    @property
    def pending(self) -> bool:
        return self._expires_at is not None

    def show(self, message: str, duration_seconds: float) -> None:
        self.message = message
        self._expires_at = self._clock() + max(0.0, duration_seconds)

    def tick(self, now: float | None = None) -> bool:
        """Clear an expired message; returns whether the message changed."""
        if self._expires_at is None:
            return False
        current = self._clock() if now is None else now
        if current < self._expires_at:
            return False
        self.message = ""
        self._expires_at = None
        return True

    def cancel(self) -> None:
        """Drop the message and its pending expiry."""
        self.message = ""
        self._expires_at = None
