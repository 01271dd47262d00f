"""Periodic trigger that drives ``PhaseController.tick``.

There is exactly one logical timer handle per scheduler. Arming always
cancels the previous handle first, so start/pause/resume can never leave two
triggers running for one timer. Cancelling is simply disarming.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable

TICK_INTERVAL_SECONDS = 1.0


class TickScheduler(ABC):
    """A single re-armable periodic trigger."""

    @abstractmethod
    def arm(
        self, callback: Callable[[], None], interval: float = TICK_INTERVAL_SECONDS
    ) -> None:
        """(Re-)register ``callback`` to run every ``interval`` seconds."""

    @abstractmethod
    def disarm(self) -> None:
        """Cancel the trigger. Safe to call when nothing is armed."""

    @property
    @abstractmethod
    def is_armed(self) -> bool:
        """True while a trigger is registered."""


class AsyncioTickScheduler(TickScheduler):
    """Trigger backed by the running asyncio event loop.

    Firings are scheduled against absolute loop deadlines so the cadence does
    not drift with callback duration. The next firing is scheduled before the
    callback runs; a callback that disarms or re-arms therefore wins.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._callback: Callable[[], None] | None = None
        self._interval = TICK_INTERVAL_SECONDS
        self._deadline = 0.0

    def arm(
        self, callback: Callable[[], None], interval: float = TICK_INTERVAL_SECONDS
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be greater than zero")
        self.disarm()

        loop = self._get_loop()
        self._callback = callback
        self._interval = interval
        self._deadline = loop.time() + interval
        self._handle = loop.call_at(self._deadline, self._fire)

    def disarm(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._callback = None

    @property
    def is_armed(self) -> bool:
        return self._handle is not None

    def _fire(self) -> None:
        callback = self._callback
        if callback is None:
            return

        loop = self._get_loop()
        self._deadline += self._interval
        # Skip missed firings instead of bursting after a stall
        if self._deadline <= loop.time():
            self._deadline = loop.time() + self._interval
        self._handle = loop.call_at(self._deadline, self._fire)

        callback()

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop
