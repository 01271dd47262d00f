"""Observer lists for controller lifecycle events."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pomoclock.models.events import HookEvent
from pomoclock.models.state import TimerSnapshot

HookCallback = Callable[[TimerSnapshot], None]

logger = logging.getLogger("pomoclock.hooks")


class HookRegistry:
    """Per-event observer lists.

    Observers run in registration order. An observer that raises is logged
    and skipped; the remaining observers still run and nothing propagates to
    the controller.
    """

    def __init__(self):
        self._observers: dict[HookEvent, list[HookCallback]] = {
            event: [] for event in HookEvent
        }

    def register(self, event: HookEvent, callback: HookCallback) -> None:
        self._observers[event].append(callback)

    def unregister(self, event: HookEvent, callback: HookCallback) -> bool:
        """Remove the first registration of ``callback``; False if absent."""
        try:
            self._observers[event].remove(callback)
        except ValueError:
            return False
        return True

    def observers(self, event: HookEvent) -> list[HookCallback]:
        return list(self._observers[event])

    def fire(self, event: HookEvent, snapshot: TimerSnapshot) -> None:
        for callback in self.observers(event):
            try:
                callback(snapshot)
            except Exception:
                logger.exception(
                    "%s hook %s failed", event.value, getattr(callback, "__name__", callback)
                )
