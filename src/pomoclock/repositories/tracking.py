"""Time-tracking backend interface.

The phase controller clocks work in and out through this port. Concrete
adapters decide where clock entries end up (local SQLite, a remote task
tracker, ...). Task references are opaque strings to the controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class TrackingBackend(ABC):
    """Abstract base class for clock-in/clock-out operations."""

    @abstractmethod
    def begin_tracking(self, task_ref: str) -> None:
        """Start recording time against ``task_ref``.

        Implementations close any clock that is still running first.
        """

    @abstractmethod
    def end_tracking(self, discard: bool = False) -> None:
        """Stop the running clock.

        Args:
            discard: Drop the elapsed time instead of keeping it
        """

    @abstractmethod
    def is_tracking_active(self) -> bool:
        """Return True while a clock is running."""

    @abstractmethod
    def resolve_current_task_context(self) -> str | None:
        """Return the task that tracking would resume on, if any."""
