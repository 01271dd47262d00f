"""Timer phases and the state owned by the phase controller."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Phase(str, Enum):
    """One discrete interval of the timer."""

    NONE = "none"
    POMODORO = "pomodoro"
    OVERTIME = "overtime"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self in (Phase.SHORT_BREAK, Phase.LONG_BREAK)

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


# Phases whose countdown reaching zero triggers a transition.
EXPIRING_PHASES: frozenset[Phase] = frozenset(
    {Phase.POMODORO, Phase.SHORT_BREAK, Phase.LONG_BREAK}
)


@dataclass
class TimerState:
    """Mutable timer state.

    Only the phase controller writes to this object. ``started_at`` and
    ``end_time`` are both shifted forward on resume so the elapsed and
    remaining values exclude time spent paused.
    """

    phase: Phase = Phase.NONE
    started_at: datetime | None = None
    end_time: datetime | None = None
    pomodoro_count: int = 0
    last_clock_in_time: datetime | None = None
    original_task_ref: str | None = None
    paused: bool = False
    paused_at: datetime | None = None
    paused_task_ref: str | None = None

    @property
    def is_active(self) -> bool:
        return self.phase is not Phase.NONE

    def reference_time(self, now: datetime) -> datetime:
        """Time the countdown is measured at (frozen while paused)."""
        if self.paused and self.paused_at is not None:
            return self.paused_at
        return now

    def remaining_seconds(self, now: datetime) -> float:
        """Seconds until ``end_time``; negative once the deadline has passed."""
        if not self.is_active or self.end_time is None:
            return 0.0
        return (self.end_time - self.reference_time(now)).total_seconds()

    def elapsed_seconds(self, now: datetime) -> float:
        """Seconds spent in the current phase, excluding pauses."""
        if not self.is_active or self.started_at is None:
            return 0.0
        return max(0.0, (self.reference_time(now) - self.started_at).total_seconds())

    def clear_pause(self) -> None:
        self.paused = False
        self.paused_at = None
        self.paused_task_ref = None

    def reset(self) -> None:
        """Return to the inactive phase. The pomodoro count is kept."""
        self.phase = Phase.NONE
        self.started_at = None
        self.end_time = None
        self.clear_pause()

    def snapshot(self, now: datetime) -> TimerSnapshot:
        return TimerSnapshot(
            phase=self.phase,
            remaining_seconds=math.ceil(self.remaining_seconds(now)),
            elapsed_seconds=int(self.elapsed_seconds(now)),
            pomodoro_count=self.pomodoro_count,
            paused=self.paused,
            task_ref=self.original_task_ref,
        )


@dataclass(frozen=True)
class TimerSnapshot:
    """Immutable view of the timer passed to hooks and renderers."""

    phase: Phase
    remaining_seconds: int
    elapsed_seconds: int
    pomodoro_count: int
    paused: bool
    task_ref: str | None

    @property
    def is_active(self) -> bool:
        return self.phase is not Phase.NONE
