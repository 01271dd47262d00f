"""Configuration models for pomoclock.

All settings live in a single ``AppConfig`` document persisted as JSON by
``ConfigService``. The phase controller reads it through a provider callable
each time an operation runs, so edits take effect on the next tick.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .events import CueEvent
from .state import Phase


class DurationConfig(BaseModel):
    """Phase lengths in minutes."""

    pomodoro: int = Field(default=25, description="Work phase length")
    short_break: int = Field(default=5, description="Short break length")
    long_break: int = Field(default=20, description="Long break length")

    @field_validator("pomodoro", "short_break", "long_break")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("durations must be greater than zero")
        return v

    def seconds_for(self, phase: Phase) -> int:
        """Length of ``phase`` in seconds. Overtime has no natural end."""
        if phase is Phase.POMODORO:
            return self.pomodoro * 60
        if phase is Phase.SHORT_BREAK:
            return self.short_break * 60
        if phase is Phase.LONG_BREAK:
            return self.long_break * 60
        return 0


class BehaviourConfig(BaseModel):
    """Flags that change how transitions are carried out."""

    long_break_frequency: int = Field(
        default=4, description="Completed pomodoros between long breaks"
    )
    auto_continue: bool = Field(
        default=False, description="Start the next pomodoro when a break ends"
    )
    manual_break: bool = Field(
        default=False, description="Enter overtime instead of starting a break"
    )
    ask_upon_killing: bool = Field(default=True)
    keep_killed_time: bool = Field(
        default=False, description="Keep clocked time of killed pomodoros"
    )
    clock_breaks: bool = Field(default=False, description="Keep clocking during breaks")
    expiry_minutes: int = Field(
        default=120, description="Idle time after which the count may be reset"
    )

    @field_validator("long_break_frequency")
    @classmethod
    def validate_frequency(cls, v: int) -> int:
        if v < 1:
            raise ValueError("long_break_frequency must be at least 1")
        return v

    @field_validator("expiry_minutes")
    @classmethod
    def validate_expiry(cls, v: int) -> int:
        if v < 0:
            raise ValueError("expiry_minutes cannot be negative")
        return v


class SoundEventConfig(BaseModel):
    """Sound settings for a single cue event."""

    enabled: bool = Field(default=True)
    path: str | None = Field(default=None, description="Audio file to play")
    args: list[str] = Field(default_factory=list, description="Extra player args")


class SoundConfig(BaseModel):
    """Audio cue settings."""

    play_sounds: bool = Field(default=True, description="Master switch for all cues")
    player: str | None = Field(
        default=None, description="External player command; autodetected if unset"
    )
    start: SoundEventConfig = Field(
        default_factory=lambda: SoundEventConfig(enabled=False)
    )
    pomodoro_finished: SoundEventConfig = Field(default_factory=SoundEventConfig)
    overtime: SoundEventConfig = Field(default_factory=SoundEventConfig)
    killed: SoundEventConfig = Field(
        default_factory=lambda: SoundEventConfig(enabled=False)
    )
    short_break_finished: SoundEventConfig = Field(default_factory=SoundEventConfig)
    long_break_finished: SoundEventConfig = Field(default_factory=SoundEventConfig)
    tick: SoundEventConfig = Field(
        default_factory=lambda: SoundEventConfig(enabled=False)
    )


class TickingConfig(BaseModel):
    """Per-second ticking cue."""

    phases: list[Phase] = Field(default_factory=lambda: [Phase.POMODORO])
    frequency: int = Field(default=1, description="Seconds between ticks")

    @field_validator("frequency")
    @classmethod
    def validate_frequency(cls, v: int) -> int:
        if v < 1:
            raise ValueError("ticking frequency must be at least 1 second")
        return v


class CueMessage(BaseModel):
    """Notification text; ``body`` may reference ``{break_name}``."""

    title: str
    body: str = ""


class NotificationConfig(BaseModel):
    """Notification settings, keyed by cue event name."""

    enabled: bool = Field(default=True)
    start: CueMessage | None = None
    pomodoro_finished: CueMessage | None = Field(
        default_factory=lambda: CueMessage(
            title="Pomodoro completed!", body="Time for a {break_name}."
        )
    )
    overtime: CueMessage | None = Field(
        default_factory=lambda: CueMessage(
            title="Pomodoro completed. Now on overtime!",
            body="Start the break by invoking the timer again.",
        )
    )
    killed: CueMessage | None = Field(
        default_factory=lambda: CueMessage(
            title="Pomodoro killed.", body="One does not simply kill a pomodoro!"
        )
    )
    short_break_finished: CueMessage | None = Field(
        default_factory=lambda: CueMessage(
            title="Short break finished.", body="Ready for another pomodoro?"
        )
    )
    long_break_finished: CueMessage | None = Field(
        default_factory=lambda: CueMessage(
            title="Long break finished.", body="Ready for another pomodoro?"
        )
    )
    tick: CueMessage | None = None


class StatusConfig(BaseModel):
    """Status line formats; ``%s`` is replaced by the formatted time."""

    pomodoro_format: str = Field(default="Pomodoro~%s")
    overtime_format: str = Field(default="Pomodoro+%s")
    short_break_format: str = Field(default="Short Break~%s")
    long_break_format: str = Field(default="Long Break~%s")
    paused_suffix: str = Field(default=" (paused)")
    show_count: bool = Field(default=False, description="Append the pomodoro count")

    def format_for(self, phase: Phase) -> str:
        return {
            Phase.POMODORO: self.pomodoro_format,
            Phase.OVERTIME: self.overtime_format,
            Phase.SHORT_BREAK: self.short_break_format,
            Phase.LONG_BREAK: self.long_break_format,
        }.get(phase, "")


class AppConfig(BaseModel):
    """Main pomoclock configuration."""

    durations: DurationConfig = Field(default_factory=DurationConfig)
    behaviour: BehaviourConfig = Field(default_factory=BehaviourConfig)
    sounds: SoundConfig = Field(default_factory=SoundConfig)
    ticking: TickingConfig = Field(default_factory=TickingConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    status: StatusConfig = Field(default_factory=StatusConfig)
    database: str | None = Field(
        default=None, description="Clock database path; user data dir if unset"
    )

    def sound_for(self, event: CueEvent) -> SoundEventConfig:
        return getattr(self.sounds, event.value)

    def message_for(self, event: CueEvent) -> CueMessage | None:
        return getattr(self.notifications, event.value)
