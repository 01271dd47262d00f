"""Status line text for the current phase."""

from __future__ import annotations

from pomoclock.models.config_models import StatusConfig
from pomoclock.models.state import Phase, TimerSnapshot


def format_seconds(seconds: int) -> str:
    """Format a duration as ``mm:ss``, or ``h:mm:ss`` from one hour up."""
    seconds = abs(int(seconds))
    hours, rest = divmod(seconds, 3600)
    mins, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{mins:02d}:{secs:02d}"
    return f"{mins:02d}:{secs:02d}"


def format_status(snapshot: TimerSnapshot, config: StatusConfig) -> str:
    """Render the status line; empty while the timer is inactive."""
    if not snapshot.is_active:
        return ""

    if snapshot.phase is Phase.OVERTIME:
        shown = snapshot.elapsed_seconds
    else:
        shown = max(0, snapshot.remaining_seconds)

    text = config.format_for(snapshot.phase).replace("%s", format_seconds(shown))
    if config.show_count:
        text += f" [{snapshot.pomodoro_count}]"
    if snapshot.paused:
        text += config.paused_suffix
    return text
