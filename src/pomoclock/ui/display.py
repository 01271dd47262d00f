"""Live timer panel for the interactive runner."""

from __future__ import annotations

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from pomoclock.models.config_models import DurationConfig
from pomoclock.models.state import Phase, TimerSnapshot

from .status import format_seconds

PHASE_STYLES = {
    Phase.NONE: ("⏹", "Idle", "dim"),
    Phase.POMODORO: ("🍅", "Pomodoro", "cyan"),
    Phase.OVERTIME: ("⏰", "Overtime", "red"),
    Phase.SHORT_BREAK: ("☕", "Short Break", "green"),
    Phase.LONG_BREAK: ("🌴", "Long Break", "magenta"),
}


class TimerDisplay:
    """Builds the renderable shown while the timer runs."""

    def __init__(self, console: Console | None = None, bar_width: int = 40):
        self.console = console or Console()
        self.bar_width = bar_width

    def render(
        self, snapshot: TimerSnapshot, durations: DurationConfig, status_text: str = ""
    ) -> Panel:
        emoji, title, color = PHASE_STYLES[snapshot.phase]
        if snapshot.paused:
            title = f"{title} (paused)"
            color = "yellow"

        components = []
        if snapshot.task_ref:
            components.append(Text(snapshot.task_ref[:50], style="bold white", justify="center"))
            components.append(Text(""))

        components.append(self._timer_text(snapshot, color))
        if snapshot.phase not in (Phase.NONE, Phase.OVERTIME):
            components.append(self._progress_text(snapshot, durations))

        components.append(Text(""))
        components.append(
            Text(f"Pomodoros this cycle: {snapshot.pomodoro_count}", style="dim", justify="center")
        )
        if status_text:
            components.append(Text(status_text, style="dim", justify="center"))

        return Panel(
            Align.center(Group(*components)),
            title=f"{emoji}  {title}",
            subtitle=self._footer_hints(snapshot),
            border_style=color,
            padding=(1, 2),
        )

    def _timer_text(self, snapshot: TimerSnapshot, color: str) -> Text:
        if snapshot.phase is Phase.NONE:
            return Text("--:--", style="bold dim", justify="center")
        if snapshot.phase is Phase.OVERTIME:
            return Text(
                "+" + format_seconds(snapshot.elapsed_seconds),
                style=f"bold {color}",
                justify="center",
            )

        remaining = max(0, snapshot.remaining_seconds)
        if not snapshot.paused and snapshot.phase is Phase.POMODORO:
            if remaining < 60:
                color = "red"
            elif remaining < 300:
                color = "yellow"
        return Text(format_seconds(remaining), style=f"bold {color}", justify="center")

    def _progress_text(self, snapshot: TimerSnapshot, durations: DurationConfig) -> Text:
        total_seconds = durations.seconds_for(snapshot.phase)
        elapsed = total_seconds - max(0, snapshot.remaining_seconds)
        progress_pct = (
            min(100, int((elapsed / total_seconds) * 100)) if total_seconds > 0 else 0
        )

        filled = int(self.bar_width * progress_pct / 100)
        bar = "▓" * filled + "░" * (self.bar_width - filled)
        return Text(f"{bar}  {progress_pct}%", style="dim", justify="center")

    @staticmethod
    def _footer_hints(snapshot: TimerSnapshot) -> str:
        if not snapshot.is_active:
            return "space: start  •  q: quit"
        if snapshot.phase is Phase.OVERTIME:
            toggle = "space: take break"
        else:
            toggle = "space: stop"
        pause = "p: resume" if snapshot.paused else "p: pause"
        return f"{toggle}  •  {pause}  •  k: kill  •  q: quit"


def show_exit_message(snapshot: TimerSnapshot, console: Console | None = None) -> None:
    """Summarise the run when the interactive runner exits."""
    console = console or Console()
    console.print(
        Panel(
            f"[bold]Pomodoros completed this cycle:[/bold] {snapshot.pomodoro_count}",
            border_style="cyan",
            padding=(1, 2),
        )
    )
