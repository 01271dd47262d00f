"""Maps transition events to sound and notification cues."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

from rich.console import Console

from pomoclock.errors import UnknownCueEventError
from pomoclock.models.config_models import AppConfig, CueMessage
from pomoclock.models.events import CueEvent
from pomoclock.services.notifier import Notifier
from pomoclock.services.sound_player import SoundPlayer
from pomoclock.utils.console import get_console

logger = logging.getLogger("pomoclock.cues")


@dataclass(frozen=True)
class CueSpec:
    """Config field names holding an event's sound and message settings."""

    sound_field: str
    message_field: str


CUE_TABLE = MappingProxyType(
    {
        CueEvent.START: CueSpec("start", "start"),
        CueEvent.POMODORO_FINISHED: CueSpec("pomodoro_finished", "pomodoro_finished"),
        CueEvent.OVERTIME: CueSpec("overtime", "overtime"),
        CueEvent.KILLED: CueSpec("killed", "killed"),
        CueEvent.SHORT_BREAK_FINISHED: CueSpec(
            "short_break_finished", "short_break_finished"
        ),
        CueEvent.LONG_BREAK_FINISHED: CueSpec(
            "long_break_finished", "long_break_finished"
        ),
        CueEvent.TICK: CueSpec("tick", "tick"),
    }
)

_missing = set(CueEvent) - set(CUE_TABLE)
if _missing:
    raise RuntimeError(f"CUE_TABLE is missing events: {sorted(e.value for e in _missing)}")


@dataclass(frozen=True)
class ResolvedCue:
    """Everything needed to emit one cue, read from the current config."""

    event: CueEvent
    sound_enabled: bool
    path: Path | None
    args: tuple[str, ...]
    player: str | None
    message: CueMessage | None
    notifications_enabled: bool


class CueDispatcher:
    """Plays the sound and sends the notification configured for an event.

    Lookups go through ``CUE_TABLE``; anything that is not a ``CueEvent``
    raises ``UnknownCueEventError``. Playback problems never propagate: a
    missing file or player degrades to the terminal bell.
    """

    def __init__(
        self,
        config_provider: Callable[[], AppConfig],
        player: SoundPlayer | None = None,
        notifier: Notifier | None = None,
        console: Console | None = None,
    ):
        self._config_provider = config_provider
        self._player = player or SoundPlayer()
        self._notifier = notifier
        self._console = console or get_console()

    def resolve(self, event: CueEvent) -> ResolvedCue:
        if not isinstance(event, CueEvent) or event not in CUE_TABLE:
            raise UnknownCueEventError(event)

        config = self._config_provider()
        spec = CUE_TABLE[event]
        sound = getattr(config.sounds, spec.sound_field)
        return ResolvedCue(
            event=event,
            sound_enabled=config.sounds.play_sounds and sound.enabled,
            path=Path(sound.path).expanduser() if sound.path else None,
            args=tuple(sound.args),
            player=config.sounds.player,
            message=getattr(config.notifications, spec.message_field),
            notifications_enabled=config.notifications.enabled,
        )

    def dispatch(self, event: CueEvent, *, notify: bool = True, **fields: Any) -> None:
        """Play the event's sound, then send its notification if ``notify``."""
        cue = self.resolve(event)
        self._play(cue)
        if notify:
            self._notify(cue, fields)

    def play(self, event: CueEvent) -> None:
        self._play(self.resolve(event))

    def notify(self, event: CueEvent, **fields: Any) -> None:
        self._notify(self.resolve(event), fields)

    def _play(self, cue: ResolvedCue) -> None:
        if not cue.sound_enabled:
            return

        if cue.path is None:
            self._bell()
            return
        if not cue.path.exists():
            logger.warning("sound for %s not found: %s", cue.event.value, cue.path)
            self._bell()
            return

        try:
            played = self._player.play(cue.path, cue.args, cue.player)
        except Exception:
            logger.exception("playing %s failed", cue.path)
            played = False
        if not played:
            logger.warning("no audio player available for %s", cue.event.value)
            self._bell()

    def _notify(self, cue: ResolvedCue, fields: dict[str, Any]) -> None:
        if self._notifier is None or not cue.notifications_enabled:
            return
        if cue.message is None:
            return

        title = _render(cue.message.title, fields)
        body = _render(cue.message.body, fields)
        try:
            self._notifier.notify(title, body)
        except Exception:
            logger.exception("notification for %s failed", cue.event.value)

    def _bell(self) -> None:
        self._console.bell()


def _render(template: str, fields: dict[str, Any]) -> str:
    try:
        return template.format(**fields)
    except (KeyError, IndexError, ValueError):
        return template
