"""Cue testing command."""

import typer

from pomoclock.core.dispatcher import CueDispatcher
from pomoclock.models.events import CueEvent
from pomoclock.services.config_service import get_config_service
from pomoclock.services.notifier import DesktopNotifier
from pomoclock.utils.console import get_console

from .decorators import AppError, command_wrapper


@command_wrapper
def play_cue(
    event: str = typer.Argument(
        ..., help=f"One of: {', '.join(e.value for e in CueEvent)}"
    ),
    notify: bool = typer.Option(True, "--notify/--no-notify", help="Also send the notification"),
) -> None:
    """Emit the sound and notification configured for an event."""
    try:
        cue_event = CueEvent(event)
    except ValueError as e:
        raise AppError(f"Unknown event '{event}'", exit_code=2) from e

    console = get_console()
    dispatcher = CueDispatcher(
        config_provider=lambda: get_config_service().config,
        notifier=DesktopNotifier(console),
        console=console,
    )
    dispatcher.dispatch(cue_event, notify=notify, break_name="short break")
