"""Clock log commands."""

import typer

from pomoclock.core.factory import get_clock_backend
from pomoclock.ui.formatters import (
    format_clock_entries,
    format_output,
    format_success,
    format_warning,
)
from pomoclock.ui.status import format_seconds

from .decorators import command_wrapper


@command_wrapper
def show_log(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of entries to show"),
    all_entries: bool = typer.Option(
        False, "--all", "-a", help="Include entries whose time was discarded"
    ),
    totals: bool = typer.Option(False, "--totals", help="Show total time per task"),
    output: str = typer.Option("table", "--output", "-o", help="table, json or yaml"),
) -> None:
    """Show recent clock entries."""
    backend = get_clock_backend()

    if totals:
        data = {task: format_seconds(secs) for task, secs in backend.get_task_totals().items()}
        format_output(data, output)
        return

    entries = backend.get_recent_entries(limit=limit, include_discarded=all_entries)
    if output == "table":
        format_clock_entries(entries)
    else:
        format_output(entries, output)


@command_wrapper
def extend_last_clock() -> None:
    """Extend the last clock entry so it ends now."""
    entry = get_clock_backend().extend_last_clock()
    if entry is None:
        format_warning("Nothing to extend (no closed entry, or a clock is running)")
        raise typer.Exit(0)
    format_success(f"Extended '{entry['task']}' to {entry['end_time']}")
