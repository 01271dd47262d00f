"""Output formatters for command results."""

import json
from datetime import datetime
from typing import Any

import yaml
from rich.table import Table

from pomoclock.utils.console import get_console

from .status import format_seconds

console = get_console()


def format_output(data: Any, output_format: str = "yaml") -> None:
    """Print ``data`` as json, yaml or a key/value table."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), end="")
    elif output_format == "table":
        format_table(data)
    else:
        raise ValueError(f"Unknown output format: {output_format}")


def format_table(data: Any) -> None:
    """Format a flat or nested mapping as a two-column table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    table = Table(show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in _flatten(data):
        table.add_row(key, str(value))
    console.print(table)


def _flatten(data: Any, prefix: str = "") -> list[tuple[str, Any]]:
    if not isinstance(data, dict):
        return [(prefix, data)]
    rows = []
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict) and value:
            rows.extend(_flatten(value, path))
        else:
            rows.append((path, value))
    return rows


def format_clock_entries(entries: list[dict[str, Any]]) -> None:
    """Show clock entries in a table."""
    if not entries:
        console.print("[yellow]No clock entries found[/yellow]")
        return

    table = Table(title=f"Recent Clock Entries ({len(entries)})", show_header=True)
    table.add_column("Task", style="cyan")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Duration", justify="right")

    for entry in entries:
        start = datetime.fromisoformat(entry["start_time"])
        if entry["end_time"]:
            end = datetime.fromisoformat(entry["end_time"])
            end_str = end.strftime("%H:%M")
            duration = format_seconds(int((end - start).total_seconds()))
        else:
            end_str = "[green]running[/green]"
            duration = "-"
        task = entry["task"][:40]
        if entry.get("discarded"):
            task = f"[dim strike]{task}[/dim strike]"
        table.add_row(task, start.strftime("%Y-%m-%d %H:%M"), end_str, duration)

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")
