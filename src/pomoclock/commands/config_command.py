"""Configuration management commands."""

from typing import Optional

import typer
import yaml
from pydantic import BaseModel

from pomoclock.services.config_service import get_config_service
from pomoclock.ui.formatters import format_output, format_success
from pomoclock.utils.console import get_console

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


def parse_value(value: str):
    """Interpret a command-line value as YAML (``true``, ``5``, ``[a, b]``, ``null``)."""
    try:
        return yaml.safe_load(value)
    except yaml.YAMLError:
        return value


@app.command("show")
@command_wrapper
def show_config(
    output: str = typer.Option("yaml", "--output", "-o", help="json, yaml or table"),
) -> None:
    """Show the current configuration."""
    svc = get_config_service()
    format_output(svc.config.model_dump(mode="json"), output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., durations.pomodoro)"),
) -> None:
    """Get a configuration value."""
    value = get_config_service().get(key)
    if isinstance(value, BaseModel):
        format_output(value.model_dump(mode="json"), "yaml")
    else:
        console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., durations.pomodoro)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    parsed_value = parse_value(value)
    get_config_service().set(key, parsed_value)
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            raise AppError("Cancelled", exit_code=0)

    get_config_service().reset(key)
    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")


@app.command("path")
@command_wrapper
def config_path() -> None:
    """Print the configuration file location."""
    console.print(str(get_config_service().config_path))
