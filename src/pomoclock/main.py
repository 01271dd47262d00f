"""Main entry point for pomoclock."""

import typer

from pomoclock import __version__
from pomoclock.commands import config_command
from pomoclock.commands.cue_command import play_cue
from pomoclock.commands.log_command import extend_last_clock, show_log
from pomoclock.commands.run_command import run_timer
from pomoclock.utils.console import get_console
from pomoclock.utils.typer_helpers import SuggestingGroup

app = typer.Typer(
    name="pomoclock",
    cls=SuggestingGroup,
    help="Pomodoro timer that clocks your work against tasks",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(config_command.app, name="config", help="Configuration management")

app.command("run")(run_timer)
app.command("log")(show_log)
app.command("extend")(extend_last_clock)
app.command("cue")(play_cue)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]pomoclock[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
