"""Typer helper utilities."""

from collections.abc import Iterable
from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from pomoclock.utils.console import get_console


def close_commands(attempted: str, names: Iterable[str], limit: int = 3) -> list[str]:
    """Command names that look like a mistyped ``attempted``, best first."""
    return get_close_matches(attempted, sorted(names), n=limit, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Typer group that answers an unknown command with the closest matches.

    Unknown names are looked up before delegating to the base group. Input
    with no close match falls through to the normal usage error.
    """

    def resolve_command(self, ctx, args):
        if args and not ctx.resilient_parsing and not args[0].startswith("-"):
            if self.get_command(ctx, args[0]) is None:
                suggestions = close_commands(args[0], self.list_commands(ctx))
                if suggestions:
                    self._print_suggestions(ctx, args[0], suggestions)
                    raise typer.Exit(1)
        return super().resolve_command(ctx, args)

    @staticmethod
    def _print_suggestions(ctx, attempted: str, suggestions: list[str]) -> None:
        console = get_console()
        console.print(f'[red]Error:[/red] unknown command "{attempted}" for "{ctx.info_name}"')
        console.print()
        if len(suggestions) == 1:
            console.print("[yellow]Did you mean this?[/yellow]")
        else:
            console.print("[yellow]Did you mean one of these?[/yellow]")
        for name in suggestions:
            console.print(f"        {name}")
