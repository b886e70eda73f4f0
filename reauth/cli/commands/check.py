import typer
from rich.table import Table

from reauth.backends import create_registry
from reauth.cli.rich import get_console
from reauth.config import load_dispatcher, unmatched_policy


def command(ctx: typer.Context):
    """Load the configured rules and show them in evaluation order."""
    settings = ctx.obj
    unmatched = unmatched_policy(settings.reauth.unmatched)
    dispatcher = load_dispatcher(settings, create_registry())

    console = get_console()
    if not dispatcher.rules:
        console.print("[yellow]No rules configured.[/yellow]")
        return

    table = Table(title=f"Rules (unmatched requests: {unmatched})")
    table.add_column("#", justify="right")
    table.add_column("Path")
    table.add_column("Exceptions")
    table.add_column("Mode")
    table.add_column("Backends")

    for index, rule in enumerate(dispatcher.rules):
        table.add_row(
            str(index),
            rule.path,
            "\n".join(rule.exceptions) or "-",
            str(rule.mode),
            "\n".join(type(backend).__name__ for backend in rule.backends),
        )
    console.print(table)
