import typer

from reauth.backends import create_registry
from reauth.cli.rich import get_console


def command(ctx: typer.Context):
    """List the available backend types."""
    console = get_console()
    for name in create_registry().names():
        console.print(name)
