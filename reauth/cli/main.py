import inspect
import sys

import typer
from pyfiglet import Figlet
from rich.text import Text
from typer.core import TyperGroup

from reauth.cli import commands
from reauth.cli.rich import get_console
from reauth.conf import get_settings
from reauth.logging import setup_logging

BANNER_COLORS = ("#F5A623", "#E8603C", "#C2185B")


def show_banner():
    banner_text = Figlet("slant").renderText("reauth")
    console = get_console(stderr=True)
    for index, line in enumerate(banner_text.splitlines()):
        console.print(Text(line, style=BANNER_COLORS[index % len(BANNER_COLORS)]))


class ReauthGroup(TyperGroup):
    def get_help(self, ctx):
        show_banner()
        return super().get_help(ctx)


app = typer.Typer(
    help="Path-scoped request authentication gateway",
    add_completion=True,
    rich_markup_mode="rich",
    cls=ReauthGroup,
)

err_console = get_console(stderr=True)

for name, module in inspect.getmembers(commands):
    if not inspect.ismodule(module):
        continue

    if hasattr(module, "command"):  # pragma: no branch
        app.command(name=name.replace("_", "-"))(module.command)


@app.callback()
def main(
    ctx: typer.Context,
):
    settings = get_settings()
    setup_logging(settings, cli_mode=True)
    ctx.obj = settings


def run():
    try:
        app()
    except Exception as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(-1)
