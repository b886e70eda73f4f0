import asyncio
import base64
from typing import Annotated

import typer
from starlette.requests import Request

from reauth.backends import create_registry
from reauth.cli.rich import get_console
from reauth.config import load_dispatcher


def build_request(path: str, username: str | None, password: str | None) -> Request:
    headers = []
    if username is not None:
        token = base64.b64encode(f"{username}:{password or ''}".encode()).decode("ascii")
        headers.append((b"authorization", f"Basic {token}".encode("latin1")))
    return Request(
        {
            "type": "http",
            "method": "GET",
            "scheme": "http",
            "path": path,
            "query_string": b"",
            "headers": headers,
        }
    )


def command(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Request path to check.")],
    username: Annotated[
        str | None,
        typer.Option("--username", "-u", help="Basic auth username."),
    ] = None,
    password: Annotated[
        str | None,
        typer.Option("--password", "-p", help="Basic auth password."),
    ] = None,
):
    """
    Run the configured rules against a request for PATH.

    Exits with 0 when access is granted, 1 when it is denied and 2 when no
    rule guards the path.
    """
    settings = ctx.obj
    dispatcher = load_dispatcher(settings, create_registry())
    decision = asyncio.run(dispatcher.authenticate(build_request(path, username, password)))

    console = get_console()
    if decision is None:
        console.print(f"No rule matches {path} (unmatched requests: {settings.reauth.unmatched})")
        raise typer.Exit(2)

    if decision.authenticated:
        console.print(f"[green]Granted[/green] by rule {decision.rule.path}")
        return

    console.print(f"[red]Denied[/red] by rule {decision.rule.path}")
    if decision.error is not None:
        console.print(f"[red]Error:[/red] {decision.error}")
    raise typer.Exit(1)
