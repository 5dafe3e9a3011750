from __future__ import annotations

import typer

from toolhub.server.app import run


def serve(
    ctx: typer.Context,
    host: str | None = typer.Option(None, "--host", help="Interface to bind; defaults to config."),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to listen on; defaults to config."),
) -> None:
    """Run the HTTP bridge."""
    run(ctx.obj.hub, host=host, port=port)
