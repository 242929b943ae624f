# src/osmetrics/cli/main.py
"""
This module is the main entry point for the osmetrics CLI.

It aggregates all commands from the submodules (collect, serve, ...).
"""

import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.config import config
from ..core.exceptions import ConfigError
from . import collect

# --- Setup Logger ---
logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = typer.Typer(
    name="osmetrics",
    help="Export per-container CPU/memory usage of Kubernetes pods in the Prometheus format.",
    add_completion=False,
)


def version_callback(value: bool):
    """
    Prints the version of osmetrics.
    """
    if value:
        from .. import __version__

        typer.echo(f"osmetrics version: {__version__}")
        raise typer.Exit()


@app.command()
def version():
    """
    Show the version of osmetrics.
    """
    from .. import __version__

    typer.echo(f"osmetrics version: {__version__}")


@app.command()
def serve(
    host: Annotated[Optional[str], typer.Option("--host", help="Interface to bind.")] = None,
    port: Annotated[Optional[int], typer.Option("--port", help="Port to listen on.")] = None,
):
    """
    Start the HTTP exporter (/health, /metrics).
    """
    from ..api.app import main as run_api

    try:
        run_api(host=host, port=port)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """
    osmetrics CLI main entry point.
    """
    pass


app.add_typer(collect.app, name="collect")


if __name__ == "__main__":
    app()
