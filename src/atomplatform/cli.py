"""Command line interface for the Etsy and Printful API clients."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from .commands import etsy as etsy_commands
from .commands import printful as printful_commands
from .config import EndpointConfig
from .utils import setup_logging

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    help="CLI tool for testing API connections to Etsy and Printful.",
    no_args_is_help=True,
)
app.add_typer(printful_commands.app, name="printful")
app.add_typer(etsy_commands.app, name="etsy")


@app.callback()
def _init(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    json_output: bool = typer.Option(False, "--json", help="Print raw JSON instead of a summary."),
    config: Optional[Path] = typer.Option(
        None, "--config", help="YAML file overriding API base URLs (or set ATOMPLATFORM_CONFIG)."
    ),
) -> None:
    """Initialize logging and shared options for all commands."""

    setup_logging(level=logging.DEBUG if verbose else logging.INFO)
    try:
        endpoints = EndpointConfig.resolve(config)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    ctx.obj = {"json": json_output, "endpoints": endpoints}


if __name__ == "__main__":  # pragma: no cover
    app()
