"""cov serve command - run the report parsing HTTP service."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from cov.config import load_config
from cov.core.errors import ConfigError
from cov.core.logging import configure_logging


@click.command()
@click.option("--host", default=None, help="Bind address (overrides config)")
@click.option("--port", type=int, default=None, help="Port (overrides config)")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (default: ./cov.yaml if present)",
)
@click.pass_context
def serve_command(
    ctx: click.Context, host: str | None, port: int | None, config_path: Path | None
) -> None:
    """Run the HTTP service that parses uploaded coverage reports."""
    from cov.server import serve

    server_overrides: dict[str, Any] = {}
    if host is not None:
        server_overrides["host"] = host
    if port is not None:
        server_overrides["port"] = port

    overrides: dict[str, Any] = {}
    if server_overrides:
        overrides["server"] = server_overrides
    if ctx.obj and ctx.obj.get("verbose"):
        overrides["logging"] = {"level": "DEBUG"}

    try:
        config = load_config(config_path, **overrides)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    configure_logging(config=config.logging)
    click.echo(f"Serving on http://{config.server.host}:{config.server.port}")
    serve(config)
