"""cov CLI - coverage report normalization."""

import click

from cov import __version__
from cov.cli.parse import parse_command
from cov.cli.serve import serve_command
from cov.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="cov")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """cov - Normalize Go and JaCoCo coverage reports into one format."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(parse_command, name="parse")
cli.add_command(serve_command, name="serve")


if __name__ == "__main__":
    cli()
