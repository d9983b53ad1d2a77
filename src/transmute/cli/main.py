"""transmute CLI entry point."""

import click

from transmute.config import TransformConfig, configure_logging
from transmute.modifier import SpecError


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Logging level (default: TRANSMUTE_LOG_LEVEL or WARNING).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """transmute: JSON modify transforms with function expressions."""
    try:
        config = TransformConfig.from_env()
    except SpecError as e:
        click.echo(click.style(f"Error: invalid TRANSMUTE_MODE: {e}", fg="red"), err=True)
        raise SystemExit(1)
    if log_level:
        config.log_level = log_level.upper()
    configure_logging(config.log_level)
    ctx.obj = config


# Register subcommands
from transmute.cli.functions_cmd import functions  # noqa: E402
from transmute.cli.run_cmd import run  # noqa: E402

cli.add_command(functions)
cli.add_command(run)
