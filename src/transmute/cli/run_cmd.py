"""Run a modify spec against a JSON document."""

import json
from pathlib import Path

import click

from transmute.config import TransformConfig
from transmute.modifier import ModifyMode, SpecError, load_steps, run_steps


@click.command()
@click.argument("spec_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("input_file", type=click.File("r"), default="-")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in ModifyMode]),
    default=None,
    help="Mode for specs that do not name an operation.",
)
@click.option("--indent", type=int, default=2, show_default=True, help="Output indentation.")
@click.pass_obj
def run(config: TransformConfig | None, spec_file: Path, input_file, mode: str | None, indent: int):
    """Apply SPEC_FILE to the JSON document in INPUT_FILE (default: stdin)."""
    config = config or TransformConfig.from_env()
    default_mode = ModifyMode(mode) if mode else config.mode

    try:
        steps = load_steps(spec_file, default_mode)
    except SpecError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    try:
        document = json.load(input_file)
    except json.JSONDecodeError as e:
        click.echo(click.style(f"Error: input is not valid JSON: {e}", fg="red"), err=True)
        raise SystemExit(1)

    try:
        output = run_steps(steps, document)
    except SpecError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    click.echo(json.dumps(output, indent=indent or None))
