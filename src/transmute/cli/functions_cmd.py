"""List the registered transform functions."""

import json

import click

from transmute.functions import FunctionCategory, default_registry


@click.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Export documentation as JSON.")
def functions(as_json: bool):
    """List available functions by category."""
    registry = default_registry()

    if as_json:
        click.echo(json.dumps(registry.export_documentation(), indent=2))
        return

    for category in FunctionCategory:
        defs = registry.list_by_category(category)
        if not defs:
            continue
        click.echo(click.style(f"{category.value}:", bold=True))
        for func_def in defs:
            params = ", ".join(
                f"{p.name}..." if p.variadic else p.name for p in func_def.parameters
            )
            click.echo(f"  {func_def.name}({params}) - {func_def.description}")
