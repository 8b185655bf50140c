"""Formula CLI commands: list, inspect, run and check formulas."""

import json
from typing import Dict, Tuple

import click
import yaml
from pydantic import ValidationError
from rich.console import Console

from fincalc.sdk import (
    CalcError,
    ExpressionEngine,
    FormulaRegistry,
    get_formulas_dir,
    load_formula_file,
    load_formulas_dir,
)
from .renderers.tables import render_formula, render_formula_list, render_formula_result


def _parse_inputs(ctx, param, values: Tuple[str, ...]) -> Dict[str, float]:
    """Parse repeated -i NAME=VALUE options into a dict of floats."""
    inputs = {}
    for item in values:
        name, sep, raw = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise click.BadParameter(f"Expected NAME=VALUE, got '{item}'", param=param)
        try:
            inputs[name] = float(raw)
        except ValueError:
            raise click.BadParameter(f"Value for '{name}' is not a number: '{raw}'", param=param)
    return inputs


input_option = click.option(
    "--input", "-i", "inputs", multiple=True, callback=_parse_inputs,
    metavar="NAME=VALUE", help="Formula input (repeatable)",
)


def load_registry() -> FormulaRegistry:
    """Default formulas plus any user formulas from the formulas directory."""
    registry = FormulaRegistry.with_defaults()
    load_formulas_dir(get_formulas_dir(), registry)
    return registry


@click.group()
def formulas():
    """Runtime formulas (defaults plus YAML files in the formulas dir).

    User formulas are read from the formulas_dir setting, or
    <config dir>/formulas/. A user formula with the same name as a
    default replaces it.
    """
    pass


@formulas.command("list")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def formulas_list(output_json):
    """List registered formulas."""
    registry = load_registry()
    items = registry.list()

    if output_json:
        click.echo(json.dumps([f.model_dump() for f in items], indent=2))
        return
    render_formula_list(Console(), items)


@formulas.command("show")
@click.argument("name")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def formulas_show(name, output_json):
    """Show a formula's inputs and script."""
    registry = load_registry()
    try:
        formula = registry.get(name)
    except CalcError as e:
        raise click.ClickException(str(e))

    if output_json:
        click.echo(json.dumps(formula.model_dump(), indent=2))
        return
    render_formula(Console(), formula)


@formulas.command("run")
@click.argument("name")
@input_option
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def formulas_run(name, inputs, output_json):
    """Execute formula NAME.

    \b
    Examples:
        fin-calc formulas run loan_payment -i principal=30000
        fin-calc formulas run dti_ratio -i total_debt=2000 -i monthly_income=6000
    """
    registry = load_registry()
    try:
        result = registry.execute(name, inputs)
    except CalcError as e:
        raise click.ClickException(str(e))

    if output_json:
        click.echo(json.dumps(result.model_dump(), indent=2))
        return
    render_formula_result(Console(), result)


@formulas.command("eval")
@click.argument("script")
@input_option
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def formulas_eval(script, inputs, output_json):
    """Evaluate a one-off SCRIPT.

    \b
    Example:
        fin-calc formulas eval "round(pmt(r / 12, n, p), 2)" -i r=0.06 -i n=60 -i p=30000
    """
    registry = FormulaRegistry()
    try:
        value = registry.eval(script, inputs)
    except CalcError as e:
        raise click.ClickException(str(e))

    if output_json:
        click.echo(json.dumps({"value": value, "inputs": inputs}, indent=2))
        return
    click.echo(f"{value:.10g}")


@formulas.command("check")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def formulas_check(path):
    """Validate and compile every formula in a YAML file."""
    try:
        items = load_formula_file(path)
    except (yaml.YAMLError, ValidationError, ValueError) as e:
        raise click.ClickException(f"Invalid formula file {path}: {e}")

    engine = ExpressionEngine()
    failures = 0
    for formula in items:
        try:
            compiled = engine.compile(formula.script, formula.name)
        except CalcError as e:
            failures += 1
            click.echo(click.style(f"  FAIL {formula.name}: {e}", fg="red"))
            continue

        undeclared = compiled.free_variables - {inp.name for inp in formula.inputs}
        if undeclared:
            click.echo(click.style(
                f"  WARN {formula.name}: undeclared variables {', '.join(sorted(undeclared))}",
                fg="yellow",
            ))
        else:
            click.echo(f"  OK   {formula.name} v{formula.version}")

    if failures:
        raise click.ClickException(f"{failures} of {len(items)} formula(s) failed to compile")
    click.echo(click.style(f"\n{len(items)} formula(s) OK.", fg="green"))
