"""Settings CLI commands for Fin Calc.

Manages settings.json - tax year, formulas directory, log level.
"""

import click

from fincalc.sdk import (
    get_available_years,
    get_formulas_dir,
    get_settings_path,
    get_tax_year,
    load_settings,
    set_setting,
    unset_setting,
)
from fincalc.sdk.config import KNOWN_SETTINGS

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@click.group()
def settings():
    """Manage settings (settings.json).

    \b
    Available settings:
    - tax_year: year of the packaged tax rules to use
    - formulas_dir: directory of user formula YAML files
    - log_level: default log level when LOG_LEVEL is unset
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective values:")
    click.echo(f"  tax_year: {get_tax_year()}")
    click.echo(f"  formulas_dir: {get_formulas_dir()}")


@settings.command("set")
@click.argument("key", type=click.Choice(KNOWN_SETTINGS))
@click.argument("value")
def settings_set(key, value):
    """Set KEY to VALUE.

    \b
    Examples:
        fin-calc settings set tax_year 2024
        fin-calc settings set formulas_dir ~/finance/formulas
        fin-calc settings set log_level DEBUG
    """
    if key == "tax_year":
        available = get_available_years()
        if not value.isdigit() or int(value) not in available:
            years = ", ".join(str(y) for y in available)
            raise click.BadParameter(f"No tax rules for '{value}'. Available: {years}")
    elif key == "log_level":
        value = value.upper()
        if value not in LOG_LEVELS:
            raise click.BadParameter(f"Log level must be one of: {', '.join(LOG_LEVELS)}")

    path = set_setting(key, value)
    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key")
def settings_unset(key):
    """Remove KEY, reverting it to the default."""
    if unset_setting(key):
        click.echo(f"Cleared {key} setting.")
    else:
        click.echo(f"{key} was not set.")
