"""Fin Calc CLI - Command-line interface for personal-finance calculations."""

import click

from fincalc import __version__
from fincalc.sdk import configure_logging

from .calc_commands import COMMANDS as calc_commands
from .formula_commands import formulas as formulas_group
from .settings_commands import settings as settings_group


@click.group()
@click.version_option(version=__version__, prog_name="fin-calc")
def cli():
    """Fin Calc - Personal finance calculators.

    Loan amortization, auto and housing affordability, income projection,
    tax withholding, 50/30/20 budgets, and runtime-defined formulas.

    Settings are loaded from (in order):

    \b
    1. FIN_CALC_CONFIG_PATH environment variable
    2. ~/.config/fin-calc/settings.json (XDG default)

    Set LOG_LEVEL=DEBUG for diagnostic logging.
    """
    configure_logging()


for command in calc_commands:
    cli.add_command(command)

cli.add_command(formulas_group)
cli.add_command(settings_group)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
