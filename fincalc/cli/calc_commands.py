"""Calculation commands: income, affordability, taxes, budget, schedules."""

import json
from typing import Optional

import click
from rich.console import Console

from fincalc.sdk import (
    CalcError,
    TaxDeductions,
    calculate_auto_affordability,
    calculate_budget_allocation,
    calculate_dti,
    calculate_income,
    calculate_max_home_price,
    calculate_mortgage,
    calculate_quick_reference,
    calculate_rent_affordability,
    full_breakdown,
    generate_schedule,
    income_from_annual,
    income_from_monthly,
    load_tax_rules,
    schedule_totals,
)
from .renderers.tables import (
    render_auto,
    render_budget,
    render_dti,
    render_income,
    render_max_home,
    render_mortgage,
    render_rent,
    render_schedule,
    render_taxes,
)

json_option = click.option("--json", "output_json", is_flag=True, help="Output as JSON")


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


@click.command("income")
@click.option("--ytd", type=float, help="Year-to-date gross income")
@click.option("--start-date", help="Employment start date (YYYY-MM-DD)")
@click.option("--check-date", help="Most recent paycheck date (YYYY-MM-DD)")
@click.option("--monthly", type=float, help="Gross monthly income, entered directly")
@click.option("--annual", type=float, help="Gross annual income, entered directly")
@json_option
def income(ytd, start_date, check_date, monthly, annual, output_json):
    """Project income from YTD earnings, or expand a monthly/annual figure.

    \b
    Examples:
        fin-calc income --ytd 50000 --start-date 2024-01-01 --check-date 2024-06-30
        fin-calc income --monthly 6000
        fin-calc income --annual 85000 --json
    """
    modes = [ytd is not None, monthly is not None, annual is not None]
    if sum(modes) != 1:
        raise click.UsageError("Specify exactly one of --ytd, --monthly or --annual.")

    try:
        if ytd is not None:
            if not start_date or not check_date:
                raise click.UsageError("--ytd requires --start-date and --check-date.")
            result = calculate_income(ytd, start_date, check_date)
        elif monthly is not None:
            result = income_from_monthly(monthly)
        else:
            result = income_from_annual(annual)
    except CalcError as e:
        raise click.ClickException(str(e))

    if output_json:
        _echo_json(result.model_dump())
        return
    render_income(Console(), result)


@click.command("auto")
@click.argument("monthly_income", type=float)
@click.option("--term", "term_months", type=int, default=60, show_default=True,
              help="Loan term in months")
@json_option
def auto(monthly_income, term_months, output_json):
    """Auto loan affordability from gross MONTHLY_INCOME.

    Shows PTI (payment-to-income) limits and the loan the standard 12%
    payment buys at each credit tier.
    """
    try:
        result = calculate_auto_affordability(monthly_income, term_months)
    except CalcError as e:
        raise click.ClickException(str(e))

    if output_json:
        _echo_json(result.model_dump())
        return
    render_auto(Console(), result)


@click.command("mortgage")
@click.argument("home_price", type=float)
@click.option("--down", "down_payment_percent", type=float, default=20.0, show_default=True,
              help="Down payment, percent of price")
@click.option("--rate", "interest_rate", type=float, default=6.5, show_default=True,
              help="Annual interest rate, percent")
@click.option("--term", "term_years", type=int, default=30, show_default=True,
              help="Loan term in years")
@click.option("--tax-rate", "property_tax_rate", type=float, default=1.2, show_default=True,
              help="Annual property tax, percent of price")
@click.option("--insurance", "annual_insurance", type=float, default=1500.0, show_default=True,
              help="Annual homeowners insurance")
@json_option
def mortgage(home_price, down_payment_percent, interest_rate, term_years,
             property_tax_rate, annual_insurance, output_json):
    """Monthly PITI for a HOME_PRICE, with PMI below 20% down."""
    try:
        result = calculate_mortgage(
            home_price, down_payment_percent, interest_rate, term_years,
            property_tax_rate, annual_insurance,
        )
    except CalcError as e:
        raise click.ClickException(str(e))

    if output_json:
        _echo_json(result.model_dump())
        return
    render_mortgage(Console(), result)


@click.command("dti")
@click.argument("monthly_income", type=float)
@click.argument("housing_payment", type=float)
@click.option("--other-debts", type=float, default=0.0, show_default=True,
              help="Other monthly debt payments")
@json_option
def dti(monthly_income, housing_payment, other_debts, output_json):
    """Front-end and back-end debt-to-income ratios."""
    try:
        result = calculate_dti(monthly_income, housing_payment, other_debts)
    except CalcError as e:
        raise click.ClickException(str(e))

    if output_json:
        _echo_json(result.model_dump())
        return
    render_dti(Console(), result)


@click.command("max-home")
@click.argument("monthly_income", type=float)
@click.option("--down", "down_payment_percent", type=float, default=20.0, show_default=True)
@click.option("--rate", "interest_rate", type=float, default=6.5, show_default=True)
@click.option("--term", "term_years", type=int, default=30, show_default=True)
@click.option("--tax-rate", "property_tax_rate", type=float, default=1.2, show_default=True)
@click.option("--insurance", "annual_insurance", type=float, default=1500.0, show_default=True)
@json_option
def max_home(monthly_income, down_payment_percent, interest_rate, term_years,
             property_tax_rate, annual_insurance, output_json):
    """Estimate the most home a gross MONTHLY_INCOME supports."""
    try:
        result = calculate_max_home_price(
            monthly_income, down_payment_percent, interest_rate, term_years,
            property_tax_rate, annual_insurance,
        )
    except CalcError as e:
        raise click.ClickException(str(e))

    if output_json:
        _echo_json(result.model_dump())
        return
    render_max_home(Console(), result)


@click.command("rent")
@click.argument("monthly_income", type=float)
@click.option("--current-rent", type=float, default=None, help="Compare against this rent")
@json_option
def rent(monthly_income, current_rent: Optional[float], output_json):
    """Rent limits at 30% and 25% of gross MONTHLY_INCOME."""
    try:
        result = calculate_rent_affordability(monthly_income, current_rent)
    except CalcError as e:
        raise click.ClickException(str(e))

    if output_json:
        _echo_json(result.model_dump())
        return
    render_rent(Console(), result)


@click.command("taxes")
@click.argument("gross_annual", type=float)
@click.option("--401k", "retirement_401k_percent", type=float, default=6.0, show_default=True,
              help="401k contribution, percent of gross")
@click.option("--health", "health_insurance_annual", type=float, default=2400.0, show_default=True,
              help="Annual health insurance premiums")
@click.option("--state-rate", "state_tax_rate", type=float, default=5.0, show_default=True,
              help="Flat state income tax rate, percent")
@click.option("--other-pretax", type=float, default=0.0, show_default=True,
              help="Other annual pre-tax deductions")
@click.option("--year", "tax_year", default=None, help="Tax rules year (default: settings tax_year)")
@json_option
def taxes(gross_annual, retirement_401k_percent, health_insurance_annual, state_tax_rate,
          other_pretax, tax_year, output_json):
    """Federal, state and FICA taxes and take-home pay for GROSS_ANNUAL."""
    try:
        rules = load_tax_rules(tax_year)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))

    try:
        deductions = TaxDeductions(
            retirement_401k_percent=retirement_401k_percent,
            health_insurance_annual=health_insurance_annual,
            state_tax_rate=state_tax_rate,
            other_pretax=other_pretax,
        )
        result = full_breakdown(gross_annual, deductions, rules)
    except CalcError as e:
        raise click.ClickException(str(e))

    if output_json:
        _echo_json(result.model_dump())
        return
    render_taxes(Console(), result)


@click.command("budget")
@click.argument("net_monthly", type=float)
@click.option("--hours", "hours_per_week", type=float, default=40.0, show_default=True,
              help="Hours worked per week, for the hourly rate")
@json_option
def budget(net_monthly, hours_per_week, output_json):
    """50/30/20 budget for NET_MONTHLY take-home pay."""
    try:
        allocation = calculate_budget_allocation(net_monthly)
        reference = calculate_quick_reference(net_monthly, hours_per_week)
    except CalcError as e:
        raise click.ClickException(str(e))

    if output_json:
        _echo_json({
            "allocation": allocation.model_dump(),
            "quick_reference": reference.model_dump(),
        })
        return
    render_budget(Console(), allocation, reference)


@click.command("schedule")
@click.argument("principal", type=float)
@click.argument("annual_rate", type=float)
@click.argument("term_periods", type=int)
@click.option("--periods-per-year", type=int, default=12, show_default=True)
@click.option("--limit", type=int, default=None, help="Show only the first N payments")
@json_option
def schedule(principal, annual_rate, term_periods, periods_per_year, limit, output_json):
    """Amortization schedule for PRINCIPAL at ANNUAL_RATE percent over TERM_PERIODS payments.

    \b
    Examples:
        fin-calc schedule 30000 5.99 60
        fin-calc schedule 320000 6.5 360 --limit 12
    """
    try:
        rows = list(generate_schedule(principal, annual_rate, term_periods, periods_per_year))
    except CalcError as e:
        raise click.ClickException(str(e))

    totals = schedule_totals(rows)
    shown = rows[:limit] if limit else rows

    if output_json:
        _echo_json({
            "payments": [row.model_dump() for row in shown],
            "totals": totals.model_dump(),
        })
        return
    render_schedule(Console(), shown, totals)


COMMANDS = (income, auto, mortgage, dti, max_home, rent, taxes, budget, schedule)
