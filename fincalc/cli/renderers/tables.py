"""Rich renderers for calculation results.

Each renderer takes a Rich Console and the SDK model returned by the
matching calculation, and prints it as tables and panels.
"""

from typing import Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fincalc.sdk.schemas import (
    AmortizationPayment,
    AutoAffordability,
    BudgetAllocation,
    DtiAnalysis,
    IncomeData,
    MaxHomePrice,
    MortgageResult,
    QuickReference,
    RentAffordability,
    ScheduleTotals,
)
from fincalc.sdk.formulas import Formula, FormulaResult
from fincalc.sdk.taxes import TaxBreakdown


def money(value: float, cents: bool = False) -> str:
    if cents:
        return f"${value:,.2f}"
    return f"${value:,.0f}"


def _kv_table() -> Table:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")
    return table


def render_income(console: Console, data: IncomeData) -> None:
    table = _kv_table()
    if data.days_worked:
        table.add_row("Days worked", str(data.days_worked))
    table.add_row("Gross annual", money(data.gross_annual))
    table.add_row("Gross monthly", money(data.gross_monthly))
    table.add_row("Gross weekly", money(data.gross_weekly))
    table.add_row("Gross daily", money(data.gross_daily))
    table.add_row("Max auto payment (12%)", money(data.max_auto_payment))
    table.add_row("Max rent (30%)", money(data.max_rent))
    console.print(Panel(table, title="Income", border_style="cyan"))


def render_auto(console: Console, data: AutoAffordability) -> None:
    console.print(f"\n[bold]Auto Affordability[/bold] on {money(data.monthly_income)}/month")

    approvals = Table(box=box.SIMPLE)
    approvals.add_column("PTI")
    approvals.add_column("Ratio", justify="right")
    approvals.add_column("Max Payment", justify="right")
    approvals.add_column("Description", style="dim")
    for approval in data.payment_approvals:
        approvals.add_row(
            approval.pti_type,
            f"{approval.ratio:.0%}",
            money(approval.max_payment),
            approval.description,
        )
    console.print(approvals)

    estimates = Table(title="Loan estimates at the standard 12% payment", box=box.SIMPLE)
    estimates.add_column("Credit")
    estimates.add_column("Score")
    estimates.add_column("APR", justify="right")
    estimates.add_column("Loan Amount", justify="right")
    estimates.add_column("Interest", justify="right")
    estimates.add_column("Total Cost", justify="right")
    for estimate in data.loan_estimates:
        tier = estimate.credit_tier
        estimates.add_row(
            tier.name,
            tier.range,
            f"{tier.apr:.2f}%",
            money(estimate.loan_amount),
            money(estimate.total_interest),
            money(estimate.total_cost),
        )
    console.print(estimates)


def render_mortgage(console: Console, data: MortgageResult) -> None:
    summary = _kv_table()
    summary.add_row("Home price", money(data.home_price))
    summary.add_row("Down payment", f"{money(data.down_payment)} ({data.down_payment_percent:g}%)")
    summary.add_row("Loan amount", money(data.loan_amount))
    summary.add_row("Rate / term", f"{data.interest_rate:g}% / {data.term_years} years")
    summary.add_row("Total P&I paid", money(data.total_payments))
    summary.add_row("Total interest", money(data.total_interest))
    console.print(Panel(summary, title="Mortgage", border_style="cyan"))

    piti = data.piti
    table = Table(title="Monthly PITI", box=box.SIMPLE)
    table.add_column("Component")
    table.add_column("Monthly", justify="right")
    table.add_row("Principal & interest", money(piti.principal_interest, cents=True))
    table.add_row("Property tax", money(piti.property_tax, cents=True))
    table.add_row("Insurance", money(piti.insurance, cents=True))
    if piti.pmi > 0:
        table.add_row("PMI", money(piti.pmi, cents=True))
    table.add_row("[bold]Total[/bold]", f"[bold]{money(piti.total_monthly, cents=True)}[/bold]")
    console.print(table)


def render_dti(console: Console, data: DtiAnalysis) -> None:
    table = _kv_table()
    table.add_row("Monthly income", money(data.monthly_income))
    table.add_row("Housing payment", money(data.housing_payment))
    table.add_row("Other debts", money(data.other_debts))
    table.add_row("Front-end DTI", f"{data.front_end_dti:.1f}%")
    table.add_row("Back-end DTI", f"{data.back_end_dti:.1f}%")
    style = "green" if data.is_affordable else "yellow"
    table.add_row("Qualification", f"[{style}]{data.qualification}[/{style}]")
    console.print(Panel(table, title="Debt-to-Income", border_style=style))


def render_max_home(console: Console, data: MaxHomePrice) -> None:
    table = _kv_table()
    table.add_row("Monthly income", money(data.monthly_income))
    table.add_row("Max housing payment (28%)", money(data.max_housing_payment))
    table.add_row("[bold]Estimated max price[/bold]", f"[bold]{money(data.estimated_max_price)}[/bold]")
    a = data.assumptions
    table.add_row("Assumes", f"{a.down_payment_percent:g}% down, {a.interest_rate:g}%, {a.term_years} years")
    console.print(Panel(table, title="Max Home Price (estimate)", border_style="cyan"))


def render_rent(console: Console, data: RentAffordability) -> None:
    table = _kv_table()
    table.add_row("Monthly income", money(data.monthly_income))
    table.add_row("Max rent (30%)", money(data.max_rent_30))
    table.add_row("Conservative (25%)", money(data.max_rent_25))
    if data.current_rent is not None:
        style = "green" if data.is_affordable else "red"
        table.add_row("Current rent", money(data.current_rent))
        table.add_row("Share of income", f"[{style}]{data.rent_percent:.1f}%[/{style}]")
    console.print(Panel(table, title="Rent Affordability", border_style="cyan"))


def render_taxes(console: Console, data: TaxBreakdown) -> None:
    table = Table(box=box.SIMPLE)
    table.add_column("Item")
    table.add_column("Annual", justify="right")
    table.add_column("Monthly", justify="right")

    rows = [
        ("Gross income", data.gross_annual),
        ("Federal tax", data.federal_tax),
        ("State tax", data.state_tax),
        ("Social Security", data.social_security),
        ("Medicare", data.medicare),
        ("401k", data.retirement_401k),
        ("Health insurance", data.health_insurance),
    ]
    if data.other_pretax:
        rows.append(("Other pre-tax", data.other_pretax))
    for label, amount in rows:
        table.add_row(label, money(amount, cents=True), money(amount / 12, cents=True))

    table.add_row("Total deductions", money(data.total_deductions, cents=True),
                  money(data.total_deductions / 12, cents=True), style="dim")
    table.add_row("[bold]Take-home[/bold]", f"[bold]{money(data.net_annual, cents=True)}[/bold]",
                  f"[bold]{money(data.net_monthly, cents=True)}[/bold]")
    console.print(table)
    console.print(f"Effective tax rate: {data.effective_tax_rate:.1f}%")


def render_budget(console: Console, allocation: BudgetAllocation,
                  reference: Optional[QuickReference] = None) -> None:
    table = Table(title=f"50/30/20 budget on {money(allocation.net_monthly)}/month", box=box.SIMPLE)
    table.add_column("Category")
    table.add_column("%", justify="right")
    table.add_column("Monthly", justify="right")
    table.add_column("Weekly", justify="right")
    table.add_column("Daily", justify="right")

    for category in (allocation.needs, allocation.wants, allocation.savings):
        table.add_row(
            f"[bold]{category.name}[/bold]",
            f"{category.percent:g}",
            money(category.monthly),
            money(category.weekly),
            money(category.daily),
        )
        for sub in category.subcategories:
            table.add_row(f"  {sub.name}", f"{sub.percent:g}", money(sub.monthly), "", "", style="dim")
    console.print(table)

    if reference:
        ref = _kv_table()
        ref.add_row("Daily budget", money(reference.daily_budget))
        ref.add_row("Take-home hourly", money(reference.hourly_rate))
        ref.add_row("Emergency fund (3 mo)", money(reference.emergency_fund_3mo))
        ref.add_row("Emergency fund (6 mo)", money(reference.emergency_fund_6mo))
        console.print(Panel(ref, title="Quick Reference", border_style="dim"))


def render_schedule(console: Console, rows: Iterable[AmortizationPayment],
                    totals: Optional[ScheduleTotals] = None) -> None:
    table = Table(box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Payment", justify="right")
    table.add_column("Principal", justify="right")
    table.add_column("Interest", justify="right")
    table.add_column("Balance", justify="right")
    for row in rows:
        table.add_row(
            str(row.period),
            money(row.payment, cents=True),
            money(row.principal, cents=True),
            money(row.interest, cents=True),
            money(row.balance, cents=True),
        )
    console.print(table)

    if totals:
        console.print(
            f"{totals.periods} payments, total paid {money(totals.total_paid, cents=True)}, "
            f"interest {money(totals.total_interest, cents=True)}"
        )


def render_formula_list(console: Console, formulas: List[Formula]) -> None:
    table = Table(box=box.SIMPLE)
    table.add_column("Name")
    table.add_column("Version")
    table.add_column("Inputs")
    table.add_column("Description", style="dim")
    for formula in formulas:
        table.add_row(
            formula.name,
            formula.version,
            ", ".join(inp.name for inp in formula.inputs),
            formula.description,
        )
    console.print(table)


def render_formula(console: Console, formula: Formula) -> None:
    console.print(f"\n[bold]{formula.name}[/bold] v{formula.version}")
    if formula.description:
        console.print(formula.description)

    if formula.inputs:
        table = Table(box=box.SIMPLE)
        table.add_column("Input")
        table.add_column("Default", justify="right")
        table.add_column("Description", style="dim")
        for inp in formula.inputs:
            default = "required" if inp.default is None else f"{inp.default:.10g}"
            table.add_row(inp.name, default, inp.description)
        console.print(table)

    console.print(Panel(formula.script.strip(), title="Script", border_style="dim"))


def render_formula_result(console: Console, result: FormulaResult) -> None:
    inputs = ", ".join(f"{k}={v:.10g}" for k, v in result.inputs.items())
    console.print(f"{result.formula_name} v{result.formula_version}({inputs})")
    console.print(f"[bold]{result.value:.10g}[/bold]")
