"""
Valuation CLI Display

Rich table formatting for terminal output.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from valuation_engine.models import Bundle, Severity, ValidationWarning
from valuation_io.writers import ASSUMPTION_LABELS


console = Console()

SEVERITY_STYLES = {
    Severity.LOW: "dim",
    Severity.MEDIUM: "yellow",
    Severity.HIGH: "bold red",
}


def _fmt(value: float) -> str:
    return f"{value:,.2f}"


def display_header(title: str) -> None:
    """Display a section header."""
    console.print()
    console.print(Panel(Text(title, style="bold white"), style="blue"))


def display_metadata(metadata: Optional[dict[str, Any]]) -> None:
    """Display pass-through file metadata, if any."""
    if not metadata:
        return
    display_header("Source")

    table = Table(show_header=False)
    table.add_column("Key", style="dim")
    table.add_column("Value")
    for key, value in metadata.items():
        table.add_row(str(key), str(value))

    console.print(table)


def display_assumptions(bundle: Bundle) -> None:
    """Display the assumption set."""
    display_header("📊 Assumptions")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Parameter", style="dim")
    table.add_column("Value", justify="right")

    for name, value in bundle.assumptions.model_dump().items():
        shown = f"{value:,}" if isinstance(value, (int, float)) else str(value)
        table.add_row(ASSUMPTION_LABELS.get(name, name), shown)

    console.print(table)


def display_warnings(warnings: Sequence[ValidationWarning]) -> None:
    """Display advisory validation warnings."""
    if not warnings:
        return
    display_header("⚠ Warnings")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Severity", justify="center")
    table.add_column("Field", style="dim")
    table.add_column("Message")

    for w in warnings:
        style = SEVERITY_STYLES[w.severity]
        table.add_row(f"[{style}]{w.severity.value.upper()}[/{style}]", w.field, w.message)

    console.print(table)


def display_income_statement(bundle: Bundle) -> None:
    """Display the projected income statement."""
    display_header("📈 Income Statement")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Year", justify="center")
    table.add_column("Revenue", justify="right")
    table.add_column("COGS", justify="right")
    table.add_column("Gross Profit", justify="right")
    table.add_column("SG&A", justify="right")
    table.add_column("Depreciation", justify="right")
    table.add_column("EBIT", justify="right")
    table.add_column("Interest", justify="right")
    table.add_column("Tax", justify="right")
    table.add_column("Net Income", justify="right", style="bold green")

    for r in bundle.income_statement:
        table.add_row(
            str(r.year),
            _fmt(r.revenue),
            _fmt(r.cogs),
            _fmt(r.gross_profit),
            _fmt(r.sga),
            _fmt(r.depreciation),
            _fmt(r.ebit),
            _fmt(r.interest_expense),
            _fmt(r.tax),
            _fmt(r.net_income),
        )

    console.print(table)


def display_schedules(bundle: Bundle) -> None:
    """Display the PP&E and debt schedules side by side by year."""
    display_header("🏭 PP&E and Debt Schedules")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Year", justify="center")
    table.add_column("Beg. PP&E", justify="right")
    table.add_column("+ Capex", justify="right")
    table.add_column("- Depr.", justify="right")
    table.add_column("= End PP&E", justify="right", style="bold")
    table.add_column("Beg. Debt", justify="right")
    table.add_column("Interest", justify="right")
    table.add_column("- Repayment", justify="right")
    table.add_column("= End Debt", justify="right", style="bold")

    for ppe, debt in zip(bundle.depreciation_schedule, bundle.debt_schedule):
        table.add_row(
            str(ppe.year),
            _fmt(ppe.beginning_ppe),
            _fmt(ppe.capex),
            _fmt(ppe.depreciation),
            _fmt(ppe.ending_ppe),
            _fmt(debt.beginning_balance),
            _fmt(debt.interest_expense),
            _fmt(debt.repayment),
            _fmt(debt.ending_balance),
        )

    console.print(table)


def display_working_capital(bundle: Bundle) -> None:
    """Display NWC schedule."""
    display_header("💰 Net Working Capital Schedule")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Year", justify="center")
    table.add_column("AR", justify="right")
    table.add_column("Inventory", justify="right")
    table.add_column("AP", justify="right")
    table.add_column("NWC", justify="right")
    table.add_column("ΔNWC", justify="right")

    for r in bundle.working_capital:
        table.add_row(
            str(r.year),
            _fmt(r.accounts_receivable),
            _fmt(r.inventory),
            _fmt(r.accounts_payable),
            _fmt(r.net_working_capital),
            _fmt(r.change_in_nwc),
        )

    console.print(table)


def display_cash_flows(bundle: Bundle) -> None:
    """Display the unlevered free cash flow bridge."""
    display_header("💸 Cash Flows")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Year", justify="center")
    table.add_column("Net Income", justify="right")
    table.add_column("+ Depr.", justify="right")
    table.add_column("- ΔNWC", justify="right")
    table.add_column("- Capex", justify="right")
    table.add_column("= UFCF", justify="right", style="bold green")

    for r in bundle.cash_flow:
        table.add_row(
            str(r.year),
            _fmt(r.net_income),
            _fmt(r.depreciation),
            _fmt(r.change_in_nwc),
            _fmt(r.capex),
            _fmt(r.unlevered_fcf),
        )

    console.print(table)


def display_balance_sheet(bundle: Bundle) -> None:
    """Display balance sheets and the balance check."""
    display_header("⚖ Balance Sheet")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Year", justify="center")
    table.add_column("Cash", justify="right")
    table.add_column("AR", justify="right")
    table.add_column("Inventory", justify="right")
    table.add_column("PP&E", justify="right")
    table.add_column("Total Assets", justify="right", style="bold")
    table.add_column("AP", justify="right")
    table.add_column("Debt", justify="right")
    table.add_column("Equity", justify="right")
    table.add_column("Total L + E", justify="right", style="bold")

    for r in bundle.balance_sheet:
        cash = _fmt(r.cash_plug)
        if r.cash_plug < 0:
            cash = f"[red]{cash}[/red]"
        table.add_row(
            str(r.year),
            cash,
            _fmt(r.accounts_receivable),
            _fmt(r.inventory),
            _fmt(r.ppe),
            _fmt(r.total_assets),
            _fmt(r.accounts_payable),
            _fmt(r.debt_balance),
            _fmt(r.total_equity),
            _fmt(r.total_liabilities_and_equity),
        )

    console.print(table)

    imbalances = bundle.balance_sheet_imbalances()
    if imbalances:
        for year, diff in imbalances:
            console.print(f"[bold red]✗ Year {year} does not balance (difference {diff:,.6f})[/bold red]")
    else:
        console.print("[green]✓ Assets = Liabilities + Equity in every year[/green]")


def display_pv_decomposition(bundle: Bundle) -> None:
    """Display PV decomposition."""
    display_header("📉 Present Value Decomposition")

    v = bundle.valuation
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Year", justify="center")
    table.add_column("UFCF", justify="right")
    table.add_column("DF", justify="right")
    table.add_column("PV(UFCF)", justify="right", style="green")

    for year, ufcf, df, pv in zip(bundle.years, v.ufcf_stream, v.pv_factors, v.pv_ufcf):
        table.add_row(str(year), _fmt(ufcf), f"{df:.6f}", _fmt(pv))

    table.add_row("[bold]Total[/bold]", "", "", f"[bold]{_fmt(v.sum_pv_ufcf)}[/bold]")

    console.print(table)


def display_valuation_bridge(bundle: Bundle) -> None:
    """Display valuation bridge."""
    display_header("🌉 Valuation Bridge")

    a = bundle.assumptions
    v = bundle.valuation

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim")
    table.add_column("Value", justify="right")

    table.add_row("Sum PV(UFCF)", _fmt(v.sum_pv_ufcf))
    table.add_row("Terminal Value", _fmt(v.terminal_value))
    table.add_row("+ PV(Terminal Value)", _fmt(v.pv_terminal_value))
    table.add_row("", "")
    table.add_row("[bold]Enterprise Value[/bold]", f"[bold]{_fmt(v.enterprise_value)}[/bold]")
    table.add_row("Less: Net Debt", f"({_fmt(a.net_debt)})")
    table.add_row("[bold green]Equity Value[/bold green]", f"[bold green]{_fmt(v.equity_value)}[/bold green]")
    table.add_row("Shares Outstanding", f"{a.shares_outstanding:,}")
    table.add_row("", "")
    table.add_row(
        "[bold yellow]Implied Share Price[/bold yellow]",
        f"[bold yellow]{v.implied_share_price:,.4f}[/bold yellow]",
    )

    console.print(table)


def display_all(bundle: Bundle, metadata: Optional[dict[str, Any]] = None) -> None:
    """Display all engine outputs."""
    display_metadata(metadata)
    display_assumptions(bundle)
    display_warnings(bundle.warnings)
    display_income_statement(bundle)
    display_schedules(bundle)
    display_working_capital(bundle)
    display_cash_flows(bundle)
    display_balance_sheet(bundle)
    display_pv_decomposition(bundle)
    display_valuation_bridge(bundle)

    console.print()
    console.print("[bold green]✓ Valuation Complete[/bold green]")
