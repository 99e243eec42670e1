"""
Valuation Engine Balance Sheet

Assembles every non-cash balance from the schedules and solves cash as the
plug that satisfies Assets = Liabilities + Equity. Cash is therefore not a
roll-forward of free cash flow.
"""
from __future__ import annotations

from valuation_engine.models import (
    AssumptionSet,
    BalanceSheetRow,
    DebtRow,
    DepreciationRow,
    IncomeStatementRow,
    WorkingCapitalRow,
)


def compute_retained_earnings(net_income: dict[int, float]) -> dict[int, float]:
    """
    Roll retained earnings forward from zero (no dividends).

    RetainedEarnings_t = RetainedEarnings_(t-1) + NetIncome_t

    Returns:
        dict mapping year -> closing retained earnings
    """
    retained = {}
    balance = 0.0
    for year in sorted(net_income):
        balance += net_income[year]
        retained[year] = balance

    return retained


def compute_cash_plug(
    total_liabilities: float,
    total_equity: float,
    non_cash_assets: float
) -> float:
    """
    Cash = Liabilities + Equity - Non-cash Assets

    A negative plug is a funding requirement and is kept as is.
    """
    return total_liabilities + total_equity - non_cash_assets


def build_balance_sheet(
    assumptions: AssumptionSet,
    income_statement: list[IncomeStatementRow],
    depreciation_schedule: list[DepreciationRow],
    debt_schedule: list[DebtRow],
    working_capital: list[WorkingCapitalRow]
) -> list[BalanceSheetRow]:
    """
    Build balance sheets for all forecast years.

    Returns:
        List of BalanceSheetRow ordered by year
    """
    retained = compute_retained_earnings({row.year: row.net_income for row in income_statement})
    ppe = {row.year: row.ending_ppe for row in depreciation_schedule}
    debt = {row.year: row.ending_balance for row in debt_schedule}
    wc = {row.year: row for row in working_capital}

    rows = []
    for year in assumptions.forecast_years:
        ar = wc[year].accounts_receivable
        inventory = wc[year].inventory
        ap = wc[year].accounts_payable

        total_liabilities = ap + debt[year]
        total_equity = assumptions.contributed_capital + retained[year]
        cash = compute_cash_plug(total_liabilities, total_equity, ar + inventory + ppe[year])

        total_current_assets = cash + ar + inventory
        rows.append(BalanceSheetRow(
            year=year,
            cash_plug=cash,
            accounts_receivable=ar,
            inventory=inventory,
            total_current_assets=total_current_assets,
            ppe=ppe[year],
            total_assets=total_current_assets + ppe[year],
            accounts_payable=ap,
            debt_balance=debt[year],
            total_liabilities=total_liabilities,
            retained_earnings=retained[year],
            total_equity=total_equity,
        ))

    return rows
