"""
Valuation Engine Income Statement

Revenue -> Gross Profit -> EBIT -> Pre-tax Income -> Net Income.
"""
from __future__ import annotations

from valuation_engine.debt import compute_interest_expense
from valuation_engine.models import (
    AssumptionSet,
    DebtRow,
    DepreciationRow,
    IncomeStatementRow,
)
from valuation_engine.projections import compute_cogs, compute_sga
from valuation_engine.taxes import (
    compute_net_income,
    compute_pretax_income,
    compute_taxes,
)


def compute_ebit(
    revenue: dict[int, float],
    cogs: dict[int, float],
    sga: dict[int, float],
    depreciation: dict[int, float]
) -> dict[int, float]:
    """
    Compute EBIT for forecast years.

    EBIT = Revenue - COGS - SG&A - Depreciation

    Returns:
        dict mapping year -> EBIT
    """
    ebit = {}
    for year in revenue:
        gross_profit = revenue[year] - cogs[year]
        ebit[year] = gross_profit - sga[year] - depreciation.get(year, 0.0)

    return ebit


def build_income_statement(
    assumptions: AssumptionSet,
    revenue: dict[int, float],
    depreciation_schedule: list[DepreciationRow],
    debt_schedule: list[DebtRow]
) -> list[IncomeStatementRow]:
    """
    Build the income statement for all forecast years.

    Depreciation comes from the PP&E schedule and interest from the debt
    schedule; no tax benefit is recorded on a pre-tax loss.

    Returns:
        List of IncomeStatementRow ordered by year
    """
    cogs = compute_cogs(assumptions, revenue)
    sga = compute_sga(assumptions, revenue)
    depreciation = {row.year: row.depreciation for row in depreciation_schedule}
    interest = compute_interest_expense(debt_schedule)

    ebit = compute_ebit(revenue, cogs, sga, depreciation)
    pretax = compute_pretax_income(ebit, interest)
    taxes = compute_taxes(assumptions, pretax)
    net_income = compute_net_income(pretax, taxes)

    rows = []
    for year in assumptions.forecast_years:
        rows.append(IncomeStatementRow(
            year=year,
            revenue=revenue[year],
            cogs=cogs[year],
            gross_profit=revenue[year] - cogs[year],
            sga=sga[year],
            depreciation=depreciation[year],
            ebit=ebit[year],
            interest_expense=interest[year],
            pretax_income=pretax[year],
            tax=taxes[year],
            net_income=net_income[year],
        ))

    return rows
