"""
Valuation Engine Tax Calculations

Levered view: profit tax -> Net Income (income statement)
Unlevered view: tax on EBIT -> NOPAT (free cash flow)
"""
from __future__ import annotations

from valuation_engine.models import AssumptionSet


def compute_pretax_income(
    ebit: dict[int, float],
    interest_expense: dict[int, float]
) -> dict[int, float]:
    """
    Compute pre-tax income for all forecast years.

    PretaxIncome = EBIT - InterestExpense

    Returns:
        dict mapping year -> pre-tax income
    """
    pretax = {}
    for year in ebit:
        pretax[year] = ebit[year] - interest_expense.get(year, 0.0)

    return pretax


def compute_taxes(
    assumptions: AssumptionSet,
    pretax_income: dict[int, float]
) -> dict[int, float]:
    """
    Compute income taxes for all forecast years.

    Taxes = max(0, PretaxIncome) * TaxRate

    Returns:
        dict mapping year -> taxes
    """
    tax_rate = assumptions.tax_rate / 100

    taxes = {}
    for year, value in pretax_income.items():
        # Only positive income is taxed (loss carry-forward not modeled)
        taxes[year] = max(0.0, value) * tax_rate

    return taxes


def compute_net_income(
    pretax_income: dict[int, float],
    taxes: dict[int, float]
) -> dict[int, float]:
    """
    Compute Net Income for all forecast years.

    NetIncome = PretaxIncome - Taxes

    Returns:
        dict mapping year -> net income
    """
    net_income = {}
    for year in pretax_income:
        net_income[year] = pretax_income[year] - taxes.get(year, 0.0)

    return net_income


def compute_nopat(
    assumptions: AssumptionSet,
    ebit: dict[int, float]
) -> dict[int, float]:
    """
    Compute NOPAT for all forecast years.

    NOPAT = EBIT * (1 - TaxRate)

    Returns:
        dict mapping year -> NOPAT
    """
    tax_rate = assumptions.tax_rate / 100

    nopat = {}
    for year in ebit:
        nopat[year] = ebit[year] * (1 - tax_rate)

    return nopat
