"""
Valuation Engine Cash Flow Calculations

Unlevered free cash flow, built from EBIT so that it does not depend on the
capital structure.
"""
from __future__ import annotations

from valuation_engine.models import (
    AssumptionSet,
    CashFlowRow,
    DepreciationRow,
    IncomeStatementRow,
    WorkingCapitalRow,
)
from valuation_engine.taxes import compute_nopat
from valuation_engine.working_capital import compute_delta_nwc


def compute_unlevered_fcf(
    nopat: dict[int, float],
    depreciation: dict[int, float],
    delta_nwc: dict[int, float],
    capex: dict[int, float]
) -> dict[int, float]:
    """
    Compute unlevered free cash flow for all forecast years.

    UFCF = NOPAT + Depreciation - ΔNWC - Capex

    Note on signs:
    - NOPAT: EBIT after tax at the statutory rate
    - Depreciation: add back (non-cash expense)
    - ΔNWC: subtract if positive (cash consumed), add if negative (cash released)
    - Capex: subtract (cash outflow, provided as positive number)

    Returns:
        dict mapping year -> UFCF
    """
    ufcf = {}
    for year in nopat:
        ufcf[year] = (
            nopat[year]
            + depreciation.get(year, 0.0)
            - delta_nwc.get(year, 0.0)
            - capex.get(year, 0.0)
        )

    return ufcf


def build_cash_flow(
    assumptions: AssumptionSet,
    income_statement: list[IncomeStatementRow],
    depreciation_schedule: list[DepreciationRow],
    working_capital: list[WorkingCapitalRow]
) -> list[CashFlowRow]:
    """
    Build the cash flow bridge for all forecast years.

    Net income is carried for reference only; UFCF starts from EBIT, so
    interest expense and debt balances never reach it.

    Returns:
        List of CashFlowRow ordered by year
    """
    ebit = {row.year: row.ebit for row in income_statement}
    depreciation = {row.year: row.depreciation for row in depreciation_schedule}
    capex = {row.year: row.capex for row in depreciation_schedule}
    delta_nwc = compute_delta_nwc(working_capital)

    nopat = compute_nopat(assumptions, ebit)
    ufcf = compute_unlevered_fcf(nopat, depreciation, delta_nwc, capex)

    rows = []
    for row in income_statement:
        year = row.year
        rows.append(CashFlowRow(
            year=year,
            net_income=row.net_income,
            depreciation=depreciation[year],
            change_in_nwc=delta_nwc[year],
            capex=capex[year],
            unlevered_fcf=ufcf[year],
        ))

    return rows
