"""
Valuation Engine Working Capital

Receivables, inventory and payables from day-count ratios, with a year-0
baseline so that the first forecast year has a defined change in NWC.
"""
from __future__ import annotations

from valuation_engine.constants import DAYS_IN_YEAR
from valuation_engine.models import AssumptionSet, WorkingCapitalRow


def compute_balances(
    revenue: float,
    cogs: float,
    days_receivables: float,
    days_inventory: float,
    days_payables: float
) -> tuple[float, float, float]:
    """
    Working capital balances for one period.

    AR = Revenue * DSO / 365
    Inventory = COGS * DIO / 365
    AP = COGS * DPO / 365

    Returns:
        Tuple of (receivables, inventory, payables)
    """
    ar = revenue * days_receivables / DAYS_IN_YEAR
    inventory = cogs * days_inventory / DAYS_IN_YEAR
    ap = cogs * days_payables / DAYS_IN_YEAR
    return ar, inventory, ap


def compute_working_capital(
    assumptions: AssumptionSet,
    revenue: dict[int, float],
    cogs: dict[int, float]
) -> list[WorkingCapitalRow]:
    """
    Build the working capital schedule for base and forecast years.

    NWC = AR + Inventory - AP
    ΔNWC_t = NWC_t - NWC_(t-1)

    Cash-flow sign rule:
    - ΔNWC > 0 means cash consumed (subtract in cash flow)
    - ΔNWC < 0 means cash released (add in cash flow)

    Returns:
        List of WorkingCapitalRow starting with the year-0 baseline
    """
    a = assumptions
    periods = [(0, a.base_revenue, a.base_cogs)]
    periods += [(year, revenue[year], cogs[year]) for year in a.forecast_years]

    rows = []
    prev_nwc = None
    for year, rev, cost in periods:
        ar, inventory, ap = compute_balances(
            rev, cost, a.days_receivables, a.days_inventory, a.days_payables
        )
        nwc = ar + inventory - ap
        rows.append(WorkingCapitalRow(
            year=year,
            accounts_receivable=ar,
            inventory=inventory,
            accounts_payable=ap,
            net_working_capital=nwc,
            change_in_nwc=0.0 if prev_nwc is None else nwc - prev_nwc,
        ))
        prev_nwc = nwc

    return rows


def compute_delta_nwc(schedule: list[WorkingCapitalRow]) -> dict[int, float]:
    """
    Change in NWC for forecast years (the year-0 baseline is excluded).

    Returns:
        dict mapping year -> ΔNWC
    """
    return {row.year: row.change_in_nwc for row in schedule if row.year > 0}
