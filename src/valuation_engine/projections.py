"""
Valuation Engine Operating Projections

Revenue compounding and revenue-driven cost lines.
"""
from __future__ import annotations

from valuation_engine.errors import ComputationError
from valuation_engine.models import AssumptionSet


def compute_revenue(assumptions: AssumptionSet) -> dict[int, float]:
    """
    Compute revenue for all forecast years.

    Revenue_t = BaseRevenue * (1 + g)^t

    The base revenue is the last reported year (t0); every returned year is
    a forecast year. Negative or very high growth is not rejected here.

    Returns:
        dict mapping year -> revenue

    Raises:
        ComputationError: If compounding overflows over a long horizon
    """
    g = assumptions.revenue_growth_rate / 100

    revenue = {}
    try:
        for year in assumptions.forecast_years:
            revenue[year] = assumptions.base_revenue * (1 + g) ** year
    except OverflowError as e:
        raise ComputationError(
            f"Revenue overflows in year {year} at {assumptions.revenue_growth_rate}% growth",
            field="projection_years",
        ) from e

    return revenue


def compute_cogs(
    assumptions: AssumptionSet,
    revenue: dict[int, float]
) -> dict[int, float]:
    """
    Compute cost of goods sold.

    COGS = Revenue * COGS%

    Returns:
        dict mapping year -> COGS
    """
    ratio = assumptions.cogs_percent / 100
    return {year: rev * ratio for year, rev in revenue.items()}


def compute_sga(
    assumptions: AssumptionSet,
    revenue: dict[int, float]
) -> dict[int, float]:
    """
    Compute selling, general and administrative expense.

    SG&A = Revenue * SG&A%

    Returns:
        dict mapping year -> SG&A
    """
    ratio = assumptions.sga_percent / 100
    return {year: rev * ratio for year, rev in revenue.items()}


def compute_capex(
    assumptions: AssumptionSet,
    revenue: dict[int, float]
) -> dict[int, float]:
    """
    Compute capital expenditure (positive = cash outflow).

    Capex = Revenue * Capex%

    Returns:
        dict mapping year -> capex
    """
    ratio = assumptions.capex_percent / 100
    return {year: rev * ratio for year, rev in revenue.items()}
