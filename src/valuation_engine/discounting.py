"""
Valuation Engine Discounting Logic

Discount factor calculations and present value computations.
End-of-year convention at a constant rate.
"""
from __future__ import annotations

from valuation_engine.errors import ComputationError


def compute_discount_factors(
    rate: float,
    years: list[int]
) -> dict[int, float]:
    """
    Compute discount factors for each forecast year.

    DF_t = 1 / (1 + r)^t
    where t is the period number (1, 2, 3, ...)

    Args:
        rate: Discount rate as a decimal (0.10 for 10%)
        years: Forecast years, numbered from 1

    Returns:
        dict mapping year -> discount factor

    Raises:
        ComputationError: If (1 + r)^t leaves the floating-point range
    """
    discount_factors = {}
    try:
        for year in years:
            discount_factors[year] = 1.0 / ((1 + rate) ** year)
    except (OverflowError, ZeroDivisionError) as e:
        raise ComputationError(
            f"Discount factor for year {year} is out of range at a rate of {rate:.2%}",
            field="projection_years",
        ) from e

    return discount_factors


def compute_pv_series(
    cash_flows: dict[int, float],
    discount_factors: dict[int, float]
) -> dict[int, float]:
    """
    Compute present value of each cash flow in a series.

    PV(CF_t) = CF_t * DF_t

    Returns:
        dict mapping year -> PV of that year's cash flow
    """
    pv = {}
    for year, cf in cash_flows.items():
        pv[year] = cf * discount_factors[year]

    return pv


def sum_pv(pv_series: dict[int, float]) -> float:
    """
    Sum all present values in a series.

    Returns:
        Sum of PVs
    """
    return sum(pv_series.values())
