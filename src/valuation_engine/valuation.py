"""
Valuation Engine Valuation

Enterprise Value, Equity Value and implied share price.
"""
from __future__ import annotations

import math

from valuation_engine.discounting import (
    compute_discount_factors,
    compute_pv_series,
    sum_pv,
)
from valuation_engine.errors import ComputationError
from valuation_engine.models import AssumptionSet, CashFlowRow, ValuationResult
from valuation_engine.terminal_value import (
    compute_pv_terminal_value,
    compute_terminal_value_perpetuity,
)


def compute_enterprise_value(
    sum_pv_ufcf: float,
    pv_terminal_value: float
) -> float:
    """
    Compute Enterprise Value.

    EV = Sum(PV of UFCFs) + PV(Terminal Value)

    Returns:
        Enterprise Value
    """
    return sum_pv_ufcf + pv_terminal_value


def compute_equity_value(
    enterprise_value: float,
    net_debt: float
) -> float:
    """
    Compute Equity Value from Enterprise Value.

    EquityValue = EV - NetDebt

    Returns:
        Equity Value
    """
    return enterprise_value - net_debt


def compute_implied_share_price(
    equity_value: float,
    shares_outstanding: float
) -> float:
    """
    Compute the implied value per share.

    SharePrice = EquityValue / SharesOutstanding

    Raises:
        ComputationError: If shares outstanding is zero or negative
    """
    if shares_outstanding <= 0:
        raise ComputationError(
            f"Shares outstanding must be positive, got {shares_outstanding}",
            field="shares_outstanding",
        )
    return equity_value / shares_outstanding


def _ensure_finite(name: str, *values: float) -> None:
    for value in values:
        if not math.isfinite(value):
            raise ComputationError(f"{name} is not a finite number ({value})")


def compute_valuation(
    assumptions: AssumptionSet,
    cash_flow: list[CashFlowRow]
) -> ValuationResult:
    """
    Discount the UFCF stream and bridge to the implied share price.

    The terminal value is discounted with the final explicit year's factor
    (period N, not N + 1).

    Raises:
        ComputationError: No cash flows, WACC <= terminal growth,
            non-positive share count or a non-finite result
    """
    if not cash_flow:
        raise ComputationError(
            "At least one projection year is required for a valuation",
            field="projection_years",
        )

    years = [row.year for row in cash_flow]
    final_year = years[-1]
    wacc = assumptions.wacc / 100
    growth = assumptions.terminal_growth_rate / 100
    if wacc <= -1:
        raise ComputationError(f"WACC of {assumptions.wacc}% has no discount factor", field="wacc")

    ufcf = {row.year: row.unlevered_fcf for row in cash_flow}
    discount_factors = compute_discount_factors(wacc, years)
    pv_ufcf = compute_pv_series(ufcf, discount_factors)
    sum_pv_ufcf = sum_pv(pv_ufcf)

    terminal_value = compute_terminal_value_perpetuity(ufcf[final_year], wacc, growth)
    pv_terminal_value = compute_pv_terminal_value(terminal_value, discount_factors[final_year])

    enterprise_value = compute_enterprise_value(sum_pv_ufcf, pv_terminal_value)
    equity_value = compute_equity_value(enterprise_value, assumptions.net_debt)
    share_price = compute_implied_share_price(equity_value, assumptions.shares_outstanding)

    _ensure_finite("Discount factors", *discount_factors.values())
    _ensure_finite("Terminal value", terminal_value, pv_terminal_value)
    _ensure_finite("Enterprise value", enterprise_value, equity_value, share_price)

    return ValuationResult(
        ufcf_stream=tuple(ufcf[y] for y in years),
        pv_factors=tuple(discount_factors[y] for y in years),
        pv_ufcf=tuple(pv_ufcf[y] for y in years),
        sum_pv_ufcf=sum_pv_ufcf,
        terminal_value=terminal_value,
        pv_terminal_value=pv_terminal_value,
        enterprise_value=enterprise_value,
        equity_value=equity_value,
        implied_share_price=share_price,
    )
