"""
Valuation Engine Terminal Value

Perpetuity (Gordon) growth method.
"""
from __future__ import annotations

from valuation_engine.errors import TerminalValueError


def compute_terminal_value_perpetuity(
    final_cash_flow: float,
    discount_rate: float,
    growth_rate: float
) -> float:
    """
    Compute terminal value using the perpetuity (Gordon) growth model.

    TV = CF_N * (1 + g) / (r - g)

    Args:
        final_cash_flow: UFCF in the final forecast year
        discount_rate: WACC as a decimal
        growth_rate: Perpetuity growth rate as a decimal

    Returns:
        Terminal value at the end of year N

    Raises:
        TerminalValueError: If g >= discount_rate
    """
    if growth_rate >= discount_rate:
        raise TerminalValueError(
            f"Terminal growth ({growth_rate:.4%}) must be less than WACC ({discount_rate:.4%})",
            field="terminal_growth_rate",
        )

    return final_cash_flow * (1 + growth_rate) / (discount_rate - growth_rate)


def compute_pv_terminal_value(
    terminal_value: float,
    final_discount_factor: float
) -> float:
    """
    Discount the terminal value with the final explicit year's factor.

    PV(TV) = TV * DF_N
    """
    return terminal_value * final_discount_factor
