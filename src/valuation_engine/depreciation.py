"""
Valuation Engine Depreciation Schedule

PP&E roll-forward with straight-line depreciation on a rolling asset base.
"""
from __future__ import annotations

from valuation_engine.models import AssumptionSet, DepreciationRow
from valuation_engine.projections import compute_capex


def compute_initial_ppe(assumptions: AssumptionSet) -> float:
    """
    Seed the opening PP&E balance.

    OpeningPPE = Multiple * BaseRevenue * Capex%

    With the default multiple of 2 the opening base holds two years of
    base-year capex, so depreciation is non-zero from year 1.
    """
    base_capex = assumptions.base_revenue * assumptions.capex_percent / 100
    return max(0.0, assumptions.initial_ppe_multiple * base_capex)


def compute_depreciation_charge(
    beginning_ppe: float,
    capex: float,
    useful_life: float
) -> float:
    """
    Straight-line charge on the rolling base.

    Depreciation = (BeginningPPE + Capex) / UsefulLife

    The useful life is at least one year, so the charge never exceeds the
    available balance.
    """
    return max(0.0, beginning_ppe + capex) / useful_life


def compute_depreciation_schedule(
    assumptions: AssumptionSet,
    revenue: dict[int, float]
) -> list[DepreciationRow]:
    """
    Build the PP&E schedule for all forecast years.

    EndingPPE_t = BeginningPPE_t + Capex_t - Depreciation_t
    BeginningPPE_(t+1) = EndingPPE_t

    Returns:
        List of DepreciationRow ordered by year
    """
    capex = compute_capex(assumptions, revenue)

    schedule = []
    beginning_ppe = compute_initial_ppe(assumptions)
    for year in assumptions.forecast_years:
        depreciation = compute_depreciation_charge(
            beginning_ppe, capex[year], assumptions.depreciation_years
        )
        ending_ppe = max(0.0, beginning_ppe + capex[year] - depreciation)

        schedule.append(DepreciationRow(
            year=year,
            beginning_ppe=beginning_ppe,
            capex=capex[year],
            depreciation=depreciation,
            ending_ppe=ending_ppe,
        ))
        beginning_ppe = ending_ppe

    return schedule
