"""
Valuation Engine Input Validation

Advisory validation for assumption sets. Hard constraints (negative days,
useful life below one year, ...) are enforced by the AssumptionSet model
itself; everything here is returned as warnings and never stops a run.
"""
from __future__ import annotations

from valuation_engine import constants as c
from valuation_engine.models import AssumptionSet, Severity, ValidationWarning


def validate_assumptions(assumptions: AssumptionSet) -> list[ValidationWarning]:
    """
    Check assumptions against sane ranges.

    Returns:
        List of warnings, empty when every value is within range
    """
    warnings: list[ValidationWarning] = []
    _validate_revenue(assumptions, warnings)
    _validate_horizon(assumptions, warnings)
    _validate_margins(assumptions, warnings)
    _validate_working_capital(assumptions, warnings)
    _validate_debt(assumptions, warnings)
    _validate_valuation(assumptions, warnings)
    _validate_units(assumptions, warnings)
    return warnings


def _warn(warnings: list[ValidationWarning], field: str, message: str, severity: Severity) -> None:
    warnings.append(ValidationWarning(field=field, message=message, severity=severity))


def _validate_revenue(a: AssumptionSet, warnings: list[ValidationWarning]) -> None:
    if a.base_revenue <= 0:
        _warn(warnings, "base_revenue", "Base revenue must be positive", Severity.HIGH)

    g = a.revenue_growth_rate
    if g < c.GROWTH_MIN or g > c.GROWTH_MAX:
        _warn(
            warnings,
            "revenue_growth_rate",
            f"Growth rate of {g}% is outside {c.GROWTH_MIN:g}% to {c.GROWTH_MAX:g}%",
            Severity.HIGH,
        )
    elif g > c.GROWTH_WARNING_HIGH:
        _warn(warnings, "revenue_growth_rate", f"Growth rate of {g}% may be unsustainable", Severity.MEDIUM)


def _validate_horizon(a: AssumptionSet, warnings: list[ValidationWarning]) -> None:
    n = a.projection_years
    if n < c.MIN_PROJECTION_YEARS or n > c.MAX_PROJECTION_YEARS:
        _warn(
            warnings,
            "projection_years",
            f"Projection horizon of {n} years is outside {c.MIN_PROJECTION_YEARS}-{c.MAX_PROJECTION_YEARS}",
            Severity.HIGH,
        )


def _validate_margins(a: AssumptionSet, warnings: list[ValidationWarning]) -> None:
    if a.cogs_percent > c.COGS_WARNING_HIGH:
        _warn(warnings, "cogs_percent", f"COGS of {a.cogs_percent}% leaves very thin margins", Severity.MEDIUM)
    elif a.cogs_percent < c.COGS_WARNING_LOW:
        _warn(warnings, "cogs_percent", f"COGS of {a.cogs_percent}% is unusually low", Severity.LOW)

    if a.tax_rate < c.TAX_WARNING_LOW or a.tax_rate > c.TAX_WARNING_HIGH:
        _warn(
            warnings,
            "tax_rate",
            f"Effective tax rate of {a.tax_rate}% is unusual - may have one-time items",
            Severity.LOW,
        )


def _validate_working_capital(a: AssumptionSet, warnings: list[ValidationWarning]) -> None:
    if a.days_receivables > c.DSO_WARNING:
        _warn(
            warnings,
            "days_receivables",
            f"DSO of {a.days_receivables:g} days may indicate collection issues",
            Severity.MEDIUM,
        )
    if a.days_payables > c.DPO_WARNING:
        _warn(
            warnings,
            "days_payables",
            f"DPO of {a.days_payables:g} days indicates stretched payables",
            Severity.LOW,
        )


def _validate_debt(a: AssumptionSet, warnings: list[ValidationWarning]) -> None:
    if a.yearly_repayment > a.debt_balance:
        _warn(
            warnings,
            "yearly_repayment",
            "Yearly repayment exceeds the opening debt balance; repayment is capped at the outstanding balance",
            Severity.LOW,
        )


def _validate_valuation(a: AssumptionSet, warnings: list[ValidationWarning]) -> None:
    if a.wacc < c.WACC_MIN:
        _warn(warnings, "wacc", f"WACC of {a.wacc}% is very low - verify cost of capital", Severity.MEDIUM)
    elif a.wacc > c.WACC_MAX:
        _warn(warnings, "wacc", f"WACC of {a.wacc}% is high - reflects significant risk", Severity.MEDIUM)

    if a.terminal_growth_rate >= a.wacc:
        _warn(
            warnings,
            "terminal_growth_rate",
            "Terminal growth must be below WACC (perpetuity value is undefined)",
            Severity.HIGH,
        )

    if a.shares_outstanding <= 0:
        _warn(warnings, "shares_outstanding", "Shares outstanding must be positive", Severity.HIGH)


def _validate_units(a: AssumptionSet, warnings: list[ValidationWarning]) -> None:
    """
    Flag rates that look like decimal fractions (0.10 instead of 10).

    Terminal growth is left out: rates below 1% are common there.
    """
    for name in ("revenue_growth_rate", "wacc", "tax_rate", "cogs_percent", "sga_percent"):
        value = getattr(a, name)
        if 0 < value < c.DECIMAL_FRACTION_THRESHOLD:
            _warn(
                warnings,
                name,
                f"{name} of {value} looks like a decimal fraction; percentages are whole numbers (10 means 10%)",
                Severity.MEDIUM,
            )
