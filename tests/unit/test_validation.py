"""
Unit Tests for Assumption Validation

Advisory warnings never stop a run; they are collected and ranked.
"""
import pytest

from valuation_engine.models import AssumptionSet, Severity
from valuation_engine.validation import validate_assumptions


def _by_field(warnings):
    return {w.field: w for w in warnings}


def test_reference_case_has_no_warnings():
    assert validate_assumptions(AssumptionSet()) == []


@pytest.mark.parametrize("overrides,field,severity", [
    ({"base_revenue": 0}, "base_revenue", Severity.HIGH),
    ({"revenue_growth_rate": 60}, "revenue_growth_rate", Severity.MEDIUM),
    ({"revenue_growth_rate": 150}, "revenue_growth_rate", Severity.HIGH),
    ({"revenue_growth_rate": -60}, "revenue_growth_rate", Severity.HIGH),
    ({"projection_years": 0}, "projection_years", Severity.HIGH),
    ({"projection_years": 25}, "projection_years", Severity.HIGH),
    ({"cogs_percent": 90}, "cogs_percent", Severity.MEDIUM),
    ({"cogs_percent": 20}, "cogs_percent", Severity.LOW),
    ({"tax_rate": 40}, "tax_rate", Severity.LOW),
    ({"tax_rate": 10}, "tax_rate", Severity.LOW),
    ({"days_receivables": 120}, "days_receivables", Severity.MEDIUM),
    ({"days_payables": 120}, "days_payables", Severity.LOW),
    ({"wacc": 25}, "wacc", Severity.MEDIUM),
    ({"wacc": 4}, "wacc", Severity.MEDIUM),
    ({"terminal_growth_rate": 10}, "terminal_growth_rate", Severity.HIGH),
    ({"shares_outstanding": 0}, "shares_outstanding", Severity.HIGH),
    ({"yearly_repayment": 3e8}, "yearly_repayment", Severity.LOW),
])
def test_out_of_range_values_are_flagged(overrides, field, severity):
    warnings = _by_field(validate_assumptions(AssumptionSet(**overrides)))

    assert field in warnings
    assert warnings[field].severity == severity


def test_growth_just_inside_limits_is_silent():
    assert validate_assumptions(AssumptionSet(revenue_growth_rate=50)) == []
    assert validate_assumptions(AssumptionSet(revenue_growth_rate=-50)) == []


def test_terminal_growth_above_wacc_is_flagged():
    warnings = _by_field(validate_assumptions(AssumptionSet(wacc=8, terminal_growth_rate=9)))
    assert warnings["terminal_growth_rate"].severity == Severity.HIGH


def test_decimal_fraction_percentages_are_flagged():
    warnings = validate_assumptions(AssumptionSet(tax_rate=0.25, sga_percent=0.2))
    fields = {w.field for w in warnings if "decimal fraction" in w.message}

    assert fields == {"tax_rate", "sga_percent"}


def test_warnings_accumulate():
    a = AssumptionSet(days_receivables=120, days_payables=120, shares_outstanding=-5)
    fields = [w.field for w in validate_assumptions(a)]

    assert fields == ["days_receivables", "days_payables", "shares_outstanding"]


def test_growth_given_as_decimal_fraction_is_flagged():
    warnings = _by_field(validate_assumptions(AssumptionSet(revenue_growth_rate=0.08)))

    assert warnings["revenue_growth_rate"].severity == Severity.MEDIUM
    assert "decimal fraction" in warnings["revenue_growth_rate"].message


def test_low_terminal_growth_is_not_a_unit_error():
    assert validate_assumptions(AssumptionSet(terminal_growth_rate=0.5)) == []
