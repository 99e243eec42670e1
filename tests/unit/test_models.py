"""
Unit Tests for Valuation Engine Models

Hard constraints, aliases and immutability of the pydantic models.
"""
import pytest
from pydantic import ValidationError

from valuation_engine.engine import compute
from valuation_engine.models import AssumptionSet, DebtRow


class TestAssumptionSet:
    def test_defaults_are_reference_case(self):
        a = AssumptionSet()

        assert a.base_revenue == 1e9
        assert a.projection_years == 5
        assert a.shares_outstanding == 100_000_000
        assert a.contributed_capital == 0.0
        assert a.forecast_years == [1, 2, 3, 4, 5]
        assert a.base_cogs == pytest.approx(6e8)

    def test_accepts_camel_case_keys(self):
        a = AssumptionSet.model_validate({"baseRevenue": 5e8, "taxRate": 21, "wacc": 8})

        assert a.base_revenue == 5e8
        assert a.tax_rate == 21
        assert a.wacc == 8

    def test_camel_case_dump(self):
        dumped = AssumptionSet().model_dump(by_alias=True)
        assert "baseRevenue" in dumped
        assert "terminalGrowthRate" in dumped

    @pytest.mark.parametrize("field,value", [
        ("tax_rate", 120),
        ("tax_rate", -1),
        ("days_receivables", -1),
        ("days_inventory", -5),
        ("days_payables", -0.5),
        ("depreciation_years", 0.5),
        ("debt_balance", -1),
        ("yearly_repayment", -1),
        ("initial_ppe_multiple", -1),
    ])
    def test_hard_constraints(self, field, value):
        with pytest.raises(ValidationError):
            AssumptionSet(**{field: value})

    def test_rejects_non_finite_numbers(self):
        with pytest.raises(ValidationError):
            AssumptionSet(wacc=float("inf"))
        with pytest.raises(ValidationError):
            AssumptionSet(base_revenue=float("nan"))

    def test_assignment_is_validated(self):
        a = AssumptionSet()
        with pytest.raises(ValidationError):
            a.tax_rate = 150

    def test_soft_fields_are_not_rejected(self):
        a = AssumptionSet(shares_outstanding=0, projection_years=0, revenue_growth_rate=500)
        assert a.forecast_years == []


class TestOutputModels:
    def test_rows_are_frozen(self):
        row = DebtRow(year=1, beginning_balance=10, interest_expense=1, repayment=2, ending_balance=8)
        with pytest.raises(ValidationError):
            row.year = 2

    def test_bundle_lookups(self):
        bundle = compute(AssumptionSet())

        assert bundle.years == [1, 2, 3, 4, 5]
        assert bundle.get_income_statement(3).year == 3
        assert bundle.get_balance_sheet(5).year == 5
        assert bundle.get_cash_flow(1).year == 1
        assert bundle.get_income_statement(6) is None

    def test_total_liabilities_and_equity(self):
        bs = compute(AssumptionSet()).balance_sheet[0]
        assert bs.total_liabilities_and_equity == pytest.approx(bs.total_liabilities + bs.total_equity)
