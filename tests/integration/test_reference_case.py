"""
Integration Test - Reference Case

Full end-to-end run of the reference assumption set with hand-computed
year-1 figures.
"""
import math

import pytest
from valuation_engine import AssumptionSet, compute


# ============================================================================
# Tolerances
# ============================================================================

CURRENCY_TOLERANCE = 1e-2
FACTOR_TOLERANCE = 1e-12


# ============================================================================
# Expected values (year 1)
# ============================================================================

EXPECTED_YEAR_1 = {
    "revenue": 1.08e9,
    "cogs": 6.48e8,
    "gross_profit": 4.32e8,
    "sga": 2.16e8,
    "depreciation": 1.54e7,
    "ebit": 2.006e8,
    "interest_expense": 1e7,
    "pretax_income": 1.906e8,
    "tax": 4.765e7,
    "net_income": 1.4295e8,
}

EXPECTED_UFCF_1 = 98_041_780.82
EXPECTED_DELTA_NWC_1 = 5.04e9 / 365
# Cash = Debt + Equity + AP - AR - Inventory - PP&E
EXPECTED_CASH_1 = 1.8e8 + 1.4295e8 - 1.386e8 - 68.04e9 / 365


class TestReferenceCase:
    """Full integration test against the reference case."""

    @pytest.fixture
    def bundle(self):
        return compute(AssumptionSet())

    def test_schedule_lengths(self, bundle):
        assert bundle.years == [1, 2, 3, 4, 5]
        assert len(bundle.revenues) == 5
        assert len(bundle.depreciation_schedule) == 5
        assert len(bundle.debt_schedule) == 5
        assert len(bundle.cash_flow) == 5
        assert len(bundle.balance_sheet) == 5
        assert [row.year for row in bundle.working_capital] == [0, 1, 2, 3, 4, 5]
        assert len(bundle.valuation.ufcf_stream) == 5

    @pytest.mark.parametrize("field", list(EXPECTED_YEAR_1))
    def test_income_statement_year_1(self, bundle, field):
        row = bundle.get_income_statement(1)
        assert getattr(row, field) == pytest.approx(EXPECTED_YEAR_1[field], abs=CURRENCY_TOLERANCE)

    def test_unlevered_fcf_year_1(self, bundle):
        cf = bundle.get_cash_flow(1)

        assert cf.change_in_nwc == pytest.approx(EXPECTED_DELTA_NWC_1, abs=CURRENCY_TOLERANCE)
        assert cf.capex == pytest.approx(5.4e7)
        assert cf.unlevered_fcf == pytest.approx(EXPECTED_UFCF_1, abs=CURRENCY_TOLERANCE)

    def test_cash_plug_year_1(self, bundle):
        bs = bundle.get_balance_sheet(1)

        assert bs.cash_plug == pytest.approx(EXPECTED_CASH_1, abs=CURRENCY_TOLERANCE)
        assert bs.cash_plug < 0
        assert bs.ppe == pytest.approx(1.386e8)
        assert bs.debt_balance == pytest.approx(1.8e8)

    def test_debt_amortizes_to_half(self, bundle):
        assert [row.ending_balance for row in bundle.debt_schedule] == pytest.approx(
            [1.8e8, 1.6e8, 1.4e8, 1.2e8, 1.0e8]
        )

    def test_discount_factors(self, bundle):
        expected = [1 / 1.1 ** t for t in range(1, 6)]
        assert bundle.valuation.pv_factors == pytest.approx(expected, rel=FACTOR_TOLERANCE)

    def test_terminal_value(self, bundle):
        v = bundle.valuation
        final_ufcf = bundle.cash_flow[-1].unlevered_fcf

        assert v.terminal_value == pytest.approx(final_ufcf * 1.025 / 0.075, rel=1e-12)
        assert v.pv_terminal_value == pytest.approx(v.terminal_value / 1.1 ** 5, rel=1e-12)

    def test_valuation_bridge(self, bundle):
        v = bundle.valuation

        assert v.sum_pv_ufcf == pytest.approx(sum(v.pv_ufcf), rel=1e-12)
        assert v.enterprise_value == pytest.approx(v.sum_pv_ufcf + v.pv_terminal_value, rel=1e-12)
        assert v.equity_value == pytest.approx(v.enterprise_value - 2e8, rel=1e-12)
        assert v.implied_share_price == pytest.approx(v.equity_value / 1e8, rel=1e-12)

    def test_results_are_finite_and_positive(self, bundle):
        v = bundle.valuation
        for value in (v.terminal_value, v.enterprise_value, v.equity_value, v.implied_share_price):
            assert math.isfinite(value)
            assert value > 0

    def test_no_warnings_and_balanced(self, bundle):
        assert bundle.warnings == ()
        assert bundle.balance_sheet_imbalances() == []
