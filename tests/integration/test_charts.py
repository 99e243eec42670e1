"""
Integration Tests - Charts

Plotly figures built from a reference bundle.
"""
import pytest

from valuation_engine import AssumptionSet, compute
from valuation_ui_cli.charts import (
    create_balance_sheet_chart,
    create_cashflow_timeline,
    create_waterfall_chart,
    save_charts,
)


@pytest.fixture
def bundle():
    return compute(AssumptionSet())


class TestWaterfall:
    def test_one_step_per_year_then_bridge(self, bundle):
        trace = create_waterfall_chart(bundle).data[0]

        assert list(trace.x) == [
            "PV Y1", "PV Y2", "PV Y3", "PV Y4", "PV Y5",
            "PV(Terminal Value)", "Enterprise Value", "Less: Net Debt", "Equity Value",
        ]
        assert list(trace.measure).count("total") == 2
        assert list(trace.y[:5]) == pytest.approx(list(bundle.valuation.pv_ufcf))
        assert trace.y[7] == pytest.approx(-bundle.assumptions.net_debt)

    def test_equity_bar_shows_share_price(self, bundle):
        trace = create_waterfall_chart(bundle).data[0]
        assert f"{bundle.valuation.implied_share_price:,.2f} / share" in trace.text[-1]

    def test_steps_sum_to_equity_value(self, bundle):
        trace = create_waterfall_chart(bundle).data[0]
        assert sum(trace.y) == pytest.approx(bundle.valuation.equity_value, rel=1e-9)


class TestTimeline:
    def test_traces(self, bundle):
        fig = create_cashflow_timeline(bundle)

        assert [t.name for t in fig.data] == ["UFCF", "PV(UFCF)", "Discount factor"]
        assert list(fig.data[2].y) == pytest.approx(list(bundle.valuation.pv_factors))


class TestBalanceSheetChart:
    def test_stack_tops_meet_liabilities_and_equity(self):
        bundle = compute(AssumptionSet(contributed_capital=2e8))
        fig = create_balance_sheet_chart(bundle)

        bars = [t for t in fig.data if t.type == "bar"]
        line = [t for t in fig.data if t.type == "scatter"][0]
        assert [t.name for t in bars] == ["Cash (plug)", "Receivables", "Inventory", "PP&E"]
        for i in range(len(bundle.years)):
            assert sum(t.y[i] for t in bars) == pytest.approx(line.y[i], rel=1e-9)


def test_save_charts(bundle, tmp_path):
    files = save_charts(bundle, tmp_path / "charts")
    assert [f.name for f in files] == ["waterfall.html", "cashflow_timeline.html", "balance_sheet.html"]
    assert all(f.exists() for f in files)
