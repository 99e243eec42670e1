"""
Valuation Visualizations

Plotly charts for the DCF valuation and the projected balance sheet.
"""
from __future__ import annotations

from pathlib import Path

import plotly.graph_objects as go

from valuation_engine.models import Bundle


def create_waterfall_chart(bundle: Bundle) -> go.Figure:
    """
    Create the valuation bridge waterfall.

    One step per discounted UFCF year, then PV(TV) → EV → Equity. The implied
    price per share is annotated on the equity bar.
    """
    v = bundle.valuation

    labels = [f"PV Y{year}" for year in bundle.years]
    values = list(v.pv_ufcf)
    measure = ["relative"] * len(values)

    labels += ["PV(Terminal Value)", "Enterprise Value", "Less: Net Debt", "Equity Value"]
    values += [v.pv_terminal_value, 0, -bundle.assumptions.net_debt, 0]
    measure += ["relative", "total", "relative", "total"]

    # Totals carry a zero step; label them with the running total instead
    text = [f"{val:,.0f}" for val in values]
    text[-3] = f"{v.enterprise_value:,.0f}"
    text[-1] = f"{v.equity_value:,.0f}<br>{v.implied_share_price:,.2f} / share"

    fig = go.Figure(go.Waterfall(
        name="Valuation Bridge",
        orientation="v",
        measure=measure,
        x=labels,
        textposition="outside",
        text=text,
        y=values,
        connector={"line": {"color": "rgb(63, 63, 63)"}},
        increasing={"marker": {"color": "#2E86AB"}},
        decreasing={"marker": {"color": "#E94F37"}},
        totals={"marker": {"color": "#44AF69"}},
    ))

    tv_share = v.pv_terminal_value / v.enterprise_value if v.enterprise_value else 0.0
    fig.update_layout(
        title=f"DCF Valuation Bridge (terminal value {tv_share:.0%} of EV)",
        showlegend=False,
        yaxis_title="Value",
        template="plotly_white",
        height=500,
    )

    return fig


def create_cashflow_timeline(bundle: Bundle) -> go.Figure:
    """
    Create cash flow timeline chart.

    UFCF and its present value by year, with the discount factor on a
    secondary axis.
    """
    v = bundle.valuation
    years = bundle.years

    fig = go.Figure()

    fig.add_trace(go.Bar(
        name="UFCF",
        x=years,
        y=v.ufcf_stream,
        marker_color="#2E86AB",
    ))

    fig.add_trace(go.Bar(
        name="PV(UFCF)",
        x=years,
        y=v.pv_ufcf,
        marker_color="#44AF69",
    ))

    fig.add_trace(go.Scatter(
        name="Discount factor",
        x=years,
        y=v.pv_factors,
        mode="lines+markers",
        line={"color": "#6C757D", "dash": "dot"},
        yaxis="y2",
    ))

    fig.update_layout(
        title=f"Unlevered Free Cash Flow at {bundle.assumptions.wacc:g}% WACC",
        xaxis_title="Year",
        yaxis_title="Cash Flow",
        yaxis2={"title": "Discount factor", "overlaying": "y", "side": "right", "range": [0, 1]},
        barmode="group",
        template="plotly_white",
        height=400,
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=1.02,
            xanchor="right",
            x=1
        ),
    )

    return fig


def create_balance_sheet_chart(bundle: Bundle) -> go.Figure:
    """
    Create the projected balance sheet chart.

    Stacked asset components by year. A negative cash plug (funding need)
    stacks below zero. The liabilities + equity total is overlaid as a line
    and meets the top of each stack when the sheet balances.
    """
    years = bundle.years
    rows = bundle.balance_sheet

    components = {
        "Cash (plug)": ([bs.cash_plug for bs in rows], "#F4A259"),
        "Receivables": ([bs.accounts_receivable for bs in rows], "#2E86AB"),
        "Inventory": ([bs.inventory for bs in rows], "#5BC0EB"),
        "PP&E": ([bs.ppe for bs in rows], "#44AF69"),
    }

    fig = go.Figure()
    for name, (values, color) in components.items():
        fig.add_trace(go.Bar(name=name, x=years, y=values, marker_color=color))

    fig.add_trace(go.Scatter(
        name="Liabilities + Equity",
        x=years,
        y=[bs.total_liabilities_and_equity for bs in rows],
        mode="lines+markers",
        line={"color": "#1B1B1E", "width": 2},
    ))

    fig.update_layout(
        title="Projected Balance Sheet",
        xaxis_title="Year",
        yaxis_title="Value",
        barmode="relative",
        template="plotly_white",
        height=450,
    )

    return fig


def save_charts(bundle: Bundle, output_dir: str | Path) -> list[Path]:
    """
    Generate and save all charts as standalone HTML.

    Returns:
        List of created file paths
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    charts = {
        "waterfall": create_waterfall_chart(bundle),
        "cashflow_timeline": create_cashflow_timeline(bundle),
        "balance_sheet": create_balance_sheet_chart(bundle),
    }

    created_files = []
    for name, fig in charts.items():
        file_path = output_dir / f"{name}.html"
        fig.write_html(str(file_path))
        created_files.append(file_path)

    return created_files
