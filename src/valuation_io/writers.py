"""
Valuation I/O Writers

Export to JSON, XLSX, CSV and YAML formats.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import pandas as pd
import yaml
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils.dataframe import dataframe_to_rows

from valuation_engine.logging_config import get_logger
from valuation_engine.models import AssumptionSet, Bundle

logger = get_logger(__name__)

EXPORT_FORMAT_VERSION = 1

ASSUMPTION_LABELS = {
    "base_revenue": "Base Revenue",
    "revenue_growth_rate": "Revenue Growth (%)",
    "projection_years": "Projection Years",
    "cogs_percent": "COGS (% of revenue)",
    "sga_percent": "SG&A (% of revenue)",
    "tax_rate": "Tax Rate (%)",
    "days_receivables": "Days Receivables (DSO)",
    "days_inventory": "Days Inventory (DIO)",
    "days_payables": "Days Payables (DPO)",
    "capex_percent": "Capex (% of revenue)",
    "depreciation_years": "Depreciation Life (years)",
    "initial_ppe_multiple": "Opening PP&E (x base capex)",
    "debt_balance": "Opening Debt",
    "interest_rate": "Interest Rate (%)",
    "yearly_repayment": "Yearly Repayment",
    "contributed_capital": "Contributed Capital",
    "wacc": "WACC (%)",
    "terminal_growth_rate": "Terminal Growth (%)",
    "net_debt": "Net Debt",
    "shares_outstanding": "Shares Outstanding",
}


# ============================================================================
# TABLES
# ============================================================================

def _create_assumptions_table(bundle: Bundle, metadata: Optional[dict[str, Any]] = None) -> pd.DataFrame:
    """Create assumptions table, followed by any file metadata."""
    values = bundle.assumptions.model_dump()
    data = [[ASSUMPTION_LABELS.get(name, name), value] for name, value in values.items()]

    for key, value in (metadata or {}).items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value)
        data.append([f"Metadata: {key}", value])

    return pd.DataFrame(data, columns=["Parameter", "Value"])


def _create_income_statement_table(bundle: Bundle) -> pd.DataFrame:
    rows = []
    for r in bundle.income_statement:
        rows.append({
            "Year": r.year,
            "Revenue": r.revenue,
            "COGS": r.cogs,
            "Gross Profit": r.gross_profit,
            "SG&A": r.sga,
            "Depreciation": r.depreciation,
            "EBIT": r.ebit,
            "Interest Expense": r.interest_expense,
            "Pre-tax Income": r.pretax_income,
            "Tax": r.tax,
            "Net Income": r.net_income,
        })
    return pd.DataFrame(rows)


def _create_depreciation_table(bundle: Bundle) -> pd.DataFrame:
    rows = []
    for r in bundle.depreciation_schedule:
        rows.append({
            "Year": r.year,
            "Beginning PP&E": r.beginning_ppe,
            "Capex": r.capex,
            "Depreciation": r.depreciation,
            "Ending PP&E": r.ending_ppe,
        })
    return pd.DataFrame(rows)


def _create_debt_table(bundle: Bundle) -> pd.DataFrame:
    rows = []
    for r in bundle.debt_schedule:
        rows.append({
            "Year": r.year,
            "Beginning Balance": r.beginning_balance,
            "Interest Expense": r.interest_expense,
            "Repayment": r.repayment,
            "Ending Balance": r.ending_balance,
        })
    return pd.DataFrame(rows)


def _create_working_capital_table(bundle: Bundle) -> pd.DataFrame:
    """Create working capital table (year 0 is the base period)."""
    rows = []
    for r in bundle.working_capital:
        rows.append({
            "Year": r.year,
            "Accounts Receivable": r.accounts_receivable,
            "Inventory": r.inventory,
            "Accounts Payable": r.accounts_payable,
            "NWC": r.net_working_capital,
            "ΔNWC": r.change_in_nwc,
        })
    return pd.DataFrame(rows)


def _create_cash_flow_table(bundle: Bundle) -> pd.DataFrame:
    rows = []
    for r in bundle.cash_flow:
        rows.append({
            "Year": r.year,
            "Net Income": r.net_income,
            "Depreciation": r.depreciation,
            "ΔNWC": r.change_in_nwc,
            "Capex": r.capex,
            "Unlevered FCF": r.unlevered_fcf,
        })
    return pd.DataFrame(rows)


def _create_balance_sheet_table(bundle: Bundle) -> pd.DataFrame:
    rows = []
    for r in bundle.balance_sheet:
        rows.append({
            "Year": r.year,
            "Cash": r.cash_plug,
            "Accounts Receivable": r.accounts_receivable,
            "Inventory": r.inventory,
            "Total Current Assets": r.total_current_assets,
            "PP&E": r.ppe,
            "Total Assets": r.total_assets,
            "Accounts Payable": r.accounts_payable,
            "Debt": r.debt_balance,
            "Total Liabilities": r.total_liabilities,
            "Retained Earnings": r.retained_earnings,
            "Total Equity": r.total_equity,
            "Total L + E": r.total_liabilities_and_equity,
        })
    return pd.DataFrame(rows)


def _create_discount_table(bundle: Bundle) -> pd.DataFrame:
    """Create discount factors and PV table."""
    v = bundle.valuation
    rows = []
    for year, ufcf, df, pv in zip(bundle.years, v.ufcf_stream, v.pv_factors, v.pv_ufcf):
        rows.append({
            "Year": year,
            "Unlevered FCF": ufcf,
            "Discount Factor": df,
            "PV(UFCF)": pv,
        })

    rows.append({
        "Year": "Total",
        "Unlevered FCF": "",
        "Discount Factor": "",
        "PV(UFCF)": v.sum_pv_ufcf,
    })

    return pd.DataFrame(rows)


def _create_valuation_bridge_table(bundle: Bundle) -> pd.DataFrame:
    """Create valuation bridge table."""
    a = bundle.assumptions
    v = bundle.valuation
    data = [
        ["WACC (%)", a.wacc],
        ["Terminal Growth (%)", a.terminal_growth_rate],
        ["Sum PV(UFCF)", v.sum_pv_ufcf],
        ["Terminal Value", v.terminal_value],
        ["PV(Terminal Value)", v.pv_terminal_value],
        ["Enterprise Value", v.enterprise_value],
        ["Less: Net Debt", -a.net_debt],
        ["Equity Value", v.equity_value],
        ["Shares Outstanding", a.shares_outstanding],
        ["Implied Share Price", v.implied_share_price],
    ]
    return pd.DataFrame(data, columns=["Item", "Value"])


def _create_warnings_table(bundle: Bundle) -> pd.DataFrame:
    rows = [
        {"Field": w.field, "Severity": w.severity.value, "Message": w.message}
        for w in bundle.warnings
    ]
    return pd.DataFrame(rows, columns=["Field", "Severity", "Message"])


def format_tables(bundle: Bundle, metadata: Optional[dict[str, Any]] = None) -> dict[str, pd.DataFrame]:
    """
    Convert a bundle to display-ready DataFrames.

    Returns:
        Dict mapping table name to DataFrame, in workbook order
    """
    tables = {
        "Assumptions": _create_assumptions_table(bundle, metadata),
        "Income_Statement": _create_income_statement_table(bundle),
        "Depreciation": _create_depreciation_table(bundle),
        "Debt_Schedule": _create_debt_table(bundle),
        "Working_Capital": _create_working_capital_table(bundle),
        "Cash_Flow": _create_cash_flow_table(bundle),
        "Balance_Sheet": _create_balance_sheet_table(bundle),
        "PV_Decomposition": _create_discount_table(bundle),
        "DCF_Valuation": _create_valuation_bridge_table(bundle),
    }
    if bundle.warnings:
        tables["Warnings"] = _create_warnings_table(bundle)
    return tables


# ============================================================================
# XLSX
# ============================================================================

def _style_xlsx_sheet(ws) -> None:
    """Apply header, border, number format and column width styling."""
    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color="2E75B6", end_color="2E75B6", fill_type="solid")
    thin_border = Border(
        left=Side(style="thin"),
        right=Side(style="thin"),
        top=Side(style="thin"),
        bottom=Side(style="thin"),
    )

    for cell in ws[1]:
        cell.font = header_font
        cell.fill = header_fill
        cell.border = thin_border
        cell.alignment = Alignment(horizontal="center")

    for row in ws.iter_rows(min_row=2, max_row=ws.max_row, max_col=ws.max_column):
        for cell in row:
            cell.border = thin_border
            if isinstance(cell.value, bool):
                continue
            if isinstance(cell.value, float):
                cell.number_format = "#,##0.00" if abs(cell.value) >= 1 else "0.0000"
            elif isinstance(cell.value, int):
                cell.number_format = "0" if cell.column == 1 else "#,##0"

    for column in ws.columns:
        max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
        ws.column_dimensions[column[0].column_letter].width = min(max_length + 2, 40)


def export_xlsx(bundle: Bundle, path: str | Path, metadata: Optional[dict[str, Any]] = None) -> None:
    """
    Export a bundle to an Excel workbook, one styled sheet per table.

    Args:
        bundle: Engine output to export
        path: Output file path
        metadata: Optional file metadata appended to the Assumptions sheet
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    wb = Workbook()
    wb.remove(wb.active)
    for sheet_name, df in format_tables(bundle, metadata).items():
        ws = wb.create_sheet(title=sheet_name[:31])
        for r in dataframe_to_rows(df, index=False, header=True):
            ws.append(r)
        _style_xlsx_sheet(ws)
    wb.save(path)
    logger.info("Wrote workbook %s", path)


# ============================================================================
# CSV
# ============================================================================

def export_csv(bundle: Bundle, output_dir: str | Path, metadata: Optional[dict[str, Any]] = None) -> list[Path]:
    """
    Export a bundle to CSV files (one per table).

    Args:
        bundle: Engine output to export
        output_dir: Directory to write CSV files

    Returns:
        List of created file paths
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    created_files = []
    for idx, (table_name, df) in enumerate(format_tables(bundle, metadata).items(), start=1):
        file_path = output_dir / f"{idx}_{table_name}.csv"
        df.to_csv(file_path, index=False)
        created_files.append(file_path)

    logger.info("Wrote %d CSV files to %s", len(created_files), output_dir)
    return created_files


# ============================================================================
# JSON
# ============================================================================

def to_export_dict(bundle: Bundle, metadata: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """
    Build the versioned export document.

    Keys are camelCase; ``format_version`` changes only when the layout
    changes incompatibly.
    """
    v = bundle.valuation
    balance = {row.year: row for row in bundle.balance_sheet}
    debt = {row.year: row for row in bundle.debt_schedule}
    ufcf = {row.year: row.unlevered_fcf for row in bundle.cash_flow}

    projections = []
    for row in bundle.income_statement:
        projections.append({
            "year": row.year,
            "revenue": row.revenue,
            "ebit": row.ebit,
            "netIncome": row.net_income,
            "unleveredFCF": ufcf[row.year],
            "cashPlug": balance[row.year].cash_plug,
            "debtBalance": debt[row.year].ending_balance,
        })

    return {
        "format_version": EXPORT_FORMAT_VERSION,
        "metadata": metadata,
        "assumptions": bundle.assumptions.model_dump(mode="json", by_alias=True),
        "valuation": {
            "enterpriseValue": v.enterprise_value,
            "equityValue": v.equity_value,
            "impliedSharePrice": v.implied_share_price,
            "terminalValue": v.terminal_value,
            "pvTerminalValue": v.pv_terminal_value,
            "sumPvUFCF": v.sum_pv_ufcf,
        },
        "projections": projections,
        "warnings": [w.model_dump(mode="json") for w in bundle.warnings],
    }


def export_json(bundle: Bundle, path: str | Path, metadata: Optional[dict[str, Any]] = None) -> None:
    """Write the versioned export document to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_export_dict(bundle, metadata), f, indent=2, default=str)
    logger.info("Wrote JSON export %s", path)


# ============================================================================
# YAML
# ============================================================================

def export_assumptions_yaml(assumptions: AssumptionSet, path: str | Path) -> None:
    """Write an assumption set as a flat, snake_case YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(assumptions.model_dump(), f, sort_keys=False)


def assumptions_to_yaml(assumptions: AssumptionSet) -> str:
    return yaml.safe_dump(assumptions.model_dump(), sort_keys=False)
