"""
Valuation Engine Core Data Models

Pydantic models for the assumption set, the year-indexed schedules and the
valuation result.

Units:
- Money: currency amount
- Percentage: whole-number percent (8 means 8%, not 0.08)
- Days: day-count ratio against a 365-day year
- Years: count of years
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from valuation_engine import constants as c


Money = Annotated[float, Field(description="Currency amount")]
Percentage = Annotated[float, Field(description="Whole-number percent (8 means 8%)")]
Days = Annotated[float, Field(description="Days against a 365-day year")]
Years = Annotated[float, Field(description="Number of years")]


class Severity(str, Enum):
    """How strongly a validation warning should be surfaced."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ============================================================================
# INPUT MODEL
# ============================================================================

class AssumptionSet(BaseModel):
    """
    Complete set of model assumptions.

    Hard constraints are enforced here; advisory ranges are reported by
    ``valuation_engine.validation.validate_assumptions``. Defaults reproduce
    the reference case.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        allow_inf_nan=False,
    )

    # Base data
    base_revenue: Money = Field(c.DEFAULT_BASE_REVENUE, description="Revenue of the last reported year")
    revenue_growth_rate: Percentage = Field(c.DEFAULT_REVENUE_GROWTH_RATE, description="Annual revenue growth")
    projection_years: int = Field(c.DEFAULT_PROJECTION_YEARS, description="Number of forecast years")

    # Income statement
    cogs_percent: Percentage = Field(c.DEFAULT_COGS_PERCENT, description="COGS as % of revenue")
    sga_percent: Percentage = Field(c.DEFAULT_SGA_PERCENT, description="SG&A as % of revenue")
    tax_rate: Percentage = Field(c.DEFAULT_TAX_RATE, ge=0, le=100, description="Tax rate on positive pre-tax income")

    # Working capital
    days_receivables: Days = Field(c.DEFAULT_DAYS_RECEIVABLES, ge=0, description="DSO")
    days_inventory: Days = Field(c.DEFAULT_DAYS_INVENTORY, ge=0, description="DIO")
    days_payables: Days = Field(c.DEFAULT_DAYS_PAYABLES, ge=0, description="DPO")

    # Capex and depreciation
    capex_percent: Percentage = Field(c.DEFAULT_CAPEX_PERCENT, description="Capex as % of revenue")
    depreciation_years: Years = Field(c.DEFAULT_DEPRECIATION_YEARS, ge=1, description="Straight-line useful life")
    initial_ppe_multiple: float = Field(
        c.DEFAULT_INITIAL_PPE_MULTIPLE,
        ge=0,
        description="Opening PP&E as a multiple of base-year capex",
    )

    # Debt
    debt_balance: Money = Field(c.DEFAULT_DEBT_BALANCE, ge=0, description="Opening debt balance")
    interest_rate: Percentage = Field(c.DEFAULT_INTEREST_RATE, description="Interest on beginning balance")
    yearly_repayment: Money = Field(c.DEFAULT_YEARLY_REPAYMENT, ge=0, description="Scheduled principal repayment")

    # Equity
    contributed_capital: Money = Field(0.0, description="Paid-in capital, constant across years")

    # Valuation
    wacc: Percentage = Field(c.DEFAULT_WACC, description="Discount rate")
    terminal_growth_rate: Percentage = Field(c.DEFAULT_TERMINAL_GROWTH_RATE, description="Perpetuity growth rate")
    net_debt: Money = Field(c.DEFAULT_NET_DEBT, description="Debt less cash at valuation date")
    shares_outstanding: int = Field(c.DEFAULT_SHARES_OUTSTANDING, description="Diluted shares outstanding")

    @property
    def forecast_years(self) -> list[int]:
        """Forecast years [1, ..., N]."""
        return list(range(1, self.projection_years + 1))

    @property
    def base_cogs(self) -> float:
        """COGS of the base (year 0) period."""
        return self.base_revenue * self.cogs_percent / 100


class FrozenAssumptionSet(AssumptionSet):
    """Read-only snapshot of the assumptions a bundle was computed from."""
    model_config = ConfigDict(frozen=True)

    @classmethod
    def snapshot(cls, assumptions: AssumptionSet) -> FrozenAssumptionSet:
        return cls(**assumptions.model_dump())


class ValidationWarning(BaseModel):
    """Advisory finding about an assumption value."""
    model_config = ConfigDict(frozen=True)

    field: str
    message: str
    severity: Severity


# ============================================================================
# OUTPUT MODELS
# ============================================================================

class _Row(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class IncomeStatementRow(_Row):
    """Single year's income statement."""
    year: int
    revenue: float
    cogs: float
    gross_profit: float
    sga: float
    depreciation: float
    ebit: float
    interest_expense: float
    pretax_income: float
    tax: float
    net_income: float


class DepreciationRow(_Row):
    """Single year's PP&E roll-forward."""
    year: int
    beginning_ppe: float
    capex: float
    depreciation: float
    ending_ppe: float


class DebtRow(_Row):
    """Single year's debt amortization."""
    year: int
    beginning_balance: float
    interest_expense: float
    repayment: float
    ending_balance: float


class WorkingCapitalRow(_Row):
    """Working capital balances; year 0 is the base-period baseline."""
    year: int
    accounts_receivable: float
    inventory: float
    accounts_payable: float
    net_working_capital: float
    change_in_nwc: float


class CashFlowRow(_Row):
    """Single year's unlevered free cash flow bridge."""
    year: int
    net_income: float
    depreciation: float
    change_in_nwc: float
    capex: float
    unlevered_fcf: float


class BalanceSheetRow(_Row):
    """Single year's balance sheet with cash solved as the plug."""
    year: int
    cash_plug: float
    accounts_receivable: float
    inventory: float
    total_current_assets: float
    ppe: float
    total_assets: float
    accounts_payable: float
    debt_balance: float
    total_liabilities: float
    retained_earnings: float
    total_equity: float

    @property
    def total_liabilities_and_equity(self) -> float:
        return self.total_liabilities + self.total_equity


class ValuationResult(_Row):
    """DCF valuation from the unlevered FCF stream."""
    ufcf_stream: tuple[float, ...]
    pv_factors: tuple[float, ...]
    pv_ufcf: tuple[float, ...]
    sum_pv_ufcf: float
    terminal_value: float
    pv_terminal_value: float
    enterprise_value: float
    equity_value: float
    implied_share_price: float


class Bundle(BaseModel):
    """
    Every schedule and the valuation produced by one engine run.

    Immutable all the way down: the assumptions are a frozen snapshot and
    every schedule is a tuple of frozen rows.
    """
    model_config = ConfigDict(frozen=True)

    assumptions: FrozenAssumptionSet
    revenues: tuple[float, ...]
    income_statement: tuple[IncomeStatementRow, ...]
    depreciation_schedule: tuple[DepreciationRow, ...]
    debt_schedule: tuple[DebtRow, ...]
    working_capital: tuple[WorkingCapitalRow, ...]
    cash_flow: tuple[CashFlowRow, ...]
    balance_sheet: tuple[BalanceSheetRow, ...]
    valuation: ValuationResult
    warnings: tuple[ValidationWarning, ...] = ()

    @property
    def years(self) -> list[int]:
        return [row.year for row in self.income_statement]

    def get_income_statement(self, year: int) -> Optional[IncomeStatementRow]:
        for row in self.income_statement:
            if row.year == year:
                return row
        return None

    def get_balance_sheet(self, year: int) -> Optional[BalanceSheetRow]:
        for row in self.balance_sheet:
            if row.year == year:
                return row
        return None

    def get_cash_flow(self, year: int) -> Optional[CashFlowRow]:
        for row in self.cash_flow:
            if row.year == year:
                return row
        return None

    def balance_sheet_imbalances(self, tolerance: float = c.BALANCE_TOLERANCE) -> list[tuple[int, float]]:
        """
        Years where assets differ from liabilities + equity.

        Tolerance scales with the size of the balance sheet once totals exceed 1.

        Returns:
            [(year, imbalance), ...]
        """
        errors = []
        for bs in self.balance_sheet:
            imbalance = bs.total_assets - bs.total_liabilities_and_equity
            if abs(imbalance) > tolerance * max(1.0, abs(bs.total_assets)):
                errors.append((bs.year, imbalance))
        return errors
