"""
Valuation Engine Main Orchestrator

Runs every stage in dependency order and packs the schedules into a Bundle.
"""
from __future__ import annotations

from valuation_engine.balance_sheet import build_balance_sheet
from valuation_engine.cashflows import build_cash_flow
from valuation_engine.debt import compute_debt_schedule
from valuation_engine.depreciation import compute_depreciation_schedule
from valuation_engine.income_statement import build_income_statement
from valuation_engine.logging_config import get_logger
from valuation_engine.models import AssumptionSet, Bundle, FrozenAssumptionSet
from valuation_engine.projections import compute_cogs, compute_revenue
from valuation_engine.validation import validate_assumptions
from valuation_engine.valuation import compute_valuation
from valuation_engine.working_capital import compute_working_capital

logger = get_logger(__name__)


class ValuationEngine:
    """
    Three-statement projection and DCF engine.

    The engine holds no state between runs: every call to ``run`` recomputes
    the whole bundle from the assumptions.
    """

    def __init__(self, assumptions: AssumptionSet):
        self.assumptions = assumptions

    def run(self) -> Bundle:
        """
        Execute the full projection and valuation.

        Returns:
            Bundle with every schedule, the valuation and advisory warnings

        Raises:
            ComputationError: If the valuation is undefined for these inputs
        """
        a = FrozenAssumptionSet.snapshot(self.assumptions)

        warnings = validate_assumptions(a)
        for warning in warnings:
            logger.warning("%s: %s", warning.field, warning.message)

        # ====================================================================
        # STEP 1: Revenue and Fixed Assets
        # ====================================================================

        revenue = compute_revenue(a)
        depreciation_schedule = compute_depreciation_schedule(a, revenue)
        logger.debug("Projected revenue for %d years", len(revenue))

        # ====================================================================
        # STEP 2: Debt and Working Capital
        # ====================================================================

        debt_schedule = compute_debt_schedule(a)
        cogs = compute_cogs(a, revenue)
        working_capital = compute_working_capital(a, revenue, cogs)

        # ====================================================================
        # STEP 3: Statements
        # ====================================================================

        income_statement = build_income_statement(a, revenue, depreciation_schedule, debt_schedule)
        cash_flow = build_cash_flow(a, income_statement, depreciation_schedule, working_capital)
        balance_sheet = build_balance_sheet(
            a, income_statement, depreciation_schedule, debt_schedule, working_capital
        )
        logger.debug("Built statements for years %s", a.forecast_years)

        # ====================================================================
        # STEP 4: Valuation
        # ====================================================================

        valuation = compute_valuation(a, cash_flow)
        logger.debug(
            "Enterprise value %.2f, implied share price %.4f",
            valuation.enterprise_value,
            valuation.implied_share_price,
        )

        return Bundle(
            assumptions=a,
            revenues=tuple(revenue[year] for year in a.forecast_years),
            income_statement=tuple(income_statement),
            depreciation_schedule=tuple(depreciation_schedule),
            debt_schedule=tuple(debt_schedule),
            working_capital=tuple(working_capital),
            cash_flow=tuple(cash_flow),
            balance_sheet=tuple(balance_sheet),
            valuation=valuation,
            warnings=tuple(warnings),
        )


def compute(assumptions: AssumptionSet) -> Bundle:
    """Run the engine once for the given assumptions."""
    return ValuationEngine(assumptions).run()
