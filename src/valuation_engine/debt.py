"""
Valuation Engine Debt Schedule

Fixed principal amortization. Repayment follows the schedule, not the cash
the business generates.
"""
from __future__ import annotations

from valuation_engine.models import AssumptionSet, DebtRow


def compute_debt_schedule(assumptions: AssumptionSet) -> list[DebtRow]:
    """
    Build the debt schedule for all forecast years.

    Interest_t = BeginningBalance_t * InterestRate
    Repayment_t = min(YearlyRepayment, BeginningBalance_t)
    EndingBalance_t = BeginningBalance_t - Repayment_t

    Returns:
        List of DebtRow ordered by year
    """
    rate = assumptions.interest_rate / 100

    schedule = []
    balance = assumptions.debt_balance
    for year in assumptions.forecast_years:
        interest = balance * rate
        repayment = min(assumptions.yearly_repayment, balance)
        ending = balance - repayment

        schedule.append(DebtRow(
            year=year,
            beginning_balance=balance,
            interest_expense=interest,
            repayment=repayment,
            ending_balance=ending,
        ))
        balance = ending

    return schedule


def compute_interest_expense(schedule: list[DebtRow]) -> dict[int, float]:
    """
    Interest expense by year.

    Returns:
        dict mapping year -> interest expense
    """
    return {row.year: row.interest_expense for row in schedule}
