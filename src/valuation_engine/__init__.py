"""
Valuation Engine

Pure three-statement projection and DCF valuation core:
- Revenue, cost, PP&E, debt and working capital schedules
- Income statement, unlevered cash flow and balance sheet with a cash plug
- Perpetuity-growth DCF bridge to the implied share price
"""
from valuation_engine.engine import ValuationEngine, compute
from valuation_engine.errors import ComputationError, TerminalValueError
from valuation_engine.models import AssumptionSet, Bundle, FrozenAssumptionSet, Severity, ValidationWarning
from valuation_engine.validation import validate_assumptions

__all__ = [
    "ValuationEngine",
    "compute",
    "ComputationError",
    "TerminalValueError",
    "AssumptionSet",
    "FrozenAssumptionSet",
    "Bundle",
    "Severity",
    "ValidationWarning",
    "validate_assumptions",
]
