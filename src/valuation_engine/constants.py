"""
Valuation Engine Constants

Calculation conventions, reference assumptions and validation thresholds.
"""
from __future__ import annotations


# ============================================================================
# CALCULATION CONVENTIONS
# ============================================================================

DAYS_IN_YEAR = 365

# Opening PP&E is seeded as this many years of base-year capex
DEFAULT_INITIAL_PPE_MULTIPLE = 2.0

# Balance sheet identity tolerance, relative to total assets once they exceed 1
BALANCE_TOLERANCE = 1e-6


# ============================================================================
# REFERENCE ASSUMPTIONS
# ============================================================================

DEFAULT_BASE_REVENUE = 1_000_000_000.0
DEFAULT_REVENUE_GROWTH_RATE = 8.0
DEFAULT_PROJECTION_YEARS = 5

DEFAULT_COGS_PERCENT = 60.0
DEFAULT_SGA_PERCENT = 20.0
DEFAULT_TAX_RATE = 25.0

DEFAULT_DAYS_RECEIVABLES = 45.0
DEFAULT_DAYS_INVENTORY = 60.0
DEFAULT_DAYS_PAYABLES = 30.0

DEFAULT_CAPEX_PERCENT = 5.0
DEFAULT_DEPRECIATION_YEARS = 10.0

DEFAULT_DEBT_BALANCE = 200_000_000.0
DEFAULT_INTEREST_RATE = 5.0
DEFAULT_YEARLY_REPAYMENT = 20_000_000.0

DEFAULT_WACC = 10.0
DEFAULT_TERMINAL_GROWTH_RATE = 2.5
DEFAULT_SHARES_OUTSTANDING = 100_000_000
DEFAULT_NET_DEBT = 200_000_000.0


# ============================================================================
# VALIDATION THRESHOLDS (advisory)
# ============================================================================

MIN_PROJECTION_YEARS = 1
MAX_PROJECTION_YEARS = 20

GROWTH_MIN = -50.0
GROWTH_MAX = 100.0
GROWTH_WARNING_HIGH = 50.0

COGS_WARNING_LOW = 30.0
COGS_WARNING_HIGH = 85.0

TAX_WARNING_LOW = 15.0
TAX_WARNING_HIGH = 35.0

DSO_WARNING = 90.0
DPO_WARNING = 90.0

WACC_MIN = 5.0
WACC_MAX = 20.0

# Percentage inputs below this magnitude look like decimal fractions (0.08 vs 8)
DECIMAL_FRACTION_THRESHOLD = 1.0
