"""
Valuation Engine Errors

Typed failures for conditions with no meaningful numeric result.
"""
from __future__ import annotations


class ComputationError(Exception):
    """Raised when the model cannot produce a finite valuation."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class TerminalValueError(ComputationError):
    """Raised when the perpetuity denominator is zero or negative."""
    pass
