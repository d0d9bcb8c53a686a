"""
Error taxonomy for the split and settlement calculators.
"""
from typing import Any


class TripSplitError(Exception):
    """Base error carrying an HTTP-style status and a machine-readable code."""
    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(TripSplitError):
    """Caller supplied an out-of-domain value (negative total, bad balance entry, ...)."""
    status_code = 422
    code = "VALIDATION_ERROR"


class InvariantViolation(TripSplitError):
    """Internal consistency check failed; treated as a programming error."""
    status_code = 500
    code = "INVARIANT_VIOLATION"
