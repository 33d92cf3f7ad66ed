"""Exception types raised by the planning and aggregation core.

Hierarchy:
    SalesTargetsError
    ├── FunnelValidationError   (also a ValueError)
    ├── NonPositiveDivisorError (also a ZeroDivisionError)
    ├── NonFiniteTargetError    (also an ArithmeticError)
    └── InvalidRangeError       (also a ValueError)
"""

from __future__ import annotations

from datetime import date
from typing import List


class SalesTargetsError(Exception):
    """Base exception for the sales-targets core."""


class FunnelValidationError(SalesTargetsError, ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class NonPositiveDivisorError(SalesTargetsError, ZeroDivisionError):
    """Raised when target calculation is attempted with unvalidated inputs."""

    def __init__(self, field: str, value: float):
        super().__init__(f"division by non-positive rate: {field}={value!r}")
        self.field = field
        self.value = value


class NonFiniteTargetError(SalesTargetsError, ArithmeticError):
    """Raised when inputs are finite but a derived target overflows."""

    def __init__(self, field: str):
        super().__init__(f"derived target is not finite: {field}")
        self.field = field


class InvalidRangeError(SalesTargetsError, ValueError):
    def __init__(self, start: date, end: date):
        super().__init__(f"range end {end.isoformat()} is before start {start.isoformat()}")
        self.start = start
        self.end = end
