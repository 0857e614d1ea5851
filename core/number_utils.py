"""Numeric guards applied by the usecases before touching storage."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any

from .errors import DomainValidationError


def _is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def is_valid_number(value: Any) -> bool:
    """True when ``value`` is a real number that is neither NaN nor infinite."""

    if not _is_numeric(value):
        return False
    return math.isfinite(float(value))


def validate_number(value: Any, field_name: str) -> None:
    """Raise ``DomainValidationError`` when ``value`` is not a finite number."""

    if not _is_numeric(value) or math.isnan(float(value)):
        raise DomainValidationError(f"{field_name} must be a valid number")
    if math.isinf(float(value)):
        raise DomainValidationError(f"{field_name} must be a finite number")


__all__ = ["is_valid_number", "validate_number"]
