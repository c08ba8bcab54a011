"""
Numeric normalization for household snapshot inputs.

Every number read from a snapshot passes through ``safe_num`` before any
arithmetic so a single missing or malformed field degrades to zero instead of
propagating NaN through every projected year.
"""

import math
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator


def safe_num(value: Any) -> float:
    """
    Coerce an external value to a finite float.

    Args:
        value: Raw value from the snapshot (number, numeric string, None, ...)

    Returns:
        The value as a float, or 0.0 when it is missing, non-numeric or not finite
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def safe_int(value: Any) -> int:
    """Coerce an external value to an int, truncating toward zero."""
    return int(safe_num(value))


def safe_optional_age(value: Any) -> Optional[int]:
    """Coerce an optional age; zero, negative or missing means not configured."""
    age = safe_int(value)
    if age <= 0:
        return None
    return age


def compound(amount: float, rate_pct: float, years: int) -> float:
    """Grow ``amount`` by ``rate_pct`` percent per year for ``years`` years."""
    if rate_pct == 0 or years == 0:
        return amount
    return amount * (1 + rate_pct / 100) ** years


SafeFloat = Annotated[float, BeforeValidator(safe_num)]
SafeInt = Annotated[int, BeforeValidator(safe_int)]
OptionalAge = Annotated[Optional[int], BeforeValidator(safe_optional_age)]
