from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from ..core.exceptions import ValidationError

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_decimal(value: Any, field_name: str = "value") -> Decimal:
    """Coerce JSON/DB numbers into Decimal without float noise."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(f"{field_name} must be a number")
    # NaN and Infinity parse as Decimal but are not amounts.
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return result


def round2(value: Decimal) -> Decimal:
    rounded = Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    # Avoid "-0.00" in stored snapshots.
    return rounded if rounded != ZERO else ZERO.quantize(CENT)


def as_float(value: Decimal) -> float:
    return float(round2(value))
