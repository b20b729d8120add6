"""
Decimal Utilities - Revyn Audit Platform
revyn_audit/scoring/utils.py

Precision-safe decimal math for audit scoring.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from numbers import Real
from typing import Optional


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("100"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def finite_number(value: object) -> Optional[Decimal]:
    """
    Return value as an exact Decimal if it is a finite real number.

    bool is rejected even though it subclasses int.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return Decimal(str(value))


def to_percentage(points: Decimal, max_points: Decimal) -> int:
    """
    Integer percentage of points over max_points.

    Formula: round_half_up(100 × points / max_points), clamped to [0, 100].
    Returns 0 when max_points is zero.
    """
    if max_points <= 0:
        return 0
    ratio = Decimal(100) * points / max_points
    return int(clamp(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP)))
