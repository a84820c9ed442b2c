"""Decimal helpers shared by the calculators.

Scores are stored as ``NUMERIC(5, 2)`` and compared against user-entered
thresholds, so arithmetic runs on Decimal to avoid binary float drift.
"""
from decimal import Decimal
from typing import Union

Number = Union[int, float, str, Decimal]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without rounding.

    Args:
        value: Numeric value to convert. Floats go through ``str`` so that
            ``0.1`` becomes ``Decimal("0.1")``.

    Returns:
        Decimal representation of ``value``.
    """
    if isinstance(value, bool):
        raise TypeError("Booleans are not scores")
    return value if isinstance(value, Decimal) else Decimal(str(value))
