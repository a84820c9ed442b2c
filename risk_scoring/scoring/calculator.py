"""Composite risk score calculation.

Two aggregation strategies
--------------------------
  max      score = max(s_1, ..., s_n)
  average  score = (s_1 + ... + s_n) / n

With two inputs (impact, probability) ``average`` is ``(I + P) / 2``.
Results are Decimal and are not quantized here; rounding is a display
concern. No range checks either: callers pass scores taken from the
configuration's own scale levels.
"""
from decimal import Decimal
from typing import Iterable, Union

from risk_scoring.exceptions import EmptyInputError
from risk_scoring.models.enums import CalculationMethod
from risk_scoring.scoring.utils import Number, to_decimal

MethodLike = Union[CalculationMethod, str]


def _is_max(method: MethodLike) -> bool:
    try:
        return CalculationMethod(method) is CalculationMethod.MAX
    except ValueError:
        # Unknown methods fall back to the average
        return False


def calculate_risk_score(
    impact_score: Number,
    probability_score: Number,
    method: MethodLike = CalculationMethod.AVERAGE,
) -> Decimal:
    """Combine an impact and a probability score.

    Example:
        >>> calculate_risk_score(7, 4, "max")
        Decimal('7')
    """
    impact = to_decimal(impact_score)
    probability = to_decimal(probability_score)
    if _is_max(method):
        return max(impact, probability)
    return (impact + probability) / 2


def calculate_risk_score_with_criteria(
    criteria_scores: Iterable[Number],
    method: MethodLike = CalculationMethod.AVERAGE,
) -> Decimal:
    """Combine per-criterion scores.

    Raises:
        EmptyInputError: If no score is given.
    """
    scores = [to_decimal(score) for score in criteria_scores]
    if not scores:
        raise EmptyInputError("At least one criterion score is required")
    if _is_max(method):
        return max(scores)
    return sum(scores, Decimal(0)) / len(scores)
