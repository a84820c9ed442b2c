"""Score → level / band lookup.

Both lookups work on anything exposing the right attributes (ORM rows,
Pydantic models), so the same code classifies stored and in-flight
configurations. A ``None`` result means "unclassified", which is a valid
outcome for scores recorded before a configuration change.
"""
from decimal import Decimal
from typing import Optional, Protocol, Sequence, TypeVar

from risk_scoring.scoring.utils import Number, to_decimal


class ScoredLevel(Protocol):
    score: Decimal


class Band(Protocol):
    min: int
    max: int
    order: int


L = TypeVar("L", bound=ScoredLevel)
B = TypeVar("B", bound=Band)


def classify(levels: Sequence[L], score: Number) -> Optional[L]:
    """Return the highest-scoring level whose score does not exceed ``score``.

    Levels are scanned in descending score order; ties keep the level listed
    first.
    """
    value = to_decimal(score)
    for level in sorted(levels, key=lambda lvl: to_decimal(lvl.score), reverse=True):
        if to_decimal(level.score) <= value:
            return level
    return None


def classify_band(bands: Sequence[B], score: Number) -> Optional[B]:
    """Return the band containing ``score``.

    Bands are read in ``order``. A fractional score sitting between one
    band's integer ``max`` and the next band's ``min`` (e.g. 3.5 between
    1-3 and 4-6) belongs to the lower band. Scores below the first ``min`` or
    above the last ``max`` are unclassified.
    """
    value = to_decimal(score)
    ordered = sorted(bands, key=lambda band: band.order)
    for index, band in enumerate(ordered):
        if value < band.min:
            continue
        if value <= band.max:
            return band
        if index + 1 < len(ordered) and value < ordered[index + 1].min:
            return band
    return None


def check_band_contiguity(bands: Sequence[Band], max_score: Optional[int] = None) -> list[str]:
    """List every way ``bands`` fail to partition ``[1, max_score]``.

    Returns an empty list for a valid partition. When ``max_score`` is None
    only the start and the adjacency are checked.
    """
    if not bands:
        return []

    errors: list[str] = []
    ordered = sorted(bands, key=lambda band: band.order)

    orders = [band.order for band in ordered]
    if len(set(orders)) != len(orders):
        errors.append("Score bands must have distinct order values")

    if ordered[0].min != 1:
        errors.append(f"First score band must start at 1, got {ordered[0].min}")

    for previous, current in zip(ordered, ordered[1:]):
        if current.min != previous.max + 1:
            errors.append(
                f"Score band order {current.order} must start at {previous.max + 1}, "
                f"got {current.min}"
            )

    for band in ordered:
        if band.min > band.max:
            errors.append(f"Score band order {band.order} has min greater than max")

    if max_score is not None and ordered[-1].max != max_score:
        errors.append(f"Last score band must end at {max_score}, got {ordered[-1].max}")

    return errors
