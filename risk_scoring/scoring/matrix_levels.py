"""Severity level generation for N×M risk matrices.

Partition
---------
  max_score   = rows × columns
  score_range = ceil(max_score / n)
  min_i       = i × score_range + 1
  max_i       = min((i + 1) × score_range, max_score)

e.g. 3×3 with 3 levels → 1-3, 4-6, 7-9.

When the ceil step overshoots so far that the last level would be empty
(3×3 with 4 levels: 1-3, 4-6, 7-9, 10-9) the range is spread evenly
instead: ``min_i = floor(i × max_score / n) + 1``.

Labels and colors of levels the user already has survive a resize; the
boundaries of every level are recomputed so the result always covers
``[1, max_score]`` without gaps.
"""
import math
from typing import Optional, Protocol, Sequence

from risk_scoring.exceptions import ConfigurationValidationError
from risk_scoring.models.enums import DEFAULT_LEVEL_COLORS
from risk_scoring.models.score_band import ScoreBandCreate


class LabelledLevel(Protocol):
    label: str
    color: Optional[str]


def partition_bounds(max_score: int, number_of_levels: int) -> list[tuple[int, int]]:
    """Return ``(min, max)`` for each of ``number_of_levels`` contiguous levels."""
    score_range = math.ceil(max_score / number_of_levels)
    if (number_of_levels - 1) * score_range < max_score:
        return [
            (i * score_range + 1, min((i + 1) * score_range, max_score))
            for i in range(number_of_levels)
        ]
    return [
        (i * max_score // number_of_levels + 1, (i + 1) * max_score // number_of_levels)
        for i in range(number_of_levels)
    ]


class MatrixLevelGenerator:
    """Build the level list of a matrix configuration.

    Parameters
    ----------
    palette:
        Colors cycled over new levels; defaults to green → red → blue.
    """

    def __init__(self, palette: Optional[Sequence[str]] = None) -> None:
        self.palette = list(palette or DEFAULT_LEVEL_COLORS)

    def generate(
        self,
        rows: int,
        columns: int,
        number_of_levels: int,
        existing_levels: Sequence[LabelledLevel] = (),
    ) -> list[ScoreBandCreate]:
        """Generate levels for a ``rows × columns`` matrix.

        Args:
            rows: Number of probability bands.
            columns: Number of impact bands.
            number_of_levels: Desired severity tiers.
            existing_levels: Current levels in display order; the first
                ``number_of_levels`` keep their label and color.

        Returns:
            Levels ordered 1..n, contiguous over ``[1, rows × columns]``.

        Raises:
            ConfigurationValidationError: On non-positive dimensions or a
                level count outside ``[1, rows × columns]``.
        """
        errors = []
        if rows < 1:
            errors.append(f"rows must be at least 1, got {rows}")
        if columns < 1:
            errors.append(f"columns must be at least 1, got {columns}")
        if errors:
            raise ConfigurationValidationError(errors)

        max_score = rows * columns
        if not 1 <= number_of_levels <= max_score:
            raise ConfigurationValidationError(
                [f"number_of_levels must be between 1 and {max_score}, got {number_of_levels}"]
            )

        kept = list(existing_levels)[:number_of_levels]
        levels: list[ScoreBandCreate] = []
        for i, (low, high) in enumerate(partition_bounds(max_score, number_of_levels)):
            if i < len(kept):
                label = kept[i].label
                color = kept[i].color or self._color_for(i)
            else:
                label = f"Level {i + 1}"
                color = self._color_for(i)
            levels.append(ScoreBandCreate(label=label, min=low, max=high, color=color, order=i + 1))
        return levels

    def _color_for(self, index: int) -> str:
        return self.palette[index % len(self.palette)]


def generate_levels(
    rows: int,
    columns: int,
    number_of_levels: int,
    existing_levels: Sequence[LabelledLevel] = (),
) -> list[ScoreBandCreate]:
    """Generate levels with the default palette."""
    return MatrixLevelGenerator().generate(rows, columns, number_of_levels, existing_levels)
