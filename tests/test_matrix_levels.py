"""Tests for matrix level generation."""
import pytest

from risk_scoring.exceptions import ConfigurationValidationError
from risk_scoring.models import DEFAULT_LEVEL_COLORS
from risk_scoring.scoring.matrix_levels import (
    MatrixLevelGenerator,
    generate_levels,
    partition_bounds,
)


def _bounds(levels):
    return [(level.min, level.max) for level in levels]


class TestPartitionBounds:
    """Boundary arithmetic."""

    @pytest.mark.parametrize(
        "max_score,n,expected",
        [
            (9, 3, [(1, 3), (4, 6), (7, 9)]),
            (25, 5, [(1, 5), (6, 10), (11, 15), (16, 20), (21, 25)]),
            (15, 4, [(1, 4), (5, 8), (9, 12), (13, 15)]),
            (10, 4, [(1, 3), (4, 6), (7, 9), (10, 10)]),
            (9, 1, [(1, 9)]),
        ],
    )
    def test_ceil_step(self, max_score, n, expected):
        assert partition_bounds(max_score, n) == expected

    def test_even_spread_when_ceil_leaves_empty_band(self):
        """3×3 with 4 levels would end on 10-9 with the ceil step."""
        assert partition_bounds(9, 4) == [(1, 2), (3, 4), (5, 6), (7, 9)]

    def test_one_level_per_score(self):
        assert partition_bounds(4, 4) == [(1, 1), (2, 2), (3, 3), (4, 4)]


class TestMatrixLevelGenerator:
    """Level lists with labels and colors."""

    def test_three_by_three_three_levels(self):
        levels = generate_levels(3, 3, 3)
        assert _bounds(levels) == [(1, 3), (4, 6), (7, 9)]
        assert [level.label for level in levels] == ["Level 1", "Level 2", "Level 3"]
        assert [level.order for level in levels] == [1, 2, 3]
        assert [level.color for level in levels] == DEFAULT_LEVEL_COLORS[:3]

    def test_palette_cycles(self):
        levels = generate_levels(1, 7, 7)
        assert levels[6].color == DEFAULT_LEVEL_COLORS[0]

    def test_custom_palette(self):
        levels = MatrixLevelGenerator(palette=["#000000", "#ffffff"]).generate(2, 2, 3)
        assert [level.color for level in levels] == ["#000000", "#ffffff", "#000000"]

    def test_grow_keeps_existing_labels_and_colors(self):
        current = generate_levels(3, 3, 3)
        current[0].label, current[0].color = "Acceptable", "#123456"
        current[2].label = "Critical"

        grown = generate_levels(3, 3, 4, current)

        assert [level.label for level in grown] == ["Acceptable", "Level 2", "Critical", "Level 4"]
        assert grown[0].color == "#123456"
        assert grown[3].color == DEFAULT_LEVEL_COLORS[3]
        assert grown[3].min == grown[2].max + 1
        assert grown[-1].max == 9

    def test_shrink_truncates(self):
        current = generate_levels(5, 5, 5)
        current[1].label = "Watch"

        shrunk = generate_levels(5, 5, 2, current)

        assert [level.label for level in shrunk] == ["Level 1", "Watch"]
        assert _bounds(shrunk) == [(1, 13), (14, 25)]

    def test_resize_recomputes_boundaries(self):
        current = generate_levels(3, 3, 3)
        resized = generate_levels(5, 5, 3, current)
        assert _bounds(resized) == [(1, 9), (10, 18), (19, 25)]

    def test_missing_color_gets_palette_color(self):
        current = generate_levels(3, 3, 3)
        current[1].color = None
        assert generate_levels(3, 3, 3, current)[1].color == DEFAULT_LEVEL_COLORS[1]

    @pytest.mark.parametrize("rows,columns", [(0, 3), (3, 0), (-1, -1)])
    def test_non_positive_dimensions_rejected(self, rows, columns):
        with pytest.raises(ConfigurationValidationError):
            generate_levels(rows, columns, 1)

    @pytest.mark.parametrize("n", [0, 10])
    def test_level_count_outside_range_rejected(self, n):
        with pytest.raises(ConfigurationValidationError) as exc_info:
            generate_levels(3, 3, n)
        assert "number_of_levels must be between 1 and 9" in exc_info.value.errors[0]
