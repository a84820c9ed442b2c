"""Tests for level and band classification."""
from decimal import Decimal

import pytest

from risk_scoring.models import ScaleLevelCreate, ScoreBandCreate
from risk_scoring.scoring.classifier import (
    check_band_contiguity,
    classify,
    classify_band,
)


@pytest.fixture
def levels():
    return [
        ScaleLevelCreate(label="Low", score=1, order=1),
        ScaleLevelCreate(label="Medium", score=2, order=2),
        ScaleLevelCreate(label="High", score=3, order=3),
    ]


@pytest.fixture
def bands():
    return [
        ScoreBandCreate(label="Low", min=1, max=3, order=1),
        ScoreBandCreate(label="Medium", min=4, max=6, order=2),
        ScoreBandCreate(label="High", min=7, max=9, order=3),
    ]


class TestClassify:
    """Score → scale level."""

    @pytest.mark.parametrize(
        "score,expected",
        [(1, "Low"), (Decimal("1.99"), "Low"), (2, "Medium"), (Decimal("2.5"), "Medium"), (3, "High"), (40, "High")],
    )
    def test_highest_level_not_above_score(self, levels, score, expected):
        assert classify(levels, score).label == expected

    def test_below_lowest_is_unclassified(self, levels):
        assert classify(levels, Decimal("0.5")) is None

    def test_input_order_is_irrelevant(self, levels):
        assert classify(list(reversed(levels)), 2).label == "Medium"

    def test_empty_levels(self):
        assert classify([], 5) is None


class TestClassifyBand:
    """Score → score band."""

    @pytest.mark.parametrize(
        "score,expected",
        [(1, "Low"), (3, "Low"), (4, "Medium"), (6, "Medium"), (7, "High"), (9, "High")],
    )
    def test_integer_scores(self, bands, score, expected):
        assert classify_band(bands, score).label == expected

    @pytest.mark.parametrize(
        "score,expected",
        [(Decimal("3.5"), "Low"), (Decimal("6.99"), "Medium"), (Decimal("4.5"), "Medium")],
    )
    def test_fractional_scores_between_bands_go_to_lower_band(self, bands, score, expected):
        assert classify_band(bands, score).label == expected

    @pytest.mark.parametrize("score", [0, Decimal("0.99"), Decimal("9.01"), 10])
    def test_out_of_range_is_unclassified(self, bands, score):
        assert classify_band(bands, score) is None

    def test_bands_read_in_order(self, bands):
        assert classify_band(list(reversed(bands)), 5).label == "Medium"


class TestCheckBandContiguity:
    """Partition invariant of score bands."""

    def test_valid_partition(self, bands):
        assert check_band_contiguity(bands, 9) == []

    def test_empty_is_valid(self):
        assert check_band_contiguity([], 9) == []

    def test_gap_reported(self):
        bands = [
            ScoreBandCreate(label="Low", min=1, max=3, order=1),
            ScoreBandCreate(label="High", min=5, max=9, order=2),
        ]
        errors = check_band_contiguity(bands, 9)
        assert errors == ["Score band order 2 must start at 4, got 5"]

    def test_overlap_reported(self):
        bands = [
            ScoreBandCreate(label="Low", min=1, max=4, order=1),
            ScoreBandCreate(label="High", min=4, max=9, order=2),
        ]
        assert len(check_band_contiguity(bands, 9)) == 1

    def test_must_start_at_one(self):
        bands = [ScoreBandCreate(label="All", min=2, max=9, order=1)]
        assert check_band_contiguity(bands, 9) == ["First score band must start at 1, got 2"]

    def test_must_cover_max_score(self, bands):
        assert check_band_contiguity(bands, 12) == ["Last score band must end at 12, got 9"]

    def test_max_score_optional(self, bands):
        assert check_band_contiguity(bands) == []

    def test_duplicate_orders(self):
        bands = [
            ScoreBandCreate(label="Low", min=1, max=3, order=1),
            ScoreBandCreate(label="High", min=4, max=9, order=1),
        ]
        assert "Score bands must have distinct order values" in check_band_contiguity(bands, 9)
