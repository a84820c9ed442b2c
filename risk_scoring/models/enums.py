"""Enumeration types for the risk scoring engine."""
from enum import Enum


class CalculationMethod(str, Enum):
    """How two or more scores are combined into one composite score."""
    AVERAGE = "average"
    MAX = "max"

    @classmethod
    def _missing_(cls, value):
        # Older configurations were stored with "avg"
        if isinstance(value, str) and value.lower() in ("avg", "mean"):
            return cls.AVERAGE
        return None


class ScaleKind(str, Enum):
    """Which scale a level belongs to."""
    IMPACT = "impact"
    PROBABILITY = "probability"
    CRITERION_IMPACT = "criterion_impact"


class MatrixPreset(str, Enum):
    """Standard matrix sizes offered to users."""
    THREE_BY_THREE = "3x3"
    THREE_BY_FIVE = "3x5"
    FIVE_BY_FIVE = "5x5"


# Preset → (rows, columns)
MATRIX_PRESETS: dict[MatrixPreset, tuple[int, int]] = {
    MatrixPreset.THREE_BY_THREE: (3, 3),
    MatrixPreset.THREE_BY_FIVE: (3, 5),
    MatrixPreset.FIVE_BY_FIVE: (5, 5),
}


# Palette cycled over generated levels
DEFAULT_LEVEL_COLORS: list[str] = [
    "#22c55e",  # Green
    "#eab308",  # Yellow
    "#f97316",  # Orange
    "#ef4444",  # Red
    "#7c2d12",  # Dark Red
    "#3b82f6",  # Blue
]
