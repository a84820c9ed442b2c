"""Scoring module for the risk scoring engine.

Pure, side-effect free building blocks:
  calculator     impact/probability or criteria → composite score
  classifier     composite score → scale level / score band
  matrix_levels  matrix dimensions → contiguous score bands
"""
from risk_scoring.scoring.calculator import (
    calculate_risk_score,
    calculate_risk_score_with_criteria,
)
from risk_scoring.scoring.classifier import (
    check_band_contiguity,
    classify,
    classify_band,
)
from risk_scoring.scoring.matrix_levels import (
    MatrixLevelGenerator,
    generate_levels,
    partition_bounds,
)

__all__ = [
    "calculate_risk_score",
    "calculate_risk_score_with_criteria",
    "check_band_contiguity",
    "classify",
    "classify_band",
    "MatrixLevelGenerator",
    "generate_levels",
    "partition_bounds",
]
