"""Risk score request/response models."""
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from .scale import ScaleLevelExport
from .score_band import ScoreBandExport


class RiskScoreRequest(BaseModel):
    """Impact and probability measurements for one risk."""
    impact_score: Decimal = Field(..., ge=0)
    probability_score: Decimal = Field(..., ge=0)
    configuration_id: Optional[str] = Field(
        default=None,
        description="Defaults to the organization's first configuration"
    )


class CriteriaScoreRequest(BaseModel):
    """Per-criterion scores for one risk."""
    criteria_scores: List[Decimal] = Field(default_factory=list)
    configuration_id: Optional[str] = None


class RiskScoreResponse(BaseModel):
    """Composite score with the levels and band it maps to.

    ``None`` levels/band mean the score is unclassified under the current
    configuration; that is a valid outcome, not an error.
    """
    configuration_id: str
    risk_score: Decimal
    impact_score: Decimal
    probability_score: Decimal
    impact_level: Optional[ScaleLevelExport] = None
    probability_level: Optional[ScaleLevelExport] = None
    score_band: Optional[ScoreBandExport] = None
    classified: bool


class CriteriaScoreResponse(BaseModel):
    """Composite score aggregated from criteria."""
    configuration_id: str
    risk_score: Decimal
    criteria_scores: List[Decimal]
    score_band: Optional[ScoreBandExport] = None
    classified: bool
