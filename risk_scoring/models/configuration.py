"""Risk configuration Pydantic models."""
from datetime import datetime
from typing import List, Literal, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .criterion import CriterionCreate, CriterionExport
from .enums import CalculationMethod
from .scale import ScaleLevelCreate, ScaleLevelExport
from .score_band import ScoreBandCreate, ScoreBandExport


class RiskConfigurationBase(BaseModel):
    """Root scalar fields of a risk configuration."""
    name: str = Field(..., min_length=1, max_length=255)
    impact_scale_max: int = Field(..., ge=1, description="Number of impact levels")
    probability_scale_max: int = Field(..., ge=1, description="Number of probability levels")
    calculation_method: CalculationMethod = CalculationMethod.AVERAGE
    use_criteria: bool = Field(
        default=False,
        validation_alias=AliasChoices("use_criteria", "use_criterias"),
    )


class RiskConfigurationData(RiskConfigurationBase):
    """Root record as handed to the configuration builder."""
    organization_id: int = Field(..., ge=1)


class RiskConfigurationCreate(RiskConfigurationBase):
    """Full configuration tree submitted by a client."""
    impacts: List[ScaleLevelCreate]
    probabilities: List[ScaleLevelCreate]
    criteria: List[CriterionCreate] = Field(
        default_factory=list,
        validation_alias=AliasChoices("criteria", "criterias"),
    )
    score_bands: List[ScoreBandCreate] = Field(
        default_factory=list,
        validation_alias=AliasChoices("score_bands", "score_levels"),
    )

    def to_data(self, organization_id: int) -> RiskConfigurationData:
        """Root record for the given tenant."""
        return RiskConfigurationData(
            organization_id=organization_id,
            **self.model_dump(include=set(RiskConfigurationBase.model_fields)),
        )


class RiskConfigurationUpdate(RiskConfigurationCreate):
    """Replacement tree for an existing configuration."""
    pass


class _ConfigurationExportBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    organization_id: int
    name: str
    impact_scale_max: int
    probability_scale_max: int
    calculation_method: CalculationMethod
    impacts: List[ScaleLevelExport]
    probabilities: List[ScaleLevelExport]
    score_bands: List[ScoreBandExport]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StandardConfigurationExport(_ConfigurationExportBase):
    """Export of a configuration scored from impact × probability."""
    use_criteria: Literal[False] = False


class CriteriaConfigurationExport(_ConfigurationExportBase):
    """Export of a configuration scored from per-criterion impacts."""
    use_criteria: Literal[True] = True
    criteria: List[CriterionExport]


ConfigurationExport = Union[CriteriaConfigurationExport, StandardConfigurationExport]
