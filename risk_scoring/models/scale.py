"""Scale level Pydantic models.

Impact, probability and criterion-impact levels share one shape; the owning
scale is carried by ``ScaleKind`` on the stored row, not by separate classes.
"""
from decimal import Decimal
from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class ScaleLevelBase(BaseModel):
    """Base scale level model."""
    model_config = ConfigDict(str_strip_whitespace=True)

    label: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("label", "impact_label"),
    )
    score: Decimal = Field(
        ...,
        ge=0,
        max_digits=5,
        decimal_places=2,
        description="Numeric value of the level (e.g. 1.00, 2.50)"
    )
    color: Optional[str] = Field(
        default=None,
        pattern=HEX_COLOR_PATTERN,
        description="Optional UI color (#rrggbb)"
    )
    order: int = Field(..., ge=0, description="Rank within the scale (1 = lowest)")


class ScaleLevelCreate(ScaleLevelBase):
    """Model for creating a scale level."""
    pass


class ScaleLevelExport(BaseModel):
    """Scale level as exposed to the presentation layer."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    label: str
    score: Decimal
    color: Optional[str] = None
    order: int


class CriterionImpactExport(BaseModel):
    """Criterion impact level as exposed to the presentation layer."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    label: str
    score: Decimal
    order: int
