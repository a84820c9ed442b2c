"""Score band Pydantic models."""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .scale import HEX_COLOR_PATTERN


class ScoreBandBase(BaseModel):
    """Base score band model."""
    model_config = ConfigDict(str_strip_whitespace=True)

    label: str = Field(..., min_length=1, max_length=255)
    min: int = Field(..., ge=1, description="Lowest score in the band (inclusive)")
    max: int = Field(..., ge=1, description="Highest score in the band (inclusive)")
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)
    order: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_bounds(self) -> "ScoreBandBase":
        """Reject inverted intervals."""
        if self.min > self.max:
            raise ValueError(f"Band '{self.label}' has min {self.min} greater than max {self.max}")
        return self


class ScoreBandCreate(ScoreBandBase):
    """Model for creating a score band."""
    pass


class ScoreBandExport(BaseModel):
    """Score band as exposed to the presentation layer."""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    label: str
    min: int
    max: int
    color: Optional[str] = None
    order: int
