"""Criterion Pydantic models."""
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .scale import CriterionImpactExport, ScaleLevelCreate


class CriterionCreate(BaseModel):
    """Criterion with its private impact scale.

    Accepts the flat shape ``{"name": ..., "impacts": [...]}`` as well as the
    wrapped shape ``{"criteria": {"name": ...}, "impacts": [...]}``.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    order: int = Field(..., ge=0)
    impacts: List[ScaleLevelCreate] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def unwrap_criteria(cls, data: Any) -> Any:
        """Flatten the wrapped ``{"criteria": ..., "impacts": ...}`` shape."""
        if isinstance(data, dict) and isinstance(data.get("criteria"), dict):
            flat = dict(data["criteria"])
            flat.setdefault("impacts", data.get("impacts", []))
            return flat
        return data


class CriterionExport(BaseModel):
    """Criterion as exposed to the presentation layer."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    order: int
    impacts: List[CriterionImpactExport]
