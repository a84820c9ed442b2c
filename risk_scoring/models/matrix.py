"""Risk matrix configuration Pydantic models."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import MATRIX_PRESETS, MatrixPreset
from .score_band import ScoreBandBase, ScoreBandCreate, ScoreBandExport


class RiskMatrixCreate(BaseModel):
    """Model for creating a matrix configuration.

    Either ``rows``/``columns`` or a ``preset_used`` must be given; explicit
    dimensions win over the preset.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    rows: Optional[int] = Field(None, ge=1, description="Probability bands")
    columns: Optional[int] = Field(None, ge=1, description="Impact bands")
    number_of_levels: int = Field(3, ge=1)
    levels: Optional[List[ScoreBandCreate]] = Field(
        default=None,
        description="Explicit levels; generated from the dimensions when omitted"
    )
    is_active: bool = False
    preset_used: Optional[MatrixPreset] = None

    @model_validator(mode="after")
    def apply_preset(self) -> "RiskMatrixCreate":
        """Fill missing dimensions from the preset."""
        if self.preset_used is not None:
            preset_rows, preset_columns = MATRIX_PRESETS[self.preset_used]
            if self.rows is None:
                self.rows = preset_rows
            if self.columns is None:
                self.columns = preset_columns
        if self.rows is None or self.columns is None:
            raise ValueError("rows and columns are required when no preset is used")
        return self

    @property
    def is_custom(self) -> bool:
        if self.preset_used is None:
            return True
        return MATRIX_PRESETS[self.preset_used] != (self.rows, self.columns)


class RiskMatrixUpdate(BaseModel):
    """Model for updating a matrix configuration (all fields optional)."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    rows: Optional[int] = Field(None, ge=1)
    columns: Optional[int] = Field(None, ge=1)
    number_of_levels: Optional[int] = Field(None, ge=1)
    levels: Optional[List[ScoreBandCreate]] = None
    is_active: Optional[bool] = None


class GenerateLevelsRequest(BaseModel):
    """Ask for a fresh level partition, optionally keeping current labels."""
    rows: int = Field(..., ge=1)
    columns: int = Field(..., ge=1)
    number_of_levels: int = Field(..., ge=1)
    existing_levels: List[ScoreBandBase] = Field(default_factory=list)


class GenerateLevelsResponse(BaseModel):
    """Generated partition of ``[1, rows × columns]``."""
    max_score: int
    levels: List[ScoreBandCreate]


class MatrixDimensions(BaseModel):
    rows: int
    columns: int
    max_score: int


class MatrixScoringConfiguration(BaseModel):
    number_of_levels: int
    levels: List[ScoreBandExport]


class MatrixMetadata(BaseModel):
    is_active: bool
    is_custom: bool
    preset_used: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RiskMatrixExport(BaseModel):
    """Matrix configuration as exposed to the presentation layer."""
    id: str
    organization_id: int
    name: str
    matrix_dimensions: MatrixDimensions
    scoring_configuration: MatrixScoringConfiguration
    metadata: MatrixMetadata


class MatrixCellScoreRequest(BaseModel):
    """A cell of the matrix, 1-based."""
    likelihood: int = Field(..., ge=1, description="Row (probability band)")
    impact: int = Field(..., ge=1, description="Column (impact band)")


class MatrixCellScoreResponse(BaseModel):
    """Cell score and the level it falls into."""
    likelihood: int
    impact: int
    score: int
    level: Optional[ScoreBandExport] = None
    classified: bool
