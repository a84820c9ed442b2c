"""Pydantic models for the risk scoring engine."""

# Common Models
from risk_scoring.models.common import (
    HealthResponse,
    ErrorResponse,
    MessageResponse,
)

# Enums
from risk_scoring.models.enums import (
    CalculationMethod,
    ScaleKind,
    MatrixPreset,
    MATRIX_PRESETS,
    DEFAULT_LEVEL_COLORS,
)

# Scales, criteria, bands
from risk_scoring.models.scale import (
    ScaleLevelBase,
    ScaleLevelCreate,
    ScaleLevelExport,
    CriterionImpactExport,
)
from risk_scoring.models.criterion import (
    CriterionCreate,
    CriterionExport,
)
from risk_scoring.models.score_band import (
    ScoreBandBase,
    ScoreBandCreate,
    ScoreBandExport,
)

# Configurations
from risk_scoring.models.configuration import (
    RiskConfigurationBase,
    RiskConfigurationData,
    RiskConfigurationCreate,
    RiskConfigurationUpdate,
    StandardConfigurationExport,
    CriteriaConfigurationExport,
    ConfigurationExport,
)

# Matrix mode
from risk_scoring.models.matrix import (
    RiskMatrixCreate,
    RiskMatrixUpdate,
    GenerateLevelsRequest,
    GenerateLevelsResponse,
    MatrixDimensions,
    MatrixScoringConfiguration,
    MatrixMetadata,
    RiskMatrixExport,
    MatrixCellScoreRequest,
    MatrixCellScoreResponse,
)

# Scoring
from risk_scoring.models.scoring import (
    RiskScoreRequest,
    CriteriaScoreRequest,
    RiskScoreResponse,
    CriteriaScoreResponse,
)

__all__ = [
    # Common
    "HealthResponse",
    "ErrorResponse",
    "MessageResponse",
    # Enums
    "CalculationMethod",
    "ScaleKind",
    "MatrixPreset",
    "MATRIX_PRESETS",
    "DEFAULT_LEVEL_COLORS",
    # Scales, criteria, bands
    "ScaleLevelBase",
    "ScaleLevelCreate",
    "ScaleLevelExport",
    "CriterionImpactExport",
    "CriterionCreate",
    "CriterionExport",
    "ScoreBandBase",
    "ScoreBandCreate",
    "ScoreBandExport",
    # Configurations
    "RiskConfigurationBase",
    "RiskConfigurationData",
    "RiskConfigurationCreate",
    "RiskConfigurationUpdate",
    "StandardConfigurationExport",
    "CriteriaConfigurationExport",
    "ConfigurationExport",
    # Matrix
    "RiskMatrixCreate",
    "RiskMatrixUpdate",
    "GenerateLevelsRequest",
    "GenerateLevelsResponse",
    "MatrixDimensions",
    "MatrixScoringConfiguration",
    "MatrixMetadata",
    "RiskMatrixExport",
    "MatrixCellScoreRequest",
    "MatrixCellScoreResponse",
    # Scoring
    "RiskScoreRequest",
    "CriteriaScoreRequest",
    "RiskScoreResponse",
    "CriteriaScoreResponse",
]
