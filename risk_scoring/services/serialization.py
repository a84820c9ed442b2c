"""Configuration aggregate → presentation shape.

Read-only mappings: nothing here touches the session or mutates the ORM
objects it is given.
"""
from typing import Any

from risk_scoring.database.orm import RiskConfiguration, RiskMatrixConfiguration
from risk_scoring.models import (
    ConfigurationExport,
    CriteriaConfigurationExport,
    CriterionExport,
    CriterionImpactExport,
    MatrixDimensions,
    MatrixMetadata,
    MatrixScoringConfiguration,
    RiskMatrixExport,
    ScaleLevelExport,
    ScoreBandExport,
    StandardConfigurationExport,
)


def _root_fields(configuration: RiskConfiguration) -> dict[str, Any]:
    return {
        "id": configuration.id,
        "organization_id": configuration.organization_id,
        "name": configuration.name,
        "impact_scale_max": configuration.impact_scale_max,
        "probability_scale_max": configuration.probability_scale_max,
        "calculation_method": configuration.calculation_method,
        "impacts": [ScaleLevelExport.model_validate(level) for level in configuration.impacts],
        "probabilities": [
            ScaleLevelExport.model_validate(level) for level in configuration.probabilities
        ],
        "score_bands": [ScoreBandExport.model_validate(band) for band in configuration.score_bands],
        "created_at": configuration.created_at,
        "updated_at": configuration.updated_at,
    }


def serialize_configuration(configuration: RiskConfiguration) -> ConfigurationExport:
    """Map a configuration to its tagged export model.

    Criteria are only part of the export when the configuration scores by
    criteria.
    """
    fields = _root_fields(configuration)
    if not configuration.use_criteria:
        return StandardConfigurationExport(**fields)

    criteria = [
        CriterionExport(
            id=criterion.id,
            name=criterion.name,
            description=criterion.description,
            order=criterion.order,
            impacts=[CriterionImpactExport.model_validate(level) for level in criterion.impacts],
        )
        for criterion in configuration.criteria
    ]
    return CriteriaConfigurationExport(criteria=criteria, **fields)


def to_config_array(configuration: RiskConfiguration) -> dict[str, Any]:
    """JSON-ready dict of the configuration export."""
    return serialize_configuration(configuration).model_dump(mode="json")


def serialize_matrix(matrix: RiskMatrixConfiguration) -> RiskMatrixExport:
    """Map a matrix configuration to its export model."""
    return RiskMatrixExport(
        id=matrix.id,
        organization_id=matrix.organization_id,
        name=matrix.name,
        matrix_dimensions=MatrixDimensions(
            rows=matrix.rows,
            columns=matrix.columns,
            max_score=matrix.max_score,
        ),
        scoring_configuration=MatrixScoringConfiguration(
            number_of_levels=matrix.number_of_levels,
            levels=[ScoreBandExport.model_validate(level) for level in matrix.levels],
        ),
        metadata=MatrixMetadata(
            is_active=matrix.is_active,
            is_custom=matrix.is_custom,
            preset_used=matrix.preset_used,
            created_at=matrix.created_at,
            updated_at=matrix.updated_at,
        ),
    )


def matrix_to_array(matrix: RiskMatrixConfiguration) -> dict[str, Any]:
    """JSON-ready dict of the matrix export."""
    return serialize_matrix(matrix).model_dump(mode="json")
