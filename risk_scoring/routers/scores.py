"""Risk score calculation endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from risk_scoring.config import get_settings
from risk_scoring.database import get_db
from risk_scoring.dependencies import get_organization_id
from risk_scoring.models import (
    ConfigurationExport,
    CriteriaScoreRequest,
    CriteriaScoreResponse,
    RiskScoreRequest,
    RiskScoreResponse,
)
from risk_scoring.services import CacheKeys, RiskCalculationService, get_redis_cache

router = APIRouter(prefix="/api/v1/risk-scores", tags=["Risk Scores"])


@router.post(
    "/calculate",
    response_model=RiskScoreResponse,
    summary="Calculate Risk Score",
    description="Combine impact and probability with the organization's calculation method."
)
async def calculate_risk_score(
    request: RiskScoreRequest,
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    return RiskCalculationService().calculate_risk_score(
        db,
        organization_id,
        request.impact_score,
        request.probability_score,
        configuration_id=request.configuration_id,
    )


@router.post(
    "/calculate-with-criteria",
    response_model=CriteriaScoreResponse,
    summary="Calculate Risk Score From Criteria"
)
async def calculate_risk_score_with_criteria(
    request: CriteriaScoreRequest,
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    """Aggregate per-criterion scores; an empty list is rejected with 422."""
    return RiskCalculationService().calculate_risk_score_with_criteria(
        db,
        organization_id,
        request.criteria_scores,
        configuration_id=request.configuration_id,
    )


@router.get(
    "/matrix-data",
    response_model=ConfigurationExport,
    summary="Get Risk Matrix Data",
    description="Scales, criteria and score bands the organization scores with."
)
async def get_risk_matrix_data(
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    cache = get_redis_cache()
    cache_key = CacheKeys.matrix_data(organization_id)

    # Try cache first
    cached = cache.get_json(cache_key)
    if cached is not None:
        return cached

    document = RiskCalculationService().get_risk_matrix_data(db, organization_id).model_dump(mode="json")
    cache.set_json(cache_key, document, get_settings().cache_ttl_matrix_data)
    return document
