"""Risk configuration CRUD endpoints."""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from risk_scoring.config import get_settings
from risk_scoring.database import get_db
from risk_scoring.dependencies import get_organization_id
from risk_scoring.models import (
    ConfigurationExport,
    MessageResponse,
    RiskConfigurationCreate,
    RiskConfigurationUpdate,
)
from risk_scoring.services import (
    CacheKeys,
    ConfigurationBuilder,
    RiskCalculationService,
    get_redis_cache,
    serialize_configuration,
    to_config_array,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/risk-configurations", tags=["Risk Configurations"])


@router.post(
    "",
    response_model=ConfigurationExport,
    status_code=status.HTTP_201_CREATED,
    summary="Create Risk Configuration"
)
async def create_configuration(
    payload: RiskConfigurationCreate,
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    """Create a configuration with its scales, criteria and score bands in one transaction."""
    builder = ConfigurationBuilder()
    configuration = builder.create_with_data(
        db,
        payload.to_data(organization_id),
        payload.impacts,
        payload.probabilities,
        payload.criteria,
        payload.score_bands,
    )

    # The organization's scoring configuration may have changed
    get_redis_cache().delete(CacheKeys.matrix_data(organization_id))
    return serialize_configuration(configuration)


@router.get(
    "",
    response_model=List[ConfigurationExport],
    summary="List Risk Configurations"
)
async def list_configurations(
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    """List the organization's configurations, oldest first."""
    configurations = RiskCalculationService().list_configurations(db, organization_id)
    return [serialize_configuration(configuration) for configuration in configurations]


@router.get(
    "/{configuration_id}",
    response_model=ConfigurationExport,
    summary="Get Risk Configuration"
)
async def get_configuration(
    configuration_id: str,
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    """Get a configuration by ID."""
    cache = get_redis_cache()
    settings = get_settings()
    cache_key = CacheKeys.configuration(configuration_id)

    # Try cache first
    cached = cache.get_json(cache_key)
    if cached is not None:
        if cached.get("organization_id") != organization_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Risk configuration {configuration_id} not found"
            )
        return cached

    configuration = RiskCalculationService().get_configuration(db, organization_id, configuration_id)
    document = to_config_array(configuration)

    cache.set_json(cache_key, document, settings.cache_ttl_configuration)
    return document


@router.put(
    "/{configuration_id}",
    response_model=ConfigurationExport,
    summary="Replace Risk Configuration"
)
async def update_configuration(
    configuration_id: str,
    payload: RiskConfigurationUpdate,
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    """Replace the root fields and the whole nested tree of a configuration."""
    configuration = RiskCalculationService().get_configuration(db, organization_id, configuration_id)
    ConfigurationBuilder().update_with_data(
        db,
        configuration,
        payload,
        payload.impacts,
        payload.probabilities,
        payload.criteria,
        payload.score_bands,
    )

    # Invalidate cache
    get_redis_cache().delete(*CacheKeys.for_configuration_write(configuration_id, organization_id))
    return serialize_configuration(configuration)


@router.delete(
    "/{configuration_id}",
    response_model=MessageResponse,
    summary="Delete Risk Configuration"
)
async def delete_configuration(
    configuration_id: str,
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    """Delete a configuration and everything it owns."""
    configuration = RiskCalculationService().get_configuration(db, organization_id, configuration_id)
    ConfigurationBuilder().delete(db, configuration)

    get_redis_cache().delete(*CacheKeys.for_configuration_write(configuration_id, organization_id))
    logger.info(f"Deleted risk configuration {configuration_id} for organization {organization_id}")
    return MessageResponse(message="Risk configuration deleted", id=configuration_id)
