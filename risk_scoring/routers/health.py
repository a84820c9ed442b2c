"""Health check endpoint."""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session
from risk_scoring.config import get_settings
from risk_scoring.database import get_db
from risk_scoring.models import HealthResponse
from risk_scoring.services import get_redis_cache

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check health status of the API and all dependencies."
)
async def health_check(db: Session = Depends(get_db)):
    """
    Check health of all dependencies.

    Returns 200 if all healthy, 503 if any unhealthy.
    """
    settings = get_settings()
    dependencies: dict[str, str] = {}

    # Check database
    try:
        db.execute(text("SELECT 1"))
        dependencies["database"] = "healthy"
    except Exception as e:
        dependencies["database"] = f"unhealthy: {str(e)}"

    # Check Redis (skipped when caching is off)
    if settings.cache_enabled:
        try:
            redis = get_redis_cache()
            redis_healthy, redis_error = await redis.health_check()
            dependencies["redis"] = "healthy" if redis_healthy else f"unhealthy: {redis_error}"
        except Exception as e:
            dependencies["redis"] = f"unhealthy: {str(e)}"

    # Determine overall status
    all_healthy = all(v == "healthy" for v in dependencies.values())
    overall_status = "healthy" if all_healthy else "degraded"

    response = HealthResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
        dependencies=dependencies
    )

    # Return 503 if degraded
    if not all_healthy:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump()
        )

    return response
