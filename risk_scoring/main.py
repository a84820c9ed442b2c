"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from risk_scoring.config import get_settings
from risk_scoring.database import get_engine
from risk_scoring.database.orm import Base
from risk_scoring.exceptions import (
    ConfigurationNotFoundError,
    ConfigurationPersistenceError,
    ConfigurationValidationError,
    EmptyInputError,
)
from risk_scoring.models import ErrorResponse
from risk_scoring.routers import (
    health_router,
    configurations_router,
    scores_router,
    matrices_router,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    logger.info("Starting Risk Scoring Engine...")
    settings = get_settings()
    logger.info(f"Environment: {'DEBUG' if settings.debug else 'PRODUCTION'}")
    # Migrations own the schema in production; this only fills in a fresh database
    Base.metadata.create_all(get_engine())
    yield
    # Shutdown
    logger.info("Shutting down Risk Scoring Engine...")


def _error(status_code: int, detail: str, error_code: str, errors: list[str] | None = None) -> JSONResponse:
    body = ErrorResponse(detail=detail, error_code=error_code, errors=errors or [])
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="""
        ## Risk Scoring Engine API

        Organization-specific risk scoring and classification

        ### Features:
        - Configurable impact and probability scales
        - Criteria-based scoring with per-criterion impact scales
        - Contiguous, coloured score bands
        - N×M risk matrices with generated severity levels
        - Caching for optimized performance

        ### Calculation Methods:
        - **Average**: (impact + probability) / 2
        - **Max**: highest of the inputs
        """,
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(configurations_router)
    app.include_router(scores_router)
    app.include_router(matrices_router)

    # Domain exception handlers
    @app.exception_handler(ConfigurationValidationError)
    async def validation_error_handler(request: Request, exc: ConfigurationValidationError):
        return _error(
            status.HTTP_422_UNPROCESSABLE_ENTITY, exc.message, "configuration_invalid", exc.errors
        )

    @app.exception_handler(EmptyInputError)
    async def empty_input_handler(request: Request, exc: EmptyInputError):
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, exc.message, "empty_input")

    @app.exception_handler(ConfigurationNotFoundError)
    async def not_found_handler(request: Request, exc: ConfigurationNotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, exc.message, "configuration_not_found")

    @app.exception_handler(ConfigurationPersistenceError)
    async def persistence_error_handler(request: Request, exc: ConfigurationPersistenceError):
        logger.error(f"Persistence failure: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message, "persistence_failed")

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "error": str(exc)}
        )

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("risk_scoring.main:app", host="0.0.0.0", port=8000, reload=True)
