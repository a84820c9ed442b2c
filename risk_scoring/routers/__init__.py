"""Routers package - API endpoint routers."""

from .health import router as health_router
from .configurations import router as configurations_router
from .scores import router as scores_router
from .matrices import router as matrices_router

__all__ = [
    "health_router",
    "configurations_router",
    "scores_router",
    "matrices_router",
]
