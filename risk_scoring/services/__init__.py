"""Services package - configuration, matrix, scoring and cache services."""
from .redis_cache import RedisCache, CacheKeys, get_redis_cache
from .configuration_builder import ConfigurationBuilder
from .matrix_service import MatrixService
from .risk_calculation import RiskCalculationService
from .serialization import (
    matrix_to_array,
    serialize_configuration,
    serialize_matrix,
    to_config_array,
)

__all__ = [
    "RedisCache",
    "CacheKeys",
    "get_redis_cache",
    "ConfigurationBuilder",
    "MatrixService",
    "RiskCalculationService",
    "matrix_to_array",
    "serialize_configuration",
    "serialize_matrix",
    "to_config_array",
]
