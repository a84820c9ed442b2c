"""Redis caching service for configuration exports.

Cache problems never fail a request: every operation logs and degrades to a
miss.
"""
import json
import logging
from typing import Any, Optional
import redis
from risk_scoring.config import get_settings

logger = logging.getLogger(__name__)


class RedisCache:
    """Redis caching service storing JSON documents."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        client: Optional[redis.Redis] = None,
        enabled: bool = True,
    ):
        self.client = client if client is not None else redis.Redis(
            host=host,
            port=port,
            db=db,
            decode_responses=True
        )
        self.enabled = enabled

    async def health_check(self) -> tuple[bool, Optional[str]]:
        """Check if Redis connection is healthy."""
        try:
            self.client.ping()
            return True, None
        except Exception as e:
            return False, str(e)

    def get_json(self, key: str) -> Optional[Any]:
        """Get a cached JSON document."""
        if not self.enabled:
            return None
        try:
            data = self.client.get(key)
            if data:
                return json.loads(data)
            return None
        except Exception as e:
            logger.warning(f"Cache get error for {key}: {e}")
            return None

    def set_json(self, key: str, value: Any, ttl_seconds: int) -> bool:
        """Cache a JSON-serializable document with TTL."""
        if not self.enabled:
            return False
        try:
            self.client.setex(key, ttl_seconds, json.dumps(value))
            return True
        except Exception as e:
            logger.warning(f"Cache set error for {key}: {e}")
            return False

    def delete(self, *keys: str) -> bool:
        """Invalidate cache entries."""
        if not self.enabled or not keys:
            return False
        try:
            self.client.delete(*keys)
            return True
        except Exception as e:
            logger.warning(f"Cache delete error for {keys}: {e}")
            return False


# Cache key prefixes
class CacheKeys:
    """Cache key constants and builders."""
    CONFIGURATION = "risk_config"
    MATRIX_DATA = "matrix_data"

    @staticmethod
    def configuration(configuration_id: str) -> str:
        return f"risk_config:{configuration_id}"

    @staticmethod
    def matrix_data(organization_id: int) -> str:
        return f"matrix_data:org:{organization_id}"

    @classmethod
    def for_configuration_write(cls, configuration_id: str, organization_id: int) -> tuple[str, str]:
        """Keys made stale by any write to a configuration tree."""
        return cls.configuration(configuration_id), cls.matrix_data(organization_id)


# Singleton instance
_redis_cache: Optional[RedisCache] = None


def get_redis_cache() -> RedisCache:
    """Get or create Redis cache singleton."""
    global _redis_cache
    if _redis_cache is None:
        settings = get_settings()
        _redis_cache = RedisCache(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            enabled=settings.cache_enabled,
        )
    return _redis_cache
