"""Configuration management using Pydantic Settings."""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Risk Scoring Engine"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./risk_scoring.db"

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    cache_enabled: bool = True

    # Cache TTLs (seconds)
    cache_ttl_configuration: int = 300  # 5 minutes
    cache_ttl_matrix_data: int = 300

    # Scale bounds
    scale_min_levels: int = 2
    scale_max_levels: int = 10

    # Matrix bounds
    matrix_max_dimension: int = 10


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
