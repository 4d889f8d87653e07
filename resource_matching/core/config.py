"""
Configuration management for the resource-role matching service.

This module provides centralized configuration management supporting:
- Environment variables and a local .env file
- PostgreSQL connection settings
- Matching run knobs (thresholds, result-set sizes, parallelism, conflict retries)
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

from resource_matching.domain.entities.matching import MatchingPolicy

logger = structlog.get_logger(__name__)


class Settings(BaseSettings):
    """
    Main application settings with smart defaults for local development.
    """

    # Environment Detection
    ENVIRONMENT: str = Field(
        default="local",
        description="Environment (local/development/staging/production)"
    )
    DEBUG: bool = Field(
        default=False,
        description="Debug mode"
    )

    # Core Application Settings
    APP_NAME: str = Field(
        default="Resource Matching Service",
        description="Application name"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application version"
    )

    # Server Configuration
    HOST: str = Field(
        default="0.0.0.0",
        description="Server host"
    )
    PORT: int = Field(
        default=8000,
        description="Server port"
    )

    # CORS Configuration
    CORS_ORIGINS: str = Field(
        default="*",
        description="Comma-separated CORS origins"
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )
    LOG_FORMAT: str = Field(
        default="console",
        description="Log format (json/console)"
    )

    # PostgreSQL Configuration
    POSTGRES_URL: Optional[str] = Field(
        default=None,
        description="PostgreSQL connection URL"
    )
    POSTGRES_HOST: str = Field(
        default="localhost",
        description="PostgreSQL host"
    )
    POSTGRES_PORT: int = Field(
        default=5432,
        description="PostgreSQL port"
    )
    POSTGRES_USER: str = Field(
        default="matching_user",
        description="PostgreSQL user"
    )
    POSTGRES_PASSWORD: str = Field(
        default="matching_password",
        description="PostgreSQL password"
    )
    POSTGRES_DB: str = Field(
        default="resource-matching",
        description="PostgreSQL database name"
    )
    DATABASE_POOL_SIZE: int = Field(
        default=10,
        description="Connection pool size"
    )
    DATABASE_MAX_OVERFLOW: int = Field(
        default=20,
        description="Connections allowed above the pool size"
    )
    DATABASE_POOL_TIMEOUT: int = Field(
        default=30,
        description="Seconds to wait for a pooled connection"
    )
    DATABASE_POOL_RECYCLE: int = Field(
        default=3600,
        description="Seconds after which pooled connections are recycled"
    )

    # Matching Engine
    MATCHING_MIN_SCORE_THRESHOLD: int = Field(
        default=30,
        description="Results must score strictly above this total to be kept"
    )
    MATCHING_MAX_PERSISTED_RESULTS: int = Field(
        default=20,
        description="Maximum results persisted per role and run"
    )
    MATCHING_TOP_INLINE_RESULTS: int = Field(
        default=10,
        description="Results returned inline by a run"
    )
    MATCHING_AUTO_SHORTLIST_SCORE: int = Field(
        default=70,
        description="Results scoring at least this total are shortlisted automatically"
    )
    MATCHING_MAX_PARALLELISM: int = Field(
        default=16,
        description="Maximum concurrently scored candidates per run"
    )
    MATCHING_CONFLICT_MAX_RETRIES: int = Field(
        default=3,
        description="Retries when another run holds the role's result-set lock"
    )
    MATCHING_CONFLICT_RETRY_DELAY_SECONDS: float = Field(
        default=0.05,
        description="Base back-off between conflict retries"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate and normalize environment name."""
        v = v.lower()
        if v not in ('local', 'development', 'staging', 'test', 'production'):
            logger.warning("Unknown environment, defaulting to 'local'", environment=v)
            return 'local'
        return v

    @field_validator('MATCHING_MIN_SCORE_THRESHOLD', 'MATCHING_AUTO_SHORTLIST_SCORE')
    @classmethod
    def validate_score(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError("Scores must be between 0 and 100")
        return v

    @model_validator(mode="after")
    def validate_result_sizes(self) -> "Settings":
        if self.MATCHING_TOP_INLINE_RESULTS > self.MATCHING_MAX_PERSISTED_RESULTS:
            raise ValueError(
                "MATCHING_TOP_INLINE_RESULTS must not exceed MATCHING_MAX_PERSISTED_RESULTS"
            )
        return self

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == 'production'

    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == 'local'

    def get_cors_origins(self) -> List[str]:
        """Get CORS origins as a list."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    def get_postgres_url(self) -> str:
        """Get PostgreSQL connection URL."""
        if self.POSTGRES_URL:
            return self.POSTGRES_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    def get_matching_policy(self) -> MatchingPolicy:
        """Matching knobs as the domain value object the engine consumes."""
        return MatchingPolicy(
            min_score_threshold=self.MATCHING_MIN_SCORE_THRESHOLD,
            max_persisted_results=self.MATCHING_MAX_PERSISTED_RESULTS,
            top_inline_results=self.MATCHING_TOP_INLINE_RESULTS,
            auto_shortlist_score=self.MATCHING_AUTO_SHORTLIST_SCORE,
            max_parallelism=self.MATCHING_MAX_PARALLELISM,
            conflict_max_retries=self.MATCHING_CONFLICT_MAX_RETRIES,
            conflict_retry_delay_seconds=self.MATCHING_CONFLICT_RETRY_DELAY_SECONDS,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings.

    Loads settings from environment variables and the .env file and returns a
    validated Settings instance.
    """
    settings = Settings()

    logger.info(
        "Settings loaded",
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
        min_score_threshold=settings.MATCHING_MIN_SCORE_THRESHOLD,
        max_parallelism=settings.MATCHING_MAX_PARALLELISM,
    )

    return settings
