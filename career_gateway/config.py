"""
Gateway Configuration Module

Centralized configuration management with Pydantic validation.
All environment variables are validated at startup to catch misconfigurations early.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GatewaySettings(BaseSettings):
    """
    Gateway service configuration with validation.

    All settings can be overridden via environment variables. Field names
    match the variable names case-insensitively (HUBHRMS_API_KEY ->
    hubhrms_api_key).
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    # === Server ===
    port: int = Field(default=8080, ge=1, le=65535, description="Listen port")
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )
    request_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        le=600,
        description="Server-wide request timeout in seconds"
    )

    # === Upstream HRMS ===
    hubhrms_graphql_url: str = Field(
        default="",
        description="Upstream HRMS GraphQL endpoint URL"
    )
    hubhrms_api_key: Optional[str] = Field(
        default=None,
        description="Service-level API key sent as a bearer token upstream"
    )
    hrms_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=120,
        description="Timeout for a single upstream GraphQL call"
    )
    health_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        le=60,
        description="Timeout for the /health upstream probe"
    )
    readiness_timeout_seconds: float = Field(
        default=3.0,
        gt=0,
        le=60,
        description="Timeout for the /health/ready upstream probe"
    )

    # === Object storage ===
    aws_region: str = Field(default="us-east-1", description="S3 region")
    aws_s3_bucket: str = Field(
        default="hr-recruiting-resumes",
        description="Bucket receiving uploaded resumes"
    )

    # === Email ===
    sendgrid_api_key: Optional[str] = Field(
        default=None,
        description="SendGrid API key; email is disabled when unset"
    )
    email_from: str = Field(default="noreply@company.com", description="Sender address")
    email_from_name: str = Field(default="HR Recruiting", description="Sender display name")

    # === CORS ===
    cors_allowed_origins: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        description="Comma-separated list of allowed CORS origins"
    )

    # === Logging ===
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: str = Field(default="simple", description="Log format: simple or json")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        allowed = {"development", "staging", "production"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of: {', '.join(sorted(allowed))}")
        return v_lower

    @field_validator("hubhrms_graphql_url")
    @classmethod
    def validate_url_format(cls, v: str) -> str:
        """Basic URL format validation (empty is allowed outside production)."""
        if v and not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid URL format: {v}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in {"simple", "json"}:
            raise ValueError("log_format must be 'simple' or 'json'")
        return v_lower

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        if not self.cors_allowed_origins:
            return []
        return [
            origin.strip()
            for origin in self.cors_allowed_origins.split(",")
            if origin.strip()
        ]

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def email_enabled(self) -> bool:
        return bool(self.sendgrid_api_key)

    def validate_production_config(self) -> List[str]:
        """
        Validate configuration is suitable for production.

        Returns list of warning/error messages.
        """
        issues = []

        if self.is_production:
            if not self.hubhrms_graphql_url:
                issues.append("CRITICAL: HUBHRMS_GRAPHQL_URL required in production")
            if not self.hubhrms_api_key:
                issues.append("WARNING: HUBHRMS_API_KEY not configured")
            if not self.sendgrid_api_key:
                issues.append("WARNING: SENDGRID_API_KEY not configured, emails disabled")
            if any("localhost" in origin for origin in self.cors_origins_list):
                issues.append("WARNING: localhost CORS origins allowed in production")

        return issues


@lru_cache()
def get_settings() -> GatewaySettings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for the life of the process.
    """
    return GatewaySettings()


def validate_config_on_startup() -> GatewaySettings:
    """
    Validate configuration at application startup.

    Raises ValueError with details if config is invalid.
    Logs warnings for non-critical issues.
    """
    logger = logging.getLogger(__name__)

    try:
        settings = get_settings()
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}") from e

    for issue in settings.validate_production_config():
        if issue.startswith("CRITICAL"):
            raise ValueError(issue)
        logger.warning(issue)

    # Secrets are redacted
    logger.info(f"Configuration loaded: environment={settings.environment}")
    logger.info(f"  hubhrms_graphql_url={settings.hubhrms_graphql_url or '<unset>'}")
    logger.info(f"  hubhrms_api_key={'*****' if settings.hubhrms_api_key else '<unset>'}")
    logger.info(f"  s3_bucket={settings.aws_s3_bucket} ({settings.aws_region})")
    logger.info(f"  email_enabled={settings.email_enabled}")
    logger.info(f"  cors_origins={settings.cors_origins_list}")

    return settings
