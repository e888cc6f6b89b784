"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApplicationSettings(BaseSettings):
    """Application metadata.

    Environment variables:
        BWADL_APP_NAME: Application name (default: Bwadl API)
        BWADL_APP_ENVIRONMENT: Deployment environment (default: development)
        BWADL_APP_DEBUG: Debug mode (default: false)
        BWADL_APP_LOG_LEVEL: Minimum log level (default: INFO)
        BWADL_APP_LOG_FORMAT: auto, console or json (default: auto)
    """

    model_config = SettingsConfigDict(
        env_prefix="BWADL_APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    name: str = Field(default="Bwadl API", description="Application name")
    environment: str = Field(
        default="development", description="Deployment environment"
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Minimum log level")
    log_format: Literal["auto", "console", "json"] = Field(
        default="auto", description="Log renderer"
    )

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


class CacheSettings(BaseSettings):
    """Response cache settings.

    Environment variables:
        BWADL_CACHE_PROVIDER: Cache provider (default: memory)
        BWADL_CACHE_DEFAULT_TTL_MINUTES: Entry lifetime in minutes (default: 15)
        BWADL_CACHE_MAX_ENTRIES: Maximum number of cached entries (default: 10000)
        BWADL_CACHE_KEY_PREFIX: Prefix prepended to every cache key (default: empty)
    """

    model_config = SettingsConfigDict(
        env_prefix="BWADL_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    provider: str = Field(default="memory", description="Cache provider")
    default_ttl_minutes: int = Field(
        default=15,
        description="Default entry lifetime in minutes",
        ge=1,
    )
    max_entries: int = Field(
        default=10_000,
        description="Maximum number of cached entries",
        ge=1,
    )
    key_prefix: str = Field(default="", description="Prefix for every cache key")


class ResiliencySettings(BaseSettings):
    """Retry policy for transient failures.

    Environment variables:
        BWADL_RESILIENCY_MAX_ATTEMPTS: Attempts including the first (default: 3)
        BWADL_RESILIENCY_BACKOFF_MULTIPLIER: Exponential backoff multiplier (default: 2.0)
        BWADL_RESILIENCY_BACKOFF_MIN_SECONDS: Minimum wait between attempts (default: 0)
        BWADL_RESILIENCY_BACKOFF_MAX_SECONDS: Maximum wait between attempts (default: 30)
    """

    model_config = SettingsConfigDict(
        env_prefix="BWADL_RESILIENCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_attempts: int = Field(
        default=3,
        description="Attempts including the first",
        ge=1,
        le=10,
    )
    backoff_multiplier: float = Field(
        default=2.0,
        description="Exponential backoff multiplier in seconds",
        ge=0,
    )
    backoff_min_seconds: float = Field(
        default=0.0,
        description="Minimum wait between attempts",
        ge=0,
    )
    backoff_max_seconds: float = Field(
        default=30.0,
        description="Maximum wait between attempts",
        ge=0,
    )

    @model_validator(mode="after")
    def validate_backoff_bounds(self) -> "ResiliencySettings":
        """Validate backoff max >= min."""
        if self.backoff_max_seconds < self.backoff_min_seconds:
            raise ValueError(
                f"backoff_max_seconds ({self.backoff_max_seconds}) must be >= "
                f"backoff_min_seconds ({self.backoff_min_seconds})"
            )
        return self


class FeatureSettings(BaseSettings):
    """Feature flags.

    Environment variables:
        BWADL_FEATURES_ENABLE_CACHING: Cache query results (default: true)
        BWADL_FEATURES_ENABLE_EMAIL_NOTIFICATIONS: Send welcome emails (default: true)
        BWADL_FEATURES_ENABLE_ANALYTICS: Analytics flag, reported only (default: false)
        BWADL_FEATURES_ENABLE_EVENT_DRIVEN_ARCHITECTURE: Publish domain events (default: true)
        BWADL_FEATURES_ENABLE_RATE_LIMITING: Rate limiting flag, reported only (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="BWADL_FEATURES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enable_caching: bool = Field(default=True, description="Cache query results")
    enable_email_notifications: bool = Field(
        default=True, description="Send welcome emails"
    )
    enable_analytics: bool = Field(default=False, description="Analytics flag")
    enable_event_driven_architecture: bool = Field(
        default=True, description="Subscribe domain event handlers"
    )
    enable_rate_limiting: bool = Field(
        default=False, description="Rate limiting flag"
    )


class MessageBusSettings(BaseSettings):
    """Message bus settings.

    Only the in-memory provider is implemented; the broker fields are
    reported by the configuration endpoints.

    Environment variables:
        BWADL_MESSAGE_BUS_PROVIDER: Bus provider (default: memory)
        BWADL_MESSAGE_BUS_HOST: Broker host (default: localhost)
        BWADL_MESSAGE_BUS_PORT: Broker port (default: 5672)
        BWADL_MESSAGE_BUS_VIRTUAL_HOST: Broker virtual host (default: /)
        BWADL_MESSAGE_BUS_USERNAME: Broker user (default: guest)
        BWADL_MESSAGE_BUS_EXCHANGE_NAME: Exchange name (default: bwadl.events)
        BWADL_MESSAGE_BUS_QUEUE_NAME: Queue name (default: bwadl.queue)
    """

    model_config = SettingsConfigDict(
        env_prefix="BWADL_MESSAGE_BUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    provider: str = Field(default="memory", description="Bus provider")
    host: str = Field(default="localhost", description="Broker host")
    port: int = Field(default=5672, description="Broker port", ge=1, le=65535)
    virtual_host: str = Field(default="/", description="Broker virtual host")
    username: str = Field(default="guest", description="Broker username")
    exchange_name: str = Field(default="bwadl.events", description="Exchange name")
    queue_name: str = Field(default="bwadl.queue", description="Queue name")


class SecuritySettings(BaseSettings):
    """Security settings.

    Authentication is not enforced; these values feed the secret manager and
    the configuration endpoints.

    Environment variables:
        BWADL_SECURITY_JWT_ISSUER: Token issuer (default: bwadl-api)
        BWADL_SECURITY_JWT_AUDIENCE: Token audience (default: bwadl-clients)
        BWADL_SECURITY_JWT_EXPIRY_MINUTES: Token lifetime (default: 60)
        BWADL_SECURITY_REQUIRE_API_KEY: API key flag, reported only (default: false)
        BWADL_SECURITY_SECRETS: JSON object of configured secrets (default: {})
    """

    model_config = SettingsConfigDict(
        env_prefix="BWADL_SECURITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_issuer: str = Field(default="bwadl-api", description="Token issuer")
    jwt_audience: str = Field(default="bwadl-clients", description="Token audience")
    jwt_expiry_minutes: int = Field(
        default=60, description="Token lifetime in minutes", ge=1
    )
    require_api_key: bool = Field(default=False, description="API key flag")
    secrets: dict[str, SecretStr] = Field(
        default_factory=dict,
        description="Configured secrets keyed by name",
    )


@lru_cache
def get_application_settings() -> ApplicationSettings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return ApplicationSettings()


@lru_cache
def get_cache_settings() -> CacheSettings:
    """Get cached cache settings."""
    return CacheSettings()


@lru_cache
def get_resiliency_settings() -> ResiliencySettings:
    """Get cached resiliency settings."""
    return ResiliencySettings()


@lru_cache
def get_feature_settings() -> FeatureSettings:
    """Get cached feature flags."""
    return FeatureSettings()


@lru_cache
def get_message_bus_settings() -> MessageBusSettings:
    """Get cached message bus settings."""
    return MessageBusSettings()


@lru_cache
def get_security_settings() -> SecuritySettings:
    """Get cached security settings."""
    return SecuritySettings()
