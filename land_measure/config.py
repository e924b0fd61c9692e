"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Geodesy
    earth_radius_m: float = Field(
        default=6378137.0,
        description="Sphere radius in meters shared by area and distance calculations"
    )

    # History
    history_limit: int = Field(
        default=10,
        description="Maximum number of records returned by the history endpoint"
    )

    # Measurement Store Configuration
    store_backend: str = Field(
        default="memory",
        description="Measurement store implementation (memory, sql)"
    )
    database_url: str = Field(
        default="sqlite:///./measurements.db",
        description="SQLAlchemy database URL used by the sql store"
    )
    store_connect_attempts: int = Field(
        default=3,
        description="Maximum number of attempts to connect to the store at startup"
    )
    store_connect_min_wait: int = Field(
        default=1,
        description="Minimum wait time in seconds between connection attempts"
    )
    store_connect_max_wait: int = Field(
        default=10,
        description="Maximum wait time in seconds between connection attempts"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Land Measure API",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
