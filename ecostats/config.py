"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Abundance Table Parameters
    include_zero_counts: bool = Field(
        default=False,
        description="Keep species recorded with a count of 0 in abundance tables"
    )

    # Species-Area Parameters
    default_curve_model: str = Field(
        default="power",
        description="Species-area model used when a request does not name one (power, logarithmic)"
    )
    nested_plot_sizes: list[float] = Field(
        default=[25.0, 100.0, 400.0, 1600.0],
        description="Standard nested plot areas in m² (5x5m, 10x10m, 20x20m, 40x40m)"
    )

    # Canopy Coverage Parameters
    canopy_confidence_level: float = Field(
        default=0.95,
        description="Confidence level for canopy coverage bounds"
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
        default="Ecostats Biodiversity Analysis Engine",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
