"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Ward dataset
    ward_boundaries_path: str = Field(
        default="./data/ward-boundaries.geojson",
        description="Path to the GeoJSON FeatureCollection of ward boundary polygons",
    )
    ward_zones_path: str = Field(
        default="./data/ward-zones.json",
        description="Path to the JSON array of ward names (ward N at index N-1)",
    )
    ward_number_property: str = Field(
        default="Name",
        min_length=1,
        description="Feature property holding the ward number",
    )
    invalid_feature_policy: Literal["fail", "skip"] = Field(
        default="fail",
        description="How malformed ward features are handled at load: fail the load or skip with a warning",
    )
    check_ward_overlaps: bool = Field(
        default=False,
        description="Run the overlapping-ward data quality pass at startup",
    )

    # Photo uploads
    max_photo_size_mb: int = Field(
        default=10,
        description="Maximum photo size accepted for EXIF location extraction, in megabytes",
        gt=0,
    )

    @property
    def max_photo_size_bytes(self) -> int:
        """Maximum photo size in bytes."""
        return self.max_photo_size_mb * 1024 * 1024

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            msg = f"Invalid log_level: must be one of {', '.join(sorted(allowed))}"
            raise ValueError(msg)
        return v.upper()

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins (must be explicitly configured)",
    )
    cors_origin_regex: str = Field(
        default="",
        description="Regex pattern for allowed CORS origins",
    )

    # Environment
    environment: str = Field(
        default="production",
        description="Deployment environment name (e.g. production, dev, staging)",
    )

    # API
    api_v1_prefix: str = Field(
        default="/api/v1",
        description="API version prefix",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
