"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from typing import List

from pydantic import Field, field_validator, ConfigDict
from pydantic_settings import BaseSettings

from pumpfoil.shared.constants import (
    DEFAULT_MIN_SPEED_THRESHOLD_KMH,
    DEFAULT_MIN_RUN_DURATION_S,
    DEFAULT_MIN_STOP_DURATION_S,
    DEFAULT_SPEED_SMOOTHING_WINDOW,
)
from pumpfoil.features.detection.types import DetectionConfig


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Uploads ===
    max_upload_mb: int = Field(default=20, gt=0, description="Max GPX upload size")

    # === Detection defaults ===
    default_min_speed_threshold: float = Field(
        default=DEFAULT_MIN_SPEED_THRESHOLD_KMH, gt=0,
        description="Pumping threshold, km/h"
    )
    default_min_run_duration: float = Field(
        default=DEFAULT_MIN_RUN_DURATION_S, gt=0,
        description="Shortest run, seconds"
    )
    default_min_stop_duration: float = Field(
        default=DEFAULT_MIN_STOP_DURATION_S, gt=0,
        description="Shortest dip that splits runs, seconds"
    )
    default_speed_smoothing_window: int = Field(
        default=DEFAULT_SPEED_SMOOTHING_WINDOW, ge=1,
        description="Moving average window, samples"
    )

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept 'debug', 'Info', etc."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def detection_config(self) -> DetectionConfig:
        """Default detection parameters."""
        return DetectionConfig(
            min_speed_threshold=self.default_min_speed_threshold,
            min_run_duration=self.default_min_run_duration,
            min_stop_duration=self.default_min_stop_duration,
            speed_smoothing_window=self.default_speed_smoothing_window,
        )

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PUMPFOIL_",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
