"""Configuration management for school insights."""

from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class InsightServiceConfig(BaseSettings):
    """Remote regional-insight and school directory endpoints."""
    model_config = SettingsConfigDict(
        env_prefix="INSIGHT_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    base_url: str = "http://localhost:8000"
    search_path: str = "/api/regional-education-search/"
    directory_path: str = "/api/administrator/schools_map/"
    api_token: Optional[str] = None
    request_timeout: Optional[float] = None
    enabled: bool = True

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v):
        """Validate base URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("INSIGHT_BASE_URL must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError("INSIGHT_REQUEST_TIMEOUT must be positive")
        return v

    @property
    def search_url(self) -> str:
        return f"{self.base_url}{self.search_path}"

    @property
    def directory_url(self) -> str:
        return f"{self.base_url}{self.directory_path}"


class ThresholdConfig(BaseSettings):
    """Alert thresholds and narrative benchmarks (product policy defaults)."""
    model_config = SettingsConfigDict(
        env_prefix="THRESHOLD_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    teacher_critical: float = 90.0
    teacher_warning: float = 95.0
    student_critical: float = 85.0
    student_warning: float = 90.0
    ratio_warning: int = 25
    ratio_critical: int = 30

    teacher_benchmark: float = 95.0
    student_benchmark: float = 93.0
    ratio_benchmark: int = 20

    @model_validator(mode="after")
    def validate_ordering(self):
        """Critical bands must sit outside warning bands."""
        if self.teacher_critical > self.teacher_warning:
            raise ValueError("THRESHOLD_TEACHER_CRITICAL must not exceed THRESHOLD_TEACHER_WARNING")
        if self.student_critical > self.student_warning:
            raise ValueError("THRESHOLD_STUDENT_CRITICAL must not exceed THRESHOLD_STUDENT_WARNING")
        if self.ratio_warning > self.ratio_critical:
            raise ValueError("THRESHOLD_RATIO_WARNING must not exceed THRESHOLD_RATIO_CRITICAL")
        return self

    def to_thresholds(self):
        """Build the immutable thresholds value used by the classifier."""
        from school_insights.alerts.classifier import AlertThresholds

        return AlertThresholds(**self.model_dump())


class AppConfig(BaseSettings):
    """Application configuration settings."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "school-insights"
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    default_locale: str = "en"
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {v!r}")
        return level


class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    insight: InsightServiceConfig = Field(default_factory=InsightServiceConfig)
    thresholds: ThresholdConfig = Field(default_factory=ThresholdConfig)
    app: AppConfig = Field(default_factory=AppConfig)

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment."""
        return cls()


# Global settings instance
settings = Settings.load()
