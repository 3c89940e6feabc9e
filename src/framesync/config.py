"""Configuration management for framesync."""

from pydantic import Field
from pydantic_settings import BaseSettings

from .types import FrameSeekRequest, LogLevel, LogOptions


class Settings(BaseSettings):
    """Frame seek settings."""

    # Waiting
    timeout_ms: int = Field(default=30_000, description="How long the page may take to signal readiness")
    evaluate_timeout_seconds: float = Field(default=5.0, description="Bound for single remote evaluations")

    # Logging Configuration
    log_level: str = Field(default="info", description="One of verbose, info, warn, error")
    indent: bool = Field(default=False, description="Indent log output under a parent task")

    class Config:
        """Pydantic configuration."""

        env_prefix = "FRAMESYNC_"
        case_sensitive = False
        env_file = ".env"
        env_file_encoding = "utf-8"

    def log_options(self) -> LogOptions:
        return LogOptions(indent=self.indent, log_level=LogLevel.parse(self.log_level))

    def request(self, frame: int, composition: str) -> FrameSeekRequest:
        """Build a seek request for one frame using the configured bounds."""
        options = self.log_options()
        return FrameSeekRequest(
            frame=frame,
            composition=composition,
            timeout_ms=self.timeout_ms,
            indent=options.indent,
            log_level=options.log_level,
        )


def get_settings() -> Settings:
    """Get application settings.

    Returns:
        Settings instance
    """
    return Settings()
