"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the application.
"""

import logging
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Template engine
    template_syntax: Literal["mustache", "directive"] = Field(
        default="mustache",
        description="Template syntax preset: 'mustache' ({{x}}) or 'directive' (VAR(x)).",
    )
    unresolved_placeholders: Literal["keep", "blank"] = Field(
        default="keep",
        description="What to emit for placeholders without a value: keep them verbatim or blank them.",
    )

    # Catalog
    catalog_path: Path | None = Field(
        default=None,
        description="Optional JSON catalog overriding the bundled one.",
    )

    # Script assembly
    script_indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Spaces used to indent snippet lines inside the selection loop.",
    )
    include_comments: bool = Field(
        default=True,
        description="Prepend each generator's comment line to its snippet.",
    )
    include_helpers: bool = Field(
        default=True,
        description="Emit required JS helper functions above the selection loop.",
    )

    # Sessions
    max_sessions: int = Field(
        default=1000,
        ge=1,
        description="Maximum number of in-memory task queues before LRU eviction.",
    )

    # HTTP
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins.",
    )
    host: str = Field(default="0.0.0.0", description="Bind address for uvicorn.")
    port: int = Field(default=8000, description="Bind port for uvicorn.")

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )
    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory for info.log and error.log.",
    )

    @field_validator("log_dir")
    @classmethod
    def ensure_log_dir(cls, v: Path) -> Path:
        """Ensure log directory exists."""
        v.mkdir(parents=True, exist_ok=True)
        return v.resolve()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    def configure_logging(self) -> None:
        """Configure global logging based on settings."""
        import structlog

        level = getattr(logging, self.log_level, logging.INFO)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            level=level,
        )

        logger.setLevel(level)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global Settings instance.

    Returns:
        The singleton Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
