"""
ViewModel Export Configuration

Centralized configuration management using pydantic-settings.
All environment variables use the VIEWMODEL_EXPORT_ prefix.

Usage:
    from viewmodel_export.config import get_settings

    settings = get_settings()
    settings.output_basename   # "SharedModels"
    settings.type_overrides    # {"DateTime": "string"}

Environment example:
    VIEWMODEL_EXPORT_STRICT_REFERENCES=true
    VIEWMODEL_EXPORT_TYPE_OVERRIDES='{"DateTime": "string"}'
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Groups:
        logging     log_level, log_format
        output      output_basename, interface_prefix, indent
        resolution  strict_references, ambient_types
        projection  type_overrides
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VIEWMODEL_EXPORT_",
        extra="ignore",
    )

    # ========================================================================
    # Logging
    # ========================================================================

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["console", "json"] = Field(default="console", description="Log renderer")

    # ========================================================================
    # Output
    # ========================================================================

    output_basename: str = Field(default="SharedModels", description="Output file name without extension")
    interface_prefix: str = Field(default="I", description="Prefix marking generated interface names")
    indent: str = Field(default="    ", description="Member indentation inside declarations")

    # ========================================================================
    # Resolution
    # ========================================================================

    strict_references: bool = Field(
        default=False,
        description="Treat references to unknown types as compilation errors instead of warnings",
    )
    ambient_types: list[str] = Field(
        default_factory=list,
        description="Extra external type names that resolve without a warning",
    )

    # ========================================================================
    # Projection
    # ========================================================================

    type_overrides: dict[str, str] = Field(
        default_factory=dict,
        description="Simple source type name -> literal TypeScript type",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("output_basename")
    @classmethod
    def _check_basename(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("output_basename must not be empty")
        return value.strip()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get process-wide settings instance"""
    return Settings()
