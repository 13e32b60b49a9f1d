# src/config/settings.py - v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for store defaults, relationship policy, export
options and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Store defaults ===
    default_entity_confidence: float = 1.0
    default_relationship_confidence: float = 0.5
    default_relationship_weight: float = 1.0

    # === Relationship policy ===
    allow_self_relationships: bool = True
    allow_duplicate_relationships: bool = True

    # === Attachments ===
    image_extensions: str = "jpg,jpeg,png,gif,bmp,webp"

    # === Export ===
    graph_export_formats: str = "json,csv,graphml"
    csv_tag_separator: str = ";"
    export_project_name: str = "Exported Data"

    # === Project files ===
    project_format_version: str = "1.0.0"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("log_retention")
    @classmethod
    def validate_log_retention(cls, v: int) -> int:
        if v < 0:
            raise ValueError("log_retention must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        for name in ("default_entity_confidence", "default_relationship_confidence"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                errors.append(f"{name.upper()} must be within [0, 1]")

        sep = self.csv_tag_separator
        if len(sep) != 1 or sep in {",", '"', "\n", "\r"}:
            errors.append(
                "CSV_TAG_SEPARATOR must be a single character other than "
                "comma, quote or newline"
            )

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def graph_export_formats_list(self) -> list[str]:
        """Parse comma-separated graph export formats."""
        return [f.strip().lower() for f in self.graph_export_formats.split(",") if f.strip()]

    @property
    def image_extensions_set(self) -> frozenset[str]:
        """Parse comma-separated image extensions (lower-cased, no dots)."""
        return frozenset(
            e.strip().lstrip(".").lower()
            for e in self.image_extensions.split(",")
            if e.strip()
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or embedding).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
