"""
Centralized Configuration Management for GhostWriter.

This module provides a single source of truth for all configuration,
eliminating hardcoded values and centralizing environment variables.

Usage:
    from ghostwriter.config import config
    model = config.models.GENERATION_MODEL
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_project_root() -> Path:
    """Get project root directory (works cross-platform)."""
    # This file is at ghostwriter/config.py, so parent.parent is project root
    return Path(__file__).resolve().parent.parent


class PathConfig(BaseModel):
    """Path configuration - all paths derived from PROJECT_ROOT."""
    PROJECT_ROOT: Path = Field(default_factory=_get_project_root)

    model_config = {"arbitrary_types_allowed": True}

    @computed_field
    @property
    def LOGS_DIR(self) -> Path:
        """Logs directory."""
        custom = os.getenv("GHOSTWRITER_LOGS_DIR")
        path = Path(custom) if custom else self.PROJECT_ROOT / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @computed_field
    @property
    def ENV_FILE(self) -> Path:
        """The .env file API keys are saved to and reloaded from."""
        return self.PROJECT_ROOT / ".env"


class APIConfig(BaseSettings):
    """API keys."""

    GOOGLE_API_KEY: Optional[str] = None
    GEMINI_API_KEY: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def resolve_key(self) -> Optional[str]:
        """Return the current Gemini key.

        The process environment wins over the values captured at startup,
        so a key selected while the app is running is picked up.
        """
        return (
            os.getenv("GOOGLE_API_KEY")
            or os.getenv("GEMINI_API_KEY")
            or self.GOOGLE_API_KEY
            or self.GEMINI_API_KEY
        )


class ModelConfig(BaseSettings):
    """Model selection configuration."""

    GENERATION_MODEL: str = "gemini-3-flash-preview"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class FormConfig(BaseModel):
    """Defaults and bounds for the article configuration form."""

    DEFAULT_AUDIENCE: str = "General Reader"
    DEFAULT_TONE: str = "Informative and Engaging"
    DEFAULT_WORD_COUNT: int = 800

    WORD_COUNT_MIN: int = 300
    WORD_COUNT_MAX: int = 2000
    WORD_COUNT_STEP: int = 100


class UIConfig(BaseModel):
    """Timings for the cosmetic progress indicator and copy feedback."""

    PLANNING_PHASE_SECONDS: float = 2.0
    COPY_FEEDBACK_SECONDS: float = 2.0
    POLL_INTERVAL_SECONDS: float = 0.25

    GENERIC_ERROR_MESSAGE: str = (
        "Failed to generate blog post. Please check your API key or try again."
    )


class GhostWriterConfig(BaseSettings):
    """Main configuration class combining all config sections."""

    paths: PathConfig = Field(default_factory=PathConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    models: ModelConfig = Field(default_factory=ModelConfig)
    form: FormConfig = Field(default_factory=FormConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    # Application metadata
    APP_NAME: str = "GhostWriter AI"
    ENVIRONMENT: str = Field(default="development", alias="GHOSTWRITER_ENV")
    LOG_LEVEL: str = Field(default="INFO", alias="GHOSTWRITER_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def validate(self) -> Dict[str, Any]:
        """Validate configuration and return status."""
        issues = []
        warnings = []

        if not self.api.resolve_key():
            warnings.append(
                "No Gemini API key set - set GOOGLE_API_KEY or GEMINI_API_KEY, "
                "or select one when prompted"
            )

        form = self.form
        if not (form.WORD_COUNT_MIN <= form.DEFAULT_WORD_COUNT <= form.WORD_COUNT_MAX):
            issues.append(
                f"DEFAULT_WORD_COUNT {form.DEFAULT_WORD_COUNT} outside "
                f"{form.WORD_COUNT_MIN}-{form.WORD_COUNT_MAX}"
            )
        if form.WORD_COUNT_STEP <= 0:
            issues.append("WORD_COUNT_STEP must be positive")

        if self.ui.PLANNING_PHASE_SECONDS < 0:
            issues.append("PLANNING_PHASE_SECONDS must not be negative")

        return {
            "valid": len(issues) == 0,
            "issues": issues,
            "warnings": warnings,
            "environment": self.ENVIRONMENT,
        }


# Singleton instance
config = GhostWriterConfig()
