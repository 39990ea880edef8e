"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from cartostyle.core.types import ClassificationMethod


class StylingConfig(BaseSettings):
    """Thematic styling defaults."""

    model_config = {"env_prefix": "CARTOSTYLE_STYLING_"}

    default_method: ClassificationMethod = ClassificationMethod.JENKS
    default_classes: int = 5
    default_ramp: str = "blues"
    min_size: float = 3.0
    max_size: float = 20.0
    unclassified_color: str = "#cccccc"
    # Relative to the magnitude of the style's value range
    classify_tolerance: float = 1e-9
    ramps_path: str | None = None


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "CARTOSTYLE_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    styling: StylingConfig = Field(default_factory=StylingConfig)
