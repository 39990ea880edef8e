"""Core type definitions shared across Cartostyle modules."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ClassificationMethod(StrEnum):
    """Breakpoint algorithm used to split a numeric attribute into classes."""

    JENKS = "jenks"
    QUANTILE = "quantile"
    EQUAL_INTERVAL = "equal-interval"
    STANDARD_DEVIATION = "standard-deviation"


class HealthStatus(BaseModel):
    """Health check response for any service."""

    service: str
    healthy: bool
    details: dict[str, Any] = Field(default_factory=dict)
