"""Styling data models.

All models are frozen: a new styling request produces a new object and the
engine never mutates one after returning it.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, field_validator, model_validator

from cartostyle.core.types import ClassificationMethod

HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")

# Class index returned for values that fall outside a style
UNCLASSIFIED = -1


class ColorRamp(BaseModel):
    """A named, ordered palette used to encode quantitative classes."""

    model_config = {"frozen": True}

    key: str
    name: str
    colors: tuple[str, ...]

    @field_validator("colors")
    @classmethod
    def _check_colors(cls, colors: tuple[str, ...]) -> tuple[str, ...]:
        if not 5 <= len(colors) <= 10:
            raise ValueError(f"A colour ramp needs 5-10 stops, got {len(colors)}")
        for color in colors:
            if not HEX_COLOR.match(color):
                raise ValueError(f"Invalid hex colour {color!r}")
        return colors

    def __len__(self) -> int:
        return len(self.colors)


class ChoroplethStyle(BaseModel):
    """Class breaks and colours for an area-filled thematic layer."""

    model_config = {"frozen": True}

    attribute: str
    method: ClassificationMethod
    classes: int
    ramp: str
    breaks: tuple[float, ...]
    colors: tuple[str, ...]
    min_value: float
    max_value: float

    @model_validator(mode="after")
    def _check_invariants(self) -> ChoroplethStyle:
        if len(self.colors) != self.classes:
            raise ValueError(
                f"Expected {self.classes} colours, got {len(self.colors)}"
            )
        if any(a > b for a, b in zip(self.breaks, self.breaks[1:])):
            raise ValueError("Breaks must be non-decreasing")
        if self.min_value > self.max_value:
            raise ValueError("min_value must not exceed max_value")
        return self


class GraduatedStyle(BaseModel):
    """Linear mapping from attribute value to symbol size."""

    model_config = {"frozen": True}

    attribute: str
    min_size: float
    max_size: float
    min_value: float
    max_value: float

    @model_validator(mode="after")
    def _check_ranges(self) -> GraduatedStyle:
        if self.min_size > self.max_size:
            raise ValueError("min_size must not exceed max_size")
        if self.min_value > self.max_value:
            raise ValueError("min_value must not exceed max_value")
        return self

    def size_for(self, value: float) -> float:
        """Interpolate a symbol size, clamped to the configured range."""
        if self.max_value == self.min_value:
            return self.min_size
        ratio = (value - self.min_value) / (self.max_value - self.min_value)
        ratio = min(1.0, max(0.0, ratio))
        return self.min_size + ratio * (self.max_size - self.min_size)


class Statistics(BaseModel):
    """Descriptive statistics over the finite values of an attribute.

    ``std_dev`` is the population standard deviation.
    """

    model_config = {"frozen": True}

    count: int
    min: float
    max: float
    mean: float
    median: float
    std_dev: float
    sum: float
