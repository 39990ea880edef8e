"""Thematic styling: class breaks, colour ramps and value classification."""

from cartostyle.styling.breaks import calculate_breaks, ckmeans
from cartostyle.styling.engine import StylingEngine
from cartostyle.styling.errors import (
    InvalidInputError,
    NoNumericDataError,
    StylingError,
    UnknownRampError,
)
from cartostyle.styling.models import (
    UNCLASSIFIED,
    ChoroplethStyle,
    ColorRamp,
    GraduatedStyle,
    Statistics,
)
from cartostyle.styling.ramps import COLOR_RAMPS, get_colors

__all__ = [
    "COLOR_RAMPS",
    "UNCLASSIFIED",
    "ChoroplethStyle",
    "ColorRamp",
    "GraduatedStyle",
    "InvalidInputError",
    "NoNumericDataError",
    "Statistics",
    "StylingEngine",
    "StylingError",
    "UnknownRampError",
    "calculate_breaks",
    "ckmeans",
    "get_colors",
]
