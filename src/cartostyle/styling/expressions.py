"""Convert styles into MapLibre style expressions.

The ``case`` expression mirrors ``StylingEngine.classify``: values that are
not numbers or fall outside the observed range get the default colour, and
each class covers values at or below its break.
"""

from __future__ import annotations

from typing import Any

from cartostyle.styling.models import ChoroplethStyle, GraduatedStyle

DEFAULT_COLOR = "#cccccc"


def choropleth_to_expression(
    style: ChoroplethStyle,
    default_color: str = DEFAULT_COLOR,
) -> list[Any]:
    getter = ["get", style.attribute]
    expression: list[Any] = [
        "case",
        ["!=", ["typeof", getter], "number"],
        default_color,
        ["<", getter, style.min_value],
        default_color,
    ]

    for index, upper in enumerate(style.breaks):
        expression.append(["<=", getter, upper])
        expression.append(style.colors[min(index, style.classes - 1)])

    # Catch-all class when the breaks stop short of the maximum
    if style.breaks and style.breaks[-1] < style.max_value:
        expression.append(["<=", getter, style.max_value])
        expression.append(style.colors[min(len(style.breaks), style.classes - 1)])

    expression.append(default_color)
    return expression


def graduated_to_expression(style: GraduatedStyle) -> list[Any] | float:
    """Linear size interpolation between the observed extremes.

    ``interpolate`` needs strictly ascending stops, so a single-valued
    attribute yields the constant minimum size.
    """
    if style.max_value <= style.min_value:
        return style.min_size
    return [
        "interpolate",
        ["linear"],
        ["get", style.attribute],
        style.min_value,
        style.min_size,
        style.max_value,
        style.max_size,
    ]
