"""Styling engine: choropleth and graduated styles over feature attributes.

The engine holds only immutable configuration (ramp table, tolerance and
the Jenks solver), so one instance can be shared freely between callers.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from cartostyle.core.config import StylingConfig
from cartostyle.core.types import ClassificationMethod
from cartostyle.styling.breaks import JenksSolver, calculate_breaks, ckmeans
from cartostyle.styling.errors import InvalidInputError, NoNumericDataError
from cartostyle.styling.models import (
    UNCLASSIFIED,
    ChoroplethStyle,
    ColorRamp,
    GraduatedStyle,
    Statistics,
)
from cartostyle.styling.ramps import COLOR_RAMPS, get_colors, load_color_ramps
from cartostyle.styling.sample import (
    Sample,
    as_finite,
    extract_values,
    iter_records,
    numeric_properties,
    summarize,
)

logger = logging.getLogger(__name__)


class StylingEngine:
    """Computes class breaks, colours and classifications for map layers."""

    def __init__(
        self,
        config: StylingConfig | None = None,
        ramps: Mapping[str, ColorRamp] | None = None,
        jenks_solver: JenksSolver = ckmeans,
    ) -> None:
        self._config = config or StylingConfig()
        if ramps is not None:
            self._ramps = ramps
        elif self._config.ramps_path:
            self._ramps = load_color_ramps(self._config.ramps_path)
        else:
            self._ramps = COLOR_RAMPS
        self._jenks_solver = jenks_solver

    @property
    def config(self) -> StylingConfig:
        return self._config

    def list_ramps(self) -> dict[str, ColorRamp]:
        return dict(self._ramps)

    def calculate_breaks(
        self,
        values: Sequence[float],
        num_classes: int,
        method: ClassificationMethod | str,
    ) -> list[float]:
        return calculate_breaks(values, num_classes, method, jenks_solver=self._jenks_solver)

    def get_colors(self, ramp_name: str, num_colors: int) -> list[str]:
        return get_colors(ramp_name, num_colors, ramps=self._ramps)

    def _require_values(self, sample: Sample, attribute: str, **context: Any) -> list[float]:
        records = list(iter_records(sample))
        values = extract_values(records, attribute)
        if not values:
            raise NoNumericDataError(
                f"No valid numeric values found for property: {attribute}",
                attribute=attribute,
                sample_size=len(records),
                **context,
            )
        return values

    def create_choropleth_style(
        self,
        sample: Sample,
        attribute: str,
        num_classes: int | None = None,
        method: ClassificationMethod | str | None = None,
        ramp_name: str | None = None,
    ) -> ChoroplethStyle:
        """Build a choropleth style for ``attribute``.

        Unset parameters take the configured defaults. Raises
        ``NoNumericDataError`` when the attribute has no finite numbers, and
        the errors of ``calculate_breaks`` / ``get_colors`` otherwise.
        """
        num_classes = num_classes if num_classes is not None else self._config.default_classes
        method = method or self._config.default_method
        ramp_name = ramp_name or self._config.default_ramp

        values = self._require_values(
            sample,
            attribute,
            method=str(method),
            ramp=ramp_name,
            num_classes=num_classes,
        )

        breaks = self.calculate_breaks(values, num_classes, method)
        colors = self.get_colors(ramp_name, num_classes)
        style = ChoroplethStyle(
            attribute=attribute,
            method=ClassificationMethod(method),
            classes=num_classes,
            ramp=ramp_name,
            breaks=tuple(breaks),
            colors=tuple(colors),
            min_value=min(values),
            max_value=max(values),
        )
        logger.debug(
            "Choropleth style for %r: %s, %d classes, breaks=%s",
            attribute,
            style.method.value,
            num_classes,
            breaks,
        )
        return style

    def create_graduated_style(
        self,
        sample: Sample,
        attribute: str,
        min_size: float | None = None,
        max_size: float | None = None,
    ) -> GraduatedStyle:
        """Build a graduated symbol style from the observed value range."""
        min_size = self._config.min_size if min_size is None else min_size
        max_size = self._config.max_size if max_size is None else max_size
        if min_size > max_size:
            raise InvalidInputError(
                "min_size must not exceed max_size",
                attribute=attribute,
                min_size=min_size,
                max_size=max_size,
            )

        values = self._require_values(sample, attribute)
        return GraduatedStyle(
            attribute=attribute,
            min_size=min_size,
            max_size=max_size,
            min_value=min(values),
            max_value=max(values),
        )

    def classify(self, value: Any, style: ChoroplethStyle) -> int:
        """Return the class index of ``value`` or ``UNCLASSIFIED``.

        The first class whose break the value is at or below wins. Values
        above every break but within the observed maximum land in the last
        class. Non-numeric, non-finite and out-of-range values are
        unclassified.
        """
        value = as_finite(value)
        if value is None or not style.breaks:
            return UNCLASSIFIED

        magnitude = max(1.0, abs(style.min_value), abs(style.max_value))
        tolerance = self._config.classify_tolerance * magnitude
        if value < style.min_value - tolerance or value > style.max_value + tolerance:
            return UNCLASSIFIED

        for index, upper in enumerate(style.breaks):
            if value <= upper:
                return min(index, style.classes - 1)
        return min(len(style.breaks), style.classes - 1)

    def color_for(self, value: Any, style: ChoroplethStyle) -> str:
        """Colour of the class ``value`` falls in, or the unclassified colour."""
        index = self.classify(value, style)
        if index == UNCLASSIFIED:
            return self._config.unclassified_color
        return style.colors[index]

    def describe_class(self, style: ChoroplethStyle, index: int) -> tuple[float, float]:
        """Value interval ``(lower, upper]`` covered by class ``index``.

        The first class is closed at the observed minimum.
        """
        if not 0 <= index < style.classes:
            raise InvalidInputError(
                f"Class index {index} out of range",
                attribute=style.attribute,
                num_classes=style.classes,
            )
        lower = style.min_value if index == 0 else style.breaks[min(index, len(style.breaks)) - 1]
        upper = style.breaks[index] if index < len(style.breaks) else style.max_value
        return lower, upper

    def get_statistics(self, sample: Sample, attribute: str) -> Statistics | None:
        """Statistics for ``attribute``, or None when it has no finite values."""
        return summarize(extract_values(sample, attribute))

    def numeric_properties(self, sample: Sample) -> list[str]:
        return numeric_properties(sample)

