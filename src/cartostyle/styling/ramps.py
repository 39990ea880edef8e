"""Colour ramp table and ramp sampling.

The built-in ramps are read once from ``data/color_ramps.yml`` when the
module is imported and exposed as a read-only mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

import yaml

from cartostyle.styling.errors import InvalidInputError, UnknownRampError
from cartostyle.styling.models import ColorRamp

_DEFAULT_RAMPS_PATH = Path(__file__).resolve().parent / "data" / "color_ramps.yml"


def load_color_ramps(path: str | Path | None = None) -> Mapping[str, ColorRamp]:
    """Load a ramp table from YAML.

    The file holds a top-level ``ramps`` mapping of key -> ``{name, colors}``.
    Raises ``ValueError`` for a malformed table.
    """
    ramps_path = Path(path) if path else _DEFAULT_RAMPS_PATH
    with open(ramps_path) as fh:
        raw = yaml.safe_load(fh) or {}

    entries = raw.get("ramps")
    if not isinstance(entries, dict) or not entries:
        raise ValueError(f"No ramps defined in {ramps_path}")

    ramps: dict[str, ColorRamp] = {}
    for key, entry in entries.items():
        key = str(key)
        ramps[key] = ColorRamp(
            key=key,
            name=entry.get("name", key),
            colors=tuple(entry.get("colors", [])),
        )
    return MappingProxyType(ramps)


COLOR_RAMPS: Mapping[str, ColorRamp] = load_color_ramps()


def sample_ramp(ramp: ColorRamp, num_colors: int) -> list[str]:
    """Pick ``num_colors`` colours from a ramp.

    When the ramp has enough stops the picks are spread evenly across it so
    the full range is represented. Otherwise the ramp is cycled, which repeats
    colours; no interpolation is performed.
    """
    if num_colors < 1:
        raise InvalidInputError(
            "Number of colours must be at least 1",
            ramp=ramp.key,
            num_colors=num_colors,
        )

    stops = len(ramp.colors)
    if num_colors <= stops:
        return [ramp.colors[i * stops // num_colors] for i in range(num_colors)]
    return [ramp.colors[i % stops] for i in range(num_colors)]


def get_colors(
    ramp_name: str,
    num_colors: int,
    ramps: Mapping[str, ColorRamp] | None = None,
) -> list[str]:
    """Return ``num_colors`` colours from the named ramp."""
    table = COLOR_RAMPS if ramps is None else ramps
    ramp = table.get(ramp_name)
    if ramp is None:
        raise UnknownRampError(
            f"Unknown color ramp: {ramp_name!r}",
            ramp=ramp_name,
            available=sorted(table),
        )
    return sample_ramp(ramp, num_colors)
