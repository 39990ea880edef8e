"""Shared test fixtures."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from cartostyle.core.config import StylingConfig
from cartostyle.styling.engine import StylingEngine


def _feature_collection(attribute: str, values: list[Any]) -> dict[str, Any]:
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [float(i), 0.0]},
                "properties": {"id": i, attribute: value},
            }
            for i, value in enumerate(values)
        ],
    }


@pytest.fixture
def make_collection() -> Callable[[str, list[Any]], dict[str, Any]]:
    """Factory for point FeatureCollections carrying one styled attribute."""
    return _feature_collection


@pytest.fixture
def engine() -> StylingEngine:
    return StylingEngine(config=StylingConfig())
