"""Styling API router for the map style panel."""

from __future__ import annotations

import math
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from cartostyle.core.types import ClassificationMethod
from cartostyle.styling.engine import StylingEngine
from cartostyle.styling.errors import StylingError
from cartostyle.styling.expressions import choropleth_to_expression, graduated_to_expression
from cartostyle.styling.models import UNCLASSIFIED, ChoroplethStyle


router = APIRouter()


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class BreaksRequest(BaseModel):
    """Raw values to classify; ``null`` stands for a non-finite value."""

    values: list[float | None]
    num_classes: int = 5
    method: ClassificationMethod = ClassificationMethod.JENKS


class SampleRequest(BaseModel):
    """A GeoJSON FeatureCollection or a list of features / plain records."""

    features: dict[str, Any] | list[dict[str, Any]]


class AttributeRequest(SampleRequest):
    attribute: str


class ChoroplethRequest(AttributeRequest):
    num_classes: int | None = None
    method: ClassificationMethod | None = None
    ramp: str | None = None


class GraduatedRequest(AttributeRequest):
    min_size: float | None = None
    max_size: float | None = None


class ClassifyRequest(BaseModel):
    value: float | None = None
    style: ChoroplethStyle


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_styling_engine(request: Request) -> StylingEngine:
    engine = getattr(request.app.state, "styling_engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Styling engine not available")
    return engine


def _bad_request(exc: StylingError) -> HTTPException:
    return HTTPException(status_code=400, detail=exc.to_dict())


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/api/styling/ramps")
async def api_list_ramps(request: Request) -> dict[str, Any]:
    """List all colour ramps."""
    engine = _get_styling_engine(request)
    return {
        key: ramp.model_dump(mode="json")
        for key, ramp in engine.list_ramps().items()
    }


@router.get("/api/styling/ramps/{name}")
async def api_get_ramp_colors(name: str, request: Request, count: int | None = None) -> list[str]:
    """Sample ``count`` colours from a ramp (all stops when omitted)."""
    engine = _get_styling_engine(request)
    ramps = engine.list_ramps()
    if name not in ramps:
        raise HTTPException(status_code=404, detail=f"Unknown color ramp: {name!r}")
    try:
        return engine.get_colors(name, count if count is not None else len(ramps[name]))
    except StylingError as e:
        raise _bad_request(e)


@router.post("/api/styling/breaks")
async def api_calculate_breaks(body: BreaksRequest, request: Request) -> dict[str, Any]:
    """Compute class breaks for a list of values."""
    engine = _get_styling_engine(request)
    values = [math.nan if v is None else v for v in body.values]
    try:
        breaks = engine.calculate_breaks(values, body.num_classes, body.method)
    except StylingError as e:
        raise _bad_request(e)
    return {"method": body.method.value, "num_classes": body.num_classes, "breaks": breaks}


@router.post("/api/styling/choropleth")
async def api_choropleth_style(body: ChoroplethRequest, request: Request) -> dict[str, Any]:
    """Build a choropleth style and its MapLibre fill-color expression."""
    engine = _get_styling_engine(request)
    try:
        style = engine.create_choropleth_style(
            body.features,
            body.attribute,
            num_classes=body.num_classes,
            method=body.method,
            ramp_name=body.ramp,
        )
    except StylingError as e:
        raise _bad_request(e)
    return {
        "style": style.model_dump(mode="json"),
        "expression": choropleth_to_expression(style, engine.config.unclassified_color),
    }


@router.post("/api/styling/graduated")
async def api_graduated_style(body: GraduatedRequest, request: Request) -> dict[str, Any]:
    """Build a graduated symbol style and its MapLibre radius expression."""
    engine = _get_styling_engine(request)
    try:
        style = engine.create_graduated_style(
            body.features,
            body.attribute,
            min_size=body.min_size,
            max_size=body.max_size,
        )
    except StylingError as e:
        raise _bad_request(e)
    return {
        "style": style.model_dump(mode="json"),
        "expression": graduated_to_expression(style),
    }


@router.post("/api/styling/statistics")
async def api_statistics(body: AttributeRequest, request: Request) -> dict[str, Any] | None:
    """Descriptive statistics, or null when the attribute has no numbers."""
    engine = _get_styling_engine(request)
    try:
        stats = engine.get_statistics(body.features, body.attribute)
    except StylingError as e:
        raise _bad_request(e)
    return stats.model_dump(mode="json") if stats is not None else None


@router.post("/api/styling/properties")
async def api_numeric_properties(body: SampleRequest, request: Request) -> list[str]:
    """Property names usable for thematic styling."""
    engine = _get_styling_engine(request)
    try:
        return engine.numeric_properties(body.features)
    except StylingError as e:
        raise _bad_request(e)


@router.post("/api/styling/classify")
async def api_classify(body: ClassifyRequest, request: Request) -> dict[str, Any]:
    """Classify one value against a previously computed style."""
    engine = _get_styling_engine(request)
    index = engine.classify(body.value, body.style)
    return {
        "class_index": index,
        "unclassified": index == UNCLASSIFIED,
        "color": engine.color_for(body.value, body.style),
    }
