"""Reading numeric attribute samples out of feature collections."""

from __future__ import annotations

import math
import statistics
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from cartostyle.styling.errors import InvalidInputError
from cartostyle.styling.models import Statistics

# A GeoJSON FeatureCollection mapping, or any iterable of features / records
Sample = Mapping[str, Any] | Iterable[Mapping[str, Any]]

# Beyond this magnitude sums of values and squares can leave the float range
_SAFE_MAGNITUDE = 1e150


def _properties(record: Any) -> Mapping[str, Any] | None:
    if not isinstance(record, Mapping):
        return None
    if record.get("type") == "Feature":
        props = record.get("properties")
        return props if isinstance(props, Mapping) else None
    return record


def iter_records(sample: Sample) -> Iterable[Any]:
    """Yield the records of a FeatureCollection or a plain record iterable."""
    if isinstance(sample, Mapping):
        if sample.get("type") != "FeatureCollection":
            raise InvalidInputError(
                "Expected a FeatureCollection or an iterable of records",
                sample_type=str(sample.get("type")),
            )
        return sample.get("features") or []
    return sample


def as_finite(value: Any) -> float | None:
    """Return ``value`` as a float when it is a finite real number, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        value = float(value)
    except OverflowError:
        return None
    return value if math.isfinite(value) else None


def numeric_value(record: Any, attribute: str) -> float | None:
    """Return a record's attribute when it is a finite real number.

    Features are read through their ``properties``; plain mappings are read
    directly. Missing, null, boolean, string and non-finite values are
    treated as absent.
    """
    props = _properties(record)
    if props is None:
        return None
    return as_finite(props.get(attribute))


def extract_values(sample: Sample, attribute: str) -> list[float]:
    """Collect the finite numeric values of ``attribute`` in sample order."""
    values = []
    for record in iter_records(sample):
        value = numeric_value(record, attribute)
        if value is not None:
            values.append(value)
    return values


def numeric_properties(sample: Sample) -> list[str]:
    """Names of properties with at least one finite numeric value."""
    seen: dict[str, None] = {}
    for record in iter_records(sample):
        props = _properties(record)
        if props is None:
            continue
        for key in props:
            if key not in seen and as_finite(props[key]) is not None:
                seen[key] = None
    return list(seen)


def _scale(values: Sequence[float]) -> float:
    magnitude = max(abs(min(values)), abs(max(values)))
    return magnitude if magnitude > _SAFE_MAGNITUDE else 1.0


def mean_and_std_dev(values: Sequence[float]) -> tuple[float, float]:
    """Mean and population standard deviation of non-empty finite values.

    Values near the float limit are scaled down first so neither result
    overflows.
    """
    scale = _scale(values)
    scaled = values if scale == 1.0 else [v / scale for v in values]
    mean = statistics.fmean(scaled)
    return mean * scale, statistics.pstdev(scaled, mu=mean) * scale


def summarize(values: list[float]) -> Statistics | None:
    """Descriptive statistics for already-filtered values, or None if empty.

    Raises ``InvalidInputError`` when the sum itself is not representable.
    """
    if not values:
        return None
    scale = _scale(values)
    scaled = values if scale == 1.0 else [v / scale for v in values]
    total = math.fsum(scaled) * scale
    if not math.isfinite(total):
        raise InvalidInputError(
            "Sum of values exceeds the floating point range",
            sample_size=len(values),
        )
    mean, std_dev = mean_and_std_dev(values)
    median = statistics.median(scaled) * scale
    return Statistics(
        count=len(values),
        min=min(values),
        max=max(values),
        mean=mean,
        median=median,
        std_dev=std_dev,
        sum=total,
    )
