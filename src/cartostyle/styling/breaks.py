"""Class break algorithms.

All functions are pure and deterministic. ``calculate_breaks`` is the entry
point; it validates and filters the sample and dispatches on the method.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Sequence

from cartostyle.core.types import ClassificationMethod
from cartostyle.styling.errors import InvalidInputError
from cartostyle.styling.sample import as_finite, mean_and_std_dev

logger = logging.getLogger(__name__)

# Takes sorted values and a class count, returns the groups of the partition
JenksSolver = Callable[[Sequence[float], int], list[list[float]]]


def finite_values(values: Iterable[float]) -> list[float]:
    """Drop NaN, +/-Infinity and anything that is not a real number."""
    finite = (as_finite(v) for v in values)
    return [v for v in finite if v is not None]


# ---------------------------------------------------------------------------
# Optimal 1-D k-means (Fisher-Jenks)
# ---------------------------------------------------------------------------


def ckmeans(sorted_values: Sequence[float], num_classes: int) -> list[list[float]]:
    """Partition sorted values into ``num_classes`` contiguous groups.

    Minimises the total within-group sum of squared deviations. Uses the
    dynamic programme D[k][i] = min_j D[k-1][j-1] + ssq(j, i), filling each
    row by divide and conquer over the monotone optimal split index, which
    gives O(k * n log n) time and O(k * n) memory.

    Requires ``1 <= num_classes <= len(sorted_values)``.
    """
    n = len(sorted_values)
    if not 1 <= num_classes <= n:
        raise ValueError(f"Cannot split {n} values into {num_classes} groups")

    # Centre on the mean to limit cancellation in the prefix sums
    shift = math.fsum(sorted_values) / n
    sums = [0.0] * (n + 1)
    sums_sq = [0.0] * (n + 1)
    for idx, value in enumerate(sorted_values):
        centred = value - shift
        sums[idx + 1] = sums[idx] + centred
        sums_sq[idx + 1] = sums_sq[idx] + centred * centred

    def ssq(j: int, i: int) -> float:
        """Within-group sum of squares of sorted_values[j..i] inclusive."""
        count = i - j + 1
        total = sums[i + 1] - sums[j]
        result = sums_sq[i + 1] - sums_sq[j] - total * total / count
        return result if result > 0.0 else 0.0

    cost = [[0.0] * n for _ in range(num_classes)]
    split = [[0] * n for _ in range(num_classes)]
    for i in range(n):
        cost[0][i] = ssq(0, i)

    for k in range(1, num_classes):
        prev = cost[k - 1]
        row = cost[k]
        row_split = split[k]
        # Each entry of `pending` is (i_lo, i_hi, j_lo, j_hi)
        pending = [(k, n - 1, k, n - 1)]
        while pending:
            i_lo, i_hi, j_lo, j_hi = pending.pop()
            if i_lo > i_hi:
                continue
            i = (i_lo + i_hi) // 2
            best_cost = math.inf
            best_j = j_lo
            for j in range(j_lo, min(i, j_hi) + 1):
                candidate = prev[j - 1] + ssq(j, i)
                if candidate < best_cost:
                    best_cost = candidate
                    best_j = j
            row[i] = best_cost
            row_split[i] = best_j
            pending.append((i_lo, i - 1, j_lo, best_j))
            pending.append((i + 1, i_hi, best_j, j_hi))

    groups: list[list[float]] = []
    right = n - 1
    for k in range(num_classes - 1, -1, -1):
        left = split[k][right] if k > 0 else 0
        groups.append(list(sorted_values[left:right + 1]))
        right = left - 1
    groups.reverse()
    return groups


# ---------------------------------------------------------------------------
# Break methods (inputs already filtered and non-empty)
# ---------------------------------------------------------------------------


def quantile_breaks(values: Sequence[float], num_classes: int) -> list[float]:
    """Breaks at the ceiling-indexed i/k quantile positions."""
    ordered = sorted(values)
    n = len(ordered)
    breaks = []
    for i in range(1, num_classes + 1):
        index = -(-n * i // num_classes) - 1
        breaks.append(ordered[min(index, n - 1)])
    return breaks


def equal_interval_breaks(values: Sequence[float], num_classes: int) -> list[float]:
    """Breaks spanning equal numeric ranges between min and max."""
    low = min(values)
    high = max(values)
    span = high - low
    if math.isfinite(span):
        interval = span / num_classes
        breaks = [low + interval * i for i in range(1, num_classes)]
    else:
        # The range overflows; weight the scaled extremes instead
        breaks = [
            low / num_classes * (num_classes - i) + high / num_classes * i
            for i in range(1, num_classes)
        ]
    breaks.append(high)
    return breaks


def standard_deviation_breaks(values: Sequence[float], num_classes: int) -> list[float]:
    """Breaks at whole standard deviations around the mean.

    Only the steps that land inside the data range are kept, so fewer than
    ``num_classes`` breaks may come back.
    """
    low = min(values)
    high = max(values)
    mean, std_dev = mean_and_std_dev(values)
    # Rounding can push the mean of identical values just outside the range
    mean = min(max(mean, low), high)
    half = (num_classes - 1) // 2
    candidates = {mean + step * std_dev for step in range(-half, half + 1)}
    return sorted(b for b in candidates if low <= b <= high)


def jenks_breaks(
    values: Sequence[float],
    num_classes: int,
    solver: JenksSolver = ckmeans,
) -> list[float]:
    """Natural breaks: the maximum of each optimal k-means group.

    With no more distinct values than classes the distinct values are
    returned as-is. If the solver fails the quantile breaks are used instead.
    """
    ordered = sorted(values)
    distinct = sorted(set(ordered))
    if num_classes >= len(distinct):
        return distinct

    try:
        groups = solver(ordered, num_classes)
        breaks = [max(group) for group in groups]
    except Exception as exc:
        logger.warning(
            "Jenks calculation failed for %d values in %d classes, falling back to quantile: %s",
            len(ordered),
            num_classes,
            exc,
            extra={
                "event": "jenks_fallback",
                "method": ClassificationMethod.JENKS.value,
                "fallback": ClassificationMethod.QUANTILE.value,
                "num_classes": num_classes,
                "sample_size": len(ordered),
                "error": repr(exc),
            },
        )
        return quantile_breaks(ordered, num_classes)
    return breaks


_METHODS: dict[ClassificationMethod, Callable[[Sequence[float], int], list[float]]] = {
    ClassificationMethod.QUANTILE: quantile_breaks,
    ClassificationMethod.EQUAL_INTERVAL: equal_interval_breaks,
    ClassificationMethod.STANDARD_DEVIATION: standard_deviation_breaks,
}


def calculate_breaks(
    values: Sequence[float],
    num_classes: int,
    method: ClassificationMethod | str,
    jenks_solver: JenksSolver = ckmeans,
) -> list[float]:
    """Compute ascending class breaks for a sample.

    Non-finite values are dropped before any computation. Raises
    ``InvalidInputError`` for an empty sample, fewer than two classes, an
    unknown method, or a sample with no finite values.
    """
    values = list(values)
    if not values:
        raise InvalidInputError(
            "Cannot calculate breaks for empty array",
            method=str(method),
            num_classes=num_classes,
            sample_size=0,
        )

    if num_classes < 2:
        raise InvalidInputError(
            "Number of classes must be at least 2",
            method=str(method),
            num_classes=num_classes,
            sample_size=len(values),
        )

    try:
        method = ClassificationMethod(method)
    except ValueError:
        raise InvalidInputError(
            f"Unknown classification method: {method!r}",
            method=str(method),
            available=[m.value for m in ClassificationMethod],
        ) from None

    clean = finite_values(values)
    if not clean:
        raise InvalidInputError(
            "No finite values in array",
            method=method.value,
            num_classes=num_classes,
            sample_size=len(values),
        )

    if method is ClassificationMethod.JENKS:
        return jenks_breaks(clean, num_classes, solver=jenks_solver)
    return _METHODS[method](clean, num_classes)
