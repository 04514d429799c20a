"""Waterfall view-model construction.

This module turns an ordered sequence of raw deltas into running start/end
positions. The computation is pure: input points are never mutated and a new
view model is returned on every call.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .dto import BarSign, DataPoint, WaterfallDataPoint, WaterfallViewModel

logger = logging.getLogger(__name__)


def data_points_from_pairs(pairs: Iterable[tuple[str, float]]) -> tuple[DataPoint, ...]:
    """Build DataPoint values from `(category, value)` pairs.

    Args:
        pairs: Iterable of category/value tuples in display order.

    Returns:
        A tuple of DataPoint values in the same order.
    """

    return tuple(DataPoint(category=category, value=value) for category, value in pairs)


def build_view_model(points: Iterable[DataPoint]) -> WaterfallViewModel:
    """Compute running starts/ends for a waterfall chart.

    Args:
        points: Raw data points in display order. May be empty.

    Returns:
        WaterfallViewModel with enriched points, `domain_max` set to the largest
        raw value (0 for an empty sequence) and `domain_min` fixed at 0.

    Notes:
        The final point is a grand total: its start is forced to 0 and its end to
        its own value, regardless of the accumulated running total. Non-finite
        values are not sanitized and propagate into the result.
    """

    raw = tuple(points)
    enriched: list[WaterfallDataPoint] = []
    running_total = 0.0
    for point in raw:
        start = running_total
        running_total += point.value
        enriched.append(
            WaterfallDataPoint(
                category=point.category,
                value=point.value,
                start=start,
                end=running_total,
                sign=BarSign.of(point.value),
            )
        )

    if enriched:
        last = enriched[-1]
        enriched[-1] = WaterfallDataPoint(
            category=last.category,
            value=last.value,
            start=0.0,
            end=last.value,
            sign=last.sign,
        )

    categories = [point.category for point in raw]
    if len(set(categories)) != len(categories):
        logger.debug("Waterfall input contains duplicate categories; bands will collide.")

    domain_max = max((point.value for point in raw), default=0.0)
    return WaterfallViewModel(points=tuple(enriched), domain_max=domain_max, domain_min=0.0)
