"""Orchestration entry point for the waterfall pipeline.

The pipeline is a pure, non-Django module: it accepts in-memory inputs and
returns DTOs. The data sequence is always passed in explicitly.
"""

from __future__ import annotations

from collections.abc import Iterable

from .dto import DataPoint
from .layout import DEFAULT_LAYOUT_CONFIG, ChartLayout, LayoutConfig, layout_waterfall
from .waterfall import build_view_model


def analyze_waterfall(
    points: Iterable[DataPoint],
    *,
    viewport_width: float,
    viewport_height: float,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> ChartLayout:
    """Build the view model and lay it out for the current viewport.

    Args:
        points: Raw data points in display order.
        viewport_width: Total surface width in pixels.
        viewport_height: Total surface height in pixels.
        config: Layout configuration.

    Returns:
        ChartLayout ready to hand to a rendering surface.
    """

    view_model = build_view_model(points)
    return layout_waterfall(view_model, viewport_width, viewport_height, config)
