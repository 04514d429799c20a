"""Encoding/decoding helpers for waterfall update payloads.

Hosts submit updates as JSON-like dictionaries:

    {"viewport": {"width": 800, "height": 400},
     "data": [{"category": "Total", "value": 100}, ...]}

Decoding is strict and fails fast; the pure pipeline itself never validates.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from analysis.dto import DataPoint
from analysis.layout import AxisSpec, BarGeometry, ChartLayout


class PayloadError(ValueError):
    """Raised when a host payload is missing fields or has the wrong types."""


@dataclass(frozen=True, slots=True)
class WaterfallUpdate:
    """A decoded host update: viewport size plus the data sequence."""

    viewport_width: float
    viewport_height: float
    points: tuple[DataPoint, ...]


def decode_update_payload(payload: object, *, max_points: int | None = None) -> WaterfallUpdate:
    """Decode and validate a host update payload.

    Args:
        payload: Parsed JSON/YAML value.
        max_points: Optional upper bound on the number of data points.

    Returns:
        WaterfallUpdate with float-coerced values.

    Raises:
        PayloadError: When required fields are missing or invalid.
    """

    if not isinstance(payload, Mapping):
        raise PayloadError("Payload must be an object with 'viewport' and 'data'.")

    viewport = payload.get("viewport")
    if not isinstance(viewport, Mapping):
        raise PayloadError("Payload 'viewport' must be an object with 'width' and 'height'.")
    width = _parse_number(viewport.get("width"), field="viewport.width")
    height = _parse_number(viewport.get("height"), field="viewport.height")

    points = decode_data_points(payload.get("data"), max_points=max_points)
    return WaterfallUpdate(viewport_width=width, viewport_height=height, points=points)


def decode_data_points(raw: object, *, max_points: int | None = None) -> tuple[DataPoint, ...]:
    """Decode the `data` list of an update payload.

    Args:
        raw: A list of `{"category": str, "value": number}` mappings.
        max_points: Optional upper bound on the number of entries.

    Returns:
        A tuple of DataPoint values in input order.

    Raises:
        PayloadError: When the list or any entry is invalid.
    """

    if not isinstance(raw, list):
        raise PayloadError("Payload 'data' must be a list.")
    if max_points is not None and len(raw) > max_points:
        raise PayloadError(f"Too many data points ({len(raw)} > {max_points}).")

    points: list[DataPoint] = []
    for idx, entry in enumerate(raw):
        if not isinstance(entry, Mapping):
            raise PayloadError(f"data[{idx}] must be an object with 'category' and 'value'.")
        points.append(
            DataPoint(
                category=_parse_category(entry.get("category"), field=f"data[{idx}].category"),
                value=_parse_number(entry.get("value"), field=f"data[{idx}].value"),
            )
        )
    return tuple(points)


def encode_chart_layout(layout: ChartLayout) -> dict[str, Any]:
    """Encode a ChartLayout into a JSON-serializable dictionary.

    Args:
        layout: ChartLayout returned by the layout engine.

    Returns:
        Dict payload. Non-finite floats are encoded as None.
    """

    return {
        "viewport": {"width": _encode_float(layout.viewport_width), "height": _encode_float(layout.viewport_height)},
        "plot": {"width": _encode_float(layout.plot_width), "height": _encode_float(layout.plot_height)},
        "value_domain": [_encode_float(v) for v in layout.value_scale.domain],
        "categories": list(layout.category_scale.domain),
        "bandwidth": _encode_float(layout.category_scale.bandwidth),
        "bars": [_encode_bar(bar) for bar in layout.bars],
        "axes": {
            "category": _encode_axis(layout.category_axis),
            "value": _encode_axis(layout.value_axis),
        },
    }


def _encode_bar(bar: BarGeometry) -> dict[str, Any]:
    return {
        "category": bar.category,
        "x": _encode_float(bar.x),
        "y": _encode_float(bar.y),
        "width": _encode_float(bar.width),
        "height": _encode_float(bar.height),
        "class": bar.css_class,
    }


def _encode_axis(axis: AxisSpec) -> dict[str, Any]:
    return {
        "orientation": axis.orientation,
        "transform": axis.transform,
        "font_size": _encode_float(axis.font_size),
        "ticks": [
            {
                "value": tick.value if isinstance(tick.value, str) else _encode_float(tick.value),
                "label": tick.label,
                "position": _encode_float(tick.position),
            }
            for tick in axis.ticks
        ],
    }


def _encode_float(value: float) -> float | None:
    """Encode a float for JSON, mapping NaN/Infinity to None."""

    if not math.isfinite(value):
        return None
    return float(value)


def _parse_number(value: object, *, field: str) -> float:
    """Strict float parsing; numeric strings are accepted, booleans are not."""

    if isinstance(value, bool) or value is None:
        raise PayloadError(f"{field} must be a number.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise PayloadError(f"{field} must be a number, got {value!r}.") from None
    raise PayloadError(f"{field} must be a number.")


def _parse_category(value: object, *, field: str) -> str:
    """Category labels must be strings; plain integers are accepted as labels."""

    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise PayloadError(f"{field} must be a string.")
