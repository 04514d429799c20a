"""SVG serialization for waterfall chart layouts."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from django.utils.html import escape

from analysis.layout import AxisSpec, BarGeometry, ChartLayout

SIGN_COLORS: Final[dict[str, str]] = {
    "positive": "#109618",
    "negative": "#DC3912",
}

TICK_SIZE: Final[int] = 6


def render_svg(
    layout: ChartLayout,
    *,
    element_id: str = "waterfall",
    bars: Iterable[BarGeometry] | None = None,
) -> str:
    """Serialize a ChartLayout into a standalone SVG document.

    Args:
        layout: ChartLayout produced by the layout engine.
        element_id: `id` attribute of the root `<svg>` element.
        bars: Optional bar override (used by the keyed surface); defaults to
            `layout.bars`.

    Returns:
        SVG markup as a string.
    """

    opacity = layout.config.solid_opacity
    rects = [_render_bar(bar, opacity=opacity) for bar in (layout.bars if bars is None else bars)]
    parts = [
        _svg_open(element_id=element_id, width=layout.viewport_width, height=layout.viewport_height),
        _style_block(),
        '<g class="barContainer">',
        *rects,
        "</g>",
        _render_axis(layout.category_axis, css_class="xAxis", extent=layout.plot_width),
        _render_axis(layout.value_axis, css_class="yAxis", extent=layout.plot_height),
        "</svg>",
    ]
    return "\n".join(parts)


def render_empty_svg(*, element_id: str = "waterfall") -> str:
    """Return the markup for a surface that has not received any layout yet."""

    return "\n".join(
        [
            _svg_open(element_id=element_id, width=0, height=0),
            _style_block(),
            '<g class="barContainer"></g>',
            '<g class="xAxis"></g>',
            '<g class="yAxis"></g>',
            "</svg>",
        ]
    )


def _svg_open(*, element_id: str, width: float, height: float) -> str:
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" class="barChart" id="{escape(element_id)}" '
        f'width="{_num(width)}" height="{_num(height)}">'
    )


def _style_block() -> str:
    rules = " ".join(f".bar.{sign} {{ fill: {color}; }}" for sign, color in SIGN_COLORS.items())
    return f"<style>{rules} .axis path, .axis line {{ fill: none; stroke: #000; }}</style>"


def _render_bar(bar: BarGeometry, *, opacity: float) -> str:
    return (
        f'<rect class="bar {escape(bar.css_class)}" data-category="{escape(bar.category)}" '
        f'x="{_num(bar.x)}" y="{_num(bar.y)}" width="{_num(bar.width)}" height="{_num(bar.height)}" '
        f'fill-opacity="{_num(opacity)}"/>'
    )


def _render_axis(axis: AxisSpec, *, css_class: str, extent: float) -> str:
    """Render an axis group with a domain path and one group per tick."""

    lines = [
        f'<g class="{css_class} axis" transform="{axis.transform}" style="font-size: {_num(axis.font_size)}px">'
    ]
    if axis.orientation == "bottom":
        lines.append(f'<path class="domain" d="M0,{TICK_SIZE}V0H{_num(extent)}V{TICK_SIZE}"/>')
        for tick in axis.ticks:
            lines.append(
                f'<g class="tick" transform="translate({_num(tick.position)},0)">'
                f'<line y2="{TICK_SIZE}" x2="0"/>'
                f'<text y="{TICK_SIZE + 3}" dy=".71em" text-anchor="middle">{escape(tick.label)}</text></g>'
            )
    else:
        lines.append(f'<path class="domain" d="M-{TICK_SIZE},0H0V{_num(extent)}H-{TICK_SIZE}"/>')
        for tick in axis.ticks:
            lines.append(
                f'<g class="tick" transform="translate(0,{_num(tick.position)})">'
                f'<line x2="-{TICK_SIZE}" y2="0"/>'
                f'<text x="-{TICK_SIZE + 3}" dy=".32em" text-anchor="end">{escape(tick.label)}</text></g>'
            )
    lines.append("</g>")
    return "".join(lines)


def _num(value: float) -> str:
    """Format a coordinate with at most 4 decimals and no trailing zeros."""

    text = f"{value:.4f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text
