"""Scale construction and bar geometry for waterfall charts.

`layout_waterfall` is stateless: it derives both scales and every bar from the
view model and the current viewport on each call. Margins reserve space for the
axes before the plot area is computed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

from .dto import WaterfallViewModel
from .scales import BandScale, LinearScale

AxisOrientation = Literal["bottom", "left"]


@dataclass(frozen=True, slots=True)
class Margins:
    """Pixel insets around the plot area."""

    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """Static layout configuration.

    Args:
        x_scale_padding: Gap between category bands as a fraction of band width.
        solid_opacity: Opacity for bars in their normal state.
        transparent_opacity: Opacity for de-emphasized bars.
        margins: Insets reserved for axes. The right margin is carried but not
            subtracted from the plot width.
        font_multiplier: Axis font size as a fraction of the smaller plot side.
        value_axis_offset: Horizontal translation of the value axis. This is a
            fixed offset rather than `margins.left`.
        tick_count: Approximate number of ticks on the value axis.
    """

    x_scale_padding: float = 0.1
    solid_opacity: float = 1.0
    transparent_opacity: float = 0.4
    margins: Margins = Margins(top=10, right=0, bottom=25, left=45)
    font_multiplier: float = 0.04
    value_axis_offset: float = 51.0
    tick_count: int = 10


DEFAULT_LAYOUT_CONFIG: Final[LayoutConfig] = LayoutConfig()


@dataclass(frozen=True, slots=True)
class BarGeometry:
    """A positioned rectangle in surface coordinates (margins applied)."""

    category: str
    x: float
    y: float
    width: float
    height: float
    css_class: str


@dataclass(frozen=True, slots=True)
class AxisTick:
    """A single axis tick.

    Attributes:
        value: Tick value (number for the value axis, category for the category axis).
        label: Display label.
        position: Plot-local coordinate along the axis.
    """

    value: float | str
    label: str
    position: float


@dataclass(frozen=True, slots=True)
class AxisSpec:
    """Rendering instructions for one axis."""

    orientation: AxisOrientation
    translate: tuple[float, float]
    font_size: float
    ticks: tuple[AxisTick, ...] = ()

    @property
    def transform(self) -> str:
        """Return the SVG transform attribute for the axis group."""

        dx, dy = self.translate
        return f"translate({dx:g}, {dy:g})"


@dataclass(frozen=True, slots=True)
class ChartLayout:
    """Complete geometry for one update of the chart."""

    viewport_width: float
    viewport_height: float
    plot_width: float
    plot_height: float
    value_scale: LinearScale
    category_scale: BandScale
    bars: tuple[BarGeometry, ...]
    category_axis: AxisSpec
    value_axis: AxisSpec
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG


def layout_waterfall(
    view_model: WaterfallViewModel,
    viewport_width: float,
    viewport_height: float,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> ChartLayout:
    """Derive scales, bars and axes for the given viewport.

    Args:
        view_model: View model produced by `build_view_model`.
        viewport_width: Total surface width in pixels.
        viewport_height: Total surface height in pixels.
        config: Layout configuration (margins, padding, font multiplier).

    Returns:
        ChartLayout describing every bar and both axes.

    Notes:
        Plot dimensions are clamped at 0 when the viewport is smaller than the
        margins, so no negative widths or heights are emitted.
    """

    margins = config.margins
    plot_height = max(0.0, viewport_height - margins.top - margins.bottom)
    plot_width = max(0.0, viewport_width - margins.left)

    value_scale = LinearScale(
        domain=(view_model.domain_min, view_model.domain_max),
        range=(plot_height, 0.0),
    )
    category_scale = BandScale(
        # Duplicate categories share the band of their first occurrence.
        domain=tuple(dict.fromkeys(view_model.categories)),
        range=(0.0, plot_width),
        padding=config.x_scale_padding,
    )
    font_size = min(plot_width, plot_height) * config.font_multiplier

    bars = tuple(
        BarGeometry(
            category=point.category,
            x=margins.left + category_scale(point.category),
            y=margins.top + value_scale(max(point.start, point.end)),
            width=category_scale.bandwidth,
            height=_non_negative(plot_height - value_scale(abs(point.start - point.end))),
            css_class=point.css_class,
        )
        for point in view_model.points
    )

    return ChartLayout(
        viewport_width=viewport_width,
        viewport_height=viewport_height,
        plot_width=plot_width,
        plot_height=plot_height,
        value_scale=value_scale,
        category_scale=category_scale,
        bars=bars,
        category_axis=AxisSpec(
            orientation="bottom",
            translate=(margins.left, plot_height + margins.top),
            font_size=font_size,
            ticks=_category_ticks(category_scale),
        ),
        value_axis=AxisSpec(
            orientation="left",
            translate=(config.value_axis_offset, margins.top),
            font_size=font_size,
            ticks=_value_ticks(value_scale, count=config.tick_count),
        ),
        config=config,
    )


def _non_negative(value: float) -> float:
    # NaN passes through unchanged.
    return 0.0 if value < 0 else value


def _category_ticks(scale: BandScale) -> tuple[AxisTick, ...]:
    return tuple(
        AxisTick(value=category, label=category, position=scale.tick_position(category)) for category in scale.ticks()
    )


def _value_ticks(scale: LinearScale, *, count: int) -> tuple[AxisTick, ...]:
    fmt = scale.tick_format(count)
    return tuple(AxisTick(value=value, label=fmt(value), position=scale(value)) for value in scale.ticks(count))
