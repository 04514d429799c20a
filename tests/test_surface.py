"""Unit tests for the keyed waterfall surface and SVG serialization."""

from __future__ import annotations

import pytest

from analysis.engine import analyze_waterfall
from analysis.waterfall import data_points_from_pairs
from core.charting.render import render_svg
from core.charting.surface import SurfaceStateError, WaterfallSurface

pytestmark = pytest.mark.unit


def _layout(pairs, *, width: float = 400, height: float = 300):
    return analyze_waterfall(data_points_from_pairs(pairs), viewport_width=width, viewport_height=height)


def test_update_requires_initialize() -> None:
    """Updating a surface that was never initialized is a lifecycle error."""

    surface = WaterfallSurface()
    with pytest.raises(SurfaceStateError):
        surface.update(_layout([("a", 1)]))


def test_initialize_twice_is_rejected() -> None:
    """Initialization happens exactly once."""

    surface = WaterfallSurface()
    surface.initialize()
    with pytest.raises(SurfaceStateError):
        surface.initialize()


def test_keyed_diff_enters_updates_and_exits_by_category() -> None:
    """Bars are matched by category across updates."""

    surface = WaterfallSurface()
    surface.initialize()

    first = surface.update(_layout([("a", 10), ("b", 5), ("c", 15)]))
    assert first.entered == ("a", "b", "c")
    assert first.updated == ()
    assert first.exited == ()

    second = surface.update(_layout([("b", 5), ("c", 2), ("d", 7)]))
    assert second.entered == ("d",)
    assert second.updated == ("b", "c")
    assert second.exited == ("a",)
    assert [bar.category for bar in surface.bars] == ["b", "c", "d"]


def test_resize_updates_geometry_in_place() -> None:
    """Re-running with a new viewport updates every existing bar."""

    surface = WaterfallSurface()
    surface.initialize()
    surface.update(_layout([("a", 10), ("t", 10)], width=400))
    narrow_width = surface.bars[0].width

    diff = surface.update(_layout([("a", 10), ("t", 10)], width=800))
    assert diff.updated == ("a", "t")
    assert surface.bars[0].width > narrow_width


def test_duplicate_categories_keep_first_bar() -> None:
    """Duplicate categories collapse onto a single keyed bar."""

    surface = WaterfallSurface()
    surface.initialize()
    diff = surface.update(_layout([("a", 10), ("a", 20), ("t", 30)]))
    assert diff.entered == ("a", "t")
    assert len(surface.bars) == 2


def test_dispose_clears_and_blocks_further_updates() -> None:
    """Dispose is idempotent and the surface cannot be reused afterwards."""

    surface = WaterfallSurface()
    surface.initialize()
    surface.update(_layout([("a", 1)]))
    surface.dispose()
    surface.dispose()

    assert surface.bars == ()
    assert surface.layout is None
    assert not surface.is_initialized
    with pytest.raises(SurfaceStateError):
        surface.update(_layout([("a", 1)]))


def test_to_svg_before_first_update_is_empty() -> None:
    """A fresh surface serializes to an empty chart skeleton."""

    surface = WaterfallSurface()
    surface.initialize(element_id="chart-1")
    markup = surface.to_svg()
    assert 'id="chart-1"' in markup
    assert "<rect" not in markup


def test_to_svg_emits_one_rect_per_bar(sample_points) -> None:
    """Serialized bars carry their sign classes and the solid opacity."""

    surface = WaterfallSurface()
    surface.initialize()
    surface.update(analyze_waterfall(sample_points, viewport_width=800, viewport_height=400))
    markup = surface.to_svg()

    assert markup.count("<rect") == 6
    assert markup.count('class="bar positive"') == 4
    assert markup.count('class="bar negative"') == 2
    assert 'fill-opacity="1"' in markup
    assert 'class="xAxis axis" transform="translate(45, 375)"' in markup
    assert 'class="yAxis axis" transform="translate(51, 10)"' in markup


def test_render_svg_escapes_labels() -> None:
    """Category labels are HTML-escaped in attributes and tick text."""

    markup = render_svg(_layout([("<b>&", 1)]))
    assert "<b>&" not in markup
    assert "&lt;b&gt;&amp;" in markup
