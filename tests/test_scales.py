"""Unit tests for linear and band scales."""

from __future__ import annotations

import math

import pytest

from analysis.scales import BandScale, LinearScale

pytestmark = pytest.mark.unit


def test_linear_scale_inverts_range() -> None:
    """Larger values map to smaller pixel offsets when the range is inverted."""

    scale = LinearScale(domain=(0, 160), range=(320, 0))
    assert scale(0) == 320
    assert scale(160) == 0
    assert scale(100) == pytest.approx(120)


def test_linear_scale_with_zero_width_domain_maps_to_range_start() -> None:
    """A degenerate domain does not divide by zero."""

    scale = LinearScale(domain=(0, 0), range=(200, 0))
    assert scale(0) == 200
    assert scale(50) == 200


def test_linear_ticks_use_nice_steps() -> None:
    """Ticks fall on 1/2/5 x 10^n steps."""

    scale = LinearScale(domain=(0, 160), range=(320, 0))
    assert scale.ticks(10) == (0, 20, 40, 60, 80, 100, 120, 140, 160)


def test_linear_ticks_for_fractional_domain_are_exact() -> None:
    """Sub-unit steps do not accumulate floating point error."""

    ticks = LinearScale(domain=(0, 1), range=(0, 100)).ticks(10)
    assert len(ticks) == 11
    assert ticks[3] == 0.3


def test_linear_ticks_sorted_for_reversed_domain() -> None:
    """A descending domain still yields ascending ticks."""

    ticks = LinearScale(domain=(0, -10), range=(100, 0)).ticks(10)
    assert ticks[0] == -10
    assert ticks[-1] == 0


def test_linear_ticks_degenerate_domains() -> None:
    """Zero-width domains yield one tick; non-finite domains yield none."""

    assert LinearScale(domain=(0, 0), range=(100, 0)).ticks() == (0,)
    assert LinearScale(domain=(0, math.nan), range=(100, 0)).ticks() == ()


@pytest.mark.parametrize("tiny", [1e-310, 5e-323])
def test_linear_ticks_subnormal_domain_falls_back_to_bounds(tiny: float) -> None:
    """A span too small for a finite tick step yields the domain bounds."""

    scale = LinearScale(domain=(0, tiny), range=(100, 0))
    assert scale.ticks() == (0, tiny)
    assert scale.tick_format()(tiny) == f"{tiny:g}"


def test_linear_tick_format_uses_step_precision() -> None:
    """Formatting adds thousands separators and step-derived decimals."""

    assert LinearScale(domain=(0, 5000), range=(0, 1)).tick_format()(1000) == "1,000"
    assert LinearScale(domain=(0, 1), range=(0, 1)).tick_format()(0.3) == "0.3"


def test_band_scale_partitions_range_with_proportional_gaps() -> None:
    """Bands are uniform, separated by padding * bandwidth, and fill the range."""

    scale = BandScale(domain=("a", "b", "c"), range=(0, 320), padding=0.1)
    assert scale.bandwidth == pytest.approx(100)
    starts = [scale(c) for c in scale.domain]
    assert starts == pytest.approx([0, 110, 220])
    assert starts[-1] + scale.bandwidth == pytest.approx(320)
    for left, right in zip(starts, starts[1:]):
        assert right - (left + scale.bandwidth) == pytest.approx(0.1 * scale.bandwidth)


def test_band_scale_single_category_fills_range() -> None:
    """One category occupies the entire range."""

    scale = BandScale(domain=("only",), range=(0, 250), padding=0.1)
    assert scale("only") == 0
    assert scale.bandwidth == 250


def test_band_scale_empty_domain_has_zero_bandwidth() -> None:
    """No categories means no bands."""

    scale = BandScale(domain=(), range=(0, 100), padding=0.1)
    assert scale.bandwidth == 0
    assert scale.ticks() == ()


def test_band_scale_unknown_category_raises_key_error() -> None:
    """Looking up a category outside the domain raises KeyError."""

    scale = BandScale(domain=("a",), range=(0, 100))
    with pytest.raises(KeyError):
        scale("missing")


def test_band_scale_tick_position_is_band_centre() -> None:
    """Tick positions sit halfway across each band."""

    scale = BandScale(domain=("a", "b", "c"), range=(0, 300))
    assert scale("c") == 200
    assert scale.tick_position("c") == pytest.approx(250)
