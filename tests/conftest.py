"""Pytest fixtures shared across the waterfall test suite."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from analysis.dto import DataPoint
from analysis.layout import LayoutConfig, Margins
from analysis.waterfall import data_points_from_pairs


@pytest.fixture
def sample_points() -> tuple[DataPoint, ...]:
    """Return the six-point sample with opening and closing totals."""

    return data_points_from_pairs(
        [
            ("Total", 100),
            ("effect1", 60),
            ("effect2", -20),
            ("d", -10),
            ("e", 30),
            ("Total G", 160),
        ]
    )


@pytest.fixture
def flat_config() -> LayoutConfig:
    """Return a config without margins or padding so geometry is easy to read."""

    return LayoutConfig(
        x_scale_padding=0.0,
        margins=Margins(top=0, right=0, bottom=0, left=0),
        value_axis_offset=0.0,
    )


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django request/response or IO.
    - `integration`: tests touching Django views, commands, settings, or IO.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
