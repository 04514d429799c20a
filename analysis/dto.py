"""DTO types used by the waterfall pipeline.

DTOs are plain, immutable data containers. They intentionally avoid any
Django dependencies so the whole pipeline can run in-memory.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class BarSign(StrEnum):
    """Sign classification for a waterfall bar.

    Values double as the CSS class emitted for each bar.
    """

    positive = "positive"
    negative = "negative"

    @classmethod
    def of(cls, value: float) -> BarSign:
        """Classify a raw value; zero counts as positive."""

        return cls.positive if value >= 0 else cls.negative


@dataclass(frozen=True, slots=True)
class DataPoint:
    """A single raw input point for the waterfall.

    Attributes:
        category: Category label (order-significant, expected to be unique).
        value: Signed delta applied to the running total.
    """

    category: str
    value: float


@dataclass(frozen=True, slots=True)
class WaterfallDataPoint:
    """A data point enriched with its running start/end and sign.

    Attributes:
        category: Category label copied from the input point.
        value: Raw value copied from the input point.
        start: Running total before this point (0 for the final point).
        end: Running total after this point (`value` for the final point).
        sign: Sign classification derived from `value`.
    """

    category: str
    value: float
    start: float
    end: float
    sign: BarSign

    @property
    def css_class(self) -> str:
        """Return the CSS class used by the rendering surface."""

        return self.sign.value


@dataclass(frozen=True, slots=True)
class WaterfallViewModel:
    """Render-ready view model for a waterfall chart.

    Attributes:
        points: Enriched points in input order.
        domain_max: Maximum raw value across points (0 when empty).
        domain_min: Lower bound of the value domain (always 0).
    """

    points: tuple[WaterfallDataPoint, ...] = ()
    domain_max: float = 0.0
    domain_min: float = 0.0

    @property
    def categories(self) -> tuple[str, ...]:
        """Return category labels in input order."""

        return tuple(point.category for point in self.points)
