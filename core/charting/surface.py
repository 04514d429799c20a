"""Keyed rendering surface for waterfall layouts.

The surface is the only stateful piece of the system. Hosts call
`initialize()` once, `update(layout)` on every data refresh or resize, and
`dispose()` when the chart is removed. Bars are diffed by category: new
categories enter, existing ones are updated in place, and missing ones exit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from analysis.layout import BarGeometry, ChartLayout

from .render import render_empty_svg, render_svg

logger = logging.getLogger(__name__)


class SurfaceStateError(RuntimeError):
    """Raised when the surface lifecycle is used out of order."""


@dataclass(frozen=True, slots=True)
class SurfaceDiff:
    """Categories touched by a single `update` call."""

    entered: tuple[str, ...] = ()
    updated: tuple[str, ...] = ()
    exited: tuple[str, ...] = ()


class WaterfallSurface:
    """In-memory drawing surface holding one rectangle per category."""

    def __init__(self) -> None:
        self._element_id: str | None = None
        self._disposed = False
        self._bars: dict[str, BarGeometry] = {}
        self._layout: ChartLayout | None = None

    @property
    def is_initialized(self) -> bool:
        """Return True between `initialize()` and `dispose()`."""

        return self._element_id is not None and not self._disposed

    @property
    def bars(self) -> tuple[BarGeometry, ...]:
        """Return the bars currently drawn, in layout order."""

        return tuple(self._bars.values())

    @property
    def layout(self) -> ChartLayout | None:
        """Return the most recently applied layout, if any."""

        return self._layout

    def initialize(self, element_id: str = "waterfall") -> None:
        """Create the empty surface.

        Args:
            element_id: Identifier of the root element.

        Raises:
            SurfaceStateError: When the surface was already initialized.
        """

        if self._element_id is not None:
            raise SurfaceStateError("Surface is already initialized.")
        self._element_id = element_id
        logger.debug("Initialized waterfall surface %r.", element_id)

    def update(self, layout: ChartLayout) -> SurfaceDiff:
        """Apply a new layout using a keyed diff by category.

        Args:
            layout: ChartLayout produced for the current viewport and data.

        Returns:
            SurfaceDiff listing entered, updated and exited categories.

        Raises:
            SurfaceStateError: When called before `initialize()` or after `dispose()`.
        """

        if not self.is_initialized:
            raise SurfaceStateError("Surface must be initialized before update and cannot be reused after dispose.")

        incoming: dict[str, BarGeometry] = {}
        for bar in layout.bars:
            # First bar wins for duplicate categories.
            incoming.setdefault(bar.category, bar)

        entered = tuple(category for category in incoming if category not in self._bars)
        updated = tuple(category for category in incoming if category in self._bars)
        exited = tuple(category for category in self._bars if category not in incoming)

        self._bars = incoming
        self._layout = layout
        logger.debug(
            "Surface update: entered=%d updated=%d exited=%d.",
            len(entered),
            len(updated),
            len(exited),
        )
        return SurfaceDiff(entered=entered, updated=updated, exited=exited)

    def dispose(self) -> None:
        """Release all bars and axes. Safe to call more than once."""

        self._bars = {}
        self._layout = None
        self._disposed = True

    def to_svg(self) -> str:
        """Serialize the current surface contents as SVG markup.

        Raises:
            SurfaceStateError: When the surface is not initialized.
        """

        if not self.is_initialized or self._element_id is None:
            raise SurfaceStateError("Surface is not initialized.")
        if self._layout is None:
            return render_empty_svg(element_id=self._element_id)
        return render_svg(self._layout, element_id=self._element_id, bars=self.bars)
