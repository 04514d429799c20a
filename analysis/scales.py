"""Scale primitives used by the waterfall layout engine.

Two scales are supported:

- `LinearScale` maps a numeric domain onto a pixel range (optionally inverted).
- `BandScale` maps ordered categories onto equal-width bands separated by a
  proportional gap.

Both are immutable value objects; constructing them performs no I/O.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LinearScale:
    """Linear mapping from a numeric domain to a numeric range.

    Args:
        domain: `(d0, d1)` domain bounds.
        range: `(r0, r1)` output bounds; `r0 > r1` produces an inverted axis.
    """

    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        """Map a domain value into the output range.

        A zero-width domain maps every value to `r0`.
        """

        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return r0
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def ticks(self, count: int = 10) -> tuple[float, ...]:
        """Return evenly spaced, human-friendly tick values within the domain.

        Args:
            count: Approximate number of ticks desired.

        Returns:
            Tick values in ascending order. Steps are 1, 2 or 5 times a power of
            ten. A zero-width domain yields its single value; a non-finite domain
            yields no ticks. When no usable step exists (e.g. a subnormal span)
            the domain bounds are returned.
        """

        lo, hi = sorted(self.domain)
        if not (math.isfinite(lo) and math.isfinite(hi)) or count <= 0:
            return ()
        if hi == lo:
            return (lo,)

        step = _tick_step(lo, hi, count)
        if step is None:
            return (lo, hi)
        first = math.ceil(lo / step)
        last = math.floor(hi / step)
        if step >= 1:
            return tuple(float(index * step) for index in range(first, last + 1))
        inverse = round(1 / step)
        return tuple(index / inverse for index in range(first, last + 1))

    def tick_format(self, count: int = 10) -> Callable[[float], str]:
        """Return a formatter matching the precision of `ticks(count)`."""

        lo, hi = sorted(self.domain)
        step: float | None = None
        if math.isfinite(lo) and math.isfinite(hi) and hi != lo and count > 0:
            step = _tick_step(lo, hi, count)
            if step is None:
                return _format_general
        precision = 0 if step is None else max(0, -math.floor(math.log10(step) + 0.01))

        def _format(value: float) -> str:
            return f"{value:,.{precision}f}"

        return _format


def _format_general(value: float) -> str:
    return f"{value:g}"


def _tick_step(lo: float, hi: float, count: int) -> float | None:
    """Return a 1/2/5 x 10^n step covering `[lo, hi]` in roughly `count` ticks.

    Returns None when the span is too small (or too large) to yield a finite,
    positive step with a finite reciprocal.
    """

    span = hi - lo
    if not math.isfinite(span) or span / count <= 0:
        return None
    step = 10 ** math.floor(math.log10(span / count))
    error = count / span * step
    if error <= 0.15:
        step *= 10
    elif error <= 0.35:
        step *= 5
    elif error <= 0.75:
        step *= 2
    if not (math.isfinite(step) and step > 0 and math.isfinite(1 / step)):
        return None
    return step


@dataclass(frozen=True, slots=True)
class BandScale:
    """Ordinal mapping from categories to equal-width bands.

    Bands fill `range` exactly: the first band starts at `r0`, the last band
    ends at `r1`, and adjacent bands are separated by `padding * bandwidth`.

    Args:
        domain: Ordered, unique category labels.
        range: `(r0, r1)` output bounds.
        padding: Gap between bands as a fraction of the band width.
    """

    domain: tuple[str, ...]
    range: tuple[float, float]
    padding: float = 0.0

    @property
    def bandwidth(self) -> float:
        """Return the width of a single band (0 for an empty domain)."""

        count = len(self.domain)
        if count == 0:
            return 0.0
        r0, r1 = self.range
        return (r1 - r0) / (count + (count - 1) * self.padding)

    @property
    def step(self) -> float:
        """Return the distance between the starts of adjacent bands."""

        return self.bandwidth * (1 + self.padding)

    def __call__(self, category: str) -> float:
        """Return the start of the band for `category`.

        Raises:
            KeyError: When `category` is not in the domain.
        """

        try:
            index = self.domain.index(category)
        except ValueError as exc:
            raise KeyError(category) from exc
        return self.range[0] + index * self.step

    def ticks(self) -> tuple[str, ...]:
        """Return the categories used as axis ticks."""

        return self.domain

    def tick_position(self, category: str) -> float:
        """Return the centre of the band for `category`."""

        return self(category) + self.bandwidth / 2
