"""Settings-driven layout configuration for the waterfall chart."""

from __future__ import annotations

from dataclasses import fields, replace
from typing import Any

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from analysis.layout import DEFAULT_LAYOUT_CONFIG, LayoutConfig, Margins

_LAYOUT_FIELDS = frozenset(f.name for f in fields(LayoutConfig))
_MARGIN_FIELDS = frozenset(f.name for f in fields(Margins))


def layout_config_from_settings() -> LayoutConfig:
    """Build a LayoutConfig from `settings.WATERFALL_LAYOUT`.

    Missing keys fall back to `DEFAULT_LAYOUT_CONFIG`. `margins` may be given
    as a partial mapping of `top`, `right`, `bottom` and `left`.

    Raises:
        ImproperlyConfigured: When unknown keys are present or the band padding
            is negative.
    """

    overrides: dict[str, Any] = dict(getattr(settings, "WATERFALL_LAYOUT", None) or {})
    unknown = set(overrides) - _LAYOUT_FIELDS
    if unknown:
        raise ImproperlyConfigured(f"WATERFALL_LAYOUT has unknown keys: {sorted(unknown)}.")

    margins_raw = overrides.pop("margins", None)
    if margins_raw is not None:
        unknown_margins = set(margins_raw) - _MARGIN_FIELDS
        if unknown_margins:
            raise ImproperlyConfigured(f"WATERFALL_LAYOUT['margins'] has unknown keys: {sorted(unknown_margins)}.")
        overrides["margins"] = replace(DEFAULT_LAYOUT_CONFIG.margins, **margins_raw)

    config = replace(DEFAULT_LAYOUT_CONFIG, **overrides)
    if config.x_scale_padding < 0:
        raise ImproperlyConfigured(
            f"WATERFALL_LAYOUT['x_scale_padding'] must be non-negative, got {config.x_scale_padding!r}."
        )
    return config


def max_points_from_settings() -> int:
    """Return the per-request cap on submitted data points."""

    return int(getattr(settings, "WATERFALL_MAX_POINTS", 500))
