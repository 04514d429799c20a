"""HTTP views that expose the waterfall pipeline to hosts.

Hosts POST an update payload (viewport + data) on every data refresh or
resize. The views decode it, run the pure pipeline and return either the JSON
geometry or an SVG rendering.
"""

from __future__ import annotations

import json
import logging

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from analysis.engine import analyze_waterfall
from analysis.layout import ChartLayout
from core.charting.configs import layout_config_from_settings, max_points_from_settings
from core.charting.payload import PayloadError, decode_update_payload, encode_chart_layout
from core.charting.surface import WaterfallSurface

logger = logging.getLogger(__name__)


def _layout_from_request(request: HttpRequest) -> ChartLayout:
    """Decode the request body and compute the chart layout.

    Raises:
        PayloadError: When the body is not valid JSON or fails validation.
    """

    try:
        payload = json.loads(request.body or b"null")
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise PayloadError(f"Request body is not valid JSON: {exc}.") from exc

    update = decode_update_payload(payload, max_points=max_points_from_settings())
    return analyze_waterfall(
        update.points,
        viewport_width=update.viewport_width,
        viewport_height=update.viewport_height,
        config=layout_config_from_settings(),
    )


@csrf_exempt
@require_POST
def waterfall_api(request: HttpRequest) -> JsonResponse:
    """Return the waterfall geometry for a host update as JSON."""

    try:
        layout = _layout_from_request(request)
    except PayloadError as exc:
        logger.info("Rejected waterfall payload: %s", exc)
        return JsonResponse({"ok": False, "error": str(exc)}, status=400)
    return JsonResponse({"ok": True, "layout": encode_chart_layout(layout)})


@csrf_exempt
@require_POST
def waterfall_svg(request: HttpRequest) -> HttpResponse:
    """Return the waterfall for a host update rendered as SVG."""

    try:
        layout = _layout_from_request(request)
    except PayloadError as exc:
        logger.info("Rejected waterfall payload: %s", exc)
        return JsonResponse({"ok": False, "error": str(exc)}, status=400)

    surface = WaterfallSurface()
    surface.initialize()
    surface.update(layout)
    markup = surface.to_svg()
    surface.dispose()
    return HttpResponse(markup, content_type="image/svg+xml; charset=utf-8")
