"""Render a waterfall chart from a YAML or JSON data file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml
from django.core.management.base import BaseCommand, CommandError

from analysis.engine import analyze_waterfall
from core.charting.configs import layout_config_from_settings
from core.charting.payload import PayloadError, decode_data_points, decode_update_payload, encode_chart_layout
from core.charting.surface import WaterfallSurface

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 800.0
DEFAULT_HEIGHT = 400.0


class Command(BaseCommand):
    """Render a waterfall chart to SVG or JSON geometry."""

    help = (
        "Render a waterfall chart from a YAML/JSON file containing either a list of "
        "{category, value} entries or a {data} payload with an optional viewport."
    )

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("path", help="Path to a YAML or JSON data file.")
        parser.add_argument(
            "--width",
            type=float,
            default=None,
            help="Viewport width in pixels (overrides the file; default 800).",
        )
        parser.add_argument(
            "--height",
            type=float,
            default=None,
            help="Viewport height in pixels (overrides the file; default 400).",
        )
        parser.add_argument(
            "--format",
            choices=("svg", "json"),
            default="svg",
            help="Output format.",
        )
        parser.add_argument(
            "--output",
            default=None,
            help="Optional output file path; defaults to stdout.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        path = Path(options["path"])
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CommandError(f"Could not read {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise CommandError(f"Could not parse {path}: {exc}") from exc

        width: float | None = options["width"]
        height: float | None = options["height"]
        try:
            if isinstance(raw, list):
                points = decode_data_points(raw)
                file_width, file_height = DEFAULT_WIDTH, DEFAULT_HEIGHT
            elif isinstance(raw, dict) and "viewport" not in raw:
                points = decode_data_points(raw.get("data"))
                file_width, file_height = DEFAULT_WIDTH, DEFAULT_HEIGHT
            else:
                update = decode_update_payload(raw)
                points = update.points
                file_width, file_height = update.viewport_width, update.viewport_height
        except PayloadError as exc:
            raise CommandError(str(exc)) from exc

        layout = analyze_waterfall(
            points,
            viewport_width=file_width if width is None else width,
            viewport_height=file_height if height is None else height,
            config=layout_config_from_settings(),
        )

        if options["format"] == "json":
            rendered = json.dumps(encode_chart_layout(layout), indent=2)
        else:
            surface = WaterfallSurface()
            surface.initialize(element_id=path.stem or "waterfall")
            surface.update(layout)
            rendered = surface.to_svg()
            surface.dispose()

        output: str | None = options["output"]
        if output is None:
            self.stdout.write(rendered)
            return None

        Path(output).write_text(rendered + "\n", encoding="utf-8")
        logger.info("Wrote %d bars to %s.", len(layout.bars), output)
        self.stdout.write(f"[{options['format'].upper()}] {len(layout.bars)} bars -> {output}")
        return None
