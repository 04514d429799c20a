"""Minimal smoke tests for project scaffolding."""

from __future__ import annotations

import pytest


@pytest.mark.unit
def test_analysis_engine_imports() -> None:
    """Import the pipeline and verify the public entry point exists."""

    from analysis import analyze_waterfall

    assert callable(analyze_waterfall)


@pytest.mark.integration
def test_django_project_loads() -> None:
    """Import and initialize Django to verify settings are valid."""

    import os

    import django
    from django.conf import settings

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "theWaterfall.settings")
    django.setup()
    assert "core.apps.CoreConfig" in settings.INSTALLED_APPS
