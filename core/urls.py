"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("api/waterfall/", views.waterfall_api, name="waterfall_api"),
    path("waterfall.svg", views.waterfall_svg, name="waterfall_svg"),
]
