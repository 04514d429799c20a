"""Rendering collaborators for waterfall layouts.

This package contains the keyed drawing surface, SVG serialization, the host
payload codec and settings-driven layout configuration.
"""
