"""Pure analysis package for theWaterfall.

This package contains deterministic, testable computations that operate on
in-memory inputs and return DTOs. It must not import Django or perform any I/O.
"""

from .engine import analyze_waterfall

__all__ = ["analyze_waterfall"]
