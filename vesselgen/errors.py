"""Exception types raised at the edges of the geometry core."""
from __future__ import annotations

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class VesselGeometryError(Exception):
    """Base class for vesselgen errors."""


class InsufficientControlPoints(VesselGeometryError, ValueError):
    """Fewer than two control points were handed to the sampler."""

    def __init__(self, count: int, minimum: int = 2):
        super().__init__(f"At least {minimum} control points are required (got {count}).")
        self.count = count
        self.minimum = minimum


class GeometryGenerationFailure(VesselGeometryError, RuntimeError):
    """Sampling, offsetting or meshing could not produce geometry."""


class ExportFailure(VesselGeometryError, RuntimeError):
    """The merged mesh could not be serialized to STL."""


def notify(on_error: Optional[Callable[[str], None]], message: str) -> None:
    """Pass a diagnostic message to an optional error callback without letting it raise."""
    if on_error is None:
        return
    try:
        on_error(message)
    except Exception:
        logger.exception("error callback raised while reporting: %s", message)
