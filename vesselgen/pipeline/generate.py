"""
Vessel geometry pipeline:
  control points -> Catmull-Rom samples -> inward offset -> closed loop -> lathe mesh
  base parameters -> solid foot cylinder

Each call recomputes everything from the given snapshot; nothing is cached here.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional
import numpy as np

from ..config import GeometrySettings
from ..errors import InsufficientControlPoints, notify
from ..models import BaseParameters, ClosedProfile2D, Mesh3D, Polyline2D
from ..geom.spline import PointsLike, control_points_array, sample_profile
from ..geom.offset import offset_curve
from ..geom.profile import close_profile
from ..geom.lathe import revolve_profile
from ..geom.base import base_solid

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[str], None]


def _empty_polyline() -> Polyline2D:
    return Polyline2D(points=np.zeros((0, 2), dtype=np.float64))


@dataclass
class VesselGeometry:
    """
    All intermediate and final geometry for one recomputation.

    outer/inner/profile are empty and mesh is Mesh3D.empty() when profile generation
    failed; base is generated independently of the profile.
    """
    outer: Polyline2D = field(default_factory=_empty_polyline)
    inner: Polyline2D = field(default_factory=_empty_polyline)
    profile: Optional[ClosedProfile2D] = None
    mesh: Mesh3D = field(default_factory=Mesh3D.empty)
    base: Mesh3D = field(default_factory=Mesh3D.empty)

    @property
    def ok(self) -> bool:
        return not self.mesh.is_empty and not self.base.is_empty


def _require_points(points: PointsLike) -> np.ndarray:
    P = control_points_array(points)
    if P.shape[0] < 2:
        raise InsufficientControlPoints(P.shape[0])
    return P


def _profile_stages(P: np.ndarray, params: BaseParameters, settings: GeometrySettings):
    outer = sample_profile(P, samples=settings.samples, tension=settings.tension)
    inner = offset_curve(outer, params.wall_thickness)
    return outer, inner, close_profile(outer, inner)


def _profile_geometry(
    points: PointsLike,
    params: BaseParameters,
    settings: GeometrySettings,
    on_error: Optional[ErrorCallback],
) -> VesselGeometry:
    """Curves, closed loop and lathe mesh; the base is left empty."""
    P = _require_points(points)
    result = VesselGeometry()
    try:
        result.outer, result.inner, result.profile = _profile_stages(P, params, settings)
    except Exception as exc:
        message = f"Profile curve generation failed: {exc}"
        logger.warning(message, exc_info=True)
        notify(on_error, message)
        return VesselGeometry()
    result.mesh = revolve_profile(result.profile, segments=settings.segments, on_error=on_error)
    return result


def build_vessel(
    points: PointsLike,
    params: BaseParameters,
    settings: Optional[GeometrySettings] = None,
    on_error: Optional[ErrorCallback] = None,
) -> VesselGeometry:
    """
    Run the full profile pipeline and the base generator.

    Raises:
        InsufficientControlPoints for fewer than two control points. Every other
        failure is logged, reported through `on_error`, and leaves empty geometry.
    """
    settings = settings or GeometrySettings()
    result = _profile_geometry(points, params, settings, on_error)
    result.base = generate_base_mesh(params, settings=settings, on_error=on_error)
    return result


def generate_profile_mesh(
    points: PointsLike,
    params: BaseParameters,
    settings: Optional[GeometrySettings] = None,
    on_error: Optional[ErrorCallback] = None,
) -> Mesh3D:
    """Revolved, hollow profile mesh (not yet lifted onto the base), or Mesh3D.empty()."""
    settings = settings or GeometrySettings()
    return _profile_geometry(points, params, settings, on_error).mesh


def generate_base_mesh(
    params: BaseParameters,
    settings: Optional[GeometrySettings] = None,
    on_error: Optional[ErrorCallback] = None,
) -> Mesh3D:
    """Solid foot cylinder centered on the origin, or Mesh3D.empty()."""
    settings = settings or GeometrySettings()
    return base_solid(params, segments=settings.base_segments, on_error=on_error)
