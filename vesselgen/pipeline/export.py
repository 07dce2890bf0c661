from __future__ import annotations

import logging
from typing import Callable, Optional

from ..config import GeometrySettings
from ..errors import ExportFailure
from ..geom.spline import PointsLike
from ..io import export_meshes
from ..models import BaseParameters
from .generate import VesselGeometry, build_vessel

logger = logging.getLogger(__name__)


def export_geometry(
    geometry: VesselGeometry,
    params: BaseParameters,
    settings: Optional[GeometrySettings] = None,
) -> bytes:
    """
    Serialize already generated geometry to binary STL bytes.

    Raises:
        ExportFailure when either mesh is the empty sentinel or serialization fails.
    """
    settings = settings or GeometrySettings()
    if geometry.mesh.is_empty:
        raise ExportFailure("No vessel geometry available to export.")
    if geometry.base.is_empty:
        raise ExportFailure("No base geometry available to export.")
    try:
        return export_meshes(geometry.base, geometry.mesh, params, rotation_deg=settings.rotation_deg)
    except Exception as exc:
        logger.error("STL export failed: %s", exc, exc_info=True)
        raise ExportFailure(f"STL export failed: {exc}") from exc


def export_vessel_stl(
    points: PointsLike,
    params: BaseParameters,
    settings: Optional[GeometrySettings] = None,
    on_error: Optional[Callable[[str], None]] = None,
) -> bytes:
    """
    Generate base and profile meshes and return the merged binary STL.

    Raises:
        InsufficientControlPoints for fewer than two control points.
        ExportFailure when no geometry could be generated or serialized.
    """
    geometry = build_vessel(points, params, settings=settings, on_error=on_error)
    data = export_geometry(geometry, params, settings=settings)
    logger.info(
        "exported vessel: %d profile + %d base triangles, %d bytes",
        geometry.mesh.n_triangles,
        geometry.base.n_triangles,
        len(data),
    )
    return data
