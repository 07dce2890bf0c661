from __future__ import annotations

import logging
from typing import Callable, Optional
import numpy as np
import trimesh

from ..config import BASE_SEGMENTS
from ..errors import notify
from ..models import BaseParameters, Mesh3D

logger = logging.getLogger(__name__)


def base_solid(
    params: BaseParameters,
    segments: int = BASE_SEGMENTS,
    on_error: Optional[Callable[[str], None]] = None,
) -> Mesh3D:
    """
    Solid capped cylinder for the vessel foot.

    Radius outer_diameter/2, height `height`, axis along +Y, centered on the origin
    (y in [-height/2, height/2]). The wall thickness is not cut out of the foot: the
    base stays solid while the profile wall above it is hollow.

    Returns Mesh3D.empty() on failure and reports through `on_error`.
    """
    try:
        radius = params.outer_radius
        height = float(params.height)
        if not (np.isfinite(radius) and radius > 0.0 and np.isfinite(height) and height > 0.0):
            raise ValueError(f"Base needs positive radius and height (r={radius}, h={height}).")
        tm = trimesh.creation.cylinder(radius=radius, height=height, sections=int(segments))
        # trimesh builds along Z; the vessel is modelled Y-up
        tm.apply_transform(trimesh.transformations.rotation_matrix(-0.5 * np.pi, [1.0, 0.0, 0.0]))
        return Mesh3D(
            vertices=np.asarray(tm.vertices, dtype=np.float64),
            faces=np.asarray(tm.faces, dtype=np.int32),
            normals=np.asarray(tm.vertex_normals, dtype=np.float64),
            units="mm",
        )
    except Exception as exc:
        message = f"Base solid generation failed: {exc}"
        logger.warning(message, exc_info=True)
        notify(on_error, message)
        return Mesh3D.empty()
