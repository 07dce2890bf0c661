"""
Solid of revolution from a closed (radius, height) profile.

For angular steps phi_i = 2*pi*i/segments, i = 0..segments (the seam column is
duplicated) and profile points (r_j, h_j), j = 0..P-1, vertices are

    v(i, j) = (r_j cos phi_i, h_j, r_j sin phi_i)

stored row-major by angle: index = i*P + j. Each grid quad (i, j)-(i+1, j+1) is split
into two triangles oriented so that a loop walked outer-up / inner-down yields normals
pointing out of the wall. Vertex normals are the normalized sum of incident
(area-weighted) face normals. Rings at r = 0 produce zero-area triangles.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Union
import numpy as np

from ..config import LATHE_SEGMENTS
from ..errors import GeometryGenerationFailure, notify
from ..models import ClosedProfile2D, Mesh3D, Polyline2D

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[str], None]


def vertex_normals(vertices: np.ndarray, faces: np.ndarray) -> np.ndarray:
    """Smooth per-vertex normals; vertices touching only zero-area faces get (0,0,0)."""
    V = np.asarray(vertices, dtype=np.float64)
    F = np.asarray(faces, dtype=np.int64)
    acc = np.zeros_like(V)
    if F.shape[0] == 0:
        return acc
    T = V[F]
    fn = np.cross(T[:, 1] - T[:, 0], T[:, 2] - T[:, 0])   # length = 2*area
    for k in range(3):
        np.add.at(acc, F[:, k], fn)
    n = np.linalg.norm(acc, axis=1, keepdims=True)
    return acc / np.maximum(n, 1e-12)


def _lathe_faces(n_profile: int, segments: int) -> np.ndarray:
    """Two triangles per quad over a (segments+1) x n_profile vertex grid."""
    i, j = np.meshgrid(np.arange(segments), np.arange(n_profile - 1), indexing="ij")
    i = i.ravel()
    j = j.ravel()
    a = i * n_profile + j
    b = (i + 1) * n_profile + j
    c = (i + 1) * n_profile + j + 1
    d = i * n_profile + j + 1
    F = np.empty((2 * a.size, 3), dtype=np.int32)
    F[0::2] = np.column_stack([a, d, b])
    F[1::2] = np.column_stack([b, d, c])
    return F


def _revolve(points: np.ndarray, segments: int) -> Mesh3D:
    P = np.asarray(points, dtype=np.float64)
    if P.ndim != 2 or P.shape[1] != 2 or P.shape[0] < 2:
        raise GeometryGenerationFailure("Profile must contain at least 2 points of shape (P,2).")
    if not np.all(np.isfinite(P)):
        raise GeometryGenerationFailure("Profile contains non-finite coordinates.")
    segments = int(segments)
    if segments < 1:
        raise GeometryGenerationFailure("segments must be >= 1.")

    phi = np.linspace(0.0, 2.0 * np.pi, segments + 1, dtype=np.float64)
    r = P[:, 0]
    h = P[:, 1]
    V = np.empty((segments + 1, P.shape[0], 3), dtype=np.float64)
    V[:, :, 0] = np.cos(phi)[:, None] * r[None, :]
    V[:, :, 1] = h[None, :]
    V[:, :, 2] = np.sin(phi)[:, None] * r[None, :]
    V = V.reshape(-1, 3)

    F = _lathe_faces(P.shape[0], segments)
    N = vertex_normals(V, F)
    return Mesh3D(vertices=V, faces=F, normals=N, units="mm")


def revolve_profile(
    profile: Union[ClosedProfile2D, Polyline2D, np.ndarray],
    segments: int = LATHE_SEGMENTS,
    on_error: Optional[ErrorCallback] = None,
) -> Mesh3D:
    """
    Revolve a (radius, height) profile 360 degrees about the height (Y) axis.

    Args:
        profile: closed profile (or raw (P,2) array), P >= 2
        segments: angular steps (>= 1), default 64
        on_error: optional callback receiving a diagnostic message on failure

    Returns:
        Mesh3D with (segments+1)*P vertices and 2*(P-1)*segments triangles, or
        Mesh3D.empty() when generation fails. This function does not raise.
    """
    try:
        points = profile.points if isinstance(profile, Polyline2D) else profile
        return _revolve(points, segments)
    except Exception as exc:
        message = f"Revolution mesh generation failed: {exc}"
        logger.warning(message, exc_info=True)
        notify(on_error, message)
        return Mesh3D.empty()
