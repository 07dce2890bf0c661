"""
Inward offset of the sampled profile by the wall thickness.

Normals are taken per sample from the polyline edges:
  - first sample: normal of the edge to the next sample
  - last sample:  normal of the edge from the previous sample
  - interior:     normalized sum of the two adjacent unit edge normals

Each edge normal is the edge (dr, dh) rotated by 90 degrees to (dh, -dr), which for a
profile walked upward points away from the axis. Offset points are

    q_i = p_i - thickness * n_i

so the inner wall lies toward the axis. At sharp direction changes the averaged normal
is not perpendicular to either edge and the local distance to the outer curve differs
from the thickness; this approximation is kept as is. Zero-length edges (repeated
samples) take the normal of the nearest preceding edge.
"""
from __future__ import annotations

import logging
import numpy as np

from ..models import Polyline2D

logger = logging.getLogger(__name__)

_DEGENERATE_EPS = 1e-9


def _normalize(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    n = np.linalg.norm(v, axis=-1, keepdims=True)
    n = np.maximum(n, eps)
    return v / n


def _fill_zero_edges(E: np.ndarray) -> np.ndarray:
    """Zero-length edges borrow the nearest preceding edge normal (the first valid one at the start)."""
    valid = np.linalg.norm(E, axis=1) > 0.5
    if valid.all() or not valid.any():
        return E
    idx = np.where(valid, np.arange(E.shape[0]), -1)
    idx = np.maximum.accumulate(idx)
    idx[idx < 0] = int(np.argmax(valid))
    logger.debug("offset normals: %d zero-length edges", int((~valid).sum()))
    return E[idx]


def outward_normals(points: np.ndarray) -> np.ndarray:
    """
    Per-sample unit normals (P,2) pointing away from the axis for an upward profile.
    Repeated samples reuse the neighbouring edge normal; anti-parallel neighbouring
    edges fall back to the previous edge normal.
    """
    P = np.asarray(points, dtype=np.float64)
    if P.ndim != 2 or P.shape[1] != 2 or P.shape[0] < 2:
        raise ValueError("Polyline must contain at least 2 points of shape (P,2).")

    D = np.diff(P, axis=0)                                   # (P-1,2)
    E = _fill_zero_edges(_normalize(np.column_stack([D[:, 1], -D[:, 0]])))

    N = np.empty_like(P)
    N[0] = E[0]
    N[-1] = E[-1]
    if P.shape[0] > 2:
        prev_e = E[:-1]
        next_e = E[1:]
        S = prev_e + next_e
        length = np.linalg.norm(S, axis=1)
        degenerate = length < _DEGENERATE_EPS
        N[1:-1] = S / np.maximum(length, 1e-12)[:, None]
        if degenerate.any():
            N[1:-1][degenerate] = prev_e[degenerate]
            logger.debug("offset normals: %d degenerate samples used edge fallback", int(degenerate.sum()))
    return N


def offset_curve(outer: Polyline2D, thickness: float) -> Polyline2D:
    """
    Offset the outer profile toward the axis by `thickness` (mm).

    Returns a Polyline2D with the same number of points as `outer`. Large thickness
    values may push points across the axis (negative radius); that case is left as is.
    """
    P = np.asarray(outer.points, dtype=np.float64)
    N = outward_normals(P)
    return Polyline2D(points=P - float(thickness) * N)
