"""
Catmull-Rom sampling of the profile curve.

The control points p_0..p_{n-1} are interpolated by a uniform Catmull-Rom spline
with tension s. On the knot grid u = 0..n-1 this is the cubic Hermite spline whose
tangents are

    m_i = s * (p_{i+1} - p_{i-1})

with virtual end points mirrored across the first and last control points:

    p_{-1} = 2 p_0 - p_1,    p_n = 2 p_{n-1} - p_{n-2}

The curve is sampled at evenly spaced u in [0, n-1]; it never extrapolates past the
end points. With two control points (s = 0.5) the tangents equal the chord and the
samples are evenly spaced on the segment.
"""
from __future__ import annotations

from typing import Sequence, Union
import numpy as np
from scipy.interpolate import CubicHermiteSpline

from ..config import CATMULL_ROM_TENSION, PROFILE_SAMPLES
from ..errors import InsufficientControlPoints
from ..models import ControlPoint, Polyline2D

PointsLike = Union[Sequence[ControlPoint], np.ndarray, Sequence[Sequence[float]]]


def control_points_array(points: PointsLike) -> np.ndarray:
    """Return control points as an (N,2) float64 array of (radius, height)."""
    if isinstance(points, np.ndarray):
        P = np.asarray(points, dtype=np.float64)
    else:
        rows = [(p.x, p.y) if isinstance(p, ControlPoint) else tuple(p) for p in points]
        P = np.asarray(rows, dtype=np.float64)
    if P.size == 0:
        return np.zeros((0, 2), dtype=np.float64)
    if P.ndim != 2 or P.shape[1] != 2:
        raise ValueError("Control points must have shape (N,2).")
    return P


def catmull_rom_tangents(P: np.ndarray, tension: float = CATMULL_ROM_TENSION) -> np.ndarray:
    """Tangents at each control point with mirrored virtual end points."""
    P = np.asarray(P, dtype=np.float64)
    before = np.vstack([2.0 * P[0] - P[1], P[:-1]])
    after = np.vstack([P[1:], 2.0 * P[-1] - P[-2]])
    return float(tension) * (after - before)


def sample_profile(
    points: PointsLike,
    samples: int = PROFILE_SAMPLES,
    tension: float = CATMULL_ROM_TENSION,
) -> Polyline2D:
    """
    Sample a smooth open curve through the control points.

    Args:
        points: ControlPoint sequence or (N,2) array, N >= 2, ordered by height.
        samples: number of output points (>= 2).
        tension: Catmull-Rom tension (0.5 is the classic curve).

    Returns:
        Polyline2D with exactly `samples` points; the first and last equal the first
        and last control points.

    Raises:
        InsufficientControlPoints if fewer than two points are given.
    """
    P = control_points_array(points)
    if P.shape[0] < 2:
        raise InsufficientControlPoints(P.shape[0])
    samples = int(samples)
    if samples < 2:
        raise ValueError("samples must be >= 2.")

    n = P.shape[0]
    u = np.arange(n, dtype=np.float64)
    spl = CubicHermiteSpline(u, P, catmull_rom_tangents(P, tension), axis=0)

    uq = np.linspace(0.0, float(n - 1), samples, dtype=np.float64)
    S = np.asarray(spl(uq), dtype=np.float64)
    # pin the ends against round-off in the last interval
    S[0] = P[0]
    S[-1] = P[-1]
    return Polyline2D(points=S)
