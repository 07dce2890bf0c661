"""
Control-point editing rules for profile editors.

All functions take an immutable snapshot (sequence of ControlPoint) and return a new
tuple; the input is never modified. The geometry pipeline itself does not call these;
they encode the constraints an editor establishes before handing points over.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence, Tuple

from ..config import (
    MAX_CONTROL_POINTS,
    MAX_OUTWARD_MM,
    MIN_CONTROL_POINTS,
    MIN_POINT_GAP_MM,
    MIN_RADIUS_FRACTION,
)
from ..errors import InsufficientControlPoints
from ..models import BaseParameters, ControlPoint

Points = Tuple[ControlPoint, ...]


def default_control_points(params: Optional[BaseParameters] = None) -> Points:
    """Starting silhouette: flares out, then narrows toward the rim."""
    params = params or BaseParameters()
    r = params.outer_radius
    return (
        ControlPoint(r, 0.0, is_smooth=True, is_fixed=True),
        ControlPoint(r + 20.0, 50.0),
        ControlPoint(r + 10.0, 100.0),
        ControlPoint(r - 10.0, float(params.max_height), is_smooth=True, is_fixed=True),
    )


def pin_endpoints(points: Sequence[ControlPoint], params: BaseParameters) -> Points:
    """Snap the first point onto the base rim (outer radius, 0) and the last onto max_height."""
    pts = list(points)
    if len(pts) < 2:
        raise InsufficientControlPoints(len(pts))
    pts[0] = replace(pts[0], x=params.outer_radius, y=0.0)
    pts[-1] = replace(pts[-1], y=float(params.max_height))
    return tuple(pts)


def x_limits(params: BaseParameters) -> Tuple[float, float]:
    """Allowed radius range for editable points."""
    lo = float(params.outer_diameter) * MIN_RADIUS_FRACTION
    hi = params.outer_radius + MAX_OUTWARD_MM
    return lo, hi


def move_point(
    points: Sequence[ControlPoint],
    index: int,
    params: BaseParameters,
    x: Optional[float] = None,
    y: Optional[float] = None,
) -> Points:
    """
    Move one control point within the editing constraints.

    - the first point's x and the last point's y are locked
    - x is clamped to x_limits(params)
    - y stays MIN_POINT_GAP_MM away from both neighbours and at or below max_height
    """
    pts = list(points)
    n = len(pts)
    if not -n <= index < n:
        raise IndexError(f"Control point index {index} out of range for {n} points.")
    index %= n
    p = pts[index]

    if x is not None and index != 0:
        lo, hi = x_limits(params)
        p = replace(p, x=max(lo, min(hi, float(x))))

    if y is not None and index != n - 1:
        value = float(y)
        if index > 0:
            value = max(value, pts[index - 1].y + MIN_POINT_GAP_MM)
        if index < n - 1:
            value = min(value, pts[index + 1].y - MIN_POINT_GAP_MM)
        value = min(value, float(params.max_height))
        p = replace(p, y=value)

    pts[index] = p
    return tuple(pts)


def add_control_point(points: Sequence[ControlPoint]) -> Points:
    """Insert a point halfway between the last two; no-op at MAX_CONTROL_POINTS."""
    pts = list(points)
    if len(pts) < 2:
        raise InsufficientControlPoints(len(pts))
    if len(pts) >= MAX_CONTROL_POINTS:
        return tuple(pts)
    a, b = pts[-2], pts[-1]
    pts.insert(len(pts) - 1, ControlPoint(0.5 * (a.x + b.x), 0.5 * (a.y + b.y)))
    return tuple(pts)


def remove_control_point(points: Sequence[ControlPoint]) -> Points:
    """Drop the second-to-last point; no-op at MIN_CONTROL_POINTS."""
    pts = list(points)
    if len(pts) <= MIN_CONTROL_POINTS:
        return tuple(pts)
    del pts[-2]
    return tuple(pts)


__all__ = [
    "default_control_points",
    "pin_endpoints",
    "x_limits",
    "move_point",
    "add_control_point",
    "remove_control_point",
]
