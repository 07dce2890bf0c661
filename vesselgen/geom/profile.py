from __future__ import annotations

import numpy as np

from ..models import ClosedProfile2D, Polyline2D


def close_profile(outer: Polyline2D, inner: Polyline2D) -> ClosedProfile2D:
    """
    Join outer (walked up) and inner (walked down) curves into one closed loop:
    outer points, inner points reversed, then the first outer point again.
    """
    A = np.asarray(outer.points, dtype=np.float64)
    B = np.asarray(inner.points, dtype=np.float64)
    if A.shape != B.shape:
        raise ValueError(f"Outer and inner curves must match in shape ({A.shape} vs {B.shape}).")
    if A.ndim != 2 or A.shape[1] != 2 or A.shape[0] < 1:
        raise ValueError("Curves must have shape (P,2) with P >= 1.")
    loop = np.vstack([A, B[::-1], A[:1]])
    return ClosedProfile2D(points=loop)
