from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


PROFILE_SAMPLES = 100          # points on the sampled profile curve
CATMULL_ROM_TENSION = 0.5
LATHE_SEGMENTS = 64            # angular steps around the axis
BASE_SEGMENTS = 64             # radial segments of the foot cylinder
PRINT_ROTATION_DEG = 90.0      # rotation about X applied on export

DEFAULT_STL_NAME = "parametric-vessel.stl"

# Editing limits used by vesselgen.edit
MIN_CONTROL_POINTS = 3
MAX_CONTROL_POINTS = 7
MAX_OUTWARD_MM = 50.0          # beyond the base radius
MIN_RADIUS_FRACTION = 1.0 / 6.0  # of the outer diameter
MIN_POINT_GAP_MM = 1.0


@dataclass(frozen=True)
class GeometrySettings:
    """Resolution knobs for a single recomputation."""
    samples: int = PROFILE_SAMPLES
    tension: float = CATMULL_ROM_TENSION
    segments: int = LATHE_SEGMENTS
    base_segments: int = BASE_SEGMENTS
    rotation_deg: float = PRINT_ROTATION_DEG


def settings_from_params(params: Optional[Mapping[str, Any]] = None) -> GeometrySettings:
    """
    Build GeometrySettings from a loose params mapping.

    params:
      samples (int): profile samples (default 100, at least 2)
      tension (float): Catmull-Rom tension (default 0.5)
      segments (int): lathe segments (default 64, at least 3)
      base_segments (int): base cylinder segments (default 64, at least 3)
      rotation_deg (float): export rotation about X (default 90)
    """
    if params is None:
        params = {}
    samples = int(params.get("samples", PROFILE_SAMPLES))
    tension = float(params.get("tension", CATMULL_ROM_TENSION))
    segments = int(params.get("segments", LATHE_SEGMENTS))
    base_segments = int(params.get("base_segments", BASE_SEGMENTS))
    rotation_deg = float(params.get("rotation_deg", PRINT_ROTATION_DEG))

    if samples < 2:
        raise ValueError("samples must be >= 2.")
    if segments < 3 or base_segments < 3:
        raise ValueError("segments and base_segments must be >= 3.")

    return GeometrySettings(
        samples=samples,
        tension=tension,
        segments=segments,
        base_segments=base_segments,
        rotation_deg=rotation_deg,
    )


def settings_to_params(settings: GeometrySettings) -> Dict[str, Any]:
    return {
        "samples": settings.samples,
        "tension": settings.tension,
        "segments": settings.segments,
        "base_segments": settings.base_segments,
        "rotation_deg": settings.rotation_deg,
    }
