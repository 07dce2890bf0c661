from __future__ import annotations

from dataclasses import dataclass, field
import numpy as np


@dataclass(frozen=True)
class ControlPoint:
    """
    User-placed profile anchor in millimeters.
    - x: radius from the axis of revolution (>= 0)
    - y: height above the top of the base (>= 0)
    """
    x: float
    y: float
    is_smooth: bool = True
    is_fixed: bool = False


@dataclass(frozen=True)
class BaseParameters:
    """
    Dimensions of the vessel foot and overall envelope (mm).

    The first control point is expected at (outer_diameter/2, 0) and the last one
    at height max_height; callers establish this, the geometry code only assumes it.
    """
    outer_diameter: float = 100.0
    height: float = 5.0
    wall_thickness: float = 2.0
    max_height: float = 150.0

    @property
    def outer_radius(self) -> float:
        return 0.5 * float(self.outer_diameter)

    @property
    def inner_radius(self) -> float:
        return self.outer_radius - float(self.wall_thickness)


@dataclass
class Polyline2D:
    """
    Piecewise-linear 2D polyline in the (radius, height) plane.
    - points: (P,2) float64 array, ordered along the line, no implied closure.
    """
    points: np.ndarray

    def __len__(self) -> int:
        return int(np.asarray(self.points).shape[0])

    @property
    def is_closed(self) -> bool:
        P = np.asarray(self.points, dtype=float)
        return P.shape[0] >= 2 and bool(np.array_equal(P[0], P[-1]))


@dataclass
class ClosedProfile2D(Polyline2D):
    """Closed (radius, height) loop used as lathe input; first point == last point."""

    def __post_init__(self) -> None:
        P = np.asarray(self.points, dtype=np.float64)
        if P.ndim != 2 or P.shape[1] != 2 or P.shape[0] < 2:
            raise ValueError("ClosedProfile2D expects points of shape (P,2) with P >= 2.")
        if not np.array_equal(P[0], P[-1]):
            raise ValueError("ClosedProfile2D must start and end on the same point.")
        self.points = P


@dataclass
class Mesh3D:
    """
    Triangle mesh in millimeters.
    - vertices: (N,3) float64 array
    - faces:    (M,3) int32 array indexing into vertices
    - normals:  (N,3) unit vectors, one per vertex, or (0,3) when not computed

    A mesh with zero faces is the sentinel for "no geometry available".
    """
    vertices: np.ndarray
    faces: np.ndarray
    normals: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=np.float64))
    units: str = "mm"

    @classmethod
    def empty(cls, units: str = "mm") -> "Mesh3D":
        return cls(
            vertices=np.zeros((0, 3), dtype=np.float64),
            faces=np.zeros((0, 3), dtype=np.int32),
            normals=np.zeros((0, 3), dtype=np.float64),
            units=units,
        )

    @property
    def n_triangles(self) -> int:
        return int(np.asarray(self.faces).shape[0])

    @property
    def is_empty(self) -> bool:
        return self.n_triangles == 0

    @property
    def triangles(self) -> np.ndarray:
        """(M,3,3) vertex coordinates per face."""
        V = np.asarray(self.vertices, dtype=np.float64)
        F = np.asarray(self.faces, dtype=np.int64)
        return V[F]
