"""
vesselgen: parametric vessel geometry.

Turns a sparse (radius, height) silhouette into a smooth profile curve, an inward
wall offset, a closed lathe loop, a revolved triangle mesh, a solid foot cylinder,
and a binary STL buffer of the assembled vessel.
"""

from .models import (
    ControlPoint,
    BaseParameters,
    Polyline2D,
    ClosedProfile2D,
    Mesh3D,
)
from .errors import (
    VesselGeometryError,
    InsufficientControlPoints,
    GeometryGenerationFailure,
    ExportFailure,
)
from .config import GeometrySettings
from .geom.spline import sample_profile
from .geom.offset import offset_curve
from .geom.profile import close_profile
from .geom.lathe import revolve_profile
from .geom.base import base_solid
from .io import export_meshes
from .pipeline.generate import VesselGeometry, build_vessel, generate_profile_mesh, generate_base_mesh
from .pipeline.export import export_vessel_stl

__all__ = [
    "ControlPoint",
    "BaseParameters",
    "Polyline2D",
    "ClosedProfile2D",
    "Mesh3D",
    "VesselGeometryError",
    "InsufficientControlPoints",
    "GeometryGenerationFailure",
    "ExportFailure",
    "GeometrySettings",
    "sample_profile",
    "offset_curve",
    "close_profile",
    "revolve_profile",
    "base_solid",
    "export_meshes",
    "VesselGeometry",
    "build_vessel",
    "generate_profile_mesh",
    "generate_base_mesh",
    "export_vessel_stl",
]

__version__ = "0.1.0"
