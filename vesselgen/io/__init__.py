"""
Binary STL serialization of vessel meshes.

Layout (little-endian):
  80 bytes   header (free-form)
  uint32     triangle count T
  T x 50 bytes:
      float32[3]     face normal
      float32[3][3]  vertices
      uint16         attribute byte count (0)

Encoding and decoding go through trimesh; this module only assembles the meshes
(placement, print rotation, merge) and converts between Mesh3D and trimesh.Trimesh.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterable
import numpy as np
import trimesh
from trimesh import Trimesh
from trimesh.exchange.stl import export_stl

from ..config import PRINT_ROTATION_DEG
from ..models import BaseParameters, Mesh3D

logger = logging.getLogger(__name__)

STL_HEADER_BYTES = 80
STL_COUNT_BYTES = 4
STL_TRIANGLE_BYTES = 50


# ---------- Internal utilities ----------

def _to_trimesh(mesh: Mesh3D) -> Trimesh:
    """Convert Mesh3D -> trimesh.Trimesh without additional processing."""
    v = np.asarray(mesh.vertices, dtype=np.float64).reshape(-1, 3)
    f = np.asarray(mesh.faces, dtype=np.int64).reshape(-1, 3)
    return trimesh.Trimesh(vertices=v, faces=f, process=False)


def _from_trimesh(tm: Trimesh, units: str = "mm") -> Mesh3D:
    """Convert trimesh.Trimesh -> Mesh3D (vertex normals are not carried over)."""
    return Mesh3D(
        vertices=np.asarray(tm.vertices, dtype=np.float64),
        faces=np.asarray(tm.faces, dtype=np.int32),
        units=units,
    )


# ---------- Public API ----------

def stl_size(n_triangles: int) -> int:
    """Byte length of a binary STL holding `n_triangles` triangles."""
    return STL_HEADER_BYTES + STL_COUNT_BYTES + STL_TRIANGLE_BYTES * int(n_triangles)


def merge_meshes(meshes: Iterable[Mesh3D]) -> Mesh3D:
    """Concatenate meshes into one, offsetting face indices. Normals are kept only if all parts have them."""
    verts = []
    faces = []
    normals = []
    off = 0
    for m in meshes:
        v = np.asarray(m.vertices, dtype=np.float64).reshape(-1, 3)
        f = np.asarray(m.faces, dtype=np.int32).reshape(-1, 3)
        verts.append(v)
        faces.append(f + off)
        normals.append(np.asarray(m.normals, dtype=np.float64).reshape(-1, 3))
        off += v.shape[0]
    if not verts:
        return Mesh3D.empty()
    V = np.vstack(verts)
    F = np.vstack(faces).astype(np.int32)
    if all(n.shape[0] == v.shape[0] for n, v in zip(normals, verts)):
        N = np.vstack(normals)
    else:
        N = np.zeros((0, 3), dtype=np.float64)
    return Mesh3D(vertices=V, faces=F, normals=N, units="mm")


def transform_mesh(mesh: Mesh3D, matrix: np.ndarray) -> Mesh3D:
    """Apply a 4x4 homogeneous transform; normals get the rotation part only."""
    M = np.asarray(matrix, dtype=np.float64).reshape(4, 4)
    V = np.asarray(mesh.vertices, dtype=np.float64).reshape(-1, 3)
    V = trimesh.transformations.transform_points(V, M)
    N = np.asarray(mesh.normals, dtype=np.float64).reshape(-1, 3)
    if N.shape[0]:
        N = N @ M[:3, :3].T
    return Mesh3D(vertices=V, faces=np.asarray(mesh.faces, dtype=np.int32).copy(), normals=N, units=mesh.units)


def placement_transforms(params: BaseParameters, rotation_deg: float = PRINT_ROTATION_DEG):
    """
    (base, profile) 4x4 transforms: lift the centered base by height/2 and the profile
    by height along Y, then rotate about +X by `rotation_deg` (90: Y-up -> Z-up).
    """
    R = trimesh.transformations.rotation_matrix(np.radians(float(rotation_deg)), [1.0, 0.0, 0.0])
    h = float(params.height)
    T_base = trimesh.transformations.translation_matrix([0.0, 0.5 * h, 0.0])
    T_prof = trimesh.transformations.translation_matrix([0.0, h, 0.0])
    return R @ T_base, R @ T_prof


def mesh_to_stl_bytes(mesh: Mesh3D) -> bytes:
    """Serialize a Mesh3D to binary STL bytes. Face normals are recomputed from the triangles."""
    return export_stl(_to_trimesh(mesh))


def export_meshes(
    base: Mesh3D,
    profile: Mesh3D,
    params: BaseParameters,
    rotation_deg: float = PRINT_ROTATION_DEG,
) -> bytes:
    """
    Place base and profile meshes, rotate for printing, merge and serialize.

    Returns:
        bytes of length 84 + 50 * (base.n_triangles + profile.n_triangles)
    """
    M_base, M_prof = placement_transforms(params, rotation_deg)
    merged = merge_meshes([transform_mesh(base, M_base), transform_mesh(profile, M_prof)])
    data = mesh_to_stl_bytes(merged)
    expected = stl_size(merged.n_triangles)
    if len(data) != expected:
        raise ValueError(f"STL buffer has {len(data)} bytes, expected {expected}.")
    logger.debug("exported %d triangles (%d bytes)", merged.n_triangles, len(data))
    return data


def load_stl_bytes(data: bytes) -> Mesh3D:
    """Read a binary STL buffer back into a triangle-soup Mesh3D (3 vertices per face)."""
    tm = trimesh.load_mesh(io.BytesIO(bytes(data)), file_type="stl", process=False)
    if not isinstance(tm, trimesh.Trimesh):
        raise TypeError("STL buffer did not decode to a single mesh.")
    return _from_trimesh(tm, units="mm")


def load_stl(path: str | Path) -> Mesh3D:
    """Load a binary STL file as a triangle-soup Mesh3D (no welding)."""
    return load_stl_bytes(Path(path).read_bytes())


def save_stl_bytes(data: bytes, path: str | Path) -> Path:
    """Write an STL buffer to disk, creating parent directories."""
    path = Path(path)
    if path.parent and path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


__all__ = [
    "STL_HEADER_BYTES",
    "STL_TRIANGLE_BYTES",
    "stl_size",
    "merge_meshes",
    "transform_mesh",
    "placement_transforms",
    "mesh_to_stl_bytes",
    "export_meshes",
    "load_stl_bytes",
    "load_stl",
    "save_stl_bytes",
]
