import numpy as np
import pytest

trimesh = pytest.importorskip("trimesh")

from vesselgen.geom.base import base_solid
from vesselgen.models import BaseParameters


def test_base_bounds_and_radius():
    mesh = base_solid(BaseParameters(outer_diameter=100.0, height=5.0))
    V = mesh.vertices
    np.testing.assert_allclose(V[:, 1].min(), -2.5, atol=1e-9)
    np.testing.assert_allclose(V[:, 1].max(), 2.5, atol=1e-9)
    radii = np.hypot(V[:, 0], V[:, 2])
    np.testing.assert_allclose(radii.max(), 50.0, atol=1e-9)
    assert mesh.normals.shape == V.shape


def test_base_is_solid_not_hollow():
    # only the axis and the rim: the wall thickness is not cut out of the foot
    mesh = base_solid(BaseParameters(outer_diameter=100.0, height=5.0, wall_thickness=2.0))
    radii = np.hypot(mesh.vertices[:, 0], mesh.vertices[:, 2])
    assert np.all((radii < 1e-9) | (np.abs(radii - 50.0) < 1e-9))


def test_base_is_closed_volume():
    mesh = base_solid(BaseParameters(outer_diameter=80.0, height=4.0), segments=64)
    tm = trimesh.Trimesh(vertices=mesh.vertices, faces=mesh.faces)
    assert tm.is_watertight
    expected = 0.5 * 64 * np.sin(2.0 * np.pi / 64) * 40.0**2 * 4.0
    np.testing.assert_allclose(tm.volume, expected, rtol=1e-6)


@pytest.mark.parametrize(
    "params",
    [BaseParameters(outer_diameter=0.0), BaseParameters(height=-1.0), BaseParameters(outer_diameter=float("nan"))],
)
def test_invalid_dimensions_return_empty(params):
    messages = []
    mesh = base_solid(params, on_error=messages.append)
    assert mesh.is_empty
    assert len(messages) == 1
