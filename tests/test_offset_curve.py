import logging

import numpy as np

from vesselgen.geom.offset import offset_curve, outward_normals
from vesselgen.geom.spline import sample_profile
from vesselgen.models import Polyline2D

SCENARIO = [(50.0, 0.0), (70.0, 50.0), (60.0, 100.0), (40.0, 150.0)]


def _point_to_polyline_distance(q: np.ndarray, P: np.ndarray) -> float:
    A = P[:-1]
    B = P[1:]
    AB = B - A
    t = np.clip(np.einsum("ij,ij->i", q - A, AB) / np.maximum(np.einsum("ij,ij->i", AB, AB), 1e-12), 0.0, 1.0)
    C = A + t[:, None] * AB
    return float(np.min(np.linalg.norm(C - q, axis=1)))


def test_vertical_wall_offsets_toward_axis():
    y = np.linspace(0.0, 150.0, 100)
    outer = Polyline2D(points=np.column_stack([np.full_like(y, 50.0), y]))
    inner = offset_curve(outer, 2.0).points
    np.testing.assert_allclose(inner[:, 0], 48.0, atol=1e-12)
    np.testing.assert_allclose(inner[:, 1], y, atol=1e-12)


def test_same_length_and_unit_displacement():
    outer = sample_profile(SCENARIO)
    inner = offset_curve(outer, 2.0)
    assert len(inner) == len(outer) == 100
    d = np.linalg.norm(inner.points - outer.points, axis=1)
    np.testing.assert_allclose(d, 2.0, atol=1e-9)


def test_scenario_inner_lies_inside_and_about_one_wall_away():
    outer = sample_profile(SCENARIO).points
    inner = offset_curve(Polyline2D(points=outer), 2.0).points
    assert np.all(inner[:, 0] < outer[:, 0])
    dists = [_point_to_polyline_distance(q, outer) for q in inner[1:-1]]
    np.testing.assert_allclose(dists, 2.0, atol=0.05)


def test_sharp_corner_keeps_averaged_normal():
    outer = Polyline2D(points=np.array([[10.0, 0.0], [10.0, 10.0], [0.0, 10.0]]))
    inner = offset_curve(outer, 1.0).points
    s = 1.0 / np.sqrt(2.0)
    np.testing.assert_allclose(inner[1], [10.0 - s, 10.0 - s], atol=1e-12)


def test_antiparallel_edges_fall_back_to_edge_normal(caplog):
    P = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 0.0]])
    with caplog.at_level(logging.DEBUG, logger="vesselgen"):
        N = outward_normals(P)
    assert np.all(np.isfinite(N))
    np.testing.assert_allclose(np.linalg.norm(N, axis=1), 1.0)
    np.testing.assert_allclose(N[1], N[0])
    assert any("degenerate" in r.getMessage() for r in caplog.records)


def test_thick_wall_stays_on_interior_side_at_the_base():
    outer = sample_profile(SCENARIO)
    inner = offset_curve(outer, 49.0).points
    assert 0.0 < inner[0, 0] < 50.0


def test_input_is_not_modified():
    outer = sample_profile(SCENARIO)
    before = outer.points.copy()
    offset_curve(outer, 3.0)
    assert np.array_equal(outer.points, before)


def test_repeated_samples_reuse_neighbouring_edge_normal():
    P = np.array([[10.0, 0.0], [10.0, 1.0], [10.0, 1.0], [10.0, 1.0], [10.0, 2.0]])
    N = outward_normals(P)
    np.testing.assert_allclose(N, np.tile([1.0, 0.0], (5, 1)), atol=1e-12)
    inner = offset_curve(Polyline2D(points=P), 2.0).points
    np.testing.assert_allclose(inner[:, 0], 8.0, atol=1e-12)


def test_repeated_first_sample_takes_next_edge_normal():
    N = outward_normals(np.array([[10.0, 0.0], [10.0, 0.0], [10.0, 1.0]]))
    np.testing.assert_allclose(N, np.tile([1.0, 0.0], (3, 1)), atol=1e-12)


def test_repeated_sample_before_reversal_stays_unit():
    P = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 0.0], [0.0, 0.0]])
    N = outward_normals(P)
    np.testing.assert_allclose(np.linalg.norm(N, axis=1), 1.0)
    np.testing.assert_allclose(N[2], N[1])
