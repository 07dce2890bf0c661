import numpy as np
import pytest

from vesselgen.errors import InsufficientControlPoints
from vesselgen.geom.spline import catmull_rom_tangents, control_points_array, sample_profile
from vesselgen.models import ControlPoint

SCENARIO = [(50.0, 0.0), (70.0, 50.0), (60.0, 100.0), (40.0, 150.0)]


def _points():
    return [ControlPoint(x, y) for x, y in SCENARIO]


def test_scenario_endpoints_exact():
    S = sample_profile(_points()).points
    assert S.shape == (100, 2)
    assert np.array_equal(S[0], np.array([50.0, 0.0]))
    assert np.array_equal(S[99], np.array([40.0, 150.0]))


def test_interior_control_points_are_interpolated():
    # 100 samples on u in [0,3] hit u = 1 and u = 2 at indices 33 and 66
    S = sample_profile(_points()).points
    np.testing.assert_allclose(S[33], SCENARIO[1], atol=1e-9)
    np.testing.assert_allclose(S[66], SCENARIO[2], atol=1e-9)


def test_matches_catmull_rom_formula_mid_segment():
    P = np.asarray(SCENARIO)
    S = sample_profile(P, samples=7).points  # u = 0, 0.5, 1, ...
    t0 = 0.5 * (P[1] - (2.0 * P[0] - P[1]))
    t1 = 0.5 * (P[2] - P[0])
    expected = 0.5 * P[0] + 0.125 * t0 + 0.5 * P[1] - 0.125 * t1
    np.testing.assert_allclose(S[1], expected, atol=1e-12)


def test_two_points_give_even_straight_line():
    S = sample_profile([(50.0, 0.0), (30.0, 120.0)]).points
    assert S.shape == (100, 2)
    expected = np.column_stack([np.linspace(50.0, 30.0, 100), np.linspace(0.0, 120.0, 100)])
    np.testing.assert_allclose(S, expected, atol=1e-9)
    steps = np.linalg.norm(np.diff(S, axis=0), axis=1)
    np.testing.assert_allclose(steps, steps[0], rtol=1e-9)


def test_linear_heights_stay_linear():
    # evenly spaced heights reproduce a linear height parameterization
    S = sample_profile(_points()).points
    np.testing.assert_allclose(S[:, 1], np.linspace(0.0, 150.0, 100), atol=1e-9)


def test_tangents_mirror_endpoints():
    P = np.asarray(SCENARIO)
    M = catmull_rom_tangents(P, tension=0.5)
    np.testing.assert_allclose(M[0], P[1] - P[0])
    np.testing.assert_allclose(M[-1], P[-1] - P[-2])
    np.testing.assert_allclose(M[1], 0.5 * (P[2] - P[0]))


def test_accepts_arrays_and_control_points_alike():
    a = sample_profile(_points()).points
    b = sample_profile(np.asarray(SCENARIO)).points
    assert np.array_equal(a, b)
    assert control_points_array(_points()).shape == (4, 2)


@pytest.mark.parametrize("points", [[], [(50.0, 0.0)], [ControlPoint(1.0, 2.0)]])
def test_insufficient_control_points(points):
    with pytest.raises(InsufficientControlPoints):
        sample_profile(points)


def test_insufficient_control_points_is_value_error():
    with pytest.raises(ValueError):
        sample_profile([(1.0, 1.0)])
