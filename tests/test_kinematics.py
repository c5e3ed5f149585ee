import math

import numpy as np
import pytest

from fivebar.kinematics import PI, SAMPLE_PERIOD, VELOCITY_WINDOW, FiveBarKinematics


@pytest.fixture
def kin():
    return FiveBarKinematics()


@pytest.mark.parametrize("y", [1.2, 1.5, 1.8])
def test_forward_inverts_inverse_on_centre_line(kin, y):
    q1, q2 = kin.inverse(0.0, y)
    x_out, y_out = kin.forward(q1, q2)
    assert x_out == pytest.approx(0.0, abs=1e-2)
    assert y_out == pytest.approx(y, abs=1e-2)


@pytest.mark.parametrize("y", [1.2, 1.5, 1.8])
def test_inverse_is_mirror_symmetric_on_centre_line(kin, y):
    q1, q2 = kin.inverse(0.0, y)
    assert q1 + q2 == pytest.approx(math.pi, abs=1e-9)
    assert q1 < q2


def test_inverse_of_unreachable_point_is_nan(kin):
    angles = np.asarray(kin.inverse(0.0, 5.0), dtype=float)
    assert np.isnan(angles).tolist() == [True, True]


@pytest.mark.parametrize("q1", [1.1, 1.2334, 1.35])
def test_distal_angles_mirror_in_symmetric_pose(kin, q1):
    q3, q4 = kin.distal_angles(q1, PI - q1)
    assert q3 + q4 == pytest.approx(PI, abs=1e-6)
    assert q3 > q1


def test_forward_is_centred_in_symmetric_pose(kin):
    x, y = kin.forward(1.2, PI - 1.2)
    assert x == pytest.approx(0.0, abs=1e-6)
    assert y > 0


def test_base_velocity_first_sample_against_zero_history(kin):
    qd = kin.base_velocity(0.5, -0.25)
    span = SAMPLE_PERIOD * VELOCITY_WINDOW
    assert qd[0] == pytest.approx(0.5 / span)
    assert qd[1] == pytest.approx(-0.25 / span)


def test_base_velocity_settles_to_zero_for_constant_angles(kin):
    for _ in range(VELOCITY_WINDOW - 1):
        kin.base_velocity(1.0, 2.0)
    assert kin.base_velocity(1.0, 2.0)[0] == pytest.approx(1.0 / (SAMPLE_PERIOD * VELOCITY_WINDOW))
    last = kin.base_velocity(1.0, 2.0)
    assert last[0] == pytest.approx(0.0)
    assert last[1] == pytest.approx(0.0)


def test_base_velocity_of_steady_ramp(kin):
    step = 0.01
    result = None
    for k in range(25):
        result = kin.base_velocity(step * k, -step * k)
    expected = step * (VELOCITY_WINDOW - 1) / (SAMPLE_PERIOD * VELOCITY_WINDOW)
    assert result[0] == pytest.approx(expected)
    assert result[1] == pytest.approx(-expected)


def test_base_velocity_history_is_per_instance():
    first = FiveBarKinematics()
    second = FiveBarKinematics()
    for _ in range(VELOCITY_WINDOW):
        first.base_velocity(1.0, 1.0)
    fresh = second.base_velocity(1.0, 1.0)
    assert fresh[0] == pytest.approx(1.0 / (SAMPLE_PERIOD * VELOCITY_WINDOW))
    assert first.base_velocity(1.0, 1.0)[0] == pytest.approx(0.0)


def test_distal_velocity_is_zero_at_rest(kin):
    q3d, q4d = kin.distal_velocity(1.2, PI - 1.2, 0.0, 0.0)
    assert q3d == pytest.approx(0.0)
    assert q4d == pytest.approx(0.0)


def test_distal_velocity_mirrors_for_mirrored_motion(kin):
    q1 = 1.2
    q3d, q4d = kin.distal_velocity(q1, PI - q1, 0.7, -0.7)
    assert q3d == pytest.approx(-q4d, abs=1e-5)
    assert abs(q3d) > 1e-3


def test_distal_velocity_is_linear_in_base_velocity(kin):
    single = kin.distal_velocity(1.1, 1.9, 0.3, 0.2)
    double = kin.distal_velocity(1.1, 1.9, 0.6, 0.4)
    np.testing.assert_allclose(double, 2 * single)


def test_end_effector_velocity_zero_at_rest(kin):
    vel = kin.end_effector_velocity(1.2, PI - 1.2, 0.0, 0.0, 0.0, 0.0)
    np.testing.assert_allclose(vel, [0.0, 0.0], atol=1e-12)


def test_end_effector_velocity_mirrored_motion_is_vertical(kin):
    q1 = 1.2
    q2 = PI - q1
    q3d, q4d = kin.distal_velocity(q1, q2, 0.5, -0.5)
    xd, yd = kin.end_effector_velocity(q1, q2, 0.5, -0.5, q3d, q4d)
    assert xd == pytest.approx(0.0, abs=1e-5)
    assert abs(yd) > 1e-3


def test_end_effector_velocity_is_linear(kin):
    args = (1.1, 1.9)
    single = kin.end_effector_velocity(*args, 0.1, 0.2, 0.3, 0.4)
    triple = kin.end_effector_velocity(*args, 0.3, 0.6, 0.9, 1.2)
    np.testing.assert_allclose(triple, 3 * single)


def test_link_lengths_scale_positions():
    unit = FiveBarKinematics()
    scaled = FiveBarKinematics(2.0, 2.0, 2.0, 2.0, 2.0)
    q1, q2 = 1.2, PI - 1.2
    np.testing.assert_allclose(scaled.forward(q1, q2), 2 * unit.forward(q1, q2), atol=1e-9)
    np.testing.assert_allclose(scaled.inverse(0.0, 3.0), unit.inverse(0.0, 1.5), atol=1e-12)