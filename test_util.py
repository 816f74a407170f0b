import math

import numpy as np
import pytest

import util


@pytest.mark.parametrize("theta, expected", [
    (0.0, 0.0),
    (math.pi, math.pi),
    (-math.pi / 2, 3 * math.pi / 2),
    (5 * math.pi, math.pi),
    (2 * math.pi, 0.0),
])
def test_normalize_angle(theta, expected):
    assert util.normalize_angle(theta) == pytest.approx(expected)


def test_normalize_angle_tiny_negative_stays_below_two_pi():
    theta = util.normalize_angle(-1e-18)
    assert 0.0 <= theta < 2 * math.pi


def test_normalize_angle_array():
    wrapped = util.normalize_angle(np.array([-1e-18, -math.pi, 7.0]))
    assert np.all(wrapped >= 0.0)
    assert np.all(wrapped < 2 * math.pi)
    np.testing.assert_allclose(wrapped[1:], [math.pi, 7.0 - 2 * math.pi])


def test_angle_difference():
    assert util.angle_difference(0.1, 2 * math.pi - 0.1) == pytest.approx(0.2)
    assert util.angle_difference(2 * math.pi - 0.1, 0.1) == pytest.approx(-0.2)


def test_euclidean_distance():
    assert util.euclidean_distance(0.0, 0.0, 3.0, 4.0) == 5.0
