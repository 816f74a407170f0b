import math

import numpy as np
import pytest

from errors import InvalidConfiguration
from NoiseModelClass import NoiseModel


@pytest.mark.parametrize("sigmas", [(-0.1, 0.1, 0.1), (0.1, -0.1, 0.1), (0.1, 0.1, -0.1),
                                    (0.1, 0.1, 0.0), (float("nan"), 0.1, 0.1)])
def test_rejects_bad_sigmas(sigmas):
    with pytest.raises(InvalidConfiguration):
        NoiseModel(*sigmas)


def test_zero_process_noise_is_allowed():
    noise = NoiseModel(0.0, 0.0, 1.0, 0)
    assert noise.sample_position(2.0) == 2.0
    np.testing.assert_array_equal(noise.sample_rotation(0.5, 4), np.full(4, 0.5))


def test_same_seed_same_stream():
    a = NoiseModel(0.1, 0.2, 0.3, 123)
    b = NoiseModel(0.1, 0.2, 0.3, 123)
    np.testing.assert_array_equal(a.sample_position(0.0, 10), b.sample_position(0.0, 10))
    np.testing.assert_array_equal(a.sample_sense(0.0, 10), b.sample_sense(0.0, 10))


def test_sample_spread_matches_sigma():
    noise = NoiseModel(0.5, 0.2, 0.3, 7)
    assert np.std(noise.sample_position(0.0, 20000)) == pytest.approx(0.5, rel=0.03)
    assert np.std(noise.sample_rotation(0.0, 20000)) == pytest.approx(0.2, rel=0.03)
    assert np.std(noise.sample_sense(0.0, 20000)) == pytest.approx(0.3, rel=0.03)


def test_measurement_log_likelihood():
    noise = NoiseModel(0.1, 0.1, 2.0, 0)
    log_peak = -0.5 * math.log(2 * math.pi * 4.0)
    assert noise.measurement_log_likelihood([0.0, 0.0]) == pytest.approx(2 * log_peak)
    assert noise.measurement_log_likelihood([2.0]) == pytest.approx(log_peak - 0.5)

    rows = noise.measurement_log_likelihood([[0.0, 0.0], [2.0, 0.0]])
    assert rows.shape == (2,)
    assert rows[0] > rows[1]


def test_log_likelihood_stays_finite_for_tiny_sigma():
    noise = NoiseModel(0.1, 0.1, 1e-200, 0)
    assert np.isfinite(noise.measurement_log_likelihood([0.0, 0.0, 0.0]))


def test_spawned_streams_are_independent_and_reproducible():
    children = NoiseModel(0.1, 0.1, 0.1, 5).spawn(3)
    again = NoiseModel(0.1, 0.1, 0.1, 5).spawn(3)
    draws = [c.sample_position(0.0, 5) for c in children]
    assert not np.array_equal(draws[0], draws[1])
    assert not np.array_equal(draws[1], draws[2])
    for c, d in zip(again, draws):
        np.testing.assert_array_equal(c.sample_position(0.0, 5), d)
    assert children[0].sigma_sense == 0.1
