import logging

import numpy as np
from scipy.stats import norm

from errors import InvalidConfiguration

logger = logging.getLogger(__name__)


class NoiseModel(object):
    """ Gaussian process and measurement noise, drawn from an owned random stream """

    def __init__(self, sigma_pos, sigma_rot, sigma_sense, seed=None):
        """ Instantiates the class
        :param sigma_pos: standard deviation of translation noise
        :param sigma_rot: standard deviation of rotation noise
        :param sigma_sense: standard deviation of range measurement noise
        :param seed: seed for the random stream, an int or a numpy SeedSequence.
            None draws fresh entropy from the operating system
        """
        for name, sigma in (("sigma_pos", sigma_pos),
                            ("sigma_rot", sigma_rot),
                            ("sigma_sense", sigma_sense)):
            if not np.isfinite(sigma) or sigma < 0:
                raise InvalidConfiguration(
                    "{} must be a finite value >= 0, got {}".format(name, sigma))
        if sigma_sense == 0:
            raise InvalidConfiguration("sigma_sense must be > 0 to define a likelihood")

        self.sigma_pos = float(sigma_pos)
        self.sigma_rot = float(sigma_rot)
        self.sigma_sense = float(sigma_sense)

        if isinstance(seed, np.random.SeedSequence):
            self.seed_sequence = seed
        else:
            self.seed_sequence = np.random.SeedSequence(seed)
        self.rng = np.random.default_rng(self.seed_sequence)

    def sample_position(self, mean=0.0, size=None):
        """ Draws translation noise around mean """
        return self.rng.normal(mean, self.sigma_pos, size)

    def sample_rotation(self, mean=0.0, size=None):
        """ Draws rotation noise around mean """
        return self.rng.normal(mean, self.sigma_rot, size)

    def sample_sense(self, mean=0.0, size=None):
        """ Draws range measurement noise around mean """
        return self.rng.normal(mean, self.sigma_sense, size)

    def measurement_log_likelihood(self, residuals):
        """ Log likelihood of a set of range residuals, assuming independent noise

        :param residuals: measured minus expected ranges, shape (..., nbr_landmarks)
        :returns: sum of zero mean gaussian log densities over the last axis
        """
        residuals = np.asarray(residuals, dtype=float)
        return np.sum(norm.logpdf(residuals, loc=0.0, scale=self.sigma_sense), axis=-1)

    def choice(self, n, size, p=None):
        """ Draws size indices from range(n), with replacement, according to p """
        return self.rng.choice(n, size=size, replace=True, p=p)

    def spawn(self, n):
        """ Creates independent noise models for concurrent workers

        :param n: number of child streams
        :returns: list of NoiseModel sharing the sigmas but not the random stream
        """
        children = self.seed_sequence.spawn(n)
        logger.debug("Spawned %d independent noise streams", n)
        return [NoiseModel(self.sigma_pos, self.sigma_rot, self.sigma_sense, child)
                for child in children]
