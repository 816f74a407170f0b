from ParticleClass import *
from errors import EmptyPopulation, InputContractViolation, InvalidConfiguration, DegenerateWeights
import util
from collections import namedtuple
import numpy as np
import logging
import math
import warnings

logger = logging.getLogger(__name__)

# Keeps the effective sample size finite when every weight is zero
NEFF_EPSILON = 1e-12

PoseEstimate = namedtuple("PoseEstimate", ["x", "y", "theta"])


def effective_sample_size(weights, epsilon=NEFF_EPSILON):
    """ Calculates the effective sample size of a weight vector

    The value is clamped to the number of weights, so an all zero vector
    reports a full population instead of 1/epsilon.

    :param weights: importance weights, normalized to sum to one
    :returns: effective sample size value (varies from 1.0 to len(weights))
    :rtype: float
    """
    weights = np.asarray(weights, dtype=float)
    if weights.size == 0:
        raise EmptyPopulation("effective sample size of an empty weight vector")
    ESS = 1.0 / (np.inner(weights, weights) + epsilon)
    return float(min(ESS, weights.size))


def resample_particles(particles, weights, noise):
    """ Draws a new population with replacement, proportional to weight

    The input population is left untouched. Drawn particles are copies that
    carry their old weight until the next weighting pass overwrites it.

    :param particles: list of Particle to draw from
    :param weights: importance weight of each particle
    :param noise: NoiseModel providing the random stream
    :returns: list of Particle with the same length as particles
    """
    nbr_particles = len(particles)
    if nbr_particles == 0:
        raise EmptyPopulation("cannot resample an empty population")

    weights = np.asarray(weights, dtype=float)
    if weights.shape != (nbr_particles,):
        raise InputContractViolation(
            "expected {} weights, got shape {}".format(nbr_particles, weights.shape))

    total = np.sum(weights)
    if not np.isfinite(total) or total <= 0:
        warnings.warn("all particle weights are zero, resampling uniformly", DegenerateWeights)
        probabilities = None
    else:
        probabilities = weights / total

    indices = noise.choice(nbr_particles, nbr_particles, probabilities)
    return [particles[i].copy() for i in indices]


class ParticleFilter(object):
    """ Localization against known range landmarks using a particle filter """

    def __init__(self, noise):
        """ Instantiates the class
        :param noise: NoiseModel holding the process and measurement noise
            and the random stream used by every filter operation
        """
        self.noise = noise
        self.particles = []
        self.resample_count = 0

    @property
    def nbr_particles(self):
        return len(self.particles)

    @property
    def weights(self):
        return np.array([p.weight for p in self.particles], dtype=float)

    def _require_particles(self, action):
        if not self.particles:
            raise EmptyPopulation("cannot {} without particles, call initialize_particles first".format(action))

    def initialize_particles(self, x, y, theta, nbr_particles):
        """ Populates the filter with samples around an initial pose guess

        :param x: initial x position guess
        :param y: initial y position guess
        :param theta: initial heading guess in radians
        :param nbr_particles: how many particle samples to populate the filter with
        :type nbr_particles: int
        """
        if isinstance(nbr_particles, bool) or not isinstance(nbr_particles, (int, np.integer)) or nbr_particles <= 0:
            raise InvalidConfiguration("nbr_particles must be a positive integer, got {}".format(nbr_particles))
        nbr_particles = int(nbr_particles)

        xs = self.noise.sample_position(x, nbr_particles)
        ys = self.noise.sample_position(y, nbr_particles)
        thetas = util.normalize_angle(self.noise.sample_rotation(theta, nbr_particles))

        weight = 1.0 / nbr_particles
        self.particles = [Particle([xs[i], ys[i], thetas[i]], weight) for i in range(nbr_particles)]
        self.resample_count = 0
        logger.debug("Initialized %d particles around (%.3f, %.3f, %.3f)", nbr_particles, x, y, theta)

    def update_motion(self, distance, rotation):
        """ Moves every particle by the control input, with independent noise per particle

        :param distance: commanded forward displacement
        :param rotation: commanded heading change in radians
        """
        noisy_distances = self.noise.sample_position(distance, self.nbr_particles)
        noisy_rotations = self.noise.sample_rotation(rotation, self.nbr_particles)

        for i, particle in enumerate(self.particles):
            x = particle.x + noisy_distances[i] * math.cos(particle.theta)
            y = particle.y + noisy_distances[i] * math.sin(particle.theta)
            theta = util.normalize_angle(particle.theta + noisy_rotations[i])
            particle.set_pose([x, y, theta])

    def calculate_weights(self, measurements, landmarks):
        """ Scores every particle by the likelihood of the range measurements

        :param measurements: observed range to each landmark, in landmark order
        :param landmarks: known landmark positions as a sequence of (x, y)
        :returns: True if the weights were normalized, False if they all vanished
        """
        self._require_particles("calculate weights")
        measurements, landmarks = self._check_measurements(measurements, landmarks)

        positions = np.array([[p.x, p.y] for p in self.particles])
        offsets = landmarks[np.newaxis, :, :] - positions[:, np.newaxis, :]
        expected = np.hypot(offsets[:, :, 0], offsets[:, :, 1])
        log_likelihoods = self.noise.measurement_log_likelihood(measurements[np.newaxis, :] - expected)

        # Shift so the best particle scores 1, densities can overflow for a tiny sigma_sense
        likelihoods = np.zeros(self.nbr_particles)
        finite = np.isfinite(log_likelihoods)
        if np.any(finite):
            likelihoods[finite] = np.exp(log_likelihoods[finite] - np.max(log_likelihoods[finite]))

        for particle, likelihood in zip(self.particles, likelihoods):
            particle.set_weight(likelihood)

        return self.normalize_weights()

    def normalize_weights(self):
        """ Re-scales the particle weights so that the sum equals one

        Weights are left as they are when the total mass is zero.
        """
        denominator = np.sum(self.weights)

        if not np.isfinite(denominator) or denominator <= 0:
            warnings.warn("total particle weight is {}, leaving weights un-normalized".format(denominator),
                          DegenerateWeights)
            return False

        scale_factor = 1.0 / denominator
        for particle in self.particles:
            particle.weight *= scale_factor
        return True

    def calculate_ESS(self):
        """ Calculates the effective sample size of particle set """
        self._require_particles("calculate the effective sample size")
        return effective_sample_size(self.weights)

    def resample_if_needed(self):
        """ Resamples the particle set when fewer than half the particles carry the mass

        :returns: True if the population was replaced
        """
        ESS = self.calculate_ESS()
        if ESS >= self.nbr_particles / 2:
            return False

        self.particles = resample_particles(self.particles, self.weights, self.noise)
        self.resample_count += 1
        logger.debug("Resampled %d particles (ESS %.2f)", self.nbr_particles, ESS)
        return True

    def estimate_state(self):
        """ Reduces the particle set to a single pose

        Position is the mean over particles, heading is the circular mean
        wrapped into [0, 2pi).

        :returns: PoseEstimate(x, y, theta)
        """
        self._require_particles("estimate the state")

        poses = np.array([p.pose for p in self.particles])
        # Offsets from the first particle keep an identical population exact
        reference = poses[0]
        offsets = poses - reference
        x = reference[0] + np.mean(offsets[:, 0])
        y = reference[1] + np.mean(offsets[:, 1])
        theta = reference[2] + math.atan2(np.mean(np.sin(offsets[:, 2])), np.mean(np.cos(offsets[:, 2])))
        return PoseEstimate(float(x), float(y), util.normalize_angle(theta))

    def update_and_estimate(self, distance, rotation, measurements, landmarks):
        """ Runs one filter step: motion update, weighting, resampling, estimation

        The measurements are checked first so a rejected step leaves the
        population untouched.

        :param distance: commanded forward displacement since the last step
        :param rotation: commanded heading change since the last step
        :param measurements: observed range to each landmark
        :param landmarks: known landmark positions as a sequence of (x, y)
        :returns: PoseEstimate(x, y, theta)
        """
        self._require_particles("run a filter step")
        self._check_measurements(measurements, landmarks)

        self.update_motion(distance, rotation)
        self.calculate_weights(measurements, landmarks)
        self.resample_if_needed()
        return self.estimate_state()

    def _check_measurements(self, measurements, landmarks):
        measurements = np.asarray(measurements, dtype=float).reshape(-1)
        landmarks = np.asarray(landmarks, dtype=float)
        if landmarks.size == 0:
            landmarks = landmarks.reshape(0, 2)
        elif landmarks.ndim != 2 or landmarks.shape[1] != 2:
            raise InputContractViolation("landmarks must be a sequence of (x, y), got shape {}".format(landmarks.shape))
        if measurements.shape[0] != landmarks.shape[0]:
            raise InputContractViolation(
                "got {} measurements for {} landmarks".format(measurements.shape[0], landmarks.shape[0]))
        return measurements, landmarks
