import math

import numpy as np

import util


class Robot(object):
    """ Simulated ground truth agent producing noisy motion and range readings """

    def __init__(self, noise, x, y, theta):
        """ Instantiates the class
        :param noise: NoiseModel for the true motion and sensor noise,
            separate from the one given to the filter
        :param x: starting x position
        :param y: starting y position
        :param theta: starting heading in radians
        """
        self.noise = noise
        self.x = float(x)
        self.y = float(y)
        self.theta = util.normalize_angle(theta)

    def move_forward(self, distance):
        noisy_distance = float(self.noise.sample_position(distance))
        self.x += noisy_distance * math.cos(self.theta)
        self.y += noisy_distance * math.sin(self.theta)

    def rotate(self, rotation):
        noisy_rotation = float(self.noise.sample_rotation(rotation))
        self.theta = util.normalize_angle(self.theta + noisy_rotation)

    def sense_all_landmarks(self, landmarks):
        """ Measures the range to every landmark

        :param landmarks: sequence of landmark positions (x, y)
        :returns: list of noisy ranges, in landmark order
        """
        landmarks = np.asarray(landmarks, dtype=float).reshape(-1, 2)
        ranges = np.hypot(landmarks[:, 0] - self.x, landmarks[:, 1] - self.y)
        return (ranges + self.noise.sample_sense(0.0, len(ranges))).tolist()

    def get_pose(self):
        return [self.x, self.y, self.theta]

    def print_state(self):
        print("Robot state: x = {:.4f}, y = {:.4f}, theta = {:.4f}".format(self.x, self.y, self.theta))
