import math
import numpy as np

TWO_PI = 2.0 * math.pi


def normalize_angle(theta):
    """ Wraps an angle, or an array of angles, into the interval [0, 2pi)

    :param theta: angle in radians, float or numpy array
    :returns: the wrapped angle, same type as the input
    """
    if np.ndim(theta) == 0:
        theta = math.fmod(float(theta), TWO_PI)
        if theta < 0:
            theta += TWO_PI
        # fmod of a tiny negative value rounds up to exactly 2pi
        if theta >= TWO_PI:
            theta = 0.0
        return theta

    theta = np.mod(np.asarray(theta, dtype=float), TWO_PI)
    return np.where(theta >= TWO_PI, 0.0, theta)


def angle_difference(a, b):
    """ Signed shortest difference a - b, in [-pi, pi) """
    return (a - b + math.pi) % TWO_PI - math.pi


def euclidean_distance(x1, y1, x2, y2):
    return math.hypot(x2 - x1, y2 - y1)
