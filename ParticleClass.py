
class Particle():
    """ Data storage class for particles """

    def __init__(self, x, w):
        """ Instantiates the class
        :param x: list of particle position and heading, given as [x, y, theta]
        :param w: importance weight of particle, determined by measurement likelihood
        :type w: float
        """
        self.pose = [float(x[0]), float(x[1]), float(x[2])]
        self.weight = float(w)

    @property
    def x(self):
        return self.pose[0]

    @property
    def y(self):
        return self.pose[1]

    @property
    def theta(self):
        return self.pose[2]

    def set_pose(self, x):
        self.pose = [float(x[0]), float(x[1]), float(x[2])]

    def set_weight(self, w):
        self.weight = float(w)

    def copy(self):
        """ Returns an independent particle with the same pose and weight """
        return Particle(self.pose, self.weight)

    def __repr__(self):
        return "Particle(pose={}, weight={})".format(self.pose, self.weight)
