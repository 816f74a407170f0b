
class LandmarkMap():
    '''Static map of walls and range landmarks'''

    def __init__(self, walls, landmarks):
        """ Instantiates the class
        :param walls: list of wall segments, each given as ((x1, y1), (x2, y2))
        :param landmarks: list of landmark positions, each given as (x, y)
        """
        self.walls = tuple((tuple(map(float, a)), tuple(map(float, b))) for a, b in walls)
        self.landmarks = tuple((float(x), float(y)) for x, y in landmarks)

    @classmethod
    def square_room(cls, size=10.0):
        """ Square room with its corner at the origin and a landmark in every corner """
        corners = [(0.0, 0.0), (size, 0.0), (size, size), (0.0, size)]
        walls = [(corners[i], corners[(i + 1) % 4]) for i in range(4)]
        landmarks = [(0.0, 0.0), (0.0, size), (size, size), (size, 0.0)]
        return cls(walls, landmarks)

    def get_walls(self):
        return self.walls

    def get_landmarks(self):
        return self.landmarks
