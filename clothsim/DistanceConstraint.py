from clothsim.Vec2 import Vec2
from clothsim.distance import approx_dist


class DistanceConstraint:
    """
    Keeps two particles rest_length apart. Both endpoints take half of the
    correction, so repeated passes relax the mesh Gauss-Seidel style.
    """

    def __init__(self, p1, p2, rest_length):
        rest_length = float(rest_length)
        if rest_length <= 0.0:
            raise ValueError(f"rest_length must be positive, got {rest_length}")
        self.p1 = p1
        self.p2 = p2
        self.rest_length = rest_length

    def length(self, distance=approx_dist):
        return distance(self.p2.pos.x - self.p1.pos.x, self.p2.pos.y - self.p1.pos.y)

    def midpoint(self):
        return Vec2((self.p1.pos.x + self.p2.pos.x) * 0.5, (self.p1.pos.y + self.p2.pos.y) * 0.5)

    def relax(self, distance=approx_dist, eps=1e-9):
        """
        Moves both endpoints toward rest_length. Returns False when the
        endpoints coincide and no correction was applied.
        """
        p1 = self.p1.pos
        p2 = self.p2.pos
        dx = p2.x - p1.x
        dy = p2.y - p1.y

        dlen = distance(dx, dy)
        if dlen < eps:
            return False

        # positive when stretched: p1 moves toward p2, p2 toward p1
        diff = (dlen - self.rest_length) / dlen * 0.5
        p1.x += dx * diff
        p1.y += dy * diff
        p2.x -= dx * diff
        p2.y -= dy * diff
        return True

    def __repr__(self):
        return f"<{self.__class__.__name__} p1={self.p1} p2={self.p2} rest_length={self.rest_length}>"

    def __str__(self):
        return self.__repr__()
