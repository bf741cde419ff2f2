from clothsim.Vec2 import Vec2


class Particle:
    """
    A point mass integrated with Verlet. Velocity is implicit in pos - old_pos.
    The radius is for display only.
    """

    def __init__(self, pos, acceleration=None, radius=0.5):
        self.pos = Vec2.of(pos)
        # zero initial velocity
        self.old_pos = self.pos.copy()
        self.acceleration = Vec2.of(acceleration) if acceleration is not None else Vec2(0.0, 0.0)
        self.radius = radius

        self.anchored = False
        self.anchor = self.pos.copy()

    def move_to(self, pos):
        """Teleports the particle, dropping any carried velocity."""
        x, y = pos
        self.pos.set(x, y)
        self.old_pos.set(x, y)

    def pin(self):
        # snap to the anchor target
        self.pos.set(self.anchor.x, self.anchor.y)
        self.old_pos.set(self.anchor.x, self.anchor.y)

    def __repr__(self):
        return (f"Particle(pos=({self.pos.x:.2f}, {self.pos.y:.2f}), "
                f"old_pos=({self.old_pos.x:.2f}, {self.old_pos.y:.2f}), anchored={self.anchored})")

    def __str__(self):
        return self.__repr__()

    def to_dict(self):
        return {
            'pos': self.pos.as_tuple(),
            'old_pos': self.old_pos.as_tuple(),
            'acceleration': self.acceleration.as_tuple(),
            'radius': self.radius,
            'anchored': self.anchored,
            'anchor': self.anchor.as_tuple(),
        }
