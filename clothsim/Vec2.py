class Vec2:
    """Mutable 2D vector. Positions are updated in place by the solver."""

    def __init__(self, x, y):
        self.x = float(x)
        self.y = float(y)

    @classmethod
    def of(cls, value):
        """Accepts a Vec2 or any (x, y) pair and returns a new Vec2."""
        if isinstance(value, Vec2):
            return value.copy()
        return cls(value[0], value[1])

    def set(self, x, y):
        self.x = float(x)
        self.y = float(y)

    def __iter__(self):
        yield self.x
        yield self.y

    def copy(self):
        return Vec2(self.x, self.y)

    def as_tuple(self):
        return (self.x, self.y)

    def __eq__(self, other):
        if isinstance(other, Vec2):
            return self.x == other.x and self.y == other.y
        if isinstance(other, tuple) and len(other) == 2:
            return self.x == other[0] and self.y == other[1]
        return NotImplemented

    def __repr__(self):
        return f"Vec2({self.x:.3f}, {self.y:.3f})"
