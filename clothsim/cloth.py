import logging

import numpy as np

import constants
from clothsim.DistanceConstraint import DistanceConstraint
from clothsim.Particle import Particle
from clothsim.Vec2 import Vec2
from clothsim.distance import approx_dist, vectorised

logger = logging.getLogger(__name__)

PIN_NAMES = ('top_left', 'top_right', 'top_center')


class Cloth:
    def __init__(self, origin, width, height,
                 rest_length=constants.REST_LENGTH,
                 gravity=constants.GRAVITY,
                 delta_time=constants.DELTA_TIME,
                 iterations=constants.CONSTRAINT_ITERATIONS,
                 pin=PIN_NAMES,
                 distance=approx_dist,
                 pick_radius=constants.PICK_RADIUS,
                 tear_radius=constants.TEAR_RADIUS,
                 particle_radius=constants.PARTICLE_RADIUS):
        """
        A grid of particles joined by structural distance constraints.

        :param origin: (x, y) of particle (0, 0), the bottom-left corner.
        :param width: Particles per row (columns), at least 2.
        :param height: Particles per column (rows), at least 2.
        :param rest_length: Grid spacing and rest length of every constraint.
        :param gravity: Vertical acceleration given to every particle (negative is down).
        :param delta_time: Fixed Verlet timestep.
        :param iterations: Relaxation passes per relax() call.
        :param pin: Initially anchored particles, any of 'top_left', 'top_right', 'top_center'.
        :param distance: Distance strategy used by both the solver and picking.
        :param pick_radius: Max distance for picking a particle, None for unlimited.
        :param tear_radius: Half-size of the tear box, None for rest_length.
        """
        width = int(width)
        height = int(height)
        if width < 2 or height < 2:
            raise ValueError(f"cloth grid must be at least 2x2, got {width}x{height}")
        if rest_length <= 0:
            raise ValueError(f"rest_length must be positive, got {rest_length}")
        if int(iterations) < 1:
            raise ValueError(f"iterations must be at least 1, got {iterations}")
        unknown = [name for name in pin if name not in PIN_NAMES]
        if unknown:
            raise ValueError(f"unknown pin names {unknown}, expected any of {PIN_NAMES}")

        self.origin = Vec2.of(origin)
        self.width = width
        self.height = height
        self.rest_length = float(rest_length)
        self.gravity = float(gravity)
        self.delta_time = float(delta_time)
        self.iterations = int(iterations)
        self.pin_names = tuple(pin)
        self.distance = distance
        self.pick_radius = pick_radius
        self.tear_radius = self.rest_length if tear_radius is None else float(tear_radius)
        self.particle_radius = particle_radius

        self.particles: list[list[Particle]] = []
        self.constraints: list[DistanceConstraint] = []
        self.anchors: list[Particle] = []

        self._build_particles()
        self.build_constraints()
        self._pin_initial(self.pin_names)

        logger.info("cloth %dx%d built: %d particles, %d constraints, %d anchors",
                    self.width, self.height, self.width * self.height,
                    len(self.constraints), len(self.anchors))

    def _build_particles(self):
        gravity = Vec2(0.0, self.gravity)
        ox, oy = self.origin.x, self.origin.y
        for i in range(self.width):
            column = []
            for j in range(self.height):
                pos = Vec2(ox + i * self.rest_length, oy + j * self.rest_length)
                column.append(Particle(pos, acceleration=gravity, radius=self.particle_radius))
            self.particles.append(column)

    def build_constraints(self):
        """
        Structural links only: each particle to its right neighbour and to the one above.
        """
        self.constraints = []
        for i in range(self.width):
            for j in range(self.height):
                p = self.particles[i][j]
                if i + 1 < self.width:
                    self.constraints.append(DistanceConstraint(self.particles[i + 1][j], p, self.rest_length))
                if j + 1 < self.height:
                    self.constraints.append(DistanceConstraint(self.particles[i][j + 1], p, self.rest_length))

    def _pin_initial(self, names):
        top = self.height - 1
        columns = {
            'top_left': 0,
            'top_right': self.width - 1,
            'top_center': (self.width - 1) // 2,
        }
        for name in names:
            self.anchor(self.particles[columns[name]][top])

    # --- grid access ---

    def particle_at(self, index):
        i, j = index
        return self.particles[i][j]

    def index_of(self, particle):
        for i, column in enumerate(self.particles):
            for j, p in enumerate(column):
                if p is particle:
                    return (i, j)
        return None

    def iter_particles(self):
        for column in self.particles:
            yield from column

    # --- anchoring ---

    def anchor(self, particle, target=None):
        """Anchors a particle to target (defaults to where it is now)."""
        if target is None:
            target = particle.pos
        x, y = target
        particle.anchor.set(x, y)
        if not particle.anchored:
            particle.anchored = True
            self.anchors.append(particle)
            logger.debug("anchored %s", particle)

    def release(self, particle):
        if not particle.anchored:
            return
        particle.anchored = False
        self.anchors = [p for p in self.anchors if p is not particle]
        logger.debug("released %s", particle)

    # --- per frame ---

    def integrate(self):
        """
        Verlet step for every particle, anchored ones included; anchors are
        restored by relax().
        """
        dt2 = self.delta_time * self.delta_time
        for column in self.particles:
            for p in column:
                pos = p.pos
                old = p.old_pos
                x, y = pos.x, pos.y
                pos.x = x + (x - old.x) + p.acceleration.x * dt2
                pos.y = y + (y - old.y) + p.acceleration.y * dt2
                old.x = x
                old.y = y

    def relax(self):
        """Runs the relaxation passes, re-pinning anchors after each one."""
        distance = self.distance
        for _ in range(self.iterations):
            for c in self.constraints:
                c.relax(distance)
            for p in self.anchors:
                p.pin()

    def step(self):
        self.integrate()
        self.relax()

    # --- interaction queries ---

    def _positions(self):
        n = self.width * self.height
        xs = np.fromiter((p.pos.x for p in self.iter_particles()), dtype=np.float64, count=n)
        ys = np.fromiter((p.pos.y for p in self.iter_particles()), dtype=np.float64, count=n)
        return xs, ys

    def closest_particle(self, pos):
        """
        Grid index (i, j) of the particle nearest to pos, or None when
        pick_radius is set and nothing lies within it.
        """
        x, y = pos
        xs, ys = self._positions()
        dists = vectorised(self.distance)(xs - x, ys - y)
        k = int(np.argmin(dists))
        if self.pick_radius is not None and dists[k] > self.pick_radius:
            return None
        return divmod(k, self.height)

    def tear(self, pos):
        """
        Removes every constraint whose midpoint lies inside the tear box around
        pos. Returns how many were removed.
        """
        if not self.constraints:
            return 0
        x, y = pos
        n = len(self.constraints)
        mx = np.fromiter(((c.p1.pos.x + c.p2.pos.x) * 0.5 for c in self.constraints), dtype=np.float64, count=n)
        my = np.fromiter(((c.p1.pos.y + c.p2.pos.y) * 0.5 for c in self.constraints), dtype=np.float64, count=n)
        hit = (np.abs(mx - x) < self.tear_radius) & (np.abs(my - y) < self.tear_radius)

        removed = int(np.count_nonzero(hit))
        if removed:
            self.constraints = [c for c, torn in zip(self.constraints, hit) if not torn]
            logger.debug("tore %d constraints at (%.1f, %.1f), %d left", removed, x, y, len(self.constraints))
        return removed

    def __repr__(self):
        return (f"<{self.__class__.__name__} {self.width}x{self.height} "
                f"constraints={len(self.constraints)} anchors={len(self.anchors)}>")
