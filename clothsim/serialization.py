import json
import logging

from .Particle import Particle
from .Vec2 import Vec2
from .DistanceConstraint import DistanceConstraint
from .cloth import Cloth
from .distance import approx_dist, exact_dist

logger = logging.getLogger(__name__)

_DISTANCES = {'approx': approx_dist, 'exact': exact_dist}


class ClothEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, Vec2):
            return {'__class__': 'Vec2', 'x': obj.x, 'y': obj.y}
        if isinstance(obj, Particle):
            return {'__class__': 'Particle', **obj.to_dict()}
        return super().default(obj)


def cloth_decoder(dct):
    if '__class__' in dct:
        class_name = dct['__class__']
        if class_name == 'Vec2':
            return Vec2(dct['x'], dct['y'])
        if class_name == 'Particle':
            p = Particle(dct['pos'], dct['acceleration'], dct['radius'])
            p.old_pos = Vec2.of(dct['old_pos'])
            p.anchored = bool(dct['anchored'])
            p.anchor = Vec2.of(dct['anchor'])
            return p
    return dct


def _distance_name(distance):
    for name, fn in _DISTANCES.items():
        if fn is distance:
            return name
    raise ValueError(f"cannot serialize custom distance strategy {distance!r}")


def cloth_to_data(cloth):
    index = {}
    for i, column in enumerate(cloth.particles):
        for j, p in enumerate(column):
            index[id(p)] = (i, j)

    return {
        'config': {
            'origin': cloth.origin,
            'width': cloth.width,
            'height': cloth.height,
            'rest_length': cloth.rest_length,
            'gravity': cloth.gravity,
            'delta_time': cloth.delta_time,
            'iterations': cloth.iterations,
            'distance': _distance_name(cloth.distance),
            'pick_radius': cloth.pick_radius,
            'tear_radius': cloth.tear_radius,
        },
        'particles': cloth.particles,
        # particles are stored by grid index so shared references survive the round trip
        'constraints': [
            {'p1': index[id(c.p1)], 'p2': index[id(c.p2)], 'rest_length': c.rest_length}
            for c in cloth.constraints
        ],
    }


def cloth_from_data(data):
    config = dict(data['config'])
    config['distance'] = _DISTANCES[config['distance']]
    cloth = Cloth(pin=(), **config)

    particles = data['particles']
    if len(particles) != cloth.width or any(len(col) != cloth.height for col in particles):
        raise ValueError("snapshot particle grid does not match its configured size")
    cloth.particles = particles

    def in_grid(index):
        i, j = index
        return 0 <= i < cloth.width and 0 <= j < cloth.height

    constraints = []
    for c_data in data['constraints']:
        if not (in_grid(c_data['p1']) and in_grid(c_data['p2'])):
            raise ValueError(f"constraint refers to a particle outside the grid: {c_data}")
        p1 = cloth.particle_at(c_data['p1'])
        p2 = cloth.particle_at(c_data['p2'])
        constraints.append(DistanceConstraint(p1, p2, c_data['rest_length']))
    cloth.constraints = constraints
    cloth.anchors = [p for p in cloth.iter_particles() if p.anchored]
    return cloth


def save_cloth(cloth, filename):
    data = cloth_to_data(cloth)
    with open(filename, 'w') as f:
        json.dump(data, f, cls=ClothEncoder, indent=4)
    logger.info("saved cloth snapshot to %s (%d constraints)", filename, len(cloth.constraints))


def load_cloth(filename):
    with open(filename, 'r') as f:
        data = json.load(f, object_hook=cloth_decoder)
    cloth = cloth_from_data(data)
    logger.info("loaded cloth snapshot from %s (%d constraints)", filename, len(cloth.constraints))
    return cloth
