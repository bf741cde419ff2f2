import pytest

from clothsim.cloth import Cloth
from clothsim.distance import exact_dist


@pytest.fixture
def make_cloth():
    """Small weightless cloth at the origin, no pins, Euclidean distance unless overridden."""
    def factory(width=3, height=2, **kwargs):
        options = {
            'rest_length': 10,
            'gravity': 0.0,
            'pin': (),
            'distance': exact_dist,
        }
        options.update(kwargs)
        return Cloth((0, 0), width, height, **options)
    return factory
