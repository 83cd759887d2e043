import pytest

from raycaster.geometry import Shape
from raycaster.scene import World


@pytest.fixture
def default_world():
    return World.default()

@pytest.fixture
def unit_sphere():
    return Shape.sphere()
