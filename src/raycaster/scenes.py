import math

from .camera import Camera
from .geometry import Shape
from .materials import Material
from .matrix import chain, scaling, translation, view_transform
from .patterns import Pattern
from .scene import World
from .types import Color, PointLight, color, point, vector


def demo_world(checkered_floor: bool = False) -> World:
    """Three spheres resting on a floor plane, lit from the upper left."""
    if checkered_floor:
        floor_pattern = Pattern.checkers(color(1.0, 0.9, 0.9), color(0.2, 0.2, 0.2))
    else:
        floor_pattern = Pattern.solid(color(1.0, 0.9, 0.9))
    floor = Shape.plane(material=Material(pattern=floor_pattern, specular=0.0))

    middle = Shape.sphere(
        transform=translation(-0.5, 1.0, 0.5),
        material=Material(pattern=Pattern.solid(color(0.1, 1.0, 0.5)), diffuse=0.6, specular=0.7),
    )
    right = Shape.sphere(
        transform=chain(scaling(0.5, 0.5, 0.5), translation(1.5, 0.5, -0.5)),
        material=Material(pattern=Pattern.solid(color(0.5, 1.0, 0.1)), diffuse=0.7, specular=0.3),
    )
    left = Shape.sphere(
        transform=chain(scaling(0.33, 0.33, 0.33), translation(-1.5, 0.33, -0.75)),
        material=Material(pattern=Pattern.solid(color(1.0, 0.8, 0.1)), diffuse=0.7, specular=0.3),
    )

    light = PointLight(point(-10.0, 10.0, -10.0), Color.white())
    return World(shapes=(floor, middle, right, left), light=light)


def demo_camera(width: int, height: int, fov: float = math.pi / 3.0) -> Camera:
    camera = Camera(width, height, fov)
    return camera.with_transform(view_transform(
        point(0.0, 1.5, -5.0),
        point(0.0, 1.0, 0.0),
        vector(0.0, 1.0, 0.0),
    ))
