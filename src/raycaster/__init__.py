import jax

# Approximate equality at 1e-5 and the 1e-12 shadow offset both need f64
jax.config.update("jax_enable_x64", True)

from .errors import RayTracerError, NonInvertibleMatrixError, ZeroVectorError, MissingLightError
from .types import EPSILON, SHADOW_EPSILON, BACKGROUND, Tuple, Color, Ray, PointLight, point, vector, color
from .matrix import (
    Matrix, identity, translation, scaling, rotation_x, rotation_y, rotation_z,
    shearing, chain, view_transform,
)
from .patterns import Pattern
from .materials import Material
from .geometry import Shape, Intersection, Intersections, Computations
from .scene import World
from .canvas import Canvas
from .camera import Camera

__version__ = "0.1.0"
