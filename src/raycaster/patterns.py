import functools
import math
from typing import Callable, Dict

import jax.numpy as jnp
from flax import struct

from .matrix import Matrix
from .types import Color, Tuple

# Pattern variants
SOLID = "solid"
STRIPE = "stripe"
RING = "ring"
CHECKERS = "checkers"
GRADIENT = "gradient"
RADIAL_GRADIENT = "radial_gradient"
BLENDED = "blended"


@struct.dataclass
class Pattern:
    """Procedural texture evaluated in its own pattern space.

    `colors` holds the variant's colors (one for solid, two for the others);
    `layers` holds the two nested patterns of a blended pattern.
    """
    kind: str = struct.field(pytree_node=False)
    colors: tuple = ()
    layers: tuple = ()
    transform: Matrix = struct.field(default_factory=Matrix.identity)

    def __post_init__(self):
        if self.kind not in _PATTERN_FUNCTIONS:
            raise ValueError(f"Unknown pattern kind '{self.kind}'")

    # --- Factories ---

    @classmethod
    def solid(cls, c: Color) -> "Pattern":
        return cls(SOLID, colors=(c,))

    @classmethod
    def stripe(cls, a: Color, b: Color) -> "Pattern":
        return cls(STRIPE, colors=(a, b))

    @classmethod
    def ring(cls, a: Color, b: Color) -> "Pattern":
        return cls(RING, colors=(a, b))

    @classmethod
    def checkers(cls, a: Color, b: Color) -> "Pattern":
        return cls(CHECKERS, colors=(a, b))

    @classmethod
    def gradient(cls, a: Color, b: Color) -> "Pattern":
        return cls(GRADIENT, colors=(a, b))

    @classmethod
    def radial_gradient(cls, a: Color, b: Color) -> "Pattern":
        return cls(RADIAL_GRADIENT, colors=(a, b))

    @classmethod
    def blended(cls, a: "Pattern", b: "Pattern") -> "Pattern":
        return cls(BLENDED, layers=(a, b))

    def with_transform(self, transform: Matrix) -> "Pattern":
        return self.replace(transform=transform)

    @functools.cached_property
    def inverse_transform(self) -> Matrix:
        return self.transform.inverse()

    # --- Evaluation ---

    def pattern_at(self, pattern_point: Tuple) -> Color:
        """Evaluate the variant function on a point already in pattern space."""
        return _PATTERN_FUNCTIONS[self.kind](self, pattern_point)

    def color_at_object(self, object_point: Tuple) -> Color:
        return self.pattern_at(self.inverse_transform @ object_point)

    def color_at(self, shape, world_point: Tuple) -> Color:
        """World point -> shape's object space -> pattern space -> color."""
        return self.color_at_object(shape.inverse_transform @ world_point)


def _alternate(pattern: Pattern, value: float) -> Color:
    a, b = pattern.colors
    return a if math.floor(value) % 2 == 0 else b

def _interpolate(pattern: Pattern, value: float) -> Color:
    a, b = pattern.colors
    fraction = value - math.floor(value)
    return a + (b - a) * fraction

def _radius(p: Tuple) -> float:
    return float(jnp.sqrt(p.x * p.x + p.z * p.z))

def _solid(pattern, p):
    return pattern.colors[0]

def _stripe(pattern, p):
    return _alternate(pattern, float(p.x))

def _ring(pattern, p):
    return _alternate(pattern, _radius(p))

def _checkers(pattern, p):
    total = math.floor(float(p.x)) + math.floor(float(p.y)) + math.floor(float(p.z))
    return _alternate(pattern, total)

def _gradient(pattern, p):
    return _interpolate(pattern, float(p.x))

def _radial_gradient(pattern, p):
    return _interpolate(pattern, _radius(p))

def _blended(pattern, p):
    # Each layer maps the point through its own transform
    a, b = pattern.layers
    return (a.color_at_object(p) + b.color_at_object(p)) * 0.5


_PATTERN_FUNCTIONS: Dict[str, Callable[[Pattern, Tuple], Color]] = {
    SOLID: _solid,
    STRIPE: _stripe,
    RING: _ring,
    CHECKERS: _checkers,
    GRADIENT: _gradient,
    RADIAL_GRADIENT: _radial_gradient,
    BLENDED: _blended,
}
