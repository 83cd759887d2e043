import jax.numpy as jnp
from flax import struct

from .errors import ZeroVectorError
from .utils import dot, cross, reflect, magnitude

# --- Numerical Configuration (Centralized) ---
EPSILON = 1e-5 # Approximate equality, plane-parallel test
SHADOW_EPSILON = EPSILON / 1e7 # Offset of over_point along the surface normal

# w component of the homogeneous tuple
POINT_W = 1.0
VECTOR_W = 0.0


def _approx_equal(a: jnp.ndarray, b: jnp.ndarray) -> bool:
    return a.shape == b.shape and bool(jnp.all(jnp.abs(a - b) < EPSILON))


@struct.dataclass
class Tuple:
    """Homogeneous 4-vector. w == 1 marks a point, w == 0 a vector."""
    data: jnp.ndarray # Shape (4,): x, y, z, w

    @classmethod
    def new(cls, x, y, z, w) -> "Tuple":
        return cls(jnp.array([x, y, z, w], dtype=jnp.float64))

    @property
    def x(self):
        return self.data[0]

    @property
    def y(self):
        return self.data[1]

    @property
    def z(self):
        return self.data[2]

    @property
    def w(self):
        return self.data[3]

    def __getitem__(self, index: int):
        if not 0 <= index < 4:
            raise IndexError(f"Tuple index {index} out of range")
        return self.data[index]

    def is_point(self) -> bool:
        return bool(self.w == POINT_W)

    def is_vector(self) -> bool:
        return bool(self.w == VECTOR_W)

    def __add__(self, other: "Tuple") -> "Tuple":
        return Tuple(self.data + other.data)

    def __sub__(self, other: "Tuple") -> "Tuple":
        return Tuple(self.data - other.data)

    def __neg__(self) -> "Tuple":
        return Tuple(-self.data)

    def __mul__(self, scalar) -> "Tuple":
        return Tuple(self.data * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar) -> "Tuple":
        return Tuple(self.data / scalar)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return _approx_equal(self.data, other.data)

    def magnitude(self):
        return magnitude(self.data)

    def normalize(self) -> "Tuple":
        mag = self.magnitude()
        if mag == 0:
            raise ZeroVectorError(f"Cannot normalize a zero-length tuple: {self.data.tolist()}")
        return Tuple(self.data / mag)

    def dot(self, other: "Tuple"):
        return dot(self.data, other.data)

    def cross(self, other: "Tuple") -> "Tuple":
        return Tuple(cross(self.data, other.data))

    def reflect(self, normal: "Tuple") -> "Tuple":
        return Tuple(reflect(self.data, normal.data))


def point(x, y, z) -> Tuple:
    return Tuple.new(x, y, z, POINT_W)

def vector(x, y, z) -> Tuple:
    return Tuple.new(x, y, z, VECTOR_W)


@struct.dataclass
class Color:
    rgb: jnp.ndarray # Shape (3,)

    @classmethod
    def black(cls) -> "Color":
        return color(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> "Color":
        return color(1.0, 1.0, 1.0)

    @property
    def red(self):
        return self.rgb[0]

    @property
    def green(self):
        return self.rgb[1]

    @property
    def blue(self):
        return self.rgb[2]

    def __add__(self, other: "Color") -> "Color":
        return Color(self.rgb + other.rgb)

    def __sub__(self, other: "Color") -> "Color":
        return Color(self.rgb - other.rgb)

    def __mul__(self, other) -> "Color":
        # Hadamard product for colors, plain scaling otherwise
        if isinstance(other, Color):
            return Color(self.rgb * other.rgb)
        return Color(self.rgb * other)

    __rmul__ = __mul__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return _approx_equal(self.rgb, other.rgb)


def color(red, green, blue) -> Color:
    return Color(jnp.array([red, green, blue], dtype=jnp.float64))


BACKGROUND = Color.black()


@struct.dataclass
class Ray:
    origin: Tuple # Point
    direction: Tuple # Vector, not necessarily normalized

    def position(self, t) -> Tuple:
        return self.origin + self.direction * t

    def transform(self, matrix) -> "Ray":
        """Apply a 4x4 transform to both origin and direction."""
        return Ray(matrix @ self.origin, matrix @ self.direction)


@struct.dataclass
class PointLight:
    position: Tuple # Point in world space
    intensity: Color
