import functools
import itertools
import uuid
from collections.abc import Sequence
from operator import attrgetter
from typing import Callable, Dict, Iterable, List, Optional

import jax
import jax.numpy as jnp
from flax import struct

from .materials import Material
from .matrix import Matrix
from .types import EPSILON, SHADOW_EPSILON, Ray, Tuple, point, vector
from .utils import dot

# Shape variants
SPHERE = "sphere"
PLANE = "plane"

_ORIGIN = point(0.0, 0.0, 0.0)
_PLANE_NORMAL = vector(0.0, 1.0, 0.0)


# --- Local-Space Intersection Kernels ---

@jax.jit
def _sphere_roots(origin, direction):
    """Quadratic for a unit sphere at the origin. Roots are only meaningful when discriminant >= 0."""
    sphere_to_ray = origin - _ORIGIN.data
    a = dot(direction, direction)
    b = 2.0 * dot(direction, sphere_to_ray)
    c = dot(sphere_to_ray, sphere_to_ray) - 1.0
    discriminant = b * b - 4.0 * a * c

    sqrt_discriminant = jnp.sqrt(jnp.maximum(discriminant, 0.0)) # Avoid NaN on a miss
    t1 = (-b - sqrt_discriminant) / (2.0 * a)
    t2 = (-b + sqrt_discriminant) / (2.0 * a)
    return discriminant, t1, t2

def _intersect_sphere(local_ray: Ray) -> tuple:
    discriminant, t1, t2 = _sphere_roots(local_ray.origin.data, local_ray.direction.data)
    if discriminant < 0:
        return ()
    # Both roots, even negative ones; hit() filters later
    return float(t1), float(t2)

def _intersect_plane(local_ray: Ray) -> tuple:
    direction_y = float(local_ray.direction.y)
    if abs(direction_y) < EPSILON:
        # Parallel or coplanar
        return ()
    return (-float(local_ray.origin.y) / direction_y,)

def _sphere_normal(local_point: Tuple) -> Tuple:
    return local_point - _ORIGIN

def _plane_normal(local_point: Tuple) -> Tuple:
    return _PLANE_NORMAL


_LOCAL_INTERSECT: Dict[str, Callable[[Ray], tuple]] = {
    SPHERE: _intersect_sphere,
    PLANE: _intersect_plane,
}

_LOCAL_NORMAL: Dict[str, Callable[[Tuple], Tuple]] = {
    SPHERE: _sphere_normal,
    PLANE: _plane_normal,
}


@struct.dataclass
class Shape:
    """A primitive with its own object-to-world transform and material.

    `id` is an opaque identity token: two shapes are equal when their tokens
    are, and `replace(...)` keeps the token.
    """
    kind: str = struct.field(pytree_node=False)
    transform: Matrix = struct.field(default_factory=Matrix.identity)
    material: Material = struct.field(default_factory=Material)
    id: uuid.UUID = struct.field(pytree_node=False, default_factory=uuid.uuid4)

    def __post_init__(self):
        if self.kind not in _LOCAL_INTERSECT:
            raise ValueError(f"Unknown shape kind '{self.kind}'")

    @classmethod
    def sphere(cls, **kwargs) -> "Shape":
        """Unit sphere centered at the object-space origin."""
        return cls(SPHERE, **kwargs)

    @classmethod
    def plane(cls, **kwargs) -> "Shape":
        """The object-space xz plane."""
        return cls(PLANE, **kwargs)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def with_transform(self, transform: Matrix) -> "Shape":
        return self.replace(transform=transform)

    def with_material(self, material: Material) -> "Shape":
        return self.replace(material=material)

    @functools.cached_property
    def inverse_transform(self) -> Matrix:
        return self.transform.inverse()

    @functools.cached_property
    def normal_transform(self) -> Matrix:
        return self.inverse_transform.transpose()

    def local_intersect(self, local_ray: Ray) -> List["Intersection"]:
        return [Intersection(t, self) for t in _LOCAL_INTERSECT[self.kind](local_ray)]

    def local_normal_at(self, local_point: Tuple) -> Tuple:
        return _LOCAL_NORMAL[self.kind](local_point)

    def intersect(self, ray: Ray) -> "Intersections":
        """Intersect a world-space ray by first moving it into object space."""
        local_ray = ray.transform(self.inverse_transform)
        return Intersections(self.local_intersect(local_ray))

    def normal_at(self, world_point: Tuple) -> Tuple:
        local_point = self.inverse_transform @ world_point
        local_normal = self.local_normal_at(local_point)
        world_normal = self.normal_transform @ local_normal
        # The inverse-transpose leaks translation into w
        return Tuple(world_normal.data.at[3].set(0.0)).normalize()


@struct.dataclass
class Computations:
    """Shading context for one intersection, valid for a single shading call."""
    t: float
    shape: Shape
    point: Tuple
    over_point: Tuple
    eyev: Tuple
    normalv: Tuple
    inside: bool


@struct.dataclass
class Intersection:
    t: float
    shape: Shape

    def prepare_computations(self, ray: Ray) -> Computations:
        position = ray.position(self.t)
        eyev = -ray.direction
        normalv = self.shape.normal_at(position)

        inside = bool(normalv.dot(eyev) < 0)
        if inside:
            normalv = -normalv

        return Computations(
            t=self.t,
            shape=self.shape,
            point=position,
            over_point=position + normalv * SHADOW_EPSILON,
            eyev=eyev,
            normalv=normalv,
            inside=inside,
        )


class Intersections(Sequence):
    """Intersections of one ray, kept in ascending t order."""

    def __init__(self, intersections: Iterable[Intersection] = ()):
        # sorted() is stable, so equal t values keep their input order
        self._items = sorted(intersections, key=attrgetter("t"))

    @classmethod
    def merge(cls, *collections: Iterable[Intersection]) -> "Intersections":
        return cls(itertools.chain.from_iterable(collections))

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Intersections(t={[i.t for i in self._items]})"

    def hit(self) -> Optional[Intersection]:
        """Lowest non-negative intersection, or None when every t is negative."""
        for intersection in self._items:
            if intersection.t >= 0:
                return intersection
        return None
