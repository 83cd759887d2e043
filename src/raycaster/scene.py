from typing import Optional

from flax import struct

from .errors import MissingLightError
from .geometry import Computations, Intersections, Shape
from .materials import Material
from .matrix import scaling
from .patterns import Pattern
from .types import BACKGROUND, Color, PointLight, Ray, Tuple, color, point

# World is read-only during rendering; scene assembly builds it up with
# add_shape/with_light, each of which returns a new world.

@struct.dataclass
class World:
    shapes: tuple = ()
    light: Optional[PointLight] = None

    @classmethod
    def default(cls) -> "World":
        """Two concentric spheres lit by a white light at (-10, 10, -10)."""
        outer = Shape.sphere(material=Material(
            pattern=Pattern.solid(color(0.8, 1.0, 0.6)),
            diffuse=0.7,
            specular=0.2,
        ))
        inner = Shape.sphere(transform=scaling(0.5, 0.5, 0.5))
        light = PointLight(point(-10.0, 10.0, -10.0), Color.white())
        return cls(shapes=(outer, inner), light=light)

    def add_shape(self, shape: Shape) -> "World":
        return self.replace(shapes=self.shapes + (shape,))

    def with_light(self, light: Optional[PointLight]) -> "World":
        return self.replace(light=light)

    def _require_light(self) -> PointLight:
        if self.light is None:
            raise MissingLightError("World has no light source to shade with")
        return self.light

    def intersect(self, ray: Ray) -> Intersections:
        return Intersections.merge(*(shape.intersect(ray) for shape in self.shapes))

    def is_shadowed(self, position: Tuple) -> bool:
        """True when something lies between `position` and the light."""
        light = self._require_light()
        to_light = light.position - position
        distance = to_light.magnitude()
        hit = self.intersect(Ray(position, to_light.normalize())).hit()
        return hit is not None and bool(hit.t < distance)

    def shade_hit(self, comps: Computations) -> Color:
        light = self._require_light()
        return comps.shape.material.lighting(
            comps.shape,
            light,
            comps.over_point,
            comps.eyev,
            comps.normalv,
            self.is_shadowed(comps.over_point),
        )

    def color_at(self, ray: Ray) -> Color:
        hit = self.intersect(ray).hit()
        if hit is None:
            return BACKGROUND
        return self.shade_hit(hit.prepare_computations(ray))
