import jax
import jax.numpy as jnp
from flax import struct

from .patterns import Pattern
from .types import Color, PointLight, Tuple
from .utils import dot, reflect


@jax.jit
def _diffuse_specular(effective_rgb, intensity_rgb, lightv, eyev, normalv,
                      diffuse, specular, shininess):
    """Diffuse + specular Phong terms for a normalized light vector.

    Both terms are black when the light is behind the surface; specular is also
    black when the reflection points away from the eye.
    """
    light_dot_normal = dot(lightv, normalv)
    lit = light_dot_normal > 0.0

    diffuse_rgb = jnp.where(lit, effective_rgb * diffuse * light_dot_normal, 0.0)

    reflectv = reflect(-lightv, normalv)
    reflect_dot_eye = dot(reflectv, eyev)
    factor = jnp.power(jnp.maximum(reflect_dot_eye, 0.0), shininess)
    specular_rgb = jnp.where(lit & (reflect_dot_eye > 0.0), intensity_rgb * specular * factor, 0.0)

    return diffuse_rgb + specular_rgb


@struct.dataclass
class Material:
    pattern: Pattern = struct.field(default_factory=lambda: Pattern.solid(Color.white()))
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0

    def lighting(self, shape, light: PointLight, position: Tuple, eyev: Tuple,
                 normalv: Tuple, in_shadow: bool = False) -> Color:
        """Phong illumination of `position` on `shape` by a single point light."""
        effective_color = self.pattern.color_at(shape, position) * light.intensity
        ambient = effective_color * self.ambient
        if in_shadow:
            return ambient

        lightv = (light.position - position).normalize()
        return ambient + Color(_diffuse_specular(
            effective_color.rgb, light.intensity.rgb,
            lightv.data, eyev.data, normalv.data,
            self.diffuse, self.specular, self.shininess,
        ))
