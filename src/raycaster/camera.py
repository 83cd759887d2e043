import functools
import math

import jax
import jax.numpy as jnp
import numpy as np
from flax import struct
from tqdm import tqdm

from .canvas import Canvas
from .matrix import Matrix
from .scene import World
from .types import Ray, Tuple
from .utils import magnitude


# --- Ray Generation Kernels ---

def _pixel_ray(inverse, half_width, half_height, pixel_size, px, py):
    """World-space origin and normalized direction through the center of pixel (px, py)."""
    # The camera looks down -z, so +x is to the left
    world_x = half_width - (px + 0.5) * pixel_size
    world_y = half_height - (py + 0.5) * pixel_size

    pixel = inverse @ jnp.array([world_x, world_y, -1.0, 1.0])
    origin = inverse @ jnp.array([0.0, 0.0, 0.0, 1.0])
    direction = pixel - origin
    return origin, direction / magnitude(direction)

_single_ray = jax.jit(_pixel_ray)

# vmap over the pixels of a row, then over rows: outputs are (vsize, hsize, 4)
_row_rays = jax.vmap(_pixel_ray, in_axes=(None, None, None, None, 0, None))
_grid_rays = jax.jit(jax.vmap(_row_rays, in_axes=(None, None, None, None, None, 0)))


@struct.dataclass
class Camera:
    # Resolution (pixels)
    hsize: int = struct.field(pytree_node=False)
    vsize: int = struct.field(pytree_node=False)
    # Vertical or horizontal angle of view (radians), whichever axis is longer
    field_of_view: float
    # World-to-camera transform, usually from view_transform()
    transform: Matrix = struct.field(default_factory=Matrix.identity)

    # Precompute the canvas geometry on initialization
    def __post_init__(self):
        if self.hsize <= 0 or self.vsize <= 0:
            raise ValueError(f"Camera resolution must be positive, got {self.hsize}x{self.vsize}")
        half_view = math.tan(float(self.field_of_view) / 2.0)
        aspect = self.hsize / self.vsize
        if aspect >= 1.0:
            half_width, half_height = half_view, half_view / aspect
        else:
            half_width, half_height = half_view * aspect, half_view
        # Using object.__setattr__ to bypass frozen=True during init
        object.__setattr__(self, 'half_width', half_width)
        object.__setattr__(self, 'half_height', half_height)
        object.__setattr__(self, 'pixel_size', (half_width * 2.0) / self.hsize)

    def with_transform(self, transform: Matrix) -> "Camera":
        return self.replace(transform=transform)

    @functools.cached_property
    def inverse_transform(self) -> Matrix:
        return self.transform.inverse()

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        """Normalized world-space ray through the center of pixel (px, py)."""
        origin, direction = _single_ray(
            self.inverse_transform.data, self.half_width, self.half_height, self.pixel_size, px, py,
        )
        return Ray(Tuple(origin), Tuple(direction))

    def generate_rays(self):
        """Origins and directions for every pixel at once, each of shape (vsize, hsize, 4)."""
        return _grid_rays(
            self.inverse_transform.data, self.half_width, self.half_height, self.pixel_size,
            jnp.arange(self.hsize), jnp.arange(self.vsize),
        )

    def render(self, world: World, progress: bool = False) -> Canvas:
        """Shade every pixel of the hsize x vsize grid.

        Rays come from one batched kernel; shading stays a per-pixel Python loop
        because hit selection and shadow tests branch on values.
        """
        origins, directions = (np.asarray(a) for a in self.generate_rays())
        image = Canvas(self.hsize, self.vsize)
        rows = range(self.vsize)
        if progress:
            rows = tqdm(rows, desc="Rendering", unit="row")
        for y in rows:
            for x in range(self.hsize):
                ray = Ray(Tuple(jnp.asarray(origins[y, x])), Tuple(jnp.asarray(directions[y, x])))
                image.write_pixel(x, y, world.color_at(ray))
        return image
