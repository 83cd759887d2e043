from pathlib import Path
from typing import List, Union

import jax.numpy as jnp
import numpy as np
from PIL import Image

from .types import Color
from .utils import to_uint8

PPM_MAX_VALUE = 255
PPM_LINE_LENGTH = 70


class Canvas:
    """Row-major framebuffer of RGB colors, initialized to black.

    Pixels live in a host-side numpy array so the render loop can write them
    in place.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.float64)

    def _check_bounds(self, x: int, y: int):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas")

    def write_pixel(self, x: int, y: int, c: Color):
        self._check_bounds(x, y)
        self.pixels[y, x] = np.asarray(c.rgb)

    def pixel_at(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        return Color(jnp.asarray(self.pixels[y, x]))

    def fill(self, c: Color):
        self.pixels[...] = np.asarray(c.rgb)

    def to_array(self) -> np.ndarray:
        """Copy of the pixels, shape (height, width, 3)."""
        return self.pixels.copy()

    # --- Encoding ---

    def to_ppm(self) -> str:
        """Plain-text (P3) PPM. Rows are wrapped so no line exceeds 70 characters."""
        lines: List[str] = ["P3", f"{self.width} {self.height}", str(PPM_MAX_VALUE)]
        for row in to_uint8(self.pixels):
            line = ""
            for value in row.reshape(-1):
                token = str(int(value))
                if line and len(line) + 1 + len(token) > PPM_LINE_LENGTH:
                    lines.append(line)
                    line = token
                else:
                    line = f"{line} {token}" if line else token
            lines.append(line)
        return "\n".join(lines) + "\n"

    def save_ppm(self, path: Union[str, Path]):
        Path(path).write_text(self.to_ppm())

    def save_png(self, path: Union[str, Path]):
        img = Image.fromarray(to_uint8(self.pixels))
        img.save(path)
