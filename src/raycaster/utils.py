import jax.numpy as jnp
import numpy as np

# --- Vector Utilities ---
# Operate on raw homogeneous arrays, shape (..., 4), so they can be used both
# eagerly by the value types and inside jitted kernels.

def dot(v1, v2):
    return jnp.sum(v1 * v2, axis=-1)

def cross(v1, v2):
    """Cross product of the xyz parts; the result is a vector (w = 0)."""
    xyz = jnp.cross(v1[..., :3], v2[..., :3])
    return jnp.concatenate([xyz, jnp.zeros_like(xyz[..., :1])], axis=-1)

def reflect(v, n):
    """Reflect vector v around normal n."""
    return v - n * (2.0 * dot(v, n))[..., None]

def magnitude(v):
    return jnp.sqrt(dot(v, v))

# --- Image Utilities ---

def round_half_away(x):
    """Round to the nearest integer, halves away from zero (np.rint rounds them to even)."""
    x = np.asarray(x, dtype=np.float64)
    return np.sign(x) * np.floor(np.abs(x) + 0.5)

def to_uint8(rgb: np.ndarray) -> np.ndarray:
    """Scale [0, 1] color components to 8-bit, clamping anything out of range."""
    scaled = round_half_away(np.asarray(rgb, dtype=np.float64) * 255.0)
    return np.clip(scaled, 0, 255).astype(np.uint8)
