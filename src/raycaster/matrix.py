import jax
import jax.numpy as jnp
from flax import struct

from .errors import NonInvertibleMatrixError
from .types import EPSILON, Tuple

SUPPORTED_SIZES = (2, 3, 4)

# --- Cofactor Expansion Kernels ---
# Plain functions over (n, n) arrays. Row/column indices are Python ints, so the
# recursion unrolls at trace time when jitted.

def _submatrix(m, row: int, col: int):
    return jnp.delete(jnp.delete(m, row, axis=0), col, axis=1)

def _cofactor_expansion(m):
    """Determinant by first-row cofactor expansion."""
    n = m.shape[0]
    if n == 1:
        return m[0, 0]
    if n == 2:
        return m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]
    return sum(m[0, col] * _cofactor(m, 0, col) for col in range(n))

def _cofactor(m, row: int, col: int):
    minor = _cofactor_expansion(_submatrix(m, row, col))
    return minor if (row + col) % 2 == 0 else -minor

_determinant = jax.jit(_cofactor_expansion)

@jax.jit
def _cofactor_inverse(m, det):
    n = m.shape[0]
    cofactors = jnp.array([[_cofactor(m, r, c) for c in range(n)] for r in range(n)])
    # inverse[c, r] = cofactor(r, c) / det
    return cofactors.T / det


@struct.dataclass
class Matrix:
    """Immutable square matrix (2x2, 3x3 or 4x4)."""
    data: jnp.ndarray # Shape (n, n)

    @classmethod
    def from_rows(cls, rows) -> "Matrix":
        data = jnp.asarray(rows, dtype=jnp.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise ValueError(f"Matrix must be square, got shape {data.shape}")
        if data.shape[0] not in SUPPORTED_SIZES:
            raise ValueError(f"Unsupported matrix size {data.shape[0]}, expected one of {SUPPORTED_SIZES}")
        return cls(data)

    @classmethod
    def identity(cls, size: int = 4) -> "Matrix":
        return cls(jnp.eye(size, dtype=jnp.float64))

    @property
    def size(self) -> int:
        return self.data.shape[0]

    def _check_index(self, row: int, col: int):
        # jnp clamps out-of-range reads and drops out-of-range writes
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"Index ({row}, {col}) outside {self.size}x{self.size} matrix")

    def get(self, row: int, col: int):
        self._check_index(row, col)
        return self.data[row, col]

    def set(self, row: int, col: int, value) -> "Matrix":
        self._check_index(row, col)
        return self.replace(data=self.data.at[row, col].set(value))

    def __matmul__(self, other):
        if isinstance(other, Matrix):
            if other.size != self.size:
                raise ValueError(f"Cannot multiply {self.size}x{self.size} by {other.size}x{other.size}")
            return Matrix(self.data @ other.data)
        if isinstance(other, Tuple):
            if self.size != 4:
                raise ValueError(f"Only 4x4 matrices transform tuples, got {self.size}x{self.size}")
            return Tuple(self.data @ other.data)
        return NotImplemented

    __mul__ = __matmul__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.data.shape == other.data.shape and bool(jnp.all(jnp.abs(self.data - other.data) < EPSILON))

    def transpose(self) -> "Matrix":
        return Matrix(self.data.T)

    def submatrix(self, row: int, col: int) -> "Matrix":
        return Matrix(_submatrix(self.data, row, col))

    def determinant(self):
        return _determinant(self.data)

    def minor(self, row: int, col: int):
        return _determinant(_submatrix(self.data, row, col))

    def cofactor(self, row: int, col: int):
        minor = self.minor(row, col)
        return minor if (row + col) % 2 == 0 else -minor

    def is_invertible(self) -> bool:
        return bool(self.determinant() != 0)

    def inverse(self) -> "Matrix":
        det = self.determinant()
        if det == 0:
            raise NonInvertibleMatrixError(f"Matrix is not invertible (determinant is 0):\n{self.data}")
        return Matrix(_cofactor_inverse(self.data, det))


# --- Transform Factories ---
# Each starts from the 4x4 identity and sets fixed positions.

def identity() -> Matrix:
    return Matrix.identity(4)

def translation(x, y, z) -> Matrix:
    m = jnp.eye(4).at[0, 3].set(x).at[1, 3].set(y).at[2, 3].set(z)
    return Matrix(m)

def scaling(x, y, z) -> Matrix:
    m = jnp.eye(4).at[0, 0].set(x).at[1, 1].set(y).at[2, 2].set(z)
    return Matrix(m)

def rotation_x(radians) -> Matrix:
    c, s = jnp.cos(radians), jnp.sin(radians)
    m = jnp.eye(4).at[1, 1].set(c).at[1, 2].set(-s).at[2, 1].set(s).at[2, 2].set(c)
    return Matrix(m)

def rotation_y(radians) -> Matrix:
    c, s = jnp.cos(radians), jnp.sin(radians)
    m = jnp.eye(4).at[0, 0].set(c).at[0, 2].set(s).at[2, 0].set(-s).at[2, 2].set(c)
    return Matrix(m)

def rotation_z(radians) -> Matrix:
    c, s = jnp.cos(radians), jnp.sin(radians)
    m = jnp.eye(4).at[0, 0].set(c).at[0, 1].set(-s).at[1, 0].set(s).at[1, 1].set(c)
    return Matrix(m)

def shearing(xy, xz, yx, yz, zx, zy) -> Matrix:
    m = (jnp.eye(4)
         .at[0, 1].set(xy).at[0, 2].set(xz)
         .at[1, 0].set(yx).at[1, 2].set(yz)
         .at[2, 0].set(zx).at[2, 1].set(zy))
    return Matrix(m)

def chain(*transforms: Matrix) -> Matrix:
    """Compose transforms in application order: the first argument applies first."""
    result = identity()
    for transform in transforms:
        result = transform @ result
    return result

def view_transform(from_point: Tuple, to_point: Tuple, up: Tuple) -> Matrix:
    """World-to-camera transform for an eye at `from_point` looking at `to_point`."""
    forward = (to_point - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    # left, true_up and -forward are vectors, so their w components are already 0
    orientation = jnp.stack([left.data, true_up.data, (-forward).data, jnp.array([0.0, 0.0, 0.0, 1.0])])
    return Matrix(orientation) @ translation(-from_point.x, -from_point.y, -from_point.z)
