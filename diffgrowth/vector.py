"""
2D vector primitives for differential growth.

Vector2D is used at the edges of the package (starting points, generators).
The array helpers below do the same arithmetic on (N, 2) arrays for the
per-step hot path.
"""

import numpy as np

EPSILON = 1e-10


class Vector2D:
    __slots__ = ('x', 'y')

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = float(x)
        self.y = float(y)

    def __add__(self, other: 'Vector2D') -> 'Vector2D':
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vector2D') -> 'Vector2D':
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> 'Vector2D':
        return Vector2D(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> 'Vector2D':
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> 'Vector2D':
        return Vector2D(self.x / scalar, self.y / scalar)

    def __neg__(self) -> 'Vector2D':
        return Vector2D(-self.x, -self.y)

    def __repr__(self) -> str:
        return f"Vector2D({self.x:.2f}, {self.y:.2f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return bool(np.isclose(self.x, other.x) and np.isclose(self.y, other.y))

    __hash__ = None

    @property
    def magnitude(self) -> float:
        return float(np.sqrt(self.x ** 2 + self.y ** 2))

    @property
    def magnitude_squared(self) -> float:
        return self.x ** 2 + self.y ** 2

    def normalize(self) -> 'Vector2D':
        mag = self.magnitude
        if mag < EPSILON:
            return Vector2D(0, 0)
        return self / mag

    def limit(self, max_magnitude: float) -> 'Vector2D':
        """Clamp the magnitude to max_magnitude, keeping the direction."""
        mag = self.magnitude
        if mag <= max_magnitude:
            return self.copy()
        return self * (max_magnitude / mag)

    def with_magnitude(self, magnitude: float) -> 'Vector2D':
        return self.normalize() * magnitude

    def dot(self, other: 'Vector2D') -> float:
        return self.x * other.x + self.y * other.y

    def midpoint(self, other: 'Vector2D') -> 'Vector2D':
        return Vector2D((self.x + other.x) / 2.0, (self.y + other.y) / 2.0)

    def distance_to(self, other: 'Vector2D') -> float:
        return (self - other).magnitude

    def distance_squared_to(self, other: 'Vector2D') -> float:
        return (self - other).magnitude_squared

    def to_tuple(self) -> tuple:
        return (self.x, self.y)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y])

    @classmethod
    def from_tuple(cls, t: tuple) -> 'Vector2D':
        return cls(t[0], t[1])

    @classmethod
    def from_array(cls, arr: np.ndarray) -> 'Vector2D':
        return cls(arr[0], arr[1])

    def copy(self) -> 'Vector2D':
        return Vector2D(self.x, self.y)


def magnitudes(arr: np.ndarray) -> np.ndarray:
    return np.sqrt(np.einsum('ij,ij->i', arr, arr))


def safe_normalize(arr: np.ndarray) -> np.ndarray:
    """Unit rows; rows shorter than EPSILON come back as zero."""
    mags = magnitudes(arr)
    out = np.zeros_like(arr)
    ok = mags >= EPSILON
    out[ok] = arr[ok] / mags[ok, None]
    return out


def set_magnitudes(arr: np.ndarray, magnitude: float) -> np.ndarray:
    return safe_normalize(arr) * magnitude


def cap_magnitudes(arr: np.ndarray, cap: float) -> np.ndarray:
    """
    Clamp every row to at most `cap`. Rows already within the cap are
    returned unchanged, never rescaled up.
    """
    mags = magnitudes(arr)
    out = arr.copy()
    over = mags > cap
    if np.any(over):
        out[over] = arr[over] * (cap / mags[over])[:, None]
    return out


def midpoints(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return (a + b) / 2.0
