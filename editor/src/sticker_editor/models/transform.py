"""Transform data structures for coordinate and state representation."""
import math
from dataclasses import dataclass

import numpy as np

from sticker_editor.errors import InvalidDimensions


@dataclass
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y coordinate pair in canvas layout units
    (origin top-left, Y-down).
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))


@dataclass(frozen=True)
class Dimensions:
    """Canvas or bitmap size in layout units. Both sides are > 0."""
    width: float
    height: float

    def __post_init__(self):
        if not (self.width > 0 and self.height > 0):
            raise InvalidDimensions(self.width, self.height)

    def to_pixels(self):
        """Integer pixel size, truncated toward zero (at least 1px per side).

        The preview widget and the export surface both size themselves
        through this method so they never disagree by a pixel.
        """
        return max(1, int(self.width)), max(1, int(self.height))

    @property
    def center(self) -> Vec2:
        return Vec2(self.width / 2, self.height / 2)

    def __iter__(self):
        return iter((self.width, self.height))


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle relative to the canvas origin."""
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Vec2:
        return Vec2(self.x + self.width / 2, self.y + self.height / 2)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def corners(self):
        """Corners clockwise from top-left."""
        return [
            Vec2(self.x, self.y),
            Vec2(self.right, self.y),
            Vec2(self.right, self.bottom),
            Vec2(self.x, self.bottom),
        ]

    def translated(self, dx: float, dy: float) -> 'Rect':
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    @classmethod
    def centered_in(cls, container: Dimensions, width: float, height: float) -> 'Rect':
        """Rect of the given size centered in the container."""
        return cls(container.width / 2 - width / 2, container.height / 2 - height / 2, width, height)


@dataclass(frozen=True)
class AffineTransform2D:
    """2D affine transform in CSS ``matrix(a, b, c, d, tx, ty)`` order.

    Equivalent 3x3 matrix (points are column vectors)::

        | a  c  tx |
        | b  d  ty |
        | 0  0  1  |

    The manipulation surface only ever produces rotation x uniform scale in
    the linear part, plus a translation.
    """
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @classmethod
    def identity(cls) -> 'AffineTransform2D':
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> 'AffineTransform2D':
        return cls(tx=tx, ty=ty)

    @classmethod
    def rotation(cls, radians: float) -> 'AffineTransform2D':
        cos_r, sin_r = math.cos(radians), math.sin(radians)
        return cls(cos_r, sin_r, -sin_r, cos_r)

    @classmethod
    def scaling(cls, sx: float, sy: float = None) -> 'AffineTransform2D':
        if sy is None:
            sy = sx
        return cls(sx, 0.0, 0.0, sy)

    @classmethod
    def from_components(cls, rotation: float, scale: float, tx: float = 0.0, ty: float = 0.0) -> 'AffineTransform2D':
        """Build translate(tx, ty) * rotate(rotation) * scale(scale)."""
        cos_r, sin_r = math.cos(rotation), math.sin(rotation)
        return cls(scale * cos_r, scale * sin_r, -scale * sin_r, scale * cos_r, tx, ty)

    @classmethod
    def from_numpy(cls, m) -> 'AffineTransform2D':
        m = np.asarray(m, dtype=float)
        return cls(m[0, 0], m[1, 0], m[0, 1], m[1, 1], m[0, 2], m[1, 2])

    def to_numpy(self) -> np.ndarray:
        return np.array([
            [self.a, self.c, self.tx],
            [self.b, self.d, self.ty],
            [0.0, 0.0, 1.0],
        ], dtype=float)

    def __matmul__(self, other: 'AffineTransform2D') -> 'AffineTransform2D':
        """Compose: (self @ other) applies ``other`` first, then ``self``."""
        return AffineTransform2D(
            self.a * other.a + self.c * other.b,
            self.b * other.a + self.d * other.b,
            self.a * other.c + self.c * other.d,
            self.b * other.c + self.d * other.d,
            self.a * other.tx + self.c * other.ty + self.tx,
            self.b * other.tx + self.d * other.ty + self.ty,
        )

    def apply(self, x: float, y: float):
        return (self.a * x + self.c * y + self.tx,
                self.b * x + self.d * y + self.ty)

    def apply_linear(self, x: float, y: float):
        """Apply the 2x2 part only (no translation)."""
        return self.a * x + self.c * y, self.b * x + self.d * y

    def with_translation(self, tx: float, ty: float) -> 'AffineTransform2D':
        return AffineTransform2D(self.a, self.b, self.c, self.d, tx, ty)

    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def inverse(self) -> 'AffineTransform2D':
        det = self.determinant()
        if det == 0:
            raise ZeroDivisionError("Transform is not invertible (determinant is 0)")
        ia, ib, ic, id_ = self.d / det, -self.b / det, -self.c / det, self.a / det
        return AffineTransform2D(
            ia, ib, ic, id_,
            -(ia * self.tx + ic * self.ty),
            -(ib * self.tx + id_ * self.ty),
        )

    def is_similarity(self, tolerance: float = 1e-6) -> bool:
        """True when the linear part is rotation x uniform scale (no shear, no flip)."""
        scale = max(math.hypot(self.a, self.b), math.hypot(self.c, self.d), 1.0)
        return (abs(self.a - self.d) <= tolerance * scale and
                abs(self.b + self.c) <= tolerance * scale)

    @property
    def is_identity(self) -> bool:
        return self == AffineTransform2D()

    def __iter__(self):
        return iter((self.a, self.b, self.c, self.d, self.tx, self.ty))


@dataclass(frozen=True)
class DecomposedTransform:
    """Translation, rotation and uniform scale recovered from a matrix."""
    rotation_radians: float
    uniform_scale: float
    translate_x: float
    translate_y: float

    @property
    def rotation_degrees(self) -> float:
        return math.degrees(self.rotation_radians)

    @property
    def is_degenerate(self) -> bool:
        """Scale collapsed to zero: nothing is drawn for the layer."""
        return self.uniform_scale == 0
