"""
Sticker Overlay Editor - Transform Math Utilities

This module provides the pure math behind overlay placement:
- decomposing an accumulated affine matrix into translation, rotation and
  uniform scale
- the inverse composition
- axis-aligned bounds of a frame transformed about its center
  (CSS transform-origin 50% 50%)
- clamping a translation so the transformed frame stays on the canvas

No UI or pixel dependencies.
"""

import logging
import math

from sticker_editor.constants import SIMILARITY_TOLERANCE
from sticker_editor.errors import InvalidTransform
from sticker_editor.models.transform import AffineTransform2D, DecomposedTransform, Rect

logger = logging.getLogger(__name__)


def decompose(matrix: AffineTransform2D, strict: bool = False) -> DecomposedTransform:
    """Recover rotation, uniform scale and translation from a matrix

    Scale is the Euclidean norm of the first column of the linear part and
    rotation its angle. Translation passes straight through: it already holds
    the layout-space offset applied by the manipulation surface.

    A collapsed matrix (a == b == 0) yields scale 0 and rotation 0; that is
    a valid state where nothing gets drawn.

    Args:
        matrix: Transform whose linear part should be rotation x uniform scale
        strict: Raise instead of warning when the matrix carries shear or
            non-uniform scale

    Returns:
        DecomposedTransform

    Raises:
        InvalidTransform: strict is set and the matrix is not a similarity
    """
    if not matrix.is_similarity(SIMILARITY_TOLERANCE):
        message = (
            f"Overlay transform is not rotation x uniform scale "
            f"(a={matrix.a:g}, b={matrix.b:g}, c={matrix.c:g}, d={matrix.d:g}); "
            f"using first column only"
        )
        if strict:
            raise InvalidTransform(message)
        logger.warning(message)

    uniform_scale = math.hypot(matrix.a, matrix.b)
    # atan2(0, 0) is 0, which is the convention for a collapsed scale
    rotation = math.atan2(matrix.b, matrix.a)

    return DecomposedTransform(
        rotation_radians=rotation,
        uniform_scale=uniform_scale,
        translate_x=matrix.tx,
        translate_y=matrix.ty,
    )


def compose(decomposed: DecomposedTransform) -> AffineTransform2D:
    """Inverse of decompose: translate * rotate * scale"""
    return AffineTransform2D.from_components(
        decomposed.rotation_radians,
        decomposed.uniform_scale,
        decomposed.translate_x,
        decomposed.translate_y,
    )


def transform_about_center(frame: Rect, matrix: AffineTransform2D) -> AffineTransform2D:
    """Full canvas-space transform for a frame styled with ``matrix``

    CSS applies an element transform around its transform-origin, which
    defaults to the element's center:
        T(center) * matrix * T(-center)
    """
    cx, cy = frame.center
    return (AffineTransform2D.translation(cx, cy)
            @ matrix
            @ AffineTransform2D.translation(-cx, -cy))


def transformed_bounds(frame: Rect, matrix: AffineTransform2D) -> Rect:
    """Axis-aligned bounding box of ``frame`` after ``matrix``

    This is what a browser reports for getBoundingClientRect() of the
    transformed overlay, relative to the canvas origin.

    Args:
        frame: Un-transformed overlay frame (left, top, width, height)
        matrix: Overlay transform

    Returns:
        Rect in canvas coordinates
    """
    full = transform_about_center(frame, matrix)
    xs = []
    ys = []
    for corner in frame.corners():
        x, y = full.apply(corner.x, corner.y)
        xs.append(x)
        ys.append(y)

    left, top = min(xs), min(ys)
    return Rect(left, top, max(xs) - left, max(ys) - top)


def overlay_pivot(bounds: Rect):
    """Drawing origin for the overlay: box origin plus half its size"""
    return bounds.x + bounds.width / 2, bounds.y + bounds.height / 2


def clamp_translation(frame: Rect, matrix: AffineTransform2D, width: float, height: float) -> AffineTransform2D:
    """Shift the translation so the transformed frame stays on the canvas

    When the transformed box is larger than the canvas along an axis it is
    centered on that axis instead.

    Args:
        frame: Un-transformed overlay frame
        matrix: Proposed overlay transform
        width: Canvas width
        height: Canvas height

    Returns:
        Transform with the same linear part and an adjusted translation
    """
    bounds = transformed_bounds(frame, matrix)

    dx = _clamp_axis(bounds.x, bounds.width, width)
    dy = _clamp_axis(bounds.y, bounds.height, height)
    if dx == 0 and dy == 0:
        return matrix

    return matrix.with_translation(matrix.tx + dx, matrix.ty + dy)


def _clamp_axis(start, size, limit):
    """Offset needed to move [start, start + size] inside [0, limit]"""
    if size >= limit:
        return (limit - size) / 2 - start
    if start < 0:
        return -start
    if start + size > limit:
        return limit - (start + size)
    return 0.0


def normalize_degrees(degrees: float) -> float:
    """Wrap an angle into [0, 360)"""
    return degrees % 360.0


def snap_degrees(degrees: float, increment: float) -> float:
    """Round an angle to the nearest multiple of ``increment``"""
    return round(degrees / increment) * increment
