"""Canvas fitting - size the editing canvas to an uploaded image.

The long side of the image maps to a fixed target length and the short side
follows the image's aspect ratio.
"""

from sticker_editor.constants import CANVAS_TARGET_LONG_SIDE
from sticker_editor.errors import InvalidDimensions
from sticker_editor.models.transform import Dimensions


def fit(natural_width, natural_height, target_long_side=CANVAS_TARGET_LONG_SIDE) -> Dimensions:
    """Compute canvas dimensions preserving the image aspect ratio

    Landscape images (wider than tall) get width == target_long_side.
    Portrait and exactly square images get height == target_long_side.

    Args:
        natural_width: Image width in pixels
        natural_height: Image height in pixels
        target_long_side: Length of the canvas long side

    Returns:
        Dimensions

    Raises:
        InvalidDimensions: Either natural side (or the target) is <= 0
    """
    if natural_width <= 0 or natural_height <= 0:
        raise InvalidDimensions(natural_width, natural_height)
    if target_long_side <= 0:
        raise InvalidDimensions(target_long_side, target_long_side)

    if natural_width > natural_height:
        return Dimensions(target_long_side, target_long_side * natural_height / natural_width)
    return Dimensions(target_long_side * natural_width / natural_height, target_long_side)


def fit_bitmap(bitmap, target_long_side=CANVAS_TARGET_LONG_SIDE) -> Dimensions:
    """fit() for a decoded Bitmap"""
    return fit(bitmap.width, bitmap.height, target_long_side)
