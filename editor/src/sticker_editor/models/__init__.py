"""
Sticker Overlay Editor - Data Models

This module contains the value types for an edit session.
This is the MODEL in MVC architecture. The mutable scene lives in
models.scene and is imported from there.
"""

from .transform import Vec2, Dimensions, Rect, AffineTransform2D, DecomposedTransform
from .image import Bitmap, EncodedImage

__all__ = [
    'Vec2', 'Dimensions', 'Rect', 'AffineTransform2D', 'DecomposedTransform',
    'Bitmap', 'EncodedImage',
]
