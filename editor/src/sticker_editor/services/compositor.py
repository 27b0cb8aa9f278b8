"""Compositor Service.

Flattens the scene into a single raster image for export:

1. RGBA surface sized to the canvas (same pixel rounding as the preview)
2. neutral fill
3. background stretched over the whole surface
4. overlay placed at the pivot of its on-screen bounding box, rotated and
   uniformly scaled (translate -> rotate -> scale), drawn at its natural
   128x128 size
5. PNG encoding

The overlay is resampled into its own transparent layer and alpha
composited, so no transform state leaks into later drawing.
"""

import io
import logging

import numpy as np
from PIL import Image

from sticker_editor.constants import (
    CANVAS_FILL_RGBA, EXPORT_FORMAT, EXPORT_FILENAME, BACKGROUND_RESAMPLE, OVERLAY_RESAMPLE,
)
from sticker_editor.errors import EncodingError
from sticker_editor.models.image import Bitmap, EncodedImage
from sticker_editor.models.scene import SceneState
from sticker_editor.models.transform import AffineTransform2D, DecomposedTransform
from sticker_editor.utils.transform_math import decompose, overlay_pivot

logger = logging.getLogger(__name__)


class Compositor:
    """Rasterizes background + transformed overlay into a PNG"""

    def __init__(self, fill_color=CANVAS_FILL_RGBA,
                 background_resample=Image.Resampling[BACKGROUND_RESAMPLE],
                 overlay_resample=Image.Resampling[OVERLAY_RESAMPLE]):
        self.fill_color = fill_color
        self.background_resample = background_resample
        self.overlay_resample = overlay_resample

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def composite(self, scene: SceneState, overlay: Bitmap, filename: str = EXPORT_FILENAME) -> EncodedImage:
        """Render the scene and encode it as PNG

        Args:
            scene: Current scene state (read only)
            overlay: Decoded overlay bitmap
            filename: Suggested download filename

        Returns:
            EncodedImage with PNG bytes

        Raises:
            EncodingError: The PNG encoder failed
        """
        surface = self.render(scene, overlay)
        return self.encode(surface, filename)

    def render(self, scene: SceneState, overlay: Bitmap) -> Image.Image:
        """Render the scene into an RGBA Pillow image"""
        width, height = scene.canvas_dimensions.to_pixels()

        surface = Image.new('RGBA', (width, height), self.fill_color)

        if scene.background is not None:
            surface = Image.alpha_composite(surface, self._stretch_background(scene.background, width, height))

        rect = scene.current_overlay_screen_rect()
        decomposed = decompose(scene.overlay_transform)

        if decomposed.is_degenerate:
            logger.debug("Overlay scale is 0, skipping overlay layer")
            return surface

        pivot = overlay_pivot(rect)
        layer = self._place_overlay(overlay, (width, height), pivot, decomposed,
                                    scene.overlay_size.width, scene.overlay_size.height)
        return Image.alpha_composite(surface, layer)

    def encode(self, surface: Image.Image, filename: str = EXPORT_FILENAME) -> EncodedImage:
        """Encode a rendered surface as lossless RGBA PNG"""
        buffer = io.BytesIO()
        try:
            surface.save(buffer, format=EXPORT_FORMAT)
        except (OSError, ValueError) as e:
            raise EncodingError(f"PNG encoding failed: {e}") from e

        data = buffer.getvalue()
        if not data:
            raise EncodingError("PNG encoder produced no data")

        logger.debug("Encoded %dx%d surface to %d bytes", surface.width, surface.height, len(data))
        return EncodedImage(data=data, width=surface.width, height=surface.height, filename=filename)

    # ------------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------------

    def _stretch_background(self, background: Bitmap, width: int, height: int) -> Image.Image:
        """Background resized to exactly fill the surface (no aspect correction)"""
        image = background.image
        if image.mode != 'RGBA':
            image = image.convert('RGBA')
        if image.size != (width, height):
            image = image.resize((width, height), self.background_resample)
        return image

    def _place_overlay(self, overlay: Bitmap, size, pivot, decomposed: DecomposedTransform,
                       draw_width: float, draw_height: float) -> Image.Image:
        """Resample the overlay into a transparent canvas-sized layer

        Forward mapping from overlay pixels to canvas:
            T(pivot) * R(rotation) * S(scale) * T(-draw/2) * S(draw / natural)
        Pillow samples backwards, so the inverse is handed to Image.transform.
        """
        forward = self.overlay_matrix(overlay, pivot, decomposed, draw_width, draw_height)
        inverse = np.linalg.inv(forward.to_numpy())
        data = (inverse[0, 0], inverse[0, 1], inverse[0, 2],
                inverse[1, 0], inverse[1, 1], inverse[1, 2])

        source = overlay.image
        if source.mode != 'RGBA':
            source = source.convert('RGBA')
        # Pillow resamples RGBA premultiplied, so transparent edges stay clean
        return source.transform(
            size,
            Image.Transform.AFFINE,
            data,
            resample=self.overlay_resample,
            fillcolor=(0, 0, 0, 0),
        )

    @staticmethod
    def overlay_matrix(overlay: Bitmap, pivot, decomposed: DecomposedTransform,
                       draw_width: float, draw_height: float) -> AffineTransform2D:
        """Forward transform from overlay bitmap pixels to canvas coordinates"""
        pivot_x, pivot_y = pivot
        to_draw_size = AffineTransform2D.scaling(draw_width / overlay.width, draw_height / overlay.height)
        centered = AffineTransform2D.translation(-draw_width / 2, -draw_height / 2)
        placement = AffineTransform2D.from_components(
            decomposed.rotation_radians, decomposed.uniform_scale, pivot_x, pivot_y
        )
        return placement @ centered @ to_draw_size
