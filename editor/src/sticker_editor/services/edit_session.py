"""Edit Session Service.

Owns the SceneState for one editing session and runs the user-triggered
flows around it:

- upload: decode (async) -> fit canvas -> replace background, recenter overlay
- manipulation events: parse CSS transform -> update overlay transform
- export: await overlay asset -> composite -> optionally write the PNG

Nothing here is global; the GUI and the headless CLI each create a session
and pass it (or its scene) to whoever needs it.
"""

import logging
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Optional

from sticker_editor.constants import CANVAS_TARGET_LONG_SIDE, EXPORT_FILENAME
from sticker_editor.errors import AssetLoadError, EncodingError, InvalidDimensions
from sticker_editor.models.image import Bitmap, EncodedImage
from sticker_editor.models.scene import ManipulationEvent, SceneState
from sticker_editor.models.transform import AffineTransform2D
from sticker_editor.services.compositor import Compositor
from sticker_editor.services.file_operations import save_encoded_image
from sticker_editor.services.image_acquisition import ImageAcquisition, describe_source
from sticker_editor.utils.canvas_fitter import fit_bitmap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadTicket:
    """Handle for an in-flight upload"""
    generation: int
    source: str
    future: Future


class EditSession:
    """One editing session: scene state plus upload and export flows

    Usage:
        session = EditSession()
        session.upload("photo.jpg")
        session.on_rotate(None, "matrix(0, 1, -1, 0, 0, 0)")
        session.export("edited-image.png")
    """

    def __init__(self, acquisition: Optional[ImageAcquisition] = None,
                 compositor: Optional[Compositor] = None,
                 scene: Optional[SceneState] = None,
                 target_long_side=CANVAS_TARGET_LONG_SIDE):
        self.acquisition = acquisition or ImageAcquisition()
        self.compositor = compositor or Compositor()
        self.scene = scene or SceneState()
        self.target_long_side = target_long_side
        self._generation = 0

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    def request_upload(self, source) -> UploadTicket:
        """Start decoding a new background; newer requests supersede older ones"""
        self._generation += 1
        ticket = UploadTicket(self._generation, describe_source(source), self.acquisition.decode_async(source))
        logger.debug("Upload #%d requested: %s", ticket.generation, ticket.source)
        return ticket

    def is_current(self, ticket: UploadTicket) -> bool:
        return ticket.generation == self._generation

    def complete_upload(self, ticket: UploadTicket) -> bool:
        """Wait for a decode and apply it to the scene

        Args:
            ticket: Ticket from request_upload()

        Returns:
            True if the scene changed. False when the upload was superseded
            by a newer one or the image has unusable dimensions.

        Raises:
            AssetLoadError: The file of the current upload could not be decoded
        """
        try:
            bitmap = ticket.future.result()
        except AssetLoadError as e:
            if self.is_current(ticket):
                raise
            logger.info("Ignoring failed stale upload #%d (%s): %s",
                        ticket.generation, ticket.source, e.reason)
            return False

        if not self.is_current(ticket):
            logger.info("Ignoring stale upload #%d (%s), #%d is newer",
                        ticket.generation, ticket.source, self._generation)
            return False

        return self.apply_background(bitmap)

    def apply_background(self, bitmap: Bitmap) -> bool:
        """Fit the canvas to ``bitmap`` and make it the background

        Invalid dimensions are recovered locally: the scene keeps its
        previous background and size.
        """
        try:
            dimensions = fit_bitmap(bitmap, self.target_long_side)
        except InvalidDimensions as e:
            logger.warning("Skipping canvas fit: %s", e)
            return False

        self.scene.set_background(bitmap, dimensions)
        logger.info("Background %s loaded (%dx%d), canvas %.2fx%.2f",
                    bitmap.source or '<memory>', bitmap.width, bitmap.height,
                    dimensions.width, dimensions.height)
        return True

    def upload(self, source) -> bool:
        """Decode ``source`` and apply it, blocking until done"""
        return self.complete_upload(self.request_upload(source))

    # ------------------------------------------------------------------
    # Manipulation surface callbacks
    # ------------------------------------------------------------------

    def handle_event(self, kind: str, transform: str, target=None) -> AffineTransform2D:
        """Apply one drag/scale/rotate update

        Raises:
            TransformParseError: ``transform`` is malformed (scene unchanged)
        """
        return self.scene.handle_event(ManipulationEvent(kind, transform, target))

    def on_drag(self, target, transform: str):
        return self.handle_event('drag', transform, target)

    def on_scale(self, target, transform: str):
        return self.handle_event('scale', transform, target)

    def on_rotate(self, target, transform: str):
        return self.handle_event('rotate', transform, target)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self, destination=None, filename: str = EXPORT_FILENAME) -> EncodedImage:
        """Composite the current scene into a PNG

        Args:
            destination: Optional path; when given the PNG is written there
            filename: Suggested download filename

        Returns:
            EncodedImage

        Raises:
            AssetLoadError: The overlay asset could not be decoded
            EncodingError: Encoding or writing the PNG failed
        """
        try:
            overlay = self.acquisition.load_overlay().result()
        except AssetLoadError as e:
            logger.error("Export aborted: %s", e)
            raise

        try:
            encoded = self.compositor.composite(self.scene, overlay, filename)
            if destination is not None:
                save_encoded_image(encoded, destination)
        except EncodingError as e:
            logger.error("Export aborted: %s", e)
            raise

        return encoded

    def close(self):
        self.acquisition.shutdown(wait=False)
