"""
Sticker Overlay Editor - Scene State

The single mutable source of truth for one editing session:
- canvas dimensions (fitted to the uploaded background)
- the background bitmap, if any
- the overlay frame (un-transformed, natural size) and its transform
- the overlay's on-screen bounding box

The scene is independent of UI:
- No Qt imports
- No rendering logic

The manipulation surface pushes transform updates in; the compositor and
the preview read the current state synchronously. Listeners are notified
synchronously after every mutation, which gives views an explicit
"layout settled" point instead of waiting on a timer.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from sticker_editor.constants import (
    DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT,
    OVERLAY_WIDTH, OVERLAY_HEIGHT,
)
from sticker_editor.models.image import Bitmap
from sticker_editor.models.transform import AffineTransform2D, Dimensions, Rect
from sticker_editor.utils.css_transform import parse_css_transform
from sticker_editor.utils.transform_math import transformed_bounds

logger = logging.getLogger(__name__)

# Change kinds passed to listeners
CHANGE_BACKGROUND = 'background'
CHANGE_TRANSFORM = 'transform'
CHANGE_FRAME = 'frame'

EVENT_KINDS = ('drag', 'scale', 'rotate')


@dataclass(frozen=True)
class ManipulationEvent:
    """One drag/scale/rotate update from the manipulation surface

    Attributes:
        kind: 'drag', 'scale' or 'rotate'
        transform: Serialized CSS transform, e.g. 'matrix(1, 0, 0, 1, 10, 0)'
        target: Whatever the surface uses to identify the overlay element
    """
    kind: str
    transform: str
    target: Any = None

    def __post_init__(self):
        if self.kind not in EVENT_KINDS:
            raise ValueError(f"Unknown manipulation event kind: {self.kind!r}")


class SceneState:
    """Scene for one edit session: background, canvas size and overlay placement

    Properties:
        canvas_dimensions: Current canvas Dimensions
        background: Background Bitmap or None
        overlay_size: Natural overlay Dimensions (128x128)
        overlay_frame: Un-transformed overlay Rect
        overlay_transform: Current AffineTransform2D
        overlay_bounding_box: On-screen AABB of the transformed overlay
    """

    def __init__(self, dimensions: Optional[Dimensions] = None, overlay_size: Optional[Dimensions] = None):
        self._canvas_dimensions = dimensions or Dimensions(DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT)
        self._background = None
        self._overlay_size = overlay_size or Dimensions(OVERLAY_WIDTH, OVERLAY_HEIGHT)
        self._overlay_frame = None
        self._overlay_transform = AffineTransform2D.identity()
        self._overlay_bounding_box = None
        self._listeners: List[Callable[[str], None]] = []

        self._recenter_overlay()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def canvas_dimensions(self) -> Dimensions:
        return self._canvas_dimensions

    @property
    def background(self) -> Optional[Bitmap]:
        return self._background

    @property
    def has_background(self) -> bool:
        return self._background is not None

    @property
    def overlay_size(self) -> Dimensions:
        return self._overlay_size

    @property
    def overlay_frame(self) -> Rect:
        return self._overlay_frame

    @property
    def overlay_transform(self) -> AffineTransform2D:
        return self._overlay_transform

    @property
    def overlay_bounding_box(self) -> Rect:
        return self._overlay_bounding_box

    def current_overlay_screen_rect(self) -> Rect:
        """Overlay bounding box relative to the canvas origin

        Used by the compositor to locate the transform pivot.
        """
        return self._overlay_bounding_box

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_background(self, bitmap: Optional[Bitmap], dimensions: Dimensions):
        """Replace background and canvas size together, then recenter the overlay

        Args:
            bitmap: Decoded background (None clears it)
            dimensions: Fitted canvas dimensions
        """
        self._background = bitmap
        self._canvas_dimensions = dimensions
        self._recenter_overlay()

        logger.debug("Background set: canvas %.2fx%.2f, overlay frame at (%.2f, %.2f)",
                     dimensions.width, dimensions.height,
                     self._overlay_frame.x, self._overlay_frame.y)
        self._notify_listeners(CHANGE_BACKGROUND)

    def update_overlay_transform(self, matrix: AffineTransform2D):
        """Apply the latest transform from the manipulation surface (last write wins)"""
        self._overlay_transform = matrix
        self._update_bounding_box()
        self._notify_listeners(CHANGE_TRANSFORM)

    def set_overlay_frame(self, frame: Rect):
        """The manipulation surface moved or resized the overlay's frame"""
        self._overlay_frame = frame
        self._update_bounding_box()
        self._notify_listeners(CHANGE_FRAME)

    def reset_overlay(self):
        """Recenter the overlay at natural size with an identity transform"""
        self._recenter_overlay()
        self._notify_listeners(CHANGE_FRAME)

    def handle_event(self, event: ManipulationEvent) -> AffineTransform2D:
        """Apply a drag/scale/rotate event

        The state is untouched when the transform string is malformed.

        Raises:
            TransformParseError: event.transform is not a valid CSS transform
        """
        matrix = parse_css_transform(event.transform)
        self.update_overlay_transform(matrix)
        return matrix

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, callback: Callable[[str], None]):
        """Register a callback(change_kind) invoked after every mutation"""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[str], None]):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify_listeners(self, change: str):
        for callback in list(self._listeners):
            callback(change)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _recenter_overlay(self):
        self._overlay_frame = Rect.centered_in(
            self._canvas_dimensions, self._overlay_size.width, self._overlay_size.height
        )
        self._overlay_transform = AffineTransform2D.identity()
        self._update_bounding_box()

    def _update_bounding_box(self):
        self._overlay_bounding_box = transformed_bounds(self._overlay_frame, self._overlay_transform)
