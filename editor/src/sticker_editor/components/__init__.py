"""UI components for the Sticker Overlay Editor

- CanvasWidget: live preview of background and overlay
- TransformWidget: manipulation surface laid over the preview
"""

from .canvas_widget import CanvasWidget
from .transform_widget import TransformWidget

__all__ = [
    'CanvasWidget',
    'TransformWidget',
]
