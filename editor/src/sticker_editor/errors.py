"""Exception types raised by the sticker editor core.

Every error is scoped to a single user action (upload, manipulation event or
export) and leaves the scene state consistent.
"""


class StickerEditorError(Exception):
    """Base class for all editor errors"""


class InvalidDimensions(StickerEditorError, ValueError):
    """Source image or canvas dimensions are zero or negative"""

    def __init__(self, width, height):
        self.width = width
        self.height = height
        super().__init__(f"Invalid dimensions {width}x{height}: both sides must be > 0")


class InvalidTransform(StickerEditorError, ValueError):
    """Transform matrix is not a pure rotation times uniform scale"""


class TransformParseError(StickerEditorError, ValueError):
    """Serialized CSS transform string could not be parsed"""

    def __init__(self, message, text="", position=None):
        self.text = text
        self.position = position
        if position is not None:
            message = f"{message} at position {position} in {text!r}"
        super().__init__(message)


class AssetLoadError(StickerEditorError, OSError):
    """Background or overlay image failed to load or decode"""

    def __init__(self, source, reason):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load image {source}: {reason}")


class EncodingError(StickerEditorError, OSError):
    """Composited surface could not be encoded or written"""
