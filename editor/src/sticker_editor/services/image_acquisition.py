"""Image Acquisition Service.

Turns user-selected files (or raw bytes) into fully decoded Bitmaps.
Decoding runs on a single background worker and is exposed as
concurrent.futures.Future objects; callers must wait for the result before
touching pixel data.

The fixed overlay asset is decoded once and cached.
"""

import io
import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from sticker_editor.errors import AssetLoadError
from sticker_editor.models.image import Bitmap
from sticker_editor.utils.path_resolver import get_overlay_asset_path

logger = logging.getLogger(__name__)

ImageSource = Union[str, os.PathLike, bytes]


def supported_extensions():
    """File extensions Pillow can decode, lower-case with leading dot"""
    registered = Image.registered_extensions()
    return sorted(ext for ext, fmt in registered.items() if fmt in Image.OPEN)


def is_supported(path) -> bool:
    """True if the file extension belongs to a decodable image type"""
    return Path(path).suffix.lower() in supported_extensions()


def dialog_filter() -> str:
    """Qt file dialog filter for all decodable image types"""
    patterns = ' '.join(f'*{ext}' for ext in supported_extensions())
    return f"Images ({patterns})"


def describe_source(source: ImageSource) -> str:
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    return str(source)


def decode(source: ImageSource) -> Bitmap:
    """Decode an image file or in-memory bytes into a Bitmap

    Pixel data is fully loaded before returning.

    Args:
        source: File path or encoded image bytes

    Returns:
        Bitmap

    Raises:
        AssetLoadError: File missing, unreadable or not a decodable image
    """
    name = describe_source(source)
    try:
        if isinstance(source, (bytes, bytearray)):
            handle = io.BytesIO(source)
        else:
            handle = source
        with Image.open(handle) as img:
            # Image.open is lazy; convert() forces the full decode
            rgba = img.convert('RGBA')
    except FileNotFoundError as e:
        raise AssetLoadError(name, "file not found") from e
    except (UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise AssetLoadError(name, str(e)) from e
    except (OSError, ValueError, SyntaxError) as e:
        # Truncated or corrupt data surfaces as OSError/SyntaxError from the decoders
        raise AssetLoadError(name, str(e)) from e

    logger.debug("Decoded %s (%dx%d)", name, rgba.width, rgba.height)
    return Bitmap.from_image(rgba, source='' if isinstance(source, (bytes, bytearray)) else str(source))


class ImageAcquisition:
    """Asynchronous image decoder with a cached overlay asset

    Usage:
        acquisition = ImageAcquisition()
        future = acquisition.decode_async("photo.jpg")
        bitmap = future.result()   # raises AssetLoadError on failure
        overlay = acquisition.load_overlay().result()
    """

    def __init__(self, overlay_path=None, executor: Optional[ThreadPoolExecutor] = None):
        self.overlay_path = Path(overlay_path) if overlay_path else get_overlay_asset_path()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix='image-decode')
        self._overlay_future: Optional[Future] = None

    def decode_async(self, source: ImageSource) -> Future:
        """Start decoding ``source``; the future resolves to a Bitmap"""
        logger.debug("Queued decode of %s", describe_source(source))
        return self._executor.submit(decode, source)

    def load_overlay(self) -> Future:
        """Future for the fixed overlay asset, decoded once

        A failed load is dropped from the cache so the next export retries.
        """
        future = self._overlay_future
        if future is None or (future.done() and future.exception() is not None):
            logger.debug("Loading overlay asset %s", self.overlay_path)
            future = self.decode_async(self.overlay_path)
            self._overlay_future = future
        return future

    def set_overlay(self, bitmap: Bitmap):
        """Use an already decoded overlay instead of the asset file"""
        future = Future()
        future.set_result(bitmap)
        self._overlay_future = future

    def shutdown(self, wait: bool = True):
        if self._owns_executor:
            self._executor.shutdown(wait=wait)
