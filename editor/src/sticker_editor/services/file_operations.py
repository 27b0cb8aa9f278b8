"""
Sticker Overlay Editor - File Operations Service

This module handles file I/O for exported images.
Separates file operations from UI logic.
"""

import logging
import os
import tempfile
from pathlib import Path

from sticker_editor.constants import EXPORT_FILENAME
from sticker_editor.errors import EncodingError

logger = logging.getLogger(__name__)


def save_encoded_image(encoded, filename):
    """Write an EncodedImage to disk without ever leaving a partial file

    The bytes go to a temporary file in the destination directory first and
    are moved into place with an atomic rename.

    Args:
        encoded: EncodedImage from the compositor
        filename: Destination path

    Returns:
        Path of the written file

    Raises:
        EncodingError: If the file cannot be written
    """
    path = Path(filename)
    directory = path.parent

    tmp_name = None
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile('wb', dir=directory, prefix=f'.{path.name}.', suffix='.tmp',
                                         delete=False) as f:
            tmp_name = f.name
            f.write(encoded.data)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise EncodingError(f"Could not write {path}: {e}") from e

    logger.info("Image saved to %s (%d bytes)", path, len(encoded.data))
    return path


def default_export_path(directory=None, filename=EXPORT_FILENAME):
    """Suggested destination for a download

    Args:
        directory: Last used export directory, or None for the current directory
        filename: Default export filename

    Returns:
        Path
    """
    if directory and os.path.isdir(directory):
        return Path(directory) / filename
    return Path(filename)
