"""
Shared fixtures for Sticker Overlay Editor tests.

Provides synthetic overlay bitmaps, background image files and sessions.
"""
import sys
import os
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))

# Widget tests run without a display
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

from PIL import Image

from sticker_editor.models.image import Bitmap
from sticker_editor.services.edit_session import EditSession
from sticker_editor.services.image_acquisition import ImageAcquisition


BLUE = (0, 0, 255, 255)
RED = (255, 0, 0, 255)
GREEN = (0, 200, 0, 255)
FILL = (243, 244, 246, 255)


def make_split_overlay(size=128):
    """Overlay whose top half is blue and bottom half red."""
    image = Image.new('RGBA', (size, size), RED)
    image.paste(BLUE, (0, 0, size, size // 2))
    return Bitmap.from_image(image, source='split-overlay')


def write_image(path, size, color=GREEN, mode='RGBA', fmt='PNG'):
    Image.new(mode, size, color).save(path, format=fmt)
    return str(path)


# ── Bitmaps ─────────────────────────────────────────────────────────────

@pytest.fixture
def split_overlay():
    return make_split_overlay()


@pytest.fixture
def overlay_file(tmp_path):
    """Split overlay written to disk, for file-based overlay loading."""
    path = tmp_path / 'overlay.png'
    make_split_overlay().image.save(path)
    return str(path)


@pytest.fixture
def wide_background(tmp_path):
    """1000x400 green PNG."""
    return write_image(tmp_path / 'wide.png', (1000, 400))


@pytest.fixture
def tall_background(tmp_path):
    """300x600 green JPEG."""
    return write_image(tmp_path / 'tall.jpg', (300, 600), color=(0, 200, 0), mode='RGB', fmt='JPEG')


@pytest.fixture
def corrupt_file(tmp_path):
    path = tmp_path / 'corrupt.png'
    path.write_bytes(b'\x89PNG\r\n\x1a\nthis is not really a png')
    return str(path)


# ── Sessions ────────────────────────────────────────────────────────────

@pytest.fixture
def session(split_overlay):
    """Edit session using the split overlay instead of the bundled asset."""
    acquisition = ImageAcquisition()
    acquisition.set_overlay(split_overlay)
    session = EditSession(acquisition=acquisition)
    yield session
    session.close()
