"""
Image acquisition tests: decoding files and bytes, async futures, overlay cache.
"""
import io
from concurrent.futures import Future
from pathlib import Path

import pytest
from PIL import Image

from sticker_editor.errors import AssetLoadError
from sticker_editor.models.image import Bitmap
from sticker_editor.services.image_acquisition import (
    ImageAcquisition, decode, dialog_filter, is_supported, supported_extensions,
)
from sticker_editor.utils.path_resolver import get_overlay_asset_path


@pytest.fixture
def acquisition():
    acquisition = ImageAcquisition()
    yield acquisition
    acquisition.shutdown()


class TestDecode:

    def test_png_file(self, wide_background):
        bitmap = decode(wide_background)
        assert isinstance(bitmap, Bitmap)
        assert (bitmap.width, bitmap.height) == (1000, 400)
        assert bitmap.image.mode == 'RGBA'
        assert bitmap.source == wide_background

    def test_rgb_jpeg_is_converted(self, tall_background):
        bitmap = decode(tall_background)
        assert (bitmap.width, bitmap.height) == (300, 600)
        assert bitmap.image.mode == 'RGBA'

    def test_bytes(self):
        buffer = io.BytesIO()
        Image.new('RGB', (7, 3), (1, 2, 3)).save(buffer, format='PNG')
        bitmap = decode(buffer.getvalue())
        assert (bitmap.width, bitmap.height) == (7, 3)
        assert bitmap.image.getpixel((0, 0)) == (1, 2, 3, 255)

    def test_missing_file(self, tmp_path):
        with pytest.raises(AssetLoadError) as exc_info:
            decode(tmp_path / 'nope.png')
        assert exc_info.value.reason == 'file not found'

    def test_corrupt_file(self, corrupt_file):
        with pytest.raises(AssetLoadError):
            decode(corrupt_file)

    def test_not_an_image(self, tmp_path):
        path = tmp_path / 'notes.png'
        path.write_text('hello')
        with pytest.raises(AssetLoadError):
            decode(str(path))

    def test_asset_load_error_is_os_error(self, tmp_path):
        with pytest.raises(OSError):
            decode(tmp_path / 'nope.png')


class TestSupportedTypes:

    @pytest.mark.parametrize("name", ['a.png', 'b.JPG', 'c.jpeg', 'd.gif', 'e.bmp'])
    def test_common_image_types(self, name):
        assert is_supported(name)

    @pytest.mark.parametrize("name", ['a.txt', 'b', 'c.pdf.zip'])
    def test_rejects_other_files(self, name):
        assert not is_supported(name)

    def test_dialog_filter_lists_extensions(self):
        text = dialog_filter()
        assert text.startswith('Images (')
        assert '*.png' in text
        assert all(ext.startswith('.') for ext in supported_extensions())


class TestAsync:

    def test_decode_async_returns_future(self, acquisition, wide_background):
        future = acquisition.decode_async(wide_background)
        assert isinstance(future, Future)
        assert future.result(timeout=10).width == 1000

    def test_decode_async_failure_in_future(self, acquisition, corrupt_file):
        future = acquisition.decode_async(corrupt_file)
        with pytest.raises(AssetLoadError):
            future.result(timeout=10)


class TestOverlay:

    def test_bundled_asset_is_128_square(self, acquisition):
        assert get_overlay_asset_path().exists()
        overlay = acquisition.load_overlay().result(timeout=10)
        assert (overlay.width, overlay.height) == (128, 128)
        assert overlay.image.mode == 'RGBA'

    def test_bundled_asset_ships_inside_package(self):
        import sticker_editor
        package_dir = Path(sticker_editor.__file__).resolve().parent
        assert get_overlay_asset_path().resolve().parent.parent == package_dir

    def test_overlay_is_cached(self, overlay_file):
        acquisition = ImageAcquisition(overlay_path=overlay_file)
        try:
            first = acquisition.load_overlay()
            first.result(timeout=10)
            assert acquisition.load_overlay() is first
        finally:
            acquisition.shutdown()

    def test_failed_overlay_is_retried(self, tmp_path):
        path = tmp_path / 'late.png'
        acquisition = ImageAcquisition(overlay_path=path)
        try:
            with pytest.raises(AssetLoadError):
                acquisition.load_overlay().result(timeout=10)

            Image.new('RGBA', (128, 128), (9, 9, 9, 255)).save(path)
            overlay = acquisition.load_overlay().result(timeout=10)
            assert overlay.image.getpixel((0, 0)) == (9, 9, 9, 255)
        finally:
            acquisition.shutdown()

    def test_set_overlay(self, acquisition, split_overlay):
        acquisition.set_overlay(split_overlay)
        assert acquisition.load_overlay().result() is split_overlay
