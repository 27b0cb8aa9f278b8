"""
Unit tests for canvas fitting.

The long side of the uploaded image always maps to the target length and the
aspect ratio is preserved.
"""
import pytest
from PIL import Image

from sticker_editor.errors import InvalidDimensions
from sticker_editor.models.image import Bitmap
from sticker_editor.models.transform import Dimensions
from sticker_editor.utils.canvas_fitter import fit, fit_bitmap


class TestFit:

    def test_landscape_maps_width_to_target(self):
        assert fit(1000, 400) == Dimensions(500, 200)

    def test_portrait_maps_height_to_target(self):
        assert fit(300, 600) == Dimensions(250, 500)

    def test_square_maps_to_target_square(self):
        assert fit(2000, 2000) == Dimensions(500, 500)

    def test_small_images_are_scaled_up(self):
        assert fit(50, 25) == Dimensions(500, 250)

    def test_custom_target_long_side(self):
        assert fit(1000, 400, target_long_side=250) == Dimensions(250, 100)

    @pytest.mark.parametrize("width, height", [
        (1000, 400), (400, 1000), (1, 999), (999, 1), (640, 480), (123, 457),
    ])
    def test_long_side_and_aspect_ratio(self, width, height):
        result = fit(width, height)
        assert max(result.width, result.height) == pytest.approx(500)
        assert result.width / result.height == pytest.approx(width / height)

    def test_fractional_sides_are_kept(self):
        result = fit(3, 7)
        assert result.height == 500
        assert result.width == pytest.approx(500 * 3 / 7)
        assert result.to_pixels() == (214, 500)

    @pytest.mark.parametrize("width, height", [(0, 100), (100, 0), (-5, 10), (10, -5), (0, 0)])
    def test_non_positive_dimensions_raise(self, width, height):
        with pytest.raises(InvalidDimensions):
            fit(width, height)

    def test_non_positive_target_raises(self):
        with pytest.raises(InvalidDimensions):
            fit(100, 100, target_long_side=0)

    def test_invalid_dimensions_is_a_value_error(self):
        with pytest.raises(ValueError):
            fit(0, 1)


class TestFitBitmap:

    def test_uses_natural_pixel_size(self):
        bitmap = Bitmap.from_image(Image.new('RGBA', (800, 200)))
        assert fit_bitmap(bitmap) == Dimensions(500, 125)


class TestDimensions:

    def test_to_pixels_truncates(self):
        assert Dimensions(333.9, 499.99).to_pixels() == (333, 499)

    def test_to_pixels_never_returns_zero(self):
        assert Dimensions(0.4, 500).to_pixels() == (1, 500)

    def test_rejects_non_positive_sides(self):
        with pytest.raises(InvalidDimensions):
            Dimensions(0, 10)
