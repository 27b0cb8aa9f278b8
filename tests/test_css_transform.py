"""
Unit tests for the CSS transform parser/serializer.
"""
import math

import pytest

from sticker_editor.errors import TransformParseError
from sticker_editor.models.transform import AffineTransform2D
from sticker_editor.utils.css_transform import format_css_matrix, parse_css_transform


def _approx(matrix, expected):
    assert list(matrix) == pytest.approx(list(expected), abs=1e-12)


class TestParse:

    @pytest.mark.parametrize("text", ["", "   ", "none", "NONE", None])
    def test_empty_and_none_are_identity(self, text):
        assert parse_css_transform(text) == AffineTransform2D.identity()

    def test_matrix(self):
        assert parse_css_transform("matrix(0, 2, -2, 0, 10, 20)") == AffineTransform2D(0, 2, -2, 0, 10, 20)

    def test_matrix_whitespace_separated(self):
        assert parse_css_transform("matrix(1 0 0 1 3.5 -4e1)") == AffineTransform2D(1, 0, 0, 1, 3.5, -40)

    def test_translate_units(self):
        assert parse_css_transform("translate(10px, 20px)") == AffineTransform2D.translation(10, 20)
        assert parse_css_transform("translate(10)") == AffineTransform2D.translation(10, 0)
        assert parse_css_transform("translateX(5px) translateY(-6px)") == AffineTransform2D.translation(5, -6)

    def test_scale(self):
        assert parse_css_transform("scale(2)") == AffineTransform2D.scaling(2)
        assert parse_css_transform("scale(2, 3)") == AffineTransform2D.scaling(2, 3)
        assert parse_css_transform("scaleX(2) scaleY(.5)") == AffineTransform2D.scaling(2, 0.5)

    @pytest.mark.parametrize("text, radians", [
        ("rotate(90deg)", math.pi / 2),
        ("rotate(0.5turn)", math.pi),
        ("rotate(100grad)", math.pi / 2),
        ("rotate(1rad)", 1.0),
        ("rotate(0)", 0.0),
        ("ROTATE(90DEG)", math.pi / 2),
    ])
    def test_rotate_units(self, text, radians):
        _approx(parse_css_transform(text), AffineTransform2D.rotation(radians))

    def test_functions_compose_left_to_right(self):
        result = parse_css_transform("translate(100px, 0) rotate(90deg)")
        # rotate first, then translate
        x, y = result.apply(10, 0)
        assert (x, y) == pytest.approx((100, 10))

    @pytest.mark.parametrize("text", [
        "matrix(1, 0, 0, 1, 0)",
        "matrix(1, 0, 0, 1, 0, 0, 0)",
        "rotate(90)",
        "rotate(90px)",
        "translate(10%)",
        "translate(1em)",
        "scale(2px)",
        "skew(10deg)",
        "matrix3d(1, 0, 0, 0)",
        "rotate(90deg",
        "rotate 90deg",
        "rotate()",
        "matrix(1,,0,0,1,0,0)",
        "translate(a, b)",
        "none rotate(1rad)",
        "42",
        "scale(2.5.5)",
        "translate(10px20px)",
        "scale(1-1)",
        "rotate(1rad2rad)",
    ])
    def test_rejects_malformed(self, text):
        with pytest.raises(TransformParseError):
            parse_css_transform(text)

    def test_error_reports_position(self):
        with pytest.raises(TransformParseError) as exc_info:
            parse_css_transform("rotate(1rad) wobble(2)")
        assert exc_info.value.position == 13
        assert "wobble" in str(exc_info.value)


class TestFormat:

    def test_integers_have_no_decimals(self):
        assert format_css_matrix(AffineTransform2D(1, 0, 0, 1, 20, -10)) == "matrix(1, 0, 0, 1, 20, -10)"

    def test_negative_zero(self):
        assert format_css_matrix(AffineTransform2D(1, -0.0, 0.0, 1, -0.0, 0)) == "matrix(1, 0, 0, 1, 0, 0)"

    def test_parses_back_exactly(self):
        matrix = AffineTransform2D.from_components(0.3, 1.7, 12.25, -3.125)
        assert parse_css_transform(format_css_matrix(matrix)) == matrix
