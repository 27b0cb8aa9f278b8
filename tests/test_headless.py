"""
End-to-end tests for the headless CLI.
"""
from PIL import Image

from conftest import BLUE, FILL, RED
from sticker_editor.headless import main


class TestHeadless:

    def test_renders_background_and_overlay(self, tmp_path, wide_background, overlay_file, capsys):
        output = tmp_path / 'result.png'
        code = main([wide_background, '--overlay', overlay_file, '-o', str(output)])

        assert code == 0
        assert 'Wrote 500x200 PNG' in capsys.readouterr().out
        with Image.open(output) as image:
            assert image.size == (500, 200)
            assert image.convert('RGBA').getpixel((250, 60)) == BLUE

    def test_transform_is_applied(self, tmp_path, overlay_file):
        output = tmp_path / 'rotated.png'
        code = main(['-t', 'matrix(0, 2, -2, 0, 0, 0)', '--overlay', overlay_file, '-o', str(output)])

        assert code == 0
        with Image.open(output) as image:
            rgba = image.convert('RGBA')
            assert rgba.size == (500, 500)
            assert rgba.getpixel((350, 250)) == BLUE
            assert rgba.getpixel((150, 250)) == RED

    def test_long_side_option(self, tmp_path, tall_background, overlay_file):
        output = tmp_path / 'small.png'
        assert main([tall_background, '--long-side', '100', '--overlay', overlay_file, '-o', str(output)]) == 0
        with Image.open(output) as image:
            assert image.size == (50, 100)

    def test_collapsed_overlay_exports_fill(self, tmp_path, overlay_file):
        output = tmp_path / 'blank.png'
        assert main(['-t', 'scale(0)', '--overlay', overlay_file, '-o', str(output)]) == 0
        with Image.open(output) as image:
            assert image.convert('RGBA').getcolors() == [(500 * 500, FILL)]

    def test_bad_transform_fails_without_output(self, tmp_path, overlay_file, capsys):
        output = tmp_path / 'never.png'
        assert main(['-t', 'skew(10deg)', '--overlay', overlay_file, '-o', str(output)]) == 1
        assert 'Error:' in capsys.readouterr().out
        assert not output.exists()

    def test_bad_background_fails_without_output(self, tmp_path, corrupt_file, overlay_file):
        output = tmp_path / 'never.png'
        assert main([corrupt_file, '--overlay', overlay_file, '-o', str(output)]) == 1
        assert not output.exists()

    def test_missing_overlay_fails_without_output(self, tmp_path):
        output = tmp_path / 'never.png'
        assert main(['--overlay', str(tmp_path / 'missing.png'), '-o', str(output)]) == 1
        assert not output.exists()

    def test_non_positive_long_side(self, tmp_path):
        assert main(['--long-side', '0', '-o', str(tmp_path / 'x.png')]) == 1
