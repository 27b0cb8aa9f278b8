"""
Unit tests for the scene state: recentering, transforms, listeners.
"""
import pytest
from PIL import Image

from sticker_editor.errors import TransformParseError
from sticker_editor.models.image import Bitmap
from sticker_editor.models.scene import ManipulationEvent, SceneState
from sticker_editor.models.transform import AffineTransform2D, Dimensions, Rect


@pytest.fixture
def scene():
    return SceneState()


@pytest.fixture
def background():
    return Bitmap.from_image(Image.new('RGBA', (1000, 400), (0, 200, 0, 255)), source='wide.png')


class TestInitialState:

    def test_default_canvas(self, scene):
        assert scene.canvas_dimensions == Dimensions(500, 500)
        assert scene.background is None
        assert not scene.has_background

    def test_overlay_centered_at_natural_size(self, scene):
        assert scene.overlay_frame == Rect(186, 186, 128, 128)
        assert scene.overlay_transform.is_identity
        assert scene.overlay_bounding_box == scene.overlay_frame
        assert scene.current_overlay_screen_rect() == Rect(186, 186, 128, 128)


class TestSetBackground:

    def test_recenters_overlay_on_fitted_canvas(self, scene, background):
        scene.set_background(background, Dimensions(500, 200))

        assert scene.canvas_dimensions == Dimensions(500, 200)
        assert scene.background is background
        assert scene.overlay_frame == Rect(186, 36, 128, 128)

    def test_resets_transform(self, scene, background):
        scene.update_overlay_transform(AffineTransform2D.from_components(1.0, 2.0, 40, 40))
        scene.set_background(background, Dimensions(500, 200))

        assert scene.overlay_transform.is_identity
        assert scene.overlay_bounding_box == Rect(186, 36, 128, 128)

    def test_clearing_background_keeps_dimensions(self, scene, background):
        scene.set_background(background, Dimensions(500, 200))
        scene.set_background(None, Dimensions(500, 200))
        assert not scene.has_background
        assert scene.canvas_dimensions == Dimensions(500, 200)


class TestTransforms:

    def test_update_transform_moves_bounding_box(self, scene):
        scene.update_overlay_transform(AffineTransform2D.translation(10, 20))
        assert scene.overlay_bounding_box == Rect(196, 206, 128, 128)
        # The frame itself does not move
        assert scene.overlay_frame == Rect(186, 186, 128, 128)

    def test_last_write_wins(self, scene):
        scene.update_overlay_transform(AffineTransform2D.translation(10, 20))
        scene.update_overlay_transform(AffineTransform2D.translation(-5, 0))
        assert scene.overlay_transform == AffineTransform2D.translation(-5, 0)

    def test_set_overlay_frame(self, scene):
        scene.set_overlay_frame(Rect(0, 0, 128, 128))
        assert scene.overlay_bounding_box == Rect(0, 0, 128, 128)

    def test_reset_overlay(self, scene):
        scene.update_overlay_transform(AffineTransform2D.scaling(3))
        scene.reset_overlay()
        assert scene.overlay_transform.is_identity
        assert scene.overlay_bounding_box == Rect(186, 186, 128, 128)


class TestHandleEvent:

    @pytest.mark.parametrize("kind", ["drag", "scale", "rotate"])
    def test_applies_transform_string(self, scene, kind):
        matrix = scene.handle_event(ManipulationEvent(kind, "matrix(0, 2, -2, 0, 0, 0)"))

        assert matrix == AffineTransform2D(0, 2, -2, 0, 0, 0)
        assert scene.overlay_transform == matrix
        box = scene.overlay_bounding_box
        assert (box.x, box.y, box.width, box.height) == pytest.approx((122, 122, 256, 256))

    def test_malformed_leaves_state_untouched(self, scene):
        scene.handle_event(ManipulationEvent('drag', "translate(5px, 5px)"))
        before = (scene.overlay_transform, scene.overlay_bounding_box)

        with pytest.raises(TransformParseError):
            scene.handle_event(ManipulationEvent('rotate', "rotate(oops)"))

        assert (scene.overlay_transform, scene.overlay_bounding_box) == before

    def test_unknown_event_kind(self):
        with pytest.raises(ValueError):
            ManipulationEvent('pinch', 'none')


class TestListeners:

    def test_notified_synchronously_with_change_kind(self, scene, background):
        changes = []
        scene.add_listener(changes.append)

        scene.set_background(background, Dimensions(500, 200))
        scene.update_overlay_transform(AffineTransform2D.translation(1, 1))
        scene.set_overlay_frame(Rect(0, 0, 128, 128))

        assert changes == ['background', 'transform', 'frame']

    def test_listener_sees_settled_state(self, scene, background):
        seen = []
        scene.add_listener(lambda change: seen.append(scene.overlay_frame))

        scene.set_background(background, Dimensions(500, 200))
        assert seen == [Rect(186, 36, 128, 128)]

    def test_remove_listener(self, scene):
        changes = []
        scene.add_listener(changes.append)
        scene.remove_listener(changes.append)
        scene.update_overlay_transform(AffineTransform2D.identity())
        assert changes == []

    def test_failed_event_does_not_notify(self, scene):
        changes = []
        scene.add_listener(changes.append)
        with pytest.raises(TransformParseError):
            scene.handle_event(ManipulationEvent('drag', "matrix(1)"))
        assert changes == []
