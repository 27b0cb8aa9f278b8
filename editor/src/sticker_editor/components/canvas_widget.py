# PyQt5 imports
from PyQt5.QtWidgets import QWidget, QSizePolicy
from PyQt5.QtCore import QSize, QRectF
from PyQt5.QtGui import QPainter, QColor, QImage, QTransform

# External library imports
import numpy as np
import logging

from sticker_editor.constants import CANVAS_FILL_COLOR
from sticker_editor.components.transform_widget import TransformWidget
from sticker_editor.utils.transform_math import transform_about_center

logger = logging.getLogger(__name__)


def bitmap_to_qimage(bitmap):
	"""Convert a decoded Bitmap to a QImage that owns its pixels"""
	arr = np.ascontiguousarray(np.asarray(bitmap.image.convert('RGBA'), dtype=np.uint8))
	image = QImage(arr.tobytes(), bitmap.width, bitmap.height, bitmap.width * 4, QImage.Format_RGBA8888)
	# Make a copy since the buffer will be deallocated
	return image.copy()


def qtransform_from_affine(matrix):
	"""QTransform for an AffineTransform2D (same column layout, named m11/m12/m21/m22/dx/dy)"""
	return QTransform(matrix.a, matrix.b, matrix.c, matrix.d, matrix.tx, matrix.ty)


class CanvasWidget(QWidget):
	"""Live preview of the scene: fill, stretched background and transformed overlay

	The widget is always exactly the fitted canvas size (truncated to whole
	pixels, the same rounding the export uses), so widget coordinates are
	canvas coordinates. The TransformWidget child covers it completely.
	"""

	def __init__(self, parent=None):
		super().__init__(parent)
		self.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)

		self.scene = None
		self._background_image = None
		self._background_source = None
		self._overlay_image = None

		self.transform_widget = TransformWidget(self)

	def set_scene(self, scene):
		"""Attach the scene state and repaint on every change"""
		self.scene = scene
		scene.add_listener(self._on_scene_changed)
		self.transform_widget.sync_to_scene(scene)
		self._on_scene_changed()

	def set_overlay(self, bitmap):
		"""Overlay bitmap to draw, or None to draw only the handles"""
		self._overlay_image = bitmap_to_qimage(bitmap) if bitmap is not None else None
		self.update()

	def sizeHint(self):
		if self.scene is None:
			return super().sizeHint()
		width, height = self.scene.canvas_dimensions.to_pixels()
		return QSize(width, height)

	def _on_scene_changed(self, change=None):
		width, height = self.scene.canvas_dimensions.to_pixels()
		if (self.width(), self.height()) != (width, height):
			self.setFixedSize(width, height)
			logger.debug("Canvas resized to %dx%d", width, height)
		# Resize events are deferred while hidden, so size the surface directly
		self.transform_widget.setGeometry(0, 0, width, height)

		# Only reconvert when the background bitmap itself changed
		background = self.scene.background
		if background is not self._background_source:
			self._background_source = background
			self._background_image = bitmap_to_qimage(background) if background is not None else None

		self.update()

	def paintEvent(self, event):
		painter = QPainter(self)
		painter.setRenderHint(QPainter.SmoothPixmapTransform)
		target = QRectF(0, 0, self.width(), self.height())

		painter.fillRect(target, QColor(CANVAS_FILL_COLOR))

		if self._background_image is not None:
			painter.drawImage(target, self._background_image)

		if self.scene is not None and self._overlay_image is not None:
			frame = self.scene.overlay_frame
			full = transform_about_center(frame, self.scene.overlay_transform)
			painter.setTransform(qtransform_from_affine(full))
			painter.drawImage(QRectF(frame.x, frame.y, frame.width, frame.height), self._overlay_image)
			painter.resetTransform()

		painter.end()
