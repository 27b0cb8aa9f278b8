"""
Transform Widget - Interactive manipulation surface for the overlay

Provides a transparent widget laid over the preview canvas with:
- drag anywhere inside the overlay to move it
- 4 corner handles for keep-ratio scaling about the overlay center
- rotation handle above the top edge (Shift snaps to 45 degree steps)
- the overlay outline drawn as its rotated frame

Each update is emitted as a serialized CSS ``matrix(...)`` string, the same
form a browser transform library reports, so the scene state consumes GUI
and scripted events identically.
"""

import math

from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, QPointF, pyqtSignal
from PyQt5.QtGui import QPainter, QPen, QBrush, QColor, QPolygonF

from sticker_editor.constants import (
	TRANSFORM_HANDLE_SIZE, TRANSFORM_ROTATION_HANDLE_SIZE, TRANSFORM_ROTATION_HANDLE_OFFSET,
	TRANSFORM_HIT_TOLERANCE, HANDLE_FILL_COLOR, HANDLE_BORDER_COLOR, ROTATION_HANDLE_BORDER_COLOR,
	FRAME_LINE_COLOR, FRAME_LINE_WIDTH, HANDLE_BORDER_WIDTH,
	TRANSFORM_SCALE_MIN, TRANSFORM_SCALE_MAX, ROTATION_SNAP_DEGREES, CLAMP_TO_CANVAS,
)
from sticker_editor.models.transform import AffineTransform2D, Rect
from sticker_editor.utils.css_transform import format_css_matrix
from sticker_editor.utils.transform_math import clamp_translation, decompose, snap_degrees, transform_about_center


class TransformWidget(QWidget):
	"""Interactive transform widget for manipulating the overlay"""

	# Signals carry the full accumulated transform as a CSS matrix() string
	dragged = pyqtSignal(str)
	scaled = pyqtSignal(str)
	rotated = pyqtSignal(str)
	transformEnded = pyqtSignal()  # Emitted when a drag ends

	# Handle types
	HANDLE_NONE = 0
	HANDLE_CENTER = 1
	HANDLE_TL = 2  # Top-left corner
	HANDLE_TR = 3  # Top-right corner
	HANDLE_BR = 4  # Bottom-right corner
	HANDLE_BL = 5  # Bottom-left corner
	HANDLE_ROTATE = 6

	CORNER_HANDLES = (HANDLE_TL, HANDLE_TR, HANDLE_BR, HANDLE_BL)

	def __init__(self, parent=None):
		super().__init__(parent)
		self.setAttribute(Qt.WA_TranslucentBackground)
		self.setMouseTracking(True)

		# Transform state (canvas pixel coordinates)
		self.frame = Rect(0, 0, 0, 0)
		self.matrix = AffineTransform2D.identity()
		self.clamp_to_canvas = CLAMP_TO_CANVAS

		# Interaction state
		self.active_handle = self.HANDLE_NONE
		self.drag_start_pos = None
		self.drag_start_matrix = None
		self.visible = True

		# Handle size
		self.handle_size = TRANSFORM_HANDLE_SIZE
		self.rotation_handle_size = TRANSFORM_ROTATION_HANDLE_SIZE
		self.rotation_handle_offset = TRANSFORM_ROTATION_HANDLE_OFFSET

		# Position absolutely on top of parent
		if parent:
			self.setGeometry(0, 0, parent.width(), parent.height())
			parent.installEventFilter(self)

	def eventFilter(self, obj, event):
		"""Handle parent resize to keep widget covering parent"""
		if event.type() == event.Resize and obj == self.parent():
			self.setGeometry(0, 0, obj.width(), obj.height())
		return super().eventFilter(obj, event)

	# ------------------------------------------------------------------
	# State
	# ------------------------------------------------------------------

	def set_transform(self, frame, matrix):
		"""Set the overlay frame and transform without emitting signals"""
		self.frame = frame
		self.matrix = matrix
		self.update()

	def sync_to_scene(self, scene):
		"""Follow ``scene`` from now on; also usable as a scene listener"""
		def _on_scene_changed(change=None):
			self.set_transform(scene.overlay_frame, scene.overlay_transform)

		scene.add_listener(_on_scene_changed)
		_on_scene_changed()
		return _on_scene_changed

	def set_visible(self, visible):
		"""Show/hide the handles"""
		self.visible = visible
		self.setAttribute(Qt.WA_TransparentForMouseEvents, not visible)
		self.update()

	def overlay_center(self, matrix=None):
		"""Center of the transformed overlay; the transform origin moves with translation"""
		if matrix is None:
			matrix = self.matrix
		center = self.frame.center
		return QPointF(center.x + matrix.tx, center.y + matrix.ty)

	# ------------------------------------------------------------------
	# Geometry
	# ------------------------------------------------------------------

	def _outline(self):
		"""Corners of the transformed frame, clockwise from top-left"""
		full = transform_about_center(self.frame, self.matrix)
		return [QPointF(*full.apply(corner.x, corner.y)) for corner in self.frame.corners()]

	def _get_handle_positions(self):
		"""Calculate handle positions in widget space"""
		outline = self._outline()
		positions = dict(zip(self.CORNER_HANDLES, outline))
		positions[self.HANDLE_CENTER] = self.overlay_center()

		# Rotation handle sits above the middle of the (rotated) top edge
		rotation = decompose(self.matrix).rotation_radians
		top_mid = (outline[0] + outline[1]) / 2
		up = QPointF(math.sin(rotation), -math.cos(rotation))
		positions[self.HANDLE_ROTATE] = top_mid + up * self.rotation_handle_offset
		return positions

	def _get_handle_at_pos(self, pos):
		"""Get which handle is at the given position"""
		if not self.visible:
			return self.HANDLE_NONE

		handles = self._get_handle_positions()
		point = QPointF(pos)

		check_order = [self.HANDLE_ROTATE] + list(self.CORNER_HANDLES)
		for handle_type in check_order:
			size = self.rotation_handle_size if handle_type == self.HANDLE_ROTATE else self.handle_size
			delta = point - handles[handle_type]
			if math.hypot(delta.x(), delta.y()) <= size + TRANSFORM_HIT_TOLERANCE:
				return handle_type

		# Grab anywhere inside the overlay for translation
		if QPolygonF(self._outline()).containsPoint(point, Qt.OddEvenFill):
			return self.HANDLE_CENTER

		return self.HANDLE_NONE

	# ------------------------------------------------------------------
	# Painting
	# ------------------------------------------------------------------

	def paintEvent(self, event):
		"""Draw the overlay outline and handles"""
		if not self.visible or self.frame.width <= 0:
			return

		painter = QPainter(self)
		painter.setRenderHint(QPainter.Antialiasing)

		# Rotated frame
		painter.setPen(QPen(QColor(FRAME_LINE_COLOR), FRAME_LINE_WIDTH))
		painter.setBrush(Qt.NoBrush)
		painter.drawPolygon(QPolygonF(self._outline()))

		handles = self._get_handle_positions()

		# Line to rotation handle
		top_mid = (handles[self.HANDLE_TL] + handles[self.HANDLE_TR]) / 2
		painter.setPen(QPen(QColor(ROTATION_HANDLE_BORDER_COLOR), 1, Qt.DashLine))
		painter.drawLine(top_mid, handles[self.HANDLE_ROTATE])

		# Corner handles (circles)
		painter.setBrush(QBrush(QColor(HANDLE_FILL_COLOR)))
		painter.setPen(QPen(QColor(HANDLE_BORDER_COLOR), HANDLE_BORDER_WIDTH))
		for handle_type in self.CORNER_HANDLES:
			painter.drawEllipse(handles[handle_type], self.handle_size, self.handle_size)

		# Rotation handle
		painter.setPen(QPen(QColor(ROTATION_HANDLE_BORDER_COLOR), HANDLE_BORDER_WIDTH))
		painter.drawEllipse(handles[self.HANDLE_ROTATE], self.rotation_handle_size, self.rotation_handle_size)
		painter.end()

	# ------------------------------------------------------------------
	# Mouse interaction
	# ------------------------------------------------------------------

	def mousePressEvent(self, event):
		"""Handle mouse press"""
		if event.button() == Qt.LeftButton:
			self.active_handle = self._get_handle_at_pos(event.pos())
			if self.active_handle != self.HANDLE_NONE:
				self.drag_start_pos = QPointF(event.pos())
				self.drag_start_matrix = self.matrix
				event.accept()
				return
		event.ignore()

	def mouseMoveEvent(self, event):
		"""Handle mouse move"""
		if self.active_handle != self.HANDLE_NONE and self.drag_start_pos is not None:
			self._handle_drag(QPointF(event.pos()), event.modifiers())
			event.accept()
			return

		# Update cursor based on handle
		handle = self._get_handle_at_pos(event.pos())
		if handle == self.HANDLE_CENTER:
			self.setCursor(Qt.SizeAllCursor)
		elif handle == self.HANDLE_ROTATE:
			self.setCursor(Qt.CrossCursor)
		elif handle != self.HANDLE_NONE:
			self.setCursor(Qt.SizeFDiagCursor)
		else:
			self.setCursor(Qt.ArrowCursor)
		super().mouseMoveEvent(event)

	def mouseReleaseEvent(self, event):
		"""Handle mouse release"""
		if event.button() == Qt.LeftButton and self.active_handle != self.HANDLE_NONE:
			self.active_handle = self.HANDLE_NONE
			self.drag_start_pos = None
			self.drag_start_matrix = None

			self.transformEnded.emit()
			event.accept()
			return
		super().mouseReleaseEvent(event)

	def _handle_drag(self, current_pos, modifiers=None):
		"""Handle dragging based on active handle"""
		if self.drag_start_pos is None or self.drag_start_matrix is None:
			return

		start = self.drag_start_matrix
		start_parts = decompose(start)
		center = self.overlay_center(start)

		if self.active_handle == self.HANDLE_CENTER:
			delta = current_pos - self.drag_start_pos
			new_matrix = start.with_translation(start.tx + delta.x(), start.ty + delta.y())
			signal = self.dragged

		elif self.active_handle == self.HANDLE_ROTATE:
			start_angle = math.atan2(self.drag_start_pos.y() - center.y(), self.drag_start_pos.x() - center.x())
			current_angle = math.atan2(current_pos.y() - center.y(), current_pos.x() - center.x())
			new_rotation = math.degrees(start_parts.rotation_radians + current_angle - start_angle)

			# Shift-hold: snap to 45° increments
			if modifiers and (modifiers & Qt.ShiftModifier):
				new_rotation = snap_degrees(new_rotation, ROTATION_SNAP_DEGREES)

			new_matrix = AffineTransform2D.from_components(
				math.radians(new_rotation), start_parts.uniform_scale, start.tx, start.ty
			)
			signal = self.rotated

		elif self.active_handle in self.CORNER_HANDLES:
			# Keep-ratio scaling about the center: ratio of distances to the center
			start_dist = math.hypot(self.drag_start_pos.x() - center.x(), self.drag_start_pos.y() - center.y())
			current_dist = math.hypot(current_pos.x() - center.x(), current_pos.y() - center.y())
			if start_dist <= 0:
				return
			new_scale = start_parts.uniform_scale * current_dist / start_dist
			new_scale = max(TRANSFORM_SCALE_MIN, min(TRANSFORM_SCALE_MAX, new_scale))

			new_matrix = AffineTransform2D.from_components(
				start_parts.rotation_radians, new_scale, start.tx, start.ty
			)
			signal = self.scaled

		else:
			return

		if self.clamp_to_canvas and self.width() > 0 and self.height() > 0:
			new_matrix = clamp_translation(self.frame, new_matrix, self.width(), self.height())

		self.matrix = new_matrix
		self.update()
		signal.emit(format_css_matrix(new_matrix))
