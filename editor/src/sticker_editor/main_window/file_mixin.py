"""Upload and download actions for StickerEditor"""

import logging
import os

from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtWidgets import QFileDialog

from sticker_editor.constants import UPLOAD_DIALOG_TITLE, EXPORT_DIALOG_TITLE, EXPORT_DIALOG_FILTER
from sticker_editor.errors import AssetLoadError, EncodingError, TransformParseError
from sticker_editor.services.file_operations import default_export_path
from sticker_editor.services.image_acquisition import dialog_filter
from sticker_editor.utils.logger import loggerRaise, show_error

logger = logging.getLogger(__name__)


class DecodeBridge(QObject):
	"""Carries finished decode futures from the worker thread to the GUI thread"""
	uploadDecoded = pyqtSignal(object)  # UploadTicket
	overlayDecoded = pyqtSignal(object)  # Future


class FileMixin:
	"""Upload (decode -> fit -> scene) and download (composite -> PNG) actions"""

	def _setup_decode_bridge(self):
		self.decode_bridge = DecodeBridge(self)
		self.decode_bridge.uploadDecoded.connect(self._on_upload_decoded)
		self.decode_bridge.overlayDecoded.connect(self._on_overlay_decoded)

	# ------------------------------------------------------------------
	# Overlay asset
	# ------------------------------------------------------------------

	def _load_overlay_asset(self):
		"""Start decoding the overlay asset; the preview picks it up when ready"""
		future = self.session.acquisition.load_overlay()
		future.add_done_callback(self.decode_bridge.overlayDecoded.emit)

	def _on_overlay_decoded(self, future):
		try:
			self.canvas_widget.set_overlay(future.result())
		except AssetLoadError as e:
			logger.error("Overlay asset unavailable: %s", e)
			self._set_status(f"Overlay unavailable: {e.reason}")

	# ------------------------------------------------------------------
	# Upload
	# ------------------------------------------------------------------

	def upload_image(self):
		"""Ask for a background image and start decoding it"""
		filepath, _ = QFileDialog.getOpenFileName(
			self, UPLOAD_DIALOG_TITLE, self._start_dir('last_upload_dir'), dialog_filter()
		)
		if not filepath:
			return

		self._remember_dir('last_upload_dir', filepath)
		self.start_upload(filepath)

	def start_upload(self, filepath):
		ticket = self.session.request_upload(filepath)
		self._set_status(f"Loading {os.path.basename(filepath)}...")
		ticket.future.add_done_callback(lambda _future: self.decode_bridge.uploadDecoded.emit(ticket))
		return ticket

	def _on_upload_decoded(self, ticket):
		try:
			changed = self.session.complete_upload(ticket)
		except AssetLoadError as e:
			logger.error("Upload failed: %s", e)
			self._set_status("Upload failed")
			show_error(f"Could not load the image:\n{e.reason}", UPLOAD_DIALOG_TITLE)
			return
		except Exception as e:
			loggerRaise(e, "Error loading image", UPLOAD_DIALOG_TITLE)

		if changed:
			self._set_status(f"Loaded {os.path.basename(ticket.source)}")

	# ------------------------------------------------------------------
	# Manipulation
	# ------------------------------------------------------------------

	def _on_manipulation(self, kind, transform):
		"""Forward one surface update into the session"""
		try:
			self.session.handle_event(kind, transform, self.canvas_widget.transform_widget)
		except TransformParseError as e:
			logger.warning("Dropped %s event: %s", kind, e)

	# ------------------------------------------------------------------
	# Download
	# ------------------------------------------------------------------

	def download_image(self):
		"""Composite the scene and save it as PNG"""
		suggested = default_export_path(self._start_dir('last_export_dir'))
		filepath, _ = QFileDialog.getSaveFileName(self, EXPORT_DIALOG_TITLE, str(suggested), EXPORT_DIALOG_FILTER)
		if not filepath:
			return

		self._remember_dir('last_export_dir', filepath)
		self.export_to(filepath)

	def export_to(self, filepath):
		try:
			encoded = self.session.export(filepath)
		except (AssetLoadError, EncodingError) as e:
			self._set_status("Export failed")
			show_error(f"Could not export the image:\n{e}", EXPORT_DIALOG_TITLE)
			return None
		except Exception as e:
			loggerRaise(e, "Error exporting image", EXPORT_DIALOG_TITLE)

		self._set_status(f"Saved {os.path.basename(filepath)} ({encoded.width}x{encoded.height})")
		return encoded
