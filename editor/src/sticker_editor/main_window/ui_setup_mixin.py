"""UI setup for StickerEditor"""

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLabel
from PyQt5.QtCore import Qt

from sticker_editor.components.canvas_widget import CanvasWidget
from sticker_editor.constants import UPLOAD_DIALOG_TITLE, EXPORT_DIALOG_TITLE


class UISetupMixin:
    """UI initialization and component wiring"""

    def setup_ui(self):
        """Initialize and wire up all UI components"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QVBoxLayout(central_widget)
        main_layout.setContentsMargins(12, 12, 12, 12)
        main_layout.setSpacing(8)

        # Buttons
        button_row = QHBoxLayout()
        self.upload_button = QPushButton(UPLOAD_DIALOG_TITLE)
        self.upload_button.clicked.connect(self.upload_image)
        button_row.addWidget(self.upload_button)

        self.download_button = QPushButton(EXPORT_DIALOG_TITLE)
        self.download_button.clicked.connect(self.download_image)
        button_row.addWidget(self.download_button)
        button_row.addStretch(1)
        main_layout.addLayout(button_row)

        # Canvas preview with the manipulation surface on top
        self.canvas_widget = CanvasWidget()
        self.canvas_widget.set_scene(self.session.scene)
        main_layout.addWidget(self.canvas_widget, 0, Qt.AlignHCenter | Qt.AlignTop)
        main_layout.addStretch(1)

        # Connect manipulation signals to the session
        surface = self.canvas_widget.transform_widget
        surface.dragged.connect(lambda transform: self._on_manipulation('drag', transform))
        surface.scaled.connect(lambda transform: self._on_manipulation('scale', transform))
        surface.rotated.connect(lambda transform: self._on_manipulation('rotate', transform))

        # Status bar
        self.status_left = QLabel("Ready")
        self.statusBar().addWidget(self.status_left, 1)

    def _set_status(self, message):
        self.status_left.setText(message)
