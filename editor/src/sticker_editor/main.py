import sys
import os
import logging

# Configure logging
logging.basicConfig(
    level=logging.WARNING,  # Only show warnings and errors
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)  # Output to console
    ]
)

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    # editor/src is the parent of this package directory
    current_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    # Add it to the Python path
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5 import QtWidgets
from PyQt5.QtWidgets import QMainWindow
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPalette, QColor

# Utility imports
from sticker_editor.utils.logger import set_main_window
from sticker_editor.utils.path_resolver import check_assets_exist, get_config_dir, get_config_path

# Service imports
from sticker_editor.services.edit_session import EditSession

# Mixin imports
from sticker_editor.main_window.config_mixin import ConfigMixin
from sticker_editor.main_window.file_mixin import FileMixin
from sticker_editor.main_window.ui_setup_mixin import UISetupMixin

logger = logging.getLogger(__name__)


class StickerEditor(ConfigMixin, FileMixin, UISetupMixin, QMainWindow):
    def __init__(self, session=None, config_dir=None):
        super().__init__()
        self.setWindowTitle("Sticker Overlay Editor")
        self.resize(640, 640)

        # Edit session (single source of truth for scene state)
        self.session = session or EditSession()

        # UI preferences
        self.config_dir = str(config_dir) if config_dir else str(get_config_dir())
        self.config_file = os.path.join(self.config_dir, os.path.basename(get_config_path()))
        self._load_config()

        # Initialize global logger with main window reference
        set_main_window(self)

        self._setup_decode_bridge()
        self.setup_ui()

        all_exist, missing = check_assets_exist()
        if not all_exist:
            logger.warning("Missing assets: %s", ", ".join(missing))

        self._load_overlay_asset()

    def closeEvent(self, event):
        set_main_window(None)
        self.session.close()
        super().closeEvent(event)


def main():
    """Main entry point for the Sticker Overlay Editor"""
    app = QtWidgets.QApplication(sys.argv)

    # Use Fusion style with dark palette
    app.setStyle("Fusion")

    dark_palette = QPalette()
    dark_palette.setColor(QPalette.Window, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.WindowText, Qt.white)
    dark_palette.setColor(QPalette.Base, QColor(25, 25, 25))
    dark_palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ToolTipBase, Qt.white)
    dark_palette.setColor(QPalette.ToolTipText, Qt.white)
    dark_palette.setColor(QPalette.Text, Qt.white)
    dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ButtonText, Qt.white)
    dark_palette.setColor(QPalette.BrightText, Qt.red)
    dark_palette.setColor(QPalette.Link, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.HighlightedText, Qt.black)

    app.setPalette(dark_palette)

    window = StickerEditor()
    window.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
