"""Global logging and error handling utilities"""
import logging
import sys

from PyQt5.QtWidgets import QMessageBox

logger = logging.getLogger(__name__)

# Detect debug mode - True if running from source, False if packaged
DEBUG_MODE = not getattr(sys, 'frozen', False)

_main_window = None


def set_main_window(window):
    """Set the main window reference for showing popups"""
    global _main_window
    _main_window = window


def show_error(message: str, title: str = "Error"):
    """Show a modal error popup, or log it when no window is registered"""
    if _main_window is not None:
        QMessageBox.critical(_main_window, title, message)
    else:
        logger.error("%s - %s", title, message)


def loggerRaise(e: Exception, user_message: str = None, title: str = "Error"):
    """Handle exceptions with optional popup in release mode

    Args:
        e: The exception to handle
        user_message: User-friendly message to show in popup (optional)
        title: Title for the popup dialog

    In DEBUG_MODE:
        - Logs and raises the exception (shows full traceback)

    In RELEASE_MODE:
        - Logs the full traceback
        - Shows popup with user message or exception string
        - Then raises the exception
    """
    logger.error("%s: %s", title, e, exc_info=e)

    if not DEBUG_MODE:
        show_error(user_message if user_message else str(e), title)

    raise e
