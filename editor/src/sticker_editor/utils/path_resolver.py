"""Path resolver for handling differences between development and frozen executable environments.

This module provides utility functions to locate application resources like the
overlay asset and the user config directory in both development (running from
source) and production (PyInstaller frozen executable) environments.
"""

import sys
import os
from pathlib import Path

from sticker_editor.constants import OVERLAY_ASSET_NAME, CONFIG_DIR_NAME, CONFIG_FILE_NAME


def get_package_dir() -> Path:
    """Get the directory of the sticker_editor package.

    The same in a source checkout and in an installed distribution, since the
    assets ship inside the package.

    Returns:
        Path: Package directory path
    """
    # This file is in sticker_editor/utils/
    return Path(__file__).resolve().parent.parent


def get_assets_dir() -> Path:
    """Get the assets directory path.

    Bundled assets are extracted to PyInstaller's temporary folder in frozen
    builds and live in sticker_editor/assets otherwise.

    Returns:
        Path: Path to assets folder
    """
    if getattr(sys, 'frozen', False):
        return Path(sys._MEIPASS) / "assets"
    return get_package_dir() / "assets"


def get_overlay_asset_path() -> Path:
    """Get path to the fixed overlay (sticker) image.

    Returns:
        Path: Full path to the overlay PNG
    """
    return get_assets_dir() / OVERLAY_ASSET_NAME


def get_config_dir() -> Path:
    """Get the per-user config directory (~/.sticker_editor).

    Returns:
        Path: Config directory path (may not exist yet)
    """
    return Path(os.path.expanduser("~")) / CONFIG_DIR_NAME


def get_config_path() -> Path:
    """Get path to the JSON config file.

    Returns:
        Path: Full path to config.json
    """
    return get_config_dir() / CONFIG_FILE_NAME


def check_assets_exist() -> tuple[bool, list[str]]:
    """Check if required assets exist.

    Returns:
        tuple: (all_exist: bool, missing_paths: list[str])
    """
    required_paths = [
        get_overlay_asset_path(),
    ]

    missing = []
    for path in required_paths:
        if not path.exists():
            missing.append(str(path))

    return (len(missing) == 0, missing)
