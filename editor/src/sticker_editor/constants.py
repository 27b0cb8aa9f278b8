"""
Sticker Overlay Editor - Constants and Configuration

This module contains all constant values used throughout the application:
- Canvas sizing and the fit target
- Overlay (sticker) asset and natural size
- Export format and default filename
- Manipulation surface appearance and constraints
"""

# ======================================================================
# CANVAS
# ======================================================================

# Placeholder canvas size before any image is uploaded
DEFAULT_CANVAS_WIDTH = 500
DEFAULT_CANVAS_HEIGHT = 500

# Long side of the canvas after fitting an uploaded image
CANVAS_TARGET_LONG_SIDE = 500

# Neutral backdrop, visible when no background is uploaded or through
# transparent backgrounds
CANVAS_FILL_COLOR = '#f3f4f6'
CANVAS_FILL_RGBA = (243, 244, 246, 255)

# ======================================================================
# OVERLAY
# ======================================================================

# The sticker is always drawn at this natural size (layout units)
OVERLAY_WIDTH = 128
OVERLAY_HEIGHT = 128

# Fixed overlay asset, resolved through utils.path_resolver
OVERLAY_ASSET_NAME = 'crow.png'

# ======================================================================
# EXPORT
# ======================================================================

EXPORT_FILENAME = 'edited-image.png'
EXPORT_FORMAT = 'PNG'
EXPORT_MIME_TYPE = 'image/png'

# Resampling used when stretching the background and placing the overlay
BACKGROUND_RESAMPLE = 'LANCZOS'
OVERLAY_RESAMPLE = 'BICUBIC'

# ======================================================================
# TRANSFORM DECOMPOSITION
# ======================================================================

# Allowed deviation of the linear part from rotation x uniform scale
# before the decomposer warns about shear
SIMILARITY_TOLERANCE = 1e-6

# ======================================================================
# FILE DIALOGS
# ======================================================================

UPLOAD_DIALOG_TITLE = 'Upload Base Image'
EXPORT_DIALOG_TITLE = 'Download Image'
EXPORT_DIALOG_FILTER = 'PNG Image (*.png)'

# ======================================================================
# MANIPULATION SURFACE (TRANSFORM WIDGET)
# ======================================================================

# Handle appearance
TRANSFORM_HANDLE_SIZE = 7  # Handle circle radius (pixels)
TRANSFORM_ROTATION_HANDLE_SIZE = 8
TRANSFORM_ROTATION_HANDLE_OFFSET = 30  # Distance above top edge (pixels)
TRANSFORM_HIT_TOLERANCE = 4  # Extra pixels for handle hit detection

HANDLE_FILL_COLOR = '#ffffff'
HANDLE_BORDER_COLOR = '#FF5733'
ROTATION_HANDLE_BORDER_COLOR = '#3498DB'
FRAME_LINE_COLOR = '#2ECC71'
FRAME_LINE_WIDTH = 2
HANDLE_BORDER_WIDTH = 2

# Scale limits while dragging corner handles
TRANSFORM_SCALE_MIN = 0.05
TRANSFORM_SCALE_MAX = 20.0

# Shift+rotate snaps to this increment (degrees)
ROTATION_SNAP_DEGREES = 45.0

# Keep the overlay inside the canvas while dragging
CLAMP_TO_CANVAS = True

# ======================================================================
# CONFIG FILE
# ======================================================================

CONFIG_DIR_NAME = '.sticker_editor'
CONFIG_FILE_NAME = 'config.json'
