"""Sticker Overlay Editor - place a sticker over an uploaded image and export a PNG."""

__version__ = "1.0.0"
