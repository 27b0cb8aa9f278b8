"""Headless Sticker Renderer - CLI entry point.

Fits the canvas to a background image, places the overlay with a CSS
transform (as the manipulation surface would report it) and writes the
flattened PNG, without opening a window.

Usage:
    sticker-headless [background] [-t TRANSFORM] [-o OUTPUT]

Examples:
    sticker-headless photo.jpg
    sticker-headless photo.jpg -t "translate(40px, -10px) rotate(30deg) scale(1.5)"
    sticker-headless -t "matrix(0, 2, -2, 0, 0, 0)" -o blank.png
"""

import sys
import os
import argparse
import logging

# Add editor/src to path so imports work
_src_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from sticker_editor.constants import CANVAS_TARGET_LONG_SIDE, EXPORT_FILENAME
from sticker_editor.errors import StickerEditorError
from sticker_editor.services.edit_session import EditSession
from sticker_editor.services.image_acquisition import ImageAcquisition

logger = logging.getLogger(__name__)


def _build_parser():
    parser = argparse.ArgumentParser(
        description='Composite the sticker overlay onto an image and export a PNG (headless).',
    )
    parser.add_argument(
        'background',
        nargs='?',
        help='Background image file. Without one the canvas is the neutral 500x500 fill.',
    )
    parser.add_argument(
        '-t', '--transform',
        default='none',
        help='Overlay transform as a CSS transform list, e.g. "matrix(1, 0, 0, 1, 20, 0)" (default: none).',
    )
    parser.add_argument(
        '--overlay',
        help='Overlay image to use instead of the bundled asset.',
    )
    parser.add_argument(
        '--long-side',
        type=float,
        default=CANVAS_TARGET_LONG_SIDE,
        help=f'Canvas long side in pixels (default: {CANVAS_TARGET_LONG_SIDE}).',
    )
    parser.add_argument(
        '-o', '--output',
        default=EXPORT_FILENAME,
        help=f'Output PNG path (default: ./{EXPORT_FILENAME}).',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    return parser


def main(argv=None):
    args = _build_parser().parse_args(argv)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    if args.long_side <= 0:
        print(f"Error: --long-side must be positive, got {args.long_side:g}")
        return 1

    output_path = os.path.abspath(args.output)
    session = EditSession(
        acquisition=ImageAcquisition(overlay_path=args.overlay),
        target_long_side=args.long_side,
    )

    try:
        if args.background:
            if not session.upload(args.background):
                print(f"Warning: {args.background} has unusable dimensions, keeping the default canvas")
        session.handle_event('drag', args.transform)
        encoded = session.export(output_path)
    except StickerEditorError as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1
    finally:
        session.close()

    print(f"Wrote {encoded.width}x{encoded.height} PNG to {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
