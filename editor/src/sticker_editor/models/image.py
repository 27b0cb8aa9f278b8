"""Decoded bitmaps and encoded export images."""
from dataclasses import dataclass, field

from PIL import Image

from sticker_editor.constants import EXPORT_FILENAME, EXPORT_MIME_TYPE
from sticker_editor.models.transform import Dimensions


@dataclass(frozen=True)
class Bitmap:
    """Fully decoded RGBA image with its natural pixel dimensions.

    Immutable once created. Build through ``Bitmap.from_image`` so pixel
    data is loaded before anyone reads it.
    """
    width: int
    height: int
    image: Image.Image = field(repr=False, compare=False)
    source: str = ''

    @classmethod
    def from_image(cls, image: Image.Image, source: str = '') -> 'Bitmap':
        if image.mode != 'RGBA':
            image = image.convert('RGBA')
        else:
            image.load()
        return cls(image.width, image.height, image, source)

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(self.width, self.height)


@dataclass(frozen=True)
class EncodedImage:
    """Flattened export, ready to be written or offered for download."""
    data: bytes = field(repr=False)
    width: int
    height: int
    mime_type: str = EXPORT_MIME_TYPE
    filename: str = EXPORT_FILENAME

    def __len__(self):
        return len(self.data)
