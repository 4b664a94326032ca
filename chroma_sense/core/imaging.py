"""Image loading and resampling with Pillow.

This is the I/O side of extraction: decode a file into RGBA, convert a
Pillow image to a PixelBuffer, and resize for analysis. The extractor only
sees PixelBuffers, so tests can feed it synthetic bytes directly.
"""

from __future__ import annotations

import os

from PIL import Image, UnidentifiedImageError

from chroma_sense.core.env import get_setting
from chroma_sense.core.errors import ConfigError, ImageLoadError
from chroma_sense.core.types import LoadedImage, PixelBuffer

RESAMPLE_FILTERS = {
    'nearest': Image.Resampling.NEAREST,
    'bilinear': Image.Resampling.BILINEAR,
    'bicubic': Image.Resampling.BICUBIC,
    'lanczos': Image.Resampling.LANCZOS,
}
DEFAULT_RESAMPLE = 'bilinear'


def resample_filter(name: str | None = None) -> Image.Resampling:
    """Look up a filter by name. Falls back to CHROMA_SENSE_RESAMPLE, then bilinear."""
    name = (name or get_setting('RESAMPLE') or DEFAULT_RESAMPLE).lower()
    if name not in RESAMPLE_FILTERS:
        raise ConfigError(f'Unknown resample filter: {name}. Available: {", ".join(sorted(RESAMPLE_FILTERS))}')
    return RESAMPLE_FILTERS[name]


def load_image(path: str) -> LoadedImage:
    """Decode an image file to RGBA."""
    if not os.path.isfile(path):
        raise ImageLoadError(f'image not found: {path}')
    try:
        with Image.open(path) as img:
            original_size = img.size
            rgba = img.convert('RGBA')
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(f'not a readable image: {path} ({e})') from e
    return LoadedImage(path=path, image=rgba, original_size=original_size)


def to_pixel_buffer(image: Image.Image) -> PixelBuffer:
    """Row-major RGBA bytes of a Pillow image."""
    if image.mode != 'RGBA':
        image = image.convert('RGBA')
    return PixelBuffer(width=image.width, height=image.height, data=image.tobytes())


def pil_resize(image: Image.Image | LoadedImage, width: int, height: int, resample: str | None = None) -> PixelBuffer:
    """Resize collaborator for PaletteExtractor. No-op when already at size."""
    if isinstance(image, LoadedImage):
        image = image.image
    if image.size != (width, height):
        image = image.resize((width, height), resample_filter(resample))
    return to_pixel_buffer(image)
