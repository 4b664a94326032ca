"""Dominant colour and palette extraction from an RGBA pixel buffer.

Pipeline: downscale -> sample & quantize -> count -> rank -> filter for distinctness.

  - Downscale: the longest side is brought to at most 128px (never upscaled).
    Resampling is done by an injected `resize(image, w, h) -> PixelBuffer`.
  - Sample: every 4th pixel from index 0. Pixels with alpha < 128 are skipped.
  - Quantize: each channel has its low 4 bits cleared (16 levels per channel,
    at most 4096 keys).
  - Rank: count descending, ties broken by ascending packed 0xRRGGBB so the
    output never depends on table iteration order.
  - Dominant: first ranked colour, black when nothing qualified.
  - Palette: walk the ranking and keep a colour only if its squared distance to
    every kept colour is > 40^2. Stop at 5.

Sampling is a fixed stride, not full coverage: a 2x2 image only ever
contributes its first pixel.
"""

from __future__ import annotations

import concurrent.futures
from collections.abc import Callable, Iterable
from typing import Any

import numpy as np

from chroma_sense.core.errors import DegenerateImageError, InvalidBufferError
from chroma_sense.core.palette import QUANT_MASK, distance_sq
from chroma_sense.core.types import BLACK, Color, PaletteResult, PixelBuffer

MAX_SIZE = 128
SAMPLE_STRIDE = 4  # pixels, not bytes
ALPHA_CUTOFF = 128
MIN_DISTANCE_SQ = 40 * 40
PALETTE_SIZE = 5

Resize = Callable[[Any, int, int], PixelBuffer]


def target_size(width: int, height: int) -> tuple[int, int]:
    """Analysis dimensions for a width x height image. Never upscales."""
    if width <= 0 or height <= 0:
        raise DegenerateImageError(f'Image has no pixels: {width}x{height}')
    scale = min(MAX_SIZE / width, MAX_SIZE / height, 1.0)
    return (max(1, int(width * scale)), max(1, int(height * scale)))


def _byte_view(buffer: PixelBuffer) -> memoryview:
    # len() of a typed memoryview counts items, not bytes
    return memoryview(buffer.data).cast('B')


def validate_buffer(buffer: PixelBuffer) -> None:
    if buffer.width <= 0 or buffer.height <= 0:
        raise DegenerateImageError(f'Image has no pixels: {buffer.width}x{buffer.height}')
    actual = memoryview(buffer.data).nbytes
    if actual != buffer.expected_length:
        raise InvalidBufferError(
            f'Buffer is {actual} bytes, expected {buffer.expected_length} for {buffer.width}x{buffer.height} RGBA'
        )


def count_colors(buffer: PixelBuffer) -> dict[Color, int]:
    """Frequency table of quantized colours over the sampled opaque pixels."""
    pixels = np.frombuffer(_byte_view(buffer), dtype=np.uint8).reshape(-1, 4)[::SAMPLE_STRIDE]
    opaque = pixels[pixels[:, 3] >= ALPHA_CUTOFF]
    if len(opaque) == 0:
        return {}

    # uint32 so the shifts below don't overflow
    q = (opaque[:, :3] & QUANT_MASK).astype(np.uint32)
    packed = (q[:, 0] << 16) | (q[:, 1] << 8) | q[:, 2]
    keys, counts = np.unique(packed, return_counts=True)
    return {Color.from_packed(int(k)): int(c) for k, c in zip(keys, counts)}


def rank_colors(table: dict[Color, int]) -> list[tuple[Color, int]]:
    """Most frequent first; equal counts ordered by ascending 0xRRGGBB."""
    return sorted(table.items(), key=lambda item: (-item[1], item[0].packed))


def select_dominant(ranked: list[tuple[Color, int]]) -> Color:
    if not ranked:
        return BLACK
    return ranked[0][0]


def filter_palette(ranked: Iterable[tuple[Color, int]]) -> list[Color]:
    """Up to PALETTE_SIZE colours, each > 40 apart from all earlier picks."""
    palette: list[Color] = []
    for color, _count in ranked:
        if len(palette) >= PALETTE_SIZE:
            break
        if all(distance_sq(p.rgb, color.rgb) > MIN_DISTANCE_SQ for p in palette):
            palette.append(color)
    return palette


class PaletteExtractor:
    """Extract a dominant colour and palette.

    `analyze` works on a buffer that is already analysis-sized. `extract`
    takes any image exposing `.width`/`.height`, downsizes it through the
    injected `resize` collaborator and analyzes the result.
    """

    def __init__(self, resize: Resize | None = None):
        if resize is None:
            from chroma_sense.core.imaging import pil_resize

            resize = pil_resize
        self._resize = resize

    def analyze(self, buffer: PixelBuffer) -> PaletteResult:
        ranked = self.census(buffer)
        return PaletteResult(
            dominant=select_dominant(ranked),
            palette=tuple(filter_palette(ranked)),
        )

    def census(self, buffer: PixelBuffer) -> list[tuple[Color, int]]:
        """Ranked (colour, sample count) pairs for the buffer."""
        validate_buffer(buffer)
        return rank_colors(count_colors(buffer))

    def downscale(self, image: Any) -> PixelBuffer:
        w, h = target_size(image.width, image.height)
        return self._resize(image, w, h)

    def extract(self, image: Any) -> PaletteResult:
        return self.analyze(self.downscale(image))

    def extract_many(
        self,
        images: list[Any],
        max_workers: int | None = None,
        fn: Callable[[Any], Any] | None = None,
    ) -> list[Any]:
        """Extract several images concurrently. Results keep input order.

        `fn` replaces `extract` as the per-image call, e.g. to wrap it with timing.
        """
        fn = fn or self.extract
        if max_workers == 1 or len(images) <= 1:
            return [fn(image) for image in images]
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(fn, images))
