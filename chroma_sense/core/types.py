"""Shared types for chroma-sense: Color, PixelBuffer, PaletteResult, LoadedImage, Technique, Report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from PIL import Image

from chroma_sense.core.palette import hex_to_rgb, is_hex, quantize, rgb_to_hex


@dataclass(frozen=True)
class Color:
    """An 8-bit RGB colour. Value type: equal when the channels are equal."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ('r', 'g', 'b'):
            value = getattr(self, name)
            # bool is an int subclass but never a channel value
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f'Channel {name}={value!r} is not an int')
            if not 0 <= value <= 255:
                raise ValueError(f'Channel {name}={value} outside 0..255')

    @property
    def hex(self) -> str:
        return rgb_to_hex(self.r, self.g, self.b)

    @property
    def packed(self) -> int:
        """0xRRGGBB as a single int."""
        return (self.r << 16) | (self.g << 8) | self.b

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def quantized(self) -> Color:
        return Color(quantize(self.r), quantize(self.g), quantize(self.b))

    @classmethod
    def from_packed(cls, value: int) -> Color:
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Strict parse: raises ValueError instead of falling back to black."""
        if not is_hex(value):
            raise ValueError(f'Not a hex colour: {value!r}')
        return cls(*hex_to_rgb(value))


BLACK = Color(0, 0, 0)


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded image: row-major RGBA bytes, 4 per pixel.

    Validation happens at analysis time, not here, so a caller can build a
    buffer first and get InvalidBufferError/DegenerateImageError from the
    extractor.
    """

    width: int
    height: int
    data: bytes | bytearray | memoryview

    @property
    def expected_length(self) -> int:
        return self.width * self.height * 4


@dataclass(frozen=True)
class PaletteResult:
    """Dominant colour plus up to five distinct, frequency-ordered colours."""

    dominant: Color
    palette: tuple[Color, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            'dominant': self.dominant.hex,
            'palette': [c.hex for c in self.palette],
        }


@dataclass
class LoadedImage:
    """An image file decoded to RGBA, ready for analysis."""

    path: str
    image: Image.Image
    original_size: tuple[int, int] = (0, 0)  # (width, height) before any conversion

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height


class Technique:
    """A self-registering analysis technique.

    Usage in a technique module:

        technique = Technique(name='palette', help='Dominant colour and palette')

        @technique.run
        def run(images, report, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, images: list[LoadedImage], report: Report, args: Any) -> None:
        """Execute the technique's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Technique {self.name} has no run function')
        self._run_fn(images, report, args)


@dataclass
class Report:
    """Accumulates per-image technique results for text/JSON output."""

    images: dict[str, dict[str, Any]] = field(default_factory=dict)
    expected: str | None = None  # --expect hex, when given
    pass_count: int = 0
    fail_count: int = 0

    def _entry(self, path: str) -> dict[str, Any]:
        if path not in self.images:
            self.images[path] = {'dimensions': None, 'techniques': {}}
        return self.images[path]

    def add(self, path: str, technique_name: str, data: dict[str, Any]) -> None:
        """Add technique results for an image."""
        self._entry(path)['techniques'][technique_name] = data

    def set_dimensions(self, path: str, width: int, height: int) -> None:
        self._entry(path)['dimensions'] = [width, height]

    def record_pass(self, path: str) -> None:
        self.pass_count += 1

    def record_fail(self, path: str) -> None:
        self.fail_count += 1
