"""Colour helpers: hex conversion, 4-bit quantization, channel-space distance.

Colours are plain (r, g, b) int tuples here so the helpers work on both
Color values and raw numpy rows converted with int().
"""

import math
import re

QUANT_MASK = 0xF0

_HEX6 = re.compile(r'^#?([0-9a-fA-F]{6})$')
_HEX3 = re.compile(r'^#?([0-9a-fA-F]{3})$')


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format channels as lowercase #rrggbb."""
    return f'#{r:02x}{g:02x}{b:02x}'


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    """Parse #rrggbb, rrggbb or #rgb (any case). Malformed input gives black."""
    value = value.strip()
    m = _HEX6.match(value)
    if m:
        digits = m.group(1)
    else:
        m = _HEX3.match(value)
        if not m:
            return (0, 0, 0)
        digits = ''.join(ch * 2 for ch in m.group(1))
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def is_hex(value: str) -> bool:
    """True if value is a parseable hex colour."""
    value = value.strip()
    return bool(_HEX6.match(value) or _HEX3.match(value))


def quantize(channel: int) -> int:
    """Clear the low 4 bits: 256 levels collapse into 16 buckets."""
    return channel & QUANT_MASK


def distance_sq(a: tuple[int, int, int], b: tuple[int, int, int]) -> int:
    """Squared Euclidean distance in RGB space (no square root)."""
    dr = int(a[0]) - int(b[0])
    dg = int(a[1]) - int(b[1])
    db = int(a[2]) - int(b[2])
    return dr * dr + dg * dg + db * db


def rgb_distance(a: tuple[int, int, int], b: tuple[int, int, int]) -> float:
    """Euclidean distance in RGB space. Ints only, so uint8 inputs cannot wrap."""
    return math.sqrt(distance_sq(a, b))
