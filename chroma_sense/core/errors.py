"""Exceptions raised by the chroma-sense core.

Everything derives from ChromaSenseError so the CLI can turn any core
failure into a single `Error: ...` line and exit status 1.
"""


class ChromaSenseError(Exception):
    """Base class for chroma-sense failures."""


class InvalidBufferError(ChromaSenseError, ValueError):
    """Pixel buffer length does not match width * height * 4."""


class DegenerateImageError(ChromaSenseError, ValueError):
    """Width or height is zero (or negative)."""


class ImageLoadError(ChromaSenseError, OSError):
    """File could not be opened or decoded as an image."""


class ConfigError(ChromaSenseError, ValueError):
    """A CHROMA_SENSE_* setting or option has an unusable value."""
