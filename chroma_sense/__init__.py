"""Dominant colour and palette extraction for raster images."""

__version__ = '0.1.0'
