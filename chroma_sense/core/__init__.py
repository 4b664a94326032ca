"""chroma_sense.core: Foundation layer.

Contains the colour helpers, type definitions, palette extractor, image
loading, .env configuration, and report builder.
This module has NO dependencies on chroma_sense.techniques or chroma_sense.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
