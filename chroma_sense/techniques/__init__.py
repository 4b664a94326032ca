"""Analysis techniques, one module per CLI subcommand.

Every module here that defines a `technique` object is registered by
chroma_sense.registry.discover(). The imports below keep the modules
visible to PyInstaller, where pkgutil.iter_modules finds nothing.
"""

import chroma_sense.techniques.all as _all  # noqa: F401
import chroma_sense.techniques.census as _census  # noqa: F401
import chroma_sense.techniques.dominant as _dominant  # noqa: F401
import chroma_sense.techniques.palette as _palette  # noqa: F401
