"""Maps subcommand names to the Technique objects in chroma_sense.techniques."""

import importlib
import pkgutil
from types import ModuleType

from chroma_sense.core.types import Technique

_registry: dict[str, Technique] = {}


def _technique_modules() -> list[ModuleType]:
    import chroma_sense.techniques as pkg

    names = [name for _finder, name, _ispkg in pkgutil.iter_modules(pkg.__path__) if not name.startswith('_')]
    if names:
        return [importlib.import_module(f'{pkg.__name__}.{name}') for name in names]
    # frozen build: the package __init__ has already imported every module
    return [value for value in vars(pkg).values() if isinstance(value, ModuleType)]


def discover() -> dict[str, Technique]:
    if not _registry:
        for module in _technique_modules():
            tech = getattr(module, 'technique', None)
            if isinstance(tech, Technique):
                _registry[tech.name] = tech
    return _registry


def get(name: str) -> Technique:
    techniques = discover()
    try:
        return techniques[name]
    except KeyError:
        raise KeyError(f'Unknown technique: {name}. Available: {", ".join(sorted(techniques))}') from None


def all_techniques() -> dict[str, Technique]:
    return discover()
