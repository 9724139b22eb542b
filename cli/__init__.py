"""Command-line entry points: ``fetch_data`` and ``crunch_data``."""

from importlib import import_module
from types import ModuleType

_COMMAND_MODULES = {"fetch": "cli.fetch", "crunch": "cli.crunch"}


def __getattr__(name: str) -> ModuleType:
    if name in _COMMAND_MODULES:
        return import_module(_COMMAND_MODULES[name])
    raise AttributeError(name)


__all__ = []
