"""Adapters — bindings to wslpath, cmd.exe and their test doubles.

Public re-exports for convenient access.
"""

from wink.adapters.base import EnvironmentProvider, LaunchError, PathTranslator
from wink.adapters.mock import MockPathTranslator, StaticEnvironmentProvider

__all__ = [
    "EnvironmentProvider",
    "LaunchError",
    "MockPathTranslator",
    "PathTranslator",
    "StaticEnvironmentProvider",
]
