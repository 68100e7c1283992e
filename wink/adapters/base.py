"""
Adapter base — the contracts between the builder and the host.

The command builder never shells out on its own to learn about the
host.  It asks a PathTranslator to convert paths and an
EnvironmentProvider to read Windows environment variables, so tests
can swap both for in-memory doubles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class LaunchError(Exception):
    """Raised when a launcher or a probe process cannot be spawned.

    This is fatal: the invocation stops before any command runs.
    """


class PathTranslator(ABC):
    """Convert paths between Windows and Unix naming conventions.

    Implementations MUST NOT raise for conversion problems.  When a
    path cannot be converted, the original string is returned so the
    user is never blocked by the helper being absent or confused.
    """

    @abstractmethod
    def translate(self, path: str, to_unix: bool) -> str:
        """Translate a path.

        Args:
            path: The path (or any argument that might be a path).
            to_unix: True for Windows → Unix, False for Unix → Windows.

        Returns:
            The converted path, or ``path`` unchanged on any failure.
        """

    def to_unix(self, path: str) -> str:
        return self.translate(path, to_unix=True)

    def to_windows(self, path: str) -> str:
        return self.translate(path, to_unix=False)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


class EnvironmentProvider(ABC):
    """Read environment variables as the Windows host sees them."""

    @abstractmethod
    def get(self, name: str) -> str:
        """Return the value of a host environment variable.

        Returns an empty string when the host reports a failure.
        Raises LaunchError when the host cannot be queried at all.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
