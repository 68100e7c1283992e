"""
Mock adapters — in-memory doubles for the host-facing protocols.

Used by tests (and by anyone embedding wink) to build command lines
without spawning wslpath or cmd.exe.
"""

from __future__ import annotations

from wink.adapters.base import EnvironmentProvider, PathTranslator


class MockPathTranslator(PathTranslator):
    """Table-driven path translator.

    Unknown paths come back unchanged, the same way the real
    translator falls back when wslpath fails.
    """

    def __init__(
        self,
        to_unix: dict[str, str] | None = None,
        to_windows: dict[str, str] | None = None,
    ):
        self._tables = {
            True: dict(to_unix or {}),
            False: dict(to_windows or {}),
        }
        self._call_log: list[tuple[str, bool]] = []

    def translate(self, path: str, to_unix: bool) -> str:
        self._call_log.append((path, to_unix))
        return self._tables[to_unix].get(path, path)

    def set_translation(self, path: str, translated: str, to_unix: bool) -> None:
        """Configure the result for one path and direction."""
        self._tables[to_unix][path] = translated

    @property
    def call_log(self) -> list[tuple[str, bool]]:
        return list(self._call_log)

    @property
    def call_count(self) -> int:
        return len(self._call_log)


class StaticEnvironmentProvider(EnvironmentProvider):
    """Environment provider backed by a dict."""

    def __init__(self, values: dict[str, str] | None = None):
        self._values = dict(values or {})
        self._requested: list[str] = []

    def get(self, name: str) -> str:
        self._requested.append(name)
        return self._values.get(name, "")

    @property
    def requested(self) -> list[str]:
        return list(self._requested)
