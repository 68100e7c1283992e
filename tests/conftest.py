"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from wink.adapters.mock import MockPathTranslator, StaticEnvironmentProvider
from wink.adapters.shell.environment import EnvironmentResolver
from wink.core import context
from wink.core.engine.invoker import CommandBuilder

HOST_ENVIRONMENT = {
    "ProgramFiles": "C:\\Program Files",
    "ProgramFiles(x86)": "C:\\Program Files (x86)",
    "USERPROFILE": "C:\\Users\\jw",
}


@pytest.fixture
def isolated_logging():
    """Drop whatever handlers setup_logging() installed during the test."""
    root = logging.getLogger()
    before = root.handlers[:]
    level = root.level
    raise_exceptions = logging.raiseExceptions
    yield
    for handler in root.handlers[:]:
        if handler not in before:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    logging.raiseExceptions = raise_exceptions


@pytest.fixture
def translator() -> MockPathTranslator:
    """Path translator that returns every path unchanged unless configured."""
    return MockPathTranslator()


@pytest.fixture
def environment() -> StaticEnvironmentProvider:
    """Host environment with the three token variables defined."""
    return StaticEnvironmentProvider(HOST_ENVIRONMENT)


@pytest.fixture
def resolver(environment, translator) -> EnvironmentResolver:
    return EnvironmentResolver(environment, translator)


@pytest.fixture
def builder(translator, resolver) -> CommandBuilder:
    return CommandBuilder(translator, resolver)


@pytest.fixture
def wsl(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend to run inside WSL."""
    monkeypatch.setenv(context.WSL_ENV_VAR, "Ubuntu")
    monkeypatch.setattr(context, "is_windows", lambda: False)


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An empty $HOME, so no real ~/.wink.json is picked up."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setattr(context, "is_windows", lambda: False)
    return home_dir
