"""
Configuration loader — finds and reads the user's wink.json.

The override file holds extra categories of command codes in the same
shape that ``wink -e`` exports.  It lives in the user's home:

    WSL / Unix:  $HOME/.wink.json
    Windows:     %USERPROFILE%\\wink.json

A broken override file is a user error worth stopping for, so every
problem here raises ConfigError instead of being skipped.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from wink.core import context
from wink.core.models.category import CategoryList

logger = logging.getLogger(__name__)

# Default config basename (dot-prefixed outside Windows)
CONFIG_BASENAME = "wink.json"


class ConfigError(Exception):
    """Raised when the override configuration is invalid or cannot be located."""


def override_file_path(basename: str = CONFIG_BASENAME) -> Path:
    """Return where the override file is expected for this platform.

    Raises:
        ConfigError: If the home directory variable is not set.
    """
    if context.is_windows():
        variable, filename = "USERPROFILE", basename
    else:
        variable, filename = "HOME", f".{basename}"

    home = os.environ.get(variable)
    if not home:
        raise ConfigError(
            f"{variable} environment variable is not set; cannot locate {filename}"
        )

    return Path(home) / filename


def load_override(path: Path) -> CategoryList:
    """Load and validate an override file.

    Args:
        path: Path to the JSON file.

    Returns:
        Validated CategoryList.

    Raises:
        ConfigError: If the file cannot be read or is not a valid catalog.
    """
    logger.debug("Loading override catalog from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {path}, got {type(data).__name__}")

    try:
        catalog = CategoryList.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid command catalog in {path}: {e}") from e

    logger.info(
        "Loaded %d override categories from %s",
        len(catalog.categories),
        path,
    )
    return catalog
