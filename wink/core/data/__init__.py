"""
Built-in command catalog.

The shipped command codes live in ``wink/core/data/catalogs/builtin.json``
as a flat data table; this module is the one generic loader that turns
it into Category objects.  Adding a command code is a data change only.

Entry shape::

    {"code": "word", "kind": "bin", "command": "$pf64/...", "description": "...",
     "arguments": ["optional", "list"]}

``kind`` selects the Invocable constructor (see ``KIND_FACTORIES``).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from wink.core.models.category import Category
from wink.core.models.invocable import KIND_FACTORIES

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent

BUILTIN_CATALOG = "catalogs/builtin.json"


def _load_json(relative_path: str) -> dict:
    """Load a JSON file relative to the data directory."""
    path = _DATA_DIR / relative_path
    if not path.exists():
        logger.warning("Data file not found: %s", path)
        return {}
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def load_builtin_categories(relative_path: str = BUILTIN_CATALOG) -> list[Category]:
    """Build the built-in categories, in file order.

    Raises:
        ValueError: If an entry names an unknown kind.
    """
    data = _load_json(relative_path)
    categories: list[Category] = []

    for raw in data.get("categories", []):
        category = Category(name=raw["name"])
        for entry in raw.get("invocables", []):
            kind = entry.get("kind", "bin")
            factory = KIND_FACTORIES.get(kind)
            if factory is None:
                raise ValueError(
                    f"Unknown kind {kind!r} for command code {entry.get('code')!r} "
                    f"in {relative_path}"
                )
            category.add(factory(
                entry["code"],
                entry.get("command", ""),
                entry.get("description", ""),
                entry.get("arguments"),
            ))
        categories.append(category)

    logger.debug(
        "Loaded %d built-in command codes in %d categories",
        sum(len(c.invocables) for c in categories),
        len(categories),
    )
    return categories
