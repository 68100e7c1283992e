"""
Catalog registry — every command code wink knows about.

Built once per process: the built-in categories in their fixed order,
then every category from the user's override file appended after
them.  Nothing is merged or replaced.  Conflicts are reported as
warnings and both entries stay in the catalog:

    - an override category named like an existing one → two categories
    - a code repeated inside one override category    → both kept
    - a code present in two categories                 → both kept

Lookups walk categories then invocables in order, so the built-in
entry always wins over an override with the same code.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from wink.core.config.loader import load_override, override_file_path
from wink.core.models.category import Category, CategoryList
from wink.core.models.invocable import Invocable

logger = logging.getLogger(__name__)


@dataclass
class CodeConflict:
    """One command code defined in two different categories."""

    code: str
    category: str
    command: str
    other_category: str
    other_command: str

    def __str__(self) -> str:
        return (
            f"Command code {self.code} defined for both "
            f"{self.category} {self.command} and {self.other_category} {self.other_command}"
        )


class CatalogRegistry:
    """Ordered, read-only collection of command code categories."""

    def __init__(self, categories: list[Category] | None = None):
        self._categories: tuple[Category, ...] = tuple(categories or ())

    # ── Construction ─────────────────────────────────────────────

    @classmethod
    def load(
        cls,
        override_path: Path | None = None,
        builtin: list[Category] | None = None,
        use_override: bool = True,
    ) -> CatalogRegistry:
        """Build the registry from built-in data plus the override file.

        Args:
            override_path: Explicit override file. If None, the platform
                default location is used.
            builtin: Built-in categories. If None, the shipped catalog
                is loaded.
            use_override: If False, skip the override file entirely.

        Returns:
            The populated registry.

        Raises:
            ConfigError: If the home directory cannot be determined or
                the override file is malformed.
        """
        if builtin is None:
            from wink.core.data import load_builtin_categories

            builtin = load_builtin_categories()

        categories = list(builtin)

        if use_override:
            path = override_path or override_file_path()
            if path.is_file():
                _append_overrides(categories, load_override(path), path)
            else:
                logger.debug("No override catalog at %s", path)

        registry = cls(categories)
        for conflict in registry.conflicts():
            logger.warning("%s", conflict)

        return registry

    # ── Queries ──────────────────────────────────────────────────

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._categories

    def lookup(self, code: str) -> Invocable | None:
        """Return the first invocable with this exact code, if any."""
        for category in self._categories:
            for inv in category.invocables:
                if inv.code == code:
                    return inv
        return None

    def conflicts(self) -> list[CodeConflict]:
        """Codes shared between differently named categories, one entry per pair.

        Two categories with the same name are already reported when the
        override file is appended, so they are not compared here.
        """
        found: list[CodeConflict] = []
        cats = self._categories
        for i, category in enumerate(cats):
            for inv in category.invocables:
                for other in cats[i + 1:]:
                    if other.name == category.name:
                        continue
                    for other_inv in other.invocables:
                        if inv.code == other_inv.code:
                            found.append(CodeConflict(
                                code=inv.code,
                                category=category.name,
                                command=inv.command,
                                other_category=other.name,
                                other_command=other_inv.command,
                            ))
        return found

    def sorted_categories(self) -> list[Category]:
        """Categories by name, each with invocables sorted by code.

        Returns copies; the registry itself is never reordered.
        """
        result = []
        for category in sorted(self._categories):
            result.append(Category(
                name=category.name,
                invocables=sorted(category.invocables),
            ))
        return result

    def to_category_list(self) -> CategoryList:
        """The whole catalog in its serialized (wink.json) shape."""
        return CategoryList(categories=list(self._categories))

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    @property
    def code_count(self) -> int:
        return sum(len(c.invocables) for c in self._categories)


def _append_overrides(categories: list[Category], overrides: CategoryList, path: Path) -> None:
    """Append override categories, reporting names and codes seen twice."""
    for category in overrides.categories:
        if any(existing.name == category.name for existing in categories):
            logger.warning(
                "Category %s defined in multiple places including %s",
                category.name,
                path,
            )

        for code in category.duplicate_codes():
            logger.warning(
                "Command code %s defined multiple places including %s category of %s",
                code,
                category.name,
                path,
            )

        categories.append(category)
