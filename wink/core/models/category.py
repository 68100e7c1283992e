"""
Category models — named groups of invocables and the serialized catalog.

CategoryList is the exact shape of wink.json and of ``wink -e``:

    {"categories": [{"name": "...", "invocables": [{...}, ...]}, ...]}
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from wink.core.models.invocable import Invocable

logger = logging.getLogger(__name__)


class Category(BaseModel):
    """A named, ordered list of invocables.

    Duplicate codes are allowed; lookups return the first one.
    """

    name: str
    invocables: list[Invocable] = Field(default_factory=list)

    def add(self, invocable: Invocable) -> None:
        """Append an invocable, reporting a code already in this category."""
        for existing in self.invocables:
            if existing.code == invocable.code:
                logger.warning(
                    "Command code %s overridden from %s to %s",
                    existing.code,
                    existing.command,
                    invocable.command,
                )
        self.invocables.append(invocable)

    def get(self, code: str) -> Invocable | None:
        """Look up the first invocable with this code."""
        for inv in self.invocables:
            if inv.code == code:
                return inv
        return None

    def duplicate_codes(self) -> list[str]:
        """Codes that appear more than once, once per repeat, in order."""
        seen: set[str] = set()
        duplicates: list[str] = []
        for inv in self.invocables:
            if inv.code in seen:
                duplicates.append(inv.code)
            else:
                seen.add(inv.code)
        return duplicates

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: Category) -> bool:
        return self.name < other.name

    def __hash__(self) -> int:
        return hash(self.name)


class CategoryList(BaseModel):
    """Serialized catalog: an ordered list of categories."""

    categories: list[Category] = Field(default_factory=list)
