"""
Catalog index for companion rule lookups.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from .models import CatalogEntry

logger = logging.getLogger(__name__)


class CatalogIndex:
    """
    In-memory lookup from catalog code to catalog entry.

    Built once per validation run from the full catalog listing.
    Duplicate codes are not rejected; the last entry wins.
    """

    def __init__(self, entries: Iterable[CatalogEntry | dict[str, Any]] = ()) -> None:
        self._entries: dict[str, CatalogEntry] = {}
        for entry in entries:
            self.add(entry)

    def add(self, entry: CatalogEntry | dict[str, Any]) -> CatalogEntry:
        """Add an entry to the index, replacing any entry with the same code."""
        if isinstance(entry, dict):
            entry = CatalogEntry.model_validate(entry)
        if entry.code in self._entries:
            logger.debug("Duplicate catalog code %s, keeping last entry", entry.code)
        self._entries[entry.code] = entry
        return entry

    def get(self, code: str | None) -> CatalogEntry | None:
        """Get the entry for a code, if known."""
        if code is None:
            return None
        return self._entries.get(code)

    def describe(self, code: str) -> str:
        """Human description for a code, falling back to the bare code."""
        entry = self._entries.get(code)
        return entry.description if entry else code

    def requires(self, code: str | None) -> list[str]:
        """Codes that must co-occur with this code in the same room."""
        entry = self.get(code)
        if entry is None or entry.companion_rules is None:
            return []
        return list(entry.companion_rules.requires)

    def __contains__(self, code: object) -> bool:
        return code in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries.values())
