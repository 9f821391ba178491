"""
Storage collaborator contract for the Scope Validation Engine.
"""

from collections.abc import Iterable, Sequence
from typing import Any, Protocol, runtime_checkable

from .models import CatalogEntry


@runtime_checkable
class CatalogStorage(Protocol):
    """Anything that can list the full repair catalog."""

    def list_catalog_entries(self) -> Sequence[CatalogEntry | dict[str, Any]]:
        """Return every catalog entry. No pagination, no filtering."""
        ...


class InMemoryCatalogStorage:
    """Catalog storage backed by a list, for scripts and tests."""

    def __init__(self, entries: Iterable[CatalogEntry | dict[str, Any]] = ()) -> None:
        self.entries: list[CatalogEntry | dict[str, Any]] = list(entries)
        self.fetch_count = 0

    def list_catalog_entries(self) -> Sequence[CatalogEntry | dict[str, Any]]:
        self.fetch_count += 1
        return list(self.entries)
