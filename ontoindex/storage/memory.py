"""In-memory entry storage for testing and development.

Keeps every stored entry in a dictionary keyed by entry id, and records the
size of every batch it receives so batching behaviour can be inspected.

**Not recommended for production**: nothing is persisted and all entries
must fit in memory.
"""

from typing import Sequence

from ontoindex.model import OntologyEntry
from ontoindex.storage.interfaces import EntryStorageInterface


class InMemoryEntryStorage(EntryStorageInterface):
    """Dictionary-backed entry storage.

    Thread safety: Not thread-safe.

    Example:
        ```python
        storage = InMemoryEntryStorage()
        await storage.store_entries([entry])
        assert storage.get(entry.id) == entry
        ```
    """

    def __init__(self) -> None:
        self._entries: dict[str, OntologyEntry] = {}
        self.batch_sizes: list[int] = []

    async def store_entries(self, entries: Sequence[OntologyEntry]) -> None:
        """Stores a batch, replacing entries that share an id."""
        self.batch_sizes.append(len(entries))
        for entry in entries:
            self._entries[entry.id] = entry

    async def count(self) -> int:
        return len(self._entries)

    def get(self, entry_id: str) -> OntologyEntry | None:
        return self._entries.get(entry_id)

    def get_by_uri(self, uri: str) -> OntologyEntry | None:
        """Return the first stored entry for a class URI, whatever its source."""
        return next((entry for entry in self._entries.values() if entry.uri == uri), None)

    def list_all(self) -> list[OntologyEntry]:
        return list(self._entries.values())
