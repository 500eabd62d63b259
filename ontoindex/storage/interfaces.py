"""Storage interface for indexed ontology entries."""

from abc import ABC, abstractmethod
from typing import Sequence

from ontoindex.model import OntologyEntry


class EntryStorageInterface(ABC):
    """Abstract sink for batches of ontology entries.

    Implementations write to a search engine, a file, a database, etc.
    Batches are independent: a failed batch does not roll back earlier ones.
    """

    @abstractmethod
    async def store_entries(self, entries: Sequence[OntologyEntry]) -> None:
        """Store a batch of entries.

        Whether an entry whose id is already stored replaces the earlier
        entry is up to the implementation.

        Raises:
            StorageError: If the batch could not be written.
        """

    @abstractmethod
    async def count(self) -> int:
        """Return the number of entries stored."""
