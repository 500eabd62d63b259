"""Storage interfaces and implementations for indexed entries."""

from ontoindex.storage.interfaces import EntryStorageInterface
from ontoindex.storage.jsonl import JsonLinesEntryStorage
from ontoindex.storage.memory import InMemoryEntryStorage

__all__ = [
    "EntryStorageInterface",
    "InMemoryEntryStorage",
    "JsonLinesEntryStorage",
]
