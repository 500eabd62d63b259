"""JSON Lines entry storage.

Writes one JSON object per entry, in the order batches arrive. The file is
a convenient hand-off format for bulk loaders of search engines.
"""

import json
from pathlib import Path
from typing import Sequence

from ontoindex.errors import StorageError
from ontoindex.model import OntologyEntry
from ontoindex.storage.interfaces import EntryStorageInterface


class JsonLinesEntryStorage(EntryStorageInterface):
    """Appends entries to a ``.jsonl`` file.

    Entries are appended, never replaced. Every batch is written and flushed
    before ``store_entries`` returns, so a later failure leaves earlier
    batches intact on disk.

    Attributes:
        path: Output file. Parent directories are created on first write.
    """

    def __init__(self, path: Path, overwrite: bool = True) -> None:
        """Initialize the storage.

        Args:
            path: File to write entries to.
            overwrite: Truncate an existing file on the first write instead
                of appending to it.
        """
        self.path = Path(path)
        self._truncate = overwrite
        self._written = 0

    async def store_entries(self, entries: Sequence[OntologyEntry]) -> None:
        lines = [json.dumps(entry.model_dump(mode="json"), ensure_ascii=False) + "\n" for entry in entries]
        mode = "w" if self._truncate else "a"
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, mode, encoding="utf-8") as f:
                f.writelines(lines)
        except OSError as e:
            raise StorageError(f"Could not write {len(lines)} entries to {self.path}: {e}") from e
        self._truncate = False
        self._written += len(lines)

    async def count(self) -> int:
        """Return the number of entries written by this instance."""
        return self._written

    def read_entries(self) -> list[OntologyEntry]:
        """Read every entry back from the file."""
        if not self.path.exists():
            return []
        with open(self.path, encoding="utf-8") as f:
            return [OntologyEntry.model_validate_json(line) for line in f if line.strip()]
