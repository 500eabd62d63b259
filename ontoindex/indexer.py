"""Batch indexer: drives the traversal of one ontology into a storage sink.

The ``OntologyIndexer`` walks every class of an ontology, skips ignored
classes, builds an entry for each remaining class, runs the entry plugins,
and hands entries to storage in fixed-size batches.

**Lifecycle:**

    IDLE -> TRAVERSING <-> FLUSHING -> DONE
                 |             |
                 +--> FAILED <-+

- ``IDLE -> TRAVERSING``: the class enumeration is read from the store. A
  store that cannot enumerate its classes fails the run with
  ``OntologyLoadError``.
- ``TRAVERSING -> FLUSHING``: a batch reached ``batch_size`` entries, or
  traversal finished with a non-empty partial batch.
- ``FLUSHING -> FAILED``: the storage sink raised ``StorageError``. The run
  stops; batches already stored stay stored and nothing is retried.
- ``DONE`` and ``FAILED`` are terminal. An indexer indexes one ontology once.

Plugin failures are not fatal: the error is logged with the entry URI and
the entry is stored as built.

Example usage:
    ```python
    indexer = OntologyIndexer(
        source_key="efo",
        config=OntologyConfig(ignore_uris=("http://www.ebi.ac.uk/efo/organizational_class",)),
        store=store,
        reasoner=StructuralReasoner(store),
        storage=InMemoryEntryStorage(),
    )
    result = await indexer.index_ontology()
    print(f"Indexed {result.entries_indexed} entries")
    ```
"""

import logging
from enum import Enum

from pydantic import BaseModel

from ontoindex.builder import EntryBuilder
from ontoindex.config import OntologyConfig
from ontoindex.errors import IndexerStateError, OntologyLoadError, PluginError, StorageError
from ontoindex.hierarchy import HierarchyResolver
from ontoindex.ignore import IgnoreFilter
from ontoindex.labels import LabelCache
from ontoindex.logging import PprintLogger
from ontoindex.model import ClassRef, OntologyEntry
from ontoindex.ontology.interfaces import (
    OntologyStoreInterface,
    ReasonerInterface,
    SimpleShortFormProvider,
)
from ontoindex.ontology.rdf import RdfOntologyStore
from ontoindex.ontology.reasoner import StructuralReasoner
from ontoindex.plugins import PluginManager
from ontoindex.storage.interfaces import EntryStorageInterface


class IndexerState(str, Enum):
    """Lifecycle state of an OntologyIndexer."""

    IDLE = "idle"
    TRAVERSING = "traversing"
    FLUSHING = "flushing"
    DONE = "done"
    FAILED = "failed"


class IndexingResult(BaseModel):
    """Outcome of indexing one ontology.

    Attributes:
        source_key: Key of the indexed ontology.
        success: False if the run ended in the FAILED state.
        state: Terminal state of the indexer.
        entries_indexed: Entries confirmed stored by the storage sink.
        classes_ignored: Classes skipped by the ignore filter.
        plugin_failures: Entries stored without plugin changes because a plugin failed.
        batches_flushed: Batches confirmed stored.
        cancelled: True if the run was stopped with ``cancel()``.
        error: Message of the error that failed the run.
    """

    model_config = {"frozen": True}

    source_key: str
    success: bool
    state: IndexerState
    entries_indexed: int
    classes_ignored: int = 0
    plugin_failures: int = 0
    batches_flushed: int = 0
    cancelled: bool = False
    error: str | None = None


class OntologyIndexer:
    """Indexes one ontology into a storage sink.

    Attributes:
        source_key: Key identifying the ontology; prefixes every entry id.
        config: Ontology configuration (annotation URIs, ignore URIs, batch size).
        store: Ontology store to traverse.
        storage: Sink receiving entry batches.
        plugins: Entry plugins run on every built entry.
        labels: Label cache shared by every entry of the run.
        resolver: Hierarchy lookups.
        ignore_filter: Decides which classes are skipped.
        builder: Builds the entry for each class.
    """

    def __init__(
        self,
        source_key: str,
        config: OntologyConfig,
        store: OntologyStoreInterface,
        reasoner: ReasonerInterface,
        storage: EntryStorageInterface,
        plugins: PluginManager | None = None,
        short_forms: SimpleShortFormProvider | None = None,
    ) -> None:
        self.source_key = source_key
        self.config = config
        self.store = store
        self.storage = storage
        self.plugins = plugins or PluginManager()
        self.labels = LabelCache(store, config.label_annotation_uri)
        self.resolver = HierarchyResolver(reasoner, organizational_class_uri=config.organizational_class_uri)
        self.ignore_filter = IgnoreFilter(self.resolver, config.ignore_uris)
        self.builder = EntryBuilder(source_key, config, store, self.resolver, self.labels, short_forms)
        self.logger = PprintLogger(logging.getLogger(__name__))
        self._state = IndexerState.IDLE
        self._cancelled = False

    @classmethod
    def from_config(
        cls,
        source_key: str,
        config: OntologyConfig,
        storage: EntryStorageInterface,
        plugins: PluginManager | None = None,
    ) -> "OntologyIndexer":
        """Create an indexer over the ontology at ``config.access_uri``.

        The ontology is read with rdflib and classified with the structural
        reasoner. Plugins default to the ones listed in ``config.plugins``.

        Raises:
            OntologyLoadError: If no access URI is configured or loading fails.
            ConfigError: If a configured plugin cannot be loaded.
        """
        if not config.access_uri:
            raise OntologyLoadError(f"No access_uri configured for ontology {source_key!r}")
        store = RdfOntologyStore.load(config.access_uri, format=config.format)
        return cls(
            source_key=source_key,
            config=config,
            store=store,
            reasoner=StructuralReasoner(store),
            storage=storage,
            plugins=plugins if plugins is not None else PluginManager.from_config(config.plugins),
        )

    @property
    def state(self) -> IndexerState:
        return self._state

    def cancel(self) -> None:
        """Stop traversal before the next class.

        The entries already built are flushed and the run ends in DONE with
        ``cancelled=True``.
        """
        self._cancelled = True

    def should_ignore(self, cls: ClassRef) -> bool:
        return self.ignore_filter.should_ignore(cls)

    def build_entry(self, cls: ClassRef) -> OntologyEntry:
        return self.builder.build(cls)

    async def index_ontology(self) -> IndexingResult:
        """Index every non-ignored class of the ontology.

        Returns:
            An IndexingResult. Storage failures are reported through the
            result (``success=False``) rather than raised.

        Raises:
            IndexerStateError: If this indexer has already been started.
            OntologyLoadError: If the class enumeration cannot be read.
        """
        if self._state is not IndexerState.IDLE:
            raise IndexerStateError(f"Indexer for {self.source_key!r} already ran (state: {self._state.value})")

        self._state = IndexerState.TRAVERSING
        try:
            classes = list(self.store.classes())
        except OntologyLoadError:
            self._state = IndexerState.FAILED
            raise
        except Exception as e:
            self._state = IndexerState.FAILED
            raise OntologyLoadError(f"Could not enumerate classes of {self.source_key!r}: {e}") from e

        self.logger.info("Indexing %d classes from %s", len(classes), self.source_key)
        batch_size = self.config.batch_size
        batch: list[OntologyEntry] = []
        indexed = ignored = plugin_failures = batches = 0

        try:
            for cls in classes:
                if self._cancelled:
                    self.logger.info("Indexing of %s cancelled", self.source_key)
                    break
                if self.should_ignore(cls):
                    ignored += 1
                    continue

                entry, plugin_failed = await self._augment(self.build_entry(cls))
                plugin_failures += int(plugin_failed)
                batch.append(entry)

                if len(batch) >= batch_size:
                    indexed += await self._flush(batch)
                    batches += 1
                    batch = []
                    self.logger.info("Indexed %d entries", indexed)

            if batch:
                indexed += await self._flush(batch)
                batches += 1
                self.logger.info("Indexed %d entries", indexed)

        except StorageError as e:
            self._state = IndexerState.FAILED
            self.logger.error("Caught storage error indexing %s after %d entries: %s", self.source_key, indexed, e)
            return IndexingResult(
                source_key=self.source_key,
                success=False,
                state=self._state,
                entries_indexed=indexed,
                classes_ignored=ignored,
                plugin_failures=plugin_failures,
                batches_flushed=batches,
                cancelled=self._cancelled,
                error=str(e),
            )
        except Exception:
            self._state = IndexerState.FAILED
            raise

        self._state = IndexerState.DONE
        self.logger.info("Indexing complete: %d entries from %s", indexed, self.source_key)
        return IndexingResult(
            source_key=self.source_key,
            success=True,
            state=self._state,
            entries_indexed=indexed,
            classes_ignored=ignored,
            plugin_failures=plugin_failures,
            batches_flushed=batches,
            cancelled=self._cancelled,
        )

    async def _augment(self, entry: OntologyEntry) -> tuple[OntologyEntry, bool]:
        try:
            return await self.plugins.process_entry(entry, self.source_key, self.config), False
        except PluginError as e:
            self.logger.error("Plugin exception processing ontology entry %s: %s", entry.uri, e)
            return entry, True

    async def _flush(self, batch: list[OntologyEntry]) -> int:
        self._state = IndexerState.FLUSHING
        try:
            await self.storage.store_entries(batch)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"{type(self.storage).__name__} failed to store {len(batch)} entries: {e}") from e
        self._state = IndexerState.TRAVERSING
        return len(batch)
