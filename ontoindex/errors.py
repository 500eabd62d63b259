"""Exception hierarchy for ontology indexing.

- **OntologyLoadError**: the ontology could not be materialized. Fatal; raised
  before any class is traversed.
- **PluginError**: an augmentation plugin failed for a single entry. The
  indexer logs it and indexes the entry unaugmented.
- **StorageError**: a batch could not be written. Fatal for the rest of the
  run; batches already stored are not rolled back.
- **IndexerStateError**: an indexer was driven outside its lifecycle (for
  example started twice).
- **ConfigError**: configuration could not be found or validated.

Malformed restriction data (anonymous fillers, unlabeled properties) is not
an error and never raises.
"""


class OntologyIndexingError(Exception):
    """Base class for all errors raised by ontoindex."""


class OntologyLoadError(OntologyIndexingError):
    """The ontology store failed to load or enumerate the ontology."""


class PluginError(OntologyIndexingError):
    """An entry plugin failed while processing one entry."""


class StorageError(OntologyIndexingError):
    """The storage sink failed to write a batch of entries."""


class IndexerStateError(OntologyIndexingError):
    """An indexer was used after it reached a terminal state."""


class ConfigError(OntologyIndexingError):
    """Configuration is missing or invalid."""
