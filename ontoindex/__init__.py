"""Ontology hierarchy indexing.

Turns the class graph of an OWL ontology into flattened, search-ready
entries: labels, synonyms, definitions, direct and transitive parent/child
URIs, and relations derived from existential restrictions.

Typical use:

    from ontoindex import OntologyIndexer, OntologyConfig
    from ontoindex.storage import JsonLinesEntryStorage

    indexer = OntologyIndexer.from_config(
        "efo",
        OntologyConfig(access_uri="efo.owl"),
        JsonLinesEntryStorage(Path("out/efo.jsonl")),
    )
    result = await indexer.index_ontology()
"""

from ontoindex.builder import RELATION_FIELD_SUFFIX, EntryBuilder
from ontoindex.config import IndexerConfig, OntologyConfig, PluginConfig, load_indexer_config
from ontoindex.errors import (
    ConfigError,
    IndexerStateError,
    OntologyIndexingError,
    OntologyLoadError,
    PluginError,
    StorageError,
)
from ontoindex.hierarchy import HierarchyNode, HierarchyResolver
from ontoindex.ignore import IgnoreFilter
from ontoindex.indexer import IndexerState, IndexingResult, OntologyIndexer
from ontoindex.labels import LabelCache
from ontoindex.model import (
    AnonymousClassExpression,
    ClassRef,
    Node,
    NodeSet,
    ObjectAllValuesFrom,
    ObjectSomeValuesFrom,
    OntologyEntry,
    RestrictionRecord,
)
from ontoindex.plugins import EntryPluginInterface, PluginManager
from ontoindex.restrictions import RestrictionVisitor, VisitState

__all__ = [
    "AnonymousClassExpression",
    "ClassRef",
    "Node",
    "NodeSet",
    "ObjectAllValuesFrom",
    "ObjectSomeValuesFrom",
    "OntologyEntry",
    "RestrictionRecord",
    "LabelCache",
    "RestrictionVisitor",
    "VisitState",
    "HierarchyNode",
    "HierarchyResolver",
    "IgnoreFilter",
    "EntryBuilder",
    "RELATION_FIELD_SUFFIX",
    "EntryPluginInterface",
    "PluginManager",
    "IndexerState",
    "IndexingResult",
    "OntologyIndexer",
    "IndexerConfig",
    "OntologyConfig",
    "PluginConfig",
    "load_indexer_config",
    "OntologyIndexingError",
    "OntologyLoadError",
    "PluginError",
    "StorageError",
    "IndexerStateError",
    "ConfigError",
]

__version__ = "0.1.0"
