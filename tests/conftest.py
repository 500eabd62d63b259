"""Test fixtures and a small reference ontology.

This module provides:
- The Animal/Dog/Cat ontology used across tests, built in an
  InMemoryOntologyStore (Dog has ``hasDiet some Carnivore``, and the
  ``hasDiet`` property is labeled "diet")
- Mock collaborators: a store that counts annotation lookups, storage sinks
  that fail on demand, and entry plugins that succeed or fail
- Pytest fixtures wiring the store, reasoner, label cache and builder
- Helper factories for flat ontologies of a given size
- The same Animal ontology serialized as Turtle, for rdflib-backed tests
"""

from typing import Sequence

import pytest
from rdflib.namespace import RDFS

from ontoindex.builder import EntryBuilder
from ontoindex.config import OntologyConfig
from ontoindex.errors import PluginError, StorageError
from ontoindex.hierarchy import HierarchyResolver
from ontoindex.labels import LabelCache
from ontoindex.model import ClassExpression, ClassRef, ObjectSomeValuesFrom, OntologyEntry
from ontoindex.ontology.interfaces import OntologyStoreInterface
from ontoindex.ontology.memory import InMemoryOntologyStore
from ontoindex.ontology.reasoner import StructuralReasoner
from ontoindex.plugins import EntryPluginInterface
from ontoindex.storage.memory import InMemoryEntryStorage

EX = "http://example.org/onto/"
HAS_DIET = EX + "hasDiet"
LABEL = str(RDFS.label)

ANIMAL_TTL = """\
@prefix : <http://example.org/onto/> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .

:Animal a owl:Class ; rdfs:label "animal" .
:Dog a owl:Class ;
    rdfs:label "dog" ;
    rdfs:subClassOf :Animal ,
        [ a owl:Restriction ; owl:onProperty :hasDiet ; owl:someValuesFrom :Carnivore ] .
:Cat a owl:Class ; rdfs:label "cat" ; rdfs:subClassOf :Animal .
:Carnivore a owl:Class ; rdfs:label "carnivore" .
:hasDiet a owl:ObjectProperty ; rdfs:label "diet" .
"""


def uri(name: str) -> str:
    """Return the example-namespace URI for a local name."""
    return EX + name


# --- Mock Collaborators ---


class CountingOntologyStore(OntologyStoreInterface):
    """Wraps a store and counts annotation lookups per (iri, property) pair."""

    def __init__(self, inner: OntologyStoreInterface) -> None:
        self.inner = inner
        self.annotation_calls: dict[tuple[str, str], int] = {}
        self.superclass_calls = 0

    def classes(self):
        return self.inner.classes()

    def superclass_expressions(self, cls: ClassRef) -> list[ClassExpression]:
        self.superclass_calls += 1
        return self.inner.superclass_expressions(cls)

    def annotation_values(self, iri: str, property_uri: str) -> list[str]:
        key = (iri, property_uri)
        self.annotation_calls[key] = self.annotation_calls.get(key, 0) + 1
        return self.inner.annotation_values(iri, property_uri)


class BrokenOntologyStore(InMemoryOntologyStore):
    """Store whose class enumeration always fails."""

    def classes(self):
        raise RuntimeError("ontology document is truncated")


class FailingEntryStorage(InMemoryEntryStorage):
    """In-memory storage that raises on the Nth call to store_entries (1-based)."""

    def __init__(self, fail_on_call: int, error: Exception | None = None) -> None:
        super().__init__()
        self.fail_on_call = fail_on_call
        self.error = error or StorageError("search server rejected the batch")
        self.calls = 0

    async def store_entries(self, entries: Sequence[OntologyEntry]) -> None:
        self.calls += 1
        if self.calls == self.fail_on_call:
            raise self.error
        await super().store_entries(entries)


class UppercaseLabelPlugin(EntryPluginInterface):
    """Plugin that upper-cases every label; records the entries it saw."""

    def __init__(self, suffix: str = "") -> None:
        self.suffix = suffix
        self.seen: list[str] = []

    async def process(self, entry: OntologyEntry, source_key: str, config: OntologyConfig) -> OntologyEntry:
        self.seen.append(entry.uri)
        labels = tuple(label.upper() + self.suffix for label in entry.labels)
        return entry.model_copy(update={"labels": labels})


class FailingPlugin(EntryPluginInterface):
    """Plugin that fails for the listed URIs (or for every entry when none are listed)."""

    def __init__(self, fail_uris: Sequence[str] = (), error: Exception | None = None) -> None:
        self.fail_uris = set(fail_uris)
        self.error = error or PluginError("lookup service unavailable")

    async def process(self, entry: OntologyEntry, source_key: str, config: OntologyConfig) -> OntologyEntry:
        if not self.fail_uris or entry.uri in self.fail_uris:
            raise self.error
        return entry


# --- Helper Factories ---


def build_animal_store() -> InMemoryOntologyStore:
    """Build the Animal/Dog/Cat ontology.

    Animal
     +- Dog   (Dog SubClassOf hasDiet some Carnivore)
     +- Cat
    Carnivore
    """
    store = InMemoryOntologyStore()
    animal = store.add_class(uri("Animal"), labels=["animal"])
    dog = store.add_class(uri("Dog"), labels=["dog"])
    cat = store.add_class(uri("Cat"), labels=["cat"])
    carnivore = store.add_class(uri("Carnivore"), labels=["carnivore"])
    store.add_annotation(HAS_DIET, LABEL, "diet")
    store.add_subclass_of(dog, animal)
    store.add_subclass_of(cat, animal)
    store.add_subclass_of(dog, ObjectSomeValuesFrom(property_iri=HAS_DIET, filler=carnivore))
    return store


def build_flat_store(count: int, parent: str | None = None) -> InMemoryOntologyStore:
    """Build an ontology of ``count`` classes named C0..C{count-1}.

    If ``parent`` is given, every class is a direct subclass of it (and the
    parent itself is part of the ontology).
    """
    store = InMemoryOntologyStore()
    parent_ref = store.add_class(uri(parent)) if parent else None
    for i in range(count):
        cls = store.add_class(uri(f"C{i}"), labels=[f"class {i}"])
        if parent_ref is not None:
            store.add_subclass_of(cls, parent_ref)
    return store


# --- Fixtures ---


@pytest.fixture
def animal_store() -> InMemoryOntologyStore:
    """Provide a fresh Animal/Dog/Cat ontology."""
    return build_animal_store()


@pytest.fixture
def ontology_config() -> OntologyConfig:
    """Provide the default ontology configuration."""
    return OntologyConfig()


@pytest.fixture
def label_cache(animal_store: InMemoryOntologyStore) -> LabelCache:
    return LabelCache(animal_store)


@pytest.fixture
def resolver(animal_store: InMemoryOntologyStore) -> HierarchyResolver:
    return HierarchyResolver(StructuralReasoner(animal_store))


@pytest.fixture
def builder(
    animal_store: InMemoryOntologyStore,
    ontology_config: OntologyConfig,
    resolver: HierarchyResolver,
    label_cache: LabelCache,
) -> EntryBuilder:
    """Provide an EntryBuilder over the Animal ontology with source key "zoo"."""
    return EntryBuilder("zoo", ontology_config, animal_store, resolver, label_cache)


@pytest.fixture
def entry_storage() -> InMemoryEntryStorage:
    """Provide a fresh in-memory entry storage instance."""
    return InMemoryEntryStorage()


@pytest.fixture
def animal_ttl(tmp_path):
    """Write the Animal ontology as Turtle and return its path."""
    path = tmp_path / "animals.ttl"
    path.write_text(ANIMAL_TTL, encoding="utf-8")
    return path
