"""Ontology stores and reasoners consumed by the indexing engine."""

from ontoindex.ontology.interfaces import (
    OntologyStoreInterface,
    ReasonerInterface,
    SimpleShortFormProvider,
)
from ontoindex.ontology.memory import InMemoryOntologyStore
from ontoindex.ontology.rdf import RdfOntologyStore
from ontoindex.ontology.reasoner import OWL_NOTHING, StructuralReasoner

__all__ = [
    "OntologyStoreInterface",
    "ReasonerInterface",
    "SimpleShortFormProvider",
    "InMemoryOntologyStore",
    "RdfOntologyStore",
    "StructuralReasoner",
    "OWL_NOTHING",
]
