"""Interfaces onto the ontology: the store that holds its axioms and the reasoner.

The indexing engine never parses ontology documents or computes inferences
itself. It consumes two capabilities:

- **OntologyStoreInterface**: enumerate classes, read the superclass
  expressions of a class's subclass-of axioms, and read literal annotation
  values for an IRI.
- **ReasonerInterface**: answer direct or transitive sub/superclass queries
  as node-sets.

Implementations shipped with the package:
    - InMemoryOntologyStore (ontoindex.ontology.memory)
    - RdfOntologyStore (ontoindex.ontology.rdf), backed by rdflib
    - StructuralReasoner (ontoindex.ontology.reasoner), told hierarchy only
"""

from abc import ABC, abstractmethod
from typing import Iterable

from ontoindex.model import ClassExpression, ClassRef, NodeSet


class OntologyStoreInterface(ABC):
    """Read access to the axioms of one loaded ontology."""

    @abstractmethod
    def classes(self) -> Iterable[ClassRef]:
        """Return every named class in the ontology's signature.

        Raises:
            OntologyLoadError: If the ontology cannot be enumerated.
        """

    @abstractmethod
    def superclass_expressions(self, cls: ClassRef) -> list[ClassExpression]:
        """Return the superclass expression of every subclass-of axiom whose subclass is ``cls``.

        Returns an empty list for classes without subclass-of axioms.
        """

    @abstractmethod
    def annotation_values(self, iri: str, property_uri: str) -> list[str]:
        """Return the literal values of ``property_uri`` annotations on ``iri``.

        Non-literal annotation values (IRIs, blank nodes) are not returned.
        """


class ReasonerInterface(ABC):
    """Answers subclass/superclass queries over an ontology.

    Node-sets may contain anonymous expressions and the bottom class
    ``owl:Nothing``; callers are responsible for filtering them.
    """

    @abstractmethod
    def sub_classes(self, cls: ClassRef, direct: bool) -> NodeSet:
        """Return the direct (``direct=True``) or all subclasses of ``cls``."""

    @abstractmethod
    def super_classes(self, cls: ClassRef, direct: bool) -> NodeSet:
        """Return the direct (``direct=True``) or all superclasses of ``cls``."""


class SimpleShortFormProvider:
    """Derives a short form from a class URI.

    The short form is the fragment after ``#`` when present, otherwise the
    last path segment. A URI without either is returned unchanged.
    """

    def get_short_form(self, cls: ClassRef) -> str:
        uri = cls.uri
        if "#" in uri:
            fragment = uri.rsplit("#", 1)[1]
            if fragment:
                return fragment
        segment = uri.rstrip("/").rsplit("/", 1)[-1]
        return segment or uri
