"""rdflib-backed ontology store.

Reads OWL ontologies serialized as RDF (RDF/XML, Turtle, ...). Parsing is
done by rdflib; this module only maps the triples the indexer needs onto
the class-expression model:

- ``C rdfs:subClassOf D`` with a named ``D`` -> ``ClassRef``
- ``C rdfs:subClassOf [ owl:onProperty P ; owl:someValuesFrom F ]`` ->
  ``ObjectSomeValuesFrom``
- ``C rdfs:subClassOf [ owl:onProperty P ; owl:allValuesFrom F ]`` ->
  ``ObjectAllValuesFrom``
- a restriction on ``[ owl:inverseOf P ]`` is reported on ``P`` itself
- any other blank-node superclass -> ``AnonymousClassExpression``
"""

import logging

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import OWL, RDF, RDFS

from ontoindex.errors import OntologyLoadError
from ontoindex.model import (
    AnonymousClassExpression,
    ClassExpression,
    ClassRef,
    ObjectAllValuesFrom,
    ObjectSomeValuesFrom,
)
from ontoindex.ontology.interfaces import OntologyStoreInterface

logger = logging.getLogger(__name__)

# owl:Thing and owl:Nothing are vocabulary, not indexable classes
_BUILTIN_CLASSES = {OWL.Thing, OWL.Nothing}

_ANONYMOUS_SHAPES = (
    (OWL.intersectionOf, "intersectionOf"),
    (OWL.unionOf, "unionOf"),
    (OWL.complementOf, "complementOf"),
    (OWL.oneOf, "oneOf"),
    (OWL.hasValue, "hasValue"),
)


class RdfOntologyStore(OntologyStoreInterface):
    """Ontology store over an ``rdflib.Graph``.

    Example:
        ```python
        store = RdfOntologyStore.load("http://www.ebi.ac.uk/efo/efo.owl")
        for cls in store.classes():
            print(cls.uri, store.superclass_expressions(cls))
        ```
    """

    def __init__(self, graph: Graph) -> None:
        self.graph = graph

    @classmethod
    def load(cls, source: str, format: str | None = None) -> "RdfOntologyStore":
        """Parse an ontology document from a URL or file path.

        Raises:
            OntologyLoadError: If rdflib cannot read or parse the source.
        """
        logger.info("Loading ontology from %s...", source)
        graph = Graph()
        try:
            graph.parse(source, format=format)
        except Exception as e:
            raise OntologyLoadError(f"Could not load ontology from {source}: {e}") from e
        logger.info("Loaded %d triples from %s", len(graph), source)
        return cls(graph)

    @classmethod
    def from_data(cls, data: str, format: str = "turtle") -> "RdfOntologyStore":
        """Parse an ontology held in a string.

        Raises:
            OntologyLoadError: If the data cannot be parsed.
        """
        graph = Graph()
        try:
            graph.parse(data=data, format=format)
        except Exception as e:
            raise OntologyLoadError(f"Could not parse ontology data: {e}") from e
        return cls(graph)

    def classes(self) -> list[ClassRef]:
        uris: set[URIRef] = set()
        for class_type in (OWL.Class, RDFS.Class):
            uris.update(s for s in self.graph.subjects(RDF.type, class_type) if isinstance(s, URIRef))
        for sub, sup in self.graph.subject_objects(RDFS.subClassOf):
            uris.update(node for node in (sub, sup) if isinstance(node, URIRef))
        return [ClassRef(uri=str(uri)) for uri in sorted(uris - _BUILTIN_CLASSES)]

    def superclass_expressions(self, cls: ClassRef) -> list[ClassExpression]:
        return [self._expression(node, set()) for node in self.graph.objects(URIRef(cls.uri), RDFS.subClassOf)]

    def annotation_values(self, iri: str, property_uri: str) -> list[str]:
        return [str(value) for value in self.graph.objects(URIRef(iri), URIRef(property_uri)) if isinstance(value, Literal)]

    def _expression(self, node, seen: set[BNode]) -> ClassExpression:
        if isinstance(node, URIRef):
            return ClassRef(uri=str(node))
        if node in seen:
            return AnonymousClassExpression(description="cyclic blank node")
        seen.add(node)

        prop = self.graph.value(node, OWL.onProperty)
        if isinstance(prop, BNode):
            # inverse property expressions are named after the property they invert
            prop = self.graph.value(prop, OWL.inverseOf)
        if isinstance(prop, URIRef):
            some = self.graph.value(node, OWL.someValuesFrom)
            if some is not None:
                return ObjectSomeValuesFrom(property_iri=str(prop), filler=self._expression(some, seen))
            only = self.graph.value(node, OWL.allValuesFrom)
            if only is not None:
                return ObjectAllValuesFrom(property_iri=str(prop), filler=self._expression(only, seen))

        for predicate, shape in _ANONYMOUS_SHAPES:
            if (node, predicate, None) in self.graph:
                return AnonymousClassExpression(description=shape)
        if (node, RDF.type, OWL.Restriction) in self.graph:
            return AnonymousClassExpression(description="restriction")
        return AnonymousClassExpression(description="anonymous")
