"""In-memory ontology store for testing and programmatic construction.

Axioms are kept in plain dictionaries. Useful for:

- **Unit testing**: building small ontologies (including cyclic and
  malformed ones) directly in Python
- **Small ontologies**: indexing a taxonomy generated by other code without
  serializing it to RDF first

Example:
    ```python
    store = InMemoryOntologyStore()
    animal = store.add_class("http://example.org/Animal", labels=["animal"])
    dog = store.add_class("http://example.org/Dog", labels=["dog"])
    store.add_subclass_of(dog, animal)
    store.add_subclass_of(dog, ObjectSomeValuesFrom(property_iri=HAS_DIET, filler=carnivore))
    ```
"""

from collections import defaultdict
from typing import Iterable

from rdflib.namespace import RDFS

from ontoindex.model import ClassExpression, ClassRef
from ontoindex.ontology.interfaces import OntologyStoreInterface


class InMemoryOntologyStore(OntologyStoreInterface):
    """Dictionary-backed ontology store.

    Classes are returned in insertion order. Classes referenced only as the
    superclass of an axiom are part of the signature too.

    Thread safety: reads are safe once construction is finished; the add_*
    methods are not synchronized.
    """

    def __init__(self) -> None:
        self._classes: dict[str, ClassRef] = {}
        self._superclasses: dict[ClassRef, list[ClassExpression]] = defaultdict(list)
        self._annotations: dict[tuple[str, str], list[str]] = defaultdict(list)

    def add_class(
        self,
        uri: str,
        labels: Iterable[str] = (),
        label_property: str = str(RDFS.label),
    ) -> ClassRef:
        """Declare a named class, optionally with labels, and return its reference."""
        cls = self._classes.setdefault(uri, ClassRef(uri=uri))
        for label in labels:
            self.add_annotation(uri, label_property, label)
        return cls

    def add_subclass_of(self, sub: ClassRef, sup: ClassExpression) -> None:
        """Add the axiom ``sub SubClassOf sup``."""
        self._classes.setdefault(sub.uri, sub)
        if isinstance(sup, ClassRef):
            self._classes.setdefault(sup.uri, sup)
        self._superclasses[sub].append(sup)

    def add_annotation(self, iri: str, property_uri: str, value: str) -> None:
        """Add a literal annotation assertion on ``iri``."""
        self._annotations[(iri, property_uri)].append(value)

    def classes(self) -> list[ClassRef]:
        return list(self._classes.values())

    def superclass_expressions(self, cls: ClassRef) -> list[ClassExpression]:
        return list(self._superclasses.get(cls, ()))

    def annotation_values(self, iri: str, property_uri: str) -> list[str]:
        return list(self._annotations.get((iri, property_uri), ()))
