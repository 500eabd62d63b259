"""Data model for ontology indexing.

Class expressions mirror the subset of OWL that indexing cares about:

- **ClassRef**: a named class, identified by its URI
- **ObjectSomeValuesFrom**: existential restriction (``property some filler``)
- **ObjectAllValuesFrom**: universal restriction (``property only filler``)
- **AnonymousClassExpression**: any other anonymous shape (intersection,
  union, complement, ...), carried only so it can be recognised and skipped

Expressions are a discriminated union on the ``kind`` field, so they
round-trip through JSON and can be used as set members and dict keys.

**OntologyEntry** is the denormalized output record handed to storage. It is
frozen: plugins that want to change an entry return
``entry.model_copy(update={...})``.
"""

from types import MappingProxyType
from typing import Annotated, Literal, Mapping, Union

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator


class ClassRef(BaseModel):
    """A named ontology class. Equality and hashing are by URI."""

    model_config = {"frozen": True}

    kind: Literal["class"] = "class"
    uri: str

    @property
    def is_anonymous(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.uri


class ObjectSomeValuesFrom(BaseModel):
    """Existential restriction: instances have some ``property_iri`` link to a ``filler``."""

    model_config = {"frozen": True}

    kind: Literal["some"] = "some"
    property_iri: str
    filler: "ClassExpression"

    @property
    def is_anonymous(self) -> bool:
        return True


class ObjectAllValuesFrom(BaseModel):
    """Universal restriction: every ``property_iri`` link points to a ``filler``."""

    model_config = {"frozen": True}

    kind: Literal["only"] = "only"
    property_iri: str
    filler: "ClassExpression"

    @property
    def is_anonymous(self) -> bool:
        return True


class AnonymousClassExpression(BaseModel):
    """Any anonymous class expression the indexer does not interpret."""

    model_config = {"frozen": True}

    kind: Literal["anonymous"] = "anonymous"
    description: str = ""

    @property
    def is_anonymous(self) -> bool:
        return True


ClassExpression = Annotated[
    Union[ClassRef, ObjectSomeValuesFrom, ObjectAllValuesFrom, AnonymousClassExpression],
    Field(discriminator="kind"),
]

ObjectSomeValuesFrom.model_rebuild()
ObjectAllValuesFrom.model_rebuild()


class Node(BaseModel):
    """A group of equivalent class expressions returned by a reasoner."""

    model_config = {"frozen": True}

    entities: tuple[ClassExpression, ...]

    @property
    def representative(self) -> ClassExpression:
        return self.entities[0]


class NodeSet(BaseModel):
    """The answer to a sub/superclass query: a set of equivalence nodes."""

    model_config = {"frozen": True}

    nodes: tuple[Node, ...] = ()

    def flattened(self) -> list[ClassExpression]:
        """Return every entity of every node, in node order."""
        return [entity for node in self.nodes for entity in node.entities]

    @classmethod
    def of(cls, *expressions: ClassExpression) -> "NodeSet":
        """Build a node-set with one singleton node per expression."""
        return cls(nodes=tuple(Node(entities=(expression,)) for expression in expressions))


class RestrictionRecord(BaseModel):
    """One existential restriction found for a class, before it is folded into an entry.

    Attributes:
        relation_iri: IRI of the restricted object property.
        filler: The named filler class.
        filler_labels: Labels of the filler class at the time of collection.
    """

    model_config = {"frozen": True}

    relation_iri: str
    filler: ClassRef
    filler_labels: frozenset[str] = frozenset()


def entry_id(source: str, uri: str) -> str:
    """Return the run-unique entry id for a class URI from a given source."""
    return f"{source}_{uri}"


class OntologyEntry(BaseModel):
    """Flattened, search-ready record for one ontology class.

    Attributes:
        source: Key of the ontology the entry came from.
        id: ``source + "_" + uri``; unique within one indexing run.
        uri: URI of the class.
        short_form: Abbreviated name derived from the URI.
        labels: Values of the label annotation property.
        synonyms: Values of the synonym annotation property.
        description: Values of the definition annotation property.
        child_uris: Direct subclasses.
        parent_uris: Direct superclasses.
        descendant_uris: All subclasses.
        ancestor_uris: All superclasses.
        relations: Relation field name (``<property label>_rel``) to filler URIs.
            Read-only; serialized as a plain JSON object.
    """

    model_config = {"frozen": True}

    source: str
    id: str
    uri: str
    short_form: str
    labels: tuple[str, ...] = ()
    synonyms: tuple[str, ...] = ()
    description: tuple[str, ...] = ()
    child_uris: tuple[str, ...] = ()
    parent_uris: tuple[str, ...] = ()
    descendant_uris: tuple[str, ...] = ()
    ancestor_uris: tuple[str, ...] = ()
    relations: Mapping[str, tuple[str, ...]] = Field(default_factory=dict, validate_default=True)

    @field_validator("relations", mode="after")
    @classmethod
    def freeze_relations(cls, value: Mapping[str, tuple[str, ...]]) -> Mapping[str, tuple[str, ...]]:
        return MappingProxyType(dict(value))

    @field_serializer("relations")
    def serialize_relations(self, value: Mapping[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
        return dict(value)

    @model_validator(mode="after")
    def direct_links_are_transitive(self) -> "OntologyEntry":
        if not set(self.child_uris) <= set(self.descendant_uris):
            raise ValueError(f"child_uris of {self.uri} must be a subset of descendant_uris")
        if not set(self.parent_uris) <= set(self.ancestor_uris):
            raise ValueError(f"parent_uris of {self.uri} must be a subset of ancestor_uris")
        return self
