"""Construction of flattened index entries from ontology classes.

``EntryBuilder.build()`` gathers everything the search index needs about one
class into an ``OntologyEntry``:

1.  Identity: source key, ``source_uri`` id, URI and short form.
2.  Labels, synonyms and definitions through the shared ``LabelCache``,
    each from its configured annotation property.
3.  Direct and transitive child/parent URIs through the ``HierarchyResolver``.
4.  Relations from existential restrictions, inherited ones included.

Relations are named after a label of the restricted property plus the
``_rel`` suffix, which keeps relation fields apart from ordinary entry
fields in the search index. Restrictions whose property has no label, or
whose filler is not a named class, cannot be reported and are dropped.
Restrictions sharing a relation name are merged into one list.
"""

from ontoindex.config import OntologyConfig
from ontoindex.hierarchy import HierarchyResolver
from ontoindex.labels import LabelCache
from ontoindex.model import ClassRef, OntologyEntry, RestrictionRecord, entry_id
from ontoindex.ontology.interfaces import OntologyStoreInterface, SimpleShortFormProvider
from ontoindex.restrictions import RestrictionVisitor, VisitState

RELATION_FIELD_SUFFIX = "_rel"


class EntryBuilder:
    """Builds one ``OntologyEntry`` per class.

    Building has no side effects other than warming the label cache. A new
    ``RestrictionVisitor`` is used for every class, so builders can be
    shared between threads as long as the label cache is.

    Attributes:
        source_key: Key of the ontology being indexed.
        config: Annotation property URIs to read.
        store: Ontology store answering axiom lookups.
        resolver: Hierarchy lookups.
        labels: Shared label cache.
        short_forms: Short form provider for entry names.
    """

    def __init__(
        self,
        source_key: str,
        config: OntologyConfig,
        store: OntologyStoreInterface,
        resolver: HierarchyResolver,
        labels: LabelCache,
        short_forms: SimpleShortFormProvider | None = None,
    ) -> None:
        self.source_key = source_key
        self.config = config
        self.store = store
        self.resolver = resolver
        self.labels = labels
        self.short_forms = short_forms or SimpleShortFormProvider()

    def build(self, cls: ClassRef) -> OntologyEntry:
        """Build the index entry for ``cls``."""
        return OntologyEntry(
            source=self.source_key,
            id=entry_id(self.source_key, cls.uri),
            uri=cls.uri,
            short_form=self.short_forms.get_short_form(cls),
            labels=tuple(sorted(self.labels.labels(cls.uri))),
            synonyms=tuple(sorted(self.labels.annotations(cls.uri, self.config.synonym_annotation_uri))),
            description=tuple(sorted(self.labels.annotations(cls.uri, self.config.definition_annotation_uri))),
            child_uris=tuple(sorted(self.resolver.subclasses(cls, direct=True))),
            parent_uris=tuple(sorted(self.resolver.superclasses(cls, direct=True))),
            descendant_uris=tuple(sorted(self.resolver.subclasses(cls, direct=False))),
            ancestor_uris=tuple(sorted(self.resolver.superclasses(cls, direct=False))),
            relations=self.relations(cls),
        )

    def restriction_state(self, cls: ClassRef) -> VisitState:
        """Return every restriction that applies to ``cls``, universal ones included."""
        return RestrictionVisitor(self.store).collect(cls)

    def related_items(self, cls: ClassRef) -> dict[str, list[RestrictionRecord]]:
        """Return existential restrictions of ``cls`` grouped by relation name (without suffix)."""
        state = self.restriction_state(cls)
        items: dict[str, list[RestrictionRecord]] = {}
        for restriction in sorted(state.some_values, key=lambda r: (r.property_iri, r.filler.model_dump_json())):
            name = self._relation_name(restriction.property_iri)
            filler = restriction.filler
            if name is None or not isinstance(filler, ClassRef):
                continue
            items.setdefault(name, []).append(
                RestrictionRecord(
                    relation_iri=restriction.property_iri,
                    filler=filler,
                    filler_labels=self.labels.labels(filler.uri),
                )
            )
        return items

    def relations(self, cls: ClassRef) -> dict[str, tuple[str, ...]]:
        """Return the relation fields of the entry for ``cls``."""
        return {
            name + RELATION_FIELD_SUFFIX: tuple(sorted({record.filler.uri for record in records}))
            for name, records in self.related_items(cls).items()
        }

    def _relation_name(self, property_iri: str) -> str | None:
        # alphabetically first label, so names are stable across runs
        property_labels = sorted(self.labels.labels(property_iri))
        return property_labels[0] if property_labels else None
