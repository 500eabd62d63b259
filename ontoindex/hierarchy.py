"""Sub/superclass lookups on top of a reasoner.

The reasoner answers with node-sets that may contain anonymous expressions
and the bottom class; ``HierarchyResolver`` flattens them into plain URI
sets of named classes.

It also renders the hierarchy for browsing: the labels of a class's
children or parents, and the tree of subclasses below a class.
"""

from pydantic import BaseModel, Field
from rdflib.namespace import OWL

from ontoindex.labels import LabelCache
from ontoindex.model import ClassRef, NodeSet
from ontoindex.ontology.interfaces import ReasonerInterface


class HierarchyNode(BaseModel):
    """A class in the subclass tree below some root.

    Attributes:
        uri: URI of the class.
        label: First label of the class, or an empty string.
        children: Direct subclasses.
        size: Number of nodes in the subtree rooted here, this node included.
    """

    uri: str
    label: str = ""
    children: list["HierarchyNode"] = Field(default_factory=list)
    size: int = 1


class HierarchyResolver:
    """Resolves named sub/superclass URIs through a reasoner.

    ``organizational_class_uri`` names the annotation marking grouping
    classes; label lookups leave those classes out.
    """

    def __init__(
        self,
        reasoner: ReasonerInterface,
        nothing_uri: str = str(OWL.Nothing),
        organizational_class_uri: str | None = None,
    ) -> None:
        self.reasoner = reasoner
        self.nothing_uri = nothing_uri
        self.organizational_class_uri = organizational_class_uri

    def _named_classes(self, node_set: NodeSet) -> list[ClassRef]:
        named: dict[str, ClassRef] = {}
        for node in node_set.nodes:
            for entity in node.entities:
                if not entity.is_anonymous and entity.uri != self.nothing_uri:
                    named.setdefault(entity.uri, entity)
        return list(named.values())

    def subclasses(self, cls: ClassRef, direct: bool) -> set[str]:
        """Return URIs of the direct or all subclasses of ``cls``."""
        return {c.uri for c in self._named_classes(self.reasoner.sub_classes(cls, direct))}

    def superclasses(self, cls: ClassRef, direct: bool) -> set[str]:
        """Return URIs of the direct or all superclasses of ``cls``."""
        return {c.uri for c in self._named_classes(self.reasoner.super_classes(cls, direct))}

    def is_descendant_of(self, cls: ClassRef, ancestor_uri: str) -> bool:
        """Return True if ``ancestor_uri`` is among the transitive superclasses of ``cls``."""
        for expression in self.reasoner.super_classes(cls, False).flattened():
            if not expression.is_anonymous and expression.uri == ancestor_uri:
                return True
        return False

    def child_labels(
        self,
        cls: ClassRef,
        direct: bool,
        labels: LabelCache,
        organizational_class_uri: str | None = None,
    ) -> set[str]:
        """Return the labels of the subclasses of ``cls``.

        Classes annotated with ``organizational_class_uri`` (by default the
        resolver's configured one) are skipped.
        """
        return self._labels_of(self.reasoner.sub_classes(cls, direct), labels, organizational_class_uri)

    def parent_labels(
        self,
        cls: ClassRef,
        direct: bool,
        labels: LabelCache,
        organizational_class_uri: str | None = None,
    ) -> set[str]:
        """Return the labels of the superclasses of ``cls``.

        Classes annotated with ``organizational_class_uri`` (by default the
        resolver's configured one) are skipped.
        """
        return self._labels_of(self.reasoner.super_classes(cls, direct), labels, organizational_class_uri)

    def _labels_of(
        self,
        node_set: NodeSet,
        labels: LabelCache,
        organizational_class_uri: str | None,
    ) -> set[str]:
        marker = organizational_class_uri or self.organizational_class_uri
        found: set[str] = set()
        for named in self._named_classes(node_set):
            if marker and labels.annotations(named.uri, marker):
                continue
            found.update(labels.labels(named.uri))
        return found

    def child_hierarchy(self, cls: ClassRef, labels: LabelCache) -> list[HierarchyNode]:
        """Return the tree of subclasses below ``cls``.

        A class already on the path from the root is not expanded again, so
        cyclic hierarchies produce a finite tree.
        """
        return [self._build_node(child, labels, {cls}) for child in self._direct_children(cls)]

    def _direct_children(self, cls: ClassRef) -> list[ClassRef]:
        return sorted(self._named_classes(self.reasoner.sub_classes(cls, True)), key=lambda c: c.uri)

    def _build_node(self, cls: ClassRef, labels: LabelCache, path: set[ClassRef]) -> HierarchyNode:
        class_labels = sorted(labels.labels(cls.uri))
        children = [
            self._build_node(child, labels, path | {cls})
            for child in self._direct_children(cls)
            if child not in path and child != cls
        ]
        # size is set last, once every child subtree is complete
        return HierarchyNode(
            uri=cls.uri,
            label=class_labels[0] if class_labels else "",
            children=children,
            size=1 + sum(child.size for child in children),
        )
