"""Structural reasoner over the told class hierarchy.

Answers sub/superclass queries using only asserted named subclass-of axioms,
without any logical inference. Transitive queries walk the hierarchy
breadth-first with a visited set, so cyclic hierarchies terminate.

Following the usual structural reasoner conventions, the bottom class
``owl:Nothing`` is reported as a subclass of every class in transitive
queries and as the only direct subclass of leaf classes. The top class is
not added to superclass answers.
"""

from collections import deque
from typing import Callable

from rdflib.namespace import OWL

from ontoindex.model import ClassRef, NodeSet
from ontoindex.ontology.interfaces import OntologyStoreInterface, ReasonerInterface

OWL_NOTHING = ClassRef(uri=str(OWL.Nothing))


class StructuralReasoner(ReasonerInterface):
    """Told-hierarchy reasoner over any OntologyStoreInterface.

    The subclass index is built on first use from the store's class
    enumeration; the store is assumed not to change afterwards.
    """

    def __init__(self, store: OntologyStoreInterface) -> None:
        self.store = store
        self._children: dict[ClassRef, list[ClassRef]] | None = None

    def _told_parents(self, cls: ClassRef) -> list[ClassRef]:
        parents: list[ClassRef] = []
        for expression in self.store.superclass_expressions(cls):
            if isinstance(expression, ClassRef) and expression != cls and expression not in parents:
                parents.append(expression)
        return parents

    def _told_children(self, cls: ClassRef) -> list[ClassRef]:
        if self._children is None:
            children: dict[ClassRef, list[ClassRef]] = {}
            for candidate in self.store.classes():
                for parent in self._told_parents(candidate):
                    children.setdefault(parent, []).append(candidate)
            self._children = children
        return list(self._children.get(cls, ()))

    @staticmethod
    def _closure(start: ClassRef, step: Callable[[ClassRef], list[ClassRef]]) -> list[ClassRef]:
        seen = {start}
        found: list[ClassRef] = []
        queue = deque(step(start))
        while queue:
            current = queue.popleft()
            if current in seen:
                continue
            seen.add(current)
            found.append(current)
            queue.extend(step(current))
        return found

    def super_classes(self, cls: ClassRef, direct: bool) -> NodeSet:
        if direct:
            return NodeSet.of(*self._told_parents(cls))
        return NodeSet.of(*self._closure(cls, self._told_parents))

    def sub_classes(self, cls: ClassRef, direct: bool) -> NodeSet:
        if direct:
            children = self._told_children(cls)
            return NodeSet.of(*children) if children else NodeSet.of(OWL_NOTHING)
        return NodeSet.of(*self._closure(cls, self._told_children), OWL_NOTHING)
