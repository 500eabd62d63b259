"""Collection of restrictions inherited through a class's superclass axioms.

Restrictions are often declared on an ancestor rather than on the class
itself, so the visitor walks the superclass expressions of a class and, for
each named superclass, that class's own superclass expressions, and so on:

- **named class**: expanded once; later visits are skipped, which also
  stops cycles in the subclass graph
- **existential restriction** (``P some F``): recorded, filler not followed
- **universal restriction** (``P only F``): recorded separately, filler not
  followed
- **anything else**: ignored

The walk uses an explicit stack, so deep hierarchies do not hit the
recursion limit.
"""

from dataclasses import dataclass, field

from ontoindex.model import (
    ClassExpression,
    ClassRef,
    ObjectAllValuesFrom,
    ObjectSomeValuesFrom,
)
from ontoindex.ontology.interfaces import OntologyStoreInterface


@dataclass
class VisitState:
    """Working memory of one visitor run.

    Attributes:
        processed: Named classes already expanded.
        some_values: Existential restrictions found.
        all_values: Universal restrictions found. Kept for plugins and future
            use; they are not turned into relations.
        restricted_properties: Properties of the existential restrictions.
    """

    processed: set[ClassRef] = field(default_factory=set)
    some_values: set[ObjectSomeValuesFrom] = field(default_factory=set)
    all_values: set[ObjectAllValuesFrom] = field(default_factory=set)
    restricted_properties: set[str] = field(default_factory=set)


class RestrictionVisitor:
    """Walks superclass expressions and gathers restrictions.

    State accumulates across ``visit()`` calls until ``reset()``;
    ``collect()`` resets before it starts, so each top-level class gets a
    fresh processed set. A visitor must not be shared between threads.
    """

    def __init__(self, store: OntologyStoreInterface) -> None:
        self.store = store
        self.state = VisitState()

    def reset(self) -> None:
        self.state = VisitState()

    def collect(self, cls: ClassRef) -> VisitState:
        """Gather the restrictions that apply to ``cls``, inherited ones included."""
        self.reset()
        for expression in self.store.superclass_expressions(cls):
            self.visit(expression)
        return self.state

    def visit(self, expression: ClassExpression) -> None:
        """Visit one class expression, following named superclasses transitively."""
        stack: list[ClassExpression] = [expression]
        while stack:
            current = stack.pop()
            if isinstance(current, ClassRef):
                if current in self.state.processed:
                    continue
                self.state.processed.add(current)
                # reversed so axioms are expanded in declaration order
                stack.extend(reversed(self.store.superclass_expressions(current)))
            elif isinstance(current, ObjectSomeValuesFrom):
                self.state.some_values.add(current)
                self.state.restricted_properties.add(current.property_iri)
            elif isinstance(current, ObjectAllValuesFrom):
                self.state.all_values.add(current)
