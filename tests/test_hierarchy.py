"""Tests for the StructuralReasoner and HierarchyResolver."""

from ontoindex.hierarchy import HierarchyResolver
from ontoindex.labels import LabelCache
from ontoindex.model import AnonymousClassExpression, ClassRef, NodeSet
from ontoindex.ontology.interfaces import ReasonerInterface
from ontoindex.ontology.memory import InMemoryOntologyStore
from ontoindex.ontology.reasoner import OWL_NOTHING, StructuralReasoner

from tests.conftest import uri

ORGANIZATIONAL = "http://www.ebi.ac.uk/efo/organizational_class"


def ref(name: str) -> ClassRef:
    return ClassRef(uri=uri(name))


class NoisyReasoner(ReasonerInterface):
    """Reasoner whose answers mix named classes with anonymous nodes and the bottom class."""

    def sub_classes(self, cls: ClassRef, direct: bool) -> NodeSet:
        return NodeSet.of(ref("Dog"), AnonymousClassExpression(description="unionOf"), OWL_NOTHING, ref("Dog"))

    def super_classes(self, cls: ClassRef, direct: bool) -> NodeSet:
        return NodeSet.of(AnonymousClassExpression(), ref("Animal"))


class TestStructuralReasoner:
    """Told-hierarchy answers, including the bottom-class conventions."""

    def test_direct_superclasses(self, animal_store: InMemoryOntologyStore) -> None:
        """Test that restrictions are not reported as superclasses."""
        reasoner = StructuralReasoner(animal_store)

        assert reasoner.super_classes(ref("Dog"), True).flattened() == [ref("Animal")]

    def test_leaf_direct_subclass_is_nothing(self, animal_store: InMemoryOntologyStore) -> None:
        """Test that a leaf's only direct subclass is owl:Nothing."""
        reasoner = StructuralReasoner(animal_store)

        assert reasoner.sub_classes(ref("Dog"), True).flattened() == [OWL_NOTHING]

    def test_transitive_subclasses_include_nothing(self, animal_store: InMemoryOntologyStore) -> None:
        """Test that owl:Nothing is part of every transitive subclass answer."""
        reasoner = StructuralReasoner(animal_store)

        found = reasoner.sub_classes(ref("Animal"), False).flattened()

        assert set(found) == {ref("Dog"), ref("Cat"), OWL_NOTHING}

    def test_cyclic_superclasses_terminate(self) -> None:
        """Test that a subclass cycle yields a finite closure without the class itself."""
        store = InMemoryOntologyStore()
        a, b = store.add_class(uri("A")), store.add_class(uri("B"))
        store.add_subclass_of(a, b)
        store.add_subclass_of(b, a)

        reasoner = StructuralReasoner(store)

        assert reasoner.super_classes(a, False).flattened() == [b]
        assert set(reasoner.sub_classes(a, False).flattened()) == {b, OWL_NOTHING}


class TestHierarchyResolver:
    """URI sets and label lookups over the reasoner's node-sets."""

    def test_filters_anonymous_and_nothing(self) -> None:
        """Test that anonymous expressions and owl:Nothing never reach callers."""
        resolver = HierarchyResolver(NoisyReasoner())

        assert resolver.subclasses(ref("Animal"), direct=True) == {uri("Dog")}
        assert resolver.superclasses(ref("Dog"), direct=True) == {uri("Animal")}

    def test_leaf_has_no_subclasses(self, resolver: HierarchyResolver) -> None:
        """Test that a leaf class has empty direct and transitive subclass sets."""
        assert resolver.subclasses(ref("Dog"), direct=True) == set()
        assert resolver.subclasses(ref("Dog"), direct=False) == set()

    def test_direct_is_subset_of_transitive(self) -> None:
        """Test direct answers are contained in transitive ones on a three-level tree."""
        store = InMemoryOntologyStore()
        animal, mammal, dog = (store.add_class(uri(n)) for n in ("Animal", "Mammal", "Dog"))
        store.add_subclass_of(mammal, animal)
        store.add_subclass_of(dog, mammal)
        resolver = HierarchyResolver(StructuralReasoner(store))

        assert resolver.subclasses(animal, direct=True) == {uri("Mammal")}
        assert resolver.subclasses(animal, direct=False) == {uri("Mammal"), uri("Dog")}
        assert resolver.superclasses(dog, direct=True) == {uri("Mammal")}
        assert resolver.superclasses(dog, direct=False) == {uri("Mammal"), uri("Animal")}

    def test_is_descendant_of(self, resolver: HierarchyResolver) -> None:
        """Test transitive ancestry checks; a class is not its own descendant."""
        assert resolver.is_descendant_of(ref("Dog"), uri("Animal"))
        assert not resolver.is_descendant_of(ref("Dog"), uri("Cat"))
        assert not resolver.is_descendant_of(ref("Animal"), uri("Animal"))

    def test_child_and_parent_labels(self, resolver: HierarchyResolver, label_cache: LabelCache) -> None:
        """Test label lookups of direct children and parents."""
        assert resolver.child_labels(ref("Animal"), True, label_cache) == {"dog", "cat"}
        assert resolver.parent_labels(ref("Dog"), True, label_cache) == {"animal"}

    def test_labels_skip_organizational_classes(self) -> None:
        """Test that classes carrying the organizational annotation are left out."""
        store = InMemoryOntologyStore()
        root = store.add_class(uri("Root"), labels=["root"])
        group = store.add_class(uri("Group"), labels=["grouping"])
        leaf = store.add_class(uri("Leaf"), labels=["leaf"])
        store.add_subclass_of(group, root)
        store.add_subclass_of(leaf, group)
        store.add_annotation(group.uri, ORGANIZATIONAL, "true")
        resolver = HierarchyResolver(StructuralReasoner(store))
        labels = LabelCache(store)

        assert resolver.child_labels(root, False, labels, ORGANIZATIONAL) == {"leaf"}
        assert resolver.parent_labels(leaf, False, labels, ORGANIZATIONAL) == {"root"}
        assert resolver.parent_labels(leaf, False, labels) == {"root", "grouping"}

    def test_configured_organizational_marker_is_default(self) -> None:
        """Test that a resolver built with the marker skips organizational classes without being told again."""
        store = InMemoryOntologyStore()
        root = store.add_class(uri("Root"), labels=["root"])
        group = store.add_class(uri("Group"), labels=["grouping"])
        leaf = store.add_class(uri("Leaf"), labels=["leaf"])
        store.add_subclass_of(group, root)
        store.add_subclass_of(leaf, group)
        store.add_annotation(group.uri, ORGANIZATIONAL, "true")
        resolver = HierarchyResolver(StructuralReasoner(store), organizational_class_uri=ORGANIZATIONAL)
        labels = LabelCache(store)

        assert resolver.child_labels(root, True, labels) == set()
        assert resolver.child_labels(root, False, labels) == {"leaf"}
        assert resolver.parent_labels(leaf, False, labels) == {"root"}

    def test_child_hierarchy(self, resolver: HierarchyResolver, label_cache: LabelCache) -> None:
        """Test the subtree below a class, sorted by URI, with sizes."""
        tree = resolver.child_hierarchy(ref("Animal"), label_cache)

        assert [node.uri for node in tree] == [uri("Cat"), uri("Dog")]
        assert [node.label for node in tree] == ["cat", "dog"]
        assert all(node.size == 1 and node.children == [] for node in tree)

    def test_child_hierarchy_sizes_and_cycles(self) -> None:
        """Test subtree sizes and that a cycle back to an ancestor is not expanded."""
        store = InMemoryOntologyStore()
        root, mid, leaf = (store.add_class(uri(n)) for n in ("Root", "Mid", "Leaf"))
        store.add_subclass_of(mid, root)
        store.add_subclass_of(leaf, mid)
        store.add_subclass_of(root, leaf)
        resolver = HierarchyResolver(StructuralReasoner(store))

        tree = resolver.child_hierarchy(root, LabelCache(store))

        assert len(tree) == 1
        assert tree[0].uri == uri("Mid")
        assert tree[0].size == 2
        assert [child.uri for child in tree[0].children] == [uri("Leaf")]
        assert tree[0].children[0].children == []
