"""Label cache for annotation lookups.

Labels are looked up many times during one indexing run: once for every
class entry, and again every time the class or property shows up as a
restriction filler or relation name. The cache memoizes
``(annotation property, IRI) -> values`` for the lifetime of a run.

The cache is monotonic and never evicted; its key space is bounded by the
ontology's signature. Reads and writes go through a lock so entries can be
built from worker threads. Two threads racing on the same miss may both
query the store; the second write stores the same value and is harmless.
"""

import threading

from rdflib.namespace import RDFS

from ontoindex.ontology.interfaces import OntologyStoreInterface


class LabelCache:
    """Memoizing view of an ontology store's literal annotations.

    Example:
        ```python
        cache = LabelCache(store)
        cache.labels("http://example.org/Dog")  # queries the store
        cache.labels("http://example.org/Dog")  # served from the cache
        ```
    """

    def __init__(self, store: OntologyStoreInterface, label_property: str = str(RDFS.label)) -> None:
        """Initialize an empty cache.

        Args:
            store: Store answering annotation lookups on a miss.
            label_property: Annotation property used by ``labels()``.
        """
        self.store = store
        self.label_property = label_property
        self._cache: dict[tuple[str, str], frozenset[str]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def labels(self, iri: str) -> frozenset[str]:
        """Return the labels of ``iri`` under the configured label property."""
        return self.annotations(iri, self.label_property)

    def annotations(self, iri: str, property_uri: str) -> frozenset[str]:
        """Return the literal values of ``property_uri`` annotations on ``iri``.

        Only the first call for a given pair queries the store.
        """
        key = (property_uri, str(iri))
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._hits += 1
                return cached
            self._misses += 1

        values = frozenset(self.store.annotation_values(str(iri), property_uri))

        with self._lock:
            return self._cache.setdefault(key, values)

    def get_stats(self) -> dict[str, int]:
        """Return ``hits``, ``misses`` and ``size`` counters."""
        with self._lock:
            return {"hits": self._hits, "misses": self._misses, "size": len(self._cache)}

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, iri: object) -> bool:
        with self._lock:
            return (self.label_property, str(iri)) in self._cache
