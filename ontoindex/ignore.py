"""Exclusion of classes that descend from configured ignore URIs."""

import logging
from typing import Iterable
from urllib.parse import urlparse

from ontoindex.hierarchy import HierarchyResolver
from ontoindex.model import ClassRef

logger = logging.getLogger(__name__)


def _is_absolute_uri(uri: str) -> bool:
    parsed = urlparse(uri)
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


class IgnoreFilter:
    """Decides whether a class is left out of the index.

    A class is ignored when any of the ignore URIs is one of its transitive
    superclasses. Ignore URIs that are not absolute URIs are logged and
    dropped.
    """

    def __init__(self, resolver: HierarchyResolver, ignore_uris: Iterable[str] | None = None) -> None:
        self.resolver = resolver
        self.ignore_uris: list[str] = []
        for uri in ignore_uris or ():
            if _is_absolute_uri(uri):
                self.ignore_uris.append(uri)
            else:
                logger.error("Ignoring invalid ignore URI: %r", uri)

    def should_ignore(self, cls: ClassRef) -> bool:
        return any(self.resolver.is_descendant_of(cls, uri) for uri in self.ignore_uris)
