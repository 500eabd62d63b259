"""Entry plugins: augmentation hooks run on every built entry.

Plugins run after an entry is built and before it is batched for storage,
so they can add fields derived from outside the ontology (external ids,
extra synonyms, ...) without touching the traversal logic.

Entries are frozen, so a plugin returns a changed copy:

    ```python
    class UpperCaseLabels(EntryPluginInterface):
        async def process(self, entry, source_key, config):
            labels = tuple(label.upper() for label in entry.labels)
            return entry.model_copy(update={"labels": labels})
    ```

A plugin that fails raises ``PluginError``; the indexer logs it and stores
the entry without any plugin changes.
"""

import importlib
import logging
from abc import ABC, abstractmethod
from typing import Sequence

from ontoindex.config import OntologyConfig, PluginConfig
from ontoindex.errors import ConfigError, PluginError
from ontoindex.model import OntologyEntry

logger = logging.getLogger(__name__)


class EntryPluginInterface(ABC):
    """Interface for plugins that augment ontology entries."""

    @abstractmethod
    async def process(self, entry: OntologyEntry, source_key: str, config: OntologyConfig) -> OntologyEntry:
        """Augment one entry.

        Args:
            entry: The entry as built from the ontology (or as returned by
                the previous plugin).
            source_key: Key of the ontology being indexed.
            config: Configuration of the ontology being indexed.

        Returns:
            The entry to store, usually ``entry.model_copy(update=...)``.

        Raises:
            PluginError: If the entry cannot be processed.
        """


class PluginManager:
    """Runs entry plugins in order.

    Any exception escaping a plugin is reported as ``PluginError`` naming the
    plugin and the entry URI.
    """

    def __init__(self, plugins: Sequence[EntryPluginInterface] = ()) -> None:
        self.plugins = list(plugins)

    @classmethod
    def from_config(cls, plugin_configs: Sequence[PluginConfig]) -> "PluginManager":
        """Instantiate the enabled plugins from their ``module:Class`` paths.

        Raises:
            ConfigError: If a plugin class cannot be imported or constructed,
                or does not implement EntryPluginInterface.
        """
        plugins: list[EntryPluginInterface] = []
        for plugin_config in plugin_configs:
            if not plugin_config.enabled:
                logger.debug("Skipping disabled plugin %s", plugin_config.class_path)
                continue
            module_name, class_name = plugin_config.class_path.split(":", 1)
            try:
                plugin_class = getattr(importlib.import_module(module_name), class_name)
                plugin = plugin_class(**plugin_config.options)
            except (ImportError, AttributeError, TypeError) as e:
                raise ConfigError(f"Could not load plugin {plugin_config.class_path}: {e}") from e
            if not isinstance(plugin, EntryPluginInterface):
                raise ConfigError(f"{plugin_config.class_path} is not an EntryPluginInterface")
            plugins.append(plugin)
        return cls(plugins)

    async def process_entry(self, entry: OntologyEntry, source_key: str, config: OntologyConfig) -> OntologyEntry:
        """Run every plugin on ``entry`` and return the final entry.

        Raises:
            PluginError: If any plugin fails; later plugins are not run.
        """
        for plugin in self.plugins:
            try:
                result = await plugin.process(entry, source_key, config)
            except PluginError:
                raise
            except Exception as e:
                raise PluginError(f"{type(plugin).__name__} failed on {entry.uri}: {e}") from e
            if not isinstance(result, OntologyEntry):
                raise PluginError(
                    f"{type(plugin).__name__} returned {type(result).__name__} instead of an entry for {entry.uri}"
                )
            entry = result
        return entry
