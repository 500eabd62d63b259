"""Indexer configuration models and TOML loading.

When ``load_indexer_config`` is given a path, only that file is read.
Otherwise the config file is looked up in order:
  1. Path in the ONTOINDEX_CONFIG env var (if set)
  2. ontoindex.toml in the current working directory

Example::

    output_dir = "out"

    [ontologies.efo]
    access_uri = "file:///data/efo.owl"
    ignore_uris = ["http://www.ebi.ac.uk/efo/organizational_class"]

    [[ontologies.efo.plugins]]
    class_path = "mypackage.plugins:MyPlugin"
"""

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from rdflib.namespace import RDFS

from ontoindex.errors import ConfigError

DEFAULT_BATCH_SIZE = 1000
DEFAULT_LABEL_URI = str(RDFS.label)
DEFAULT_SYNONYM_URI = "http://www.geneontology.org/formats/oboInOwl#hasExactSynonym"
DEFAULT_DEFINITION_URI = "http://purl.obolibrary.org/obo/IAO_0000115"
CONFIG_ENV_VAR = "ONTOINDEX_CONFIG"
CONFIG_FILE_NAME = "ontoindex.toml"


class PluginConfig(BaseModel, frozen=True):
    """One entry plugin, loaded from a ``module:ClassName`` path.

    Attributes:
        class_path: Import path of the plugin class.
        enabled: Disabled plugins are skipped when loading.
        options: Keyword arguments passed to the plugin constructor.
    """

    class_path: str = Field(..., pattern=r"^[\w.]+:\w+$")
    enabled: bool = True
    options: dict[str, Any] = Field(default_factory=dict)


class OntologyConfig(BaseModel, frozen=True):
    """Settings for indexing a single ontology.

    Attributes:
        access_uri: Where rdflib should read the ontology from (URL or file path).
        format: Optional rdflib format hint ("xml", "turtle", ...).
        ignore_uris: Classes descending from any of these are not indexed.
        label_annotation_uri: Annotation property holding labels.
        synonym_annotation_uri: Annotation property holding synonyms.
        definition_annotation_uri: Annotation property holding definitions.
        organizational_class_uri: Annotation marking organizational classes,
            which are left out of hierarchy label lookups.
        batch_size: Number of entries per storage flush.
        plugins: Entry plugins, run in order for every built entry.
    """

    access_uri: str | None = None
    format: str | None = None
    ignore_uris: tuple[str, ...] = ()
    label_annotation_uri: str = DEFAULT_LABEL_URI
    synonym_annotation_uri: str = DEFAULT_SYNONYM_URI
    definition_annotation_uri: str = DEFAULT_DEFINITION_URI
    organizational_class_uri: str | None = None
    batch_size: int = Field(DEFAULT_BATCH_SIZE, gt=0, description="Entries per storage flush")
    plugins: tuple[PluginConfig, ...] = ()


class IndexerConfig(BaseModel, frozen=True):
    """Top-level configuration: the ontologies to index, keyed by source key."""

    ontologies: dict[str, OntologyConfig] = Field(default_factory=dict)
    output_dir: Path = Path("ontoindex-output")


def _config_paths(path: Path | None) -> list[Path]:
    """Return paths to check for the config file (first existing wins)."""
    if path is not None:
        return [path]
    paths: list[Path] = []
    if os.environ.get(CONFIG_ENV_VAR):
        paths.append(Path(os.environ[CONFIG_ENV_VAR]))
    paths.append(Path.cwd() / CONFIG_FILE_NAME)
    return paths


def load_indexer_config(path: Path | None = None) -> IndexerConfig:
    """Load and validate the indexer configuration.

    Raises:
        ConfigError: If no config file exists, it is not valid TOML, or it
            fails validation.
    """
    candidates = _config_paths(path)
    for candidate in candidates:
        if candidate.is_file():
            break
    else:
        raise ConfigError(f"No configuration file found (tried {', '.join(str(p) for p in candidates)})")

    try:
        with open(candidate, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Could not read {candidate}: {e}") from e

    try:
        return IndexerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {candidate}: {e}") from e
