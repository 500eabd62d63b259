"""Command line entry point: index the ontologies listed in a config file.

Usage:
    ontoindex --config ontoindex.toml
    ontoindex --config ontoindex.toml --source efo --output-dir out/

Each ontology is written to ``<output_dir>/<source>.jsonl``. The exit status
is 1 if any ontology failed to load or index.
"""

import argparse
import asyncio
import logging
from pathlib import Path

from ontoindex.config import IndexerConfig, load_indexer_config
from ontoindex.errors import ConfigError, OntologyIndexingError
from ontoindex.indexer import IndexerState, IndexingResult, OntologyIndexer
from ontoindex.logging import PprintLogger, setup_logging
from ontoindex.storage.jsonl import JsonLinesEntryStorage

logger = PprintLogger(logging.getLogger(__name__))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ontoindex",
        description="Index OWL ontologies into flattened, search-ready JSON Lines entries",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to the TOML configuration file")
    parser.add_argument("--source", action="append", default=None, help="Only index this source key (repeatable)")
    parser.add_argument("--output-dir", type=Path, default=None, help="Override the configured output directory")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


async def run(config: IndexerConfig, sources: list[str] | None = None, output_dir: Path | None = None) -> list[IndexingResult]:
    """Index the selected ontologies one after another.

    Ontologies that fail to load are logged and reported as failed results;
    the remaining ontologies are still indexed.
    """
    out = output_dir or config.output_dir
    results: list[IndexingResult] = []

    for source_key, ontology_config in config.ontologies.items():
        if sources and source_key not in sources:
            continue
        storage = JsonLinesEntryStorage(out / f"{source_key}.jsonl")
        try:
            indexer = OntologyIndexer.from_config(source_key, ontology_config, storage)
            result = await indexer.index_ontology()
        except OntologyIndexingError as e:
            logger.error("Could not index %s: %s", source_key, e)
            result = IndexingResult(source_key=source_key, success=False, state=IndexerState.FAILED, entries_indexed=0, error=str(e))
        results.append(result)
        logger.info(result)

    return results


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, name="ontoindex")

    try:
        config = load_indexer_config(args.config)
    except ConfigError as e:
        logger.error(str(e))
        return 2

    unknown = set(args.source or ()) - set(config.ontologies)
    if unknown:
        logger.error("Unknown source keys: %s", ", ".join(sorted(unknown)))
        return 2

    results = asyncio.run(run(config, args.source, args.output_dir))
    return 0 if all(result.success for result in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
