#!/usr/bin/env python3
"""Resolve free-text citations with FreeCite and export the records."""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from citeparse.core.config import load_config
from citeparse.exporters import export_all
from citeparse.search.freecite import (
    DESCRIPTION,
    FILE_EXTENSIONS,
    FILE_TYPE,
    NAME,
    import_entries,
    import_file,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("freecite")


def run_freecite(
    text: str | None,
    file_path: str | None,
    config_path: str | None,
    output_dir: str,
) -> int:
    """Import citations and write exports. Returns a process exit code."""
    t_start = time.time()

    config = load_config(config_path)
    logger.info("Importer %s (%s), endpoint: %s", NAME, FILE_TYPE, config.endpoint)

    if file_path:
        if Path(file_path).suffix.lower() not in FILE_EXTENSIONS:
            logger.warning(
                "%s does not look like a citation file (expected %s)",
                file_path,
                ", ".join(FILE_EXTENSIONS),
            )
        logger.info("Reading citations from %s", file_path)
        result = import_file(file_path, config)
    else:
        result = import_entries(text, config)

    if not result.ok:
        logger.error(
            "Import failed (%s): %s",
            result.failure.value,
            result.error_message or "no details",
        )
        return 1

    if not result.records:
        logger.info("FreeCite returned no citations, nothing to export.")
        return 0

    paths = export_all(result.records, output_dir)
    elapsed = time.time() - t_start

    summary = {
        "records": len(result.records),
        "by_type": _count_types(result),
        "files": paths,
        "elapsed": round(elapsed, 2),
    }
    print(json.dumps(summary, indent=2))
    return 0


def _count_types(result) -> dict:
    counts: dict[str, int] = {}
    for rec in result.records:
        counts[rec.entry_type.value] = counts.get(rec.entry_type.value, 0) + 1
    return counts


# ── CLI ──────────────────────────────────────────────────────────────


def main():
    parser = argparse.ArgumentParser(description=DESCRIPTION)
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Citation text to resolve")
    source.add_argument("--file", help="Path to a UTF-8 text file of citations")
    parser.add_argument("--config", default=None, help="Path to service config YAML file")
    parser.add_argument(
        "--output-dir",
        default="exports",
        help="Directory for .bib and .json output",
    )
    args = parser.parse_args()

    sys.exit(run_freecite(args.text, args.file, args.config, args.output_dir))


if __name__ == "__main__":
    main()
