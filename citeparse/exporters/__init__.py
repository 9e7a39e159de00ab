"""Export convenience function."""

import logging
from pathlib import Path

from citeparse.core.entry import BibliographyRecord
from citeparse.exporters.bibtex import export_bibtex
from citeparse.exporters.json_export import export_json

logger = logging.getLogger(__name__)


def export_all(
    records: list[BibliographyRecord],
    output_dir: str,
    basename: str = "citations",
) -> dict:
    """Run all exports and return dict of file paths created."""
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    paths = {}

    bib_path = str(out / f"{basename}.bib")
    export_bibtex(records, bib_path)
    paths["bibtex"] = bib_path

    json_path = str(out / f"{basename}.json")
    export_json(records, json_path)
    paths["json"] = json_path

    logger.info("All exports written to %s", output_dir)
    return paths
