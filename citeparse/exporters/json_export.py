"""JSON export of resolved citation records."""

import json
import logging

from citeparse.core.entry import BibliographyRecord

logger = logging.getLogger(__name__)


def records_to_json(records: list[BibliographyRecord]) -> list[dict]:
    return [r.model_dump(mode="json") for r in records]


def export_json(records: list[BibliographyRecord], output_path: str) -> None:
    """Write records as a JSON list of {entry_type, fields} objects."""
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(records_to_json(records), f, indent=2, ensure_ascii=False)
        f.write("\n")

    logger.info("JSON exported to %s (%d records)", output_path, len(records))
