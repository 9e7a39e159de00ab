"""BibTeX export of resolved citation records."""

import logging
import re
from string import ascii_lowercase

from citeparse.core.entry import BibliographyRecord, StandardField

logger = logging.getLogger(__name__)

_LEADING_FIELDS = (StandardField.AUTHOR.value, StandardField.TITLE.value)
_KEY_CHARS_RE = re.compile(r"[^A-Za-z0-9]")


# ── Keys ─────────────────────────────────────────────────────────────


def citation_key(record: BibliographyRecord) -> str:
    """First author's surname followed by the year, e.g. ``Smith2004``."""
    surname = ""
    authors = record.get(StandardField.AUTHOR)
    if authors:
        first = authors.split(" and ")[0].strip()
        # "Smith, J." or "J. Smith"
        surname = first.split(",")[0] if "," in first else first.split()[-1]
        surname = _KEY_CHARS_RE.sub("", surname)

    year = _KEY_CHARS_RE.sub("", record.get(StandardField.YEAR) or "")
    return f"{surname or 'citation'}{year}"


def unique_keys(records: list[BibliographyRecord]) -> list[str]:
    """Citation keys for each record, suffixed a, b, ... where they collide."""
    base_keys = [citation_key(r) for r in records]
    counts: dict[str, int] = {}
    for key in base_keys:
        counts[key] = counts.get(key, 0) + 1

    seen: dict[str, int] = {}
    keys = []
    for key in base_keys:
        if counts[key] == 1:
            keys.append(key)
            continue
        n = seen.get(key, 0)
        seen[key] = n + 1
        keys.append(key + _suffix(n))
    return keys


def _suffix(n: int) -> str:
    """0 → a, 25 → z, 26 → aa."""
    letters = ""
    n += 1
    while n:
        n, rem = divmod(n - 1, 26)
        letters = ascii_lowercase[rem] + letters
    return letters


# ── Rendering ────────────────────────────────────────────────────────


def to_bibtex(record: BibliographyRecord, key: str) -> str:
    names = [f for f in _LEADING_FIELDS if f in record.fields]
    names += sorted(f for f in record.fields if f not in _LEADING_FIELDS)

    lines = [f"@{record.entry_type.value}{{{key},"]
    for name in names:
        lines.append(f"  {name} = {{{record.fields[name]}}},")
    lines.append("}")
    return "\n".join(lines)


def export_bibtex(records: list[BibliographyRecord], output_path: str) -> None:
    """Write all records to a .bib file."""
    entries = [to_bibtex(r, k) for r, k in zip(records, unique_keys(records))]
    with open(output_path, "w", encoding="utf-8") as f:
        f.write("\n\n".join(entries))
        if entries:
            f.write("\n")

    logger.info("BibTeX exported to %s (%d entries)", output_path, len(entries))
