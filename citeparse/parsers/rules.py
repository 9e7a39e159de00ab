"""Element classification table for FreeCite citation responses.

Maps each element name found inside a ``<citation>`` to the action the
interpreter takes. Names not in the table fall through to ``DEFAULT_RULE``,
which keeps them as ``name:value`` lines in the note field.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from citeparse.core.entry import EntryType, StandardField


class FieldAction(str, Enum):
    STORE = "store"
    TYPE_SIGNAL = "type_signal"
    AUTHORS = "authors"
    STRIP_PREFIX = "strip_prefix"
    IGNORE = "ignore"
    NOTE = "note"


class FieldRule(BaseModel):
    """How one element is consumed."""

    model_config = ConfigDict(frozen=True)

    action: FieldAction
    target: Optional[StandardField] = None
    entry_type: Optional[EntryType] = None
    prefix: str = ""


BOOKTITLE_PREFIX = "In "

DEFAULT_RULE = FieldRule(action=FieldAction.NOTE)

_VERBATIM = (
    StandardField.DOI,
    StandardField.INSTITUTION,
    StandardField.LOCATION,
    StandardField.NUMBER,
    StandardField.NOTE,
    StandardField.TITLE,
    StandardField.PAGES,
    StandardField.PUBLISHER,
    StandardField.VOLUME,
    StandardField.YEAR,
)

FIELD_RULES: dict[str, FieldRule] = {
    **{f.value: FieldRule(action=FieldAction.STORE, target=f) for f in _VERBATIM},
    "authors": FieldRule(action=FieldAction.AUTHORS, target=StandardField.AUTHOR),
    # a journal is the strongest hint that the citation is an article
    "journal": FieldRule(
        action=FieldAction.TYPE_SIGNAL,
        target=StandardField.JOURNAL,
        entry_type=EntryType.ARTICLE,
    ),
    # FreeCite puts the report number in <tech>
    "tech": FieldRule(
        action=FieldAction.TYPE_SIGNAL,
        target=StandardField.NUMBER,
        entry_type=EntryType.TECH_REPORT,
    ),
    "booktitle": FieldRule(
        action=FieldAction.STRIP_PREFIX,
        target=StandardField.BOOKTITLE,
        prefix=BOOKTITLE_PREFIX,
    ),
    # echo of the submitted text
    "raw_string": FieldRule(action=FieldAction.IGNORE),
}


def classify(name: str) -> FieldRule:
    """Return the rule for an element's local name (case-insensitive)."""
    return FIELD_RULES.get(name.lower(), DEFAULT_RULE)
