"""Bibliography entry model: entry types, known fields, and records."""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


# ── Entry Types ──────────────────────────────────────────────────────


class EntryType(str, Enum):
    """BibTeX entry kinds a resolved citation can be assigned."""

    ARTICLE = "article"
    BOOK = "book"
    IN_COLLECTION = "incollection"
    IN_PROCEEDINGS = "inproceedings"
    MASTERS_THESIS = "mastersthesis"
    MISC = "misc"
    PHD_THESIS = "phdthesis"
    TECH_REPORT = "techreport"


DEFAULT_ENTRY_TYPE = EntryType.IN_PROCEEDINGS


# ── Fields ───────────────────────────────────────────────────────────


class StandardField(str, Enum):
    """Field names mapped onto canonical bibliographic attributes."""

    AUTHOR = "author"
    BOOKTITLE = "booktitle"
    DOI = "doi"
    INSTITUTION = "institution"
    JOURNAL = "journal"
    LOCATION = "location"
    NOTE = "note"
    NUMBER = "number"
    PAGES = "pages"
    PUBLISHER = "publisher"
    TITLE = "title"
    VOLUME = "volume"
    YEAR = "year"


def field_name(field: StandardField | str) -> str:
    """Plain string key for a known or unknown field."""
    if isinstance(field, StandardField):
        return field.value
    return field


# ── Record ───────────────────────────────────────────────────────────


class BibliographyRecord(BaseModel):
    """One resolved citation: an entry type plus its field map.

    ``fields`` is a read-only view; build a new record to change it.
    """

    model_config = ConfigDict(frozen=True)

    entry_type: EntryType = DEFAULT_ENTRY_TYPE
    fields: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    @field_validator("fields", mode="after")
    @classmethod
    def read_only_fields(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(v))

    @field_serializer("fields")
    def serialize_fields(self, v: Mapping[str, str]) -> dict[str, str]:
        return dict(v)

    def get(self, field: StandardField | str) -> Optional[str]:
        return self.fields.get(field_name(field))

    def has_field(self, field: StandardField | str) -> bool:
        return field_name(field) in self.fields
