"""Tests for record, event, and result models."""

import pytest
from pydantic import ValidationError

from citeparse.core.entry import (
    DEFAULT_ENTRY_TYPE,
    BibliographyRecord,
    EntryType,
    StandardField,
    field_name,
)
from citeparse.parsers.models import FailureKind, ParserResult, XmlEvent


# ── BibliographyRecord ───────────────────────────────────────────────


def test_record_defaults_to_inproceedings():
    rec = BibliographyRecord()
    assert rec.entry_type == DEFAULT_ENTRY_TYPE == EntryType.IN_PROCEEDINGS
    assert rec.fields == {}


def test_record_accessors_accept_enum_or_string():
    rec = BibliographyRecord(entry_type=EntryType.ARTICLE, fields={"title": "T", "foo": "x"})
    assert rec.get(StandardField.TITLE) == "T"
    assert rec.get("foo") == "x"
    assert rec.get("year") is None
    assert rec.has_field(StandardField.TITLE)
    assert not rec.has_field(StandardField.YEAR)


def test_record_is_frozen():
    rec = BibliographyRecord()
    with pytest.raises(ValidationError):
        rec.entry_type = EntryType.ARTICLE


def test_entry_type_from_string():
    rec = BibliographyRecord.model_validate({"entry_type": "techreport"})
    assert rec.entry_type == EntryType.TECH_REPORT


def test_record_fields_are_read_only():
    source = {"title": "T"}
    rec = BibliographyRecord(fields=source)
    with pytest.raises(TypeError):
        rec.fields["title"] = "mutated"
    with pytest.raises(TypeError):
        del rec.fields["title"]
    source["title"] = "changed after construction"
    assert rec.get("title") == "T"


def test_record_dump_gives_plain_dict():
    rec = BibliographyRecord(entry_type=EntryType.MISC, fields={"year": "2004"})
    assert rec.model_dump(mode="json") == {"entry_type": "misc", "fields": {"year": "2004"}}
    assert BibliographyRecord.model_validate(rec.model_dump()) == rec


def test_field_name():
    assert field_name(StandardField.DOI) == "doi"
    assert field_name("custom") == "custom"


# ── XmlEvent ─────────────────────────────────────────────────────────


def test_event_predicates():
    start = XmlEvent(kind="start", name="citation")
    assert start.is_start()
    assert start.is_start("citation")
    assert not start.is_start("author")
    assert not start.is_end()
    assert XmlEvent(kind="text", text=" \n ").is_whitespace()
    assert not XmlEvent(kind="text", text="x").is_whitespace()


def test_event_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        XmlEvent(kind="comment")


# ── ParserResult ─────────────────────────────────────────────────────


def test_result_ok_by_default():
    result = ParserResult()
    assert result.ok
    assert result.failure == FailureKind.NONE


def test_result_from_error():
    result = ParserResult.from_error(FailureKind.SERVICE_UNAVAILABLE, "down")
    assert not result.ok
    assert result.records == []
    assert result.error_message == "down"
