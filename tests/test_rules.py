"""Tests for the element classification table."""

import pytest

from citeparse.core.entry import EntryType, StandardField
from citeparse.parsers.rules import DEFAULT_RULE, FIELD_RULES, FieldAction, classify


def test_journal_is_article_signal():
    rule = classify("journal")
    assert rule.action == FieldAction.TYPE_SIGNAL
    assert rule.entry_type == EntryType.ARTICLE
    assert rule.target == StandardField.JOURNAL


def test_tech_targets_number():
    rule = classify("tech")
    assert rule.entry_type == EntryType.TECH_REPORT
    assert rule.target == StandardField.NUMBER


def test_booktitle_strips_in_prefix():
    rule = classify("booktitle")
    assert rule.action == FieldAction.STRIP_PREFIX
    assert rule.prefix == "In "


def test_raw_string_ignored():
    assert classify("raw_string").action == FieldAction.IGNORE


def test_authors_container():
    assert classify("authors").action == FieldAction.AUTHORS


@pytest.mark.parametrize("name", ["foo", "editor", "isbn", "author"])
def test_unknown_names_fall_back_to_note(name):
    assert classify(name) is DEFAULT_RULE
    assert DEFAULT_RULE.action == FieldAction.NOTE


def test_classification_is_case_insensitive():
    assert classify("Journal") == FIELD_RULES["journal"]


def test_every_store_rule_targets_same_named_field():
    for name, rule in FIELD_RULES.items():
        if rule.action == FieldAction.STORE:
            assert rule.target.value == name


def test_every_known_field_is_reachable_from_the_table():
    targets = {rule.target for rule in FIELD_RULES.values() if rule.target is not None}
    assert targets == set(StandardField)
