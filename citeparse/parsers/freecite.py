"""FreeCite response interpreter: XML event walk → bibliography records."""

import logging
import os
from enum import Enum
from typing import IO, Iterable, Iterator, Union
from xml.etree.ElementTree import Element, ParseError, XMLPullParser

from citeparse.core.entry import DEFAULT_ENTRY_TYPE, BibliographyRecord, StandardField
from citeparse.parsers.models import (
    FailureKind,
    MalformedResponseError,
    ParserResult,
    XmlEvent,
)
from citeparse.parsers.rules import FieldAction, FieldRule, classify

logger = logging.getLogger(__name__)

ResponseSource = Union[IO, bytes, str, Iterable[bytes]]

_CHUNK_SIZE = 64 * 1024
_AUTHOR_SEPARATOR = " and "

PARSE_FAILURE_MESSAGE = "Could not parse FreeCite response."


# ── Public API ───────────────────────────────────────────────────────


def parse_response(
    source: ResponseSource,
    line_separator: str = os.linesep,
) -> ParserResult:
    """Interpret a FreeCite XML response.

    Never raises for bad input: a malformed or truncated response yields an
    empty result with ``failure`` set, and no partial records.
    """
    try:
        records = interpret_events(read_events(source), line_separator)
    except MalformedResponseError as exc:
        logger.warning("Could not parse FreeCite response: %s", exc, exc_info=True)
        return ParserResult.from_error(FailureKind.MALFORMED_RESPONSE, PARSE_FAILURE_MESSAGE)

    logger.info("Parsed %d citation(s) from FreeCite response", len(records))
    return ParserResult(records=records)


def interpret_events(
    events: Iterable[XmlEvent],
    line_separator: str = os.linesep,
) -> list[BibliographyRecord]:
    """Walk parse events and build one record per ``<citation>`` element.

    Raises MalformedResponseError when the event sequence does not have the
    expected structure.
    """
    cursor = _EventCursor(events)
    records: list[BibliographyRecord] = []
    state = _State.SCANNING
    builder: _CitationBuilder | None = None

    while cursor.current is not None:
        event = cursor.current

        if state is _State.SCANNING:
            if event.is_start("citation"):
                builder = _CitationBuilder(line_separator)
                state = _State.IN_CITATION

        elif state is _State.IN_CITATION:
            if event.is_end("citation"):
                records.append(builder.build())
                builder = None
                state = _State.SCANNING
            elif event.is_start():
                rule = classify(event.name)
                if rule.action is FieldAction.AUTHORS:
                    state = _State.IN_AUTHORS
                elif rule.action is FieldAction.IGNORE:
                    cursor.skip_element()
                else:
                    builder.apply(rule, event.name, cursor.element_text())

        elif state is _State.IN_AUTHORS:
            if event.is_start("author"):
                builder.add_author(cursor.element_text())
            elif event.is_end():
                # <author> ends are consumed by element_text, so this is </authors>
                state = _State.IN_CITATION
            elif event.is_start():
                raise MalformedResponseError(f"Unexpected <{event.name}> inside <authors>")
            elif not event.is_whitespace():
                raise MalformedResponseError(f"Unexpected text inside <authors>: {event.text!r}")

        cursor.advance()

    if state is not _State.SCANNING:
        raise MalformedResponseError("Response ended inside a <citation> element")
    return records


def read_events(source: ResponseSource) -> Iterator[XmlEvent]:
    """Yield start/text/end events from an XML document, chunk by chunk.

    Element names are reduced to their local part. Raises
    MalformedResponseError on ill-formed XML or a read error.
    """
    parser = XMLPullParser(events=("start", "end"))
    buffer = _TreeEventBuffer(parser)
    try:
        for chunk in _iter_chunks(source):
            parser.feed(chunk)
            yield from buffer.drain()
        parser.close()
        yield from buffer.drain()
    except ParseError as exc:
        raise MalformedResponseError(f"Ill-formed XML: {exc}") from exc
    except OSError as exc:
        raise MalformedResponseError(f"Read error while parsing: {exc}") from exc


# ── Event Stream ─────────────────────────────────────────────────────


def _iter_chunks(source: ResponseSource) -> Iterator[bytes | str]:
    if isinstance(source, (bytes, str)):
        yield source
        return
    if not hasattr(source, "read"):
        # already an iterable of chunks, e.g. Response.iter_content()
        yield from source
        return
    while True:
        chunk = source.read(_CHUNK_SIZE)
        if not chunk:
            return
        yield chunk


class _TreeEventBuffer:
    """Turns XMLPullParser output into XmlEvents and prunes finished elements.

    Text that follows an event is only known once the next event arrives:
    after a start it lands in elem.text, after an end in elem.tail.
    """

    def __init__(self, parser: XMLPullParser):
        self.parser = parser
        self.root: Element | None = None
        self._open: list[Element] = []
        self._previous: tuple[str, Element] | None = None

    def drain(self) -> Iterator[XmlEvent]:
        for kind, elem in self.parser.read_events():
            if self._previous is not None:
                text = self._take_text(*self._previous)
                if text:
                    yield XmlEvent(kind="text", text=text)

            if kind == "start":
                if self.root is None:
                    self.root = elem
                self._open.append(elem)
            else:
                self._open.pop()
            self._previous = (kind, elem)
            yield XmlEvent(kind=kind, name=_local_name(elem.tag))

    def _take_text(self, kind: str, elem: Element) -> str | None:
        if kind == "start":
            return elem.text
        text = elem.tail
        # fully emitted, so drop it from the tree
        elem.clear()
        if self._open:
            self._open[-1].remove(elem)
        return text


def _local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


class _EventCursor:
    """One-event window over the stream, with text-reading helpers."""

    def __init__(self, events: Iterable[XmlEvent]):
        self._events = iter(events)
        self.current: XmlEvent | None = None
        self.advance()

    def advance(self) -> XmlEvent | None:
        self.current = next(self._events, None)
        return self.current

    def element_text(self) -> str:
        """Read the text of the current start element.

        Leaves the cursor on the matching end event. The element must hold
        character data only.
        """
        name = self.current.name
        parts: list[str] = []
        while True:
            event = self.advance()
            if event is None:
                raise MalformedResponseError(f"Response ended inside <{name}>")
            if event.kind == "text":
                parts.append(event.text)
            elif event.is_end(name):
                return "".join(parts)
            else:
                raise MalformedResponseError(
                    f"Expected text only in <{name}>, found <{event.name}>"
                )

    def skip_element(self) -> None:
        """Consume the current element and everything nested in it."""
        name = self.current.name
        depth = 1
        while depth:
            event = self.advance()
            if event is None:
                raise MalformedResponseError(f"Response ended inside <{name}>")
            if event.is_start():
                depth += 1
            elif event.is_end():
                depth -= 1


# ── Citation State ───────────────────────────────────────────────────


class _State(Enum):
    SCANNING = "scanning"
    IN_CITATION = "in_citation"
    IN_AUTHORS = "in_authors"


class _CitationBuilder:
    """Accumulates one ``<citation>`` until its end tag."""

    def __init__(self, line_separator: str):
        self.line_separator = line_separator
        self.entry_type = DEFAULT_ENTRY_TYPE
        self.fields: dict[str, str] = {}
        self.authors: list[str] = []
        self.note_lines: list[str] = []

    def apply(self, rule: FieldRule, name: str, text: str) -> None:
        action = rule.action
        if action is FieldAction.TYPE_SIGNAL:
            self.entry_type = rule.entry_type
            self._store(rule.target, text)
        elif action is FieldAction.STORE:
            self._store(rule.target, text)
        elif action is FieldAction.STRIP_PREFIX:
            if rule.prefix and text.startswith(rule.prefix):
                text = text[len(rule.prefix):]
            self._store(rule.target, text)
        elif action is FieldAction.NOTE:
            self.note_lines.append(f"{name}:{text}{self.line_separator}")

    def add_author(self, name: str) -> None:
        self.authors.append(name)

    def build(self) -> BibliographyRecord:
        if self.authors:
            self._store(StandardField.AUTHOR, _AUTHOR_SEPARATOR.join(self.authors))
        fields = dict(self.fields)

        if self.note_lines:
            notes = "".join(self.note_lines)
            existing = fields.get(StandardField.NOTE.value)
            if existing is not None:
                # FreeCite can return an explicit <note> as well
                notes = existing + self.line_separator + notes
            fields[StandardField.NOTE.value] = notes

        return BibliographyRecord(entry_type=self.entry_type, fields=fields)

    def _store(self, field: StandardField, text: str) -> None:
        # an empty value clears the field, anything else overwrites it
        if text:
            self.fields[field.value] = text
        else:
            self.fields.pop(field.value, None)
