"""Shared data models and errors for response parsing."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from citeparse.core.entry import BibliographyRecord


# ── Errors ───────────────────────────────────────────────────────────


class CiteParseError(Exception):
    """Base class for importer failures."""


class ServiceUnavailableError(CiteParseError):
    """The citation service could not be reached or read from."""


class MalformedResponseError(CiteParseError):
    """The service response is not the XML structure we expect."""


# ── Parse Events ─────────────────────────────────────────────────────


class XmlEvent(BaseModel):
    """A single structural event from the response document."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["start", "end", "text"]
    name: str = ""
    text: str = ""

    def is_start(self, name: str | None = None) -> bool:
        return self.kind == "start" and (name is None or self.name == name)

    def is_end(self, name: str | None = None) -> bool:
        return self.kind == "end" and (name is None or self.name == name)

    def is_whitespace(self) -> bool:
        return self.kind == "text" and not self.text.strip()


# ── Result ───────────────────────────────────────────────────────────


class FailureKind(str, Enum):
    NONE = "none"
    SERVICE_UNAVAILABLE = "service_unavailable"
    MALFORMED_RESPONSE = "malformed_response"


class ParserResult(BaseModel):
    """Outcome of one import: records on success, a failure kind otherwise."""

    records: list[BibliographyRecord] = Field(default_factory=list)
    failure: FailureKind = FailureKind.NONE
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure == FailureKind.NONE

    @classmethod
    def from_error(cls, failure: FailureKind, message: str | None = None) -> "ParserResult":
        return cls(failure=failure, error_message=message)
