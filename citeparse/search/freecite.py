"""FreeCite importer: submits free-text citations to the online parser.

Brown University's FreeCite service (http://freecite.library.brown.edu/)
parses citation strings server-side and answers with XML, which is handed to
``citeparse.parsers.freecite`` for interpretation.
"""

import logging
import time
from pathlib import Path
from typing import TextIO

import requests

from citeparse.core.config import ServiceConfig
from citeparse.parsers.freecite import parse_response
from citeparse.parsers.models import FailureKind, ParserResult, ServiceUnavailableError

logger = logging.getLogger(__name__)

NAME = "text citations"
DESCRIPTION = "This importer parses text format citations using the online API of FreeCite."
FILE_TYPE = "freecite"
FILE_EXTENSIONS = (".txt", ".xml")

CONNECT_FAILURE_MESSAGE = "Unable to connect to FreeCite online service."

_CHUNK_SIZE = 8192


# ── Public API ───────────────────────────────────────────────────────


def import_entries(text: str, config: ServiceConfig | None = None) -> ParserResult:
    """Resolve free-text citations into bibliography records.

    Always returns a ParserResult; connection and parse failures are reported
    through ``result.failure`` rather than raised.
    """
    config = config or ServiceConfig()
    logger.info("Submitting %d characters to FreeCite at %s", len(text), config.endpoint)

    try:
        response = submit_citation(text, config)
    except ServiceUnavailableError as exc:
        logger.warning("Unable to connect to FreeCite online service: %s", exc)
        return ParserResult.from_error(FailureKind.SERVICE_UNAVAILABLE, CONNECT_FAILURE_MESSAGE)

    with response:
        return parse_response(
            response.iter_content(chunk_size=_CHUNK_SIZE),
            line_separator=config.line_separator,
        )


def import_database(reader: TextIO, config: ServiceConfig | None = None) -> ParserResult:
    """Read all text from an open reader and import it as citations."""
    return import_entries(reader.read(), config)


def import_file(path: str | Path, config: ServiceConfig | None = None) -> ParserResult:
    """Import the citations contained in a UTF-8 text file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        return import_database(f, config)


def is_recognized_format(reader: TextIO) -> bool:
    """Plain citation text has no signature to sniff, so never claim a file."""
    if reader is None:
        raise TypeError("reader must not be None")
    return False


# ── Transport with Retry ─────────────────────────────────────────────


def submit_citation(text: str, config: ServiceConfig) -> requests.Response:
    """POST the citation text and return the open, streaming response.

    The caller owns the response and must close it. Raises
    ServiceUnavailableError once all attempts have failed.
    """
    for attempt in range(1, config.max_retries + 1):
        response = None
        try:
            response = requests.post(
                config.endpoint,
                data={"citation": text},
                headers={"Accept": config.accept},
                timeout=config.timeout,
                stream=True,
            )
            response.raise_for_status()
            return response
        except requests.RequestException as exc:
            if response is not None:
                response.close()
            if attempt == config.max_retries:
                raise ServiceUnavailableError(
                    f"Unable to reach {config.endpoint}: {exc}"
                ) from exc
            wait = 2**attempt
            logger.warning(
                "FreeCite request failed (attempt %d/%d): %s, retrying in %ds",
                attempt,
                config.max_retries,
                exc,
                wait,
            )
            time.sleep(wait)
