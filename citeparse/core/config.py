"""Service configuration: YAML loader and Pydantic model."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_ENDPOINT = "http://freecite.library.brown.edu/citations/create"


class ServiceConfig(BaseModel):
    """Connection and output settings for the FreeCite importer."""

    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = Field(default=30.0, gt=0, description="Seconds per request")
    max_retries: int = Field(default=3, ge=1)
    accept: str = "text/xml"
    line_separator: str = Field(
        default=os.linesep,
        description="Terminator for catch-all note lines",
    )

    @field_validator("endpoint")
    @classmethod
    def http_endpoint(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Endpoint must be an http(s) URL, got {v!r}")
        return v


def load_config(path: str | Path | None = None) -> ServiceConfig:
    """Load a YAML service config from disk, or return the defaults."""
    if path is None:
        return ServiceConfig()
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return ServiceConfig.model_validate(raw)
