"""Exception hierarchy shared by the pipeline and its collaborators.

Only ``GenerationError`` is meant to escape to API callers. Everything raised
by the geocoding and image clients is a ``CollaboratorError`` that the
enrichment layer absorbs.
"""
from __future__ import annotations

from typing import Optional


class TripMindError(Exception):
    """Base class for all errors raised by this package."""


class CollaboratorError(TripMindError):
    """Transport or protocol failure while talking to an external service."""

    def __init__(self, service: str, message: str, *, status_code: Optional[int] = None) -> None:
        self.service = service
        self.status_code = status_code
        prefix = f"{service} HTTP {status_code}" if status_code else service
        super().__init__(f"{prefix}: {message}")


class GenerationError(CollaboratorError):
    """The language model call failed, so there is nothing to normalise."""

    def __init__(self, message: str) -> None:
        super().__init__("generation", message)
