"""Deliver rendered documents to a destination outside the pipeline."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Protocol

from tripmind.core.renderer import DocumentRenderer, RenderedDocument
from tripmind.core.schemas import Trip

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


class DocumentSink(Protocol):
    """Receives a finished document and the filename it should be saved under."""

    def deliver(self, document: RenderedDocument) -> str: ...


def safe_filename(filename: str) -> str:
    """Strip path separators and characters most filesystems reject."""

    cleaned = _UNSAFE_FILENAME_CHARS.sub("_", filename).strip(" .")
    return cleaned or "document.pdf"


class FileSystemSink:
    """Writes documents into a directory, returning the written path."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def deliver(self, document: RenderedDocument) -> str:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / safe_filename(document.filename)
        target.write_bytes(document.content)
        logger.info("Wrote %s (%s bytes)", target, len(document.content))
        return str(target)


def export_trip(trip: Trip, sink: DocumentSink, *, renderer: DocumentRenderer | None = None) -> str:
    """Render ``trip`` and hand it to ``sink``."""

    document = (renderer or DocumentRenderer()).render(trip)
    return sink.deliver(document)
