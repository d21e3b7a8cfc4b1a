"""Recover a JSON object from free-form language model output.

The model is asked for bare JSON but routinely wraps it in prose, code fences
or a leading ``Summary`` label, and sometimes leaves trailing commas. Every
step below is a no-op on already-clean JSON, so sanitising a sanitised payload
decodes to the same value.

Known limitation: bounding uses the first ``{`` and the last ``}``. Two sibling
objects, or stray braces in surrounding prose, produce a span that does not
decode and the result is a ``ParseFailure``.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Union

logger = logging.getLogger(__name__)

_LEADING_LABEL_PATTERN = re.compile(r"^\s*summary\b[:\s]*", re.IGNORECASE)
_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)
_TRAILING_COMMA_PATTERN = re.compile(r",\s*([\]}])")


@dataclass(frozen=True, slots=True)
class ParseSuccess:
    """Decoded JSON object plus the text it was decoded from."""

    payload: Dict[str, Any]
    cleaned: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """No JSON object could be recovered; ``raw`` is the untouched input."""

    raw: str
    reason: str

    @property
    def ok(self) -> bool:
        return False


ParseResult = Union[ParseSuccess, ParseFailure]


def strip_leading_label(text: str) -> str:
    """Drop a leading ``Summary`` label word."""

    return _LEADING_LABEL_PATTERN.sub("", text, count=1)


def strip_code_fences(text: str) -> str:
    """Remove every markdown code fence delimiter."""

    return _FENCE_PATTERN.sub("", text)


def bound_to_braces(text: str) -> str | None:
    """Return the span from the first ``{`` to the last ``}``, or ``None``."""

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    return text[start : end + 1]


def strip_trailing_commas(text: str) -> str:
    """Remove commas that directly precede a closing bracket or brace."""

    return _TRAILING_COMMA_PATTERN.sub(r"\1", text)


def clean_response_text(text: str) -> str | None:
    """Apply the textual repairs and return the candidate JSON span."""

    cleaned = strip_code_fences(strip_leading_label(text))
    bounded = bound_to_braces(cleaned)
    if bounded is None:
        return None
    return strip_trailing_commas(bounded).strip()


def sanitize(raw: Any) -> ParseResult:
    """Extract a JSON object from ``raw`` without ever raising."""

    if not isinstance(raw, str):
        raw = "" if raw is None else str(raw)

    if not raw.strip():
        return ParseFailure(raw=raw, reason="empty response")

    candidate = clean_response_text(raw)
    if candidate is None:
        logger.warning("No JSON object delimiters found in model output")
        return ParseFailure(raw=raw, reason="no JSON object found")

    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as exc:
        logger.warning("Failed to parse model output as JSON: %s", exc)
        logger.debug("Unparseable candidate: %s", candidate)
        return ParseFailure(raw=raw, reason=f"invalid JSON: {exc.msg}")
    except RecursionError:
        logger.warning("Model output is nested too deeply to decode")
        return ParseFailure(raw=raw, reason="invalid JSON: nesting too deep")

    if not isinstance(payload, dict):
        return ParseFailure(raw=raw, reason=f"expected a JSON object, got {type(payload).__name__}")

    return ParseSuccess(payload=payload, cleaned=candidate)


__all__ = [
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "bound_to_braces",
    "clean_response_text",
    "sanitize",
    "strip_code_fences",
    "strip_leading_label",
    "strip_trailing_commas",
]
