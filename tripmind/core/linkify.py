"""Rewrite proper-noun phrases in activity text into web-search links.

A phrase is two to five consecutive capitalised words separated only by
whitespace. Words may contain any Unicode letters, combining marks and the
internal punctuation ``'``, ``’`` and ``-``. A word that starts inside the
first whitespace-delimited token of the text is never part of a phrase, so a
leading label such as ``Morning`` or ``Visit`` is not linked.

``linkify_places`` is a plain textual substitution; surrounding text is left
byte-for-byte intact, so its output is only safe as HTML when the input text
is trusted. Pass ``escape=True`` (as ``linkify_itinerary`` does for model and
client authored activities) to HTML-escape the text around and inside the
anchors.
"""
from __future__ import annotations

import html
import re
from typing import Iterator, List, Optional, Tuple
from urllib.parse import quote

from tripmind.core.schemas import Trip

SEARCH_URL = "https://www.google.com/search?q="
MIN_PHRASE_WORDS = 2
MAX_PHRASE_WORDS = 5

_LETTER = r"[^\W\d_]"
_MARK = "\u0300-\u036f\u1ab0-\u1aff\u1dc0-\u1dff\u20d0-\u20ff\ufe20-\ufe2f"
_WORD_PATTERN = re.compile(rf"(?<![\w{_MARK}]){_LETTER}(?:{_LETTER}|[{_MARK}’'-])*")
_FIRST_TOKEN_PATTERN = re.compile(r"^\s*\S+")

_URI_COMPONENT_SAFE = "-_.!~*'()"


def search_url(phrase: str, destination: Optional[str] = None) -> str:
    """Web search URL for ``"<phrase> <destination>"``."""

    query = f"{phrase} {destination or ''}".strip()
    return SEARCH_URL + quote(query, safe=_URI_COMPONENT_SAFE)


def _anchor(phrase: str, destination: Optional[str], label: Optional[str] = None) -> str:
    return f'<a href="{search_url(phrase, destination)}" target="_blank" rel="noopener noreferrer">{label or phrase}</a>'


def _is_capitalised(word: str) -> bool:
    return word[0].isupper()


def _chunk_run(run: List[re.Match]) -> Iterator[Tuple[int, int]]:
    """Split a run of capitalised words into phrases of at most five words."""

    idx = 0
    while len(run) - idx >= MIN_PHRASE_WORDS:
        chunk = run[idx : idx + MAX_PHRASE_WORDS]
        yield chunk[0].start(), chunk[-1].end()
        idx += len(chunk)


def find_place_phrases(text: str) -> List[Tuple[int, int]]:
    """Return ``(start, end)`` spans of the phrases that would be linked."""

    if not text:
        return []

    first = _FIRST_TOKEN_PATTERN.match(text)
    first_token_end = first.end() if first else 0

    spans: List[Tuple[int, int]] = []
    run: List[re.Match] = []
    for match in _WORD_PATTERN.finditer(text):
        eligible = match.start() >= first_token_end and _is_capitalised(match.group(0))
        gap = text[run[-1].end() : match.start()] if run else ""
        if eligible and run and gap and not gap.strip():
            run.append(match)
            continue
        spans.extend(_chunk_run(run))
        run = [match] if eligible else []

    spans.extend(_chunk_run(run))
    return spans


def linkify_places(text: str, destination: Optional[str] = None, *, escape: bool = False) -> str:
    """Wrap each qualifying phrase in an anchor pointing at a web search."""

    if not text:
        return ""

    as_html = (lambda piece: html.escape(piece, quote=False)) if escape else (lambda piece: piece)
    spans = find_place_phrases(text)
    if not spans:
        return as_html(text)

    pieces: List[str] = []
    cursor = 0
    for start, end in spans:
        phrase = text[start:end]
        pieces.append(as_html(text[cursor:start]))
        pieces.append(_anchor(phrase, destination, as_html(phrase)))
        cursor = end
    pieces.append(as_html(text[cursor:]))
    return "".join(pieces)


def linkify_itinerary(trip: Trip) -> List[List[str]]:
    """Annotated activity text per day, in itinerary order."""

    return [
        [linkify_places(entry.activity, trip.destination, escape=True) for entry in day.details]
        for day in trip.itinerary
    ]


__all__ = [
    "find_place_phrases",
    "linkify_itinerary",
    "linkify_places",
    "search_url",
]
