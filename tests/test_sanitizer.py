"""Tests for recovering JSON objects from raw model output."""
from __future__ import annotations

import json

import pytest

from tripmind.core.sanitizer import (
    ParseFailure,
    ParseSuccess,
    bound_to_braces,
    sanitize,
    strip_code_fences,
    strip_leading_label,
    strip_trailing_commas,
)


def test_clean_json_is_decoded_as_is():
    raw = '{"summary": "Lisbon in spring", "itinerary": []}'

    result = sanitize(raw)

    assert isinstance(result, ParseSuccess)
    assert result.ok
    assert result.payload == {"summary": "Lisbon in spring", "itinerary": []}


def test_sanitizing_sanitized_output_decodes_identically():
    raw = 'Summary: here you go ```json\n{"a": [1, 2,], "b": {"c": "d",},}\n``` enjoy!'

    first = sanitize(raw)
    second = sanitize(first.cleaned)

    assert isinstance(first, ParseSuccess)
    assert isinstance(second, ParseSuccess)
    assert second.payload == first.payload
    assert second.cleaned == first.cleaned


def test_trailing_comma_is_recovered():
    result = sanitize('prefix {"a":1,}')

    assert isinstance(result, ParseSuccess)
    assert result.payload == {"a": 1}


def test_code_fences_are_stripped():
    result = sanitize('```json\n{"a":1}\n```')

    assert isinstance(result, ParseSuccess)
    assert result.payload == {"a": 1}


def test_leading_summary_label_is_removed():
    result = sanitize('SUMMARY: {"summary": "x"}')

    assert isinstance(result, ParseSuccess)
    assert result.payload == {"summary": "x"}


def test_commentary_outside_braces_is_discarded():
    raw = 'Sure! Here is your plan:\n{"summary": "x"}\nLet me know if you want changes.'

    result = sanitize(raw)

    assert isinstance(result, ParseSuccess)
    assert result.payload == {"summary": "x"}


@pytest.mark.parametrize(
    "raw, reason",
    [
        ("", "empty response"),
        ("   \n", "empty response"),
        ("I could not plan this trip.", "no JSON object found"),
        ("} backwards {", "no JSON object found"),
    ],
)
def test_failures_keep_raw_text(raw, reason):
    result = sanitize(raw)

    assert isinstance(result, ParseFailure)
    assert not result.ok
    assert result.raw == raw
    assert result.reason == reason


def test_invalid_json_is_a_failure_not_an_exception():
    raw = '{"summary": "unterminated}'

    result = sanitize(raw)

    assert isinstance(result, ParseFailure)
    assert result.raw == raw
    assert result.reason.startswith("invalid JSON")


def test_sibling_objects_are_a_known_failure():
    """First-to-last brace bounding spans both objects and cannot decode."""

    result = sanitize('{"a": 1} and also {"b": 2}')

    assert isinstance(result, ParseFailure)


def test_non_string_input_is_tolerated():
    assert isinstance(sanitize(None), ParseFailure)
    assert isinstance(sanitize(42), ParseFailure)


def test_helpers_are_noops_on_clean_json():
    clean = json.dumps({"a": [1, {"b": "c"}]})

    assert strip_leading_label(clean) == clean
    assert strip_code_fences(clean) == clean
    assert bound_to_braces(clean) == clean
    assert strip_trailing_commas(clean) == clean


def test_label_is_only_stripped_at_the_start():
    text = '{"summary": "Summary of the week"}'

    assert strip_leading_label(text) == text
    assert strip_leading_label("summary {}") == "{}"


def test_deeply_nested_json_is_a_failure_not_an_exception():
    raw = '{"a": ' + "[" * 100000 + "]" * 100000 + "}"

    result = sanitize(raw)

    assert isinstance(result, ParseFailure)
    assert result.raw == raw
    assert result.reason.startswith("invalid JSON")
