"""Tests for rewriting place names in activity text as search links."""
from __future__ import annotations

import pytest

from tripmind.core.linkify import (
    SEARCH_URL,
    find_place_phrases,
    linkify_itinerary,
    linkify_places,
    search_url,
)
from tripmind.core.normalizer import normalise_payload


def _phrases(text: str):
    return [text[start:end] for start, end in find_place_phrases(text)]


def test_eiffel_tower_is_linked_but_not_leading_word():
    result = linkify_places("Visit Eiffel Tower today", "Paris")

    assert result == (
        'Visit <a href="https://www.google.com/search?q=Eiffel%20Tower%20Paris" '
        'target="_blank" rel="noopener noreferrer">Eiffel Tower</a> today'
    )


@pytest.mark.parametrize(
    "text",
    [
        "dinner near the river",
        "Lunch at a small bistro",
        "Relax",
        "",
        "See the Louvre, then rest",
    ],
)
def test_text_without_capitalised_run_is_unchanged(text):
    assert linkify_places(text, "Paris") == text


def test_leading_label_is_excluded_but_rest_of_run_is_kept():
    assert _phrases("Morning Walk Along Seine") == ["Walk Along Seine"]


def test_leading_whitespace_does_not_shift_first_token():
    assert _phrases("  Louvre Museum") == []


def test_runs_are_split_into_phrases_of_at_most_five_words():
    assert _phrases("See A B C D E F G now") == ["A B C D E", "F G"]


def test_leftover_single_word_after_chunking_is_not_linked():
    assert _phrases("See Aa Bb Cc Dd Ee Ff") == ["Aa Bb Cc Dd Ee"]


def test_punctuation_breaks_a_run():
    assert _phrases("Then Jardin Du Luxembourg, Musée Rodin and Place Vendôme.") == [
        "Jardin Du Luxembourg",
        "Musée Rodin",
        "Place Vendôme",
    ]


@pytest.mark.parametrize(
    "text, phrase",
    [
        ("Climb to Sacré-Cœur Basilica", "Sacré-Cœur Basilica"),
        ("Tour St Peter's Basilica at dawn", "St Peter's Basilica"),
        ("Walk past Notre-Dame Cathedral", "Notre-Dame Cathedral"),
        ("Then Café Flore for coffee", "Café Flore"),
        ("Then Dom Kraków tonight", "Dom Kraków"),
    ],
)
def test_unicode_words_and_internal_punctuation(text, phrase):
    assert _phrases(text) == [phrase]


def test_surrounding_text_is_untouched():
    text = "Breakfast, then Musée Rodin (gardens) & more."

    result = linkify_places(text, "Paris")

    assert result.startswith("Breakfast, then <a ")
    assert result.endswith(">Musée Rodin</a> (gardens) & more.")


def test_search_url_encodes_phrase_and_destination():
    assert search_url("Sacré-Cœur Basilica", "Paris") == (
        SEARCH_URL + "Sacr%C3%A9-C%C5%93ur%20Basilica%20Paris"
    )
    assert search_url("Hotel Le Marais") == SEARCH_URL + "Hotel%20Le%20Marais"


def test_linkify_itinerary_covers_only_activity_text(trip_payload):
    trip = normalise_payload(trip_payload, destination="Paris")

    linked = linkify_itinerary(trip)

    assert len(linked) == 2
    assert "Eiffel%20Tower%20Paris" in linked[0][0]
    assert linked[0][1] == "Dinner near the river"
    assert ">Sacré-Cœur Basilica</a>" in linked[1][0]
    assert "<a " not in trip.summary


def test_escape_neutralises_markup_around_anchors():
    text = "Then <script>alert(1)</script> Musée Rodin & more"

    result = linkify_places(text, "Paris", escape=True)

    assert result.startswith("Then &lt;script&gt;alert(1)&lt;/script&gt; <a ")
    assert result.endswith(">Musée Rodin</a> &amp; more")
    assert "<script>" not in result


def test_linkify_itinerary_escapes_activity_text():
    trip = normalise_payload(
        {
            "summary": "x",
            "itinerary": [
                {"day": 1, "details": [{"time": "Evening", "activity": "Dinner <b>near</b> Notre Dame"}]}
            ],
        },
        destination="Paris",
    )

    linked = linkify_itinerary(trip)

    assert linked[0][0].startswith("Dinner &lt;b&gt;near&lt;/b&gt; <a ")
    assert ">Notre Dame</a>" in linked[0][0]
