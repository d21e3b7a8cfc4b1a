"""Tests for the trip data models and settings."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from tripmind.core.config import ApiSettings
from tripmind.core.errors import CollaboratorError, GenerationError, TripMindError
from tripmind.core.schemas import Accommodation, DayPlan, RefineRequest, Trip, TripRequest


def test_trip_only_requires_summary():
    trip = Trip(summary="x")

    assert trip.budget_breakdown == {}
    assert trip.accommodation.name == ""
    assert trip.itinerary == []
    assert trip.image is None


def test_trip_serialised_form(trip_payload):
    trip = Trip.model_validate({**trip_payload, "destination": "Paris"})

    dumped = trip.model_dump(exclude_none=True)

    assert set(dumped) == {"summary", "budget_breakdown", "accommodation", "itinerary", "destination"}
    assert set(dumped["itinerary"][0]) == {"day", "summary", "estimated_cost", "details"}
    assert dumped["itinerary"][0]["details"][0] == {"time": "Morning", "activity": "Visit Eiffel Tower today"}


def test_negative_amounts_are_rejected():
    with pytest.raises(ValidationError):
        Trip(summary="x", budget_breakdown={"food": -1})
    with pytest.raises(ValidationError):
        Accommodation(price_per_night=-10)


def test_coordinates_must_be_in_range():
    with pytest.raises(ValidationError):
        DayPlan(day=1, lat=91, lng=0)
    assert DayPlan(day=1, lat=-33.9, lng=151.2).is_located
    assert not DayPlan(day=1, lat=10).is_located


def test_day_numbers_start_at_one():
    with pytest.raises(ValidationError):
        DayPlan(day=0)


def test_trip_request_defaults():
    request = TripRequest(destination="Lisbon")

    assert request.days == 5
    assert request.budget == 1000
    assert request.preferences == []
    assert request.date is None


def test_refine_request_requires_feedback():
    with pytest.raises(ValidationError):
        RefineRequest(feedback="", current_trip=Trip(summary="x"))


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("XAI_API_KEY", "xai-test")
    monkeypatch.setenv("HTTP_TIMEOUT_S", "2.5")
    monkeypatch.setenv("ENRICHMENT_CONCURRENCY", "not-a-number")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)

    settings = ApiSettings.from_env()

    assert settings.xai_api_key == "xai-test"
    assert settings.http_timeout_s == 2.5
    assert settings.enrichment_concurrency == 4
    assert settings.log_level == "DEBUG"
    assert settings.google_maps_api_key is None


def test_settings_ensure():
    with pytest.raises(RuntimeError, match="xai_api_key"):
        ApiSettings().ensure("xai_api_key")
    assert ApiSettings(xai_api_key="k").ensure("xai_api_key") == "k"


def test_error_hierarchy():
    error = GenerationError("boom")

    assert isinstance(error, CollaboratorError)
    assert isinstance(error, TripMindError)
    assert str(error) == "generation: boom"
    assert str(CollaboratorError("unsplash", "slow down", status_code=429)) == "unsplash HTTP 429: slow down"
