"""Pydantic data models for the TripMind planning pipeline.

The ``Trip`` family is the typed record produced by the normaliser and consumed
by enrichment, rendering and linkification. Nothing downstream of
``tripmind.core.normalizer`` works on untyped payloads.

Key model categories:
- Trip / DayPlan / ActivityEntry / Accommodation: the normalised travel plan
- TripRequest / RefineRequest: inputs to the generation and refinement flows
- Coordinates / ImageUrls: values returned by the enrichment collaborators
- State: LangGraph workflow state
"""
from __future__ import annotations

from datetime import date as Date
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from tripmind.core.reducer import merge_warnings
from tripmind.core.types import DayNumber, Lat, Lng, NonNegMoney


class ActivityEntry(BaseModel):
    """One slot of a day, e.g. ``Morning`` plus a free-text description."""
    time: str = ""
    activity: str = ""

    model_config = ConfigDict(extra="ignore")


class DayPlan(BaseModel):
    """A single itinerary day.

    ``summary`` doubles as the geocoding query for the day, so it is expected
    to name an area or landmark rather than a mood.
    """
    day: DayNumber
    summary: str = ""
    estimated_cost: NonNegMoney = 0
    details: List[ActivityEntry] = Field(default_factory=list)
    lat: Optional[Lat] = None
    lng: Optional[Lng] = None

    model_config = ConfigDict(extra="ignore")

    @property
    def is_located(self) -> bool:
        return self.lat is not None and self.lng is not None


class Accommodation(BaseModel):
    """Recommended place to stay; coordinates are filled in by enrichment."""
    name: str = ""
    price_per_night: NonNegMoney = 0
    description: str = ""
    lat: Optional[Lat] = None
    lng: Optional[Lng] = None

    model_config = ConfigDict(extra="ignore")

    @property
    def is_located(self) -> bool:
        return self.lat is not None and self.lng is not None


class Trip(BaseModel):
    """Normalised travel plan.

    Attributes:
        summary: Narrative paragraph, never empty after normalisation
        budget_breakdown: Open-ended category -> amount mapping
        accommodation: Recommended stay (may be empty)
        itinerary: Ordered day plans, ``day`` matches position
        image: Representative image URL attached by enrichment
        destination: Echo of the requested destination, used as a search hint
    """
    summary: str
    budget_breakdown: Dict[str, NonNegMoney] = Field(default_factory=dict)
    accommodation: Accommodation = Field(default_factory=Accommodation)
    itinerary: List[DayPlan] = Field(default_factory=list)
    image: Optional[str] = None
    destination: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class TripRequest(BaseModel):
    """Parameters collected from the traveller before generation."""
    destination: str = Field(min_length=1, description="City or region to visit, e.g. 'Tokyo, Japan'")
    days: DayNumber = Field(default=5, description="Trip length in days")
    budget: NonNegMoney = Field(default=1000, description="Total budget in the display currency")
    preferences: List[str] = Field(default_factory=list, description="Interest tags such as 'food'")
    date: Optional[Date] = Field(default=None, description="Trip start date")

    model_config = ConfigDict(extra="forbid")


class RefineRequest(BaseModel):
    """Free-text feedback applied to an existing trip."""
    feedback: str = Field(min_length=1)
    current_trip: Trip

    model_config = ConfigDict(extra="forbid")


class Coordinates(BaseModel):
    """Resolved point returned by a geocoder."""
    lat: Lat
    lng: Lng


class ImageUrls(BaseModel):
    """Size variants of one image-search result."""
    full: Optional[str] = None
    regular: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class State(BaseModel):
    """LangGraph workflow state that flows between nodes.

    Generation starts with ``request`` set; refinement starts with ``feedback``
    and ``current_trip`` set (``request`` is optional there and only supplies
    season and preference hints for image search).
    """
    request: Optional[TripRequest] = None
    feedback: Optional[str] = None
    current_trip: Optional[Trip] = None
    raw_output: Optional[str] = None
    trip: Optional[Trip] = None
    warnings: Annotated[List[str], merge_warnings] = Field(default_factory=list)


__all__ = [
    "ActivityEntry",
    "DayPlan",
    "Accommodation",
    "Trip",
    "TripRequest",
    "RefineRequest",
    "Coordinates",
    "ImageUrls",
    "State",
]
