from typing import List, Optional
from pydantic import BaseModel, Field
from tripmind.core.schemas import RefineRequest, Trip, TripRequest


class GenerateRequest(TripRequest):
    """Request payload used to generate a new trip."""
    pass


class RefineTripRequest(RefineRequest):
    """Request payload used to refine an existing trip with free-text feedback."""
    pass


class TripResponse(BaseModel):
    """Unified response returned by the generate, refine and linkify endpoints."""

    ok: bool = Field(default=True, description="False only when the request failed outright")
    data: Trip = Field(..., description="Normalised, best-effort enriched trip")
    linked_itinerary: List[List[str]] = Field(
        default_factory=list,
        description="Activity text per day with place names rewritten as search links",
    )
    accommodation_link: Optional[str] = Field(
        default=None, description="Web search link for the recommended accommodation"
    )
    warnings: List[str] = Field(
        default_factory=list,
        description="Recovered problems: unparseable output, dropped fields, lookup misses",
    )
