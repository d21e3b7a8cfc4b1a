from typing import Any, List, Mapping, Optional
from tripmind.api.schemas import TripResponse
from tripmind.core.linkify import linkify_itinerary, search_url
from tripmind.core.normalizer import default_trip
from tripmind.core.schemas import Trip


def _extract_trip(result: Mapping[str, Any]) -> Trip:
    trip = result.get("trip")
    if isinstance(trip, Trip):
        return trip
    if isinstance(trip, Mapping):
        return Trip.model_validate(trip)
    return default_trip()


def _accommodation_link(trip: Trip) -> Optional[str]:
    if not trip.accommodation.name:
        return None
    return search_url(trip.accommodation.name, trip.destination)


def trip_to_response(trip: Trip, warnings: Optional[List[str]] = None) -> TripResponse:
    return TripResponse(
        ok=True,
        data=trip,
        linked_itinerary=linkify_itinerary(trip),
        accommodation_link=_accommodation_link(trip),
        warnings=list(warnings or []),
    )


def _result_to_response(result: Mapping[str, Any]) -> TripResponse:
    return trip_to_response(_extract_trip(result), result.get("warnings") or [])
