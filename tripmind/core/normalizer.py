"""Turn a decoded model payload into a ``Trip`` that always validates.

The normaliser is total: whatever shape arrives, the caller receives a Trip
with all five top-level fields populated. Values the model got wrong are
coerced or replaced with defaults; entries that cannot be salvaged are
skipped instead of failing the run.
"""
from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from tripmind.core.sanitizer import ParseFailure, ParseResult, sanitize
from tripmind.core.schemas import Accommodation, ActivityEntry, DayPlan, Trip

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY = "No summary available"
ERROR_SUMMARY = "Error parsing response"
STRUCTURAL_FIELDS = ("summary", "budget_breakdown", "accommodation", "itinerary")
ENVELOPE_KEYS = ("data", "trip", "result", "response", "itinerary_plan")

_NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?")


def unwrap_envelope(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    """Replace ``payload`` with a nested trip object, one level deep.

    Handles responses such as ``{"ok": true, "data": {"summary": ...}}``. The
    well-known wrapper keys are tried first, then any other mapping value that
    carries a ``summary`` when the payload itself does not.
    """

    for key in ENVELOPE_KEYS:
        inner = payload.get(key)
        if isinstance(inner, Mapping) and "summary" in inner:
            logger.debug("Unwrapping trip payload from '%s' envelope", key)
            return inner

    if "summary" in payload:
        return payload

    for key, inner in payload.items():
        if isinstance(inner, Mapping) and "summary" in inner:
            logger.debug("Unwrapping trip payload from '%s' envelope", key)
            return inner
    return payload


def missing_structural_fields(payload: Any) -> List[str]:
    """Return the structural trip fields absent from a decoded payload."""

    if not isinstance(payload, Mapping):
        return list(STRUCTURAL_FIELDS)
    body = unwrap_envelope(payload)
    return [field for field in STRUCTURAL_FIELDS if body.get(field) is None]


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Best-effort conversion of model-authored amounts such as ``"£1,200"``."""

    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMBER_PATTERN.search(value.replace(",", ""))
        if not match:
            return default
        number = float(match.group(0))
    else:
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def _non_negative(value: Any) -> float:
    return max(0.0, coerce_number(value))


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _coerce_coordinate(value: Any, limit: float) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    number = coerce_number(value, default=math.nan)
    if math.isnan(number) or abs(number) > limit:
        return None
    return number


def coerce_summary(value: Any) -> str:
    """Return a readable summary string whatever the model put there."""

    if value is None:
        return DEFAULT_SUMMARY
    if isinstance(value, str):
        return value.strip() or DEFAULT_SUMMARY
    try:
        rendered = json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        rendered = str(value)
    return rendered or DEFAULT_SUMMARY


def normalise_budget(value: Any) -> Dict[str, float]:
    if not isinstance(value, Mapping):
        return {}
    return {str(category): _non_negative(amount) for category, amount in value.items()}


def normalise_accommodation(value: Any) -> Accommodation:
    if not isinstance(value, Mapping):
        return Accommodation()
    return Accommodation(
        name=_coerce_text(value.get("name")),
        price_per_night=_non_negative(value.get("price_per_night")),
        description=_coerce_text(value.get("description")),
        lat=_coerce_coordinate(value.get("lat"), 90),
        lng=_coerce_coordinate(value.get("lng"), 180),
    )


def normalise_details(value: Any) -> List[ActivityEntry]:
    if not isinstance(value, list):
        return []
    entries: List[ActivityEntry] = []
    for item in value:
        if isinstance(item, Mapping):
            entries.append(
                ActivityEntry(time=_coerce_text(item.get("time")), activity=_coerce_text(item.get("activity")))
            )
        elif isinstance(item, str) and item.strip():
            entries.append(ActivityEntry(activity=item.strip()))
        else:
            logger.debug("Skipping activity entry of type %s", type(item).__name__)
    return entries


def normalise_itinerary(value: Any) -> List[DayPlan]:
    """Build ordered day plans; ``day`` is renumbered to match position."""

    if not isinstance(value, list):
        return []

    days: List[DayPlan] = []
    for idx, item in enumerate(value):
        if not isinstance(item, Mapping):
            logger.debug("Skipping itinerary entry at position %s; got %s", idx, type(item).__name__)
            continue
        position = len(days) + 1
        declared = item.get("day")
        if declared is not None and coerce_number(declared, default=-1) != position:
            logger.debug("Renumbering itinerary day %r to %s", declared, position)
        days.append(
            DayPlan(
                day=position,
                summary=_coerce_text(item.get("summary")),
                estimated_cost=_non_negative(item.get("estimated_cost")),
                details=normalise_details(item.get("details")),
                lat=_coerce_coordinate(item.get("lat"), 90),
                lng=_coerce_coordinate(item.get("lng"), 180),
            )
        )
    return days


def default_trip(summary: str = DEFAULT_SUMMARY, *, destination: Optional[str] = None) -> Trip:
    """All-defaults trip used whenever nothing usable was recovered."""

    return Trip(summary=summary, destination=destination)


def normalise_payload(payload: Any, *, destination: Optional[str] = None) -> Trip:
    """Convert an untyped decoded payload into a ``Trip``; never raises."""

    if not isinstance(payload, Mapping):
        logger.warning("Trip payload is %s, not an object; using defaults", type(payload).__name__)
        return default_trip(destination=destination)

    try:
        body = unwrap_envelope(payload)
        image = body.get("image")
        echoed_destination = body.get("destination")
        return Trip(
            summary=coerce_summary(body.get("summary")),
            budget_breakdown=normalise_budget(body.get("budget_breakdown")),
            accommodation=normalise_accommodation(body.get("accommodation")),
            itinerary=normalise_itinerary(body.get("itinerary")),
            image=image if isinstance(image, str) and image.strip() else None,
            destination=destination
            or (echoed_destination if isinstance(echoed_destination, str) and echoed_destination else None),
        )
    except (ValidationError, TypeError, ValueError, AttributeError) as exc:
        logger.warning("Failed to normalise trip payload: %s", exc)
        return default_trip(ERROR_SUMMARY, destination=destination)


def trip_from_result(result: ParseResult, *, destination: Optional[str] = None) -> Trip:
    """Normalise a sanitizer result, mapping failures to the error trip."""

    if isinstance(result, ParseFailure):
        logger.warning("Falling back to default trip: %s", result.reason)
        return default_trip(ERROR_SUMMARY, destination=destination)
    return normalise_payload(result.payload, destination=destination)


def parse_trip(raw: Any, *, destination: Optional[str] = None) -> Trip:
    """Sanitise and normalise raw model text in one call."""

    return trip_from_result(sanitize(raw), destination=destination)


__all__ = [
    "DEFAULT_SUMMARY",
    "ERROR_SUMMARY",
    "STRUCTURAL_FIELDS",
    "coerce_number",
    "coerce_summary",
    "default_trip",
    "missing_structural_fields",
    "normalise_accommodation",
    "normalise_budget",
    "normalise_details",
    "normalise_itinerary",
    "normalise_payload",
    "parse_trip",
    "trip_from_result",
    "unwrap_envelope",
]
