"""Attach coordinates and a representative image to a normalised trip.

Every lookup is independent and best-effort. A miss, an HTTP error or a
timeout leaves the corresponding field unset and is recorded as an
``EnrichmentMiss``; nothing raised by a collaborator escapes ``enrich``.
"""
from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from tripmind.core.schemas import Coordinates, ImageUrls, Trip
from tripmind.core.seasons import season_for_date
from tripmind.services.geocoding import Geocoder
from tripmind.services.unsplash import ImageSearch

logger = logging.getLogger(__name__)

IMAGE_PAGE_RANGE = (1, 5)
IMAGE_SIZE_SUFFIX = "&w=1920&q=85"


@dataclass(frozen=True, slots=True)
class EnrichmentMiss:
    """A lookup that produced nothing; ``target`` is e.g. ``day 2``."""

    target: str
    reason: str

    def __str__(self) -> str:
        return f"{self.target}: {self.reason}"


@dataclass(slots=True)
class EnrichmentOutcome:
    """Augmented copy of the trip plus the lookups that missed."""

    trip: Trip
    misses: List[EnrichmentMiss] = field(default_factory=list)


def place_query(name: str, destination: Optional[str]) -> str:
    """Concatenate a place name with the destination for disambiguation."""

    name = (name or "").strip()
    destination = (destination or "").strip()
    if name and destination:
        return f"{name}, {destination}"
    return name or destination


def build_image_query(
    destination: Optional[str],
    start: Optional[date] = None,
    preferences: Sequence[str] = (),
) -> str:
    """Compose the image search query from destination, season and interests."""

    parts = [destination or "", season_for_date(start) or "", "travel landscape", ", ".join(p for p in preferences if p)]
    return " ".join(part.strip() for part in parts if part and part.strip())


def pick_image_url(image: ImageUrls) -> Optional[str]:
    """Prefer the full-resolution variant, falling back to ``regular``."""

    base = image.full or image.regular
    if not base:
        return None
    return f"{base}{IMAGE_SIZE_SUFFIX}"


class TripEnricher:
    """Resolve coordinates for the stay and each day, and pick a cover image.

    Collaborators are injected so tests can pass fakes. Geocoding calls run
    concurrently, at most ``max_concurrency`` at a time; results are applied
    back in itinerary order.
    """

    def __init__(
        self,
        geocoder: Optional[Geocoder],
        image_search: Optional[ImageSearch],
        *,
        max_concurrency: int = 4,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.geocoder = geocoder
        self.image_search = image_search
        self.max_concurrency = max(1, max_concurrency)
        self._rng = rng or random.Random()

    async def _geocode(self, semaphore: asyncio.Semaphore, target: str, query: str) -> Coordinates | EnrichmentMiss:
        if self.geocoder is None:
            return EnrichmentMiss(target, "geocoder not configured")
        if not query:
            return EnrichmentMiss(target, "empty place description")

        async with semaphore:
            try:
                coords = await self.geocoder.resolve(query)
            except Exception as exc:
                logger.warning("Geocoding failed for %s (%r): %s", target, query, exc)
                return EnrichmentMiss(target, str(exc) or type(exc).__name__)

        if coords is None:
            logger.info("No geocoding result for %s (%r)", target, query)
            return EnrichmentMiss(target, "no result")
        return coords

    async def resolve_image(
        self,
        destination: Optional[str],
        start: Optional[date] = None,
        preferences: Sequence[str] = (),
    ) -> Optional[str]:
        """Return one randomly chosen image URL for the trip, or ``None``."""

        if self.image_search is None:
            return None

        query = build_image_query(destination, start, preferences)
        if not query:
            return None

        page = self._rng.randint(*IMAGE_PAGE_RANGE)
        try:
            results = await self.image_search.search(query, page)
        except Exception as exc:
            logger.warning("Image search failed for %r: %s", query, exc)
            return None

        candidates = [url for url in (pick_image_url(image) for image in results) if url]
        if not candidates:
            logger.info("Image search returned no usable results for %r (page %s)", query, page)
            return None

        chosen = self._rng.choice(candidates)
        logger.debug("Selected image %s", chosen)
        return chosen

    async def enrich(
        self,
        trip: Trip,
        *,
        start: Optional[date] = None,
        preferences: Sequence[str] = (),
    ) -> EnrichmentOutcome:
        """Return a copy of ``trip`` with whatever coordinates and image resolved.

        Every item is looked up once. A resolved lookup overwrites any
        coordinates or image already present; a miss keeps the existing value.
        """

        destination = trip.destination
        semaphore = asyncio.Semaphore(self.max_concurrency)
        misses: List[EnrichmentMiss] = []

        accommodation = trip.accommodation
        lookups = []
        if accommodation.name:
            lookups.append(("accommodation", place_query(accommodation.name, destination)))
        for day in trip.itinerary:
            lookups.append((f"day {day.day}", place_query(day.summary, destination)))

        image_task = None
        if self.image_search is not None:
            image_task = asyncio.create_task(
                self.resolve_image(destination, start, preferences)
            )

        resolved = await asyncio.gather(
            *(self._geocode(semaphore, target, query) for target, query in lookups)
        )
        by_target = dict(zip((target for target, _ in lookups), resolved))

        def _apply(target: str, model):
            outcome = by_target.get(target)
            if outcome is None:
                return model
            if isinstance(outcome, EnrichmentMiss):
                misses.append(outcome)
                return model
            return model.model_copy(update={"lat": outcome.lat, "lng": outcome.lng})

        new_accommodation = _apply("accommodation", accommodation)
        new_itinerary = [_apply(f"day {day.day}", day) for day in trip.itinerary]

        image = trip.image
        if image_task is not None:
            resolved_image = await image_task
            if resolved_image is not None:
                image = resolved_image
            else:
                misses.append(EnrichmentMiss("image", "no image resolved"))

        enriched = trip.model_copy(
            update={"accommodation": new_accommodation, "itinerary": new_itinerary, "image": image}
        )
        logger.info(
            "Enriched trip to %s: %s/%s lookups resolved, image=%s",
            destination,
            len(lookups) - sum(1 for m in misses if m.target != "image"),
            len(lookups),
            bool(image),
        )
        return EnrichmentOutcome(trip=enriched, misses=misses)


__all__ = [
    "EnrichmentMiss",
    "EnrichmentOutcome",
    "TripEnricher",
    "build_image_query",
    "pick_image_url",
    "place_query",
]
