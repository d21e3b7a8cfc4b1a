"""Async geocoding clients that resolve free-text place names to coordinates."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from tripmind.core.config import ApiSettings
from tripmind.core.errors import CollaboratorError
from tripmind.core.schemas import Coordinates

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    """Anything that can turn ``"<place>, <destination>"`` into a point."""

    async def resolve(self, place: str) -> Optional[Coordinates]: ...

    async def aclose(self) -> None: ...


class _HttpGeocoder:
    """Shared HTTPX plumbing for the concrete geocoders."""

    service = "geocoding"

    def __init__(
        self,
        *,
        base_url: str,
        timeout_s: float = 10.0,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"accept": "application/json", **(headers or {})},
            timeout=httpx.Timeout(timeout_s, connect=min(timeout_s, 5.0)),
        )

    async def aclose(self) -> None:
        """Close the underlying HTTPX client."""

        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._client.aclose()

    async def _aget(self, path: str, params: Dict[str, Any]) -> Any:
        """Execute a GET request and return the parsed JSON body."""

        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise CollaboratorError(self.service, str(exc), status_code=exc.response.status_code) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise CollaboratorError(self.service, str(exc) or type(exc).__name__) from exc


class GoogleGeocoder(_HttpGeocoder):
    """Google Geocoding API (``/geocode/json``)."""

    service = "google-geocoding"

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://maps.googleapis.com/maps/api",
        timeout_s: float = 10.0,
    ) -> None:
        super().__init__(base_url=base_url, timeout_s=timeout_s)
        self.api_key = api_key

    async def resolve(self, place: str) -> Optional[Coordinates]:
        """Return the first result's location, ``None`` when nothing matched."""

        if not place or not place.strip():
            return None

        data = await self._aget("/geocode/json", {"address": place, "key": self.api_key})
        status = data.get("status") if isinstance(data, dict) else None
        if status == "ZERO_RESULTS":
            return None
        if status not in (None, "OK"):
            raise CollaboratorError(self.service, data.get("error_message") or str(status))

        results = data.get("results") or []
        if not results:
            return None
        location = (results[0].get("geometry") or {}).get("location") or {}
        if "lat" not in location or "lng" not in location:
            return None
        return Coordinates(lat=location["lat"], lng=location["lng"])


class NominatimGeocoder(_HttpGeocoder):
    """Public OpenStreetMap Nominatim search; needs no API key."""

    service = "nominatim"

    def __init__(
        self,
        *,
        base_url: str = "https://nominatim.openstreetmap.org",
        user_agent: str = "TripMind/1.0",
        timeout_s: float = 10.0,
    ) -> None:
        super().__init__(base_url=base_url, timeout_s=timeout_s, headers={"User-Agent": user_agent})

    async def resolve(self, place: str) -> Optional[Coordinates]:
        """Return the best match as coordinates or ``None``."""

        if not place or not place.strip():
            return None

        data = await self._aget("/search", {"q": place, "format": "json", "limit": 1})
        if not data:
            return None
        first = data[0]
        return Coordinates(lat=float(first["lat"]), lng=float(first["lon"]))


def create_geocoder(settings: ApiSettings) -> Geocoder:
    """Prefer Google when a key is configured, otherwise fall back to Nominatim."""

    if settings.google_maps_api_key:
        return GoogleGeocoder(settings.google_maps_api_key, timeout_s=settings.http_timeout_s)
    logger.info("GOOGLE_MAPS_API_KEY not set; geocoding through Nominatim")
    return NominatimGeocoder(timeout_s=settings.http_timeout_s)
