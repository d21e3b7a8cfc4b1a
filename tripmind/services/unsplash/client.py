"""Thin async wrapper around the Unsplash photo search endpoint."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

import httpx

from tripmind.core.config import ApiSettings
from tripmind.core.errors import CollaboratorError
from tripmind.core.schemas import ImageUrls


class ImageSearch(Protocol):
    """Returns one page of candidate images for a query."""

    async def search(self, query: str, page: int = 1) -> List[ImageUrls]: ...

    async def aclose(self) -> None: ...


class UnsplashClient:
    """Search landscape photos through the Unsplash API v1."""

    service = "unsplash"

    def __init__(
        self,
        access_key: str,
        *,
        base_url: str = "https://api.unsplash.com",
        per_page: int = 10,
        orientation: Optional[str] = "landscape",
        timeout_s: float = 10.0,
    ) -> None:
        self.access_key = access_key
        self.per_page = per_page
        self.orientation = orientation
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"accept": "application/json", "Accept-Version": "v1"},
            timeout=httpx.Timeout(timeout_s, connect=min(timeout_s, 5.0)),
        )

    async def aclose(self) -> None:
        """Close the underlying HTTPX client."""

        await self._client.aclose()

    async def __aenter__(self) -> "UnsplashClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._client.aclose()

    async def _aget(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise CollaboratorError(self.service, str(exc), status_code=exc.response.status_code) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise CollaboratorError(self.service, str(exc) or type(exc).__name__) from exc

    async def search(self, query: str, page: int = 1) -> List[ImageUrls]:
        """Return the URL variants of every photo on the requested page."""

        params: Dict[str, Any] = {
            "query": query,
            "page": max(1, page),
            "per_page": self.per_page,
            "client_id": self.access_key,
        }
        if self.orientation:
            params["orientation"] = self.orientation

        data = await self._aget("/search/photos", params)
        images: List[ImageUrls] = []
        for item in data.get("results") or []:
            urls = item.get("urls") if isinstance(item, dict) else None
            if isinstance(urls, dict):
                images.append(ImageUrls(**urls))
        return images


def create_unsplash_client(settings: ApiSettings) -> UnsplashClient:
    """Instantiate the Unsplash client using project configuration."""

    return UnsplashClient(settings.ensure("unsplash_access_key"), timeout_s=settings.http_timeout_s)
