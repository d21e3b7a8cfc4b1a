"""Tests for service modules."""
from __future__ import annotations

import pytest
from unittest.mock import Mock, patch, AsyncMock
import httpx

from tripmind.core.config import ApiSettings
from tripmind.core.errors import CollaboratorError
from tripmind.core.schemas import Coordinates, ImageUrls
from tripmind.services.geocoding import (
    GoogleGeocoder,
    NominatimGeocoder,
    create_geocoder,
)
from tripmind.services.unsplash import UnsplashClient, create_unsplash_client


def _response(payload) -> Mock:
    """httpx Response methods are sync, so a plain Mock stands in."""

    response = Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def mock_client():
    """Create a mock HTTPX client for testing."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.return_value = _response({})
    return mock_client


# Google geocoding Tests
class TestGoogleGeocoder:
    """Test suite for the Google geocoding client."""

    @pytest.fixture
    def geocoder(self, mock_client):
        with patch("httpx.AsyncClient", return_value=mock_client):
            geocoder = GoogleGeocoder(api_key="test-key")
            geocoder._client = mock_client
            return geocoder

    async def test_resolve_success(self, geocoder, mock_client):
        mock_client.get.return_value = _response(
            {
                "status": "OK",
                "results": [{"geometry": {"location": {"lat": 48.8606, "lng": 2.3376}}}],
            }
        )

        result = await geocoder.resolve("Louvre Museum, Paris")

        assert result == Coordinates(lat=48.8606, lng=2.3376)
        mock_client.get.assert_called_once_with(
            "/geocode/json", params={"address": "Louvre Museum, Paris", "key": "test-key"}
        )

    async def test_zero_results_is_none(self, geocoder, mock_client):
        mock_client.get.return_value = _response({"status": "ZERO_RESULTS", "results": []})

        assert await geocoder.resolve("Atlantis") is None

    async def test_denied_request_raises_collaborator_error(self, geocoder, mock_client):
        mock_client.get.return_value = _response(
            {"status": "REQUEST_DENIED", "error_message": "The provided API key is invalid."}
        )

        with pytest.raises(CollaboratorError, match="API key is invalid"):
            await geocoder.resolve("Paris")

    async def test_http_status_error_is_wrapped(self, geocoder, mock_client):
        request = httpx.Request("GET", "https://maps.googleapis.com/maps/api/geocode/json")
        error_response = httpx.Response(503, request=request)
        response = Mock()
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Service Unavailable", request=request, response=error_response
        )
        mock_client.get.return_value = response

        with pytest.raises(CollaboratorError) as exc_info:
            await geocoder.resolve("Paris")

        assert exc_info.value.status_code == 503
        assert exc_info.value.service == "google-geocoding"

    async def test_timeout_is_wrapped(self, geocoder, mock_client):
        mock_client.get.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(CollaboratorError, match="timed out"):
            await geocoder.resolve("Paris")

    async def test_blank_place_skips_request(self, geocoder, mock_client):
        assert await geocoder.resolve("   ") is None
        mock_client.get.assert_not_called()


# Nominatim Tests
class TestNominatimGeocoder:
    """Test suite for the Nominatim fallback geocoder."""

    @pytest.fixture
    def geocoder(self, mock_client):
        with patch("httpx.AsyncClient", return_value=mock_client):
            geocoder = NominatimGeocoder()
            geocoder._client = mock_client
            return geocoder

    async def test_resolve_success(self, geocoder, mock_client):
        mock_client.get.return_value = _response(
            [{"lat": "35.6895", "lon": "139.6917", "display_name": "Tokyo, Japan"}]
        )

        result = await geocoder.resolve("Tokyo, Japan")

        assert result == Coordinates(lat=35.6895, lng=139.6917)
        mock_client.get.assert_called_once_with(
            "/search", params={"q": "Tokyo, Japan", "format": "json", "limit": 1}
        )

    async def test_no_results(self, geocoder, mock_client):
        mock_client.get.return_value = _response([])

        assert await geocoder.resolve("Nonexistent Place") is None

    async def test_invalid_json_is_wrapped(self, geocoder, mock_client):
        response = _response(None)
        response.json.side_effect = ValueError("Expecting value")
        mock_client.get.return_value = response

        with pytest.raises(CollaboratorError):
            await geocoder.resolve("Tokyo")

    async def test_close(self, geocoder, mock_client):
        await geocoder.aclose()

        mock_client.aclose.assert_awaited_once()


def test_create_geocoder_prefers_google():
    with patch("httpx.AsyncClient"):
        assert isinstance(create_geocoder(ApiSettings(google_maps_api_key="key")), GoogleGeocoder)
        assert isinstance(create_geocoder(ApiSettings()), NominatimGeocoder)


# Unsplash Tests
class TestUnsplashClient:
    """Test suite for the Unsplash image search client."""

    @pytest.fixture
    def unsplash_client(self, mock_client):
        with patch("httpx.AsyncClient", return_value=mock_client):
            client = UnsplashClient(access_key="test-key")
            client._client = mock_client
            return client

    async def test_init_with_defaults(self):
        with patch("httpx.AsyncClient") as mock_httpx:
            client = UnsplashClient(access_key="test-key")
            mock_httpx.assert_called_once()
            assert client.per_page == 10
            assert client.orientation == "landscape"

    async def test_search_success(self, unsplash_client, mock_client):
        mock_client.get.return_value = _response(
            {
                "total": 2,
                "results": [
                    {"id": "a", "urls": {"raw": "r", "full": "https://img/a-full", "regular": "https://img/a"}},
                    {"id": "b", "urls": {"regular": "https://img/b"}},
                    {"id": "c"},
                ],
            }
        )

        images = await unsplash_client.search("Paris summer travel landscape", page=3)

        assert images == [
            ImageUrls(full="https://img/a-full", regular="https://img/a"),
            ImageUrls(regular="https://img/b"),
        ]
        mock_client.get.assert_called_once_with(
            "/search/photos",
            params={
                "query": "Paris summer travel landscape",
                "page": 3,
                "per_page": 10,
                "client_id": "test-key",
                "orientation": "landscape",
            },
        )

    async def test_search_empty_results(self, unsplash_client, mock_client):
        mock_client.get.return_value = _response({"total": 0, "results": []})

        assert await unsplash_client.search("nowhere") == []

    async def test_rate_limit_is_wrapped(self, unsplash_client, mock_client):
        request = httpx.Request("GET", "https://api.unsplash.com/search/photos")
        response = Mock()
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Rate Limit Exceeded", request=request, response=httpx.Response(403, request=request)
        )
        mock_client.get.return_value = response

        with pytest.raises(CollaboratorError) as exc_info:
            await unsplash_client.search("Paris")

        assert exc_info.value.status_code == 403


def test_create_unsplash_client_requires_key():
    with pytest.raises(RuntimeError, match="unsplash_access_key"):
        create_unsplash_client(ApiSettings())
