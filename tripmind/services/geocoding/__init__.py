"""Geocoding and location resolution services.

This module converts free-text place descriptions into coordinates using the
Google Geocoding API, or the Nominatim OpenStreetMap API when no Google key is
configured.

Public API:
    - Geocoder: Protocol implemented by the clients
    - GoogleGeocoder / NominatimGeocoder: Async HTTPX clients
    - create_geocoder: Factory choosing a client from settings
"""
from tripmind.services.geocoding.client import (
    Geocoder,
    GoogleGeocoder,
    NominatimGeocoder,
    create_geocoder,
)

__all__ = [
    "Geocoder",
    "GoogleGeocoder",
    "NominatimGeocoder",
    "create_geocoder",
]
