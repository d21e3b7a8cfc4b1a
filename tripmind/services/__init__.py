"""External service integrations used by trip enrichment.

This package provides async clients for the collaborators that enrichment
consults after a trip has been normalised:

- Geocoding: place description to coordinates (Google, or Nominatim fallback)
- Unsplash: landscape photo search for the trip's cover image

Each service module exports:
    - create_*: Factory building the client from ``ApiSettings``
    - A Protocol describing the contract, so tests can pass fakes

Example Usage:
    >>> from tripmind.services.geocoding import create_geocoder
    >>> from tripmind.core.config import ApiSettings
    >>>
    >>> settings = ApiSettings.from_env()
    >>> geocoder = create_geocoder(settings)
    >>> coords = await geocoder.resolve("Louvre Museum, Paris")
"""

# Geocoding
from tripmind.services.geocoding import (
    Geocoder,
    GoogleGeocoder,
    NominatimGeocoder,
    create_geocoder,
)

# Unsplash image search
from tripmind.services.unsplash import (
    ImageSearch,
    UnsplashClient,
    create_unsplash_client,
)

__all__ = [
    # Geocoding
    "Geocoder",
    "GoogleGeocoder",
    "NominatimGeocoder",
    "create_geocoder",
    # Unsplash
    "ImageSearch",
    "UnsplashClient",
    "create_unsplash_client",
]
