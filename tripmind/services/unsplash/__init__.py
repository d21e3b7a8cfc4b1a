"""Unsplash image search integration.

Public API:
    - ImageSearch: Protocol implemented by image-search clients
    - UnsplashClient: Async HTTPX client for ``/search/photos``
    - create_unsplash_client: Factory reading the access key from settings
"""
from tripmind.services.unsplash.client import ImageSearch, UnsplashClient, create_unsplash_client

__all__ = [
    "ImageSearch",
    "UnsplashClient",
    "create_unsplash_client",
]
