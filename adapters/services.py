"""
Shared API client initialization.

Used by all adapters. Reads config from the environment, builds one
ApiClient per process. Uses lru_cache for thread-safe caching.
"""

from functools import lru_cache

from adapters.client import ApiClient
from config import load_config

__all__ = [
    "get_api_client",
    "clear_client_cache",
]


@lru_cache(maxsize=1)
def get_api_client() -> ApiClient:
    """Get the shared workspace API client (cached, thread-safe)."""
    return ApiClient.from_config(load_config())


def clear_client_cache() -> None:
    """Close and forget the cached client. Useful for testing or after a config change."""
    if get_api_client.cache_info().currsize:
        get_api_client().close()
    get_api_client.cache_clear()
