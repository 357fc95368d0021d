"""
Adapters — thin wrappers over the workspace REST API.

client.py owns the HTTP transport and error classification.
notebooks.py maps one method to one /workspace endpoint.
"""

from .client import ApiClient
from .notebooks import NotebooksAPI
from .services import get_api_client, clear_client_cache

__all__ = [
    "ApiClient",
    "NotebooksAPI",
    "get_api_client",
    "clear_client_cache",
]
