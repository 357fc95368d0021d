"""
Shared test helpers for dbws.

Centralizes mock wiring patterns that repeat across test files.
"""

from __future__ import annotations

from typing import Any, Callable
from unittest.mock import MagicMock, seal

import httpx

from adapters.client import ApiClient
from models import WorkspaceError


def mock_client(
    response: Any = None,
    *,
    side_effect: Any = None,
) -> MagicMock:
    """Build a sealed ApiClient mock whose perform_query is pre-wired.

    Sealing prevents MagicMock from silently creating new attributes when
    production code calls a client method the test didn't set up.

    Args:
        response: Return value of perform_query (defaults to {})
        side_effect: Alternative to response, e.g. an exception or a callable

    Example:
        client = mock_client({"objects": []})
        NotebooksAPI(client).list("/Shared")
        client.perform_query.assert_called_once_with(
            "GET", "/workspace/list", "2.0", {"path": "/Shared"}
        )
    """
    client = MagicMock(spec=ApiClient)
    if side_effect is not None:
        client.perform_query.side_effect = side_effect
    else:
        client.perform_query.return_value = {} if response is None else response
    seal(client)
    return client


def tree_responder(
    tree: dict[str, list[dict[str, Any]]],
    errors: dict[str, WorkspaceError] | None = None,
) -> Callable[..., dict[str, Any]]:
    """Serve /workspace/list calls from an in-memory tree.

    Args:
        tree: Directory path -> list of raw objects returned for that path
        errors: Directory path -> error raised when that path is listed

    Returns:
        Callable suitable for perform_query side_effect. Listing a path
        missing from tree returns {} (the API omits "objects" when empty).
    """
    errors = errors or {}

    def respond(method: str, path: str, api_version: str, data: dict[str, Any]) -> dict[str, Any]:
        assert (method, path) == ("GET", "/workspace/list"), f"unexpected call {method} {path}"
        target = data["path"]
        if target in errors:
            raise errors[target]
        if target not in tree:
            return {}
        return {"objects": tree[target]}

    return respond


def listed_paths(client: MagicMock) -> list[str]:
    """Paths passed to /workspace/list, in call order."""
    return [c.args[3]["path"] for c in client.perform_query.call_args_list]


def notebook(path: str, object_id: int = 1, language: str = "PYTHON") -> dict[str, Any]:
    return {"path": path, "object_type": "NOTEBOOK", "object_id": object_id, "language": language}


def directory(path: str, object_id: int = 1) -> dict[str, Any]:
    return {"path": path, "object_type": "DIRECTORY", "object_id": object_id}


def library(path: str, object_id: int = 1) -> dict[str, Any]:
    return {"path": path, "object_type": "LIBRARY", "object_id": object_id}


def transport_client(handler: Callable[[httpx.Request], httpx.Response], token: str | None = "tok") -> ApiClient:
    """ApiClient backed by httpx.MockTransport instead of the network.

    Usage:
        def handler(request):
            return httpx.Response(200, json={"objects": []})
        client = transport_client(handler)
    """
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return ApiClient("https://example.cloud.databricks.com", token=token, http=http)
