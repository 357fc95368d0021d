"""
Notebooks adapter — Workspace API 2.0 wrapper.

Create, read metadata, export, mkdirs, list and delete workspace objects.
Each method maps to one endpoint; list(recursive=True) walks the tree with
one list call per directory.

Errors raised by the shared client propagate unchanged.
"""

from __future__ import annotations

import threading

from adapters.client import ApiClient
from adapters.services import get_api_client
from config import API_VERSION
from logging_config import log_api_call, log_api_result
from models import (
    ErrorKind,
    ExportFormat,
    Language,
    NotebookContent,
    NotebookDeleteRequest,
    NotebookImportRequest,
    ObjectType,
    WorkspaceError,
    WorkspaceObjectStatus,
)

__all__ = [
    "NotebooksAPI",
]

SERVICE = "workspace"

# Directory creation is serialized process-wide. Parallel mkdirs calls on
# the same parent can leave two folders with the same name side by side.
# Remove once callers stop creating folders concurrently.
_mkdirs_lock = threading.Lock()


class NotebooksAPI:
    """
    Workspace object client.

    Args:
        client: Shared ApiClient (defaults to the cached process-wide one)
    """

    def __init__(self, client: ApiClient | None = None):
        self.client = client if client is not None else get_api_client()

    def create(
        self,
        path: str,
        content: str,
        language: Language | None,
        format: ExportFormat | None,
        overwrite: bool = False,
    ) -> None:
        """
        Import a notebook at path.

        Args:
            path: Absolute workspace path of the notebook
            content: Base64-encoded notebook (see models.encode_content)
            language: Notebook language (required by the API for SOURCE)
            format: Encoding of content
            overwrite: Replace an existing notebook at path

        Raises:
            WorkspaceError: On API failure
        """
        request = NotebookImportRequest(
            path=path,
            content=content,
            language=language,
            format=format,
            overwrite=overwrite,
        )
        log_api_call(
            SERVICE, "import", path=path,
            language=language.value if language else None,
            format=format.value if format else None,
            overwrite=overwrite,
        )
        self.client.perform_query("POST", "/workspace/import", API_VERSION, request.to_dict())
        log_api_result(SERVICE, "import")

    def read(self, path: str) -> WorkspaceObjectStatus:
        """
        Get metadata (not content) for one path.

        Raises:
            WorkspaceError: NOT_FOUND if path doesn't exist, or on API failure
        """
        log_api_call(SERVICE, "get-status", path=path)
        body = self.client.perform_query("GET", "/workspace/get-status", API_VERSION, {"path": path})
        status = WorkspaceObjectStatus.from_dict(body)
        log_api_result(SERVICE, "get-status")
        return status

    def export(self, path: str, format: ExportFormat | None = None) -> str:
        """
        Export notebook content.

        Returns:
            Base64-encoded content in the requested format

        Raises:
            WorkspaceError: NOT_FOUND if path doesn't exist, or on API failure
        """
        log_api_call(SERVICE, "export", path=path, format=format.value if format else None)
        body = self.client.perform_query(
            "GET",
            "/workspace/export",
            API_VERSION,
            {"path": path, "format": format.value if format else None},
        )
        content = NotebookContent.from_dict(body).content
        log_api_result(SERVICE, "export")
        return content

    def mkdirs(self, path: str) -> None:
        """
        Create path and any missing parents.

        Only one mkdirs call runs at a time in this process.

        Raises:
            WorkspaceError: On API failure
        """
        log_api_call(SERVICE, "mkdirs", path=path)
        with _mkdirs_lock:
            self.client.perform_query("POST", "/workspace/mkdirs", API_VERSION, {"path": path})
        log_api_result(SERVICE, "mkdirs")

    def delete(self, path: str, recursive: bool = False) -> None:
        """
        Delete a notebook or directory.

        Args:
            path: Workspace path
            recursive: Required by the API to delete a non-empty directory

        Raises:
            WorkspaceError: On API failure
        """
        request = NotebookDeleteRequest(path=path, recursive=recursive)
        log_api_call(SERVICE, "delete", path=path, recursive=recursive)
        self.client.perform_query("POST", "/workspace/delete", API_VERSION, request.to_dict())
        log_api_result(SERVICE, "delete")

    def list(self, path: str, recursive: bool = False) -> list[WorkspaceObjectStatus]:
        """
        List objects under path.

        Non-recursive: direct children of every type, in API order.
        Recursive: depth-first walk collecting notebooks only; directories
        are descended into and never returned, other types are skipped.

        Raises:
            WorkspaceError: On the first API failure at any depth. Nothing
                gathered before the failure is returned.
        """
        if not recursive:
            return self._list(path)

        notebooks: list[WorkspaceObjectStatus] = []
        self._collect_notebooks(path, notebooks, {path.rstrip("/") or "/"})
        log_api_result(SERVICE, "list(recursive)", len(notebooks))
        return notebooks

    def _collect_notebooks(
        self,
        path: str,
        notebooks: list[WorkspaceObjectStatus],
        visited: set[str],
    ) -> None:
        for item in self._list(path):
            if item.object_type is ObjectType.NOTEBOOK:
                notebooks.append(item)
            elif item.object_type is ObjectType.DIRECTORY:
                key = item.path.rstrip("/") or "/"
                if key in visited:
                    raise WorkspaceError(
                        ErrorKind.MALFORMED_RESPONSE,
                        f"List of {path} returned already visited directory {item.path}",
                        details={"path": item.path},
                    )
                visited.add(key)
                self._collect_notebooks(item.path, notebooks, visited)

    def _list(self, path: str) -> list[WorkspaceObjectStatus]:
        """One GET /workspace/list call. Missing 'objects' means empty."""
        log_api_call(SERVICE, "list", path=path)
        body = self.client.perform_query("GET", "/workspace/list", API_VERSION, {"path": path})

        raw_objects = body.get("objects") or []
        if not isinstance(raw_objects, list):
            raise WorkspaceError(
                ErrorKind.MALFORMED_RESPONSE,
                f"List of {path} returned non-list objects",
                details={"body": body},
            )

        objects = [WorkspaceObjectStatus.from_dict(raw) for raw in raw_objects]
        log_api_result(SERVICE, "list", len(objects))
        return objects
