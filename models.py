"""
Type definitions for dbws.

Dataclasses defining the contracts between layers:
- The HTTP client produces plain dicts from API responses
- Adapters turn those dicts into these structures
- The CLI renders them back to JSON

Wire names match the Workspace API 2.0 (path, object_type, language, ...).
"""

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ============================================================================
# ERROR TYPES
# ============================================================================

class ErrorKind(Enum):
    """Categories of errors for consistent handling."""
    UNAUTHENTICATED = "unauthenticated"      # Missing or rejected token
    PERMISSION_DENIED = "permission_denied"  # No access to path
    NOT_FOUND = "not_found"                  # Path doesn't exist
    ALREADY_EXISTS = "already_exists"        # Import without overwrite
    INVALID_INPUT = "invalid_input"          # Bad parameters or config
    RATE_LIMITED = "rate_limited"            # Hit API quota
    SERVER_ERROR = "server_error"            # Remote 5xx
    NETWORK_ERROR = "network_error"          # Connection failed
    TIMEOUT = "timeout"                      # Request timed out
    MALFORMED_RESPONSE = "malformed_response"  # Body isn't what we expected
    UNKNOWN = "unknown"                      # Unexpected error


class WorkspaceError(Exception):
    """
    Structured error for consistent handling across layers.

    The HTTP client raises these on API failures.
    Adapters let them propagate unchanged; the CLI formats them.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        error_code: str | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        self.error_code = error_code

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {
            "error": True,
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.status_code is not None:
            result["status_code"] = self.status_code
        if self.error_code:
            result["error_code"] = self.error_code
        return {**result, **self.details}


# ============================================================================
# WORKSPACE ENUMS
# ============================================================================

class ObjectType(Enum):
    """
    Kinds of object the workspace reports.

    The API adds types over time (DASHBOARD, ...); anything not listed here
    parses as UNKNOWN rather than failing.
    """
    NOTEBOOK = "NOTEBOOK"
    DIRECTORY = "DIRECTORY"
    LIBRARY = "LIBRARY"
    FILE = "FILE"
    REPO = "REPO"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> "ObjectType | None":
        if isinstance(value, str) and value:
            return cls.UNKNOWN
        return None


class Language(Enum):
    """Notebook languages. Unlisted values parse as UNKNOWN."""
    SCALA = "SCALA"
    PYTHON = "PYTHON"
    SQL = "SQL"
    R = "R"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> "Language | None":
        if isinstance(value, str) and value:
            return cls.UNKNOWN
        return None


class ExportFormat(Enum):
    """Encodings for notebook content on import and export."""
    SOURCE = "SOURCE"
    HTML = "HTML"
    JUPYTER = "JUPYTER"
    DBC = "DBC"


def _malformed(message: str, raw: Any) -> WorkspaceError:
    return WorkspaceError(
        ErrorKind.MALFORMED_RESPONSE,
        message,
        details={"body": raw},
    )


# ============================================================================
# WORKSPACE TYPES
# ============================================================================

@dataclass
class WorkspaceObjectStatus:
    """
    Metadata for one workspace object (never its content).

    raw_object_type / raw_language keep the wire strings so UNKNOWN values
    render back unchanged.
    """
    path: str
    object_type: ObjectType
    object_id: int | None = None
    language: Language | None = None
    raw_object_type: str | None = field(default=None, repr=False, compare=False)
    raw_language: str | None = field(default=None, repr=False, compare=False)

    @property
    def is_notebook(self) -> bool:
        return self.object_type is ObjectType.NOTEBOOK

    @property
    def is_directory(self) -> bool:
        return self.object_type is ObjectType.DIRECTORY

    @classmethod
    def from_dict(cls, raw: Any) -> "WorkspaceObjectStatus":
        """
        Parse a get-status / list entry.

        Unrecognised object_type / language strings become UNKNOWN.

        Raises:
            WorkspaceError: MALFORMED_RESPONSE if path or object_type is
                missing or not a string, or object_id isn't an integer
        """
        if not isinstance(raw, dict):
            raise _malformed("Workspace object is not a JSON object", raw)

        path = raw.get("path")
        if not isinstance(path, str) or not path:
            raise _malformed("Workspace object has no path", raw)

        raw_type = raw.get("object_type")
        if not isinstance(raw_type, str) or not raw_type:
            raise _malformed(f"Workspace object {path} has no object_type", raw)

        raw_language = raw.get("language")
        if raw_language is not None and not isinstance(raw_language, str):
            raise _malformed(f"Workspace object {path}: language is not a string", raw)

        object_id = raw.get("object_id")
        if object_id is not None and not isinstance(object_id, int):
            raise _malformed(f"Workspace object {path}: object_id is not an integer", raw)

        return cls(
            path=path,
            object_type=ObjectType(raw_type),
            object_id=object_id,
            language=Language(raw_language) if raw_language else None,
            raw_object_type=raw_type,
            raw_language=raw_language or None,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "path": self.path,
            "object_type": self.raw_object_type or self.object_type.value,
        }
        if self.object_id is not None:
            result["object_id"] = self.object_id
        if self.language is not None:
            result["language"] = self.raw_language or self.language.value
        return result


@dataclass
class NotebookImportRequest:
    """
    Body of POST /workspace/import.

    content is base64 encoded; language is required by the remote for
    SOURCE imports only, so it stays optional here.
    """
    path: str
    content: str
    language: Language | None = None
    format: ExportFormat | None = None
    overwrite: bool = False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "path": self.path,
            "content": self.content,
            "overwrite": self.overwrite,
        }
        if self.language is not None:
            result["language"] = self.language.value
        if self.format is not None:
            result["format"] = self.format.value
        return result


@dataclass
class NotebookDeleteRequest:
    """Body of POST /workspace/delete."""
    path: str
    recursive: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "recursive": self.recursive}


@dataclass
class NotebookContent:
    """Response of GET /workspace/export."""
    content: str

    @classmethod
    def from_dict(cls, raw: Any) -> "NotebookContent":
        if not isinstance(raw, dict):
            raise _malformed("Export response is not a JSON object", raw)
        content = raw.get("content", "")
        if not isinstance(content, str):
            raise _malformed("Export content is not a string", raw)
        return cls(content=content)

    def decode(self) -> bytes:
        """Decode the base64 payload."""
        try:
            return base64.b64decode(self.content, validate=True)
        except ValueError as e:
            raise _malformed(f"Export content is not valid base64: {e}", self.content) from e


def encode_content(data: bytes) -> str:
    """Base64-encode raw notebook bytes for an import request."""
    return base64.b64encode(data).decode("ascii")
