"""
Tests for models — wire parsing/rendering and the structured error.
"""

import pytest

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
    encode_content,
)


class TestWorkspaceObjectStatus:
    def test_from_dict_full(self) -> None:
        status = WorkspaceObjectStatus.from_dict({
            "path": "/Shared/etl",
            "object_type": "NOTEBOOK",
            "object_id": 99,
            "language": "PYTHON",
        })

        assert status.path == "/Shared/etl"
        assert status.object_type is ObjectType.NOTEBOOK
        assert status.object_id == 99
        assert status.language is Language.PYTHON
        assert status.is_notebook
        assert not status.is_directory

    def test_extra_fields_ignored(self) -> None:
        status = WorkspaceObjectStatus.from_dict({
            "path": "/Shared/f.txt",
            "object_type": "FILE",
            "created_at": 1700000000,
            "size": 12,
        })
        assert status.object_type is ObjectType.FILE
        assert status.object_id is None

    @pytest.mark.parametrize("raw", [
        {"object_type": "NOTEBOOK"},
        {"path": "", "object_type": "NOTEBOOK"},
        {"path": "/a"},
        {"path": "/a", "object_type": ""},
        {"path": "/a", "object_type": 3},
        {"path": "/a", "object_type": "NOTEBOOK", "language": 7},
        {"path": "/a", "object_type": "NOTEBOOK", "object_id": "12"},
        ["not", "a", "dict"],
    ])
    def test_malformed_inputs(self, raw: object) -> None:
        with pytest.raises(WorkspaceError) as exc_info:
            WorkspaceObjectStatus.from_dict(raw)
        assert exc_info.value.kind == ErrorKind.MALFORMED_RESPONSE

    def test_unrecognised_object_type_parses_as_unknown(self) -> None:
        status = WorkspaceObjectStatus.from_dict({
            "path": "/Shared/sales",
            "object_type": "DASHBOARD",
            "object_id": 5,
        })

        assert status.object_type is ObjectType.UNKNOWN
        assert not status.is_notebook
        assert not status.is_directory
        assert status.to_dict() == {"path": "/Shared/sales", "object_type": "DASHBOARD", "object_id": 5}

    def test_unrecognised_language_parses_as_unknown(self) -> None:
        status = WorkspaceObjectStatus.from_dict({
            "path": "/Shared/nb",
            "object_type": "NOTEBOOK",
            "language": "JULIA",
        })

        assert status.is_notebook
        assert status.language is Language.UNKNOWN
        assert status.to_dict()["language"] == "JULIA"

    def test_to_dict_omits_unset(self) -> None:
        status = WorkspaceObjectStatus(path="/Shared", object_type=ObjectType.DIRECTORY)
        assert status.to_dict() == {"path": "/Shared", "object_type": "DIRECTORY"}


class TestRequests:
    def test_import_request_renders_enums(self) -> None:
        request = NotebookImportRequest(
            path="/a", content="eA==", language=Language.R, format=ExportFormat.SOURCE,
        )
        assert request.to_dict() == {
            "path": "/a",
            "content": "eA==",
            "language": "R",
            "format": "SOURCE",
            "overwrite": False,
        }

    def test_delete_request(self) -> None:
        assert NotebookDeleteRequest("/a", True).to_dict() == {"path": "/a", "recursive": True}


class TestContent:
    def test_encode_then_decode(self) -> None:
        encoded = encode_content(b"# Databricks notebook source\nprint(1)\n")
        assert NotebookContent(content=encoded).decode() == b"# Databricks notebook source\nprint(1)\n"

    def test_missing_content_is_empty(self) -> None:
        assert NotebookContent.from_dict({}).content == ""

    def test_invalid_base64(self) -> None:
        with pytest.raises(WorkspaceError) as exc_info:
            NotebookContent(content="not base64!!").decode()
        assert exc_info.value.kind == ErrorKind.MALFORMED_RESPONSE


class TestWorkspaceError:
    def test_to_dict(self) -> None:
        error = WorkspaceError(
            ErrorKind.NOT_FOUND,
            "Path doesn't exist",
            details={"path": "/x"},
            status_code=404,
            error_code="RESOURCE_DOES_NOT_EXIST",
        )
        assert error.to_dict() == {
            "error": True,
            "kind": "not_found",
            "message": "Path doesn't exist",
            "status_code": 404,
            "error_code": "RESOURCE_DOES_NOT_EXIST",
            "path": "/x",
        }

    def test_is_exception(self) -> None:
        with pytest.raises(WorkspaceError, match="boom"):
            raise WorkspaceError(ErrorKind.UNKNOWN, "boom")
