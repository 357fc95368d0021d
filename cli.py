#!/usr/bin/env python3
"""
CLI interface for dbws.

Usage:
    dbws ls /Users/me@example.com [-r]
    dbws status /Users/me@example.com/etl
    dbws export /Users/me@example.com/etl --format JUPYTER -o etl.ipynb
    dbws import /Users/me@example.com/etl etl.py --language PYTHON
    dbws mkdirs /Users/me@example.com/reports/2026
    dbws rm /Users/me@example.com/scratch -r

Connection settings come from DATABRICKS_HOST / DATABRICKS_TOKEN.
Results are printed as JSON on stdout; logs go to stderr.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from adapters.notebooks import NotebooksAPI
from logging_config import configure_logging
from models import (
    ErrorKind,
    ExportFormat,
    Language,
    NotebookContent,
    WorkspaceError,
    encode_content,
)


def _print(result: Any) -> None:
    print(json.dumps(result, indent=2))


def cmd_ls(api: NotebooksAPI, args: argparse.Namespace) -> None:
    """List a directory."""
    objects = api.list(args.path, recursive=args.recursive)
    _print([obj.to_dict() for obj in objects])


def cmd_status(api: NotebooksAPI, args: argparse.Namespace) -> None:
    """Show metadata for one path."""
    _print(api.read(args.path).to_dict())


def cmd_export(api: NotebooksAPI, args: argparse.Namespace) -> None:
    """Export a notebook, to stdout as base64 or to a file as raw bytes."""
    fmt = ExportFormat(args.format)
    content = api.export(args.path, fmt)

    if args.output is None:
        _print({"path": args.path, "format": fmt.value, "content": content})
        return

    data = NotebookContent(content=content).decode()
    output = Path(args.output)
    output.write_bytes(data)
    _print({
        "path": args.path,
        "format": fmt.value,
        "output": str(output),
        "bytes": len(data),
    })


def cmd_import(api: NotebooksAPI, args: argparse.Namespace) -> None:
    """Import a local file as a notebook."""
    if args.file == "-":
        data = sys.stdin.buffer.read()
    else:
        data = Path(args.file).read_bytes()

    language = Language(args.language) if args.language else None
    fmt = ExportFormat(args.format)
    api.create(args.path, encode_content(data), language, fmt, args.overwrite)
    _print({"path": args.path, "imported": True, "bytes": len(data)})


def cmd_mkdirs(api: NotebooksAPI, args: argparse.Namespace) -> None:
    """Create a directory and its parents."""
    api.mkdirs(args.path)
    _print({"path": args.path, "created": True})


def cmd_rm(api: NotebooksAPI, args: argparse.Namespace) -> None:
    """Delete a notebook or directory."""
    api.delete(args.path, recursive=args.recursive)
    _print({"path": args.path, "deleted": True})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dbws",
        description="Workspace notebook management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    dbws ls /Shared -r
    dbws status /Shared/etl
    dbws export /Shared/etl --format SOURCE -o etl.py
    echo "print(1)" | dbws import /Shared/hello - --language PYTHON
    dbws rm /Shared/old -r
""",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for stderr output (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    formats = [f.value for f in ExportFormat]

    # ls
    ls_p = subparsers.add_parser("ls", help="List a workspace directory")
    ls_p.add_argument("path", help="Workspace path")
    ls_p.add_argument(
        "-r", "--recursive",
        action="store_true",
        help="Walk subdirectories and list notebooks only",
    )
    ls_p.set_defaults(func=cmd_ls)

    # status
    status_p = subparsers.add_parser("status", help="Show object metadata")
    status_p.add_argument("path", help="Workspace path")
    status_p.set_defaults(func=cmd_status)

    # export
    export_p = subparsers.add_parser("export", help="Export notebook content")
    export_p.add_argument("path", help="Notebook path")
    export_p.add_argument(
        "--format",
        choices=formats,
        default=ExportFormat.SOURCE.value,
        help="Export format (default: SOURCE)",
    )
    export_p.add_argument(
        "-o", "--output",
        help="Write decoded content to this file instead of printing base64",
    )
    export_p.set_defaults(func=cmd_export)

    # import
    import_p = subparsers.add_parser("import", help="Import a file as a notebook")
    import_p.add_argument("path", help="Destination notebook path")
    import_p.add_argument("file", help="Local file to upload (- for stdin)")
    import_p.add_argument(
        "--language",
        choices=[lang.value for lang in Language if lang is not Language.UNKNOWN],
        help="Notebook language (required for SOURCE imports)",
    )
    import_p.add_argument(
        "--format",
        choices=formats,
        default=ExportFormat.SOURCE.value,
        help="Format of the uploaded file (default: SOURCE)",
    )
    import_p.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace an existing notebook",
    )
    import_p.set_defaults(func=cmd_import)

    # mkdirs
    mkdirs_p = subparsers.add_parser("mkdirs", help="Create a directory and its parents")
    mkdirs_p.add_argument("path", help="Workspace path")
    mkdirs_p.set_defaults(func=cmd_mkdirs)

    # rm
    rm_p = subparsers.add_parser("rm", help="Delete a notebook or directory")
    rm_p.add_argument("path", help="Workspace path")
    rm_p.add_argument(
        "-r", "--recursive",
        action="store_true",
        help="Delete a non-empty directory",
    )
    rm_p.set_defaults(func=cmd_rm)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        api = NotebooksAPI()
        args.func(api, args)
    except WorkspaceError as e:
        _print(e.to_dict())
        return 1
    except OSError as e:
        # Local file for import/export couldn't be read or written
        error = WorkspaceError(
            ErrorKind.INVALID_INPUT,
            f"{e.strerror or e}: {e.filename}" if e.filename else str(e),
        )
        _print(error.to_dict())
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
