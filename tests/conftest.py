"""
Shared pytest fixtures for dbws tests.

Fixtures are loaded from the fixtures/ directory at project root.
The workspace tree fixture drives the recursive listing tests.
"""

import json
import logging
from pathlib import Path
from typing import Any, Generator

import pytest

from adapters.services import clear_client_cache
from config import HOST_ENV, TOKEN_ENV, TIMEOUT_ENV
from logging_config import logger

# Project root for fixture loading
PROJECT_ROOT = Path(__file__).parent.parent
FIXTURES_DIR = PROJECT_ROOT / "fixtures"


def load_fixture(category: str, name: str) -> Any:
    """
    Load a JSON fixture by category and name.

    Example:
        load_fixture("workspace", "tree")  # loads fixtures/workspace/tree.json
    """
    fixture_path = FIXTURES_DIR / category / f"{name}.json"
    with open(fixture_path) as f:
        return json.load(f)


# ============================================================================
# Workspace Fixtures
# ============================================================================

@pytest.fixture
def workspace_tree() -> dict[str, list[dict[str, Any]]]:
    """
    Directory path -> objects returned by /workspace/list for it.

    /Shared
    ├── etl/                (dir)
    │   ├── ingest          (notebook)
    │   ├── daily/          (dir)
    │   │   └── rollup      (notebook)
    │   ├── empty/          (dir, no "objects" key)
    │   ├── schema.json     (file)
    │   ├── pipelines       (repo, has a notebook inside)
    │   └── overview        (dashboard, not a known type)
    ├── report              (notebook)
    └── utils.jar           (library)
    """
    return load_fixture("workspace", "tree")


@pytest.fixture
def notebooks_only_tree() -> dict[str, list[dict[str, Any]]]:
    """Tree whose leaves are all notebooks."""
    return load_fixture("workspace", "notebooks_only")


# ============================================================================
# Environment isolation
# ============================================================================

@pytest.fixture(autouse=True)
def _isolate_client_env(
    request: pytest.FixtureRequest,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Keep real credentials and the cached client out of unit tests."""
    if request.node.get_closest_marker("integration") is None:
        for name in (HOST_ENV, TOKEN_ENV, TIMEOUT_ENV):
            monkeypatch.delenv(name, raising=False)
    clear_client_cache()
    yield
    clear_client_cache()
    # cli.main() attaches a stderr handler bound to the capture stream
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
