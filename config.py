"""
Connection Configuration - Single Source of Truth

All connection parameters defined here. Do not duplicate elsewhere.
Values come from the environment so the CLI and library share one setup.
"""

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from models import ErrorKind, WorkspaceError

# REST API version every workspace endpoint lives under
API_VERSION = "2.0"

# Environment variables
HOST_ENV = "DATABRICKS_HOST"
TOKEN_ENV = "DATABRICKS_TOKEN"
TIMEOUT_ENV = "DBWS_HTTP_TIMEOUT"

# Default timeout for all API calls (seconds)
# Prevents indefinite hangs when the workspace is slow or a connection stalls
DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True)
class ClientConfig:
    """Resolved settings for building an ApiClient."""
    host: str
    token: str | None = None
    timeout: float = DEFAULT_TIMEOUT


def normalize_host(host: str) -> str:
    """
    Normalize a workspace host into a base URL.

    Examples:
        "adb-123.azuredatabricks.net" -> "https://adb-123.azuredatabricks.net"
        "https://example.cloud.databricks.com/" -> "https://example.cloud.databricks.com"
    """
    host = host.strip().rstrip("/")
    if not host.startswith(("http://", "https://")):
        host = f"https://{host}"
    return host


def load_config(env: Mapping[str, str] | None = None) -> ClientConfig:
    """
    Build ClientConfig from environment variables.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Raises:
        WorkspaceError: INVALID_INPUT if the host is missing or the
            timeout isn't a positive number
    """
    env = os.environ if env is None else env

    host = env.get(HOST_ENV, "").strip()
    if not host:
        raise WorkspaceError(
            ErrorKind.INVALID_INPUT,
            f"{HOST_ENV} is not set",
        )

    raw_timeout = env.get(TIMEOUT_ENV)
    timeout = DEFAULT_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            timeout = -1.0
        if not math.isfinite(timeout) or timeout <= 0:
            raise WorkspaceError(
                ErrorKind.INVALID_INPUT,
                f"{TIMEOUT_ENV} must be a positive number of seconds, got {raw_timeout!r}",
            )

    return ClientConfig(
        host=normalize_host(host),
        token=env.get(TOKEN_ENV) or None,
        timeout=timeout,
    )
