"""
Logging for dbws.

Everything logs under the "dbws" logger. Adapters record each workspace
endpoint they hit (debug) and every failed HTTP exchange (warning).
The CLI prints JSON results on stdout, so log records always go to stderr.
models.py and config.py stay silent.
"""

import logging
import sys

logger = logging.getLogger("dbws")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Set the dbws log level and attach a stderr handler once.

    Nothing is configured at import time; cli.main() calls this, library
    users configure the "dbws" logger themselves.

    Args:
        level: DEBUG, INFO, WARNING or ERROR
    """
    logger.setLevel(getattr(logging, level.upper()))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)


def log_api_call(service: str, method: str, **params: object) -> None:
    """Record an endpoint call, e.g. workspace.list(path='/Shared')."""
    args = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    logger.debug(f"API: {service}.{method}({args})")


def log_api_result(service: str, method: str, result_count: int | None = None) -> None:
    """Record that an endpoint call finished, with an item count for listings."""
    suffix = f" -> {result_count} objects" if result_count is not None else " ok"
    logger.debug(f"API: {service}.{method}{suffix}")


def log_http_failure(method: str, url: str, status: int | None, reason: str) -> None:
    """Record a failed HTTP exchange just before it is raised as WorkspaceError."""
    where = f"HTTP {status}" if status is not None else "transport"
    logger.warning(f"{method} {url} failed ({where}): {reason}")
