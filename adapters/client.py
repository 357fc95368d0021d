"""
Shared HTTP client for the workspace REST API.

One httpx.Client per ApiClient. perform_query() is the only way adapters
talk to the network:
- GET requests send their fields as query parameters
- Everything else sends a JSON body
- Non-2xx responses become WorkspaceError, classified once, here

No retries: a failure is raised on the first attempt.
"""

from typing import Any

import httpx

from config import API_VERSION, DEFAULT_TIMEOUT, ClientConfig
from logging_config import log_http_failure, logger
from models import ErrorKind, WorkspaceError

__all__ = [
    "ApiClient",
    "USER_AGENT",
]

USER_AGENT = "dbws/0.1 (workspace notebooks client)"

# Remote error_code values that pin down the kind better than the status
ERROR_CODE_KINDS: dict[str, ErrorKind] = {
    "RESOURCE_DOES_NOT_EXIST": ErrorKind.NOT_FOUND,
    "RESOURCE_ALREADY_EXISTS": ErrorKind.ALREADY_EXISTS,
    "INVALID_PARAMETER_VALUE": ErrorKind.INVALID_INPUT,
    "PERMISSION_DENIED": ErrorKind.PERMISSION_DENIED,
    "REQUEST_LIMIT_EXCEEDED": ErrorKind.RATE_LIMITED,
}


def _kind_for_status(status: int) -> ErrorKind:
    """Map an HTTP status code to an ErrorKind."""
    if status == 401:
        return ErrorKind.UNAUTHENTICATED
    elif status == 403:
        return ErrorKind.PERMISSION_DENIED
    elif status == 404:
        return ErrorKind.NOT_FOUND
    elif status == 409:
        return ErrorKind.ALREADY_EXISTS
    elif status == 429:
        return ErrorKind.RATE_LIMITED
    elif status >= 500:
        return ErrorKind.SERVER_ERROR
    elif status >= 400:
        return ErrorKind.INVALID_INPUT
    return ErrorKind.UNKNOWN


def _error_from_response(response: httpx.Response) -> WorkspaceError:
    """
    Convert a non-2xx response into a WorkspaceError.

    The workspace API answers errors with {"error_code": ..., "message": ...};
    anything else (HTML from a proxy, empty body) falls back to the raw text.
    """
    status = response.status_code
    error_code: str | None = None
    message = response.text.strip() or response.reason_phrase or f"HTTP {status}"

    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        if isinstance(body.get("error_code"), str):
            error_code = body["error_code"]
        if isinstance(body.get("message"), str) and body["message"]:
            message = body["message"]

    kind = ERROR_CODE_KINDS.get(error_code or "", _kind_for_status(status))
    return WorkspaceError(
        kind,
        message,
        status_code=status,
        error_code=error_code,
    )


def _query_params(data: dict[str, Any]) -> dict[str, str]:
    """Render request fields as query parameters, dropping empty values."""
    params: dict[str, str] = {}
    for key, value in data.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        else:
            params[key] = str(value)
    return params


class ApiClient:
    """
    Thin wrapper around httpx.Client bound to one workspace host.

    Args:
        host: Base URL, e.g. https://example.cloud.databricks.com
        token: Bearer token forwarded as-is (optional)
        timeout: Per-request timeout in seconds
        http: Pre-built httpx.Client (tests inject one with a MockTransport)
    """

    def __init__(
        self,
        host: str,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        http: httpx.Client | None = None,
    ):
        self.host = host.rstrip("/")
        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        if http is None:
            http = httpx.Client(timeout=httpx.Timeout(timeout))
        http.headers.update(headers)
        self._http = http

    @classmethod
    def from_config(cls, config: ClientConfig) -> "ApiClient":
        return cls(config.host, token=config.token, timeout=config.timeout)

    def url_for(self, path: str, api_version: str = API_VERSION) -> str:
        return f"{self.host}/api/{api_version}/{path.lstrip('/')}"

    def perform_query(
        self,
        method: str,
        path: str,
        api_version: str = API_VERSION,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Issue one API call and return the decoded JSON object.

        Args:
            method: HTTP method (GET, POST, ...)
            path: Endpoint path, e.g. /workspace/list
            api_version: REST API version segment
            data: Request fields (query params for GET, JSON body otherwise)

        Returns:
            Decoded response object ({} for an empty body)

        Raises:
            WorkspaceError: On transport failure, non-2xx status, or a body
                that isn't a JSON object
        """
        method = method.upper()
        url = self.url_for(path, api_version)
        data = data or {}

        request_kwargs: dict[str, Any] = {}
        if method == "GET":
            request_kwargs["params"] = _query_params(data)
        else:
            request_kwargs["json"] = {k: v for k, v in data.items() if v is not None}

        logger.debug(f"{method} {url}")
        try:
            response = self._http.request(method, url, **request_kwargs)
        except httpx.TimeoutException as e:
            log_http_failure(method, url, None, str(e))
            raise WorkspaceError(
                ErrorKind.TIMEOUT,
                f"{method} {path} timed out: {e}",
            ) from e
        except httpx.TransportError as e:
            log_http_failure(method, url, None, str(e))
            raise WorkspaceError(
                ErrorKind.NETWORK_ERROR,
                f"{method} {path} failed: {e}",
            ) from e

        if not response.is_success:
            error = _error_from_response(response)
            log_http_failure(method, url, response.status_code, error.message)
            raise error

        if not response.content.strip():
            return {}

        try:
            body = response.json()
        except ValueError as e:  # JSONDecodeError or UnicodeDecodeError
            raise WorkspaceError(
                ErrorKind.MALFORMED_RESPONSE,
                f"{method} {path} returned invalid JSON: {e}",
                status_code=response.status_code,
            ) from e

        if not isinstance(body, dict):
            raise WorkspaceError(
                ErrorKind.MALFORMED_RESPONSE,
                f"{method} {path} returned {type(body).__name__}, expected an object",
                status_code=response.status_code,
            )
        return body

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
