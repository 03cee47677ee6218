"""
HTTP client for the TransfertPro service.

Wraps a synchronous ``httpx.Client``: attaches signing parameters and the
bearer header, logs every call, and turns transport failures and error
statuses into the package's exception types.
"""

import json
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import httpx
import structlog

from transfertpro.api.protocol import SessionProvider
from transfertpro.config import TransfertProConfig
from transfertpro.exceptions import AuthenticationError, NotFoundError, TransferError

logger = structlog.get_logger(__name__)

SENSITIVE_KEYS = frozenset(
    {
        "hashkey",
        "password",
        "access_token",
        "Authorization",
    }
)


def sanitize_for_log(data: dict[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive fields from a dict before logging.

    Recursively sanitizes nested dictionaries and lists.

    Args:
        data: Dictionary that may contain sensitive values.

    Returns:
        Copy with sensitive values replaced by "***".
    """
    result = {}
    for key, value in data.items():
        if key in SENSITIVE_KEYS:
            result[key] = "***"
        elif isinstance(value, dict):
            result[key] = sanitize_for_log(value)
        elif isinstance(value, list):
            result[key] = [
                sanitize_for_log(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


def check_response(response: httpx.Response, *, operation: str, **context: Any) -> None:
    """
    Raise the matching error for a non-success response.

    Args:
        response: Response whose headers have been received.
        operation: Short description of the call, used in messages.
        **context: Extra context attached to the raised error.

    Raises:
        AuthenticationError: On 401 and 403.
        NotFoundError: On 404.
        TransferError: On any other non-2xx status.
    """
    if response.is_success:
        return

    status = response.status_code
    if status in (httpx.codes.UNAUTHORIZED, httpx.codes.FORBIDDEN):
        msg = f"Not authorized to {operation}"
        raise AuthenticationError(msg, response=response, **context)
    if status == httpx.codes.NOT_FOUND:
        msg = f"Not found while trying to {operation}"
        raise NotFoundError(msg, path=str(response.request.url.path), **context)

    msg = f"Error calling TransfertPro api: {operation}"
    raise TransferError(msg, response=response, **context)


def read_json(response: httpx.Response, *, operation: str) -> Any:
    """
    Decode a JSON body; an empty body decodes to None.

    Raises:
        TransferError: If the body is not valid JSON.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON response from {operation}"
        raise TransferError(msg, response=response) from e


class HttpClient:
    """Synchronous HTTP client for the TransfertPro hosts."""

    def __init__(
        self,
        config: TransfertProConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration.
            transport: Optional transport for testing (mock transport).
        """
        self._config = config
        self._transport = transport
        self._client: httpx.Client | None = None

    def __enter__(self) -> "HttpClient":
        self._ensure_client()
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _ensure_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self._config.api_url,
                timeout=httpx.Timeout(None, connect=self._config.connect_timeout),
                transport=self._transport,
                headers={"User-Agent": self._config.user_agent},
            )
        return self._client

    def close(self) -> None:
        """Close the underlying connection pool."""
        if self._client is None:
            logger.debug("Client not open.")
            return
        self._client.close()
        self._client = None

    @staticmethod
    def _prepare(
        session: SessionProvider | None,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
    ) -> tuple[dict[str, Any], dict[str, str]]:
        params = dict(params or {})
        headers = dict(headers or {})
        if session is not None:
            params.update(session.sign_request())
            headers.update(session.auth_headers())
        return params, headers

    def request(
        self,
        method: str,
        url: str,
        *,
        session: SessionProvider | None = None,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """
        Send a request and return the fully read response.

        The status is not checked here; use ``check_response``.

        Args:
            method: HTTP method (GET, POST, DELETE).
            url: Path relative to the API host, or an absolute URL.
            session: Session used to sign the call; None for unsigned calls.
            params: Query parameters.
            data: Form fields.
            files: Multipart files.
            headers: Extra headers.

        Raises:
            TransferError: If the request fails due to network issues.
        """
        client = self._ensure_client()
        params, headers = self._prepare(session, params, headers)

        started = time.perf_counter()
        try:
            response = client.request(
                method,
                url,
                params=params or None,
                data=data,
                files=files,
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.warning("HTTP request failed", method=method, url=url, error=str(e))
            msg = f"Network error during {method} {url}"
            raise TransferError(msg) from e

        logger.debug(
            "HTTP request",
            method=method,
            url=url,
            status=response.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000),
            params=sanitize_for_log(params),
        )
        return response

    @contextmanager
    def stream(
        self,
        method: str,
        url: str,
        *,
        session: SessionProvider | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Iterator[httpx.Response]:
        """
        Stream a response.

        The response is handed over as soon as its headers arrive, before
        any of the body is read.

        Args:
            method: HTTP method.
            url: Path relative to the API host, or an absolute URL.
            session: Session used to sign the call.
            params: Query parameters.
            headers: Extra headers.

        Yields:
            Response with an unread body.

        Raises:
            TransferError: If the connection fails.
        """
        client = self._ensure_client()
        params, headers = self._prepare(session, params, headers)

        try:
            with client.stream(method, url, params=params, headers=headers) as response:
                logger.debug(
                    "HTTP stream opened",
                    method=method,
                    url=url,
                    status=response.status_code,
                    params=sanitize_for_log(params),
                )
                yield response
        except httpx.HTTPError as e:
            logger.warning("HTTP stream failed", method=method, url=url, error=str(e))
            msg = f"Network error during {method} {url}"
            raise TransferError(msg) from e
