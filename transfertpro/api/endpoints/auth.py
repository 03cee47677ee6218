"""Authentication-related API endpoints."""

from typing import Any

import structlog

from transfertpro.api.http_client import HttpClient, read_json
from transfertpro.exceptions import AuthenticationError, TransferError

logger = structlog.get_logger(__name__)


def login(http: HttpClient, username: str, password: str) -> dict[str, Any]:
    """
    Exchange user credentials for a bearer token.

    Args:
        http: Configured HTTP client.
        username: User email.
        password: User password.

    Returns:
        Token response including ``access_token`` and ``.expires``.

    Raises:
        AuthenticationError: If the server refuses the credentials or the token
            response cannot be read.
    """
    response = http.request(
        "POST",
        "/Token",
        data={"grant_type": "password", "username": username, "password": password},
    )
    if not response.is_success:
        logger.warning("Token request rejected", status=response.status_code)
        msg = f"Unable to connect to TransfertPro url {response.request.url}"
        raise AuthenticationError(msg, response=response)

    try:
        payload = read_json(response, operation="login")
    except TransferError as e:
        msg = "Invalid token response"
        raise AuthenticationError(msg, response=response) from e
    if not isinstance(payload, dict):
        msg = "Unexpected token response"
        raise AuthenticationError(msg, response=response)
    return payload
