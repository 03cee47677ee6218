"""
Session capability shared by the API layer and the services.

The directory resolver and the transfer engines only need to make sure a
valid token exists and to sign outgoing calls. They receive that capability
through this protocol instead of inheriting it from a base client.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SessionProvider(Protocol):
    """Interface of the session manager as seen by its collaborators."""

    @property
    def user(self) -> str | None:
        """Login of the acting user, sent as ``sender`` on uploads."""
        ...

    def ensure_connected(self) -> bool:
        """
        Make sure a non-expired bearer token is available.

        Returns:
            True if a new login was needed.

        Raises:
            AuthenticationError: If no credentials are known or login fails.
        """
        ...

    def sign_request(self) -> dict[str, str | int]:
        """
        Produce fresh signing parameters for one call.

        Returns:
            ``apiKeyName``, ``nonce`` and ``hashkey`` query parameters.
        """
        ...

    def auth_headers(self) -> dict[str, str]:
        """Authorization header once authenticated, empty otherwise."""
        ...
