"""
Session service for TransfertPro.

Handles login, token expiry and request signing.
"""

import hashlib
import hmac
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime

import structlog

from transfertpro.api.endpoints.auth import login
from transfertpro.api.http_client import HttpClient
from transfertpro.config import TransfertProConfig
from transfertpro.core.nonce import NonceGenerator
from transfertpro.exceptions import AuthenticationError, ValidationError
from transfertpro.models.auth import Session

logger = structlog.get_logger(__name__)

HASH_SEPARATOR = "|"


def parse_expiry(value: str) -> datetime:
    """
    Parse the ``.expires`` field of a token response.

    Accepts ISO-8601 and the RFC 1123 form token endpoints commonly use.
    Naive timestamps are taken as UTC.

    Raises:
        ValueError: If the value matches neither format.
    """
    try:
        expires = datetime.fromisoformat(value)
    except ValueError:
        try:
            expires = parsedate_to_datetime(value)
        except (TypeError, ValueError) as e:
            msg = f"Unrecognised expiry timestamp: {value!r}"
            raise ValueError(msg) from e
    if expires.tzinfo is None:
        expires = expires.replace(tzinfo=timezone.utc)
    return expires


class SessionService:
    """
    Owns credentials and the bearer token of one client.

    The API key and secret sign every call; the user login and password
    are kept after ``connect()`` so an expiring token can be renewed
    transparently by ``ensure_connected()``.
    """

    def __init__(
        self,
        http: HttpClient,
        config: TransfertProConfig,
        api_key: str,
        secret_key: str,
    ) -> None:
        """
        Args:
            http: HTTP client for the login exchange.
            config: Client configuration.
            api_key: API key identifier.
            secret_key: Secret used to sign requests.
        """
        if not api_key or not secret_key:
            msg = "api_key and secret_key must be set"
            raise ValidationError(msg)

        self._http = http
        self._config = config
        self._api_key = api_key
        self._secret_key = secret_key
        self._nonces = NonceGenerator()

        self._user: str | None = None
        self._password: str | None = None
        self._session: Session | None = None
        self._is_connected = False

    @property
    def user(self) -> str | None:
        """Login of the connected user."""
        return self._user

    @property
    def session(self) -> Session | None:
        """Current session, or None when disconnected."""
        return self._session

    @property
    def is_connected(self) -> bool:
        """Check if a token has been obtained and not cleared."""
        return self._is_connected and self._session is not None

    @property
    def token_expired(self) -> bool:
        """Check if the token is within the refresh margin of its expiry."""
        return self._session is not None and self._session.expires_within(
            timedelta(seconds=self._config.token_refresh_margin)
        )

    def connect(self, user: str, password: str) -> Session:
        """
        Log in with a user's email and password.

        Args:
            user: User email.
            password: User password.

        Returns:
            The new session.

        Raises:
            ValidationError: If user or password is empty.
            AuthenticationError: If login fails.
        """
        if not user:
            msg = "user should be set"
            raise ValidationError(msg)
        if not password:
            msg = "password should be set"
            raise ValidationError(msg)

        self._user = user
        self._password = password
        return self._login()

    def ensure_connected(self) -> bool:
        """
        Log in again if there is no token or it is about to expire.

        Returns:
            True if a new login took place.

        Raises:
            AuthenticationError: If never connected, or login fails.
        """
        if self.is_connected and not self.token_expired:
            return False

        if self._user is None or self._password is None:
            msg = "Not connected. Call connect() first."
            raise AuthenticationError(msg)

        logger.info("Token missing or expiring, logging in again")
        self._login()
        return True

    def disconnect(self) -> None:
        """Forget the token and the user credentials."""
        self._session = None
        self._is_connected = False
        self._user = None
        self._password = None
        logger.info("Disconnected")

    def sign_request(self) -> dict[str, str | int]:
        """
        Produce signing parameters for one call.

        The hash is an HMAC-SHA512 keyed by the secret key over
        ``apiKeyName|<key>|nonce|<nonce>|<secret>``.
        """
        nonce = self._nonces.next()
        to_hash = HASH_SEPARATOR.join(
            ["apiKeyName", self._api_key, "nonce", str(nonce), self._secret_key]
        )
        return {
            "apiKeyName": self._api_key,
            "nonce": nonce,
            "hashkey": self._hmac(to_hash),
        }

    def auth_headers(self) -> dict[str, str]:
        """Bearer header for the current token."""
        if self._session is None:
            return {}
        return {"Authorization": f"Bearer {self._session.access_token}"}

    def _hmac(self, data: str) -> str:
        return hmac.new(
            self._secret_key.encode("utf-8"), data.encode("utf-8"), hashlib.sha512
        ).hexdigest()

    def _login(self) -> Session:
        logger.info("Logging in", user=self._user)
        self._is_connected = False

        payload = login(self._http, self._user, self._password)
        try:
            session = Session(
                user=self._user,
                access_token=payload["access_token"],
                expires_at=parse_expiry(payload[".expires"]),
            )
        except (KeyError, ValueError) as e:
            msg = "Invalid token response"
            raise AuthenticationError(msg, field=str(e)) from e

        self._session = session
        self._is_connected = True
        logger.info("Login successful", expires_at=session.expires_at.isoformat())
        return session
