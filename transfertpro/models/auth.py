"""
Authentication-related domain models.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


@dataclass(frozen=True, kw_only=True)
class Session:
    """
    Represents an authenticated TransfertPro session.

    Attributes:
        user: Login of the acting user.
        access_token: Bearer token for API requests.
        expires_at: Hard expiry of the token (UTC).
    """

    user: str
    access_token: str
    expires_at: datetime

    def expires_within(self, margin: timedelta, now: datetime | None = None) -> bool:
        """Check if the token expires before ``now + margin``."""
        now = now or datetime.now(timezone.utc)
        return self.expires_at < now + margin
