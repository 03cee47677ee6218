"""
TransfertPro client configuration.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Self


class Tenant(StrEnum):
    """TransfertPro hosting tenants."""

    DEFAULT = "default"
    HDS = "hds"


TENANT_ADDRESSES: dict[Tenant, dict[str, str]] = {
    Tenant.DEFAULT: {
        "api_url": "https://ext.transfertpro.com",
        "download_url": "https://dl.transfertpro.com",
        "upload_url": "https://up.transfertpro.com",
    },
    Tenant.HDS: {
        "api_url": "https://ext-sante.transfertpro.com",
        "download_url": "https://dl-sante.transfertpro.com",
        "upload_url": "https://up-sante.transfertpro.com",
    },
}

CHUNK_SIZE = 8 * 1024 * 1024


@dataclass(frozen=True, kw_only=True)
class TransfertProConfig:
    """
    Attributes:
        tenant: Tenant the URLs belong to.
        api_url: Base URL for the REST API.
        download_url: Base URL for file downloads.
        upload_url: Base URL for chunk uploads.
        connect_timeout: Connection establishment timeout in seconds.
        chunk_size: Upload chunk size in bytes; smaller files go in one call.
        max_chunk_attempts: Number of attempts per chunk before giving up.
        chunk_retry_delay: Delay between chunk attempts in seconds.
        token_refresh_margin: Seconds before token expiry at which to log in again.
        user_agent: User-Agent header value.
    """

    tenant: Tenant = Tenant.DEFAULT
    api_url: str = TENANT_ADDRESSES[Tenant.DEFAULT]["api_url"]
    download_url: str = TENANT_ADDRESSES[Tenant.DEFAULT]["download_url"]
    upload_url: str = TENANT_ADDRESSES[Tenant.DEFAULT]["upload_url"]
    connect_timeout: float = 30.0
    chunk_size: int = CHUNK_SIZE
    max_chunk_attempts: int = 10
    chunk_retry_delay: float = 1.0
    token_refresh_margin: float = 3600.0
    user_agent: str = "TransfertPro-Python/0.1"

    def __post_init__(self) -> None:
        if self.connect_timeout <= 0:
            msg = "connect_timeout must be positive"
            raise ValueError(msg)
        if self.chunk_size <= 0:
            msg = "chunk_size must be positive"
            raise ValueError(msg)
        if self.max_chunk_attempts <= 0:
            msg = "max_chunk_attempts must be positive"
            raise ValueError(msg)
        if self.chunk_retry_delay < 0:
            msg = "chunk_retry_delay must be non-negative"
            raise ValueError(msg)
        if self.token_refresh_margin < 0:
            msg = "token_refresh_margin must be non-negative"
            raise ValueError(msg)

    @classmethod
    def for_tenant(cls, tenant: Tenant | str, **overrides: Any) -> Self:
        """
        Build a configuration pointing at a tenant's hosts.

        Args:
            tenant: Tenant name, one of ``Tenant``.
            **overrides: Any other configuration field.

        Raises:
            ValueError: If the tenant is unknown.
        """
        try:
            tenant = Tenant(tenant)
        except ValueError:
            known = ",".join(t.value for t in Tenant)
            msg = f"tenant must be one of {known}"
            raise ValueError(msg) from None
        return cls(tenant=tenant, **{**TENANT_ADDRESSES[tenant], **overrides})
