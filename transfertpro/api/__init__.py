"""
TransfertPro API client layer.

Provides synchronous HTTP communication with the TransfertPro hosts.
"""

from transfertpro.api.http_client import (
    HttpClient,
    check_response,
    read_json,
    sanitize_for_log,
)
from transfertpro.api.protocol import SessionProvider

__all__ = ["HttpClient", "SessionProvider", "check_response", "read_json", "sanitize_for_log"]
