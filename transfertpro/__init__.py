"""
TransfertPro Python Client.

A synchronous Python client for the TransfertPro file storage service.

Example:
    ```python
    from transfertpro import TransfertProClient

    with TransfertProClient("api-key", "secret") as client:
        client.connect("user@example.com", "password")

        # Upload every text file of a local directory
        client.upload_files("./source", "*.txt", ":Share/my_project/text")

        # Download a file
        client.download_file(":Share/my_project/text/report.txt", "./target")
    ```
"""

from transfertpro.client import TransfertProClient
from transfertpro.config import Tenant, TransfertProConfig
from transfertpro.exceptions import (
    AuthenticationError,
    ErrorKind,
    NotFoundError,
    TransferError,
    TransfertProError,
    ValidationError,
)
from transfertpro.models.directory import NIL_SHARE_ID, DirectoryNode, FileEntry

__version__ = "0.1.0"

__all__ = [
    # Main client
    "TransfertProClient",
    "TransfertProConfig",
    "Tenant",
    # Models
    "DirectoryNode",
    "FileEntry",
    "NIL_SHARE_ID",
    # Exceptions
    "TransfertProError",
    "ErrorKind",
    "ValidationError",
    "AuthenticationError",
    "NotFoundError",
    "TransferError",
]
