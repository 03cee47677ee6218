"""
TransfertPro client facade.

This is the main entry point for users of the library. It owns the session
and the directory cache of one connection and hides the underlying services.
"""

from pathlib import Path
from typing import Self

import httpx
import structlog

from transfertpro.api.http_client import HttpClient
from transfertpro.config import TransfertProConfig
from transfertpro.models.auth import Session
from transfertpro.models.directory import DirectoryNode
from transfertpro.services.directory_service import DirectoryService
from transfertpro.services.download_service import DownloadService
from transfertpro.services.file_service import FileService
from transfertpro.services.session_service import SessionService
from transfertpro.services.upload_service import UploadService

logger = structlog.get_logger(__name__)


class TransfertProClient:
    """
    Client for the TransfertPro file storage.

    Example:
        ```python
        with TransfertProClient("api-key", "secret") as client:
            client.connect("user@example.com", "password")

            client.upload_files("./source", "*.txt", ":Share/my_project/text")
            client.download_file(":Share/my_project/text/file.txt", "./target")
            print(client.list_files(":Share/my_project/text", "*.txt"))
        ```

    Args:
        api_key: API key identifier.
        secret_key: Secret used to sign requests.
        config: Client configuration. Uses defaults if not provided.
        transport: Optional httpx transport for testing (mock transport).
    """

    def __init__(
        self,
        api_key: str,
        secret_key: str,
        config: TransfertProConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or TransfertProConfig()
        self._http = HttpClient(self._config, transport=transport)
        self._session = SessionService(self._http, self._config, api_key, secret_key)
        self._directory_service = DirectoryService(self._http, self._session)
        self._file_service = FileService(self._http, self._session, self._directory_service)
        self._upload_service = UploadService(
            self._http, self._session, self._directory_service, self._config
        )
        self._download_service = DownloadService(
            self._http, self._session, self._directory_service, self._config
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Forget the session and release connections."""
        self._session.disconnect()
        self._directory_service.refresh()
        self._http.close()
        logger.debug("Client closed")

    @property
    def config(self) -> TransfertProConfig:
        return self._config

    @property
    def is_connected(self) -> bool:
        """Check if connected."""
        return self._session.is_connected

    def connect(self, user: str, password: str) -> Session:
        """
        Log in with a user's email and password.

        Cached directories from a previous connection are discarded.

        Raises:
            ValidationError: If user or password is empty.
            AuthenticationError: If login fails.
        """
        session = self._session.connect(user, password)
        self._directory_service.refresh()
        return session

    def disconnect(self) -> None:
        """Forget the token and credentials."""
        self._session.disconnect()

    def _ensure_connected(self) -> None:
        # A fresh login starts a fresh directory view, as connect() does.
        if self._session.ensure_connected():
            self._directory_service.refresh()

    def resolve_path(self, path: str) -> DirectoryNode:
        """
        Resolve a remote directory path.

        Raises:
            NotFoundError: If the path does not exist.
        """
        self._ensure_connected()
        return self._directory_service.resolve_path(path)

    def list_files(self, path: str, pattern: str = "*") -> list[str]:
        """Names of the files in a remote directory matching a pattern."""
        self._ensure_connected()
        return self._file_service.list_files(path, pattern)

    def delete_files(self, path: str, pattern: str = "*") -> list[str]:
        """Delete the files in a remote directory matching a pattern."""
        self._ensure_connected()
        return self._file_service.delete_files(path, pattern)

    def upload_file(
        self,
        local_path: Path | str,
        target_directory: DirectoryNode | str,
        *,
        move: bool = False,
    ) -> str:
        """
        Upload a local file into a remote directory.

        Raises:
            ValidationError: If the local file does not exist.
            NotFoundError: If the target directory does not exist.
            TransferError: If the upload fails.
        """
        self._ensure_connected()
        return self._upload_service.upload_file(local_path, target_directory, move=move)

    def upload_files(
        self,
        source_directory: Path | str,
        pattern: str,
        target_directory: DirectoryNode | str,
        *,
        move: bool = False,
    ) -> list[str]:
        """Upload local files matching a pattern into a remote directory."""
        self._ensure_connected()
        return self._upload_service.upload_files(
            source_directory, pattern, target_directory, move=move
        )

    def download_file(
        self,
        remote_path: str,
        target_directory: Path | str,
        *,
        move: bool = False,
    ) -> Path:
        """
        Download a remote file into a local directory.

        Raises:
            NotFoundError: If the file does not exist.
            TransferError: If the download fails.
        """
        self._ensure_connected()
        return self._download_service.download_file(remote_path, target_directory, move=move)

    def download_files(
        self,
        source_directory: str,
        pattern: str,
        target_directory: Path | str,
        *,
        move: bool = False,
    ) -> list[str]:
        """Download remote files matching a pattern into a local directory."""
        self._ensure_connected()
        return self._download_service.download_files(
            source_directory, pattern, target_directory, move=move
        )
