"""
File listing and deletion service for TransfertPro.
"""

import structlog

from transfertpro.api.endpoints.file import delete_file
from transfertpro.api.http_client import HttpClient
from transfertpro.api.protocol import SessionProvider
from transfertpro.services.directory_service import DirectoryService

logger = structlog.get_logger(__name__)


class FileService:
    """Lists and deletes remote files by glob pattern."""

    def __init__(
        self,
        http: HttpClient,
        session: SessionProvider,
        directory_service: DirectoryService,
    ) -> None:
        self._http = http
        self._session = session
        self._directory_service = directory_service

    def list_files(self, path: str, pattern: str = "*") -> list[str]:
        """
        Names of the files in a directory matching a pattern.

        Args:
            path: Remote directory path.
            pattern: Case-sensitive shell-style pattern.

        Returns:
            Matching names, in the order the server listed them.

        Raises:
            NotFoundError: If the directory does not exist.
        """
        directory = self._directory_service.resolve_path(path)
        return [entry.name for entry in directory.match_files(pattern)]

    def delete_files(self, path: str, pattern: str = "*") -> list[str]:
        """
        Delete the files in a directory matching a pattern.

        Deletion stops at the first failure.

        Returns:
            Names of the deleted files.

        Raises:
            NotFoundError: If the directory does not exist.
            TransferError: If a deletion is refused.
        """
        directory = self._directory_service.resolve_path(path)
        deleted = []
        try:
            for entry in directory.match_files(pattern):
                delete_file(self._http, self._session, entry.file_id, directory.share_id)
                logger.info("File deleted", file_name=entry.name, directory=path)
                deleted.append(entry.name)
        finally:
            if deleted:
                self._directory_service.invalidate(directory.directory_id)
        return deleted
