"""
File download service for TransfertPro.

Streams remote files into a temporary file next to the destination and
publishes it under its final name only once the download is complete.
"""

import os
import posixpath
import tempfile
from pathlib import Path

import structlog

from transfertpro.api.endpoints.file import delete_file, open_download
from transfertpro.api.http_client import HttpClient
from transfertpro.api.protocol import SessionProvider
from transfertpro.config import TransfertProConfig
from transfertpro.exceptions import NotFoundError, TransferError
from transfertpro.models.directory import DirectoryNode, FileEntry
from transfertpro.services.directory_service import DirectoryService

logger = structlog.get_logger(__name__)

_STREAM_CHUNK_SIZE = 64 * 1024


class DownloadService:
    """
    Service for downloading remote files to a local directory.

    No partially written file is ever visible under its final name.
    """

    def __init__(
        self,
        http: HttpClient,
        session: SessionProvider,
        directory_service: DirectoryService,
        config: TransfertProConfig,
    ) -> None:
        """
        Args:
            http: HTTP client.
            session: Session used to sign calls.
            directory_service: Resolver for remote paths.
            config: Client configuration (download host).
        """
        self._http = http
        self._session = session
        self._directory_service = directory_service
        self._config = config

    def download_files(
        self,
        source_directory: str,
        pattern: str,
        target_directory: Path | str,
        *,
        move: bool = False,
    ) -> list[str]:
        """
        Download every remote file matching a pattern.

        The first failing file aborts the batch.

        Args:
            source_directory: Remote directory path.
            pattern: Glob pattern matched against file names.
            target_directory: Local directory to write into.
            move: Delete each remote file once saved locally.

        Returns:
            Names of the matched files, in server order.

        Example:
            ```python
            downloads.download_files(":Share/my_project/text", "*.txt", "./target")
            ```
        """
        directory = self._directory_service.resolve_path(source_directory)
        entries = directory.match_files(pattern)
        for entry in entries:
            self._download(directory, entry, Path(target_directory), move=move)
        return [entry.name for entry in entries]

    def download_file(
        self,
        remote_path: str,
        target_directory: Path | str,
        *,
        move: bool = False,
    ) -> Path:
        """
        Download one remote file.

        Args:
            remote_path: Remote file path, e.g. ``":Share/project/file.txt"``.
            target_directory: Local directory to write into.
            move: Delete the remote file once saved locally.

        Returns:
            Path of the downloaded file.

        Raises:
            NotFoundError: If the directory or the file does not exist.
            TransferError: If the download fails.
        """
        directory_path, file_name = posixpath.split(remote_path)
        directory = self._directory_service.resolve_path(directory_path)
        entry = directory.get_file(file_name)
        if entry is None:
            msg = f"Unable to find {file_name} in directory {directory_path}"
            raise NotFoundError(msg, path=remote_path)
        return self._download(directory, entry, Path(target_directory), move=move)

    def _download(
        self,
        directory: DirectoryNode,
        entry: FileEntry,
        target_directory: Path,
        *,
        move: bool,
    ) -> Path:
        target = target_directory / entry.name
        logger.info("Downloading file", file_name=entry.name, destination=str(target))

        out_stream = None
        try:
            out_stream = tempfile.NamedTemporaryFile(
                dir=target_directory, prefix="tp", delete=False
            )
            with open_download(
                self._http,
                self._session,
                self._config.download_url,
                entry.file_id,
                entry.name,
                directory.share_id,
            ) as response:
                for data in response.iter_bytes(_STREAM_CHUNK_SIZE):
                    out_stream.write(data)
            out_stream.close()
            os.replace(out_stream.name, target)

            if move:
                delete_file(self._http, self._session, entry.file_id, directory.share_id)
                self._directory_service.invalidate(directory.directory_id)
                logger.debug("Remote file removed", file_name=entry.name)
        except Exception as e:
            if out_stream is not None:
                out_stream.close()
                Path(out_stream.name).unlink(missing_ok=True)
            msg = f"Unable to download {entry.name}: {e}"
            raise TransferError(
                msg, file_name=entry.name, response=getattr(e, "response", None)
            ) from e

        logger.info("File saved", file_name=entry.name, destination=str(target))
        return target
