"""
File upload service for TransfertPro.

Registers file metadata, then sends the content as one request or as a
sequence of fixed-size chunks with bounded retry per chunk.
"""

import time
from pathlib import Path

import structlog

from transfertpro.api.endpoints.file import register_file, upload_chunk
from transfertpro.api.http_client import HttpClient
from transfertpro.api.protocol import SessionProvider
from transfertpro.config import TransfertProConfig
from transfertpro.exceptions import TransferError, ValidationError
from transfertpro.models.directory import DirectoryNode
from transfertpro.models.transfer import Chunk, FileDescriptor, iter_chunks
from transfertpro.services.directory_service import DirectoryService

logger = structlog.get_logger(__name__)


class UploadService:
    """
    Service for uploading local files into remote directories.

    Chunks are sent strictly in order; a chunk that keeps failing aborts the
    whole upload.
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
            directory_service: Resolver for target paths.
            config: Client configuration (upload host, chunk size, retries).
        """
        self._http = http
        self._session = session
        self._directory_service = directory_service
        self._config = config

    def upload_files(
        self,
        source_directory: Path | str,
        pattern: str,
        target_directory: DirectoryNode | str,
        *,
        move: bool = False,
    ) -> list[str]:
        """
        Upload every local file matching a pattern.

        The first failing file aborts the batch.

        Args:
            source_directory: Local directory to search.
            pattern: Glob pattern, e.g. ``"*.txt"``.
            target_directory: Remote path or resolved directory.
            move: Delete each local file once uploaded.

        Returns:
            Names of the uploaded files.

        Example:
            ```python
            uploads.upload_files("./source", "*.txt", ":Share/my_project/text")
            ```
        """
        target = self._resolve(target_directory)
        uploaded = []
        for path in sorted(Path(source_directory).glob(pattern)):
            if not path.is_file():
                continue
            uploaded.append(self.upload_file(path, target, move=move))
        return uploaded

    def upload_file(
        self,
        local_path: Path | str,
        target_directory: DirectoryNode | str,
        *,
        move: bool = False,
    ) -> str:
        """
        Upload one local file.

        Args:
            local_path: File to upload.
            target_directory: Remote path or resolved directory.
            move: Delete the local file once the whole content is sent.

        Returns:
            Name of the uploaded file.

        Raises:
            ValidationError: If the local file does not exist.
            NotFoundError: If the target directory does not exist.
            TransferError: If registration or a chunk fails.
        """
        local_path = Path(local_path)
        if not local_path.is_file():
            msg = f"File not found: {local_path}"
            raise ValidationError(msg, path=str(local_path))

        target = self._resolve(target_directory)
        descriptor = FileDescriptor.for_file(local_path, target.directory_id)
        logger.info(
            "Uploading file",
            file_name=descriptor.file_name,
            size=descriptor.file_size,
            directory_id=target.directory_id,
        )

        register_file(self._http, self._session, descriptor, target.share_id)
        try:
            chunks = self._upload_content(local_path, descriptor, target.share_id)
        finally:
            # The file is registered remotely even if its content failed.
            self._directory_service.invalidate(target.directory_id)

        if move:
            local_path.unlink()
            logger.debug("Local file removed", path=str(local_path))

        logger.info("Upload complete", file_name=descriptor.file_name, chunks=chunks)
        return descriptor.file_name

    def _resolve(self, target: DirectoryNode | str) -> DirectoryNode:
        if isinstance(target, DirectoryNode):
            return target
        return self._directory_service.resolve_path(str(target))

    def _upload_content(self, local_path: Path, descriptor: FileDescriptor, share_id: str) -> int:
        sent = 0
        with local_path.open("rb") as stream:
            for chunk in iter_chunks(stream, descriptor.file_size, self._config.chunk_size):
                self._send_chunk(descriptor, chunk, share_id)
                sent += 1
        return sent

    def _send_chunk(self, descriptor: FileDescriptor, chunk: Chunk, share_id: str) -> None:
        attempts = self._config.max_chunk_attempts
        for attempt in range(1, attempts + 1):
            try:
                upload_chunk(
                    self._http,
                    self._session,
                    self._config.upload_url,
                    descriptor,
                    chunk,
                    share_id,
                )
            except TransferError as e:
                logger.warning(
                    "Chunk upload failed",
                    file_name=descriptor.file_name,
                    chunk=chunk.index,
                    attempt=attempt,
                    status=e.status_code,
                )
                last_error = e
                if attempt < attempts and self._config.chunk_retry_delay:
                    time.sleep(self._config.chunk_retry_delay)
                continue

            logger.debug(
                "Chunk sent",
                file_name=descriptor.file_name,
                chunk=chunk.index,
                chunks=chunk.count,
                offset=chunk.offset,
            )
            return

        msg = f"Network error during upload of {descriptor.file_name}"
        raise TransferError(
            msg,
            file_name=descriptor.file_name,
            response=last_error.response,
            chunk_index=chunk.index,
            attempts=attempts,
        ) from last_error
