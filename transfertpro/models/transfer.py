"""
Transfer-related domain models.
"""

import math
import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Self


@dataclass(frozen=True, kw_only=True)
class FileDescriptor:
    """
    Metadata registered with the server before content is sent.

    Attributes:
        upload_id: Fresh identifier tying the chunks to this upload.
        file_name: Name the file gets remotely.
        file_size: Size in bytes.
        directory_id: Target directory.
    """

    file_name: str
    file_size: int
    directory_id: str
    upload_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @classmethod
    def for_file(cls, path: Path, directory_id: str) -> Self:
        """Describe a local file for upload into a directory."""
        return cls(
            file_name=path.name,
            file_size=path.stat().st_size,
            directory_id=directory_id,
        )

    def to_form(self) -> dict[str, str | int]:
        """Registration body as expected by the File endpoint."""
        return {
            "UploadId": self.upload_id,
            "FileName": self.file_name,
            "FileSize": self.file_size,
            "DirectoryId": self.directory_id,
        }


@dataclass(frozen=True, kw_only=True)
class Chunk:
    """
    One byte range of a file being uploaded.

    Attributes:
        index: 0-based position in the sequence.
        count: Total number of chunks for the file.
        offset: Byte offset of ``data`` in the file.
        data: Chunk content.
    """

    index: int
    count: int
    offset: int
    data: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)


def chunk_count(file_size: int, chunk_size: int) -> int:
    """Number of chunks needed for a file; an empty file still takes one."""
    return max(1, math.ceil(file_size / chunk_size))


def iter_chunks(stream: BinaryIO, file_size: int, chunk_size: int) -> Iterator[Chunk]:
    """
    Split a stream into sequential chunks.

    Files smaller than ``chunk_size`` come out as a single chunk holding the
    whole content. Otherwise every chunk is exactly ``chunk_size`` bytes except
    possibly the last.

    Args:
        stream: Binary stream positioned at the start of the file.
        file_size: Size of the file in bytes.
        chunk_size: Chunk size in bytes.

    Yields:
        Chunks in increasing index order.
    """
    count = chunk_count(file_size, chunk_size)
    offset = 0
    for index in range(count):
        data = stream.read(chunk_size)
        yield Chunk(index=index, count=count, offset=offset, data=data)
        offset += len(data)
