"""
Domain models for TransfertPro.

These are immutable (frozen) dataclasses representing the core domain concepts.
"""

from transfertpro.models.auth import Session
from transfertpro.models.directory import (
    NIL_SHARE_ID,
    DirectoryNode,
    FileEntry,
    is_nil_share,
)
from transfertpro.models.transfer import Chunk, FileDescriptor, chunk_count, iter_chunks

__all__ = [
    # Auth
    "Session",
    # Directory
    "NIL_SHARE_ID",
    "DirectoryNode",
    "FileEntry",
    "is_nil_share",
    # Transfer
    "Chunk",
    "FileDescriptor",
    "chunk_count",
    "iter_chunks",
]
