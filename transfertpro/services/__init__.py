"""
Business logic services for TransfertPro.
"""

from transfertpro.services.directory_service import DirectoryService
from transfertpro.services.download_service import DownloadService
from transfertpro.services.file_service import FileService
from transfertpro.services.session_service import SessionService
from transfertpro.services.upload_service import UploadService

__all__ = [
    "DirectoryService",
    "DownloadService",
    "FileService",
    "SessionService",
    "UploadService",
]
