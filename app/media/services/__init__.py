"""Media services for upload orchestration."""

from media.services.upload import UploadBatchResult, UploadFailure, UploadService

__all__ = [
    "UploadBatchResult",
    "UploadFailure",
    "UploadService",
]
