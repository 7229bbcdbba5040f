"""
Media-specific exceptions for gateway and gallery operations.

Exception Hierarchy:
    ExternalServiceError (core)
    ├── RemoteReadError - Document store read failed or returned a malformed record
    ├── RemoteWriteError - Document store rejected a create/update/delete
    └── UploadRejectedError - Media host answered with a non-success status

    NetworkError (core) is raised by the upload gateway for transport failures.
    The store gateway folds transport failures into RemoteReadError /
    RemoteWriteError so callers see one error per operation direction.

Usage:
    from media.exceptions import RemoteWriteError

    try:
        await gateway.update_media_collection_ref(media_id, collection_id)
    except RemoteWriteError as e:
        return Response(e.to_dict(), status=502)
"""

from __future__ import annotations

from core.exceptions import ExternalServiceError


class RemoteReadError(ExternalServiceError):
    """
    Raised when listing media or collections fails.

    Also raised when a returned document does not match the record schema,
    so callers never see records with missing fields.
    """

    default_error_code: str = "REMOTE_READ_ERROR"


class RemoteWriteError(ExternalServiceError):
    """Raised when the document store rejects a write."""

    default_error_code: str = "REMOTE_WRITE_ERROR"


class UploadRejectedError(ExternalServiceError):
    """
    Raised when the media host refuses an upload.

    Example:
        if response.status_code >= 400:
            raise UploadRejectedError(
                "Upload failed",
                details={"status_code": response.status_code},
            )
    """

    default_error_code: str = "UPLOAD_REJECTED"
