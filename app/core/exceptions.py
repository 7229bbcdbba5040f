"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the dashboard API
- Machine-readable error codes for client handling
- Detailed error information for debugging

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Client-side input validation failures
    ├── NotFoundError - Resource not found in the current snapshot
    ├── SessionExpiredError - A service no longer accepts the signed-in identity
    └── ExternalServiceError - Third-party service failures
        └── NetworkError - Transport failure before any response arrived

Usage:
    from core.exceptions import ValidationError, NetworkError

    # Raise with message only
    raise ValidationError("Collection name cannot be empty")

    # Raise with error code for client handling
    raise ValidationError("Passwords do not match", error_code="PASSWORD_MISMATCH")

    # Convert to dict for API response
    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=400)

Note:
    These exceptions are for domain/business logic errors.
    DRF handles API-layer exceptions (serialization, authentication, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)

    Example:
        try:
            await gateway.delete_media_record(media_id)
        except BaseApplicationError as e:
            logger.warning(f"Delete failed: {e.error_code}")
            return Response(e.to_dict(), status=502)
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "Failed to move media",
                "error_code": "REMOTE_WRITE_ERROR",
                "details": {"media_id": "abc"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when client-side input validation fails.

    Use for:
    - Empty email or password, password shorter than the minimum
    - Mismatched password confirmation
    - Blank collection names
    - Empty upload batches

    A ValidationError always blocks the operation before any network call.

    Note:
        For DRF serializer validation, use DRF's built-in validation.
        Use this for service-layer validation logic.
    """

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Use for:
    - Moving or deleting a media id that is not in the loaded snapshot
    - Dropping onto a screen with no drag in progress
    """

    default_error_code: str = "NOT_FOUND"


class SessionExpiredError(BaseApplicationError):
    """
    Raised when an external service rejects the signed-in identity's token.

    ID tokens expire an hour after sign-in. The identity in the session is
    then useless, so the session is dropped and the user must sign in again.
    Passes through handlers that catch ExternalServiceError.
    """

    default_error_code: str = "SESSION_EXPIRED"


class ExternalServiceError(BaseApplicationError):
    """
    Raised when an external service call fails.

    Use for:
    - Identity provider rejections
    - Document store read/write failures
    - Media host upload rejections

    Note:
        Messages are surfaced verbatim to the user; there is no retry.
        HTTP 502 Bad Gateway is the appropriate status.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"


class NetworkError(ExternalServiceError):
    """
    Raised when a request never produced a response (DNS, TLS, reset, timeout).

    Example:
        try:
            response = await client.post(url, data=payload)
        except httpx.TransportError as e:
            raise NetworkError(
                "Network error while contacting media host",
                details={"service": "cloudinary", "original_error": str(e)},
            ) from e
    """

    default_error_code: str = "NETWORK_ERROR"
