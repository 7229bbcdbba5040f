"""
Identity provider exceptions.

Exception Hierarchy:
    ExternalServiceError (core)
    └── IdentityProviderError - Identity provider refused a sign-up or sign-in
        ├── InvalidCredentialsError - Unknown email or wrong password
        └── EmailExistsError - Sign-up for an email that already has an account

Provider error codes (EMAIL_EXISTS, INVALID_PASSWORD, ...) are mapped to
readable messages here; the raw code is kept in details["provider_code"].
"""

from __future__ import annotations

from core.exceptions import ExternalServiceError

# Identity Toolkit error codes mapped to messages shown to the user
PROVIDER_MESSAGES = {
    "EMAIL_EXISTS": "An account with this email already exists",
    "EMAIL_NOT_FOUND": "Invalid email or password",
    "INVALID_PASSWORD": "Invalid email or password",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password",
    "INVALID_EMAIL": "Invalid email address",
    "USER_DISABLED": "This account has been disabled",
    "WEAK_PASSWORD": "Password must be at least 6 characters",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts. Please try again later",
}

CREDENTIAL_CODES = frozenset(
    {"EMAIL_NOT_FOUND", "INVALID_PASSWORD", "INVALID_LOGIN_CREDENTIALS", "USER_DISABLED"}
)


class IdentityProviderError(ExternalServiceError):
    """Raised when the identity provider rejects a request."""

    default_error_code: str = "IDENTITY_PROVIDER_ERROR"


class InvalidCredentialsError(IdentityProviderError):
    """Raised when sign-in fails because of the email/password pair."""

    default_error_code: str = "INVALID_CREDENTIALS"


class EmailExistsError(IdentityProviderError):
    """Raised when signing up with an email that is already registered."""

    default_error_code: str = "EMAIL_EXISTS"


def provider_error(provider_code: str, status_code: int | None = None) -> IdentityProviderError:
    """
    Build the exception for an Identity Toolkit error code.

    Codes may carry a suffix ("WEAK_PASSWORD : Password should be ..."),
    only the leading token is used for the lookup.
    """
    code = provider_code.split(":", 1)[0].strip()
    message = PROVIDER_MESSAGES.get(code, provider_code or "Authentication failed")
    details = {"provider_code": code}
    if status_code is not None:
        details["status_code"] = status_code

    if code in CREDENTIAL_CODES:
        return InvalidCredentialsError(message, details=details)
    if code == "EMAIL_EXISTS":
        return EmailExistsError(message, details=details)
    return IdentityProviderError(message, details=details)
