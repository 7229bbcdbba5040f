"""
Identity services.

This module provides IdentityService: registration, sign-in, sign-out, and
lookup of the current identity for one browser session.

Input rules (both fields present, confirmation matches, minimum password
length) are checked before the identity provider is called. Provider
rejections come back as failed ServiceResults carrying the provider's
error code.

Related files:
    - adapters.py: IdentityProviderAdapter (HTTP calls)
    - identity.py: Identity record stored in the session
    - authentication.py: DRF authentication class reading the session
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from asgiref.sync import async_to_sync

from authentication.adapters import IdentityProviderAdapter
from authentication.exceptions import InvalidCredentialsError
from authentication.identity import Identity
from core.exceptions import ExternalServiceError
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from django.contrib.sessions.backends.base import SessionBase

SESSION_IDENTITY_KEY = "identity"
MIN_PASSWORD_LENGTH = 6


class IdentityService(BaseService):
    """
    Session-bound identity operations.

    Usage:
        service = IdentityService(request.session)

        result = service.login(email, password)
        if result:
            identity = result.data

        service.current_identity()  # ServiceResult[Identity]
        service.logout()
    """

    def __init__(
        self,
        session: SessionBase,
        adapter: IdentityProviderAdapter | None = None,
    ):
        self.session = session
        self.adapter = adapter or IdentityProviderAdapter()

    def register(
        self, email: str, password: str, confirm_password: str
    ) -> ServiceResult[Identity]:
        """
        Create an account and sign it in.

        Returns:
            ServiceResult with the new Identity, or a failure with
            VALIDATION_ERROR, PASSWORD_MISMATCH, PASSWORD_TOO_SHORT,
            EMAIL_EXISTS, or another provider error code.
        """
        missing = self._check_required(email, password)
        if missing is not None:
            return missing

        if password != confirm_password:
            return ServiceResult.failure(
                "Passwords do not match",
                error_code="PASSWORD_MISMATCH",
                errors={"confirm_password": ["Passwords do not match"]},
            )

        too_short = self._check_length(password)
        if too_short is not None:
            return too_short

        try:
            identity = async_to_sync(self.adapter.sign_up)(email.strip(), password)
        except ExternalServiceError as e:
            return self.handle_exception(e, f"Registration failed for {email}", logging.WARNING)

        self._store(identity)
        self.get_logger().info(f"Registered {identity.uid}", extra={"email": identity.email})
        return ServiceResult.success(identity)

    def login(self, email: str, password: str) -> ServiceResult[Identity]:
        """
        Sign in with email and password.

        Returns:
            ServiceResult with the Identity, or a failure with
            VALIDATION_ERROR, PASSWORD_TOO_SHORT, INVALID_CREDENTIALS, or
            another provider error code.
        """
        missing = self._check_required(email, password)
        if missing is not None:
            return missing

        too_short = self._check_length(password)
        if too_short is not None:
            return too_short

        try:
            identity = async_to_sync(self.adapter.sign_in)(email.strip(), password)
        except InvalidCredentialsError as e:
            return self.handle_exception(e, f"Sign-in rejected for {email}", logging.INFO)
        except ExternalServiceError as e:
            return self.handle_exception(e, f"Sign-in failed for {email}", logging.WARNING)

        self._store(identity)
        self.get_logger().info(f"Signed in {identity.uid}")
        return ServiceResult.success(identity)

    def logout(self) -> ServiceResult[None]:
        """Drop the identity and every per-screen UI state from the session."""
        identity = Identity.from_session(self.session.get(SESSION_IDENTITY_KEY))
        self.session.flush()
        if identity:
            self.get_logger().info(f"Signed out {identity.uid}")
        return ServiceResult.success(None)

    def current_identity(self) -> ServiceResult[Identity]:
        identity = Identity.from_session(self.session.get(SESSION_IDENTITY_KEY))
        if identity is None:
            return ServiceResult.failure("Not signed in", error_code="NOT_AUTHENTICATED")
        return ServiceResult.success(identity)

    def _check_required(self, email: str, password: str) -> ServiceResult | None:
        missing = self.validate_required(email=email, password=password)
        if missing is not None:
            return ServiceResult.failure(
                "Please enter both email and password",
                error_code=missing.error_code,
                errors=missing.errors,
            )
        return None

    def _check_length(self, password: str) -> ServiceResult | None:
        if len(password) < MIN_PASSWORD_LENGTH:
            message = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            return ServiceResult.failure(
                message, error_code="PASSWORD_TOO_SHORT", errors={"password": [message]}
            )
        return None

    def _store(self, identity: Identity) -> None:
        # New identity, new session id
        self.session.cycle_key()
        self.session[SESSION_IDENTITY_KEY] = identity.to_session()
