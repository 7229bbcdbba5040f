"""
Identity provider adapter.

Wraps the Firebase Identity Toolkit REST API for email/password accounts:
- accounts:signUp creates an account and signs it in
- accounts:signInWithPassword signs in an existing account

Sign-out is local: the identity is dropped from the session and the
provider is not called.

Configuration (via settings):
- FIREBASE_API_KEY: Web API key sent as the key query parameter
- IDENTITY_TOOLKIT_URL: API root (default https://identitytoolkit.googleapis.com/v1)

Usage:
    adapter = IdentityProviderAdapter()
    identity = await adapter.sign_in("jane@example.com", "secret1")
    identity.uid, identity.id_token
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from django.conf import settings

from authentication.exceptions import IdentityProviderError, provider_error
from authentication.identity import Identity
from core.exceptions import NetworkError
from core.http import AsyncHTTPGateway

if TYPE_CHECKING:
    from typing import Any


class IdentityProviderAdapter(AsyncHTTPGateway):
    """Email/password sign-up and sign-in against the identity provider."""

    service_name = "identity_toolkit"

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
    ):
        super().__init__(client=client)
        self._api_key = api_key or settings.FIREBASE_API_KEY
        self._base_url = (base_url or settings.IDENTITY_TOOLKIT_URL).rstrip("/")

    async def sign_up(self, email: str, password: str) -> Identity:
        """
        Create an account and return its signed-in identity.

        Raises:
            EmailExistsError: The email is already registered.
            IdentityProviderError: Any other rejection.
            NetworkError: The provider could not be reached.
        """
        return await self._authenticate("accounts:signUp", "sign_up", email, password)

    async def sign_in(self, email: str, password: str) -> Identity:
        """
        Sign in with email and password.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password.
            IdentityProviderError: Any other rejection.
            NetworkError: The provider could not be reached.
        """
        return await self._authenticate(
            "accounts:signInWithPassword", "sign_in", email, password
        )

    async def _authenticate(
        self, endpoint: str, operation: str, email: str, password: str
    ) -> Identity:
        try:
            response = await self._send(
                "POST",
                f"{self._base_url}/{endpoint}",
                operation=operation,
                log_context={"email": email},
                params={"key": self._api_key},
                json={"email": email, "password": password, "returnSecureToken": True},
            )
        except httpx.TransportError as e:
            raise NetworkError(
                "Network error while contacting the identity provider",
                details={"service": self.service_name, "original_error": str(e)},
            ) from e

        payload = self._json(response)

        if not response.is_success:
            error = payload.get("error") or {}
            code = error.get("message", "") if isinstance(error, dict) else str(error)
            raise provider_error(code, status_code=response.status_code)

        if not payload.get("localId") or not payload.get("idToken"):
            raise IdentityProviderError(
                "Identity provider returned an incomplete response",
                details={"operation": operation},
            )

        return Identity(
            uid=payload["localId"],
            email=payload.get("email") or email,
            id_token=payload["idToken"],
            display_name=payload.get("displayName") or None,
        )

    @staticmethod
    def _json(response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}
