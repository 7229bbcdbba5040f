"""
Integration tests for the authentication views.

The adapter's provider calls are patched; the session middleware,
SessionIdentityAuthentication and IdentityService run for real, so a
login followed by /me/ exercises the full cookie round trip.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from django.urls import reverse
from rest_framework import status

from authentication.adapters import IdentityProviderAdapter
from authentication.exceptions import EmailExistsError, InvalidCredentialsError
from core.exceptions import NetworkError


@pytest.fixture
def provider(identity):
    sign_in = patch.object(
        IdentityProviderAdapter, "sign_in", new_callable=AsyncMock, return_value=identity
    )
    sign_up = patch.object(
        IdentityProviderAdapter, "sign_up", new_callable=AsyncMock, return_value=identity
    )
    with sign_in as sign_in_mock, sign_up as sign_up_mock:
        yield {"sign_in": sign_in_mock, "sign_up": sign_up_mock}


class TestRegisterView:
    """Tests for POST /api/v1/auth/register/."""

    url = reverse("authentication:register")

    def test_registers_and_signs_in(self, api_client, provider):
        response = api_client.post(
            self.url,
            {
                "email": "alice@example.com",
                "password": "secret1",
                "confirm_password": "secret1",
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json() == {
            "uid": "uid_alice",
            "email": "alice@example.com",
            "display_name": "Alice",
        }
        assert api_client.get(reverse("authentication:me")).status_code == status.HTTP_200_OK

    def test_password_mismatch(self, api_client, provider):
        response = api_client.post(
            self.url,
            {"email": "alice@example.com", "password": "secret1", "confirm_password": "other1"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Passwords do not match"
        provider["sign_up"].assert_not_awaited()

    def test_short_password(self, api_client, provider):
        response = api_client.post(
            self.url,
            {"email": "alice@example.com", "password": "abc", "confirm_password": "abc"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "PASSWORD_TOO_SHORT"

    def test_email_exists_is_conflict(self, api_client, provider):
        provider["sign_up"].side_effect = EmailExistsError(
            "An account with this email already exists"
        )

        response = api_client.post(
            self.url,
            {"email": "alice@example.com", "password": "secret1", "confirm_password": "secret1"},
        )

        assert response.status_code == status.HTTP_409_CONFLICT


class TestLoginView:
    """Tests for POST /api/v1/auth/login/."""

    url = reverse("authentication:login")

    def test_login_then_me(self, api_client, provider):
        response = api_client.post(self.url, {"email": "alice@example.com", "password": "secret1"})

        assert response.status_code == status.HTTP_200_OK
        me = api_client.get(reverse("authentication:me"))
        assert me.json()["uid"] == "uid_alice"
        assert "id_token" not in me.json()

    def test_missing_fields(self, api_client, provider):
        response = api_client.post(self.url, {"email": "alice@example.com"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Please enter both email and password"
        provider["sign_in"].assert_not_awaited()

    def test_short_password(self, api_client, provider):
        response = api_client.post(self.url, {"email": "alice@example.com", "password": "abc"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "PASSWORD_TOO_SHORT"
        provider["sign_in"].assert_not_awaited()

    def test_invalid_credentials(self, api_client, provider):
        provider["sign_in"].side_effect = InvalidCredentialsError("Invalid email or password")

        response = api_client.post(
            self.url, {"email": "alice@example.com", "password": "wrong-password"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error"] == "Invalid email or password"

    def test_provider_unreachable(self, api_client, provider):
        provider["sign_in"].side_effect = NetworkError("Network error")

        response = api_client.post(
            self.url, {"email": "alice@example.com", "password": "secret1"}
        )

        assert response.status_code == status.HTTP_502_BAD_GATEWAY


class TestLogoutView:
    """Tests for POST /api/v1/auth/logout/."""

    def test_logout_ends_session(self, api_client, provider):
        api_client.post(
            reverse("authentication:login"),
            {"email": "alice@example.com", "password": "secret1"},
        )

        response = api_client.post(reverse("authentication:logout"))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        me = api_client.get(reverse("authentication:me"))
        assert me.status_code == status.HTTP_401_UNAUTHORIZED


class TestCurrentIdentityView:
    def test_anonymous(self, api_client):
        response = api_client.get(reverse("authentication:me"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response["WWW-Authenticate"] == 'Session realm="api"'

    def test_authenticated(self, authenticated_client):
        response = authenticated_client.get(reverse("authentication:me"))

        assert response.json()["display_name"] == "Alice"
