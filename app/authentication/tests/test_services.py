"""
Tests for IdentityService.

The identity provider adapter is replaced with AsyncMock methods and the
session is a real signed-cookie SessionStore.

These tests verify:
- Input rules run before any provider call
- Provider rejections become failed ServiceResults with their codes
- Sign-in stores the identity under a fresh session key
- Sign-out clears the whole session
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from django.contrib.sessions.backends.signed_cookies import SessionStore

from authentication.adapters import IdentityProviderAdapter
from authentication.exceptions import EmailExistsError, InvalidCredentialsError
from authentication.services import SESSION_IDENTITY_KEY, IdentityService
from core.exceptions import NetworkError


@pytest.fixture
def session():
    return SessionStore()


@pytest.fixture
def adapter(identity):
    mock = MagicMock(spec=IdentityProviderAdapter)
    mock.sign_in = AsyncMock(return_value=identity)
    mock.sign_up = AsyncMock(return_value=identity)
    return mock


@pytest.fixture
def service(session, adapter):
    return IdentityService(session, adapter=adapter)


class TestRegister:
    """Tests for IdentityService.register."""

    def test_success_signs_in(self, service, session, adapter, identity):
        result = service.register(" alice@example.com ", "secret1", "secret1")

        assert result.success
        assert result.data == identity
        adapter.sign_up.assert_awaited_once_with("alice@example.com", "secret1")
        assert session[SESSION_IDENTITY_KEY]["uid"] == "uid_alice"

    @pytest.mark.parametrize("email,password", [("", "secret1"), ("a@b.co", ""), ("  ", "  ")])
    def test_missing_fields(self, service, adapter, email, password):
        result = service.register(email, password, password)

        assert not result.success
        assert result.error == "Please enter both email and password"
        assert result.error_code == "VALIDATION_ERROR"
        adapter.sign_up.assert_not_awaited()

    def test_password_mismatch(self, service, adapter):
        result = service.register("alice@example.com", "secret1", "secret2")

        assert result.error == "Passwords do not match"
        assert result.error_code == "PASSWORD_MISMATCH"
        adapter.sign_up.assert_not_awaited()

    def test_password_too_short(self, service, adapter):
        result = service.register("alice@example.com", "abc12", "abc12")

        assert result.error_code == "PASSWORD_TOO_SHORT"
        adapter.sign_up.assert_not_awaited()

    def test_six_characters_is_enough(self, service, adapter):
        assert service.register("alice@example.com", "abc123", "abc123").success

    def test_email_exists(self, service, session, adapter):
        adapter.sign_up.side_effect = EmailExistsError(
            "An account with this email already exists"
        )

        result = service.register("alice@example.com", "secret1", "secret1")

        assert result.error_code == "EMAIL_EXISTS"
        assert result.error == "An account with this email already exists"
        assert SESSION_IDENTITY_KEY not in session


class TestLogin:
    """Tests for IdentityService.login."""

    def test_success(self, service, session, adapter):
        result = service.login("alice@example.com", "secret1")

        assert result.success
        adapter.sign_in.assert_awaited_once_with("alice@example.com", "secret1")
        assert service.current_identity().data.uid == "uid_alice"

    def test_keeps_other_session_data(self, service, session):
        session["other"] = "value"

        service.login("alice@example.com", "secret1")

        assert session.modified
        assert session["other"] == "value"

    def test_missing_password(self, service, adapter):
        result = service.login("alice@example.com", "")

        assert result.errors == {"password": ["This field is required."]}
        adapter.sign_in.assert_not_awaited()

    @pytest.mark.parametrize("email,password", [("", ""), ("  ", "secret1")])
    def test_missing_fields(self, service, adapter, email, password):
        result = service.login(email, password)

        assert result.error_code == "VALIDATION_ERROR"
        adapter.sign_in.assert_not_awaited()

    def test_password_too_short(self, service, adapter):
        result = service.login("alice@example.com", "abc")

        assert result.error_code == "PASSWORD_TOO_SHORT"
        assert result.errors == {"password": ["Password must be at least 6 characters"]}
        adapter.sign_in.assert_not_awaited()

    def test_invalid_credentials(self, service, session, adapter):
        adapter.sign_in.side_effect = InvalidCredentialsError("Invalid email or password")

        result = service.login("alice@example.com", "wrong-password")

        assert result.error_code == "INVALID_CREDENTIALS"
        assert not service.current_identity().success

    def test_network_error(self, service, adapter):
        adapter.sign_in.side_effect = NetworkError("Network error")

        result = service.login("alice@example.com", "secret1")

        assert result.error_code == "NETWORK_ERROR"


class TestSessionLifecycle:
    def test_current_identity_when_signed_out(self, service):
        result = service.current_identity()

        assert result.error_code == "NOT_AUTHENTICATED"
        assert result.error == "Not signed in"

    def test_logout_clears_everything(self, service, session):
        service.login("alice@example.com", "secret1")
        session["gallery_screens"] = {"all": {"selected_media_id": "m1"}}

        result = service.logout()

        assert result.success
        assert not service.current_identity().success
        assert "gallery_screens" not in session

    def test_logout_when_signed_out(self, service):
        assert service.logout().success

    def test_incomplete_session_record_is_ignored(self, service, session):
        session[SESSION_IDENTITY_KEY] = {"uid": "uid_alice"}

        assert not service.current_identity().success
