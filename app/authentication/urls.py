"""
URL configuration for authentication app.

URL structure:
    /api/v1/auth/register/    - Create account and sign in (POST)
    /api/v1/auth/login/       - Sign in with email and password (POST)
    /api/v1/auth/logout/      - Sign out, clearing the session (POST)
    /api/v1/auth/me/          - Signed-in identity (GET)
"""

from django.urls import path

from authentication.views import (
    CurrentIdentityView,
    LoginView,
    LogoutView,
    RegisterView,
)

app_name = "authentication"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("me/", CurrentIdentityView.as_view(), name="me"),
]
