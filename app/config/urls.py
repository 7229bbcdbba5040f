"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Authentication endpoints
        register/                  - Create account and sign in
        login/                     - Email/password sign-in
        logout/                    - Sign out
        me/                        - Signed-in identity
    /api/v1/dashboard/             - Dashboard shell
        sidebar/                   - Sidebar collapse state
        selection/                 - Dialog state per tab
    /api/v1/media/                 - Media endpoints
        gallery/                   - Filtered gallery snapshot
        upload/                    - Upload files
        items/{id}/                - Delete media
        items/{id}/collection/     - Move media to a collection
        collections/               - List/create collections
        drag/start/                - Start dragging an item
        drag/drop/                 - Drop on a collection
        drag/end/                  - End the drag

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Authentication
    path("auth/", include("authentication.urls")),
    # Dashboard shell
    path("dashboard/", include("dashboard.urls")),
    # Media
    path("media/", include("media.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]
