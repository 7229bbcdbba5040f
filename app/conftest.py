"""
Shared pytest configuration for the Django apps.

Provides:
- Auto-marking of tests by filename (unit / integration / e2e)
- A signed-in Identity and API clients authenticated with it
- httpx client helpers backed by httpx.MockTransport
"""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest
from rest_framework.test import APIClient

from authentication.identity import Identity


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_integration.py → e2e (full user journey workflows)
    - test_views.py, test_services.py, test_controller.py, etc. → integration
    - test_association.py, test_serializers.py, test_gateways.py, etc. → unit
    - Unmatched files → integration

    Explicit markers on test functions/classes take precedence.
    """
    # Filename patterns for each category
    e2e_patterns = ["test_integration.py"]

    integration_patterns = [
        "test_views.py",
        "test_services.py",
        "test_controller.py",
        "test_upload_service.py",
    ]

    unit_patterns = [
        "test_association.py",
        "test_serializers.py",
        "test_gateways.py",
        "test_adapters.py",
        "test_dragdrop.py",
        "test_context.py",
        "test_exceptions.py",
        "test_http.py",
    ]

    for item in items:
        # Skip if test already has unit/integration/e2e marker
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filepath = str(item.fspath)
        filename = filepath.split("/")[-1]

        # Check patterns in priority order
        if any(pattern in filename for pattern in e2e_patterns):
            item.add_marker(pytest.mark.e2e)
        elif any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Identity Fixtures
# =============================================================================


@pytest.fixture
def identity() -> Identity:
    """Signed-in identity with a display name."""
    return Identity(
        uid="uid_alice",
        email="alice@example.com",
        id_token="id-token-alice",
        display_name="Alice",
    )


@pytest.fixture
def api_client() -> APIClient:
    """Return unauthenticated API client."""
    return APIClient()


@pytest.fixture
def authenticated_client(identity: Identity) -> APIClient:
    """Return API client authenticated as the identity fixture."""
    client = APIClient()
    client.force_authenticate(user=identity)
    return client


# =============================================================================
# HTTP Mocking
# =============================================================================


@pytest.fixture
def mock_http() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """
    Build an AsyncClient whose requests are answered by a handler.

    Usage:
        def handler(request):
            return httpx.Response(200, json={...})

        client = mock_http(handler)
        gateway = DocumentStoreGateway(client=client, ...)
    """

    def build(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return build

