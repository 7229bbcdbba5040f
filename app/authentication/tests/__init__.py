"""
Tests for authentication app.

This package contains test modules for:
- test_adapters.py: Identity Toolkit request shape and error mapping
- test_services.py: IdentityService rules and session handling
- test_views.py: API endpoint tests, including the login -> me round trip

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_services.py
"""
