"""
Authentication application.

This app signs users in against an external identity provider and keeps
the resulting identity in the browser session. There is no local user table.

Key components:
    - Identity: Signed-in user record stored in the session
    - IdentityProviderAdapter: Identity Toolkit REST calls
    - IdentityService: Register, sign in, sign out, current identity
    - SessionIdentityAuthentication: DRF authentication from the session

Usage:
    from authentication.services import IdentityService

    result = IdentityService(request.session).current_identity()
"""
