"""
DRF authentication backed by the session-stored identity.

Configured as the default authentication class:

    REST_FRAMEWORK = {
        "DEFAULT_AUTHENTICATION_CLASSES": [
            "authentication.authentication.SessionIdentityAuthentication",
        ],
    }

Unauthenticated requests to views requiring IsAuthenticated get 401,
since authenticate_header() supplies a WWW-Authenticate value.
"""

from rest_framework.authentication import SessionAuthentication

from authentication.services import IdentityService


class SessionIdentityAuthentication(SessionAuthentication):
    """
    Authenticate with the Identity stored in the session.

    CSRF is enforced for unsafe methods exactly as DRF's SessionAuthentication
    does, since the session travels in a cookie.
    """

    def authenticate(self, request):
        result = IdentityService(request._request.session).current_identity()
        if not result:
            return None

        self.enforce_csrf(request)
        return (result.data, result.data.id_token)

    def authenticate_header(self, request):
        return 'Session realm="api"'
