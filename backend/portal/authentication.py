"""
Session cookie authentication for Django REST Framework.
"""
import logging

from rest_framework import authentication

from portal.middleware import get_identity

logger = logging.getLogger(__name__)


class SessionCookieAuthentication(authentication.BaseAuthentication):
    """
    Authenticate API requests with the same per-collection session cookies the
    pages use.

    ``request.user`` becomes the principal that defines the identity kind (a
    ``User``, ``Employer`` or ``Candidate``) and ``request.auth`` the
    ``Identity`` itself. Missing or invalid cookies leave the request
    anonymous rather than failing, so public endpoints keep working.
    """

    def authenticate(self, request):
        identity = get_identity(request._request)
        if identity is None:
            return None
        return (identity.principal, identity)

    def authenticate_header(self, request):
        """
        Value of the `WWW-Authenticate` header so that unauthenticated calls
        answer 401 instead of 403.
        """
        return 'Cookie realm="api"'
