from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, CSRFCheck


def _dummy_get_response(request):
    return None


class PortalSessionAuthentication(BaseAuthentication):
    """
    Exposes the portal session user as ``request.user``.
    The session itself is restored by ``PortalSessionMiddleware``; this class
    only reads it. Like DRF's SessionAuthentication, unsafe requests made
    with a signed-in cookie must carry a valid CSRF token.
    """

    def authenticate(self, request):
        session = getattr(request._request, "portal_session", None)
        if session is None or not session.is_authenticated:
            return None
        self.enforce_csrf(request)
        return session.user, session.token

    def enforce_csrf(self, request):
        check = CSRFCheck(_dummy_get_response)
        check.process_request(request)
        reason = check.process_view(request, None, (), {})
        if reason:
            raise exceptions.PermissionDenied(f"CSRF Failed: {reason}")
