from rest_framework.permissions import BasePermission

from AcademicPortalApp.core.exceptions import LoginRequired, RoleNotAllowed


def _session(request):
    return getattr(request, "portal_session", None)


class IsPortalAuthenticated(BasePermission):
    """Grants access when the portal session holds a signed-in user."""
    exception = LoginRequired

    def has_permission(self, request, view):
        session = _session(request)
        return bool(session and session.is_authenticated)


class CanOpenPage(BasePermission):
    """
    Grants access when the session role lists ``view.page`` in its capabilities.
    Views without a page key are open to any signed-in user; so is the
    dashboard, which is where every refused page redirects.
    """
    exception = RoleNotAllowed

    def has_permission(self, request, view):
        page = getattr(view, "page", None)
        if page is None or page == "dashboard":
            return True
        return _session(request).capabilities.can_open(page)
