"""Base controller shared by every portal page.

A page is a DRF ``APIView`` rendered through ``TemplateHTMLRenderer``. GET
loads what the page shows; POST carries an ``action`` field naming the intent
and is dispatched to ``on_<action>``. A handler either redirects (the page is
reloaded from the backend) or raises; ``ApiError`` and schema failures are
rendered inline next to the reloaded page.
"""
import logging

from django.http import HttpResponseForbidden
from django.middleware.csrf import get_token
from django.shortcuts import redirect
from rest_framework import exceptions, permissions, serializers
from rest_framework.renderers import TemplateHTMLRenderer
from rest_framework.response import Response
from rest_framework.views import APIView

from AcademicPortalApp.core.authentication import PortalSessionAuthentication
from AcademicPortalApp.core.exceptions import ApiError, LoginRequired, RoleNotAllowed
from AcademicPortalApp.core.permissions import CanOpenPage, IsPortalAuthenticated
from AcademicPortalApp.pages.serializers import first_error

logger = logging.getLogger(__name__)


class PortalPageView(APIView):
    renderer_classes = [TemplateHTMLRenderer]
    permission_classes = [IsPortalAuthenticated, CanOpenPage]
    page = None
    template = None
    # POST actions accepted regardless of capabilities; see ``action_allowed``
    actions: tuple[str, ...] = ()
    default_action = ""

    @property
    def session(self):
        return self.request.portal_session

    @property
    def caps(self):
        return self.session.capabilities

    def check_permissions(self, request):
        for permission in self.get_permissions():
            if not permission.has_permission(request, self):
                raise permission.exception(self.page)

    def handle_exception(self, exc):
        if isinstance(exc, LoginRequired):
            return redirect("/login")
        if isinstance(exc, RoleNotAllowed):
            logger.info("Role %r may not open %s", self.session.role, exc)
            return redirect("/dashboard")
        if isinstance(exc, exceptions.PermissionDenied):
            return HttpResponseForbidden(str(exc.detail))
        return super().handle_exception(exc)

    def load(self, request, *args, **kwargs) -> dict:
        """Fetch everything the page displays. May raise ``ApiError``."""
        return {}

    def render_page(self, request, *args, error=None, status=200, form=None, **kwargs):
        context = {}
        try:
            context = self.load(request, *args, **kwargs)
        except ApiError as exc:
            logger.warning("Loading %s failed: %s", self.page, exc.message)
            error = error or exc.message
        base = {
            "session": self.session,
            "user": self.session.user,
            "caps": self.caps,
            "nav": self.caps.nav,
            "page": self.page,
            "error": error,
            "form": form if form is not None else {},
        }
        base.update(context)
        return Response(base, status=status, template_name=self.template)

    def get(self, request, *args, **kwargs):
        return self.render_page(request, *args, **kwargs)

    def action_allowed(self, action: str) -> bool:
        return action in self.actions

    def post(self, request, *args, **kwargs):
        action = request.data.get("action") or self.default_action
        handler = getattr(self, f"on_{action}", None)
        if handler is None or not self.action_allowed(action):
            raise RoleNotAllowed(f"{self.page}:{action or '-'}")
        try:
            return handler(request, *args, **kwargs)
        except serializers.ValidationError as exc:
            message = first_error(exc.detail)
        except ApiError as exc:
            logger.warning("%s on %s failed: %s", action, self.page, exc.message)
            message = exc.message
        form = {
            key: value for key, value in request.data.items()
            if key != "csrfmiddlewaretoken" and isinstance(value, str)
        }
        return self.render_page(request, *args, error=message, status=400, form=form, **kwargs)


class AlreadySignedIn(Exception):
    pass


class PublicPageView(PortalPageView):
    """Pages for anonymous visitors; a signed-in user is sent to the dashboard.

    Their forms post without a session, so the CSRF check that
    ``PortalSessionAuthentication`` applies to signed-in requests is run here
    for every unsafe method, and every GET hands out the CSRF cookie.
    """
    permission_classes = []

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        if self.session.is_authenticated:
            raise AlreadySignedIn()
        if request.method not in permissions.SAFE_METHODS:
            PortalSessionAuthentication().enforce_csrf(request)

    def get(self, request, *args, **kwargs):
        get_token(request)
        return super().get(request, *args, **kwargs)

    def handle_exception(self, exc):
        if isinstance(exc, AlreadySignedIn):
            return redirect("/dashboard")
        return super().handle_exception(exc)
