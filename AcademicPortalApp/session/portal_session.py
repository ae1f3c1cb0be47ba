"""Per-request session: who is signed in and which backend token they hold.

A ``PortalSession`` is built by ``PortalSessionMiddleware`` for every request
and handed to the page controllers as ``request.portal_session``. It is never
shared between requests. The token travels in a single cookie; any change to
it is recorded here and written onto the response by ``persist``.
"""
import logging
from typing import Any, Callable

from django.http import HttpResponseBase

from AcademicPortalApp.core.capabilities import Capabilities, capabilities_for
from AcademicPortalApp.core.config import settings
from AcademicPortalApp.core.exceptions import ApiError
from AcademicPortalApp.domain.models import AuthResult, User
from AcademicPortalApp.domain.services import auth_service
from AcademicPortalApp.domain.services.api_client import ApiClient, build_api_client

logger = logging.getLogger(__name__)

_UNCHANGED = object()


class PortalSession:
    def __init__(self, client_factory: Callable[[str | None], ApiClient] = build_api_client):
        self.api = client_factory(None)
        self.user: User | None = None
        self._cookie: Any = _UNCHANGED

    @property
    def token(self) -> str | None:
        return self.api.token

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def role(self) -> str | None:
        return self.user.role if self.user else None

    @property
    def capabilities(self) -> Capabilities:
        return capabilities_for(self.role)

    def initialize(self, token: str | None) -> None:
        """Restore the session from a stored token.

        Fetches the profile when a token is present. Any failure discards the
        token and leaves an anonymous session; this never raises.
        """
        if not token:
            return
        self.api.token = token
        try:
            self.user = auth_service.get_profile(self.api)
        except ApiError as exc:
            logger.warning("Failed to get user profile: %s", exc.message)
            self._clear()

    def login(self, email: str, password: str) -> User:
        return self._establish(auth_service.login(self.api, email, password), "Login failed")

    def register(self, data: dict[str, Any]) -> User:
        return self._establish(auth_service.register(self.api, data), "Registration failed")

    def logout(self) -> None:
        self._clear()

    def _establish(self, result: AuthResult, fallback: str) -> User:
        if result.user is None or not result.token:
            raise ApiError(fallback)
        self.api.token = result.token
        self.user = result.user
        self._cookie = result.token
        return result.user

    def _clear(self) -> None:
        self.api.token = None
        self.user = None
        self._cookie = None

    def persist(self, response: HttpResponseBase) -> None:
        """Write a pending token change (set or delete) onto the response cookie."""
        if self._cookie is _UNCHANGED:
            return
        if self._cookie is None:
            response.delete_cookie(settings.token_cookie, samesite="Lax")
            return
        response.set_cookie(
            settings.token_cookie,
            self._cookie,
            max_age=settings.token_max_age,
            httponly=True,
            samesite="Lax",
        )

    def close(self) -> None:
        self.api.close()
