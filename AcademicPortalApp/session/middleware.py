from AcademicPortalApp.core.config import settings
from AcademicPortalApp.session.portal_session import PortalSession


class PortalSessionMiddleware:
    """Attach a fresh ``PortalSession`` to each request and persist its cookie changes."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        session = PortalSession()
        try:
            session.initialize(request.COOKIES.get(settings.token_cookie))
            request.portal_session = session
            response = self.get_response(request)
        finally:
            session.close()
        session.persist(response)
        return response
