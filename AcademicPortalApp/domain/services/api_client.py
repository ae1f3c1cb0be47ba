"""HTTP client for the backend REST API.

One ``ApiClient`` belongs to one portal session. It sends exactly one request
per call, attaches the bearer token when the session has one, and turns every
failure mode into ``ApiError``:

  * transport failures (connection refused, timeouts, ...) -> fallback message
  * non-2xx responses -> ``error``/``message``/``detail`` from the body, else fallback
  * undecodable bodies -> fallback message

There is no retry and no cancellation; a failed call surfaces immediately.
"""
import logging
from typing import Any

import httpx
from django.conf import settings as django_settings

from AcademicPortalApp.core.config import settings
from AcademicPortalApp.core.exceptions import ApiError
from AcademicPortalApp.domain.envelope import error_message

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK = "Request failed. Please try again."


class ApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        options: dict[str, Any] = {"base_url": base_url or settings.api_base_url}
        if settings.api_timeout is not None:
            options["timeout"] = settings.api_timeout
        if transport is not None:
            options["transport"] = transport
        self._http = httpx.Client(**options)
        self.token = token

    def close(self) -> None:
        self._http.close()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        data: dict | None = None,
        files: dict | None = None,
        fallback: str = DEFAULT_FALLBACK,
    ) -> Any:
        """Send one request and return the decoded JSON body (``{}`` when empty)."""
        try:
            response = self._http.request(
                method, path, json=json, data=data, files=files, headers=self._headers()
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc.__class__.__name__)
            raise ApiError(fallback) from exc

        payload = self._decode(response, fallback)
        if response.is_error:
            logger.warning("%s %s returned %s", method, path, response.status_code)
            raise ApiError(error_message(payload, fallback), status_code=response.status_code)
        return payload

    @staticmethod
    def _decode(response: httpx.Response, fallback: str) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            if response.is_error:
                return {}
            raise ApiError(fallback, status_code=response.status_code) from exc

    def get(self, path: str, **kwargs: Any) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Any:
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> Any:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Any:
        return self.request("DELETE", path, **kwargs)


def build_api_client(token: str | None = None) -> ApiClient:
    """Client for one session; honours the ``PORTAL_API_TRANSPORT`` Django setting (used by tests)."""
    transport = getattr(django_settings, "PORTAL_API_TRANSPORT", None)
    return ApiClient(token=token, transport=transport)
