import httpx
import pytest

from AcademicPortalApp.domain.services.api_client import ApiClient
from AcademicPortalApp.tests.backend import TOKEN, FakeBackend, user_payload


@pytest.fixture
def backend(settings):
    fake = FakeBackend()
    settings.PORTAL_API_TRANSPORT = httpx.MockTransport(fake)
    return fake


@pytest.fixture
def api(backend):
    client = ApiClient(transport=httpx.MockTransport(backend), token=TOKEN)
    yield client
    client.close()


def sign_in(client, backend, role):
    backend.on("GET", "/auth/profile", {"success": True, "data": {"user": user_payload(role)}})
    client.cookies["auth-token"] = TOKEN
    return client


@pytest.fixture
def student_client(client, backend):
    return sign_in(client, backend, "student")


@pytest.fixture
def lecturer_client(client, backend):
    return sign_in(client, backend, "lecturer")


@pytest.fixture
def admin_client(client, backend):
    return sign_in(client, backend, "admin")
