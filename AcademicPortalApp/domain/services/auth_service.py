"""Authentication calls against ``/auth/*``."""
from typing import Any

from AcademicPortalApp.core.exceptions import ApiError
from AcademicPortalApp.domain.envelope import ensure_success, unwrap_entity
from AcademicPortalApp.domain.models import AuthResult, User
from AcademicPortalApp.domain.services.api_client import ApiClient


def _auth_result(payload: Any) -> AuthResult:
    # { success, message, data: { user, token } }
    data = payload.get("data") if isinstance(payload, dict) else None
    data = data if isinstance(data, dict) else {}
    return AuthResult(user=User.from_api(data.get("user")), token=data.get("token"))


def login(client: ApiClient, email: str, password: str) -> AuthResult:
    fallback = "Login failed. Please check your credentials."
    payload = client.post("/auth/login", json={"email": email, "password": password}, fallback=fallback)
    ensure_success(payload, fallback)
    return _auth_result(payload)


def register(client: ApiClient, data: dict[str, Any]) -> AuthResult:
    fallback = "Registration failed. Please try again."
    payload = client.post("/auth/register", json=data, fallback=fallback)
    ensure_success(payload, fallback)
    return _auth_result(payload)


def logout(client: ApiClient) -> None:
    client.post("/auth/logout", fallback="Logout failed.")


def get_profile(client: ApiClient) -> User:
    """Fetch the account behind the client's token.

    Raises:
        ApiError: the call failed or the body does not describe a user
            (no id, or a role that is not a string).
    """
    fallback = "Failed to get user profile"
    payload = client.get("/auth/profile", fallback=fallback)
    ensure_success(payload, fallback)
    user = User.from_api(unwrap_entity(payload, "user"))
    if user is None:
        raise ApiError(fallback)
    return user
