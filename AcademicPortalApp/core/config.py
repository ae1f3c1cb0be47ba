import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str) -> float | None:
    raw = os.getenv(name)
    return float(raw) if raw else None


@dataclass(frozen=True)
class PortalSettings:
    api_base_url: str = os.getenv("PORTAL_API_BASE_URL", "http://localhost:5000/api")
    api_timeout: float | None = _env_float("PORTAL_API_TIMEOUT")
    token_cookie: str = os.getenv("PORTAL_TOKEN_COOKIE", "auth-token")
    token_max_age_days: int = int(os.getenv("PORTAL_TOKEN_MAX_AGE_DAYS", "7"))
    lecturer_course_fallback: bool = _env_bool("PORTAL_LECTURER_COURSE_FALLBACK", True)
    max_upload_mb: int = int(os.getenv("PORTAL_MAX_UPLOAD_MB", "10"))
    secret_key: str = os.getenv("DJANGO_SECRET_KEY", "insecure-dev-key-change-me")
    debug: bool = _env_bool("DJANGO_DEBUG", False)

    @property
    def token_max_age(self) -> int:
        return self.token_max_age_days * 24 * 60 * 60

settings = PortalSettings()
