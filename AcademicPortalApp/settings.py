"""Django settings for the academic portal.

The portal owns no data: there is no database and no Django auth. Values that
operators tune come from the environment through ``core.config.settings``.
"""
from pathlib import Path

from AcademicPortalApp.core.config import settings as portal_settings

BASE_DIR = Path(__file__).resolve().parent

SECRET_KEY = portal_settings.secret_key
DEBUG = portal_settings.debug
ALLOWED_HOSTS = ["*"] if DEBUG else ["localhost", "127.0.0.1", "testserver"]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "AcademicPortalApp.core.apps.CoreConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "AcademicPortalApp.session.middleware.PortalSessionMiddleware",
]

ROOT_URLCONF = "AcademicPortalApp.urls"
WSGI_APPLICATION = "AcademicPortalApp.wsgi.application"
APPEND_SLASH = False

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

DATABASES = {}

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "AcademicPortalApp.core.authentication.PortalSessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.TemplateHTMLRenderer"],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.FormParser",
        "rest_framework.parsers.MultiPartParser",
    ],
    "UNAUTHENTICATED_USER": None,
}

# Fake backend for tests: an ``httpx`` transport handed to every ApiClient.
PORTAL_API_TRANSPORT = None

DATA_UPLOAD_MAX_MEMORY_SIZE = (portal_settings.max_upload_mb + 1) * 1024 * 1024

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {"format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "default"},
    },
    "loggers": {
        "AcademicPortalApp": {"level": "DEBUG" if DEBUG else "INFO"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
}
