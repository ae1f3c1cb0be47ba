"""Core app configuration and startup checks (like libmagic availability)."""

import magic
from django.apps import AppConfig
from django.core.checks import register, Error

class CoreConfig(AppConfig):
    """AppConfig registering a system check for libmagic presence."""
    name = "AcademicPortalApp.core"
    label = "portal_core"

    def ready(self):
        """Register a Django system check; syllabus uploads are sniffed with libmagic."""
        @register()
        def libmagic_check(app_configs, **kwargs):
            try:
                magic.from_buffer(b"%PDF-1.4\n")
            except Exception as exc:
                return [Error(f"libmagic not available: {exc}", id="portal_core.E001")]
            return []
