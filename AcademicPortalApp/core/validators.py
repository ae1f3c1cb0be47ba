"""Validation helpers for files picked in upload forms before they are forwarded to the API."""

from pathlib import PurePath
from typing import Any

from django.core.exceptions import ValidationError

import magic

from AcademicPortalApp.core.config import settings

SYLLABUS_EXTENSIONS: tuple[str, ...] = (".pdf", ".docx", ".doc")
SUBMISSION_EXTENSIONS: tuple[str, ...] = (
    ".pdf", ".doc", ".docx", ".txt", ".jpg", ".jpeg", ".png", ".gif",
)

ALLOWED_SYLLABUS_MIME: set[str] = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    # older libmagic builds report docx as a plain zip container
    "application/zip",
}

def validate_file_size(file_obj: Any, max_mb: int | None = None) -> None:
    """Ensure file size does not exceed max_mb megabytes."""
    limit = max_mb if max_mb is not None else settings.max_upload_mb
    if file_obj and file_obj.size > limit * 1024 * 1024:
        raise ValidationError(f"File size must be less than {limit}MB")

def validate_file_extension(file_obj: Any, accepted: tuple[str, ...]) -> None:
    """Reject files whose extension is not in ``accepted`` (case-insensitive)."""
    if not file_obj:
        return
    suffix = PurePath(file_obj.name or "").suffix.lower()
    if suffix not in accepted:
        raise ValidationError(f"File type must be one of: {', '.join(accepted)}")

def _probe_mime(file_obj: Any) -> str | None:
    """Read initial bytes to detect MIME type using libmagic."""
    if not file_obj:
        return None
    header = file_obj.read(4096)
    file_obj.seek(0)
    return magic.from_buffer(header, mime=True)

def validate_syllabus_mime(file_obj: Any) -> None:
    """Validate that a syllabus document has an allowed MIME type."""
    mime = _probe_mime(file_obj)
    if mime and mime not in ALLOWED_SYLLABUS_MIME:
        raise ValidationError(f"Unsupported syllabus mime: {mime}")

def format_file_size(size: int) -> str:
    """Render a byte count as ``1.5 MB`` style text."""
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    idx = 0
    while value >= 1024 and idx < len(units) - 1:
        value /= 1024
        idx += 1
    return f"{round(value, 2):g} {units[idx]}"
