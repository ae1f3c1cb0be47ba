"""Service functions for courses and enrollments.

Each function wraps exactly one backend call, checks the envelope for an
explicit failure and unwraps the payload into domain records. They hold no
state; the ``ApiClient`` passed in carries the session token.
"""
from typing import Any, BinaryIO

from AcademicPortalApp.domain.envelope import ensure_success, unwrap_entity, unwrap_list
from AcademicPortalApp.domain.models import Course, Enrollment
from AcademicPortalApp.domain.services.api_client import ApiClient


def _courses(payload: Any) -> list[Course]:
    return [Course.from_api(item) for item in unwrap_list(payload, "courses")]


def get_courses(client: ApiClient) -> list[Course]:
    """List every course visible to the session."""
    return _courses(client.get("/courses", fallback="Failed to load courses. Please try again."))


def get_lecturer_courses(client: ApiClient, lecturer_id: str) -> list[Course]:
    return _courses(client.get(f"/courses/lecturer/{lecturer_id}", fallback="Failed to load courses."))


def get_student_courses(client: ApiClient, student_id: str) -> list[Course]:
    return _courses(client.get(f"/courses/student/{student_id}", fallback="Failed to load courses."))


def create_course(client: ApiClient, data: dict[str, Any]) -> Course:
    """Create a course (lecturer only).

    Args:
        client: Session API client.
        data: Validated camelCase payload (title, code, description, credits, maxStudents).

    Returns:
        The created Course as echoed by the backend.
    """
    fallback = "Failed to create course. Please try again."
    payload = client.post("/courses", json=data, fallback=fallback)
    ensure_success(payload, fallback)
    return Course.from_api(unwrap_entity(payload, "course"))


def update_course(client: ApiClient, course_id: int | str, data: dict[str, Any]) -> Course:
    fallback = "Failed to update course. Please try again."
    payload = client.put(f"/courses/{course_id}", json=data, fallback=fallback)
    ensure_success(payload, fallback)
    return Course.from_api(unwrap_entity(payload, "course"))


def delete_course(client: ApiClient, course_id: int | str) -> None:
    fallback = "Failed to delete course. Please try again."
    payload = client.delete(f"/courses/{course_id}", fallback=fallback)
    ensure_success(payload, fallback)


def upload_syllabus(client: ApiClient, course_id: int | str, file: BinaryIO, filename: str, content_type: str | None = None) -> Course:
    """Upload a syllabus document as multipart field ``syllabus``."""
    fallback = "Failed to upload syllabus. Please try again."
    upload = (filename, file, content_type or "application/octet-stream")
    payload = client.post(f"/courses/{course_id}/syllabus", files={"syllabus": upload}, fallback=fallback)
    ensure_success(payload, fallback)
    return Course.from_api(unwrap_entity(payload, "course"))


def enroll_in_course(client: ApiClient, course_id: int | str) -> Enrollment:
    """Request enrollment of the session's student in a course."""
    fallback = "Failed to enroll in course. Please try again."
    payload = client.post("/enrollments/enroll", json={"courseId": int(course_id)}, fallback=fallback)
    ensure_success(payload, fallback)
    return Enrollment.from_api(unwrap_entity(payload, "enrollment"))


def drop_course(client: ApiClient, course_id: int | str) -> None:
    fallback = "Failed to drop course. Please try again."
    payload = client.delete(f"/courses/{course_id}/enroll", fallback=fallback)
    ensure_success(payload, fallback)


def get_enrollments(client: ApiClient) -> list[Enrollment]:
    """List all enrollments (admin)."""
    payload = client.get("/enrollments", fallback="Failed to load enrollments. Please try again.")
    return [Enrollment.from_api(item) for item in unwrap_list(payload, "enrollments")]


def update_enrollment_status(client: ApiClient, enrollment_id: int | str, status: str) -> Enrollment:
    """Approve or reject an enrollment (admin); ``status`` is ``approved`` or ``rejected``."""
    fallback = f"Failed to {'approve' if status == 'approved' else 'reject'} enrollment. Please try again."
    payload = client.patch(f"/enrollments/{enrollment_id}/approve", json={"status": status}, fallback=fallback)
    ensure_success(payload, fallback)
    return Enrollment.from_api(unwrap_entity(payload, "enrollment"))


def assign_lecturer(client: ApiClient, course_id: int | str, lecturer_id: int | str) -> Course:
    fallback = "Failed to assign lecturer. Please try again."
    payload = client.put(f"/courses/{course_id}/assign-lecturer", json={"lecturerId": lecturer_id}, fallback=fallback)
    ensure_success(payload, fallback)
    return Course.from_api(unwrap_entity(payload, "course"))
