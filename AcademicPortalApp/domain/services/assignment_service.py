"""Service functions for assignments, submissions and grades."""
from typing import Any, BinaryIO

from AcademicPortalApp.domain.envelope import ensure_success, unwrap_entity, unwrap_list
from AcademicPortalApp.domain.models import Assignment, AssignmentSubmission, CourseGrade
from AcademicPortalApp.domain.services.api_client import ApiClient


def _assignments(payload: Any) -> list[Assignment]:
    return [Assignment.from_api(item) for item in unwrap_list(payload, "assignments")]


def get_course_assignments(client: ApiClient, course_id: int | str) -> list[Assignment]:
    return _assignments(client.get(f"/assignments/course/{course_id}", fallback="Failed to load assignments"))


def get_lecturer_assignments(client: ApiClient, lecturer_id: str) -> list[Assignment]:
    return _assignments(client.get(f"/assignments/lecturer/{lecturer_id}", fallback="Failed to load assignments"))


def get_student_assignments(client: ApiClient, student_id: str) -> list[Assignment]:
    """Assignments across all courses the student is enrolled in."""
    return _assignments(client.get(f"/assignments/student/{student_id}", fallback="Failed to load assignments"))


def create_assignment(client: ApiClient, data: dict[str, Any]) -> Assignment:
    fallback = "Failed to create assignment"
    payload = client.post("/assignments", json=data, fallback=fallback)
    ensure_success(payload, fallback)
    return Assignment.from_api(unwrap_entity(payload, "assignment"))


def update_assignment(client: ApiClient, assignment_id: int | str, data: dict[str, Any]) -> Assignment:
    fallback = "Failed to update assignment"
    payload = client.put(f"/assignments/{assignment_id}", json=data, fallback=fallback)
    ensure_success(payload, fallback)
    return Assignment.from_api(unwrap_entity(payload, "assignment"))


def delete_assignment(client: ApiClient, assignment_id: int | str) -> None:
    fallback = "Failed to delete assignment"
    payload = client.delete(f"/assignments/{assignment_id}", fallback=fallback)
    ensure_success(payload, fallback)


def get_assignment_submissions(client: ApiClient, assignment_id: int | str) -> list[AssignmentSubmission]:
    """Every submission for an assignment (lecturer)."""
    payload = client.get(f"/assignments/{assignment_id}/submissions", fallback="Failed to load submissions")
    return [AssignmentSubmission.from_api(item) for item in unwrap_list(payload, "submissions")]


def submit_assignment(
    client: ApiClient,
    assignment_id: int | str,
    text_submission: str | None = None,
    file: BinaryIO | None = None,
    filename: str | None = None,
    content_type: str | None = None,
) -> AssignmentSubmission:
    """Submit text and/or a file for an assignment as a multipart form (student).

    Args:
        client: Session API client.
        assignment_id: Target assignment.
        text_submission: Optional answer text; omitted from the form when blank.
        file: Optional open file; sent as multipart field ``file``.

    Returns:
        The stored submission.
    """
    fallback = "Failed to submit assignment"
    form = {"assignmentId": str(assignment_id)}
    if text_submission:
        form["textSubmission"] = text_submission
    files = None
    if file is not None:
        files = {"file": (filename or "upload", file, content_type or "application/octet-stream")}
    payload = client.post("/assignments/submit", data=form, files=files, fallback=fallback)
    ensure_success(payload, fallback)
    return AssignmentSubmission.from_api(unwrap_entity(payload, "submission"))


def grade_submission(client: ApiClient, submission_id: int | str, grade: float, feedback: str | None = None) -> AssignmentSubmission:
    """Store a grade (0-100) and optional feedback for a submission (lecturer)."""
    fallback = "Failed to grade submission"
    body: dict[str, Any] = {"submissionId": int(submission_id), "grade": grade}
    if feedback:
        body["feedback"] = feedback
    payload = client.post("/assignments/grade", json=body, fallback=fallback)
    ensure_success(payload, fallback)
    return AssignmentSubmission.from_api(unwrap_entity(payload, "submission"))


def get_student_submission(client: ApiClient, assignment_id: int | str, student_id: str) -> AssignmentSubmission | None:
    """The student's submission for one assignment, or None when there is none yet."""
    fallback = "Failed to load submission"
    payload = client.get(f"/assignments/{assignment_id}/submission/{student_id}", fallback=fallback)
    ensure_success(payload, fallback)
    data = payload.get("data") if isinstance(payload, dict) else None
    if isinstance(data, dict) and data.get("submission"):
        return AssignmentSubmission.from_api(data["submission"])
    return None


def get_course_grades(client: ApiClient, course_id: int | str, student_id: str) -> CourseGrade:
    fallback = "Failed to load grades"
    payload = client.get(f"/assignments/course/{course_id}/grades/{student_id}", fallback=fallback)
    ensure_success(payload, fallback)
    return CourseGrade.from_api(unwrap_entity(payload, "grades"))


def get_student_grades(client: ApiClient, student_id: str) -> list[CourseGrade]:
    """Course results for a student across all enrolled courses."""
    payload = client.get(f"/assignments/student/{student_id}/grades", fallback="Failed to load grades")
    return [CourseGrade.from_api(item) for item in unwrap_list(payload, "grades")]
