"""Plain records mirrored from the backend API.

The backend speaks camelCase JSON; ``from_api`` maps it onto snake_case
fields. Missing optional keys become ``None``/defaults so that a sparse
payload never breaks a page render. Nothing here enforces relationships,
they are resolved server-side and only displayed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from django.utils.dateparse import parse_datetime


def _dt(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp; anything unparseable becomes None."""
    if isinstance(value, datetime):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return parse_datetime(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _num(value: Any, default: float | None = None) -> float | None:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> str:
    """Strings pass through; numbers are rendered, anything else is blank."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


@dataclass
class PersonRef:
    """Lecturer/student summary embedded in other records."""
    id: int | None
    first_name: str = ""
    last_name: str = ""
    email: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_api(cls, payload: Any) -> "PersonRef | None":
        if not isinstance(payload, dict):
            return None
        return cls(
            id=_int(payload.get("id")),
            first_name=_text(payload.get("firstName")),
            last_name=_text(payload.get("lastName")),
            email=_text(payload.get("email")),
        )


@dataclass
class User:
    """Authenticated account as returned by ``/auth/*``."""
    id: str
    email: str
    role: str
    first_name: str = ""
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip() or self.email

    @classmethod
    def from_api(cls, payload: Any) -> "User | None":
        if not isinstance(payload, dict) or payload.get("id") is None:
            return None
        # capabilities are keyed by role name
        role = payload.get("role")
        if not isinstance(role, str):
            return None
        return cls(
            id=str(payload["id"]),
            email=_text(payload.get("email")),
            role=role.lower(),
            first_name=_text(payload.get("firstName")),
            last_name=_text(payload.get("lastName")),
        )


@dataclass
class CourseRef:
    id: int | None
    title: str = ""
    code: str = ""

    @classmethod
    def from_api(cls, payload: Any) -> "CourseRef | None":
        if not isinstance(payload, dict):
            return None
        return cls(id=_int(payload.get("id")), title=_text(payload.get("title")), code=_text(payload.get("code")))


@dataclass
class Course:
    id: int | None
    title: str
    code: str = ""
    description: str = ""
    credits: int | None = None
    max_students: int | None = None
    status: str = ""
    lecturer_id: int | None = None
    lecturer: PersonRef | None = None
    syllabus: str | None = None
    syllabus_url: str | None = None
    syllabus_file_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_api(cls, payload: Any) -> "Course":
        payload = _mapping(payload)
        return cls(
            id=_int(payload.get("id")),
            title=_text(payload.get("title")),
            code=_text(payload.get("code")),
            description=_text(payload.get("description")),
            credits=_int(payload.get("credits")),
            max_students=_int(payload.get("maxStudents")),
            status=_text(payload.get("status")),
            lecturer_id=_int(payload.get("lecturerId")),
            lecturer=PersonRef.from_api(payload.get("lecturer")),
            syllabus=payload.get("syllabus"),
            syllabus_url=payload.get("syllabusUrl"),
            syllabus_file_name=payload.get("syllabusFileName"),
            created_at=_dt(payload.get("createdAt")),
            updated_at=_dt(payload.get("updatedAt")),
        )


@dataclass
class Enrollment:
    id: int | None
    course_id: int | None
    student_id: int | None
    status: str
    notes: str = ""
    approved_by: int | None = None
    course: Course | None = None
    student: PersonRef | None = None
    approver: PersonRef | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_api(cls, payload: Any) -> "Enrollment":
        payload = _mapping(payload)
        course = payload.get("course")
        return cls(
            id=_int(payload.get("id")),
            course_id=_int(payload.get("courseId")),
            student_id=_int(payload.get("studentId")),
            status=_text(payload.get("status")),
            notes=_text(payload.get("notes")),
            approved_by=_int(payload.get("approvedBy")),
            course=Course.from_api(course) if isinstance(course, dict) else None,
            student=PersonRef.from_api(payload.get("student")),
            approver=PersonRef.from_api(payload.get("approver")),
            created_at=_dt(payload.get("createdAt")),
            updated_at=_dt(payload.get("updatedAt")),
        )


@dataclass
class Assignment:
    id: int | None
    course_id: int | None
    title: str
    weight: float = 0.0
    description: str = ""
    due_at: datetime | None = None
    is_active: bool = False
    course: CourseRef | None = None
    lecturer: PersonRef | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_api(cls, payload: Any) -> "Assignment":
        payload = _mapping(payload)
        return cls(
            id=_int(payload.get("id")),
            course_id=_int(payload.get("courseId")),
            title=_text(payload.get("title")),
            weight=_num(payload.get("weight"), 0.0),
            description=_text(payload.get("description")),
            due_at=_dt(payload.get("dueAt")),
            is_active=bool(payload.get("isActive")),
            course=CourseRef.from_api(payload.get("course")),
            lecturer=PersonRef.from_api(payload.get("lecturer")),
            created_at=_dt(payload.get("createdAt")),
            updated_at=_dt(payload.get("updatedAt")),
        )


@dataclass
class AssignmentSubmission:
    id: int | None
    assignment_id: int | None
    student_id: int | None
    status: str
    text_submission: str = ""
    file_url: str | None = None
    file_name: str | None = None
    grade: float | None = None
    feedback: str = ""
    submitted_at: datetime | None = None
    graded_at: datetime | None = None
    assignment: Assignment | None = None
    student: PersonRef | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_submitted(self) -> bool:
        return self.status in ("submitted", "graded")

    @property
    def is_graded(self) -> bool:
        return self.status == "graded"

    @classmethod
    def from_api(cls, payload: Any) -> "AssignmentSubmission":
        payload = _mapping(payload)
        assignment = payload.get("assignment")
        return cls(
            id=_int(payload.get("id")),
            assignment_id=_int(payload.get("assignmentId")),
            student_id=_int(payload.get("studentId")),
            status=_text(payload.get("status")),
            text_submission=_text(payload.get("textSubmission")),
            file_url=payload.get("fileUrl"),
            file_name=payload.get("fileName"),
            grade=_num(payload.get("grade")),
            feedback=_text(payload.get("feedback")),
            submitted_at=_dt(payload.get("submittedAt")),
            graded_at=_dt(payload.get("gradedAt")),
            assignment=Assignment.from_api(assignment) if isinstance(assignment, dict) else None,
            student=PersonRef.from_api(payload.get("student")),
            created_at=_dt(payload.get("createdAt")),
            updated_at=_dt(payload.get("updatedAt")),
        )


@dataclass
class AssignmentGradeLine:
    assignment_id: int | None
    title: str
    weight: float
    max_points: float
    earned_points: float
    grade: float | None

    @classmethod
    def from_api(cls, payload: Any) -> "AssignmentGradeLine":
        payload = _mapping(payload)
        return cls(
            assignment_id=_int(payload.get("assignmentId")),
            title=_text(payload.get("title")),
            weight=_num(payload.get("weight"), 0.0),
            max_points=_num(payload.get("maxPoints"), 0.0),
            earned_points=_num(payload.get("earnedPoints"), 0.0),
            grade=_num(payload.get("grade")),
        )


@dataclass
class CourseGrade:
    """Weighted course result computed by the backend for one student."""
    course_id: int | None
    student_id: int | None
    total_points: float = 0.0
    earned_points: float = 0.0
    percentage: float = 0.0
    letter_grade: str = ""
    assignments: list[AssignmentGradeLine] = field(default_factory=list)

    @classmethod
    def from_api(cls, payload: Any) -> "CourseGrade":
        payload = _mapping(payload)
        lines = payload.get("assignments")
        return cls(
            course_id=_int(payload.get("courseId")),
            student_id=_int(payload.get("studentId")),
            total_points=_num(payload.get("totalPoints"), 0.0),
            earned_points=_num(payload.get("earnedPoints"), 0.0),
            percentage=_num(payload.get("percentage"), 0.0),
            letter_grade=_text(payload.get("letterGrade")),
            assignments=[AssignmentGradeLine.from_api(line) for line in lines] if isinstance(lines, list) else [],
        )


@dataclass
class AuthResult:
    user: User | None
    token: str | None
