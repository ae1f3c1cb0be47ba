"""View models for the card and panel template partials.

A presenter is a pure function of the entity plus the viewer's capabilities;
it decides labels, tones and which action buttons a partial renders. The
buttons post an ``action`` field back to the page controller.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from django.utils import timezone

from AcademicPortalApp.core.capabilities import Capabilities
from AcademicPortalApp.core.choices import CourseStatus
from AcademicPortalApp.domain.models import Assignment, AssignmentSubmission, Course, Enrollment
from AcademicPortalApp.pages import filters

MAX_POINTS = 100

_COURSE_TONES = {
    CourseStatus.DRAFT.value: "warning",
    CourseStatus.PUBLISHED.value: "success",
    CourseStatus.ARCHIVED.value: "muted",
}


def format_date(value: datetime | None) -> str:
    """``Jan 5, 2025``; empty string for a missing date."""
    if value is None:
        return ""
    value = timezone.localtime(value) if timezone.is_aware(value) else value
    return f"{value:%b} {value.day}, {value.year}"


def format_datetime(value: datetime | None) -> str:
    """``Jan 5, 2025, 02:30 PM``; empty string for a missing date."""
    if value is None:
        return ""
    value = timezone.localtime(value) if timezone.is_aware(value) else value
    return f"{format_date(value)}, {value:%I:%M %p}"


@dataclass
class Action:
    name: str
    label: str
    tone: str = "primary"
    confirm: str = ""
    # set for buttons that open a form instead of posting the action
    href: str = ""


@dataclass
class CourseCard:
    course: Course
    lecturer_name: str
    created: str
    enrollment_status: str | None
    syllabus_label: str
    status_label: str = ""
    status_tone: str = ""
    actions: list[Action] = field(default_factory=list)


def course_card(course: Course, caps: Capabilities, enrollment_status: str | None = None) -> CourseCard:
    actions = []
    if caps.can_course("enroll") and not enrollment_status:
        actions.append(Action("enroll", "Enroll"))
    if caps.can_course("drop") and enrollment_status == "approved":
        actions.append(Action("drop", "Drop Course", "danger", "Are you sure you want to drop this course?"))
    if caps.can_course("update"):
        actions.append(Action("edit", "Edit", "secondary", href=f"?edit={course.id}"))
    if caps.can_course("upload_syllabus"):
        actions.append(Action("upload_syllabus", "Update Syllabus" if course.syllabus else "Upload Syllabus", "secondary", href=f"?syllabus={course.id}"))
    if caps.can_course("delete"):
        actions.append(Action("delete", "Delete", "danger", "Are you sure you want to delete this course?"))
    if caps.can_course("assign_lecturer"):
        actions.append(Action("manage", "Manage", "secondary", href=f"?manage={course.id}"))
    status = course.status.lower()
    return CourseCard(
        course=course,
        lecturer_name=course.lecturer.full_name if course.lecturer else "",
        created=format_date(course.created_at),
        enrollment_status=enrollment_status,
        syllabus_label="Syllabus available" if course.syllabus else "",
        status_label=CourseStatus(status).label if status in CourseStatus.values else "",
        status_tone=_COURSE_TONES.get(status, ""),
        actions=actions,
    )


@dataclass
class AssignmentCard:
    assignment: Assignment
    course_label: str
    status_text: str
    status_tone: str
    due: str
    weight: str
    submission: AssignmentSubmission | None
    submitted_at: str = ""
    grade_label: str = ""
    created: str = ""
    updated: str = ""
    view_label: str = ""
    view_href: str = ""
    actions: list[Action] = field(default_factory=list)


_STUDENT_TONES = {"Graded": "success", "Submitted": "info", "Overdue": "danger", "Pending": "warning"}


def assignment_card(
    assignment: Assignment,
    caps: Capabilities,
    submission: AssignmentSubmission | None = None,
    now: datetime | None = None,
) -> AssignmentCard:
    course = assignment.course
    course_label = f"{course.code} - {course.title}" if course else ""
    card = AssignmentCard(
        assignment=assignment,
        course_label=course_label,
        status_text="",
        status_tone="",
        due=format_date(assignment.due_at) or "No due date",
        weight=f"{assignment.weight:g}%",
        submission=submission,
    )
    if caps.assignment_perspective == "student":
        card.status_text = filters.student_status(assignment, submission, now)
        card.status_tone = _STUDENT_TONES[card.status_text]
        if submission is not None:
            card.submitted_at = format_datetime(submission.submitted_at)
            if submission.is_graded and submission.grade is not None:
                card.grade_label = f"{submission.grade:g}/{MAX_POINTS}"
        card.view_label = "View Submission" if submission is not None and submission.is_submitted else "Submit Assignment"
        card.view_href = f"/assignments/{assignment.id}/submit"
    else:
        card.status_text = filters.lecturer_status(assignment)
        card.status_tone = "success" if assignment.is_active else "muted"
        card.created = format_datetime(assignment.created_at)
        card.updated = format_datetime(assignment.updated_at)
        card.view_label = "View Submissions"
        card.view_href = f"/assignments/{assignment.id}/submissions"
        if caps.can_assignment("update"):
            card.actions.append(Action("edit", "Edit", "secondary", href=f"?edit={assignment.id}"))
        if caps.can_assignment("delete"):
            card.actions.append(Action("delete", "Delete", "danger", "Are you sure you want to delete this assignment?"))
    return card


_ENROLLMENT_TONES = {"pending": "warning", "approved": "success", "rejected": "danger"}


@dataclass
class EnrollmentCard:
    enrollment: Enrollment
    student_name: str
    student_email: str
    course_label: str
    requested: str
    status_tone: str
    actions: list[Action] = field(default_factory=list)


def enrollment_card(enrollment: Enrollment) -> EnrollmentCard:
    student = enrollment.student
    course = enrollment.course
    actions = []
    if enrollment.status == "pending":
        actions = [Action("approve", "Approve", "success"), Action("reject", "Reject", "danger")]
    return EnrollmentCard(
        enrollment=enrollment,
        student_name=student.full_name if student else "",
        student_email=student.email if student else "",
        course_label=f"{course.code} - {course.title}" if course else "",
        requested=format_date(enrollment.created_at),
        status_tone=_ENROLLMENT_TONES.get(enrollment.status, "muted"),
        actions=actions,
    )


@dataclass
class SubmissionRow:
    submission: AssignmentSubmission
    student_name: str
    student_email: str
    when: str
    status_text: str
    status_tone: str
    grade_label: str
    selected: bool


def submission_status(submission: AssignmentSubmission) -> tuple[str, str]:
    if submission.status == "graded":
        return "Graded", "success"
    if submission.status == "submitted":
        return "Submitted", "info"
    return "Draft", "warning"


def submission_rows(submissions: Sequence[AssignmentSubmission], selected_id: int | None) -> list[SubmissionRow]:
    rows = []
    for submission in submissions:
        text, tone = submission_status(submission)
        student = submission.student
        rows.append(SubmissionRow(
            submission=submission,
            student_name=student.full_name if student else "",
            student_email=student.email if student else "",
            when=format_datetime(submission.submitted_at or submission.created_at),
            status_text=text,
            status_tone=tone,
            grade_label=f"{submission.grade:g}/{MAX_POINTS}" if submission.grade is not None else "",
            selected=submission.id == selected_id,
        ))
    return rows


def grade_letter(grade: float, max_points: float = MAX_POINTS) -> str:
    percentage = grade / max_points * 100
    for floor, letter in (
        (97, "A+"), (93, "A"), (90, "A-"),
        (87, "B+"), (83, "B"), (80, "B-"),
        (77, "C+"), (73, "C"), (70, "C-"),
        (67, "D+"), (63, "D"), (60, "D-"),
    ):
        if percentage >= floor:
            return letter
    return "F"


def grade_tone(grade: float, max_points: float = MAX_POINTS) -> str:
    percentage = grade / max_points * 100
    if percentage >= 90:
        return "success"
    if percentage >= 80:
        return "info"
    if percentage >= 70:
        return "warning"
    if percentage >= 60:
        return "caution"
    return "danger"


@dataclass
class GradingPanel:
    submission: AssignmentSubmission
    student_name: str
    submitted: str
    is_graded: bool
    initial_grade: float
    initial_feedback: str
    letter: str
    tone: str


def grading_panel(submission: AssignmentSubmission) -> GradingPanel:
    grade = submission.grade or 0
    return GradingPanel(
        submission=submission,
        student_name=submission.student.full_name if submission.student else "",
        submitted=format_datetime(submission.submitted_at),
        is_graded=submission.is_graded,
        initial_grade=grade,
        initial_feedback=submission.feedback,
        letter=grade_letter(grade),
        tone=grade_tone(grade),
    )
