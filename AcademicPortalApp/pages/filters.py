"""Client-side search and filter predicates over already-loaded lists.

Nothing here calls the backend; every function is a pure transformation of
the records a page controller fetched.
"""
import logging
from datetime import datetime
from typing import Iterable, Sequence

from django.utils import timezone

from AcademicPortalApp.core.choices import EnrollmentStatus, SubmissionStatus
from AcademicPortalApp.domain.models import Assignment, AssignmentSubmission, Course, Enrollment

logger = logging.getLogger(__name__)

ENROLLMENT_FILTERS = ("all", *EnrollmentStatus.values)


def _contains(haystack: str | None, needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def search_courses(courses: Iterable[Course], term: str) -> list[Course]:
    """Courses whose title or description contains ``term`` (case-insensitive)."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(courses)
    return [c for c in courses if _contains(c.title, needle) or _contains(c.description, needle)]


def filter_enrollments(enrollments: Iterable[Enrollment], status: str) -> list[Enrollment]:
    """Enrollments with exactly ``status``; ``all`` (or an unknown value) keeps everything."""
    if status not in EnrollmentStatus.values:
        return list(enrollments)
    return [e for e in enrollments if e.status == status]


def count_enrollments(enrollments: Sequence[Enrollment]) -> dict[str, int]:
    counts = {"total": len(enrollments)}
    for value in EnrollmentStatus.values:
        counts[value] = sum(1 for e in enrollments if e.status == value)
    return counts


def lecturer_courses(courses: Sequence[Course], lecturer_id: str, fallback_to_all: bool = True) -> list[Course]:
    """Courses taught by ``lecturer_id``.

    When nothing matches and ``fallback_to_all`` is set, every course is
    returned instead. That fallback is kept for compatibility and logged each
    time it triggers; see PORTAL_LECTURER_COURSE_FALLBACK.
    """
    own = [c for c in courses if c.lecturer_id is not None and str(c.lecturer_id) == str(lecturer_id)]
    if own or not fallback_to_all:
        return own
    logger.warning(
        "No courses match lecturer %s; showing all %d courses", lecturer_id, len(courses)
    )
    return list(courses)


def is_overdue(assignment: Assignment, now: datetime | None = None) -> bool:
    if assignment.due_at is None:
        return False
    now = now or timezone.now()
    due = assignment.due_at
    if timezone.is_naive(due):
        due = timezone.make_aware(due, timezone.get_default_timezone())
    return due < now


def submission_for(assignment: Assignment, submissions: Iterable[AssignmentSubmission]) -> AssignmentSubmission | None:
    return next((s for s in submissions if s.assignment_id == assignment.id), None)


def student_status(
    assignment: Assignment,
    submission: AssignmentSubmission | None,
    now: datetime | None = None,
) -> str:
    """Status label for a student: Graded, Submitted, Overdue or Pending."""
    if submission is not None and submission.status == SubmissionStatus.GRADED:
        return "Graded"
    if submission is not None and submission.is_submitted:
        return "Submitted"
    if is_overdue(assignment, now):
        return "Overdue"
    return "Pending"


def lecturer_status(assignment: Assignment) -> str:
    return "Active" if assignment.is_active else "Inactive"


def _matches_search(assignment: Assignment, needle: str) -> bool:
    if not needle:
        return True
    course_title = assignment.course.title if assignment.course else ""
    return _contains(assignment.title, needle) or _contains(course_title, needle)


def filter_assignments(
    assignments: Iterable[Assignment],
    perspective: str,
    term: str = "",
    status: str = "all",
    submissions: Sequence[AssignmentSubmission] = (),
    now: datetime | None = None,
) -> list[Assignment]:
    """Search and status-filter assignments from a student or lecturer perspective.

    Student buckets: pending (not submitted), submitted (not yet graded),
    graded, overdue (past due and not submitted). Lecturer buckets: active,
    inactive. Due dates only matter to the student perspective.
    """
    needle = (term or "").strip().lower()
    result = []
    for assignment in assignments:
        if not _matches_search(assignment, needle):
            continue
        if perspective == "student":
            submission = submission_for(assignment, submissions)
            submitted = submission is not None and submission.is_submitted
            graded = submission is not None and submission.is_graded
            if status == "pending" and submitted:
                continue
            if status == "submitted" and (not submitted or graded):
                continue
            if status == "graded" and not graded:
                continue
            if status == "overdue" and (submitted or not is_overdue(assignment, now)):
                continue
        else:
            if status == "active" and not assignment.is_active:
                continue
            if status == "inactive" and assignment.is_active:
                continue
        result.append(assignment)
    return result
