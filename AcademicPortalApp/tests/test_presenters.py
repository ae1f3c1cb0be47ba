from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from AcademicPortalApp.core.capabilities import capabilities_for
from AcademicPortalApp.domain.models import Assignment, AssignmentSubmission, Course, Enrollment, PersonRef
from AcademicPortalApp.pages import presenters

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=dt_timezone.utc)


def test_date_formats():
    moment = datetime(2025, 1, 5, 14, 30, tzinfo=dt_timezone.utc)
    assert presenters.format_date(moment) == "Jan 5, 2025"
    assert presenters.format_datetime(moment) == "Jan 5, 2025, 02:30 PM"
    assert presenters.format_date(None) == ""


@pytest.mark.parametrize(
    "grade,letter",
    [(100, "A+"), (97, "A+"), (96.9, "A"), (90, "A-"), (85, "B"), (80, "B-"), (72, "C-"), (60, "D-"), (59.9, "F"), (0, "F")],
)
def test_grade_letter(grade, letter):
    assert presenters.grade_letter(grade) == letter


@pytest.mark.parametrize("grade,tone", [(95, "success"), (85, "info"), (75, "warning"), (65, "caution"), (10, "danger")])
def test_grade_tone(grade, tone):
    assert presenters.grade_tone(grade) == tone


def _names(card):
    return [a.name for a in card.actions]


def test_course_card_actions_follow_role():
    course = Course(id=1, title="Algebra", syllabus="s.pdf")
    assert _names(presenters.course_card(course, capabilities_for("student"))) == ["enroll"]
    assert _names(presenters.course_card(course, capabilities_for("student"), "approved")) == ["drop"]
    assert _names(presenters.course_card(course, capabilities_for("student"), "pending")) == []
    lecturer = presenters.course_card(course, capabilities_for("lecturer"))
    assert _names(lecturer) == ["edit", "upload_syllabus", "delete"]
    assert lecturer.actions[1].label == "Update Syllabus"
    assert lecturer.syllabus_label == "Syllabus available"
    assert _names(presenters.course_card(course, capabilities_for("admin"))) == ["manage"]


@pytest.mark.parametrize(
    "status,label,tone",
    [("published", "Published", "success"), ("DRAFT", "Draft", "warning"), ("archived", "Archived", "muted"), ("", "", ""), ("retired", "", "")],
)
def test_course_card_status_badge(status, label, tone):
    card = presenters.course_card(Course(id=1, title="Algebra", status=status), capabilities_for("student"))
    assert card.status_label == label
    assert card.status_tone == tone


def test_student_assignment_card():
    assignment = Assignment(id=3, course_id=1, title="Essay", weight=25, due_at=NOW - timedelta(days=2))
    card = presenters.assignment_card(assignment, capabilities_for("student"), None, NOW)
    assert (card.status_text, card.status_tone) == ("Overdue", "danger")
    assert card.view_label == "Submit Assignment"
    assert card.view_href == "/assignments/3/submit"
    assert card.weight == "25%"
    assert card.actions == []

    graded = AssignmentSubmission(id=1, assignment_id=3, student_id=7, status="graded", grade=88)
    card = presenters.assignment_card(assignment, capabilities_for("student"), graded, NOW)
    assert card.status_text == "Graded"
    assert card.grade_label == "88/100"
    assert card.view_label == "View Submission"


def test_lecturer_assignment_card():
    assignment = Assignment(id=3, course_id=1, title="Essay", weight=12.5, is_active=False)
    card = presenters.assignment_card(assignment, capabilities_for("lecturer"))
    assert card.status_text == "Inactive"
    assert card.due == "No due date"
    assert card.view_href == "/assignments/3/submissions"
    assert _names(card) == ["edit", "delete"]


def test_enrollment_card_actions_only_while_pending():
    student = PersonRef(id=7, first_name="Sam", last_name="Lee", email="sam@example.com")
    pending = presenters.enrollment_card(Enrollment(id=1, course_id=1, student_id=7, status="pending", student=student))
    assert _names(pending) == ["approve", "reject"]
    assert pending.student_name == "Sam Lee"
    approved = presenters.enrollment_card(Enrollment(id=2, course_id=1, student_id=7, status="approved"))
    assert approved.actions == []
    assert approved.status_tone == "success"


def test_submission_rows_mark_selection():
    subs = [
        AssignmentSubmission(id=1, assignment_id=3, student_id=7, status="submitted"),
        AssignmentSubmission(id=2, assignment_id=3, student_id=8, status="graded", grade=91),
    ]
    rows = presenters.submission_rows(subs, 2)
    assert [r.selected for r in rows] == [False, True]
    assert rows[1].grade_label == "91/100"
    assert rows[0].status_text == "Submitted"


def test_grading_panel_defaults_for_ungraded():
    panel = presenters.grading_panel(AssignmentSubmission(id=1, assignment_id=3, student_id=7, status="submitted"))
    assert panel.initial_grade == 0
    assert not panel.is_graded
    assert panel.letter == "F"
