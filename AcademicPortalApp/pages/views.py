import logging

from django.shortcuts import redirect
from django.utils import timezone

from AcademicPortalApp.core.choices import EnrollmentStatus
from AcademicPortalApp.core.config import settings
from AcademicPortalApp.core.exceptions import ApiError
from AcademicPortalApp.core.parallel import gather
from AcademicPortalApp.core.validators import format_file_size
from AcademicPortalApp.domain.models import Assignment
from AcademicPortalApp.domain.services import assignment_service, course_service
from AcademicPortalApp.pages import filters, presenters
from AcademicPortalApp.pages.mixins import PortalPageView, PublicPageView
from AcademicPortalApp.pages.serializers import (
    AssignLecturerSerializer,
    AssignmentSerializer,
    CourseSerializer,
    EnrollmentDecisionSerializer,
    GradeSerializer,
    LoginSerializer,
    RegisterSerializer,
    SubmissionSerializer,
    SyllabusSerializer,
    TargetSerializer,
)

logger = logging.getLogger(__name__)


def _target(request) -> int:
    ser = TargetSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    return ser.validated_data["id"]


def _query_int(request, name):
    try:
        return int(request.query_params.get(name))
    except (TypeError, ValueError):
        return None


def _max_upload() -> str:
    return format_file_size(settings.max_upload_mb * 1024 * 1024)


# ---------- Public ----------
class HomeView(PublicPageView):
    template = "portal/home.html"


class LoginView(PublicPageView):
    page = "login"
    template = "portal/login.html"
    actions = ("login",)
    default_action = "login"

    def on_login(self, request):
        ser = LoginSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = self.session.login(ser.validated_data["email"], ser.validated_data["password"])
        logger.info("User %s signed in as %s", user.id, user.role)
        return redirect("/dashboard")


class RegisterView(PublicPageView):
    page = "register"
    template = "portal/register.html"
    actions = ("register",)
    default_action = "register"

    def on_register(self, request):
        ser = RegisterSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = self.session.register(ser.to_payload())
        logger.info("Registered user %s as %s", user.id, user.role)
        return redirect("/dashboard")


class LogoutView(PortalPageView):
    permission_classes = []
    http_method_names = ["post"]

    def post(self, request):
        self.session.logout()
        return redirect("/login")


# ---------- Signed-in pages ----------
class DashboardView(PortalPageView):
    page = "dashboard"
    template = "portal/dashboard.html"


class CoursesView(PortalPageView):
    """
    Course catalogue for every role.
    Students see enrollment badges, lecturers manage their courses and
    syllabi, admins assign lecturers. ``?q=`` filters by title or description.
    """
    page = "courses"
    template = "portal/courses.html"

    def action_allowed(self, action):
        return self.caps.can_course(action)

    def load(self, request):
        user = self.session.user
        api = self.session.api
        enrolled = set()
        if self.caps.can_course("enroll"):
            courses, own = gather(
                lambda: course_service.get_courses(api),
                lambda: course_service.get_student_courses(api, user.id),
            )
            enrolled = {c.id for c in own}
        else:
            courses = course_service.get_courses(api)
        term = request.query_params.get("q", "")
        visible = filters.search_courses(courses, term)
        cards = [
            presenters.course_card(c, self.caps, EnrollmentStatus.APPROVED.value if c.id in enrolled else None)
            for c in visible
        ]
        by_id = {c.id: c for c in courses}
        return {
            "search": term,
            "cards": cards,
            "editing": by_id.get(_query_int(request, "edit")),
            "creating": request.query_params.get("create") is not None,
            "syllabus_course": by_id.get(_query_int(request, "syllabus")),
            "managing": by_id.get(_query_int(request, "manage")),
            "max_upload": _max_upload(),
        }

    def on_create(self, request):
        ser = CourseSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        course_service.create_course(self.session.api, ser.to_payload())
        return redirect("/courses")

    def on_update(self, request):
        course_id = _target(request)
        ser = CourseSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        course_service.update_course(self.session.api, course_id, ser.to_payload())
        return redirect("/courses")

    def on_delete(self, request):
        course_service.delete_course(self.session.api, _target(request))
        return redirect("/courses")

    def on_upload_syllabus(self, request):
        ser = SyllabusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        upload = ser.validated_data["syllabus"]
        course_service.upload_syllabus(
            self.session.api, ser.validated_data["id"], upload, upload.name, upload.content_type
        )
        return redirect("/courses")

    def on_enroll(self, request):
        course_service.enroll_in_course(self.session.api, _target(request))
        return redirect("/courses")

    def on_drop(self, request):
        course_service.drop_course(self.session.api, _target(request))
        return redirect("/courses")

    def on_assign_lecturer(self, request):
        ser = AssignLecturerSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        course_service.assign_lecturer(
            self.session.api, ser.validated_data["id"], ser.validated_data["lecturer_id"]
        )
        return redirect("/courses")


class EnrollmentsView(PortalPageView):
    page = "enrollments"
    template = "portal/enrollments.html"
    actions = ("approve", "reject")

    def load(self, request):
        enrollments = course_service.get_enrollments(self.session.api)
        status = request.query_params.get("status", "all")
        if status not in filters.ENROLLMENT_FILTERS:
            status = "all"
        return {
            "status": status,
            "status_filters": filters.ENROLLMENT_FILTERS,
            "counts": filters.count_enrollments(enrollments),
            "cards": [presenters.enrollment_card(e) for e in filters.filter_enrollments(enrollments, status)],
        }

    def _decide(self, request, status):
        ser = EnrollmentDecisionSerializer(data={"id": request.data.get("id"), "status": status})
        ser.is_valid(raise_exception=True)
        course_service.update_enrollment_status(
            self.session.api, ser.validated_data["id"], ser.validated_data["status"]
        )
        return redirect(request.get_full_path())

    def on_approve(self, request):
        return self._decide(request, EnrollmentStatus.APPROVED.value)

    def on_reject(self, request):
        return self._decide(request, EnrollmentStatus.REJECTED.value)


class AssignmentsView(PortalPageView):
    """
    Assignment list. Lecturers see their own assignments plus the course
    picker for the create/edit form; students see theirs with submission
    state. ``?q=`` searches title or course title, ``?status=`` filters by
    the role's buckets.
    """
    page = "assignments"
    template = "portal/assignments.html"

    def action_allowed(self, action):
        return self.caps.can_assignment(action)

    def load(self, request):
        user = self.session.user
        api = self.session.api
        caps = self.caps
        courses = []
        submissions = []
        if caps.assignment_perspective == "student":
            assignments = assignment_service.get_student_assignments(api, user.id)
        else:
            assignments, all_courses = gather(
                lambda: assignment_service.get_lecturer_assignments(api, user.id),
                lambda: course_service.get_courses(api),
            )
            courses = filters.lecturer_courses(
                all_courses, user.id, fallback_to_all=settings.lecturer_course_fallback
            )
        term = request.query_params.get("q", "")
        status = request.query_params.get("status", "all")
        if status not in dict(caps.assignment_filters):
            status = "all"
        now = timezone.now()
        visible = filters.filter_assignments(
            assignments, caps.assignment_perspective, term, status, submissions, now
        )
        cards = [
            presenters.assignment_card(a, caps, filters.submission_for(a, submissions), now)
            for a in visible
        ]
        by_id = {a.id: a for a in assignments}
        return {
            "search": term,
            "status": status,
            "cards": cards,
            "courses": courses,
            "editing": by_id.get(_query_int(request, "edit")),
            "creating": request.query_params.get("create") is not None,
        }

    def on_create(self, request):
        ser = AssignmentSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        assignment_service.create_assignment(self.session.api, ser.to_payload())
        return redirect("/assignments")

    def on_update(self, request):
        assignment_id = _target(request)
        ser = AssignmentSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        assignment_service.update_assignment(self.session.api, assignment_id, ser.to_payload())
        return redirect("/assignments")

    def on_delete(self, request):
        assignment_service.delete_assignment(self.session.api, _target(request))
        return redirect("/assignments")


class AssignmentSubmitView(PortalPageView):
    page = "assignment_submit"
    template = "portal/assignment_submit.html"
    actions = ("submit",)
    default_action = "submit"

    def load(self, request, assignment_id):
        user = self.session.user
        api = self.session.api
        assignments, submission = gather(
            lambda: assignment_service.get_student_assignments(api, user.id),
            lambda: assignment_service.get_student_submission(api, assignment_id, user.id),
        )
        assignment = next((a for a in assignments if a.id == assignment_id), None)
        if assignment is None:
            raise ApiError("Assignment not found", 404)
        return {
            "assignment": assignment,
            "card": presenters.assignment_card(assignment, self.caps, submission),
            "submission": submission,
            "overdue": filters.is_overdue(assignment),
            "max_upload": _max_upload(),
        }

    def on_submit(self, request, assignment_id):
        ser = SubmissionSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        upload = ser.validated_data.get("file")
        assignment_service.submit_assignment(
            self.session.api,
            assignment_id,
            text_submission=ser.validated_data["text_submission"].strip() or None,
            file=upload,
            filename=upload.name if upload else None,
            content_type=upload.content_type if upload else None,
        )
        return redirect("/assignments")


class AssignmentSubmissionsView(PortalPageView):
    page = "assignment_submissions"
    template = "portal/assignment_submissions.html"
    actions = ("grade",)
    default_action = "grade"

    def load(self, request, assignment_id):
        submissions = assignment_service.get_assignment_submissions(self.session.api, assignment_id)
        if submissions and submissions[0].assignment is not None:
            assignment = submissions[0].assignment
        else:
            assignment = Assignment(id=assignment_id, course_id=None, title="Assignment", weight=100)
        selected_id = _query_int(request, "submission")
        selected = next((s for s in submissions if s.id == selected_id), None)
        return {
            "assignment": assignment,
            "rows": presenters.submission_rows(submissions, selected_id),
            "graded_count": sum(1 for s in submissions if s.is_graded),
            "total": len(submissions),
            "panel": presenters.grading_panel(selected) if selected else None,
        }

    def on_grade(self, request, assignment_id):
        ser = GradeSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        submission_id = ser.validated_data["submission_id"]
        assignment_service.grade_submission(
            self.session.api, submission_id, ser.validated_data["grade"], ser.feedback_or_none
        )
        return redirect(f"/assignments/{assignment_id}/submissions?submission={submission_id}")


class GradesView(PortalPageView):
    page = "grades"
    template = "portal/grades.html"

    def load(self, request):
        grades = assignment_service.get_student_grades(self.session.api, self.session.user.id)
        rows = [
            {
                "grade": g,
                "letter": g.letter_grade or presenters.grade_letter(g.percentage),
                "tone": presenters.grade_tone(g.percentage),
            }
            for g in grades
        ]
        return {"rows": rows}
