"""Role capability table.

Every page and card asks this table what the current role may see and do,
instead of re-deriving role logic locally. Keys used here:

  pages:               page keys a role may open (see ``PortalPageView.page``)
  course_actions:      create, update, delete, upload_syllabus, enroll, drop, assign_lecturer
  assignment_actions:  create, update, delete
  assignment_filters:  (value, label) options of the assignment status filter
"""

from dataclasses import dataclass, field

from AcademicPortalApp.core.choices import UserRole


@dataclass(frozen=True)
class Link:
    title: str
    href: str
    description: str = ""


@dataclass(frozen=True)
class Capabilities:
    role: str
    pages: frozenset[str]
    nav: tuple[Link, ...]
    dashboard_title: str
    dashboard_links: tuple[Link, ...]
    courses_title: str
    courses_subtitle: str
    course_actions: frozenset[str] = field(default_factory=frozenset)
    assignment_actions: frozenset[str] = field(default_factory=frozenset)
    assignment_filters: tuple[tuple[str, str], ...] = ()
    assignments_subtitle: str = ""
    # "student" cards show submission state, "lecturer" cards show the active flag
    assignment_perspective: str = "lecturer"

    def can_open(self, page: str) -> bool:
        return page in self.pages

    def can_course(self, action: str) -> bool:
        return action in self.course_actions

    def can_assignment(self, action: str) -> bool:
        return action in self.assignment_actions


DASHBOARD = Link("Dashboard", "/dashboard")

CAPABILITIES: dict[str, Capabilities] = {
    UserRole.STUDENT.value: Capabilities(
        role=UserRole.STUDENT.value,
        pages=frozenset({"dashboard", "courses", "assignments", "assignment_submit", "grades"}),
        nav=(DASHBOARD, Link("Courses", "/courses"), Link("Assignments", "/assignments"), Link("Grades", "/grades")),
        dashboard_title="Student Dashboard",
        dashboard_links=(
            Link("Browse Courses", "/courses", "View and enroll in courses"),
            Link("Grades", "/grades", "Check your progress"),
            Link("Assignments", "/assignments", "Submit your work"),
        ),
        courses_title="Browse Courses",
        courses_subtitle="Browse and enroll in available courses",
        course_actions=frozenset({"enroll", "drop"}),
        assignment_filters=(
            ("all", "All"),
            ("pending", "Pending"),
            ("submitted", "Submitted"),
            ("graded", "Graded"),
            ("overdue", "Overdue"),
        ),
        assignments_subtitle="View and submit your assignments",
        assignment_perspective="student",
    ),
    UserRole.LECTURER.value: Capabilities(
        role=UserRole.LECTURER.value,
        pages=frozenset({"dashboard", "courses", "assignments", "assignment_submissions"}),
        nav=(DASHBOARD, Link("My Courses", "/courses"), Link("Assignments", "/assignments")),
        dashboard_title="Lecturer Dashboard",
        dashboard_links=(
            Link("My Courses", "/courses", "Manage your courses"),
            Link("Grade Book", "/assignments", "Grade assignments"),
        ),
        courses_title="My Courses",
        courses_subtitle="Manage your courses and upload syllabi",
        course_actions=frozenset({"create", "update", "delete", "upload_syllabus"}),
        assignment_actions=frozenset({"create", "update", "delete"}),
        assignment_filters=(("all", "All"), ("active", "Active"), ("inactive", "Inactive")),
        assignments_subtitle="Create and manage assignments for your courses",
    ),
    UserRole.ADMIN.value: Capabilities(
        role=UserRole.ADMIN.value,
        pages=frozenset({"dashboard", "courses", "enrollments"}),
        nav=(DASHBOARD, Link("Courses", "/courses"), Link("Enrollments", "/enrollments")),
        dashboard_title="Admin Dashboard",
        dashboard_links=(
            Link("Course Management", "/courses", "Oversee all courses"),
            Link("Enrollments", "/enrollments", "Approve/reject requests"),
        ),
        courses_title="Course Management",
        courses_subtitle="Oversee all courses and enrollments",
        course_actions=frozenset({"assign_lecturer"}),
    ),
}

ANONYMOUS = Capabilities(
    role="",
    pages=frozenset(),
    nav=(),
    dashboard_title="",
    dashboard_links=(),
    courses_title="Courses",
    courses_subtitle="",
)


def capabilities_for(role: str | None) -> Capabilities:
    """Capabilities of ``role``; unknown or missing roles get no pages at all."""
    return CAPABILITIES.get(role or "", ANONYMOUS)
