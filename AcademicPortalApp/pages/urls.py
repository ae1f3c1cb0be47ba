from django.urls import path

from AcademicPortalApp.pages.views import (
    AssignmentSubmissionsView,
    AssignmentSubmitView,
    AssignmentsView,
    CoursesView,
    DashboardView,
    EnrollmentsView,
    GradesView,
    HomeView,
    LoginView,
    LogoutView,
    RegisterView,
)

urlpatterns = [
    path("", HomeView.as_view(), name="home"),
    path("login", LoginView.as_view(), name="login"),
    path("register", RegisterView.as_view(), name="register"),
    path("logout", LogoutView.as_view(), name="logout"),
    path("dashboard", DashboardView.as_view(), name="dashboard"),
    path("courses", CoursesView.as_view(), name="courses"),
    path("enrollments", EnrollmentsView.as_view(), name="enrollments"),
    path("assignments", AssignmentsView.as_view(), name="assignments"),
    path("assignments/<int:assignment_id>/submit", AssignmentSubmitView.as_view(), name="assignment-submit"),
    path(
        "assignments/<int:assignment_id>/submissions",
        AssignmentSubmissionsView.as_view(),
        name="assignment-submissions",
    ),
    path("grades", GradesView.as_view(), name="grades"),
]
