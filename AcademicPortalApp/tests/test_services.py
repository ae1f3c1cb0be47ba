import io

import httpx
import pytest

from AcademicPortalApp.core.exceptions import ApiError
from AcademicPortalApp.domain.services import assignment_service, auth_service, course_service
from AcademicPortalApp.domain.services.api_client import ApiClient

from AcademicPortalApp.tests.backend import TOKEN, FakeBackend, user_payload


def test_client_sends_bearer_token(api, backend):
    backend.on("GET", "/courses", {"success": True, "data": []})
    course_service.get_courses(api)
    assert backend.requests[0].headers["Authorization"] == f"Bearer {TOKEN}"


def test_non_2xx_surfaces_backend_error(api, backend):
    backend.on("POST", "/courses", {"success": False, "error": "Course code already exists"}, status=409)
    with pytest.raises(ApiError) as exc:
        course_service.create_course(api, {"title": "Algebra", "code": "MA1"})
    assert exc.value.message == "Course code already exists"
    assert exc.value.status_code == 409


def test_non_2xx_without_body_uses_fallback(api, backend):
    backend.on("DELETE", "/courses/4", None, status=500)
    with pytest.raises(ApiError) as exc:
        course_service.delete_course(api, 4)
    assert exc.value.message == "Failed to delete course. Please try again."


def test_transport_failure_uses_fallback():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = ApiClient(transport=httpx.MockTransport(refuse))
    with pytest.raises(ApiError) as exc:
        course_service.get_courses(client)
    assert exc.value.message == "Failed to load courses. Please try again."
    assert exc.value.status_code is None


def test_error_envelope_on_200_raises(api, backend):
    backend.on("POST", "/enrollments/enroll", {"success": False, "error": "Already enrolled"})
    with pytest.raises(ApiError, match="Already enrolled"):
        course_service.enroll_in_course(api, "12")


def test_enroll_sends_integer_course_id(api, backend):
    backend.on("POST", "/enrollments/enroll", {"success": True, "data": {"id": 1, "courseId": 12, "status": "pending"}})
    enrollment = course_service.enroll_in_course(api, "12")
    assert FakeBackend.json_of(backend.requests[0]) == {"courseId": 12}
    assert enrollment.status == "pending"


def test_drop_course_deletes_enrollment(api, backend):
    backend.on("DELETE", "/courses/3/enroll", {"success": True})
    course_service.drop_course(api, 3)
    assert len(backend.calls("DELETE", "/courses/3/enroll")) == 1


def test_get_courses_maps_camel_case(api, backend):
    backend.on("GET", "/courses", {"success": True, "data": {"courses": [{
        "id": 1, "title": "Algebra", "code": "MA101", "credits": 4, "maxStudents": 25,
        "lecturerId": 9, "lecturer": {"id": 9, "firstName": "Ada", "lastName": "Lovelace"},
        "createdAt": "2025-01-05T14:30:00Z",
    }]}})
    (course,) = course_service.get_courses(api)
    assert course.max_students == 25
    assert course.lecturer_id == 9
    assert course.lecturer.full_name == "Ada Lovelace"
    assert course.created_at.year == 2025


def test_upload_syllabus_uses_multipart_field(api, backend):
    backend.on("POST", "/courses/5/syllabus", {"success": True, "data": {"course": {"id": 5, "title": "X", "syllabus": "s.pdf"}}})
    course = course_service.upload_syllabus(api, 5, io.BytesIO(b"%PDF-1.4"), "s.pdf", "application/pdf")
    request = backend.requests[0]
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="syllabus"; filename="s.pdf"' in request.content
    assert course.syllabus == "s.pdf"


def test_update_enrollment_status_patches_approve(api, backend):
    backend.on("PATCH", "/enrollments/8/approve", {"success": True, "data": {"id": 8, "status": "rejected"}})
    enrollment = course_service.update_enrollment_status(api, 8, "rejected")
    assert FakeBackend.json_of(backend.requests[0]) == {"status": "rejected"}
    assert enrollment.status == "rejected"


def test_update_enrollment_status_fallback_names_the_decision(api, backend):
    backend.on("PATCH", "/enrollments/8/approve", None, status=502)
    with pytest.raises(ApiError, match="Failed to approve enrollment"):
        course_service.update_enrollment_status(api, 8, "approved")


def test_assign_lecturer(api, backend):
    backend.on("PUT", "/courses/2/assign-lecturer", {"success": True, "data": {"id": 2, "title": "X", "lecturerId": 4}})
    course = course_service.assign_lecturer(api, 2, 4)
    assert FakeBackend.json_of(backend.requests[0]) == {"lecturerId": 4}
    assert course.lecturer_id == 4


def test_submit_assignment_text_only(api, backend):
    backend.on("POST", "/assignments/submit", {"success": True, "data": {"submission": {"id": 1, "status": "submitted"}}})
    submission = assignment_service.submit_assignment(api, 3, text_submission="My answer")
    body = backend.requests[0].content
    assert b"assignmentId=3" in body
    assert b"textSubmission=My+answer" in body
    assert submission.is_submitted


def test_submit_assignment_with_file(api, backend):
    backend.on("POST", "/assignments/submit", {"success": True, "data": {"id": 1, "status": "submitted"}})
    assignment_service.submit_assignment(api, 3, file=io.BytesIO(b"hello"), filename="a.txt", content_type="text/plain")
    body = backend.requests[0].content
    assert b'name="file"; filename="a.txt"' in body
    assert b'name="assignmentId"' in body
    assert b"textSubmission" not in body


def test_grade_submission_omits_blank_feedback(api, backend):
    backend.on("POST", "/assignments/grade", {"success": True, "data": {"id": 4, "status": "graded", "grade": 88}})
    submission = assignment_service.grade_submission(api, 4, 88)
    assert FakeBackend.json_of(backend.requests[0]) == {"submissionId": 4, "grade": 88}
    assert submission.is_graded


def test_student_submission_absent_is_none(api, backend):
    backend.on("GET", "/assignments/3/submission/7", {"success": True, "data": {}})
    assert assignment_service.get_student_submission(api, 3, "7") is None


def test_student_submission_present(api, backend):
    backend.on("GET", "/assignments/3/submission/7", {"success": True, "data": {"submission": {
        "id": 2, "assignmentId": 3, "status": "graded", "grade": "91.5", "feedback": "Nice",
    }}})
    submission = assignment_service.get_student_submission(api, 3, "7")
    assert submission.grade == 91.5
    assert submission.feedback == "Nice"


def test_course_grades(api, backend):
    backend.on("GET", "/assignments/course/1/grades/7", {"success": True, "data": {"grades": {
        "courseId": 1, "studentId": 7, "percentage": 84.5, "letterGrade": "B",
        "assignments": [{"assignmentId": 3, "title": "Essay", "weight": 40, "maxPoints": 100, "earnedPoints": 80, "grade": 80}],
    }}})
    grade = assignment_service.get_course_grades(api, 1, "7")
    assert grade.letter_grade == "B"
    assert grade.assignments[0].title == "Essay"


def test_lecturer_assignments_raw_list(api, backend):
    backend.on("GET", "/assignments/lecturer/9", [{"id": 1, "title": "Essay", "weight": "25", "isActive": 1}])
    (assignment,) = assignment_service.get_lecturer_assignments(api, "9")
    assert assignment.weight == 25.0
    assert assignment.is_active is True


def test_login_returns_user_and_token(api, backend):
    backend.on("POST", "/auth/login", {"success": True, "data": {"user": user_payload("LECTURER"), "token": "t"}})
    result = auth_service.login(api, "a@b.c", "secret")
    assert result.token == "t"
    assert result.user.role == "lecturer"


def test_profile_without_user_is_an_error(api, backend):
    backend.on("GET", "/auth/profile", {"success": True, "data": {}})
    with pytest.raises(ApiError, match="Failed to get user profile"):
        auth_service.get_profile(api)


def test_lecturer_and_student_course_lists(api, backend):
    backend.on("GET", "/courses/lecturer/9", {"success": True, "data": {"courses": [{"id": 1, "title": "A"}]}})
    backend.on("GET", "/courses/student/7", {"success": True, "courses": [{"id": 2, "title": "B"}]})
    assert [c.id for c in course_service.get_lecturer_courses(api, "9")] == [1]
    assert [c.id for c in course_service.get_student_courses(api, "7")] == [2]


def test_course_assignments(api, backend):
    backend.on("GET", "/assignments/course/1", {"success": True, "data": {"assignments": [{"id": 3, "title": "Essay", "courseId": 1}]}})
    (assignment,) = assignment_service.get_course_assignments(api, 1)
    assert assignment.course_id == 1


def test_update_and_delete_assignment(api, backend):
    backend.on("PUT", "/assignments/3", {"success": True, "data": {"assignment": {"id": 3, "title": "Essay v2"}}})
    backend.on("DELETE", "/assignments/3", None, status=204)
    assert assignment_service.update_assignment(api, 3, {"title": "Essay v2"}).title == "Essay v2"
    assignment_service.delete_assignment(api, 3)
    assert len(backend.calls("DELETE", "/assignments/3")) == 1


def test_logout_endpoint(api, backend):
    backend.on("POST", "/auth/logout", {"success": True})
    auth_service.logout(api)
    assert len(backend.calls("POST", "/auth/logout")) == 1


def test_logout_failure_raises(api, backend):
    backend.on("POST", "/auth/logout", None, status=500)
    with pytest.raises(ApiError, match="Logout failed."):
        auth_service.logout(api)


def test_profile_with_numeric_role_is_rejected(api, backend):
    backend.on("GET", "/auth/profile", {"success": True, "data": {"user": dict(user_payload(), role=3)}})
    with pytest.raises(ApiError, match="Failed to get user profile"):
        auth_service.get_profile(api)
