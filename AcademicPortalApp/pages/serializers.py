"""Form schemas for the portal pages.

These serializers only validate what the browser posted; they never touch a
model. ``to_payload`` turns validated data into the camelCase body the backend
expects. The backend validates again and has the final word.
"""
from rest_framework import serializers

from AcademicPortalApp.core.choices import EnrollmentStatus, UserRole
from AcademicPortalApp.core.validators import (
    SUBMISSION_EXTENSIONS,
    SYLLABUS_EXTENSIONS,
    validate_file_extension,
    validate_file_size,
    validate_syllabus_mime,
)


def first_error(errors) -> str:
    """Flatten DRF ``errors`` into the first human-readable message."""
    if isinstance(errors, dict):
        for value in errors.values():
            message = first_error(value)
            if message:
                return message
        return ""
    if isinstance(errors, (list, tuple)):
        for value in errors:
            message = first_error(value)
            if message:
                return message
        return ""
    return str(errors)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(error_messages={"invalid": "Invalid email address"})
    password = serializers.CharField(
        trim_whitespace=False, error_messages={"blank": "Password is required"}
    )


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField(error_messages={"invalid": "Invalid email address"})
    password = serializers.CharField(
        min_length=6,
        trim_whitespace=False,
        error_messages={"min_length": "Password must be at least 6 characters"},
    )
    first_name = serializers.CharField(error_messages={"blank": "First name is required"})
    last_name = serializers.CharField(error_messages={"blank": "Last name is required"})
    role = serializers.ChoiceField(choices=UserRole.choices, default=UserRole.STUDENT)

    def to_payload(self):
        data = self.validated_data
        return {
            "email": data["email"],
            "password": data["password"],
            "firstName": data["first_name"],
            "lastName": data["last_name"],
            "role": data["role"],
        }


class TargetSerializer(serializers.Serializer):
    """Just the id of the record an action button refers to."""
    id = serializers.IntegerField(min_value=1)


class CourseSerializer(serializers.Serializer):
    title = serializers.CharField(
        min_length=3, error_messages={"min_length": "Course title must be at least 3 characters"}
    )
    code = serializers.CharField(
        min_length=2,
        error_messages={"min_length": "Course code is required", "blank": "Course code is required"},
    )
    description = serializers.CharField(required=False, allow_blank=True, default="")
    credits = serializers.IntegerField(
        min_value=1,
        max_value=10,
        default=3,
        error_messages={
            "min_value": "Credits must be at least 1",
            "max_value": "Credits cannot exceed 10",
        },
    )
    max_students = serializers.IntegerField(
        min_value=1, default=30, error_messages={"min_value": "Max students must be at least 1"}
    )

    def to_payload(self):
        data = self.validated_data
        return {
            "title": data["title"],
            "code": data["code"],
            "description": data["description"],
            "credits": data["credits"],
            "maxStudents": data["max_students"],
        }


class SyllabusSerializer(serializers.Serializer):
    id = serializers.IntegerField(min_value=1)
    syllabus = serializers.FileField(error_messages={"required": "Please select a file to upload"})

    def validate_syllabus(self, file_obj):
        validate_file_extension(file_obj, SYLLABUS_EXTENSIONS)
        validate_file_size(file_obj)
        validate_syllabus_mime(file_obj)
        return file_obj


class AssignLecturerSerializer(serializers.Serializer):
    id = serializers.IntegerField(min_value=1)
    lecturer_id = serializers.IntegerField(
        min_value=1, error_messages={"invalid": "Please enter a lecturer ID"}
    )


class EnrollmentDecisionSerializer(serializers.Serializer):
    id = serializers.IntegerField(min_value=1)
    status = serializers.ChoiceField(
        choices=[EnrollmentStatus.APPROVED.value, EnrollmentStatus.REJECTED.value]
    )


class AssignmentSerializer(serializers.Serializer):
    course_id = serializers.IntegerField(
        min_value=1,
        error_messages={"min_value": "Please select a course", "invalid": "Please select a course"},
    )
    title = serializers.CharField(
        max_length=200,
        error_messages={
            "blank": "Title is required",
            "max_length": "Title must be less than 200 characters",
        },
    )
    description = serializers.CharField(required=False, allow_blank=True, default="")
    weight = serializers.FloatField(
        min_value=0.1,
        max_value=100,
        error_messages={
            "min_value": "Weight must be at least 0.1%",
            "max_value": "Weight cannot exceed 100%",
        },
    )
    due_at = serializers.DateTimeField(required=False, allow_null=True, default=None)
    is_active = serializers.BooleanField(required=False, default=True)

    def to_payload(self):
        data = self.validated_data
        payload = {
            "courseId": data["course_id"],
            "title": data["title"],
            "description": data["description"],
            "weight": data["weight"],
            "isActive": data["is_active"],
        }
        if data.get("due_at"):
            payload["dueAt"] = data["due_at"].isoformat()
        return payload


class SubmissionSerializer(serializers.Serializer):
    text_submission = serializers.CharField(required=False, allow_blank=True, default="")
    file = serializers.FileField(required=False, allow_null=True, default=None)

    def validate_file(self, file_obj):
        validate_file_size(file_obj)
        validate_file_extension(file_obj, SUBMISSION_EXTENSIONS)
        return file_obj

    def validate(self, attrs):
        if not attrs.get("text_submission", "").strip() and not attrs.get("file"):
            raise serializers.ValidationError(
                "Please provide either a text submission or upload a file"
            )
        return attrs


class GradeSerializer(serializers.Serializer):
    submission_id = serializers.IntegerField(min_value=1)
    grade = serializers.FloatField(
        min_value=0,
        max_value=100,
        error_messages={
            "min_value": "Grade must be between 0 and 100",
            "max_value": "Grade must be between 0 and 100",
            "invalid": "Grade must be between 0 and 100",
        },
    )
    feedback = serializers.CharField(required=False, allow_blank=True, default="")

    @property
    def feedback_or_none(self):
        return self.validated_data["feedback"].strip() or None
