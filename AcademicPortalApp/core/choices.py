"""Typed enumerations (TextChoices) for roles and entity lifecycle states mirrored from the API."""
from django.db import models

class UserRole(models.TextChoices):
    """Portal-level role assigned to a user account by the backend."""
    STUDENT = "student", "Student"
    LECTURER = "lecturer", "Lecturer"
    ADMIN = "admin", "Admin"

class CourseStatus(models.TextChoices):
    """Publication state of a course."""
    DRAFT = "draft", "Draft"
    PUBLISHED = "published", "Published"
    ARCHIVED = "archived", "Archived"

class EnrollmentStatus(models.TextChoices):
    """Lifecycle of a student's request to join a course."""
    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"
    REJECTED = "rejected", "Rejected"

class SubmissionStatus(models.TextChoices):
    """Lifecycle states for an assignment submission."""
    DRAFT = "draft", "Draft"
    SUBMITTED = "submitted", "Submitted"
    GRADED = "graded", "Graded"
