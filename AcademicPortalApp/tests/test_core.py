import time

import pytest

from AcademicPortalApp.core.capabilities import CAPABILITIES, capabilities_for
from AcademicPortalApp.core.choices import UserRole
from AcademicPortalApp.core.config import PortalSettings
from AcademicPortalApp.core.parallel import gather
from AcademicPortalApp.core.validators import format_file_size


def test_gather_keeps_call_order():
    def slow():
        time.sleep(0.05)
        return "slow"

    assert gather(slow, lambda: "fast") == ["slow", "fast"]
    assert gather() == []


def test_gather_reraises_first_failure_after_all_settle():
    finished = []

    def boom():
        raise ValueError("first")

    def late():
        time.sleep(0.05)
        finished.append(True)
        return 1

    with pytest.raises(ValueError, match="first"):
        gather(boom, late)
    assert finished == [True]


def test_every_role_has_capabilities():
    assert set(CAPABILITIES) == set(UserRole.values)


@pytest.mark.parametrize(
    "role,page,allowed",
    [
        ("student", "grades", True),
        ("student", "enrollments", False),
        ("lecturer", "assignment_submissions", True),
        ("lecturer", "assignment_submit", False),
        ("admin", "enrollments", True),
        ("admin", "assignments", False),
        ("janitor", "courses", False),
        (None, "dashboard", False),
    ],
)
def test_page_access(role, page, allowed):
    assert capabilities_for(role).can_open(page) is allowed


def test_only_lecturers_manage_assignments():
    assert capabilities_for("lecturer").can_assignment("create")
    assert not capabilities_for("student").can_assignment("create")
    assert capabilities_for("student").assignment_perspective == "student"


def test_settings_defaults():
    config = PortalSettings()
    assert config.token_cookie == "auth-token"
    assert config.token_max_age == 7 * 24 * 60 * 60


@pytest.mark.parametrize("size,text", [(0, "0 Bytes"), (512, "512 Bytes"), (1536, "1.5 KB"), (10 * 1024 * 1024, "10 MB")])
def test_format_file_size(size, text):
    assert format_file_size(size) == text
