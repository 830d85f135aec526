# base/roles.py
# ------------------------------------------------------------
# Portal roles and role-gated routing
# ------------------------------------------------------------
# - كل دور له لوحة (dashboard) وقائمة تنقّل خاصة به.
# - القيم القادمة من الـ backend تُطابَق عبر جدول صريح؛
#   أي قيمة غير معروفة تُرفض (لا مطابقة جزئية ولا قيمة افتراضية).
# ------------------------------------------------------------
from __future__ import annotations

import enum
import re
from typing import Optional


class UnknownRoleError(ValueError):
    """Role string from the backend does not map to any portal role."""

    def __init__(self, raw):
        self.raw = raw
        super().__init__(f"Unrecognized role: {raw!r}")


class Role(str, enum.Enum):
    ADMIN = "admin"
    DIRECTOR = "director"
    HOD = "hod"
    DEAN = "dean"
    ASSOCIATE_DEAN = "associate_dean"
    VERIFICATION_TEAM = "verification_team"
    EXTERNAL = "external"
    COLLEGE_EXTERNAL = "college_external"
    FACULTY = "faculty"

    @property
    def label(self) -> str:
        return ROLE_LABELS[self]

    @classmethod
    def choices(cls):
        return [(r.value, r.label) for r in cls]


ROLE_LABELS = {
    Role.ADMIN: "Admin",
    Role.DIRECTOR: "Director",
    Role.HOD: "HOD",
    Role.DEAN: "Dean",
    Role.ASSOCIATE_DEAN: "Associate Dean",
    Role.VERIFICATION_TEAM: "Verification Team",
    Role.EXTERNAL: "External Reviewer",
    Role.COLLEGE_EXTERNAL: "College External",
    Role.FACULTY: "Faculty",
}

# keys are already folded by _fold()
ROLE_ALIASES = {
    "admin": Role.ADMIN,
    "administrator": Role.ADMIN,
    "director": Role.DIRECTOR,
    "hod": Role.HOD,
    "head_of_department": Role.HOD,
    "dean": Role.DEAN,
    "associate_dean": Role.ASSOCIATE_DEAN,
    "assoc_dean": Role.ASSOCIATE_DEAN,
    "verification_team": Role.VERIFICATION_TEAM,
    "verification": Role.VERIFICATION_TEAM,
    "verifier": Role.VERIFICATION_TEAM,
    "external": Role.EXTERNAL,
    "external_reviewer": Role.EXTERNAL,
    "college_external": Role.COLLEGE_EXTERNAL,
    "faculty": Role.FACULTY,
}


def _fold(raw: str) -> str:
    return re.sub(r"[\s\-]+", "_", raw.strip().lower())


def normalize_role(raw) -> Role:
    """
    Map a backend role string to a Role.
    Raises UnknownRoleError for empty or unrecognized values.
    """
    if isinstance(raw, Role):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        raise UnknownRoleError(raw)
    role = ROLE_ALIASES.get(_fold(raw))
    if role is None:
        raise UnknownRoleError(raw)
    return role


def try_normalize_role(raw) -> Optional[Role]:
    try:
        return normalize_role(raw)
    except UnknownRoleError:
        return None


# ============================================================
# Role-gated routing
# ============================================================

ROLE_HOME = {
    Role.ADMIN: "base:admin_user_list",
    Role.DIRECTOR: "appraisal:director_dashboard",
    Role.HOD: "appraisal:review_list",
    Role.DEAN: "appraisal:review_list",
    Role.ASSOCIATE_DEAN: "appraisal:associate_dean_review",
    Role.VERIFICATION_TEAM: "appraisal:verification_dashboard",
    Role.EXTERNAL: "appraisal:external_dashboard",
    Role.COLLEGE_EXTERNAL: "appraisal:college_external_dashboard",
    Role.FACULTY: "appraisal:faculty_dashboard",
}


def home_url_name(role: Role) -> str:
    return ROLE_HOME[role]


# (label, url name)
NAV_ITEMS = {
    Role.ADMIN: [
        ("Users", "base:admin_user_list"),
        ("Add User", "base:admin_user_create"),
    ],
    Role.DIRECTOR: [
        ("Dashboard", "appraisal:director_dashboard"),
        ("Faculty Forms", "appraisal:director_faculty_forms"),
        ("Assign External", "appraisal:assign_external"),
        ("External Reviewers", "appraisal:external_reviewers"),
    ],
    Role.HOD: [
        ("Faculty Review", "appraisal:review_list"),
        ("My Appraisal", "appraisal:faculty_dashboard"),
    ],
    Role.DEAN: [
        ("Faculty Review", "appraisal:review_list"),
        ("My Appraisal", "appraisal:faculty_dashboard"),
    ],
    Role.ASSOCIATE_DEAN: [
        ("Submissions", "appraisal:associate_dean_review"),
        ("My Appraisal", "appraisal:faculty_dashboard"),
    ],
    Role.VERIFICATION_TEAM: [("Dashboard", "appraisal:verification_dashboard")],
    Role.EXTERNAL: [("Dashboard", "appraisal:external_dashboard")],
    Role.COLLEGE_EXTERNAL: [("Dashboard", "appraisal:college_external_dashboard")],
    Role.FACULTY: [
        ("My Appraisal", "appraisal:faculty_dashboard"),
        ("Part A", "appraisal:part_a"),
        ("Part B", "appraisal:part_b"),
        ("Part D", "appraisal:part_d"),
        ("Part E", "appraisal:part_e"),
    ],
}
