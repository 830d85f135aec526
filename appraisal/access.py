# appraisal/access.py
# ------------------------------------------------------------
# High-level business rules for the Appraisal App
# ------------------------------------------------------------
# IMPORTANT:
#   - The backend remains the authority; these rules only decide what the
#     portal offers (which screens, which inputs are editable).
#   - Lock status is handled separately in services/status.py.
# ------------------------------------------------------------

from __future__ import annotations

from typing import Any, Mapping, Optional

from base.roles import Role
from base.session import SessionUser

from .constants import (
    ADMIN_DESIGNATION_ASSOCIATE_DEAN,
    PORTFOLIO_BOTH,
    PORTFOLIO_DEPARTMENT,
    PORTFOLIO_INSTITUTE,
)


# ============================================================
# Role sets per screen
# ============================================================

SELF_APPRAISAL_ROLES = (Role.FACULTY, Role.HOD, Role.DEAN, Role.ASSOCIATE_DEAN)
REVIEW_ROLES = (Role.HOD, Role.DEAN)
ASSOCIATE_DEAN_ROLES = (Role.ASSOCIATE_DEAN,)
VERIFICATION_ROLES = (Role.VERIFICATION_TEAM,)
DIRECTOR_ROLES = (Role.DIRECTOR,)
EXTERNAL_ROLES = (Role.EXTERNAL,)
COLLEGE_EXTERNAL_ROLES = (Role.COLLEGE_EXTERNAL,)


# ============================================================
# 1) Self parts
# ============================================================

def can_edit_self_part(user: Optional[SessionUser], department: str, user_id: str) -> bool:
    """
    Self parts (A, B claims, D self marks, E) are written by their owner only.
    Claimed Part B values stay read-only for every other actor.
    """
    if not user or not user.is_authenticated:
        return False
    if user.role not in SELF_APPRAISAL_ROLES:
        return False
    return str(user.id) == str(user_id) and (user.department or "") == (department or "")


# ============================================================
# 2) Part D superior marks
# ============================================================

def _is_admin_track(record: Mapping[str, Any]) -> bool:
    return bool(record.get("isAdministrativeRole"))


def can_mark_portfolio(user: Optional[SessionUser], record: Mapping[str, Any], department: str = "") -> bool:
    """
    Who awards the superior mark on a Part D record:

    1) HOD: department / both portfolios inside their own department
    2) Dean: institute / both portfolios, plus associate-dean admin records
    Other admin-track records are marked by the director (DirectorVerifyView).
    """
    if not user or not user.is_authenticated:
        return False

    portfolio = record.get("portfolioType") or PORTFOLIO_BOTH
    admin_role = record.get("administrativeRole") or ""

    if user.role == Role.HOD:
        if _is_admin_track(record):
            return False
        if department and user.department and department != user.department:
            return False
        return portfolio in (PORTFOLIO_DEPARTMENT, PORTFOLIO_BOTH)

    if user.role == Role.DEAN:
        if _is_admin_track(record):
            return admin_role == ADMIN_DESIGNATION_ASSOCIATE_DEAN
        return portfolio in (PORTFOLIO_INSTITUTE, PORTFOLIO_BOTH)

    return False


def superior_mark_of(user: SessionUser, record: Mapping[str, Any]):
    """Mark the given reviewer already awarded on this record (for prefill)."""
    if user.role == Role.HOD:
        return record.get("hodMarks") or 0
    if user.role == Role.DEAN:
        if _is_admin_track(record):
            return record.get("adminDeanMarks") or 0
        return record.get("deanMarks") or 0
    if user.role == Role.DIRECTOR:
        return record.get("directorMarks") or 0
    return 0
