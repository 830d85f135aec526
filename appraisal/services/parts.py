# appraisal/services/parts.py
"""
Record gateway: read / write appraisal parts through the backend client.

Every write helper checks the lock gate first and raises FormLockedError
before a single request leaves the portal.
"""
import logging
from collections import namedtuple
from typing import Any, Mapping, Optional

from base.roles import Role
from base.services.backend import BackendClient, BackendError

from ..constants import (
    ADMIN_DESIGNATION_ASSOCIATE_DEAN,
    ADMINISTRATIVE_DESIGNATIONS,
    INTERACTION_MAXES,
    PART_B,
    PART_B_KEYS,
    PART_D,
    PART_D_SUPERIOR_MAX,
    PORTFOLIO_BOTH,
)
from .scoring import (
    clamp,
    clamp_part_a,
    interaction_total,
    non_negative_int,
    part_a_score,
    part_d_score_from_record,
    part_e_score,
    validate_director_marks,
    verified_payload,
)
from .status import (
    FormStatus,
    OPEN_FOR_DIRECTOR,
    OPEN_FOR_EXTERNAL,
    OPEN_FOR_FACULTY,
    OPEN_FOR_SUPERIOR,
    OPEN_FOR_VERIFICATION,
    ensure_editable,
)

logger = logging.getLogger(__name__)

LoadedPart = namedtuple("LoadedPart", "data is_first_time")


# ============================================================
# Reads
# ============================================================

def _unwrap_record(payload: Any, part: str) -> dict:
    if not isinstance(payload, dict):
        return {}
    for key in (part, "data"):
        inner = payload.get(key)
        if isinstance(inner, dict):
            return inner
    return payload


def load_part(client: BackendClient, department: str, user_id: str, part: str) -> LoadedPart:
    """
    GET one part. A 404 or an empty body means nothing was saved yet,
    so the next write goes out with isFirstTime=True.
    """
    try:
        payload = client.get_part(department, user_id, part)
    except BackendError as exc:
        if exc.status_code == 404:
            return LoadedPart({}, True)
        raise
    data = _unwrap_record(payload, part)
    return LoadedPart(data, not data)


def verified_of(part: Mapping[str, Any]) -> dict:
    """
    Verified Part B counts of a loaded record: the flat {category: n}
    keys written by submit_verification, else a nested `verified` mapping.
    """
    flat = {key: part[key] for key in PART_B_KEYS if key in part}
    if flat:
        return flat
    nested = part.get("verified")
    return dict(nested) if isinstance(nested, dict) else {}


def load_status(client: BackendClient, department: str, user_id: str) -> str:
    payload = client.get_status(department, user_id)
    status = _unwrap_record(payload, "status").get("status") if isinstance(payload, dict) else payload
    return str(status) if status else FormStatus.PENDING.value


# ============================================================
# Writes
# ============================================================

def save_part(
    client: BackendClient,
    department: str,
    user_id: str,
    part: str,
    data: Mapping[str, Any],
    *,
    status,
    is_first_time: bool,
    open_status=OPEN_FOR_FACULTY,
) -> Any:
    """Upsert one part: POST {part: data, "isFirstTime": ...}."""
    ensure_editable(status, open_status)
    payload = {part: dict(data), "isFirstTime": bool(is_first_time)}
    result = client.save_part(department, user_id, part, payload)
    logger.info("Saved part %s for %s/%s (first time: %s)", part, department, user_id, bool(is_first_time))
    return result


# ---------------------------------------------
# Payload builders (faculty self parts)
# ---------------------------------------------

def build_part_a_payload(subscores: Mapping[str, Any], designation: Optional[str]) -> dict:
    score = part_a_score(subscores, designation)
    return {
        **clamp_part_a(subscores),
        "rawSum": score.raw_sum,
        "factor": score.factor,
        "maxScore": score.max_score,
        "finalScore": score.final_score,
    }


def build_part_b_claims_payload(claimed: Mapping[str, Any], proofs: Mapping[str, Any]) -> dict:
    return {
        "claimed": {key: non_negative_int(claimed.get(key)) for key in PART_B_KEYS},
        "proofs": {key: (proofs.get(key) or "").strip() for key in PART_B_KEYS if (proofs.get(key) or "").strip()},
    }


def is_administrative(designation: Optional[str]) -> bool:
    return (designation or "").strip().lower() in ADMINISTRATIVE_DESIGNATIONS


def part_d_defaults(designation: Optional[str]) -> dict:
    """Blank Part D record for a first-time author."""
    admin = is_administrative(designation)
    return {
        "portfolioType": PORTFOLIO_BOTH,
        "selfAwardedMarks": 0,
        "deanMarks": 0,
        "hodMarks": 0,
        "isMarkHOD": False,
        "isMarkDean": False,
        "isAdministrativeRole": admin,
        "administrativeRole": (designation or "").strip().lower() if admin else "",
        "adminSelfAwardedMarks": 0,
        "directorMarks": 0,
        "adminDeanMarks": 0,
        "instituteLevelPortfolio": "",
        "departmentLevelPortfolio": "",
    }


def build_part_d_payload(record: Mapping[str, Any], institute_text: str = "", department_text: str = "") -> dict:
    """Full Part D record plus both portfolio texts and `marks` = computed total."""
    data = dict(record)
    data["instituteLevelPortfolio"] = institute_text or ""
    data["departmentLevelPortfolio"] = department_text or ""
    data["marks"] = part_d_score_from_record(data).total
    return data


def build_part_e_payload(marks: Any, bullet_points: str) -> dict:
    return {"total_marks": part_e_score(marks), "bullet_points": bullet_points or ""}


# ---------------------------------------------
# Reviewer writes
# ---------------------------------------------

def submit_verification(client: BackendClient, department: str, user_id: str, values: Mapping[str, Any], *, status) -> dict:
    """Verification team: POST the flat {category: verified} mapping to Part B."""
    ensure_editable(status, OPEN_FOR_VERIFICATION)
    payload = verified_payload(values)
    client.save_part(department, user_id, PART_B, payload)
    logger.info("Part B verified for %s/%s", department, user_id)
    return payload


def save_superior_marks(
    client: BackendClient,
    department: str,
    user_id: str,
    role: Role,
    marks: Any,
    *,
    status,
    record: Optional[Mapping[str, Any]] = None,
) -> dict:
    """
    HOD / Dean mark on Part D; `marks` (the total) is recomputed and the
    whole record is written back.
    """
    ensure_editable(status, OPEN_FOR_SUPERIOR)
    if record is None:
        record = load_part(client, department, user_id, PART_D).data
    data = dict(record)
    value = clamp(marks, 0, PART_D_SUPERIOR_MAX)

    if role == Role.HOD:
        data.update(hodMarks=value, isMarkHOD=True)
    elif role == Role.DEAN:
        if data.get("isAdministrativeRole") and data.get("administrativeRole") == ADMIN_DESIGNATION_ASSOCIATE_DEAN:
            data["adminDeanMarks"] = value
        else:
            data.update(deanMarks=value, isMarkDean=True)
    else:
        raise ValueError(f"{role} cannot award portfolio marks.")

    data["marks"] = part_d_score_from_record(data).total
    client.save_part(department, user_id, PART_D, {PART_D: data, "isFirstTime": False})
    logger.info("%s marked Part D for %s/%s: %s", role.label, department, user_id, value)
    return data


def save_director_marks(
    client: BackendClient,
    department: str,
    user_id: str,
    marks: Any,
    *,
    status,
    record: Optional[Mapping[str, Any]] = None,
) -> dict:
    """
    Director marks on Part D: the whole record is written back with
    `directorMarks` set and `marks` recomputed, then the record is flagged
    as director-marked.
    """
    ensure_editable(status, OPEN_FOR_DIRECTOR)
    value = validate_director_marks(marks)
    is_first_time = False
    if record is None:
        record, is_first_time = load_part(client, department, user_id, PART_D)
    data = dict(record)
    data["directorMarks"] = value
    data["marks"] = part_d_score_from_record(data).total
    client.save_part(department, user_id, PART_D, {PART_D: data, "isFirstTime": is_first_time})
    client.mark_director_given(department, user_id)
    logger.info("Director marks given for %s/%s: %s", department, user_id, value)
    return data


def save_interaction_marks(
    client: BackendClient,
    department: str,
    user_id: str,
    scores: Mapping[str, Any],
    comments: str = "",
    *,
    status,
    college: bool = True,
) -> dict:
    """External / college-external evaluation. Every criterion must be filled."""
    ensure_editable(status, OPEN_FOR_EXTERNAL)
    missing = [key for key in INTERACTION_MAXES if scores.get(key) in (None, "")]
    if missing:
        raise ValueError("Please fill in all criteria.")
    payload = {key: clamp(scores.get(key), 0, mx) for key, mx in INTERACTION_MAXES.items()}
    payload = {key: int(v) if float(v).is_integer() else v for key, v in payload.items()}
    payload["total"] = interaction_total(scores)
    payload["comments"] = comments or ""
    client.save_interaction_marks(department, user_id, payload, college=college)
    logger.info("Interaction marks saved for %s/%s (college: %s)", department, user_id, college)
    return payload
