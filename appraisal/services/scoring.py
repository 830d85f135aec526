# appraisal/services/scoring.py
"""
Scoring helpers for the appraisal parts. Pure functions, kept small & testable.
No backend access here: views and the parts gateway feed plain values in.
"""
import logging
import math
import re
from collections import namedtuple
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Mapping, Optional

from ..constants import (
    ADMIN_DESIGNATION_ASSOCIATE_DEAN,
    DEFAULT_ROLE_FACTOR,
    DIRECTOR_MARKS_MAX,
    INTERACTION_MAXES,
    PART_A_MAXES,
    PART_B_KEYS,
    PART_B_SECTIONS,
    PART_D_SELF_MAX,
    PART_D_SUPERIOR_MAX,
    PART_D_TOTAL_MAX,
    PART_E_MAX,
    PORTFOLIO_BOTH,
    PORTFOLIO_INSTITUTE,
    ROLE_FACTORS,
)

logger = logging.getLogger(__name__)

PartAScore = namedtuple("PartAScore", "raw_sum factor max_score final_score")
PartDScore = namedtuple("PartDScore", "self_marks superior total")
SectionTotal = namedtuple("SectionTotal", "section title claimed verified")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


# ------------------------------------------------------------
# Common helpers
# ------------------------------------------------------------

def to_number(v: Any) -> Optional[float]:
    """Best-effort float conversion; None for blanks and garbage ("nan", "inf" included)."""
    if v is None or isinstance(v, bool):
        return None
    try:
        n = float(v) if isinstance(v, (int, float, Decimal)) else float(str(v).strip())
    except ValueError:
        return None
    return n if math.isfinite(n) else None


def parse_int(v: Any) -> Optional[int]:
    """Leading-integer parse: "12" → 12, "3.7" → 3, "4 papers" → 4, "" → None."""
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, (float, Decimal)):
        return int(v)
    m = _LEADING_INT.match(str(v))
    return int(m.group(1)) if m else None


def clamp(v: Any, lo: float, hi: float) -> float:
    """Clamp into [lo, hi]; unparseable input counts as lo."""
    n = to_number(v)
    if n is None:
        return lo
    return max(lo, min(hi, n))


def round_half_up(v: float) -> int:
    return int(Decimal(str(v)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _num(v: float):
    # 50.0 → 50 for display and JSON
    return int(v) if float(v).is_integer() else v


# ------------------------------------------------------------
# Part A
# ------------------------------------------------------------

def role_factor(designation: Optional[str]):
    """(factor, max score) for a designation; unknown designations use the default."""
    entry = ROLE_FACTORS.get((designation or "").strip())
    if entry is None:
        logger.warning("No Part A role factor for designation %r; using default %s", designation, DEFAULT_ROLE_FACTOR)
        return DEFAULT_ROLE_FACTOR
    return entry


def clamp_part_a(subscores: Mapping[str, Any]) -> dict:
    return {key: _num(clamp(subscores.get(key), 0, mx)) for key, mx in PART_A_MAXES.items()}


def part_a_score(subscores: Mapping[str, Any], designation: Optional[str]) -> PartAScore:
    """
    finalScore = round(min(roleMax, sum(subscores) × roleFactor))
    Each sub-score is clamped to [0, its max] first.
    """
    clamped = clamp_part_a(subscores)
    raw_sum = _num(sum(clamped.values()))
    factor, max_score = role_factor(designation)
    final_score = round_half_up(min(max_score, raw_sum * factor))
    return PartAScore(raw_sum, factor, max_score, final_score)


# ------------------------------------------------------------
# Part D
# ------------------------------------------------------------

def portfolio_superior(
    *,
    portfolio_type: str,
    hod_marks: Any = 0,
    dean_marks: Any = 0,
    is_administrative_role: bool = False,
    administrative_role: str = "",
    director_marks: Any = 0,
    admin_dean_marks: Any = 0,
):
    if is_administrative_role:
        if administrative_role == ADMIN_DESIGNATION_ASSOCIATE_DEAN:
            return clamp(admin_dean_marks, 0, PART_D_SUPERIOR_MAX)
        return clamp(director_marks, 0, PART_D_SUPERIOR_MAX)

    hod = clamp(hod_marks, 0, PART_D_SUPERIOR_MAX)
    dean = clamp(dean_marks, 0, PART_D_SUPERIOR_MAX)
    if portfolio_type == PORTFOLIO_BOTH:
        return (hod + dean) / 2
    if portfolio_type == PORTFOLIO_INSTITUTE:
        return dean
    return hod


def part_d_score(*, self_marks: Any, **superior_kwargs) -> PartDScore:
    """
    total = min(120, self + superior)
    - self is capped at 60
    - superior: avg(HOD, Dean) for "both", Dean for "institute", HOD for "department",
      or the admin-track mark (Director / Dean for associate deans)
    """
    own = clamp(self_marks, 0, PART_D_SELF_MAX)
    superior = portfolio_superior(**superior_kwargs)
    total = min(PART_D_TOTAL_MAX, own + superior)
    return PartDScore(_num(own), _num(superior), _num(total))


def part_d_score_from_record(record: Mapping[str, Any]) -> PartDScore:
    """Same as part_d_score, reading the backend's camelCase Part D record."""
    is_admin = bool(record.get("isAdministrativeRole"))
    self_key = "adminSelfAwardedMarks" if is_admin else "selfAwardedMarks"
    return part_d_score(
        self_marks=record.get(self_key),
        portfolio_type=record.get("portfolioType") or PORTFOLIO_BOTH,
        hod_marks=record.get("hodMarks"),
        dean_marks=record.get("deanMarks"),
        is_administrative_role=is_admin,
        administrative_role=record.get("administrativeRole") or "",
        director_marks=record.get("directorMarks"),
        admin_dean_marks=record.get("adminDeanMarks"),
    )


# ------------------------------------------------------------
# Part E
# ------------------------------------------------------------

def part_e_score(self_marks: Any):
    return _num(clamp(self_marks, 0, PART_E_MAX))


# ------------------------------------------------------------
# Part B
# ------------------------------------------------------------

def non_negative_int(v: Any) -> int:
    n = parse_int(v)
    return max(0, n) if n is not None else 0


def verified_payload(values: Mapping[str, Any]) -> dict:
    """Flat {category: int} over every Part B category; blanks become 0."""
    return {key: non_negative_int(values.get(key)) for key in PART_B_KEYS}


def section_totals(claimed: Mapping[str, Any], verified: Mapping[str, Any]) -> list:
    """Per-section claimed / verified sums. Display only: Part B has no cap."""
    rows = []
    for section_id, title, items in PART_B_SECTIONS:
        rows.append(SectionTotal(
            section_id,
            title,
            sum(non_negative_int(claimed.get(key)) for key, _ in items),
            sum(non_negative_int(verified.get(key)) for key, _ in items),
        ))
    return rows


# ------------------------------------------------------------
# Reviews
# ------------------------------------------------------------

def interaction_total(scores: Mapping[str, Any]):
    return _num(sum(clamp(scores.get(key), 0, mx) for key, mx in INTERACTION_MAXES.items()))


def validate_director_marks(v: Any) -> int:
    n = parse_int(v)
    if n is None or n < 0 or n > DIRECTOR_MARKS_MAX:
        raise ValueError(f"Director marks must be between 0 and {DIRECTOR_MARKS_MAX}.")
    return n


# ------------------------------------------------------------
# Progress & dashboards
# ------------------------------------------------------------

def _interacted(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        return bool(v.strip())
    n = to_number(v)
    return n is not None and n > 0


def completion_percent(values: Iterable[Any]) -> float:
    """Share of fields the user has filled (numbers > 0, non-blank text)."""
    values = list(values)
    if not values:
        return 0.0
    return sum(1 for v in values if _interacted(v)) / len(values) * 100


def status_counts(records: Iterable[Mapping[str, Any]], statuses: Iterable[str], key: str = "status") -> dict:
    counts = {s: 0 for s in statuses}
    for row in records:
        value = row.get(key)
        if value in counts:
            counts[value] += 1
    return counts
