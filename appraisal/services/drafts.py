# appraisal/services/drafts.py
# ------------------------------------------------------------
# "Save progress" drafts for reviewer forms.
# تُحفظ في الجلسة فقط ولا تُرسل إلى الـ backend.
# الجلسة داخل كوكي موقّعة: عدد المسودات محدود (MAX_DRAFTS)
# والأقدم يُحذف أولاً.
# ------------------------------------------------------------
from typing import Iterable, Optional, Tuple

DRAFTS_SESSION_KEY = "appraisal_drafts"

VERIFICATION = "verification"
INTERACTION = "interaction"

MAX_DRAFTS = 20


def _draft_key(kind: str, department: str, user_id: str) -> str:
    return f"{kind}:{department}:{user_id}"


def get_draft(session, kind: str, department: str, user_id: str) -> Optional[dict]:
    return (session.get(DRAFTS_SESSION_KEY) or {}).get(_draft_key(kind, department, user_id))


def has_draft(session, kind: str, department: str, user_id: str) -> bool:
    return get_draft(session, kind, department, user_id) is not None


def save_draft(session, kind: str, department: str, user_id: str, values: dict) -> None:
    drafts = dict(session.get(DRAFTS_SESSION_KEY) or {})
    key = _draft_key(kind, department, user_id)
    # re-saved draft moves to the end (newest)
    drafts.pop(key, None)
    # blanks dropped
    drafts[key] = {k: v for k, v in values.items() if v not in ("", None)}
    while len(drafts) > MAX_DRAFTS:
        drafts.pop(next(iter(drafts)))
    session[DRAFTS_SESSION_KEY] = drafts


def clear_draft(session, kind: str, department: str, user_id: str) -> None:
    drafts = dict(session.get(DRAFTS_SESSION_KEY) or {})
    if drafts.pop(_draft_key(kind, department, user_id), None) is not None:
        session[DRAFTS_SESSION_KEY] = drafts


def prune_drafts(session, kind: str, closed: Iterable[Tuple[str, str]]) -> int:
    """Drop the `kind` drafts of records no longer open to their reviewer. Returns how many went."""
    drafts = dict(session.get(DRAFTS_SESSION_KEY) or {})
    stale = [key for key in (_draft_key(kind, dept, uid) for dept, uid in closed) if key in drafts]
    if stale:
        for key in stale:
            del drafts[key]
        session[DRAFTS_SESSION_KEY] = drafts
    return len(stale)
