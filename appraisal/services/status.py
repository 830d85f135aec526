# appraisal/services/status.py
# ============================================================
# Record status & lock gate
# سجل التقييم يُفتح للتعديل لطرف واحد في كل مرحلة
# ============================================================
from enum import Enum
from typing import Optional


class FormStatus(str, Enum):
    PENDING = "pending"
    SUBMITTED = "submitted"
    VERIFICATION_PENDING = "verification_pending"
    AUTHORITY_VERIFICATION_PENDING = "authority_verification_pending"
    SENT_TO_DIRECTOR = "SentToDirector"
    INTERACTION_PENDING = "interaction_pending"
    DONE = "done"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @classmethod
    def parse(cls, value) -> Optional["FormStatus"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip())
        except ValueError:
            return None


STATUS_LABELS = {
    FormStatus.PENDING: "Pending",
    FormStatus.SUBMITTED: "Submitted",
    FormStatus.VERIFICATION_PENDING: "Verification Pending",
    FormStatus.AUTHORITY_VERIFICATION_PENDING: "Authority Verification Pending",
    FormStatus.SENT_TO_DIRECTOR: "Sent to Director",
    FormStatus.INTERACTION_PENDING: "Interaction Pending",
    FormStatus.DONE: "Done",
}

# forward order
STATUS_ORDER = tuple(FormStatus)
_RANK = {s: i for i, s in enumerate(STATUS_ORDER)}

# who may write while the record sits in which status
OPEN_FOR_FACULTY = FormStatus.PENDING
OPEN_FOR_SUPERIOR = FormStatus.SUBMITTED
OPEN_FOR_VERIFICATION = FormStatus.VERIFICATION_PENDING
OPEN_FOR_DIRECTOR = FormStatus.SENT_TO_DIRECTOR
OPEN_FOR_EXTERNAL = FormStatus.INTERACTION_PENDING


class FormLockedError(Exception):
    """Write attempted on a record that is not open for that actor."""

    def __init__(self, status, open_status=OPEN_FOR_FACULTY):
        self.status = status
        self.open_status = FormStatus.parse(open_status) or open_status
        super().__init__(f"Form locked (status: {status_label(status)})")


def status_label(status) -> str:
    parsed = FormStatus.parse(status)
    if parsed:
        return parsed.label
    return str(status) if status else "unknown"


def rank(status) -> int:
    """Position in the forward order; -1 for unknown values."""
    parsed = FormStatus.parse(status)
    return _RANK[parsed] if parsed is not None else -1


def is_locked(status, open_status=OPEN_FOR_FACULTY) -> bool:
    """
    Locked whenever the record is not in the actor's open status.
    Unknown status strings are treated as locked.
    """
    parsed = FormStatus.parse(status)
    return parsed is None or parsed != FormStatus.parse(open_status)


def ensure_editable(status, open_status=OPEN_FOR_FACULTY) -> None:
    if is_locked(status, open_status):
        raise FormLockedError(status, open_status)


def can_transition(src, dst) -> bool:
    """Forward only; nothing ever returns to pending."""
    a, b = FormStatus.parse(src), FormStatus.parse(dst)
    if a is None or b is None or b == FormStatus.PENDING:
        return False
    return _RANK[b] > _RANK[a]
