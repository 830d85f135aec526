from django import template

from ..services.status import FormStatus, is_locked as _is_locked, status_label as _status_label

register = template.Library()

# -------------------------------------------------
# Status
# -------------------------------------------------
STATUS_BADGES = {
    FormStatus.PENDING: "badge-warning",
    FormStatus.SUBMITTED: "badge-info",
    FormStatus.VERIFICATION_PENDING: "badge-secondary",
    FormStatus.AUTHORITY_VERIFICATION_PENDING: "badge-secondary",
    FormStatus.SENT_TO_DIRECTOR: "badge-primary",
    FormStatus.INTERACTION_PENDING: "badge-accent",
    FormStatus.DONE: "badge-success",
}

STATE_BADGES = {
    "pending": "badge-warning",
    "in_progress": "badge-info",
    "verified": "badge-success",
    "submitted": "badge-info",
    "reviewed": "badge-success",
}


@register.filter
def status_badge(status):
    parsed = FormStatus.parse(status)
    if parsed:
        return STATUS_BADGES[parsed]
    return STATE_BADGES.get(status, "badge-ghost")


@register.filter
def status_label(status):
    return _status_label(status)


@register.simple_tag
def is_locked(status, open_status=FormStatus.PENDING.value):
    return _is_locked(status, open_status)


# -------------------------------------------------
# Numbers
# -------------------------------------------------
@register.filter
def percent(value):
    """0..100 float → whole percent for progress bars."""
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        return 0
