# appraisal/views/mixins.py
import logging

from django.contrib import messages
from django.utils.functional import cached_property

from base.services.backend import BackendError, unwrap_list
from base.views.mixins import RoleRequiredMixin

from ..services.parts import load_part, load_status
from ..services.status import FormStatus, is_locked, status_label

logger = logging.getLogger(__name__)


# ============================================================
# Listing rows
# ============================================================

def faculty_row(row: dict) -> dict:
    """Normalize one faculty row of a listing endpoint."""
    status = row.get("status") or ""
    parsed = FormStatus.parse(status)
    return {
        **row,
        "id": str(row.get("id") or row.get("_id") or row.get("userId") or ""),
        "name": row.get("name") or row.get("full_name") or "",
        "email": row.get("email") or "",
        "employee_id": row.get("employeeId") or row.get("employee_id") or "",
        "department": row.get("department") or row.get("dept") or "",
        "designation": row.get("designation") or "",
        "status": parsed.value if parsed else status,
        "status_label": status_label(status),
    }


def filter_rows(rows, q="", department="", status=""):
    """Search by name / employee id, plus exact department & status filters."""
    q = (q or "").strip().lower()
    out = []
    for row in rows:
        if q and q not in row["name"].lower() and q not in row["employee_id"].lower():
            continue
        if department and row["department"] != department:
            continue
        if status and row["status"] != status:
            continue
        out.append(row)
    return out


class FacultyListingMixin(RoleRequiredMixin):
    """
    Pages listing faculty records from a backend scope
    (e.g. "verification-team/faculty").
    """
    listing_scope = None
    listing_error = "Failed to load faculty list"

    def get_listing_scope(self):
        return self.listing_scope

    def fetch_rows(self):
        try:
            payload = self.request.backend.list_faculty(self.get_listing_scope())
        except BackendError:
            messages.error(self.request, self.listing_error)
            return []
        return [faculty_row(r) for r in unwrap_list(payload, "faculty", "submissions")]

    def get_filters(self):
        g = self.request.GET
        return {
            "q": g.get("q", ""),
            "department": g.get("department", ""),
            "status": g.get("status", ""),
        }

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        rows = self.fetch_rows()
        filters = self.get_filters()
        ctx["all_rows"] = rows
        ctx["rows"] = filter_rows(rows, **filters)
        ctx["filters"] = filters
        ctx["departments"] = sorted({r["department"] for r in rows if r["department"]})
        ctx["statuses"] = [(s.value, s.label) for s in FormStatus]
        return ctx


# ============================================================
# One appraisal record
# ============================================================

class RecordMixin(RoleRequiredMixin):
    """
    Views working on the record (department, user_id) named in the URL.
    `open_status` is the status in which this actor may write.
    """
    open_status = FormStatus.PENDING

    @property
    def department(self) -> str:
        return self.kwargs["department"]

    @property
    def user_id(self) -> str:
        return self.kwargs["user_id"]

    @cached_property
    def status(self) -> str:
        return self.fetch_status()

    def fetch_status(self):
        """Status string, or None when it cannot be read (the form then stays locked)."""
        try:
            return load_status(self.request.backend, self.department, self.user_id)
        except BackendError:
            logger.warning("Status unavailable for %s/%s", self.department, self.user_id)
            messages.error(self.request, "Failed to load form status")
            return None

    @property
    def locked(self) -> bool:
        return is_locked(self.status, self.open_status)

    def fetch_part(self, part):
        """LoadedPart, or None when the backend failed (message already queued)."""
        try:
            return load_part(self.request.backend, self.department, self.user_id, part)
        except BackendError:
            messages.error(self.request, f"Failed to load Part {part}")
            return None

    def locked_warning(self):
        messages.warning(self.request, f"Form locked (status: {status_label(self.status)})")

    def record_context(self):
        return {
            "department": self.department,
            "record_user_id": self.user_id,
            "status": self.status,
            "status_label": status_label(self.status),
            "locked": self.locked,
        }
