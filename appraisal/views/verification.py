# -*- coding: utf-8 -*-
# appraisal/views/verification.py
# فريق التحقق: مطابقة أعداد الجزء B مع الإثباتات
import logging

from django.contrib import messages
from django.shortcuts import redirect
from django.views.generic import TemplateView

from base.services.backend import BackendError

from ..access import VERIFICATION_ROLES
from ..constants import PART_B
from ..forms import VerificationForm
from ..services import drafts
from ..services.parts import submit_verification, verified_of
from ..services.status import FormLockedError, FormStatus, OPEN_FOR_VERIFICATION, is_locked, rank
from .mixins import FacultyListingMixin, RecordMixin

logger = logging.getLogger(__name__)

VERIFICATION_STATES = (
    ("pending", "Pending"),
    ("in_progress", "In Progress"),
    ("verified", "Verified"),
)


def verification_state(row, session) -> str:
    explicit = row.get("verificationStatus")
    if explicit in dict(VERIFICATION_STATES):
        return explicit
    if rank(row["status"]) > rank(FormStatus.VERIFICATION_PENDING):
        return "verified"
    if drafts.has_draft(session, drafts.VERIFICATION, row["department"], row["id"]):
        return "in_progress"
    return "pending"


class VerificationDashboardView(FacultyListingMixin, TemplateView):
    allowed_roles = VERIFICATION_ROLES
    listing_scope = "verification-team/faculty"
    template_name = "appraisal/verification/dashboard.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        drafts.prune_drafts(self.request.session, drafts.VERIFICATION, [
            (row["department"], row["id"]) for row in ctx["all_rows"] if is_locked(row["status"], OPEN_FOR_VERIFICATION)
        ])
        for row in ctx["all_rows"]:
            row["verification_state"] = verification_state(row, self.request.session)
            row["verification_label"] = dict(VERIFICATION_STATES)[row["verification_state"]]
        counts = {key: 0 for key, _ in VERIFICATION_STATES}
        for row in ctx["all_rows"]:
            counts[row["verification_state"]] += 1
        ctx["counts"] = counts
        ctx["verification_states"] = VERIFICATION_STATES
        return ctx


class VerificationFormView(RecordMixin, TemplateView):
    """
    Claimed counts + proof links read-only, verified counts editable while
    the record is verification_pending.
    - action=save   → draft kept in the session only
    - action=submit → confirmation required, flat mapping POSTed to Part B
    """
    allowed_roles = VERIFICATION_ROLES
    open_status = OPEN_FOR_VERIFICATION
    template_name = "appraisal/verification/form.html"

    def make_form(self, loaded, data=None, submitting=False):
        part = loaded.data if loaded else {}
        initial = VerificationForm.initial_from(verified_of(part))
        draft = drafts.get_draft(self.request.session, drafts.VERIFICATION, self.department, self.user_id)
        if draft:
            initial.update(VerificationForm.initial_from(draft))
        return VerificationForm(
            data=data,
            initial=initial,
            claimed=part.get("claimed") or {},
            proofs=part.get("proofs") or {},
            submitting=submitting,
            locked=self.locked or loaded is None,
        )

    def render_form(self, form):
        ctx = self.get_context_data(form=form, **self.record_context())
        ctx["locked"] = form.locked
        ctx["has_draft"] = drafts.has_draft(self.request.session, drafts.VERIFICATION, self.department, self.user_id)
        return self.render_to_response(ctx)

    def get(self, request, *args, **kwargs):
        loaded = self.fetch_part(PART_B)
        return self.render_form(self.make_form(loaded))

    def post(self, request, *args, **kwargs):
        if self.locked:
            self.locked_warning()
            return self.get(request, *args, **kwargs)

        loaded = self.fetch_part(PART_B)
        if loaded is None:
            return self.render_form(self.make_form(None))
        submitting = request.POST.get("action") == "submit"
        form = self.make_form(loaded, data=request.POST, submitting=submitting)

        if not submitting:
            drafts.save_draft(request.session, drafts.VERIFICATION, self.department, self.user_id, form.raw_values())
            messages.success(request, "Progress saved")
            return redirect(request.path)

        if not form.is_valid():
            return self.render_form(form)

        try:
            submit_verification(
                request.backend, self.department, self.user_id, form.verified_values(), status=self.status,
            )
        except FormLockedError:
            self.locked_warning()
            return self.get(request, *args, **kwargs)
        except BackendError:
            logger.exception("Verification submit failed for %s/%s", self.department, self.user_id)
            messages.error(request, "Failed to save verification.")
            return self.render_form(form)

        drafts.clear_draft(request.session, drafts.VERIFICATION, self.department, self.user_id)
        messages.success(request, "Verification submitted. Part B research marks verified and saved.")
        return redirect("appraisal:verification_dashboard")
