# -*- coding: utf-8 -*-
# appraisal/views/director.py
# المدير: لوحة الإحصاءات، نماذج أعضاء هيئة التدريس، التحقق النهائي، المقيّمون الخارجيون
import logging

from django.contrib import messages
from django.shortcuts import redirect
from django.views.generic import FormView, TemplateView, View

from base.services.backend import BackendError, unwrap_list
from base.views.mixins import RoleRequiredMixin

from ..access import DIRECTOR_ROLES, superior_mark_of
from ..constants import DIRECTOR_MARKS_MAX, PART_B, PART_D
from ..forms import AssignExternalForm, DirectorMarksForm, ExternalReviewerForm
from ..services.parts import save_director_marks, verified_of
from ..services.scoring import SectionTotal, section_totals, status_counts
from ..services.status import FormLockedError, FormStatus, OPEN_FOR_DIRECTOR, STATUS_ORDER
from .mixins import FacultyListingMixin, RecordMixin

logger = logging.getLogger(__name__)


class DirectorRequired(RoleRequiredMixin):
    allowed_roles = DIRECTOR_ROLES


def _external_id(row):
    return str(row.get("id") or row.get("_id") or "")


# ============================================================
# Dashboard
# ============================================================

class DirectorDashboardView(DirectorRequired, FacultyListingMixin, TemplateView):
    listing_scope = "director/faculty-forms"
    template_name = "appraisal/director/dashboard.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        counts = status_counts(ctx["all_rows"], [s.value for s in STATUS_ORDER])
        stats = {
            "totalFaculty": len(ctx["all_rows"]),
            "verificationPending": counts[FormStatus.VERIFICATION_PENDING.value],
            "interactionPending": counts[FormStatus.INTERACTION_PENDING.value],
            "completedAppraisals": counts[FormStatus.DONE.value],
        }
        try:
            remote = self.request.backend.director_stats()
        except BackendError:
            # نعتمد على العدّ المحلي من القائمة
            logger.warning("Director stats unavailable; using listing counts")
        else:
            if isinstance(remote, dict):
                remote = remote.get("data") if isinstance(remote.get("data"), dict) else remote
                stats.update({k: remote[k] for k in stats if remote.get(k) is not None})
        ctx["stats"] = stats
        ctx["status_counts"] = [(s.label, counts[s.value]) for s in STATUS_ORDER]
        return ctx


class DirectorFacultyFormsView(DirectorRequired, FacultyListingMixin, TemplateView):
    listing_scope = "director/faculty-forms"
    template_name = "appraisal/director/faculty_forms.html"


# ============================================================
# Director verification
# ============================================================

def _section_rows(total, part_b):
    sections = total.get("sections") if isinstance(total, dict) else None
    if isinstance(sections, list) and sections:
        return [
            SectionTotal(s.get("section", ""), s.get("label", ""), s.get("claimed", 0), s.get("verified", 0))
            for s in sections
        ]
    return section_totals(part_b.get("claimed") or {}, verified_of(part_b))


class DirectorVerifyView(DirectorRequired, RecordMixin, TemplateView):
    open_status = OPEN_FOR_DIRECTOR
    template_name = "appraisal/director/verify.html"

    def fetch_summary(self):
        try:
            total = self.request.backend.get_total_marks(self.department, self.user_id) or {}
        except BackendError:
            messages.error(self.request, "Failed to load total marks")
            total = {}
        if isinstance(total, dict) and isinstance(total.get("data"), dict):
            total = total["data"]
        loaded = self.fetch_part(PART_B)
        return total, _section_rows(total, loaded.data if loaded else {})

    def render_form(self, form):
        total, sections = self.fetch_summary()
        ctx = self.get_context_data(form=form, **self.record_context())
        ctx["locked"] = form.locked
        ctx["summary"] = total
        ctx["sections"] = sections
        ctx["director_max"] = DIRECTOR_MARKS_MAX
        return self.render_to_response(ctx)

    def get(self, request, *args, **kwargs):
        loaded = self.fetch_part(PART_D)
        initial = {}
        if loaded and loaded.data:
            initial["marks"] = superior_mark_of(request.session_user, loaded.data)
        return self.render_form(DirectorMarksForm(initial=initial, locked=self.locked))

    def post(self, request, *args, **kwargs):
        if self.locked:
            self.locked_warning()
            return self.get(request, *args, **kwargs)

        form = DirectorMarksForm(data=request.POST)
        if not form.is_valid():
            return self.render_form(form)

        try:
            save_director_marks(
                request.backend, self.department, self.user_id, form.cleaned_data["marks"], status=self.status,
            )
        except FormLockedError:
            self.locked_warning()
            return self.get(request, *args, **kwargs)
        except BackendError:
            logger.exception("Director marks failed for %s/%s", self.department, self.user_id)
            messages.error(request, "Failed to save director marks.")
            return self.render_form(form)

        messages.success(request, "Verification completed. Director marks saved and portfolio verified.")
        return redirect("appraisal:director_faculty_forms")


# ============================================================
# External reviewers
# ============================================================

class ExternalsMixin(DirectorRequired):

    def fetch_externals(self):
        try:
            return unwrap_list(self.request.backend.list_externals(), "externals")
        except BackendError:
            messages.error(self.request, "Failed to load external reviewers")
            return []


class AssignExternalView(ExternalsMixin, FacultyListingMixin, TemplateView):
    """Faculty awaiting interaction + a reviewer picker per row."""
    listing_scope = "director/assign-external-faculty"
    template_name = "appraisal/director/assign_external.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        externals = self.fetch_externals()
        ctx["externals"] = externals
        for row in ctx["rows"]:
            row["assign_form"] = AssignExternalForm(
                externals=externals,
                initial={"external_id": str(row.get("externalId") or "")},
                prefix=f"f{row['id']}",
            )
        return ctx

    def post(self, request, *args, **kwargs):
        department = request.POST.get("department", "")
        user_id = request.POST.get("faculty_id", "")
        form = AssignExternalForm(
            data=request.POST, externals=self.fetch_externals(), prefix=f"f{user_id}",
        )
        if not (department and user_id) or not form.is_valid():
            messages.error(request, "Please select an external reviewer.")
            return redirect("appraisal:assign_external")
        try:
            request.backend.assign_external(department, user_id, form.cleaned_data["external_id"])
        except BackendError:
            logger.exception("Assigning external for %s/%s failed", department, user_id)
            messages.error(request, "Failed to assign external reviewer")
        else:
            logger.info("External %s assigned to %s/%s", form.cleaned_data["external_id"], department, user_id)
            messages.success(request, "External reviewer assigned.")
        return redirect("appraisal:assign_external")


class ExternalReviewerListView(ExternalsMixin, FormView):
    """Register new external reviewers and list / search existing ones."""
    form_class = ExternalReviewerForm
    template_name = "appraisal/director/externals.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        q = self.request.GET.get("q", "").strip().lower()
        rows = [{**row, "id": _external_id(row)} for row in self.fetch_externals()]
        if q:
            rows = [
                r for r in rows
                if any(q in (r.get(k) or "").lower() for k in ("full_name", "mail", "organization"))
            ]
        ctx["rows"] = rows
        return ctx

    def form_valid(self, form):
        try:
            self.request.backend.create_external(form.to_payload())
        except BackendError as exc:
            form.add_error(None, exc.message if exc.status_code < 500 else "Failed to add external reviewer")
            return self.form_invalid(form)
        messages.success(self.request, "External reviewer added successfully")
        return redirect("appraisal:external_reviewers")


class ExternalReviewerDeleteView(ExternalsMixin, View):
    http_method_names = ["post"]

    def post(self, request, *args, **kwargs):
        try:
            request.backend.delete_external(self.kwargs["pk"])
        except BackendError:
            messages.error(request, "Failed to delete external reviewer")
        else:
            messages.success(request, "External reviewer deleted.")
        return redirect("appraisal:external_reviewers")
