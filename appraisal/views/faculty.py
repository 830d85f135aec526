# -*- coding: utf-8 -*-
# appraisal/views/faculty.py
# عضو هيئة التدريس: لوحة التقييم الذاتي والأجزاء A, B, D, E
import logging

from django.contrib import messages
from django.core.exceptions import PermissionDenied
from django.shortcuts import redirect
from django.urls import reverse
from django.views.generic import TemplateView

from base.services.backend import BackendError

from ..access import SELF_APPRAISAL_ROLES, can_edit_self_part
from ..constants import PART_A, PART_B, PART_D, PART_E, PART_TITLES, PARTS
from ..forms import PartAForm, PartBClaimsForm, PartDForm, PartEForm
from ..services.parts import (
    build_part_a_payload,
    build_part_b_claims_payload,
    build_part_d_payload,
    build_part_e_payload,
    is_administrative,
    part_d_defaults,
    save_part,
    verified_of,
)
from ..services.scoring import (
    completion_percent,
    non_negative_int,
    part_a_score,
    part_d_score_from_record,
    section_totals,
)
from ..services.status import FormLockedError, OPEN_FOR_FACULTY
from .mixins import RecordMixin

logger = logging.getLogger(__name__)

PART_URL_NAMES = {
    PART_A: "appraisal:part_a",
    PART_B: "appraisal:part_b",
    PART_D: "appraisal:part_d",
    PART_E: "appraisal:part_e",
}


class SelfRecordMixin(RecordMixin):
    """The logged-in person's own record."""
    allowed_roles = SELF_APPRAISAL_ROLES
    open_status = OPEN_FOR_FACULTY

    @property
    def department(self) -> str:
        return self.request.session_user.department

    @property
    def user_id(self) -> str:
        return self.request.session_user.id


# ============================================================
# Dashboard
# ============================================================

def part_summary(part, data):
    """Headline score of one saved part (None when not saved yet)."""
    if not data:
        return None
    if part == PART_A:
        return data.get("finalScore")
    if part == PART_B:
        claimed = data.get("claimed") or {}
        return sum(non_negative_int(v) for v in claimed.values())
    if part == PART_D:
        return part_d_score_from_record(data).total
    if part == PART_E:
        return data.get("total_marks")
    return None


class FacultyDashboardView(SelfRecordMixin, TemplateView):
    template_name = "appraisal/faculty/dashboard.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        parts = []
        for part in PARTS:
            loaded = self.fetch_part(part)
            data = loaded.data if loaded else {}
            parts.append({
                "letter": part,
                "title": PART_TITLES[part],
                "url": reverse(PART_URL_NAMES[part]),
                "saved": bool(data),
                "score": part_summary(part, data),
            })
        ctx.update(self.record_context())
        ctx["parts"] = parts
        ctx["progress"] = completion_percent(p["saved"] for p in parts)
        return ctx


# ============================================================
# Parts
# ============================================================

class SelfPartView(SelfRecordMixin, TemplateView):
    """
    GET: load the part + status, render (disabled when locked).
    POST: status gate first; a locked record never reaches save_part.
    """
    part = None
    form_class = None
    needs_record = False

    def get_initial(self, data):
        return self.form_class.initial_from(data)

    def get_form_kwargs(self, loaded):
        return {}

    def make_form(self, loaded, data=None, locked=False):
        initial = {}
        if loaded is not None:
            initial = self.get_initial(loaded.data)
            initial["is_first_time"] = loaded.is_first_time
        return self.form_class(data=data, initial=initial, locked=locked, **self.get_form_kwargs(loaded))

    def build_payload(self, form, loaded):
        raise NotImplementedError

    def part_context(self, form, loaded):
        return {}

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        form, loaded = kwargs["form"], kwargs.get("loaded")
        ctx.update(self.record_context())
        ctx["locked"] = form.locked
        ctx["part"] = self.part
        ctx["part_title"] = PART_TITLES[self.part]
        ctx["progress"] = form.progress() if hasattr(form, "progress") else None
        ctx.update(self.part_context(form, loaded))
        return ctx

    def render_form(self, form, loaded):
        return self.render_to_response(self.get_context_data(form=form, loaded=loaded))

    def get(self, request, *args, **kwargs):
        loaded = self.fetch_part(self.part)
        form = self.make_form(loaded, locked=self.locked or loaded is None)
        return self.render_form(form, loaded)

    def post(self, request, *args, **kwargs):
        if not can_edit_self_part(request.session_user, self.department, self.user_id):
            raise PermissionDenied("Only the owner can edit this part.")

        if self.locked:
            logger.info("Blocked save of part %s for %s: status %s", self.part, self.user_id, self.status)
            self.locked_warning()
            return self.get(request, *args, **kwargs)

        loaded = None
        if self.needs_record:
            loaded = self.fetch_part(self.part)
            if loaded is None:
                return self.get(request, *args, **kwargs)

        form = self.make_form(loaded, data=request.POST)
        if not form.is_valid():
            return self.render_form(form, loaded)

        try:
            save_part(
                request.backend, self.department, self.user_id, self.part,
                self.build_payload(form, loaded),
                status=self.status,
                is_first_time=form.cleaned_data.get("is_first_time", False),
            )
        except FormLockedError:
            self.locked_warning()
            return self.get(request, *args, **kwargs)
        except BackendError:
            logger.exception("Saving part %s failed for %s/%s", self.part, self.department, self.user_id)
            messages.error(request, "Failed to save")
            return self.render_form(form, loaded)

        messages.success(request, f"Part {self.part} saved successfully.")
        return redirect(request.path)


class PartAView(SelfPartView):
    part = PART_A
    form_class = PartAForm
    template_name = "appraisal/faculty/part_a.html"

    def build_payload(self, form, loaded):
        return build_part_a_payload(form.subscores(), self.request.session_user.designation)

    def part_context(self, form, loaded):
        values = {bf.name: bf.value() for bf, _ in form.score_fields()}
        return {"score": part_a_score(values, self.request.session_user.designation)}


class PartBView(SelfPartView):
    part = PART_B
    form_class = PartBClaimsForm
    template_name = "appraisal/faculty/part_b.html"

    def build_payload(self, form, loaded):
        return build_part_b_claims_payload(form.claimed(), form.proofs())

    def part_context(self, form, loaded):
        data = loaded.data if loaded else {}
        verified = verified_of(data)
        sections = form.sections()
        totals = section_totals(data.get("claimed") or {}, verified)
        for section, total in zip(sections, totals):
            section["total"] = total
            for item in section["items"]:
                item["verified"] = verified.get(item["key"])
        return {"sections": sections, "totals": totals}


class PartDView(SelfPartView):
    part = PART_D
    form_class = PartDForm
    template_name = "appraisal/faculty/part_d.html"
    needs_record = True

    def record_of(self, loaded):
        defaults = part_d_defaults(self.request.session_user.designation)
        return {**defaults, **(loaded.data if loaded else {})}

    def get_initial(self, data):
        return PartDForm.initial_from({**part_d_defaults(self.request.session_user.designation), **data})

    def get_form_kwargs(self, loaded):
        if loaded is not None:
            return {"is_admin": bool(self.record_of(loaded).get("isAdministrativeRole"))}
        return {"is_admin": is_administrative(self.request.session_user.designation)}

    def build_payload(self, form, loaded):
        record = form.apply_to(self.record_of(loaded))
        return build_part_d_payload(
            record,
            form.cleaned_data.get("institute_portfolio", ""),
            form.cleaned_data.get("department_portfolio", ""),
        )

    def part_context(self, form, loaded):
        record = self.record_of(loaded)
        if form.is_bound and not form.locked:
            # معاينة بقيم المستخدم الحالية
            record = {**record, "portfolioType": form["portfolio_type"].value() or record.get("portfolioType")}
            key = "adminSelfAwardedMarks" if record.get("isAdministrativeRole") else "selfAwardedMarks"
            record[key] = form["self_marks"].value()
        return {"record": record, "score": part_d_score_from_record(record)}


class PartEView(SelfPartView):
    part = PART_E
    form_class = PartEForm
    template_name = "appraisal/faculty/part_e.html"

    def build_payload(self, form, loaded):
        return build_part_e_payload(form.cleaned_data["total_marks"], form.cleaned_data["bullet_points"])
