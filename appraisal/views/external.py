# -*- coding: utf-8 -*-
# appraisal/views/external.py
# المقيّم الخارجي / مقيّم الكلية الخارجي: تقييم المقابلة
import logging

from django.contrib import messages
from django.shortcuts import redirect
from django.views.generic import TemplateView

from base.services.backend import BackendError

from ..access import COLLEGE_EXTERNAL_ROLES, EXTERNAL_ROLES
from ..constants import INTERACTION_CRITERIA
from ..forms import InteractionEvaluationForm
from ..services import drafts
from ..services.parts import save_interaction_marks
from ..services.scoring import interaction_total
from ..services.status import FormLockedError, OPEN_FOR_EXTERNAL
from .mixins import FacultyListingMixin, RecordMixin

logger = logging.getLogger(__name__)

INTERACTION_MAX_TOTAL = sum(mx for _, _, mx, _ in INTERACTION_CRITERIA)


class ExternalDashboardView(FacultyListingMixin, TemplateView):
    allowed_roles = EXTERNAL_ROLES
    listing_scope = "external/faculty"
    template_name = "appraisal/external/dashboard.html"
    evaluate_url_name = "appraisal:interaction_evaluate"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx["evaluate_url_name"] = self.evaluate_url_name
        ctx["college"] = False
        return ctx


class CollegeExternalDashboardView(ExternalDashboardView):
    allowed_roles = COLLEGE_EXTERNAL_ROLES
    listing_scope = "college-external/faculty"
    evaluate_url_name = "appraisal:college_interaction_evaluate"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx["college"] = True
        return ctx


class InteractionEvaluationView(RecordMixin, TemplateView):
    """
    Six criteria out of 100.
    - action=save   → draft in the session
    - action=submit → every criterion required, marks POSTed to the backend
    """
    allowed_roles = EXTERNAL_ROLES
    open_status = OPEN_FOR_EXTERNAL
    college = False
    dashboard_url_name = "appraisal:external_dashboard"
    template_name = "appraisal/external/evaluate.html"

    @property
    def draft_kind(self):
        return f"{drafts.INTERACTION}:{'college' if self.college else 'external'}"

    def make_form(self, data=None, submitting=False):
        initial = drafts.get_draft(self.request.session, self.draft_kind, self.department, self.user_id) or {}
        return InteractionEvaluationForm(data=data, initial=initial, submitting=submitting, locked=self.locked)

    def render_form(self, form):
        values = {bf.name: bf.value() for bf, _ in form.criteria()}
        ctx = self.get_context_data(form=form, **self.record_context())
        ctx["college"] = self.college
        ctx["dashboard_url_name"] = self.dashboard_url_name
        ctx["total"] = interaction_total(values)
        ctx["max_total"] = INTERACTION_MAX_TOTAL
        return self.render_to_response(ctx)

    def get(self, request, *args, **kwargs):
        return self.render_form(self.make_form())

    def post(self, request, *args, **kwargs):
        if self.locked:
            self.locked_warning()
            return self.get(request, *args, **kwargs)

        submitting = request.POST.get("action") == "submit"
        form = self.make_form(data=request.POST, submitting=submitting)

        if not submitting:
            drafts.save_draft(request.session, self.draft_kind, self.department, self.user_id, form.raw_values())
            messages.success(request, "Progress saved")
            return redirect(request.path)

        if not form.is_valid():
            return self.render_form(form)

        try:
            save_interaction_marks(
                request.backend, self.department, self.user_id,
                form.scores(), form.cleaned_data.get("comments", ""),
                status=self.status, college=self.college,
            )
        except FormLockedError:
            self.locked_warning()
            return self.get(request, *args, **kwargs)
        except BackendError:
            logger.exception("Interaction marks failed for %s/%s", self.department, self.user_id)
            messages.error(request, "Failed to save.")
            return self.render_form(form)

        drafts.clear_draft(request.session, self.draft_kind, self.department, self.user_id)
        messages.success(request, "Evaluation submitted")
        return redirect(self.dashboard_url_name)


class CollegeInteractionEvaluationView(InteractionEvaluationView):
    allowed_roles = COLLEGE_EXTERNAL_ROLES
    college = True
    dashboard_url_name = "appraisal:college_external_dashboard"
