# -*- coding: utf-8 -*-
# appraisal/views/review.py
# رئيس القسم / العميد: درجة المشرف على الجزء D، والعميد المساعد: قائمة التسليمات
import logging

from django.contrib import messages
from django.core.exceptions import PermissionDenied
from django.shortcuts import redirect
from django.views.generic import TemplateView

from base.roles import Role
from base.services.backend import BackendError

from ..access import ASSOCIATE_DEAN_ROLES, REVIEW_ROLES, can_mark_portfolio, superior_mark_of
from ..constants import PART_D
from ..forms import PortfolioMarksForm
from ..services.parts import save_superior_marks
from ..services.scoring import part_d_score_from_record
from ..services.status import FormLockedError, OPEN_FOR_SUPERIOR
from .mixins import FacultyListingMixin, RecordMixin

logger = logging.getLogger(__name__)

REVIEW_SCOPES = {
    Role.HOD: "hod/faculty",
    Role.DEAN: "dean/faculty",
}

SUBMISSION_STATUSES = (
    ("pending", "Pending"),
    ("submitted", "Submitted"),
    ("reviewed", "Reviewed"),
)


class ReviewListView(FacultyListingMixin, TemplateView):
    allowed_roles = REVIEW_ROLES
    template_name = "appraisal/review/list.html"

    def get_listing_scope(self):
        return REVIEW_SCOPES[self.request.session_user.role]


class PortfolioMarksView(RecordMixin, TemplateView):
    """HOD / Dean superior mark on a submitted Part D."""
    allowed_roles = REVIEW_ROLES
    open_status = OPEN_FOR_SUPERIOR
    template_name = "appraisal/review/portfolio_marks.html"

    def render_form(self, form, record, can_mark):
        ctx = self.get_context_data(form=form, **self.record_context())
        ctx["locked"] = form.locked
        ctx["can_mark"] = can_mark
        ctx["record"] = record
        ctx["score"] = part_d_score_from_record(record) if record else None
        return self.render_to_response(ctx)

    def load(self):
        loaded = self.fetch_part(PART_D)
        record = loaded.data if loaded else {}
        can_mark = bool(record) and can_mark_portfolio(self.request.session_user, record, self.department)
        return loaded, record, can_mark

    def get(self, request, *args, **kwargs):
        loaded, record, can_mark = self.load()
        form = PortfolioMarksForm(
            initial={"marks": superior_mark_of(request.session_user, record)},
            locked=self.locked or not can_mark,
        )
        return self.render_form(form, record, can_mark)

    def post(self, request, *args, **kwargs):
        if self.locked:
            self.locked_warning()
            return self.get(request, *args, **kwargs)

        loaded, record, can_mark = self.load()
        if loaded is None:
            return self.get(request, *args, **kwargs)
        if not can_mark:
            raise PermissionDenied("You cannot mark this portfolio.")

        form = PortfolioMarksForm(data=request.POST)
        if not form.is_valid():
            return self.render_form(form, record, can_mark)

        try:
            save_superior_marks(
                request.backend, self.department, self.user_id,
                request.session_user.role, form.cleaned_data["marks"],
                status=self.status, record=record,
            )
        except FormLockedError:
            self.locked_warning()
            return self.get(request, *args, **kwargs)
        except BackendError:
            logger.exception("Saving portfolio marks failed for %s/%s", self.department, self.user_id)
            messages.error(request, "Failed to save")
            return self.render_form(form, record, can_mark)

        messages.success(request, "Portfolio marks saved.")
        return redirect("appraisal:review_list")


class AssociateDeanReviewView(FacultyListingMixin, TemplateView):
    allowed_roles = ASSOCIATE_DEAN_ROLES
    listing_scope = "associate-dean/submissions"
    listing_error = "Failed to load submissions"
    template_name = "appraisal/review/associate_dean.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        for row in ctx["all_rows"]:
            row["total_marks"] = row.get("totalMarks")
            row["submitted_at"] = row.get("submittedAt") or ""
        ctx["statuses"] = SUBMISSION_STATUSES
        return ctx
