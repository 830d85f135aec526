# appraisal/forms/__init__.py

from .base import AppraisalFormMixin, LockableFormMixin, ScoreField, CountField
from .part_forms import PartAForm, PartBClaimsForm, PartDForm, PartEForm
from .review_forms import (
    VerificationForm,
    PortfolioMarksForm,
    DirectorMarksForm,
    InteractionEvaluationForm,
)
from .external_forms import ExternalReviewerForm, AssignExternalForm

__all__ = [
    "AppraisalFormMixin", "LockableFormMixin", "ScoreField", "CountField",
    "PartAForm", "PartBClaimsForm", "PartDForm", "PartEForm",
    "VerificationForm", "PortfolioMarksForm", "DirectorMarksForm", "InteractionEvaluationForm",
    "ExternalReviewerForm", "AssignExternalForm",
]
