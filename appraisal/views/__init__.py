from .faculty import FacultyDashboardView, PartAView, PartBView, PartDView, PartEView
from .verification import VerificationDashboardView, VerificationFormView
from .review import ReviewListView, PortfolioMarksView, AssociateDeanReviewView
from .director import (
    DirectorDashboardView,
    DirectorFacultyFormsView,
    DirectorVerifyView,
    AssignExternalView,
    ExternalReviewerListView,
    ExternalReviewerDeleteView,
)
from .external import (
    ExternalDashboardView,
    CollegeExternalDashboardView,
    InteractionEvaluationView,
    CollegeInteractionEvaluationView,
)

__all__ = [
    "FacultyDashboardView", "PartAView", "PartBView", "PartDView", "PartEView",
    "VerificationDashboardView", "VerificationFormView",
    "ReviewListView", "PortfolioMarksView", "AssociateDeanReviewView",
    "DirectorDashboardView", "DirectorFacultyFormsView", "DirectorVerifyView",
    "AssignExternalView", "ExternalReviewerListView", "ExternalReviewerDeleteView",
    "ExternalDashboardView", "CollegeExternalDashboardView",
    "InteractionEvaluationView", "CollegeInteractionEvaluationView",
]
