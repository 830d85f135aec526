# appraisal/urls.py
from django.urls import path
from . import views

app_name = "appraisal"

urlpatterns = [
    # --------------------------------------------------------
    # Faculty self appraisal
    # --------------------------------------------------------
    path("me/", views.FacultyDashboardView.as_view(), name="faculty_dashboard"),
    path("me/part-a/", views.PartAView.as_view(), name="part_a"),
    path("me/part-b/", views.PartBView.as_view(), name="part_b"),
    path("me/part-d/", views.PartDView.as_view(), name="part_d"),
    path("me/part-e/", views.PartEView.as_view(), name="part_e"),

    # --------------------------------------------------------
    # Verification team (Part B)
    # --------------------------------------------------------
    path("verification/", views.VerificationDashboardView.as_view(), name="verification_dashboard"),
    path(
        "verification/<str:department>/<str:user_id>/",
        views.VerificationFormView.as_view(),
        name="verification_form",
    ),

    # --------------------------------------------------------
    # HOD / Dean / Associate dean
    # --------------------------------------------------------
    path("review/", views.ReviewListView.as_view(), name="review_list"),
    path(
        "review/<str:department>/<str:user_id>/portfolio/",
        views.PortfolioMarksView.as_view(),
        name="portfolio_marks",
    ),
    path("associate-dean/", views.AssociateDeanReviewView.as_view(), name="associate_dean_review"),

    # --------------------------------------------------------
    # Director
    # --------------------------------------------------------
    path("director/", views.DirectorDashboardView.as_view(), name="director_dashboard"),
    path("director/faculty-forms/", views.DirectorFacultyFormsView.as_view(), name="director_faculty_forms"),
    path(
        "director/verify/<str:department>/<str:user_id>/",
        views.DirectorVerifyView.as_view(),
        name="director_verify",
    ),
    path("director/assign-external/", views.AssignExternalView.as_view(), name="assign_external"),
    path("director/externals/", views.ExternalReviewerListView.as_view(), name="external_reviewers"),
    path(
        "director/externals/<str:pk>/delete/",
        views.ExternalReviewerDeleteView.as_view(),
        name="external_reviewer_delete",
    ),

    # --------------------------------------------------------
    # External reviewers
    # --------------------------------------------------------
    path("external/", views.ExternalDashboardView.as_view(), name="external_dashboard"),
    path(
        "external/evaluate/<str:department>/<str:user_id>/",
        views.InteractionEvaluationView.as_view(),
        name="interaction_evaluate",
    ),
    path("college-external/", views.CollegeExternalDashboardView.as_view(), name="college_external_dashboard"),
    path(
        "college-external/evaluate/<str:department>/<str:user_id>/",
        views.CollegeInteractionEvaluationView.as_view(),
        name="college_interaction_evaluate",
    ),
]
