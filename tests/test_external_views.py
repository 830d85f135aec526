"""
Integration Tests for external and college-external interaction evaluation
"""
from django.urls import reverse

from appraisal.services.drafts import DRAFTS_SESSION_KEY
from base.roles import Role

from conftest import faculty_rows, messages_of

FULL_MARKS = {
    "knowledge": "18", "skills": "17", "attributes": "9",
    "outcomesInitiatives": "16", "selfBranching": "8", "teamPerformance": "19",
}


def _record(backend, status="interaction_pending"):
    backend.on("GET", "/CSE/f1/get-status", {"status": status})


class TestDashboards:

    def test_external_listing(self, client, backend, login):
        login(Role.EXTERNAL)
        backend.on("GET", "/external/faculty", faculty_rows()[:1])
        response = client.get(reverse("appraisal:external_dashboard"))
        assert response.context["college"] is False
        assert reverse("appraisal:interaction_evaluate", args=["CSE", "f1"]).encode() in response.content

    def test_college_external_listing(self, client, backend, login):
        login(Role.COLLEGE_EXTERNAL)
        backend.on("GET", "/college-external/faculty", faculty_rows()[:1])
        response = client.get(reverse("appraisal:college_external_dashboard"))
        assert response.context["college"] is True
        assert reverse("appraisal:college_interaction_evaluate", args=["CSE", "f1"]).encode() in response.content

    def test_roles_do_not_cross(self, client, login):
        login(Role.EXTERNAL)
        assert client.get(reverse("appraisal:college_external_dashboard")).status_code == 403


class TestEvaluation:

    def _url(self, college=False):
        name = "appraisal:college_interaction_evaluate" if college else "appraisal:interaction_evaluate"
        return reverse(name, args=["CSE", "f1"])

    def test_submit(self, client, backend, login):
        login(Role.EXTERNAL)
        _record(backend)
        backend.on("POST", "/CSE/external_interaction_marks/f1", {"ok": True})
        response = client.post(self._url(), {"action": "submit", "comments": "Strong lab work", **FULL_MARKS})
        assert response["Location"] == reverse("appraisal:external_dashboard")
        sent = backend.last("POST", "/CSE/external_interaction_marks/f1")["json"]
        assert sent["total"] == 87
        assert sent["knowledge"] == 18
        assert sent["comments"] == "Strong lab work"

    def test_college_submit_uses_college_endpoint(self, client, backend, login):
        login(Role.COLLEGE_EXTERNAL)
        _record(backend)
        backend.on("POST", "/CSE/college_external_interaction_marks/f1", {"ok": True})
        response = client.post(self._url(college=True), {"action": "submit", **FULL_MARKS}, follow=True)
        assert backend.requests("POST", "/CSE/college_external_interaction_marks/f1")
        assert "Evaluation submitted" in messages_of(response)

    def test_scores_clamped_to_criterion_max(self, client, backend, login):
        login(Role.EXTERNAL)
        _record(backend)
        backend.on("POST", "/CSE/external_interaction_marks/f1", {"ok": True})
        client.post(self._url(), {"action": "submit", **FULL_MARKS, "attributes": "25"})
        assert backend.last("POST", "/CSE/external_interaction_marks/f1")["json"]["attributes"] == 10

    def test_every_criterion_required(self, client, backend, login):
        login(Role.EXTERNAL)
        _record(backend)
        marks = {**FULL_MARKS, "teamPerformance": ""}
        response = client.post(self._url(), {"action": "submit", **marks})
        assert response.status_code == 200
        assert b"Please fill in all criteria." in response.content
        assert backend.writes() == []

    def test_save_progress(self, client, backend, login):
        login(Role.EXTERNAL)
        _record(backend)
        client.post(self._url(), {"action": "save", "knowledge": "12", "comments": "halfway"})
        assert backend.writes() == []
        draft = client.session[DRAFTS_SESSION_KEY]["interaction:external:CSE:f1"]
        assert draft == {"knowledge": "12", "comments": "halfway"}
        page = client.get(self._url())
        assert page.context["form"]["knowledge"].value() == "12"
        assert page.context["total"] == 12

    def test_locked_after_interaction(self, client, backend, login):
        login(Role.EXTERNAL)
        _record(backend, status="done")
        response = client.post(self._url(), {"action": "submit", **FULL_MARKS})
        assert backend.writes() == []
        assert "Form locked (status: Done)" in messages_of(response)
        assert response.context["form"].locked

    def test_backend_failure(self, client, backend, login):
        login(Role.EXTERNAL)
        _record(backend)
        backend.on("POST", "/CSE/external_interaction_marks/f1", status=500)
        response = client.post(self._url(), {"action": "submit", **FULL_MARKS})
        assert response.status_code == 200
        assert "Failed to save." in messages_of(response)
