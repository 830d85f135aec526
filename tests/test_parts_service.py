"""
Unit Tests for the record gateway (appraisal.services.parts)
Tests for: lock gate before any request, payload shapes, reviewer writes
"""
import pytest

from appraisal.services.parts import (
    build_part_a_payload,
    build_part_b_claims_payload,
    build_part_d_payload,
    build_part_e_payload,
    load_part,
    load_status,
    part_d_defaults,
    save_director_marks,
    save_interaction_marks,
    save_part,
    save_superior_marks,
    submit_verification,
    verified_of,
)
from appraisal.services.status import FormLockedError
from base.roles import Role
from base.services.backend import BackendError

from conftest import FakeBackend, part_d_record


@pytest.fixture
def fake():
    return FakeBackend()


@pytest.fixture
def client(fake):
    return fake.client("t")


class TestReads:

    def test_missing_part_is_first_time(self, fake, client):
        loaded = load_part(client, "CSE", "u1", "A")
        assert loaded.data == {}
        assert loaded.is_first_time is True

    def test_saved_part(self, fake, client):
        fake.on("GET", "/CSE/u1/A", {"A": {"resultAnalysis": 20}})
        loaded = load_part(client, "CSE", "u1", "A")
        assert loaded.data == {"resultAnalysis": 20}
        assert loaded.is_first_time is False

    def test_data_envelope(self, fake, client):
        fake.on("GET", "/CSE/u1/E", {"data": {"total_marks": 10}})
        assert load_part(client, "CSE", "u1", "E").data == {"total_marks": 10}

    def test_server_error_propagates(self, fake, client):
        fake.on("GET", "/CSE/u1/A", status=500)
        with pytest.raises(BackendError):
            load_part(client, "CSE", "u1", "A")

    def test_status(self, fake, client):
        fake.on("GET", "/CSE/u1/get-status", {"status": "submitted"})
        assert load_status(client, "CSE", "u1") == "submitted"
        fake.on("GET", "/CSE/u1/get-status", {})
        assert load_status(client, "CSE", "u1") == "pending"

    def test_verified_counts_flat(self):
        part = {"claimed": {"sci": 3}, "proofs": {}, "sci": 2, "scopus": 0}
        assert verified_of(part) == {"sci": 2, "scopus": 0}

    def test_verified_counts_nested(self):
        assert verified_of({"claimed": {"sci": 3}, "verified": {"sci": 1}}) == {"sci": 1}
        assert verified_of({"claimed": {"sci": 3}}) == {}


class TestLockGate:

    @pytest.mark.parametrize("status", ["submitted", "done", "garbage", None])
    def test_locked_save_sends_nothing(self, fake, client, status):
        """Test a locked record never produces a backend request"""
        with pytest.raises(FormLockedError):
            save_part(client, "CSE", "u1", "A", {"resultAnalysis": 1}, status=status, is_first_time=False)
        assert fake.calls == []

    def test_locked_reviewer_writes_send_nothing(self, fake, client):
        with pytest.raises(FormLockedError):
            submit_verification(client, "CSE", "u1", {"sci": 1}, status="pending")
        with pytest.raises(FormLockedError):
            save_superior_marks(client, "CSE", "u1", Role.HOD, 30, status="pending", record=part_d_record())
        with pytest.raises(FormLockedError):
            save_director_marks(client, "CSE", "u1", 30, status="submitted")
        with pytest.raises(FormLockedError):
            save_interaction_marks(client, "CSE", "u1", {}, status="SentToDirector")
        assert fake.calls == []

    def test_open_save_posts_part_and_flag(self, fake, client):
        fake.on("POST", "/CSE/u1/E", {"ok": True})
        save_part(client, "CSE", "u1", "E", {"total_marks": 10}, status="pending", is_first_time=True)
        assert fake.last("POST", "/CSE/u1/E")["json"] == {"E": {"total_marks": 10}, "isFirstTime": True}


class TestPayloads:

    def test_part_a_payload(self):
        payload = build_part_a_payload({"resultAnalysis": "60", "teachingLoad": 20.5}, "Assistant Professor")
        assert payload["resultAnalysis"] == 50
        assert payload["teachingLoad"] == 20.5
        assert payload["courseOutcome"] == 0
        assert payload["rawSum"] == 70.5
        assert payload["factor"] == 1.0
        assert payload["maxScore"] == 440
        assert payload["finalScore"] == 71

    def test_part_b_claims_payload(self):
        payload = build_part_b_claims_payload({"sci": 3, "scopus": "-1"}, {"sci": " https://x.org/p.pdf ", "esci": ""})
        assert payload["claimed"]["sci"] == 3
        assert payload["claimed"]["scopus"] == 0
        assert payload["proofs"] == {"sci": "https://x.org/p.pdf"}

    def test_part_d_defaults_admin_track(self):
        assert part_d_defaults("Professor")["isAdministrativeRole"] is False
        admin = part_d_defaults("Associate_Dean")
        assert admin["isAdministrativeRole"] is True
        assert admin["administrativeRole"] == "associate_dean"

    def test_part_d_payload_sets_marks(self):
        record = part_d_record(portfolioType="department", selfAwardedMarks=50, hodMarks=40)
        payload = build_part_d_payload(record, "inst", "dept")
        assert payload["marks"] == 90
        assert payload["instituteLevelPortfolio"] == "inst"
        assert payload["departmentLevelPortfolio"] == "dept"

    def test_part_e_payload(self):
        assert build_part_e_payload(80, "- mentoring") == {"total_marks": 50, "bullet_points": "- mentoring"}


class TestReviewerWrites:

    def test_verification_posts_flat_mapping(self, fake, client):
        fake.on("POST", "/CSE/u1/B", {"ok": True})
        submit_verification(client, "CSE", "u1", {"sci": "2", "scopus": ""}, status="verification_pending")
        body = fake.last("POST", "/CSE/u1/B")["json"]
        assert body["sci"] == 2
        assert body["scopus"] == 0
        assert "claimed" not in body

    def test_hod_marks(self, fake, client):
        fake.on("POST", "/CSE/u1/D", {"ok": True})
        record = part_d_record(portfolioType="department", selfAwardedMarks=50)
        save_superior_marks(client, "CSE", "u1", Role.HOD, 75, status="submitted", record=record)
        body = fake.last("POST", "/CSE/u1/D")["json"]
        assert body["isFirstTime"] is False
        assert body["D"]["hodMarks"] == 60
        assert body["D"]["isMarkHOD"] is True
        assert body["D"]["marks"] == 110

    def test_dean_marks_associate_dean_record(self, fake, client):
        fake.on("POST", "/CSE/u1/D", {"ok": True})
        record = part_d_record(isAdministrativeRole=True, administrativeRole="associate_dean", adminSelfAwardedMarks=30)
        save_superior_marks(client, "CSE", "u1", Role.DEAN, 25, status="submitted", record=record)
        body = fake.last("POST", "/CSE/u1/D")["json"]["D"]
        assert body["adminDeanMarks"] == 25
        assert body["deanMarks"] == 0
        assert body["marks"] == 55

    def test_superior_marks_loads_record_when_missing(self, fake, client):
        fake.on("GET", "/CSE/u1/D", {"D": part_d_record(portfolioType="institute", selfAwardedMarks=10)})
        fake.on("POST", "/CSE/u1/D", {"ok": True})
        data = save_superior_marks(client, "CSE", "u1", Role.DEAN, 20, status="submitted")
        assert data["deanMarks"] == 20
        assert data["marks"] == 30

    def test_other_roles_cannot_award_portfolio_marks(self, fake, client):
        with pytest.raises(ValueError):
            save_superior_marks(client, "CSE", "u1", Role.FACULTY, 20, status="submitted", record=part_d_record())
        assert fake.writes() == []

    def test_director_marks_two_posts(self, fake, client):
        """Test director marks are saved and then flagged as given"""
        fake.on("POST", "/CSE/u1/D", {"ok": True})
        fake.on("POST", "/CSE/u1/director-mark-given", {"ok": True})
        record = part_d_record(isAdministrativeRole=True, administrativeRole="hod", adminSelfAwardedMarks=35)
        save_director_marks(client, "CSE", "u1", "45", status="SentToDirector", record=record)
        assert [c["path"] for c in fake.writes()] == ["/CSE/u1/D", "/CSE/u1/director-mark-given"]
        body = fake.last("POST", "/CSE/u1/D")["json"]
        assert body["isFirstTime"] is False
        assert body["D"]["directorMarks"] == 45
        assert body["D"]["marks"] == 80

    def test_director_marks_keep_the_rest_of_the_record(self, fake, client):
        fake.on("GET", "/CSE/u1/D", {"D": part_d_record(portfolioType="department", selfAwardedMarks=40, hodMarks=50)})
        fake.on("POST", "/CSE/u1/D", {"ok": True})
        fake.on("POST", "/CSE/u1/director-mark-given", {"ok": True})
        data = save_director_marks(client, "CSE", "u1", 30, status="SentToDirector")
        sent = fake.last("POST", "/CSE/u1/D")["json"]
        assert sent["isFirstTime"] is False
        assert sent["D"] == data
        assert data["selfAwardedMarks"] == 40
        assert data["hodMarks"] == 50
        assert data["departmentLevelPortfolio"] == "Department work"
        assert data["directorMarks"] == 30
        assert data["marks"] == 90

    def test_director_marks_on_missing_record(self, fake, client):
        fake.on("POST", "/CSE/u1/D", {"ok": True})
        fake.on("POST", "/CSE/u1/director-mark-given", {"ok": True})
        save_director_marks(client, "CSE", "u1", 20, status="SentToDirector")
        assert fake.last("POST", "/CSE/u1/D")["json"]["isFirstTime"] is True

    def test_director_marks_out_of_range(self, fake, client):
        with pytest.raises(ValueError):
            save_director_marks(client, "CSE", "u1", 61, status="SentToDirector")
        assert fake.calls == []

    def test_interaction_marks(self, fake, client):
        fake.on("POST", "/CSE/external_interaction_marks/u1", {"ok": True})
        scores = {"knowledge": 18, "skills": 25, "attributes": 8, "outcomesInitiatives": 15,
                  "selfBranching": 7, "teamPerformance": 19}
        payload = save_interaction_marks(
            client, "CSE", "u1", scores, "Good", status="interaction_pending", college=False,
        )
        assert payload["skills"] == 20
        assert payload["total"] == 87
        assert fake.last("POST", "/CSE/external_interaction_marks/u1")["json"]["comments"] == "Good"

    def test_interaction_marks_require_every_criterion(self, fake, client):
        with pytest.raises(ValueError, match="Please fill in all criteria."):
            save_interaction_marks(client, "CSE", "u1", {"knowledge": 10}, status="interaction_pending")
        assert fake.calls == []
