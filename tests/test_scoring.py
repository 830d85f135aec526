"""
Unit Tests for appraisal scoring
Tests for: Part A role factors, Part D superior rules, Part E cap, Part B payloads,
interaction totals, director marks, progress & dashboard counts
"""
import logging

import pytest

from appraisal.constants import INTERACTION_CRITERIA, PART_A_FIELDS, PART_B_KEYS
from appraisal.services.scoring import (
    clamp,
    completion_percent,
    interaction_total,
    parse_int,
    part_a_score,
    part_d_score,
    part_d_score_from_record,
    part_e_score,
    section_totals,
    status_counts,
    to_number,
    validate_director_marks,
    verified_payload,
)


class TestPartA:
    """Part A: min(roleMax, rawSum × factor), rounded half up"""

    def test_professor_full_marks_capped_by_factor(self):
        """Test Professor final scores at 440 and 390 raw marks"""
        subscores = {key: mx for key, _, mx in PART_A_FIELDS}
        score = part_a_score(subscores, "Professor")
        assert score.raw_sum == 440
        assert score.factor == 0.68
        assert score.max_score == 300
        assert score.final_score == 299

        subscores["studentFeedback"] = 50
        assert part_a_score(subscores, "Professor").final_score == 265

    def test_assistant_professor_uses_factor_one(self):
        """Test Assistant Professor keeps the raw sum"""
        score = part_a_score({"resultAnalysis": 50, "teachingLoad": 30}, "Assistant Professor")
        assert score.final_score == 80
        assert score.max_score == 440

    def test_subscores_are_clamped(self):
        """Test sub-scores above their max or below zero are clamped"""
        score = part_a_score({"resultAnalysis": 999, "projectsGuided": -10}, "Assistant Professor")
        assert score.raw_sum == 50

    def test_half_rounds_up(self):
        """Test x.5 rounds up, never to even"""
        assert part_a_score({"resultAnalysis": 50}, "Associate Professor").final_score == 40

    def test_score_is_monotonic(self):
        """Test raising a sub-score never lowers the final score"""
        previous = -1
        for value in range(0, 51, 5):
            current = part_a_score({"resultAnalysis": value}, "Professor").final_score
            assert current >= previous
            previous = current

    def test_unknown_designation_falls_back_and_logs(self, caplog):
        """Test unknown designation uses the default factor with a warning"""
        with caplog.at_level(logging.WARNING, logger="appraisal.services.scoring"):
            score = part_a_score({"resultAnalysis": 10}, "Visiting Fellow")
        assert (score.factor, score.max_score) == (1.0, 440)
        assert "Visiting Fellow" in caplog.text


class TestPartD:
    """Part D: total = min(120, self + superior)"""

    def test_both_averages_hod_and_dean(self):
        """Test "both" uses the average of HOD and Dean"""
        score = part_d_score(self_marks=40, portfolio_type="both", hod_marks=50, dean_marks=30)
        assert score.superior == 40
        assert score.total == 80

    def test_institute_uses_dean(self):
        """Test "institute" takes the Dean mark only"""
        score = part_d_score(self_marks=10, portfolio_type="institute", hod_marks=60, dean_marks=20)
        assert score.total == 30

    def test_department_uses_hod(self):
        """Test "department" takes the HOD mark only"""
        score = part_d_score(self_marks=10, portfolio_type="department", hod_marks=25, dean_marks=60)
        assert score.total == 35

    def test_maximum_is_120(self):
        """Test 60 + 60 reaches the 120 ceiling and never more"""
        assert part_d_score(self_marks=60, portfolio_type="department", hod_marks=60).total == 120
        assert part_d_score(self_marks=90, portfolio_type="department", hod_marks=90).total == 120

    def test_admin_track_uses_director_marks(self):
        """Test administrative records take the Director mark"""
        record = {
            "isAdministrativeRole": True,
            "administrativeRole": "hod",
            "adminSelfAwardedMarks": 45,
            "selfAwardedMarks": 5,
            "directorMarks": 50,
            "hodMarks": 10,
        }
        assert part_d_score_from_record(record).total == 95

    def test_associate_dean_uses_admin_dean_marks(self):
        """Test associate deans are marked by the Dean on the admin track"""
        record = {
            "isAdministrativeRole": True,
            "administrativeRole": "associate_dean",
            "adminSelfAwardedMarks": 30,
            "directorMarks": 60,
            "adminDeanMarks": 20,
        }
        assert part_d_score_from_record(record).total == 50

    def test_missing_portfolio_type_means_both(self):
        """Test a record without portfolioType is scored as "both" """
        record = {"selfAwardedMarks": 10, "hodMarks": 20, "deanMarks": 40}
        assert part_d_score_from_record(record).total == 40


class TestPartEAndB:

    def test_part_e_capped_at_50(self):
        """Test Part E self marks cap at 50"""
        assert part_e_score(75) == 50
        assert part_e_score("12") == 12
        assert part_e_score(None) == 0

    def test_verified_payload_is_flat_and_complete(self):
        """Test every category is present and blanks become 0"""
        payload = verified_payload({"sci": "4", "scopus": "", "ugc": "-2", "esci": "3 papers"})
        assert set(payload) == set(PART_B_KEYS)
        assert payload["sci"] == 4
        assert payload["scopus"] == 0
        assert payload["ugc"] == 0
        assert payload["esci"] == 3
        assert all(isinstance(v, int) for v in payload.values())

    def test_section_totals(self):
        """Test section totals sum claimed and verified counts"""
        totals = {t.section: t for t in section_totals({"sci": 3, "esci": 2}, {"sci": 1})}
        assert totals["journals"].claimed == 5
        assert totals["journals"].verified == 1
        assert totals["books"].claimed == 0


class TestReviews:

    def test_interaction_total_out_of_100(self):
        """Test full marks on every criterion give 100"""
        full = {key: mx for key, _, mx, _ in INTERACTION_CRITERIA}
        assert interaction_total(full) == 100
        assert interaction_total({"knowledge": 50}) == 20

    @pytest.mark.parametrize("value", [0, 60, "30"])
    def test_director_marks_accepted(self, value):
        """Test director marks in 0..60 are accepted"""
        assert validate_director_marks(value) == int(value)

    @pytest.mark.parametrize("value", [-1, 61, "", None, "abc"])
    def test_director_marks_rejected(self, value):
        """Test director marks outside 0..60 are rejected"""
        with pytest.raises(ValueError, match="between 0 and 60"):
            validate_director_marks(value)


class TestHelpers:

    def test_parse_int_takes_leading_integer(self):
        assert parse_int("12") == 12
        assert parse_int("3.7") == 3
        assert parse_int("x") is None

    def test_clamp_treats_garbage_as_low(self):
        assert clamp("abc", 0, 10) == 0
        assert clamp(15, 0, 10) == 10

    @pytest.mark.parametrize("value", ["nan", "NaN", "inf", "-inf", float("nan"), float("inf")])
    def test_clamp_treats_non_finite_as_low(self, value):
        assert clamp(value, 0, 50) == 0
        assert to_number(value) is None

    def test_completion_percent(self):
        """Test only touched fields count towards progress"""
        assert completion_percent([]) == 0.0
        assert completion_percent([1, 0, "", "text"]) == 50.0
        assert completion_percent([True, False]) == 50.0

    def test_status_counts(self):
        """Test unknown statuses are ignored by the counter"""
        rows = [{"status": "done"}, {"status": "done"}, {"status": "pending"}, {"status": "weird"}]
        counts = status_counts(rows, ["pending", "done", "submitted"])
        assert counts == {"pending": 1, "done": 2, "submitted": 0}
