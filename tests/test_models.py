"""Tests for record parsing and view-model serialisation."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from models.assessment import Assessment, StudentScore, SubmissionStatus
from models.records import Remark, StudentRecord, TestMeta, TestResult
from models.report import ReportSummary, SubjectStats


class TestTestResult:

    def test_from_camel_case_document(self) -> None:
        r = TestResult.model_validate({
            "id": "r1",
            "testId": "t1",
            "studentId": "s1",
            "percentageScore": 72.5,
            "correctAnswers": 7,
            "endTime": datetime(2024, 5, 1, tzinfo=timezone.utc),
            "subjectName": "Math",
            "someLegacyField": True,
        })
        assert r.test_id == "t1"
        assert r.percentage_score == 72.5
        assert r.correct_answers == 7
        assert r.incorrect_answers == 0
        assert r.end_time.year == 2024

    def test_null_counts_become_zero(self) -> None:
        r = TestResult.model_validate({"correctAnswers": None, "answeredQuestions": None})
        assert r.correct_answers == 0
        assert r.answered_questions == 0
        assert r.duration is None


class TestTestMeta:

    def test_label_trims(self) -> None:
        meta = TestMeta.model_validate({"concept": "  Ratios ", "subjectID": "sub-1"})
        assert meta.label("concept") == "Ratios"
        assert meta.label("bloom") == ""
        assert meta.subject_id == "sub-1"


class TestPeople:

    def test_student_dob_alias(self) -> None:
        s = StudentRecord.model_validate({"dateOfBirth": "2010-04-02T00:00:00Z", "id": "x"})
        assert s.dob.date().isoformat() == "2010-04-02"
        assert s.report_key == "x"

    @pytest.mark.parametrize("raw", ["12/05/2010", "not a date", ""])
    def test_unreadable_dob_is_none(self, raw) -> None:
        s = StudentRecord.model_validate({"id": "x", "dob": raw, "admissionDate": raw})
        assert s.dob is None
        assert s.admission_date is None

    def test_null_dob_falls_back_to_date_of_birth(self) -> None:
        s = StudentRecord.model_validate({"dob": None, "dateOfBirth": "2010-04-02T00:00:00Z"})
        assert s.dob == datetime(2010, 4, 2, tzinfo=timezone.utc)

    def test_unreadable_dob_falls_back_to_date_of_birth(self) -> None:
        s = StudentRecord.model_validate({"dob": "12/05/2010", "dateOfBirth": "2010-04-02"})
        assert s.dob.date().isoformat() == "2010-04-02"

    def test_readable_dob_wins(self) -> None:
        s = StudentRecord.model_validate({"dob": "2011-01-01T00:00:00Z", "dateOfBirth": "2010-04-02"})
        assert s.dob.year == 2011

    def test_remark_tag_and_text(self) -> None:
        r = Remark.model_validate({"priority": "high", "workRemarks": "Late homework"})
        assert r.tag == "[general/high]"
        assert r.text == "Late homework"
        assert Remark().text == "-"


class TestAssessment:

    def test_submissions_from_students_key(self) -> None:
        a = Assessment.model_validate({
            "id": "q1",
            "totalMarks": 20,
            "students": [{"studentId": "ann", "score": 15, "status": "missed"}],
        })
        assert a.submission_for("ann").status == SubmissionStatus.MISSED
        assert a.submission_for("bob") is None

    def test_completed_count(self) -> None:
        a = Assessment.model_validate({
            "students": [
                {"studentId": "ann", "status": "completed"},
                {"studentId": "bob", "status": "pending"},
                {"studentId": "cy", "status": "completed"},
            ],
        })
        assert a.completed_count() == 2
        assert Assessment().completed_count() == 0

    def test_submission_requires_student(self) -> None:
        with pytest.raises(ValidationError):
            Assessment.model_validate({"students": [{"score": 3}]})


class TestViewModels:

    def test_frozen(self) -> None:
        summary = ReportSummary()
        with pytest.raises(ValidationError):
            summary.total_tests = 3

    def test_to_dict_is_camel_case(self) -> None:
        summary = ReportSummary(
            total_tests=1,
            subjects={"Math": SubjectStats(avg=50, tests=1)},
        )
        data = summary.to_dict()
        assert data["totalTests"] == 1
        assert data["subjects"]["Math"] == {
            "avg": 50.0, "correct": 0, "incorrect": 0, "skipped": 0, "tests": 1,
        }
        assert StudentScore().to_dict() == {
            "score": 0.0, "status": "Not Submitted", "percentage": None,
        }
