"""Tests for the consolidated student report aggregation."""

import json
from datetime import datetime, timezone

import pytest

from analytics.report_aggregator import UNKNOWN_SUBJECT, compute_report
from models.records import TestMeta, TestResult
from models.report import ReportSummary


def _at(day: int, month: int = 1) -> datetime:
    return datetime(2024, month, day, 9, 30, tzinfo=timezone.utc)


def _result(**kwargs) -> TestResult:
    kwargs.setdefault("test_id", "t1")
    kwargs.setdefault("student_id", "s1")
    return TestResult(**kwargs)


@pytest.fixture
def math_science():
    return [
        _result(test_id="m1", subject_name="Math", percentage_score=60,
                correct_answers=6, incorrect_answers=4, grade="B"),
        _result(test_id="s1", subject_name="Science", percentage_score=90,
                correct_answers=9, incorrect_answers=1, grade="A"),
        _result(test_id="m2", subject_name="Math", percentage_score=80,
                correct_answers=8, skipped_questions=2, grade="C"),
    ]


class TestEmptyInput:
    """An empty result list yields the all-zero summary."""

    def test_empty_summary(self) -> None:
        summary = compute_report([], {})
        assert summary == ReportSummary()
        assert summary.total_tests == 0
        assert summary.overall_avg == 0
        assert summary.grade == ""
        assert summary.subjects == {}
        assert summary.best_subject == ""
        assert summary.weakest_subject == ""
        assert summary.trend == []

    def test_meta_may_be_omitted(self) -> None:
        summary = compute_report([_result(percentage_score=50)])
        assert summary.total_tests == 1
        assert summary.concept == {}


class TestOverallAndSubjects:
    """Overall average and the per-subject partition."""

    def test_worked_example(self, math_science) -> None:
        summary = compute_report(math_science, {})
        assert summary.total_tests == 3
        assert summary.overall_avg == pytest.approx(76.67, abs=0.01)
        assert summary.subjects["Math"].avg == pytest.approx(70)
        assert summary.subjects["Science"].avg == pytest.approx(90)
        assert summary.best_subject == "Science"
        assert summary.weakest_subject == "Math"

    def test_subject_sums(self, math_science) -> None:
        math = compute_report(math_science).subjects["Math"]
        assert math.correct == 14
        assert math.incorrect == 4
        assert math.skipped == 2
        assert math.tests == 2

    def test_partition_is_exhaustive(self, math_science) -> None:
        summary = compute_report(math_science)
        assert sum(s.tests for s in summary.subjects.values()) == summary.total_tests

    def test_blank_subject_is_unknown(self) -> None:
        summary = compute_report([
            _result(subject_name=None, percentage_score=40),
            _result(subject_name="   ", percentage_score=60),
            _result(subject_name=" Art ", percentage_score=100),
        ])
        assert set(summary.subjects) == {UNKNOWN_SUBJECT, "Art"}
        assert summary.subjects[UNKNOWN_SUBJECT].tests == 2
        assert summary.subjects[UNKNOWN_SUBJECT].avg == pytest.approx(50)

    def test_missing_score_counts_as_zero(self) -> None:
        r = TestResult.model_validate({"testId": "t1", "percentageScore": None})
        summary = compute_report([r, _result(percentage_score=100)])
        assert summary.overall_avg == pytest.approx(50)

    def test_single_subject_is_best_and_weakest(self) -> None:
        summary = compute_report([_result(subject_name="Math", percentage_score=55)])
        assert summary.best_subject == summary.weakest_subject == "Math"

    def test_tie_keeps_first_seen_order(self) -> None:
        summary = compute_report([
            _result(subject_name="History", percentage_score=70),
            _result(subject_name="Geography", percentage_score=70),
        ])
        assert summary.best_subject == "History"
        assert summary.weakest_subject == "Geography"

    def test_best_and_weakest_bound_all_subjects(self, math_science) -> None:
        summary = compute_report(math_science)
        avgs = [s.avg for s in summary.subjects.values()]
        assert summary.subjects[summary.best_subject].avg == max(avgs)
        assert summary.subjects[summary.weakest_subject].avg == min(avgs)


class TestGrade:
    """Grade comes from the last result in input order."""

    def test_last_in_input_order_wins(self) -> None:
        results = [
            _result(grade="A", end_time=_at(20)),
            _result(grade="C", end_time=_at(1)),
        ]
        # Even though "A" is the most recent attempt by time.
        assert compute_report(results).grade == "C"

    def test_missing_grade_is_empty(self) -> None:
        results = [_result(grade="A"), _result(grade=None)]
        assert compute_report(results).grade == ""


class TestBreakdowns:
    """Concept / difficulty / Bloom mastery from test metadata."""

    def test_labels_come_only_from_meta(self) -> None:
        results = [
            _result(test_id="t1", percentage_score=80),
            _result(test_id="t1", percentage_score=60),
            _result(test_id="t2", percentage_score=50),
            _result(test_id="t3", percentage_score=10),
        ]
        meta = {
            "t1": TestMeta(id="t1", concept=" Fractions ", difficulty="easy", bloom="apply"),
            "t2": TestMeta(id="t2", concept="   ", difficulty="hard"),
        }
        summary = compute_report(results, meta)

        assert list(summary.concept) == ["Fractions"]
        assert summary.concept["Fractions"].count == 2
        assert summary.concept["Fractions"].avg_acc == pytest.approx(70)
        assert set(summary.difficulty) == {"easy", "hard"}
        assert summary.difficulty["hard"].avg_acc == pytest.approx(50)
        assert list(summary.bloom) == ["apply"]
        assert UNKNOWN_SUBJECT not in summary.concept

    def test_no_meta_means_empty_breakdowns(self, math_science) -> None:
        summary = compute_report(math_science, {})
        assert summary.concept == summary.difficulty == summary.bloom == {}


class TestTimePerQuestion:
    """Average seconds per answered question."""

    def test_excludes_zero_duration(self) -> None:
        results = [
            _result(duration=60, answered_questions=10),
            _result(duration=0, answered_questions=5),
        ]
        assert compute_report(results).avg_time_per_question == pytest.approx(6)

    def test_excludes_unanswered_and_missing(self) -> None:
        results = [
            _result(duration=30, answered_questions=0),
            _result(duration=None, answered_questions=3),
        ]
        assert compute_report(results).avg_time_per_question == 0


class TestTrend:
    """Chronological trend of scores."""

    def test_sorted_with_missing_first(self) -> None:
        results = [
            _result(percentage_score=70, end_time=_at(2, 3)),
            _result(percentage_score=40, end_time=None),
            _result(percentage_score=55, end_time=_at(5)),
        ]
        trend = compute_report(results).trend
        assert [p.date for p in trend] == ["", "2024-01-05", "2024-03-02"]
        assert [p.percentage for p in trend] == [40, 55, 70]

    def test_equal_times_keep_input_order(self) -> None:
        results = [
            _result(percentage_score=1, end_time=_at(3)),
            _result(percentage_score=2, end_time=_at(3)),
        ]
        assert [p.percentage for p in compute_report(results).trend] == [1, 2]


class TestPurity:
    """Same inputs, same output; inputs untouched."""

    def test_deterministic_json(self, math_science) -> None:
        meta = {"m1": TestMeta(id="m1", difficulty="easy")}
        first = json.dumps(compute_report(math_science, meta).to_dict())
        second = json.dumps(compute_report(math_science, meta).to_dict())
        assert first == second

    def test_inputs_not_mutated(self, math_science) -> None:
        before = [r.model_dump() for r in math_science]
        compute_report(math_science, {})
        assert [r.model_dump() for r in math_science] == before

    def test_camel_case_output(self, math_science) -> None:
        data = compute_report(math_science).to_dict()
        assert {"totalTests", "overallAvg", "bestSubject", "avgTimePerQuestion"} <= set(data)
        assert "avgAcc" not in data
