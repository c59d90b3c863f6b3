"""Tests for study recommendations derived from a report summary."""

from analytics.report_aggregator import build_recommendations, compute_report
from models.records import TestMeta, TestResult
from models.report import LabelStats, ReportSummary


class TestBuildRecommendations:

    def test_empty_summary_gives_nothing(self) -> None:
        assert build_recommendations(ReportSummary()) == []

    def test_full_set_in_order(self) -> None:
        summary = ReportSummary(
            total_tests=4,
            best_subject="Science",
            weakest_subject="Math",
            difficulty={
                "easy": LabelStats(count=2, avg_acc=88.25),
                "hard": LabelStats(count=2, avg_acc=41.0),
            },
            avg_time_per_question=6.04,
        )
        assert build_recommendations(summary) == [
            "Strength in Science. Continue practicing at higher difficulty.",
            "Focus on Math. Review foundational concepts and attempt easier practice sets.",
            "Performs best on easy difficulty (avg 88.2%).",
            "Struggles on hard difficulty (avg 41.0%).",
            "Average 6.0s per question. Aim for steady pace with accuracy.",
        ]

    def test_single_difficulty_named_twice(self) -> None:
        summary = ReportSummary(
            total_tests=1,
            difficulty={"medium": LabelStats(count=1, avg_acc=50)},
        )
        recs = build_recommendations(summary)
        assert "Performs best on medium difficulty (avg 50.0%)." in recs
        assert "Struggles on medium difficulty (avg 50.0%)." in recs

    def test_no_pacing_note_without_time(self) -> None:
        summary = ReportSummary(total_tests=1, best_subject="Art", weakest_subject="Art")
        recs = build_recommendations(summary)
        assert len(recs) == 2
        assert not any("per question" in r for r in recs)

    def test_count_grows_with_data(self) -> None:
        plain = [TestResult(test_id="t1", subject_name="Math", percentage_score=70)]
        rich = [
            TestResult(test_id="t1", subject_name="Math", percentage_score=70,
                       duration=120, answered_questions=10),
        ]
        meta = {"t1": TestMeta(id="t1", difficulty="easy")}

        few = build_recommendations(compute_report(plain))
        many = build_recommendations(compute_report(rich, meta))
        assert len(few) == 2
        assert len(many) == 5
