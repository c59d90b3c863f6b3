"""SchoolBoard — Consolidated student report aggregation.

Turns one student's test results (plus the classification tags of the
tests they sat) into a :class:`ReportSummary`, and the summary into a
short list of recommendations.

Both functions are pure: no I/O, no shared state, inputs are never
mutated.  Feeding the same inputs twice yields identical summaries, so
they can be recomputed on every page render.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime

from models.records import TestMeta, TestResult
from models.report import LabelStats, ReportSummary, SubjectStats, TrendPoint

UNKNOWN_SUBJECT = "Unknown"
BREAKDOWN_FIELDS = ("concept", "difficulty", "bloom")


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _subject_label(result: TestResult) -> str:
    return (result.subject_name or "").strip() or UNKNOWN_SUBJECT


def _trend_key(result: TestResult) -> tuple[int, float]:
    # Results without an end time sort before every timed result.
    if result.end_time is None:
        return (0, 0.0)
    return (1, result.end_time.timestamp())


def _trend_date(end_time: datetime | None) -> str:
    return end_time.date().isoformat() if end_time else ""


def compute_report(
    results: Sequence[TestResult],
    meta_by_test_id: Mapping[str, TestMeta] | None = None,
) -> ReportSummary:
    """Aggregate *results* into a :class:`ReportSummary`.

    Parameters
    ----------
    results:
        Test results of one student, in the order the store returned them.
    meta_by_test_id:
        Test metadata keyed by ``testId``.  Results whose test is absent,
        or whose metadata lacks a label, are left out of the
        concept/difficulty/bloom breakdowns.

    Returns
    -------
    ReportSummary
        All-zero/empty when *results* is empty.
    """
    if not results:
        return ReportSummary()
    meta_by_test_id = meta_by_test_id or {}

    scores = [r.percentage_score or 0.0 for r in results]

    # Subject-wise sums
    sums: dict[str, dict[str, float]] = {}
    for r in results:
        bucket = sums.setdefault(
            _subject_label(r),
            {"score": 0.0, "correct": 0, "incorrect": 0, "skipped": 0, "tests": 0},
        )
        bucket["score"] += r.percentage_score or 0.0
        bucket["correct"] += r.correct_answers or 0
        bucket["incorrect"] += r.incorrect_answers or 0
        bucket["skipped"] += r.skipped_questions or 0
        bucket["tests"] += 1

    subjects = {
        name: SubjectStats(
            avg=b["score"] / b["tests"] if b["tests"] else 0.0,
            correct=b["correct"],
            incorrect=b["incorrect"],
            skipped=b["skipped"],
            tests=b["tests"],
        )
        for name, b in sums.items()
    }
    ranked = sorted(subjects, key=lambda name: subjects[name].avg, reverse=True)

    # Concept / difficulty / Bloom breakdowns
    buckets: dict[str, dict[str, list[float]]] = {f: {} for f in BREAKDOWN_FIELDS}
    for r in results:
        meta = meta_by_test_id.get(r.test_id)
        if meta is None:
            continue
        for field in BREAKDOWN_FIELDS:
            label = meta.label(field)
            if label:
                buckets[field].setdefault(label, []).append(r.percentage_score or 0.0)
    breakdowns = {
        field: {
            label: LabelStats(count=len(vals), avg_acc=_mean(vals))
            for label, vals in by_label.items()
        }
        for field, by_label in buckets.items()
    }

    per_question = [
        r.duration / r.answered_questions
        for r in results
        if r.duration and r.duration > 0 and r.answered_questions > 0
    ]

    trend = [
        TrendPoint(date=_trend_date(r.end_time), percentage=r.percentage_score or 0.0)
        for r in sorted(results, key=_trend_key)
    ]

    return ReportSummary(
        total_tests=len(results),
        overall_avg=_mean(scores),
        # Last in input order, not the most recent attempt by time.
        grade=results[-1].grade or "",
        subjects=subjects,
        best_subject=ranked[0] if ranked else "",
        weakest_subject=ranked[-1] if ranked else "",
        concept=breakdowns["concept"],
        difficulty=breakdowns["difficulty"],
        bloom=breakdowns["bloom"],
        avg_time_per_question=_mean(per_question),
        trend=trend,
    )


def build_recommendations(summary: ReportSummary) -> list[str]:
    """Return natural-language study notes derived from *summary*."""
    recs: list[str] = []
    if not summary.total_tests:
        return recs

    if summary.best_subject:
        recs.append(
            f"Strength in {summary.best_subject}. "
            "Continue practicing at higher difficulty."
        )
    if summary.weakest_subject:
        recs.append(
            f"Focus on {summary.weakest_subject}. Review foundational concepts "
            "and attempt easier practice sets."
        )

    if summary.difficulty:
        ranked = sorted(
            summary.difficulty.items(), key=lambda kv: kv[1].avg_acc, reverse=True
        )
        top_label, top = ranked[0]
        bottom_label, bottom = ranked[-1]
        recs.append(f"Performs best on {top_label} difficulty (avg {top.avg_acc:.1f}%).")
        recs.append(
            f"Struggles on {bottom_label} difficulty (avg {bottom.avg_acc:.1f}%)."
        )

    if summary.avg_time_per_question > 0:
        recs.append(
            f"Average {summary.avg_time_per_question:.1f}s per question. "
            "Aim for steady pace with accuracy."
        )
    return recs
