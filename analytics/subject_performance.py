"""SchoolBoard — Subject-wise performance across a teacher's tests."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from models.records import TestMeta, TestResult
from models.report import (
    DistributionSlice,
    SubjectOverview,
    SubjectPerformance,
    SubjectwiseReport,
)

OTHER_SUBJECT = "Other"
DEFAULT_PASS_THRESHOLD = 35.0

# (name, lower bound inclusive, upper bound exclusive, colour)
_DISTRIBUTION_BUCKETS = [
    ("Excellent", 80.0, None, "#22c55e"),
    ("Good", 60.0, 80.0, "#06b6d4"),
    ("At-Risk", None, 60.0, "#ef4444"),
]


def _round2(value: float) -> float:
    """Two decimals, ties away from zero on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def compute_subject_performance(
    tests: Iterable[TestMeta],
    results: Iterable[TestResult],
    pass_threshold: float = DEFAULT_PASS_THRESHOLD,
) -> list[SubjectPerformance]:
    """Roll up *results* per subject of the test they belong to.

    Results pointing at a test not in *tests* are ignored.  Tests without
    a ``subject`` are grouped under ``"Other"``.  Subjects are returned in
    the order their first result was seen.
    """
    subject_of = {t.id: (t.subject or OTHER_SUBJECT) for t in tests}

    acc: dict[str, dict] = {}
    for r in results:
        if r.test_id not in subject_of:
            continue
        score = r.percentage_score or 0.0
        entry = acc.setdefault(subject_of[r.test_id], {
            "students": set(),
            "total": 0.0,
            "count": 0,
            "highest": None,
            "lowest": None,
            "passed": 0,
        })
        entry["students"].add(r.student_id)
        entry["total"] += score
        entry["count"] += 1
        entry["highest"] = score if entry["highest"] is None else max(entry["highest"], score)
        entry["lowest"] = score if entry["lowest"] is None else min(entry["lowest"], score)
        if score >= pass_threshold:
            entry["passed"] += 1

    rows: list[SubjectPerformance] = []
    for name, e in acc.items():
        count = e["count"]
        rows.append(SubjectPerformance(
            subject_name=name,
            total_students=len(e["students"]),
            average_score=_round2(e["total"] / count) if count else 0.0,
            highest_score=_round2(e["highest"] or 0.0),
            lowest_score=_round2(e["lowest"] or 0.0),
            pass_rate=_round2(e["passed"] / count * 100) if count else 0.0,
        ))
    return rows


def summarize_subjects(rows: Sequence[SubjectPerformance]) -> SubjectOverview:
    """Headline averages over all subject rows."""
    if not rows:
        return SubjectOverview()
    n = len(rows)
    return SubjectOverview(
        overall_average=sum(r.average_score for r in rows) / n,
        subject_count=n,
        total_students=sum(r.total_students for r in rows),
        average_pass_rate=sum(r.pass_rate for r in rows) / n,
    )


def performance_distribution(rows: Sequence[SubjectPerformance]) -> list[DistributionSlice]:
    """Count subjects per performance bucket, dropping empty buckets."""
    slices: list[DistributionSlice] = []
    for name, low, high, color in _DISTRIBUTION_BUCKETS:
        value = sum(
            1
            for r in rows
            if (low is None or r.average_score >= low)
            and (high is None or r.average_score < high)
        )
        if value > 0:
            slices.append(DistributionSlice(name=name, value=value, color=color))
    return slices


def score_band(value: float) -> str:
    """Classify a percentage for table colouring: good / fair / poor."""
    if value >= 70:
        return "good"
    if value >= 50:
        return "fair"
    return "poor"


def build_subjectwise_report(
    tests: Iterable[TestMeta],
    results: Iterable[TestResult],
    pass_threshold: float = DEFAULT_PASS_THRESHOLD,
) -> SubjectwiseReport:
    """Compute rows, overview and distribution in one go."""
    rows = compute_subject_performance(tests, results, pass_threshold)
    return SubjectwiseReport(
        rows=rows,
        overview=summarize_subjects(rows),
        distribution=performance_distribution(rows),
    )
