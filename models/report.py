"""SchoolBoard — Report view models.

Immutable outputs of the analytics layer.  Every model serialises to the
camelCase shape the dashboard pages consume (``to_dict()``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from models.records import Remark, StudentRecord, TestMeta, TestResult, UserRecord


class ViewModel(BaseModel):
    """Frozen, camelCase-serialising base for derived view data."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain JSON-compatible dict (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Consolidated student report
# ---------------------------------------------------------------------------
class SubjectStats(ViewModel):
    """Per-subject roll-up of one student's results."""

    avg: float = 0.0
    correct: int = 0
    incorrect: int = 0
    skipped: int = 0
    tests: int = 0


class LabelStats(ViewModel):
    """Mastery for one concept / difficulty / Bloom label."""

    count: int = 0
    avg_acc: float = 0.0


class TrendPoint(ViewModel):
    """One point of the chronological score trend."""

    date: str = ""
    percentage: float = 0.0


class ReportSummary(ViewModel):
    """Derived summary of a student's test results."""

    total_tests: int = 0
    overall_avg: float = 0.0
    grade: str = ""
    subjects: dict[str, SubjectStats] = Field(default_factory=dict)
    best_subject: str = ""
    weakest_subject: str = ""
    concept: dict[str, LabelStats] = Field(default_factory=dict)
    difficulty: dict[str, LabelStats] = Field(default_factory=dict)
    bloom: dict[str, LabelStats] = Field(default_factory=dict)
    avg_time_per_question: float = 0.0
    trend: list[TrendPoint] = Field(default_factory=list)


class StudentReport(ViewModel):
    """Everything the consolidated report page renders for one student."""

    student_id: str
    student: StudentRecord | None = None
    user: UserRecord | None = None
    results: list[TestResult] = Field(default_factory=list)
    tests_meta: dict[str, TestMeta] = Field(default_factory=dict)
    remarks: list[Remark] = Field(default_factory=list)
    summary: ReportSummary = Field(default_factory=ReportSummary)
    recommendations: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Subject-wise performance (teacher view)
# ---------------------------------------------------------------------------
class SubjectPerformance(ViewModel):
    """Aggregate performance of all students in one subject."""

    subject_name: str
    total_students: int = 0
    average_score: float = 0.0
    highest_score: float = 0.0
    lowest_score: float = 0.0
    pass_rate: float = 0.0


class SubjectOverview(ViewModel):
    """Headline numbers shown above the subject table."""

    overall_average: float = 0.0
    subject_count: int = 0
    total_students: int = 0
    average_pass_rate: float = 0.0


class DistributionSlice(ViewModel):
    """One bucket of the subject performance distribution."""

    name: str
    value: int
    color: str


class SubjectwiseReport(ViewModel):
    """Subject performance rows plus their derived overview."""

    rows: list[SubjectPerformance] = Field(default_factory=list)
    overview: SubjectOverview = Field(default_factory=SubjectOverview)
    distribution: list[DistributionSlice] = Field(default_factory=list)
