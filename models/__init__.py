"""SchoolBoard models package."""

from models.records import (
    FirestoreRecord,
    Remark,
    StudentRecord,
    TestMeta,
    TestResult,
    UserRecord,
)
from models.report import (
    DistributionSlice,
    LabelStats,
    ReportSummary,
    StudentReport,
    SubjectOverview,
    SubjectPerformance,
    SubjectStats,
    SubjectwiseReport,
    TrendPoint,
)
from models.assessment import (
    Assessment,
    ClassStudent,
    CompletedAssessments,
    StudentScore,
    Subject,
    SubjectCompletion,
    Submission,
    SubmissionStatus,
)

__all__ = [
    "Assessment",
    "ClassStudent",
    "CompletedAssessments",
    "DistributionSlice",
    "FirestoreRecord",
    "LabelStats",
    "Remark",
    "ReportSummary",
    "StudentRecord",
    "StudentReport",
    "StudentScore",
    "Subject",
    "SubjectCompletion",
    "SubjectOverview",
    "SubjectPerformance",
    "SubjectStats",
    "SubjectwiseReport",
    "Submission",
    "SubmissionStatus",
    "TestMeta",
    "TestResult",
    "TrendPoint",
    "UserRecord",
]
