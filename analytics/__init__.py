"""SchoolBoard analytics package."""

from analytics.report_aggregator import build_recommendations, compute_report
from analytics.subject_performance import (
    build_subjectwise_report,
    compute_subject_performance,
    performance_distribution,
    score_band,
    summarize_subjects,
)
from analytics.completion import (
    improvement_suggestion,
    student_score,
    subject_completion,
)

__all__ = [
    "build_recommendations",
    "build_subjectwise_report",
    "compute_report",
    "compute_subject_performance",
    "improvement_suggestion",
    "performance_distribution",
    "score_band",
    "student_score",
    "subject_completion",
    "summarize_subjects",
]
