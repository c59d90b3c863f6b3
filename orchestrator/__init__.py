"""SchoolBoard orchestrator package."""

from orchestrator.state import DrillDownState, DrillLevel, StudentDirectoryState
from orchestrator.loaders import (
    load_completed_assessments,
    load_school_students,
    load_student_report,
    load_subjectwise_report,
)

__all__ = [
    "DrillDownState",
    "DrillLevel",
    "StudentDirectoryState",
    "load_completed_assessments",
    "load_school_students",
    "load_student_report",
    "load_subjectwise_report",
]
