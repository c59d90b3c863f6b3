"""SchoolBoard — Assessment-related Pydantic models.

Data structures for published assessments, per-student submissions, and
the derived rows of the completed-assessments drill-down
(subject → assessment → student).
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from models.records import FirestoreRecord
from models.report import ViewModel


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class SubmissionStatus(str, Enum):
    """Lifecycle status of one student's submission."""

    COMPLETED = "completed"
    PENDING = "pending"
    MISSED = "missed"


# ---------------------------------------------------------------------------
# Stored records
# ---------------------------------------------------------------------------
class Subject(FirestoreRecord):
    """A subject taught in the school."""

    name: str = ""


class ClassStudent(FirestoreRecord):
    """A student as listed in a class roster."""

    name: str = ""
    email: str = ""
    class_name: str = ""
    avatar: str | None = None


class Submission(FirestoreRecord):
    """A student's submission for one assessment."""

    student_id: str
    score: float = 0.0
    submitted_at: datetime | None = None
    status: SubmissionStatus = SubmissionStatus.PENDING


class Assessment(FirestoreRecord):
    """A published assessment with its embedded submissions."""

    title: str = ""
    subject: str = Field(default="", description="Subject.id this belongs to")
    total_marks: float = 100.0
    due_date: datetime | None = None
    submissions: list[Submission] = Field(
        default_factory=list,
        alias="students",
    )

    def submission_for(self, student_id: str) -> Submission | None:
        """Return the submission of *student_id*, if any."""
        for sub in self.submissions:
            if sub.student_id == student_id:
                return sub
        return None

    def completed_count(self) -> int:
        return sum(1 for s in self.submissions if s.status == SubmissionStatus.COMPLETED)


# ---------------------------------------------------------------------------
# Derived rows
# ---------------------------------------------------------------------------
class SubjectCompletion(ViewModel):
    """Completion count for one subject's assessments."""

    id: str
    name: str
    completed: int = 0
    total: int = 0


class StudentScore(ViewModel):
    """A student's result on one assessment, as displayed."""

    score: float = 0.0
    status: str = "Not Submitted"
    percentage: int | None = None


class CompletedAssessments(ViewModel):
    """Everything the completed-assessments page needs."""

    subjects: list[Subject] = Field(default_factory=list)
    students: list[ClassStudent] = Field(default_factory=list)
    assessments: list[Assessment] = Field(default_factory=list)
    completion: list[SubjectCompletion] = Field(default_factory=list)

    def assessments_for(self, subject_id: str) -> list[Assessment]:
        return [a for a in self.assessments if a.subject == subject_id]

    def student_by_id(self, student_id: str) -> ClassStudent | None:
        return next((s for s in self.students if s.id == student_id), None)
