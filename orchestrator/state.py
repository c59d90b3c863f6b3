"""SchoolBoard — Explicit page view state.

Selection and search state of the dashboard pages, kept as small
Pydantic objects in ``st.session_state`` rather than loose globals.
Everything is serialisable so a page can round-trip it through
``to_dict()`` / ``from_dict()``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel

from config import get_logger
from models.records import StudentRecord

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Drill-down levels
# ---------------------------------------------------------------------------
class DrillLevel(str, Enum):
    """How deep the completed-assessments view is drilled."""

    SUBJECTS = "subjects"
    ASSESSMENTS = "assessments"
    STUDENTS = "students"
    STUDENT = "student"


class DrillDownState(BaseModel):
    """Selected subject → assessment → student of the drill-down view."""

    subject_id: str | None = None
    assessment_id: str | None = None
    student_id: str | None = None

    @property
    def level(self) -> DrillLevel:
        if self.subject_id is None:
            return DrillLevel.SUBJECTS
        if self.assessment_id is None:
            return DrillLevel.ASSESSMENTS
        if self.student_id is None:
            return DrillLevel.STUDENTS
        return DrillLevel.STUDENT

    def select_subject(self, subject_id: str) -> None:
        """Select *subject_id*, or collapse it when already selected.

        Either way the assessment and student selections are cleared.
        """
        self.subject_id = None if subject_id == self.subject_id else subject_id
        self.assessment_id = None
        self.student_id = None
        logger.debug("Drill-down subject -> %s", self.subject_id)

    def select_assessment(self, assessment_id: str) -> None:
        """Select an assessment of the current subject; clears the student."""
        if self.subject_id is None:
            raise ValueError("Select a subject before an assessment")
        self.assessment_id = assessment_id
        self.student_id = None

    def select_student(self, student_id: str) -> None:
        if self.assessment_id is None:
            raise ValueError("Select an assessment before a student")
        self.student_id = student_id

    def back(self) -> None:
        """Step one level up."""
        if self.student_id is not None:
            self.student_id = None
        elif self.assessment_id is not None:
            self.assessment_id = None
        else:
            self.subject_id = None

    def reset(self) -> None:
        self.subject_id = self.assessment_id = self.student_id = None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> DrillDownState:
        return cls.model_validate(data or {})


# ---------------------------------------------------------------------------
# Student directory (consolidated report page)
# ---------------------------------------------------------------------------
class StudentDirectoryState(BaseModel):
    """Search text and chosen student of the consolidated report page."""

    search: str = ""
    student_id: str = ""

    def select(self, student_id: str) -> None:
        self.student_id = (student_id or "").strip()

    def filter(self, students: Iterable[StudentRecord]) -> list[StudentRecord]:
        """Students whose name or roll number contains the search text."""
        q = self.search.strip().lower()
        if not q:
            return list(students)
        return [
            s for s in students
            if q in (s.name or "").lower() or q in (s.roll_number or "").lower()
        ]

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> StudentDirectoryState:
        return cls.model_validate(data or {})
