"""SchoolBoard — Firestore record models.

Pydantic views over the raw documents stored in Firestore.  Field names
are snake_case in Python and camelCase on the wire (``alias_generator``),
so documents returned by :class:`integrations.firestore.FirestoreClient`
can be passed straight to ``model_validate``.

Optional numeric fields that are missing or ``null`` in the store are
normalised to zero; optional labels stay ``None``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

_DATETIME = TypeAdapter(datetime)


def _parse_date(value: Any) -> datetime | None:
    """Coerce a stored date to ``datetime``; ``None`` when it cannot be read."""
    if value is None or value == "":
        return None
    try:
        return _DATETIME.validate_python(value)
    except ValidationError:
        return None


class FirestoreRecord(BaseModel):
    """Base class for every document-backed model."""

    id: str = ""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }


# ---------------------------------------------------------------------------
# Test results & test metadata
# ---------------------------------------------------------------------------
class TestResult(FirestoreRecord):
    """One student's recorded attempt at one test (``testResults``)."""

    __test__ = False  # not a pytest class

    test_id: str = ""
    student_id: str = ""
    student_name: str | None = None

    percentage_score: float = 0.0
    correct_answers: int = 0
    incorrect_answers: int = 0
    skipped_questions: int = 0
    answered_questions: int = 0

    duration: float | None = Field(default=None, description="Elapsed seconds")
    start_time: datetime | None = None
    end_time: datetime | None = None

    subject_name: str | None = None
    grade: str | None = None

    @field_validator(
        "percentage_score",
        "correct_answers",
        "incorrect_answers",
        "skipped_questions",
        "answered_questions",
        mode="before",
    )
    @classmethod
    def _missing_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class TestMeta(FirestoreRecord):
    """Classification tags of a test definition (``test`` collection)."""

    __test__ = False

    concept: str | None = None
    difficulty: str | None = None
    bloom: str | None = None

    subject: str | None = None
    subject_id: str | None = Field(default=None, alias="subjectID")
    question_text: str | None = None
    created_by: Any = None

    def label(self, field: str) -> str:
        """Return the trimmed value of *field*, or ``""`` when unset."""
        value = getattr(self, field, None)
        if not isinstance(value, str):
            return ""
        return value.strip()


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------
class StudentRecord(FirestoreRecord):
    """A student document (``students``), linked to a user by ``userId``.

    Dates are display-only: a value that does not parse as a date becomes
    ``None`` instead of failing the whole record.
    """

    name: str | None = None
    roll_number: str | None = None
    user_id: str | None = None
    school_id: str | None = None
    class_id: Any = None
    dob: datetime | None = None
    admission_date: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def _dob_fallback(cls, data: Any) -> Any:
        # Older documents store the birth date as ``dateOfBirth``.
        if isinstance(data, dict) and _parse_date(data.get("dob")) is None:
            fallback = _parse_date(data.get("dateOfBirth"))
            if fallback is not None:
                data = {**data, "dob": fallback}
        return data

    @field_validator("dob", "admission_date", mode="before")
    @classmethod
    def _lenient_date(cls, value: Any) -> datetime | None:
        return _parse_date(value)

    @property
    def report_key(self) -> str:
        """Identifier used to load this student's consolidated report."""
        return self.user_id or self.id


class UserRecord(FirestoreRecord):
    """An auth-linked user profile (``users``)."""

    uid: str = ""
    email: str | None = None
    role: str | None = None


class Remark(FirestoreRecord):
    """A teacher remark about a student (``remark``)."""

    type: str | None = None
    priority: str | None = None
    personal_remarks: str | None = None
    work_remarks: str | None = None
    student_id: str = ""
    created_at: datetime | None = None

    @property
    def tag(self) -> str:
        return f"[{self.type or 'general'}/{self.priority or '-'}]"

    @property
    def text(self) -> str:
        return self.personal_remarks or self.work_remarks or "-"
