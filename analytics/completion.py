"""SchoolBoard — Completed-assessment drill-down helpers.

Pure functions behind the subject → assessment → student view:
completion counts per subject, a student's score on one assessment, and
a canned improvement note per student and subject.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from models.assessment import (
    Assessment,
    ClassStudent,
    StudentScore,
    Subject,
    SubjectCompletion,
    SubmissionStatus,
)

SUGGESTION_EXCELLENT = (
    "Excellent performance! Keep up the good work and consider challenging "
    "yourself with advanced topics."
)
SUGGESTION_GOOD = (
    "Good work! Focus on practicing more problems to improve your understanding."
)
SUGGESTION_NEEDS_WORK = (
    "Needs improvement. Please review the basic concepts and seek help from "
    "your teacher."
)


def subject_completion(
    subjects: Sequence[Subject],
    assessments: Sequence[Assessment],
    students: Sequence[ClassStudent],
) -> list[SubjectCompletion]:
    """Completed vs. expected submissions for every subject.

    The expected count assumes every student on the roster sits every
    assessment of the subject.
    """
    rows: list[SubjectCompletion] = []
    for subject in subjects:
        subject_assessments = [a for a in assessments if a.subject == subject.id]
        completed = sum(
            1
            for a in subject_assessments
            for s in a.submissions
            if s.status == SubmissionStatus.COMPLETED
        )
        rows.append(SubjectCompletion(
            id=subject.id,
            name=subject.name,
            completed=completed,
            total=len(students) * len(subject_assessments),
        ))
    return rows


def student_score(student_id: str, assessment: Assessment) -> StudentScore:
    """Score, display status and percentage of *student_id* on *assessment*."""
    sub = assessment.submission_for(student_id)
    if sub is None:
        return StudentScore(score=0.0, status="Not Submitted", percentage=None)
    # Half-up rounding: 42.5% shows as 43%.
    percentage = (
        math.floor(sub.score / assessment.total_marks * 100 + 0.5)
        if assessment.total_marks
        else 0
    )
    return StudentScore(
        score=sub.score,
        status="Completed" if sub.status == SubmissionStatus.COMPLETED else "Pending",
        percentage=percentage,
    )


def improvement_suggestion(
    student_id: str,
    subject_id: str,
    assessments: Sequence[Assessment],
) -> str:
    """Pick one of three notes from the student's mean percentage in a subject."""
    percentages = [
        student_score(student_id, a).percentage or 0
        for a in assessments
        if a.subject == subject_id
    ]
    avg_score = sum(percentages) / len(percentages) if percentages else 0.0

    if avg_score >= 80:
        return SUGGESTION_EXCELLENT
    if avg_score >= 60:
        return SUGGESTION_GOOD
    return SUGGESTION_NEEDS_WORK
