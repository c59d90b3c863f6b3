"""SchoolBoard — Synchronous backend helpers for the Streamlit UI.

Wraps the async loaders with asyncio.run() so Streamlit pages
(which run synchronously) can call them directly.

All functions raise on unrecoverable errors so the UI can show st.error().
"""

from __future__ import annotations

import asyncio
import sys
import os
from typing import Awaitable, Callable, TypeVar

# Ensure project root is on path when pages call this module
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config import get_settings, get_logger
from integrations.firestore import FirestoreClient
from models.assessment import CompletedAssessments
from models.records import StudentRecord
from models.report import StudentReport, SubjectwiseReport

logger = get_logger(__name__)

T = TypeVar("T")


def _run(loader: Callable[[FirestoreClient], Awaitable[T]]) -> T:
    """Open a Firestore client, run *loader* with it, and close it."""
    async def _main() -> T:
        async with FirestoreClient() as client:
            return await loader(client)

    return asyncio.run(_main())


# ── Students ─────────────────────────────────────────────────────────────────

def fetch_school_students(school_id: str | None = None) -> list[StudentRecord]:
    """Students of *school_id* (defaults to the configured school)."""
    from orchestrator.loaders import load_school_students

    school = school_id if school_id is not None else get_settings().school_id
    return _run(lambda client: load_school_students(client, school))


# ── Consolidated student report ──────────────────────────────────────────────

def fetch_student_report(student_id: str) -> StudentReport:
    """Load records and compute the consolidated report for one student."""
    from orchestrator.loaders import load_student_report

    logger.info("Loading consolidated report for %s", student_id)
    return _run(lambda client: load_student_report(client, student_id))


# ── Subject-wise performance ─────────────────────────────────────────────────

def fetch_subjectwise_report(teacher_uid: str | None = None) -> SubjectwiseReport:
    """Subject performance over the tests of *teacher_uid*."""
    from orchestrator.loaders import load_subjectwise_report

    uid = teacher_uid if teacher_uid is not None else get_settings().teacher_uid
    return _run(lambda client: load_subjectwise_report(client, uid))


# ── Completed assessments ────────────────────────────────────────────────────

def fetch_completed_assessments(school_id: str | None = None) -> CompletedAssessments:
    """Subjects, roster and assessments for the drill-down page."""
    from orchestrator.loaders import load_completed_assessments

    school = school_id if school_id is not None else get_settings().school_id
    return _run(lambda client: load_completed_assessments(client, school))
