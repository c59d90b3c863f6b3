"""SchoolBoard — Asynchronous data loading for the dashboard pages.

Each loader fetches the documents one page needs from Firestore, validates
them into models, and hands them to the pure functions in ``analytics``.
The only contract between loading and aggregation is
``(results, meta_by_test_id) -> ReportSummary``.

Lookups that the pages can live without (user profile fallback, test
metadata chunks, remark ordering) are caught and logged; everything else
propagates so the page can report a load error.
"""

from __future__ import annotations

import asyncio
from typing import Any

from config import get_settings, get_logger
from analytics.completion import subject_completion
from analytics.report_aggregator import build_recommendations, compute_report
from analytics.subject_performance import build_subjectwise_report
from integrations.firestore import DOCUMENT_ID, DocumentRef, FirestoreClient, FirestoreError
from models.assessment import Assessment, ClassStudent, CompletedAssessments, Subject
from models.records import Remark, StudentRecord, TestMeta, TestResult, UserRecord
from models.report import StudentReport, SubjectwiseReport

logger = get_logger(__name__)


def _chunks(items: list[str], size: int) -> list[list[str]]:
    size = max(size, 1)
    return [items[i:i + size] for i in range(0, len(items), size)]


def _unique(values: list[str]) -> list[str]:
    """Distinct non-empty values, first-seen order."""
    return list(dict.fromkeys(v for v in values if v))


# ---------------------------------------------------------------------------
# Consolidated student report
# ---------------------------------------------------------------------------
async def _load_user(client: FirestoreClient, student_id: str) -> UserRecord | None:
    collection = get_settings().users_collection
    doc = await client.get_document(collection, student_id)
    if doc is not None:
        doc["uid"] = doc.get("uid") or doc["id"]
        return UserRecord.model_validate(doc)

    try:
        docs = await client.query(collection, [("uid", "==", student_id)], limit=1)
    except FirestoreError as exc:
        logger.warning("User lookup by uid failed for %s: %s", student_id, exc)
        return None
    if not docs:
        return None
    docs[0]["uid"] = docs[0].get("uid") or docs[0]["id"]
    return UserRecord.model_validate(docs[0])


async def _load_meta_chunk(
    client: FirestoreClient,
    collection: str,
    chunk: list[str],
) -> list[dict[str, Any]]:
    """One ``__name__ in`` query; then one batch get; then one read per test."""
    try:
        return await client.query(collection, [(DOCUMENT_ID, "in", chunk)])
    except FirestoreError as exc:
        logger.warning("Test meta 'in' query failed (%s); trying batch get", exc)

    try:
        return await client.get_documents(collection, chunk)
    except FirestoreError as exc:
        logger.warning("Test meta batch get failed (%s); reading %d docs one by one",
                       exc, len(chunk))

    async def _one(test_id: str) -> dict[str, Any] | None:
        try:
            return await client.get_document(collection, test_id)
        except FirestoreError as exc:
            logger.warning("Could not read test %s: %s", test_id, exc)
            return None

    docs = await asyncio.gather(*(_one(tid) for tid in chunk))
    return [d for d in docs if d is not None]


async def load_tests_meta(
    client: FirestoreClient,
    test_ids: list[str],
) -> dict[str, TestMeta]:
    """Fetch test metadata for *test_ids* in bounded chunks."""
    settings = get_settings()
    meta: dict[str, TestMeta] = {}
    for chunk in _chunks(_unique(test_ids), settings.meta_batch_size):
        for doc in await _load_meta_chunk(client, settings.tests_collection, chunk):
            meta[doc["id"]] = TestMeta.model_validate(doc)
    logger.info("Loaded metadata for %d/%d tests", len(meta), len(_unique(test_ids)))
    return meta


async def load_remarks(client: FirestoreClient, student_id: str) -> list[Remark]:
    """Latest remarks for a student, newest first when the index allows."""
    settings = get_settings()
    filters = [("studentId", "==", student_id)]
    try:
        docs = await client.query(
            settings.remarks_collection,
            filters,
            order_by=[("createdAt", "desc")],
            limit=settings.remarks_limit,
        )
    except FirestoreError as exc:
        logger.warning("Ordered remark query failed (%s); retrying unordered", exc)
        docs = await client.query(
            settings.remarks_collection, filters, limit=settings.remarks_limit
        )
    return [Remark.model_validate(d) for d in docs]


async def load_student_report(client: FirestoreClient, student_id: str) -> StudentReport:
    """Load every record of one student and compute the consolidated report."""
    settings = get_settings()
    student_id = (student_id or "").strip()
    if not student_id:
        return StudentReport(student_id="")

    docs = await client.query(
        settings.students_collection, [("userId", "==", student_id)], limit=1
    )
    student = StudentRecord.model_validate(docs[0]) if docs else None
    user = await _load_user(client, student_id)

    result_docs = await client.query(
        settings.test_results_collection, [("studentId", "==", student_id)]
    )
    results = [TestResult.model_validate(d) for d in result_docs]
    tests_meta = await load_tests_meta(client, [r.test_id for r in results])
    remarks = await load_remarks(client, student_id)

    summary = compute_report(results, tests_meta)
    logger.info(
        "Report for %s: %d results, %d subjects, avg %.1f",
        student_id, summary.total_tests, len(summary.subjects), summary.overall_avg,
    )
    return StudentReport(
        student_id=student_id,
        student=student,
        user=user,
        results=results,
        tests_meta=tests_meta,
        remarks=remarks,
        summary=summary,
        recommendations=build_recommendations(summary),
    )


async def load_school_students(client: FirestoreClient, school_id: str) -> list[StudentRecord]:
    """All students of *school_id*."""
    if not (school_id or "").strip():
        return []
    docs = await client.query(
        get_settings().students_collection, [("schoolId", "==", school_id.strip())]
    )
    logger.info("Loaded %d students for school %s", len(docs), school_id)
    return [StudentRecord.model_validate(d) for d in docs]


# ---------------------------------------------------------------------------
# Subject-wise performance
# ---------------------------------------------------------------------------
async def load_subjectwise_report(
    client: FirestoreClient,
    teacher_uid: str,
) -> SubjectwiseReport:
    """Performance per subject over every test created by *teacher_uid*."""
    settings = get_settings()
    teacher_uid = (teacher_uid or "").strip()
    if not teacher_uid:
        return SubjectwiseReport()

    author = DocumentRef(f"{settings.users_collection}/{teacher_uid}")
    test_docs = await client.query(settings.tests_collection, [("createdBy", "==", author)])
    if not test_docs:
        logger.info("No tests authored by %s", teacher_uid)
        return SubjectwiseReport()
    tests = [TestMeta.model_validate(d) for d in test_docs]

    results: list[TestResult] = []
    for chunk in _chunks([t.id for t in tests], settings.results_batch_size):
        docs = await client.query(
            settings.test_results_collection, [("testId", "in", chunk)]
        )
        results.extend(TestResult.model_validate(d) for d in docs)

    logger.info("Subject-wise: %d tests, %d results", len(tests), len(results))
    return build_subjectwise_report(tests, results, settings.pass_threshold)


# ---------------------------------------------------------------------------
# Completed assessments
# ---------------------------------------------------------------------------
async def load_completed_assessments(
    client: FirestoreClient,
    school_id: str,
) -> CompletedAssessments:
    """Subjects, roster and assessments of a school, with completion counts."""
    settings = get_settings()
    school_id = (school_id or "").strip()
    if not school_id:
        return CompletedAssessments()

    by_school = [("schoolId", "==", school_id)]
    subject_docs, student_docs, assessment_docs = await asyncio.gather(
        client.query(settings.subjects_collection, by_school),
        client.query(settings.students_collection, by_school),
        client.query(settings.assessments_collection, by_school),
    )
    subjects = [Subject.model_validate(d) for d in subject_docs]
    students = [ClassStudent.model_validate(d) for d in student_docs]
    assessments = [Assessment.model_validate(d) for d in assessment_docs]

    return CompletedAssessments(
        subjects=subjects,
        students=students,
        assessments=assessments,
        completion=subject_completion(subjects, assessments, students),
    )
