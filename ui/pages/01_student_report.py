"""SchoolBoard — Student consolidated report page.

Pick a student from the school directory (or type an id) to see their
academic summary, subject table, concept/difficulty/Bloom mastery, score
trend, latest remarks and study recommendations.
"""

from __future__ import annotations
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import html

import streamlit as st

from integrations.firestore import ref_id
from orchestrator.state import StudentDirectoryState
from ui.components.cards import (
    apply_theme, bloom_badge, difficulty_badge, metric_card, page_header, page_nav_sidebar,
)
from ui.components.charts import create_mastery_bars, create_trend_chart

st.set_page_config(page_title="SchoolBoard · Student Report", page_icon="🎓", layout="wide")

apply_theme()


def _init():
    defaults = {
        "school_id": "",
        "directory_state": {},
        "school_students": None,   # cached per school
        "students_school": None,
        "student_report": None,    # cached per student
    }
    for k, v in defaults.items():
        if k not in st.session_state:
            st.session_state[k] = v

_init()

directory = StudentDirectoryState.from_dict(st.session_state["directory_state"])
# Deep links: ?studentId=...
param_id = st.query_params.get("studentId", "")
if param_id and not directory.student_id:
    directory.select(param_id)

# ── Sidebar ───────────────────────────────────────────────────────────────────
with st.sidebar:
    page_nav_sidebar("student")

page_header("🎓 Student Consolidated Report")

# ── School-wide student list ──────────────────────────────────────────────────
school_id = st.session_state["school_id"]
st.subheader("Students in Your School")
if not school_id:
    st.error("School not found. Please set your school on the overview page.")
else:
    if st.session_state["students_school"] != school_id:
        from ui.backend import fetch_school_students
        try:
            with st.spinner("Loading students..."):
                st.session_state["school_students"] = fetch_school_students(school_id)
            st.session_state["students_school"] = school_id
        except Exception as exc:
            st.error(f"Failed to load students: {exc}")
            st.session_state["school_students"] = []

    directory.search = st.text_input(
        "Search by name or roll no", value=directory.search, placeholder="Search by name or roll no"
    )
    matches = directory.filter(st.session_state["school_students"] or [])
    cols = st.columns(3)
    for i, s in enumerate(matches):
        label = f"{s.name or 'Unnamed'}\n\nRoll: {s.roll_number or '-'}"
        if cols[i % 3].button(label, key=f"stu_{s.id}", use_container_width=True):
            directory.select(s.report_key)

# ── Manual id entry ───────────────────────────────────────────────────────────
col_id, col_btn = st.columns([3, 1])
typed = col_id.text_input("Student ID", value=directory.student_id, placeholder="Enter studentId")
if col_btn.button("Load", use_container_width=True):
    directory.select(typed)

st.session_state["directory_state"] = directory.to_dict()
student_id = directory.student_id
if not student_id:
    st.stop()

# ── Load report ───────────────────────────────────────────────────────────────
cached = st.session_state["student_report"]
if cached is None or cached.student_id != student_id:
    from ui.backend import fetch_student_report
    try:
        with st.spinner("Loading report..."):
            st.session_state["student_report"] = fetch_student_report(student_id)
    except Exception as exc:
        st.session_state["student_report"] = None
        st.error(f"Failed to load report: {exc}")
        st.stop()

report = st.session_state["student_report"]
summary = report.summary
student = report.student
user = report.user

st.divider()

# ── Basic info ────────────────────────────────────────────────────────────────
st.subheader("Basic Student Info")
info_l, info_r = st.columns(2)
info_l.markdown(f"**Name:** {(student.name if student else None) or '-'}")
info_r.markdown(f"**Email:** {(user.email if user else None) or '-'}")
info_l.markdown(f"**Roll No:** {(student.roll_number if student else None) or '-'}")
info_r.markdown(f"**Class:** {ref_id(student.class_id if student else None) or '-'}")
info_l.markdown(f"**DOB:** {student.dob.date().isoformat() if student and student.dob else ''}")
info_r.markdown(
    f"**Admission:** "
    f"{student.admission_date.date().isoformat() if student and student.admission_date else ''}"
)

# ── Academic summary ──────────────────────────────────────────────────────────
st.subheader("Academic Summary")
cards = [
    ("Total Tests", str(summary.total_tests), "📝"),
    ("Overall Avg %", f"{summary.overall_avg:.1f}", "📈"),
    ("Grade", summary.grade or "-", "🏅"),
    ("Best Subject", summary.best_subject or "-", "💪"),
    ("Weakest Subject", summary.weakest_subject or "-", "🎯"),
    ("Avg Time/Q", f"{summary.avg_time_per_question:.1f}s", "⏱️"),
]
for col, (label, value, icon) in zip(st.columns(len(cards)), cards):
    col.markdown(metric_card(label, value, icon=icon), unsafe_allow_html=True)

# ── Subject-wise performance ──────────────────────────────────────────────────
st.subheader("Subject-Wise Performance")
if summary.subjects:
    st.dataframe(
        [
            {
                "Subject": name,
                "Avg %": round(s.avg, 1),
                "Correct": s.correct,
                "Incorrect": s.incorrect,
                "Skipped": s.skipped,
                "Tests": s.tests,
            }
            for name, s in summary.subjects.items()
        ],
        hide_index=True,
        use_container_width=True,
    )
else:
    st.caption("No test results yet.")

if report.tests_meta:
    with st.expander(f"Tests taken ({len(report.tests_meta)})"):
        for test_id, meta in report.tests_meta.items():
            badges = " ".join(
                b for b in (
                    difficulty_badge(meta.difficulty) if meta.difficulty else "",
                    bloom_badge(meta.bloom) if meta.bloom else "",
                ) if b
            )
            st.markdown(
                f"**{html.escape(meta.concept or meta.subject or test_id)}** {badges}",
                unsafe_allow_html=True,
            )

# ── Concept / difficulty / Bloom ──────────────────────────────────────────────
c1, c2, c3 = st.columns(3)
c1.plotly_chart(create_mastery_bars(summary.concept, "Concept Mastery"), use_container_width=True)
c2.plotly_chart(create_mastery_bars(summary.difficulty, "Difficulty Performance"), use_container_width=True)
c3.plotly_chart(create_mastery_bars(summary.bloom, "Bloom Performance"), use_container_width=True)

# ── Trend ─────────────────────────────────────────────────────────────────────
st.plotly_chart(create_trend_chart(summary.trend), use_container_width=True)

# ── Remarks ───────────────────────────────────────────────────────────────────
st.subheader("Latest Remarks")
if not report.remarks:
    st.caption("No remarks.")
for r in report.remarks:
    st.markdown(f"- **{r.tag}** {r.text}")

# ── Recommendations ───────────────────────────────────────────────────────────
st.subheader("Recommendations")
if not report.recommendations:
    st.caption("No recommendations yet.")
for rec in report.recommendations:
    st.markdown(f"- {rec}")
