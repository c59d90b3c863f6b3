"""SchoolBoard — Completed assessments by subject.

Three-level drill-down: pick a subject to list its assessments, pick an
assessment to see every student's score, pick a student for their
result and an improvement note for the subject.
"""

from __future__ import annotations
import html
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import streamlit as st

from analytics.completion import improvement_suggestion, student_score
from orchestrator.state import DrillDownState, DrillLevel
from ui.components.cards import apply_theme, metric_card, page_header, page_nav_sidebar, score_badge

st.set_page_config(page_title="SchoolBoard · Completed Assessments", page_icon="✅", layout="wide")

apply_theme()


def _init():
    defaults = {
        "school_id": "",
        "drilldown_state": {},
        "completed_data": None,
        "completed_school": None,
    }
    for k, v in defaults.items():
        if k not in st.session_state:
            st.session_state[k] = v

_init()
state = DrillDownState.from_dict(st.session_state["drilldown_state"])


def _save_and_rerun() -> None:
    st.session_state["drilldown_state"] = state.to_dict()
    st.rerun()


# ── Sidebar ───────────────────────────────────────────────────────────────────
with st.sidebar:
    page_nav_sidebar("completed")
    if state.level != DrillLevel.SUBJECTS and st.button("← Back", use_container_width=True):
        state.back()
        _save_and_rerun()

page_header("✅ Subject Assessments", "View and manage completed assessments by subject")

school_id = st.session_state["school_id"]
if not school_id:
    st.info("Set your school on the overview page to see its assessments.")
    st.stop()

if st.session_state["completed_school"] != school_id:
    from ui.backend import fetch_completed_assessments
    try:
        with st.spinner("Loading assessments..."):
            st.session_state["completed_data"] = fetch_completed_assessments(school_id)
        st.session_state["completed_school"] = school_id
        state.reset()
        st.session_state["drilldown_state"] = state.to_dict()
    except Exception as exc:
        st.error(f"Error loading data: {exc}")
        st.stop()

data = st.session_state["completed_data"]

# ── Level 1: subjects ─────────────────────────────────────────────────────────
st.subheader("Subjects")
if not data.completion:
    st.caption("No subjects found for this school.")
cols = st.columns(max(len(data.completion), 1))
for col, row in zip(cols, data.completion):
    with col:
        st.markdown(
            metric_card(row.name, f"{row.completed}/{row.total}", icon="📘"),
            unsafe_allow_html=True,
        )
        st.progress(row.completed / row.total if row.total else 0.0)
        label = "Hide" if state.subject_id == row.id else "Open"
        if st.button(label, key=f"subj_{row.id}", use_container_width=True):
            state.select_subject(row.id)
            _save_and_rerun()

if state.subject_id is None:
    st.stop()

# ── Level 2: assessments of the subject ───────────────────────────────────────
st.divider()
subject_assessments = data.assessments_for(state.subject_id)
st.subheader("Assessments")
if not subject_assessments:
    st.caption("No assessments for this subject yet.")
for a in subject_assessments:
    due = a.due_date.date().isoformat() if a.due_date else "-"
    c1, c2 = st.columns([4, 1])
    c1.markdown(f"**{html.escape(a.title)}** · due {due} · {a.completed_count()} completed · {a.total_marks:g} marks")
    if c2.button("Students", key=f"asm_{a.id}", use_container_width=True):
        state.select_assessment(a.id)
        _save_and_rerun()

assessment = next((a for a in subject_assessments if a.id == state.assessment_id), None)
if assessment is None:
    st.stop()

# ── Level 3: students of the assessment ───────────────────────────────────────
st.divider()
st.subheader(f"Students · {html.escape(assessment.title)}")
for stu in data.students:
    result = student_score(stu.id, assessment)
    c1, c2, c3, c4 = st.columns([3, 2, 2, 1])
    c1.markdown(f"**{html.escape(stu.name)}**  \n"
                f"<span style='color:#666;'>{html.escape(stu.class_name)}</span>",
                unsafe_allow_html=True)
    c2.markdown(result.status)
    if result.percentage is not None:
        c3.markdown(score_badge(result.percentage), unsafe_allow_html=True)
    else:
        c3.markdown("-")
    if c4.button("View", key=f"stu_{stu.id}", use_container_width=True):
        state.select_student(stu.id)
        _save_and_rerun()

if state.student_id is None:
    st.stop()

# ── Student detail ────────────────────────────────────────────────────────────
st.divider()
student = data.student_by_id(state.student_id)
result = student_score(state.student_id, assessment)
st.subheader(f"🎓 {student.name if student else state.student_id}")
m1, m2, m3 = st.columns(3)
m1.markdown(metric_card("Score", f"{result.score:g}/{assessment.total_marks:g}"), unsafe_allow_html=True)
m2.markdown(metric_card("Status", result.status), unsafe_allow_html=True)
m3.markdown(
    metric_card("Percentage", f"{result.percentage}%" if result.percentage is not None else "-"),
    unsafe_allow_html=True,
)
st.info(improvement_suggestion(state.student_id, state.subject_id, data.assessments))
