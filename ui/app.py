"""SchoolBoard — Main Streamlit app (landing page).

Run with ``streamlit run ui/app.py``.  The landing page collects the
signed-in school / teacher context that the report pages read from
``st.session_state`` and links to each report.
"""

from __future__ import annotations

import sys
import os

# Make project root importable when running as `streamlit run ui/app.py`
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import streamlit as st

from config import get_settings
from ui.components.cards import apply_theme, page_header, page_nav_sidebar

st.set_page_config(
    page_title="SchoolBoard",
    page_icon="🏫",
    layout="wide",
    initial_sidebar_state="expanded",
)
apply_theme()


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------
def _init_state() -> None:
    settings = get_settings()
    st.session_state.setdefault("school_id", settings.school_id)
    st.session_state.setdefault("teacher_uid", settings.teacher_uid)
    st.session_state.setdefault("directory_state", {})
    st.session_state.setdefault("drilldown_state", {})

_init_state()

with st.sidebar:
    page_nav_sidebar("home")

# ---------------------------------------------------------------------------
# Context form
# ---------------------------------------------------------------------------
page_header("🏫 SchoolBoard", "Assessments, results and student progress in one place")
st.divider()

col_form, col_help = st.columns([2, 1])
with col_form:
    st.subheader("Your context")
    st.session_state["school_id"] = st.text_input(
        "School ID",
        value=st.session_state["school_id"],
        placeholder="Firestore id of your school",
    ).strip()
    st.session_state["teacher_uid"] = st.text_input(
        "Teacher UID",
        value=st.session_state["teacher_uid"],
        placeholder="Your user id (author of tests)",
    ).strip()

    if not get_settings().firestore_project_id:
        st.warning("FIRESTORE_PROJECT_ID is not configured; reports cannot load.")

with col_help:
    st.markdown(
        "<div style='background:#111a33;border:1px solid rgba(59,130,246,0.25);"
        "border-radius:12px;padding:18px;margin-top:28px;'>"
        "<div style='color:#60a5fa;font-weight:600;margin-bottom:8px;'>📋 Reports</div>"
        "<ol style='color:#94a3b8;font-size:12px;line-height:2;padding-left:18px;margin:0;'>"
        "<li>Consolidated report per student</li>"
        "<li>Subject performance across your tests</li>"
        "<li>Completed assessments by subject</li>"
        "</ol></div>",
        unsafe_allow_html=True,
    )

# ---------------------------------------------------------------------------
# Report links
# ---------------------------------------------------------------------------
st.markdown("<br>", unsafe_allow_html=True)
links = [
    ("🎓 Student Report", "pages/01_student_report.py"),
    ("📊 Subject Performance", "pages/02_subjectwise.py"),
    ("✅ Completed Assessments", "pages/03_completed_assessments.py"),
]
for col, (label, target) in zip(st.columns(len(links)), links):
    if col.button(label, use_container_width=True):
        st.switch_page(target)
