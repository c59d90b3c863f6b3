"""SchoolBoard — Subject performance dashboard.

Average score, pass rate and score range per subject across every test
the signed-in teacher created, with a distribution donut.
"""

from __future__ import annotations
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import html

import streamlit as st

from ui.components.cards import apply_theme, metric_card, page_header, page_nav_sidebar, score_badge
from ui.components.charts import create_distribution_donut, create_subject_bar_chart

st.set_page_config(page_title="SchoolBoard · Subject Performance", page_icon="📊", layout="wide")

apply_theme()

if "teacher_uid" not in st.session_state:
    st.session_state["teacher_uid"] = ""
if "subjectwise_report" not in st.session_state:
    st.session_state["subjectwise_report"] = None
    st.session_state["subjectwise_uid"] = None

# ── Sidebar ───────────────────────────────────────────────────────────────────
with st.sidebar:
    page_nav_sidebar("subjectwise")
    refresh = st.button("🔄 Refresh", use_container_width=True)

page_header("📊 Subject Performance Dashboard", "Monitor and analyze subject performance metrics")

teacher_uid = st.session_state["teacher_uid"]
if not teacher_uid:
    st.info("Set your teacher UID on the overview page to see your subjects.")
    st.stop()

if refresh or st.session_state["subjectwise_uid"] != teacher_uid:
    from ui.backend import fetch_subjectwise_report
    try:
        with st.spinner("Loading subject performance data..."):
            st.session_state["subjectwise_report"] = fetch_subjectwise_report(teacher_uid)
        st.session_state["subjectwise_uid"] = teacher_uid
    except Exception as exc:
        st.error(f"Error fetching subject-wise data: {exc}")
        st.stop()

report = st.session_state["subjectwise_report"]
if not report.rows:
    st.markdown(
        "<div style='text-align:center;padding:60px;'>"
        "<div style='font-size:48px;'>📚</div>"
        "<p style='color:#aaa;font-size:17px;'>No subject performance data available</p>"
        "<p style='color:#666;font-size:13px;'>Create some tests with subjects to see analytics</p>"
        "</div>",
        unsafe_allow_html=True,
    )
    st.stop()

# ── Summary cards ─────────────────────────────────────────────────────────────
ov = report.overview
cards = [
    ("Overall Average", f"{ov.overall_average:.1f}%", "📈"),
    ("Subjects", str(ov.subject_count), "📚"),
    ("Total Students", str(ov.total_students), "👥"),
    ("Pass Rate", f"{ov.average_pass_rate:.1f}%", "🏆"),
]
for col, (label, value, icon) in zip(st.columns(4), cards):
    col.markdown(metric_card(label, value, icon=icon), unsafe_allow_html=True)

st.markdown("<br>", unsafe_allow_html=True)

# ── Charts ────────────────────────────────────────────────────────────────────
left, right = st.columns(2)
with left:
    st.markdown("**Subject Performance**")
    st.plotly_chart(create_subject_bar_chart(report.rows), use_container_width=True)
with right:
    st.markdown("**Performance Distribution**")
    st.plotly_chart(create_distribution_donut(report.distribution), use_container_width=True)

# ── Detail table ──────────────────────────────────────────────────────────────
st.subheader("Subject Performance Details")
rows_html = "".join(
    f"<tr><td><b>{html.escape(r.subject_name)}</b></td>"
    f"<td>{r.total_students}</td>"
    f"<td>{score_badge(r.average_score)}</td>"
    f"<td>{r.highest_score:g}%</td>"
    f"<td>{r.lowest_score:g}%</td>"
    f"<td>{score_badge(r.pass_rate)}</td></tr>"
    for r in report.rows
)
st.markdown(
    "<table><thead><tr><th>Subject</th><th>Students</th><th>Avg. Score</th>"
    "<th>Highest</th><th>Lowest</th><th>Pass Rate</th></tr></thead>"
    f"<tbody>{rows_html}</tbody></table>",
    unsafe_allow_html=True,
)
