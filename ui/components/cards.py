"""SchoolBoard — Shared Streamlit building blocks.

Theme stylesheet, page header, sidebar navigation, metric cards and the
score / difficulty / Bloom pills used across the report pages.
"""

from __future__ import annotations

import html

import streamlit as st

from analytics.subject_performance import score_band


# ---------------------------------------------------------------------------
# Page definitions
# ---------------------------------------------------------------------------
_PAGES = [
    ("home",        "🏫", "Overview"),
    ("student",     "🎓", "Student Report"),
    ("subjectwise", "📊", "Subject Performance"),
    ("completed",   "✅", "Completed Assessments"),
]

_BAND_COLORS = {
    "good": "#22c55e",
    "fair": "#eab308",
    "poor": "#ef4444",
}

_BLOOM_COLORS = {
    "remember":   "#e03c3c",
    "understand": "#e06a2a",
    "apply":      "#d4aa00",
    "analyze":    "#4caf50",
    "evaluate":   "#2196f3",
    "create":     "#9c27b0",
}

_DIFF_COLORS = {
    "easy":   ("#4caf50", "🟢"),
    "medium": ("#f0c040", "🟡"),
    "hard":   ("#e03c3c", "🔴"),
}


_THEME_CSS = """
<style>
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap');
html, body, [class*="css"] { font-family: 'Inter', sans-serif !important; }
.stApp, section.main > div { background-color: #0b1020; }
[data-testid="stSidebar"] {
    background: #0f162b;
    border-right: 1px solid rgba(59,130,246,0.18);
}
p, label, .stMarkdown { color: #cbd5e1; }
.stTextInput input {
    background: #111a33 !important;
    border: 1px solid rgba(59,130,246,0.3) !important;
    border-radius: 6px !important;
    color: #e2e8f0 !important;
}
.stButton > button {
    background: #16213f !important;
    color: #e2e8f0 !important;
    border: 1px solid rgba(59,130,246,0.35) !important;
    border-radius: 8px !important;
    font-weight: 600 !important;
}
.stButton > button:hover { border-color: #00f5d4 !important; color: #00f5d4 !important; }
.stProgress > div > div { background: #22c55e !important; }
table { width: 100%; border-collapse: collapse; }
th { color: #94a3b8; font-size: 11px; text-transform: uppercase; text-align: left;
     padding: 8px; border-bottom: 1px solid rgba(148,163,184,0.2); }
td { color: #e2e8f0; font-size: 13px; padding: 8px;
     border-bottom: 1px solid rgba(148,163,184,0.08); }
hr { border-color: rgba(148,163,184,0.15) !important; }
</style>
"""


def apply_theme() -> None:
    """Inject the dashboard stylesheet; call right after ``set_page_config``."""
    st.markdown(_THEME_CSS, unsafe_allow_html=True)


def page_header(title: str, subtitle: str = "") -> None:
    sub = (
        f"<p style='color:#64748b;font-size:14px;margin-top:0;'>{html.escape(subtitle)}</p>"
        if subtitle else ""
    )
    st.markdown(
        f"<h1 style='color:#f1f5f9;font-size:28px;margin-bottom:4px;'>{title}</h1>{sub}",
        unsafe_allow_html=True,
    )


# ---------------------------------------------------------------------------
# Sidebar navigation
# ---------------------------------------------------------------------------
def page_nav_sidebar(current_page: str) -> None:
    """Render the brand and the dashboard page list in the sidebar."""
    st.sidebar.markdown(
        "<h2 style='color:#00f5d4;font-size:20px;margin:0;'>🏫 SchoolBoard</h2>"
        "<p style='color:#64748b;font-size:11px;margin-top:0;'>"
        "Assessment &amp; Results Dashboard</p>",
        unsafe_allow_html=True,
    )
    st.sidebar.divider()
    st.sidebar.markdown("**Reports**")
    for key, icon, label in _PAGES:
        if key == current_page:
            st.sidebar.info(f"{icon} **{label}** ◀")
        else:
            st.sidebar.caption(f"{icon} {label}")


# ---------------------------------------------------------------------------
# Metric card
# ---------------------------------------------------------------------------
def metric_card(label: str, value: str, delta: str = "", icon: str = "") -> str:
    """Return HTML for a headline number with its label."""
    parts = [f'<div style="font-size:20px;">{icon}</div>'] if icon else []
    parts.append(
        f'<div style="font-size:24px;font-weight:700;color:#00f5d4;">{html.escape(value)}</div>'
    )
    parts.append(f'<div style="font-size:11px;color:#94a3b8;">{html.escape(label)}</div>')
    if delta:
        parts.append(f'<div style="font-size:11px;color:#22c55e;">{html.escape(delta)}</div>')
    return (
        '<div style="background:#111a33;border:1px solid rgba(148,163,184,0.15);'
        'border-radius:10px;padding:14px 12px;text-align:center;">'
        + "".join(parts)
        + "</div>"
    )


# ---------------------------------------------------------------------------
# Badges
# ---------------------------------------------------------------------------
def _pill(text: str, color: str) -> str:
    return (
        f'<span style="display:inline-block;background:{color}1f;'
        f"border:1px solid {color}73;color:{color};border-radius:999px;"
        f'padding:2px 10px;font-size:11px;font-weight:600;">{text}</span>'
    )


def score_badge(value: float, suffix: str = "%") -> str:
    """Pill coloured by the good / fair / poor band of *value*."""
    return _pill(f"{value:g}{suffix}", _BAND_COLORS[score_band(value)])


def bloom_badge(level: str) -> str:
    color = _BLOOM_COLORS.get(level.strip().lower(), "#94a3b8")
    return _pill(html.escape(level.strip().title()), color)


def difficulty_badge(level: str) -> str:
    color, dot = _DIFF_COLORS.get(level.strip().lower(), ("#94a3b8", "⚪"))
    return _pill(f"{dot} {html.escape(level.strip().title())}", color)
