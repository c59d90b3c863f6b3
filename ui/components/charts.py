"""SchoolBoard — Plotly chart builders.

Figures for the report pages: the score trend line, subject bars
(average vs. pass rate), the performance distribution donut, and the
concept/difficulty/Bloom mastery bars.  Every builder returns an empty
figure with a hint annotation when there is nothing to plot.
"""

from __future__ import annotations

from typing import Mapping, Sequence

import plotly.graph_objects as go

from analytics.subject_performance import score_band
from models.report import DistributionSlice, LabelStats, SubjectPerformance, TrendPoint

_BG = "#0b1020"
_PLOT_BG = "#111a33"
_ACCENT = "#00f5d4"
_GRID = "rgba(255,255,255,0.07)"


def _empty_figure(message: str, height: int) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        x=0.5, y=0.5, xref="paper", yref="paper", showarrow=False,
        font=dict(color="#888", size=15),
    )
    fig.update_layout(
        paper_bgcolor=_BG, plot_bgcolor=_BG, height=height,
        xaxis=dict(visible=False), yaxis=dict(visible=False),
    )
    return fig


_BAND_COLORS = {"good": "#00e676", "fair": "#f0c040", "poor": "#e03c3c"}


def _accuracy_color(pct: float) -> str:
    """Colour of the table band *pct* falls in."""
    return _BAND_COLORS[score_band(pct)]


# ---------------------------------------------------------------------------
# Score trend
# ---------------------------------------------------------------------------
def create_trend_chart(
    trend: Sequence[TrendPoint],
    title: str = "Performance Trend",
    height: int = 300,
) -> go.Figure:
    """Line chart of percentage score per attempt, in chronological order.

    Attempts without a date are labelled by their position so the x axis
    never collapses duplicate blank labels.
    """
    if not trend:
        return _empty_figure("No test results yet", height)

    labels = [p.date or f"#{i + 1}" for i, p in enumerate(trend)]
    fig = go.Figure(go.Scatter(
        x=list(range(len(trend))),
        y=[p.percentage for p in trend],
        mode="lines+markers",
        line=dict(color="#2563eb", width=2, shape="spline"),
        marker=dict(size=6, color=_ACCENT),
        customdata=labels,
        hovertemplate="%{customdata}<br>%{y:.1f}%<extra></extra>",
        name="Score",
    ))
    fig.update_layout(
        title=dict(text=title, font=dict(color=_ACCENT, size=15)),
        paper_bgcolor=_BG,
        plot_bgcolor=_PLOT_BG,
        font=dict(color="#eee"),
        xaxis=dict(
            tickmode="array",
            tickvals=list(range(len(trend))),
            ticktext=labels,
            tickangle=-30,
            gridcolor="rgba(255,255,255,0.05)",
        ),
        yaxis=dict(range=[0, 100], ticksuffix="%", gridcolor=_GRID),
        margin=dict(t=50, b=60, l=40, r=20),
        height=height,
        showlegend=False,
    )
    return fig


# ---------------------------------------------------------------------------
# Subject performance
# ---------------------------------------------------------------------------
def create_subject_bar_chart(
    rows: Sequence[SubjectPerformance],
    height: int = 320,
) -> go.Figure:
    """Grouped bars: average score and pass rate per subject."""
    if not rows:
        return _empty_figure("No subject performance data", height)

    names = [r.subject_name for r in rows]
    fig = go.Figure(data=[
        go.Bar(
            name="Average Score",
            x=names, y=[r.average_score for r in rows],
            marker_color="#3b82f6",
            marker_line=dict(width=0),
        ),
        go.Bar(
            name="Pass Rate",
            x=names, y=[r.pass_rate for r in rows],
            marker_color="#10b981",
            marker_line=dict(width=0),
        ),
    ])
    fig.update_layout(
        barmode="group",
        paper_bgcolor=_BG,
        plot_bgcolor=_PLOT_BG,
        font=dict(color="#eee"),
        legend=dict(bgcolor="rgba(0,0,0,0.4)", font=dict(color="#ccc")),
        xaxis=dict(tickangle=-30, tickfont=dict(size=10)),
        yaxis=dict(range=[0, 105], ticksuffix="%", gridcolor=_GRID),
        margin=dict(t=20, b=80, l=40, r=20),
        height=height,
    )
    return fig


def create_distribution_donut(
    slices: Sequence[DistributionSlice],
    height: int = 300,
) -> go.Figure:
    """Donut of subjects per Excellent / Good / At-Risk bucket."""
    if not slices:
        return _empty_figure("Not enough data to show distribution", height)

    fig = go.Figure(go.Pie(
        labels=[s.name for s in slices],
        values=[s.value for s in slices],
        marker=dict(colors=[s.color for s in slices]),
        hole=0.6,
        textinfo="percent",
        hovertemplate="%{label}: %{value} subjects<extra></extra>",
        sort=False,
    ))
    fig.update_layout(
        paper_bgcolor=_BG,
        font=dict(color="#eee"),
        legend=dict(orientation="h", y=-0.1, font=dict(color="#ccc")),
        margin=dict(t=10, b=10, l=10, r=10),
        height=height,
    )
    return fig


# ---------------------------------------------------------------------------
# Concept / difficulty / Bloom mastery
# ---------------------------------------------------------------------------
def create_mastery_bars(
    data: Mapping[str, LabelStats],
    title: str,
    height: int = 260,
) -> go.Figure:
    """Horizontal bars of average accuracy per label, with attempt counts."""
    if not data:
        return _empty_figure("No data", height)

    labels = list(data)
    accs = [data[k].avg_acc for k in labels]
    fig = go.Figure(go.Bar(
        x=accs,
        y=labels,
        orientation="h",
        marker_color=[_accuracy_color(a) for a in accs],
        text=[f"{a:.1f}% ({data[k].count})" for k, a in zip(labels, accs)],
        textposition="auto",
        hovertemplate="%{y}: %{x:.1f}%<extra></extra>",
    ))
    fig.update_layout(
        title=dict(text=title, font=dict(color=_ACCENT, size=14)),
        paper_bgcolor=_BG,
        plot_bgcolor=_PLOT_BG,
        font=dict(color="#eee"),
        xaxis=dict(range=[0, 100], ticksuffix="%", gridcolor=_GRID),
        yaxis=dict(autorange="reversed"),
        margin=dict(t=40, b=20, l=10, r=20),
        height=height,
    )
    return fig
