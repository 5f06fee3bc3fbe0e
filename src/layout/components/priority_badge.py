"""
src/layout/components/priority_badge.py
────────────────────────────────────────
Alarm priority and tag status badges.
"""

from dash import html

from config.alarms import PRIORITY_COLORS, PRIORITY_LABELS_EN
from src.analytics.thresholds import get_status_color


def _badge(label: str, color: str) -> html.Span:
    return html.Span(
        label,
        style={
            "fontSize": ".65rem",
            "fontWeight": "700",
            "color": color,
            "border": f"1px solid {color}",
            "borderRadius": "4px",
            "padding": "1px 7px",
            "whiteSpace": "nowrap",
        },
    )


def priority_badge(priority: int) -> html.Span:
    """Inline P1–P4 badge with color-coded border."""
    return _badge(f"P{priority} {PRIORITY_LABELS_EN.get(priority, '')}".strip(), PRIORITY_COLORS.get(priority, "#8b949e"))


def status_badge(status: str) -> html.Span:
    return _badge(status.upper(), get_status_color(status))
