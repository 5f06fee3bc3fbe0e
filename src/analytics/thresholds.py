"""
src/analytics/thresholds.py
────────────────────────────
Tag status classification against configured limits.

Provides:
  - Status evaluation: normal / warning / alarm from (value, limits) alone
  - Limit line definitions for Plotly chart overlays
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from config.alarms import STATUS_COLORS
from config.tags import TagStatus

if TYPE_CHECKING:
    from src.data.models import TagLimits


def calculate_status(value: float, limits: TagLimits) -> TagStatus:
    """
    Classify a value against a tag's limits.

    Limit values themselves count as crossed (value == high_alarm is alarm).
    """
    if value >= limits.high_alarm or value <= limits.low_alarm:
        return TagStatus.ALARM
    if value >= limits.high_warning or value <= limits.low_warning:
        return TagStatus.WARNING
    return TagStatus.NORMAL


def is_abnormal(status: TagStatus | str) -> bool:
    return TagStatus(status) in (TagStatus.WARNING, TagStatus.ALARM)


# ── Chart helpers ─────────────────────────────────────────────────────────────

def limit_lines(limits: TagLimits) -> list[dict]:
    """Horizontal reference lines (value, label, colour, dash) for a trend chart."""
    warn = STATUS_COLORS["warning"]
    alarm = STATUS_COLORS["alarm"]
    return [
        {"y": limits.high_alarm, "label": "HH", "color": alarm, "dash": "solid"},
        {"y": limits.high_warning, "label": "H", "color": warn, "dash": "dot"},
        {"y": limits.low_warning, "label": "L", "color": warn, "dash": "dot"},
        {"y": limits.low_alarm, "label": "LL", "color": alarm, "dash": "solid"},
    ]


def get_status_color(status: TagStatus | str) -> str:
    return STATUS_COLORS[TagStatus(status).value]
