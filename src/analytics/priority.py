"""
src/analytics/priority.py
─────────────────────────
Alarm prioritization engine.

Initial classification (weighted factors ∈ [0, 1]):
  deviation        35%  : position inside the warning / alarm band
  change_rate      20%  : movement over the last 5 history samples
  criticality      35%  : static safety impact of the tag
  time_unack       10%  : always 0 at classification time

  +0.1 when the event is an alarm (vs. a warning).
  score > 0.75 → 1, > 0.55 → 2, > 0.35 → 3, else → 4.

Risk score ∈ [0, 100] layered on top of priority:
  (5 − priority) × 18 + min(minutes × 1.5, 25) + 10 (alarm) + 8 (escalated)

Everything here is pure; the caller owns the refresh schedule and persistence.
Numeric input is not validated: NaN propagates instead of raising.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta

import numpy as np

from config.alarms import (
    ALARM_KIND_BONUS,
    PRIORITIES,
    PRIORITY_THRESHOLDS,
    PRIORITY_WEIGHTS,
    RESPONSE_TIME_LIMITS,
    RISK_ALARM_BONUS,
    RISK_BASE_PER_LEVEL,
    RISK_ESCALATION_BONUS,
    RISK_TIME_BONUS_CAP,
    RISK_TIME_BONUS_PER_MIN,
    TAG_PREFIX_CATEGORY,
    AlarmCategory,
    AlarmKind,
)
from config.tags import DEFAULT_CRITICALITY, EQUIPMENT_CRITICALITY
from src.data.models import Alarm, AlarmSummary, TagData

logger = logging.getLogger(__name__)

CHANGE_RATE_WINDOW = 5
CHANGE_RATE_MIN_SAMPLES = 3
CHANGE_RATE_GAIN = 5.0


def _ratio(num: float, den: float) -> float:
    # Float division that yields inf / nan instead of ZeroDivisionError
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(num) / np.float64(den))


# ── Factors ───────────────────────────────────────────────────────────────────


def calculate_deviation_severity(tag: TagData) -> float:
    """
    How far the value sits into the warning / alarm zone.

    Inside the normal band → 0.
    Warning band → 0.4–0.8, linear between the warning and alarm limits.
    Beyond the alarm limit → 0.8–1.0, scaled by the overshoot relative to the
    warning-to-alarm gap (gap of 0 treated as 1).
    """
    value = tag.current_value
    lim = tag.limits

    if value >= lim.high_alarm:
        gap = (lim.high_alarm - lim.high_warning) or 1
        return min(0.8 + _ratio(value - lim.high_alarm, gap) * 0.2, 1.0)
    if value <= lim.low_alarm:
        gap = (lim.low_warning - lim.low_alarm) or 1
        return min(0.8 + _ratio(lim.low_alarm - value, gap) * 0.2, 1.0)
    if value >= lim.high_warning:
        return 0.4 + _ratio(value - lim.high_warning, lim.high_alarm - lim.high_warning) * 0.4
    if value <= lim.low_warning:
        return 0.4 + _ratio(lim.low_warning - value, lim.low_warning - lim.low_alarm) * 0.4
    return 0.0


def calculate_change_rate(tag: TagData) -> float:
    """Net movement over the last 5 samples, relative to the alarm range, ×5, capped at 1."""
    if len(tag.history) < CHANGE_RATE_MIN_SAMPLES:
        return 0.0

    recent = tag.history[-CHANGE_RATE_WINDOW:]
    change = abs(recent[-1].value - recent[0].value)
    return min(_ratio(change, tag.limits.alarm_range) * CHANGE_RATE_GAIN, 1.0)


def get_criticality(tag_id: str) -> float:
    return EQUIPMENT_CRITICALITY.get(tag_id, DEFAULT_CRITICALITY)


def determine_category(tag_id: str) -> AlarmCategory:
    """Temperature / pressure → safety, flow / level → equipment, rest → process."""
    prefix = tag_id.split("-")[0]
    return TAG_PREFIX_CATEGORY.get(prefix, AlarmCategory.PROCESS)


# ── Classification ────────────────────────────────────────────────────────────


def priority_score(tag: TagData, is_alarm_kind: bool, minutes_unacknowledged: float = 0.0) -> float:
    w = PRIORITY_WEIGHTS
    score = (
        w["deviation"] * calculate_deviation_severity(tag)
        + w["change_rate"] * calculate_change_rate(tag)
        + w["criticality"] * get_criticality(tag.id)
        + w["time_unacknowledged"] * min(minutes_unacknowledged / 30.0, 1.0)
    )
    return score + ALARM_KIND_BONUS if is_alarm_kind else score


def score_to_priority(score: float) -> int:
    for bound, priority in PRIORITY_THRESHOLDS:
        if score > bound:
            return priority
    return PRIORITIES[-1]


def calculate_priority(tag: TagData, is_alarm_kind: bool) -> int:
    """Initial priority (1 = most urgent) for a tag that just left the normal band."""
    return score_to_priority(priority_score(tag, is_alarm_kind))


# ── Time-dependent urgency ────────────────────────────────────────────────────


def calculate_risk_score(alarm: Alarm, now: datetime) -> int:
    base = (5 - alarm.priority) * RISK_BASE_PER_LEVEL
    minutes = (now - alarm.timestamp).total_seconds() / 60.0
    time_bonus = min(minutes * RISK_TIME_BONUS_PER_MIN, RISK_TIME_BONUS_CAP)
    kind_bonus = RISK_ALARM_BONUS if alarm.kind == AlarmKind.ALARM else 0
    escalation_bonus = RISK_ESCALATION_BONUS if alarm.escalated else 0

    raw = base + time_bonus + kind_bonus + escalation_bonus
    # half-up rounding
    return int(min(max(math.floor(raw + 0.5), 0), 100))


def calculate_response_deadline(alarm: Alarm) -> datetime:
    return alarm.timestamp + timedelta(minutes=RESPONSE_TIME_LIMITS[alarm.priority])


def check_escalation(alarm: Alarm, now: datetime) -> bool:
    """
    True when an open alarm has outlived its response deadline.

    Acknowledgement always wins: an acknowledged alarm never escalates.
    """
    if alarm.acknowledged or alarm.escalated:
        return False
    deadline = alarm.response_deadline or calculate_response_deadline(alarm)
    return now > deadline


def get_escalated_priority(priority: int) -> int:
    return max(1, priority - 1)


def refresh_alarm(alarm: Alarm, now: datetime) -> Alarm:
    """
    One periodic recomputation step: escalate if overdue, then rescore.

    Returns a new Alarm; acknowledged alarms come back unchanged. Calling it
    twice with the same `now` gives the same result.
    """
    if alarm.acknowledged:
        return alarm

    if check_escalation(alarm, now):
        escalated = alarm.model_copy(
            update={"priority": get_escalated_priority(alarm.priority), "escalated": True}
        )
        alarm = escalated.model_copy(update={"response_deadline": calculate_response_deadline(escalated)})
        logger.warning("Alarm %s on %s escalated to priority %d", alarm.id, alarm.tag_id, alarm.priority)

    return alarm.model_copy(update={"risk_score": calculate_risk_score(alarm, now)})


# ── Ordering ──────────────────────────────────────────────────────────────────


def _group_key(alarm: Alarm) -> tuple:
    return (-alarm.risk_score, alarm.timestamp)


def sort_alarms(alarms: list[Alarm]) -> list[Alarm]:
    """Priority ascending, then risk descending, then oldest first. Stable."""
    return sorted(alarms, key=lambda a: (a.priority, *_group_key(a)))


def group_alarms_by_priority(alarms: list[Alarm]) -> dict[int, list[Alarm]]:
    groups: dict[int, list[Alarm]] = {p: [] for p in PRIORITIES}
    for alarm in alarms:
        groups[alarm.priority].append(alarm)
    return {p: sorted(members, key=_group_key) for p, members in groups.items()}


def summarize_alarms(alarms: list[Alarm]) -> AlarmSummary:
    acked = sum(1 for a in alarms if a.acknowledged)
    return AlarmSummary(
        total=len(alarms),
        acknowledged=acked,
        unacknowledged=len(alarms) - acked,
        by_kind={
            AlarmKind.ALARM.value: sum(1 for a in alarms if a.kind == AlarmKind.ALARM),
            AlarmKind.WARNING.value: sum(1 for a in alarms if a.kind == AlarmKind.WARNING),
        },
    )


def format_remaining_time(deadline: datetime, now: datetime) -> str:
    """Countdown text: "overdue", "M:SS" or "Ns"."""
    remaining = (deadline - now).total_seconds()
    if remaining <= 0:
        return "overdue"

    minutes = int(remaining // 60)
    seconds = int(remaining % 60)
    if minutes > 0:
        return f"{minutes}:{seconds:02d}"
    return f"{seconds}s"
