"""
src/data/simulator.py
─────────────────────
Synthetic tag data for the FCC unit.

Generates:
  - Initial tags with a 30-sample minute-spaced history around the base value
  - One sampling tick per call to update_tag(): bounded random walk, predicted
    value pulled toward the setpoint, history ring with oldest sample evicted
  - Alarms from status transitions via generate_alarm()

Design:
  - Reproducible with SIMULATION_SEED through a numpy Generator
  - Values wander up to 10 units past the alarm limits, never further
"""
from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime, timedelta

import numpy as np

from config.alarms import AlarmKind
from config.settings import settings
from config.tags import TAG_DEFINITIONS, TagDefinition, TagStatus
from src.analytics.causality import find_causal_chain, upstream_tag_ids
from src.analytics.priority import (
    calculate_priority,
    calculate_response_deadline,
    calculate_risk_score,
    determine_category,
)
from src.data.models import Alarm, CausalityGraph, DataPoint, TagData, TagLimits, TagPosition

logger = logging.getLogger(__name__)

WALK_STEP = 2.0          # ± per tick
PREDICTION_GAIN = 0.1    # pull toward setpoint
PREDICTION_NOISE = 1.0
LIMIT_OVERSHOOT = 10.0
HISTORY_NOISE = 5.0
HISTORY_PRED_NOISE = 2.0


def append_history(history: list[DataPoint], point: DataPoint, capacity: int = settings.HISTORY_POINTS) -> list[DataPoint]:
    """Ring insert: keep the newest `capacity` samples."""
    return [*history[-(capacity - 1):], point] if capacity > 1 else [point]


def _generate_history(
    base_value: float,
    now: datetime,
    rng: np.random.Generator,
    points: int = settings.HISTORY_POINTS,
) -> list[DataPoint]:
    history: list[DataPoint] = []
    for i in range(points - 1, -1, -1):
        value = base_value + rng.uniform(-HISTORY_NOISE, HISTORY_NOISE)
        predicted = value + rng.uniform(-HISTORY_PRED_NOISE, HISTORY_PRED_NOISE)
        history.append(DataPoint(
            timestamp=now - timedelta(minutes=i),
            value=round(float(value), 1),
            predicted=round(float(predicted), 1),
        ))
    return history


def build_tag(definition: TagDefinition, now: datetime, rng: np.random.Generator) -> TagData:
    return TagData(
        id=definition.id,
        name=definition.id,
        description=definition.description,
        unit=definition.unit,
        current_value=definition.base_value,
        setpoint=definition.setpoint,
        predicted_value=definition.base_value,
        limits=TagLimits(
            high_alarm=definition.high_alarm,
            high_warning=definition.high_warning,
            low_warning=definition.low_warning,
            low_alarm=definition.low_alarm,
        ),
        position=TagPosition(x=definition.x, y=definition.y),
        area_id=definition.area_id,
        history=_generate_history(definition.base_value, now, rng),
    )


# ── Public API ────────────────────────────────────────────────────────────────

def create_initial_tags(rng: np.random.Generator | None = None, now: datetime | None = None) -> list[TagData]:
    """Every configured FCC tag at its base value."""
    rng = rng if rng is not None else np.random.default_rng(settings.SIMULATION_SEED)
    now = now or datetime.now(tz=UTC)
    return [build_tag(d, now, rng) for d in TAG_DEFINITIONS.values()]


def update_tag(tag: TagData, rng: np.random.Generator, now: datetime | None = None) -> TagData:
    """One sampling tick. Returns a new TagData; status follows from the new value."""
    now = now or datetime.now(tz=UTC)
    lim = tag.limits

    new_value = float(np.clip(
        tag.current_value + rng.uniform(-WALK_STEP, WALK_STEP),
        lim.low_alarm - LIMIT_OVERSHOOT,
        lim.high_alarm + LIMIT_OVERSHOOT,
    ))
    predicted = round(float(
        new_value
        + (tag.setpoint - new_value) * PREDICTION_GAIN
        + rng.uniform(-PREDICTION_NOISE, PREDICTION_NOISE)
    ), 1)
    # the newest history sample is exactly the value status is judged on
    new_value = round(new_value, 1)

    return tag.model_copy(update={
        "current_value": new_value,
        "predicted_value": predicted,
        "history": append_history(tag.history, DataPoint(timestamp=now, value=new_value, predicted=predicted)),
    })


def generate_alarm(
    tag: TagData,
    previous_status: TagStatus,
    now: datetime | None = None,
    graph: CausalityGraph | None = None,
) -> Alarm | None:
    """
    Mint an Alarm when the status changed and is not normal.

    The alarm arrives fully classified: priority, category, response deadline,
    initial risk score and, when a graph is given, the upstream cause tags.
    """
    status = tag.status
    if status == previous_status or status == TagStatus.NORMAL:
        return None

    now = now or datetime.now(tz=UTC)
    kind = AlarmKind.ALARM if status == TagStatus.ALARM else AlarmKind.WARNING
    side = "High" if tag.current_value > tag.setpoint else "Low"
    causes = upstream_tag_ids(find_causal_chain(tag.id, graph)) if graph is not None else []

    alarm = Alarm(
        id=f"alarm-{uuid.uuid4().hex[:12]}-{tag.id}",
        tag_id=tag.id,
        tag_name=tag.name,
        message=f"{tag.description} {side} {kind.value.capitalize()}: {tag.current_value}{tag.unit}",
        kind=kind,
        timestamp=now,
        priority=calculate_priority(tag, kind == AlarmKind.ALARM),
        category=determine_category(tag.id),
        upstream_causes=causes,
    )
    alarm = alarm.model_copy(update={
        "response_deadline": calculate_response_deadline(alarm),
        "risk_score": calculate_risk_score(alarm, now),
    })
    logger.info("New %s on %s (priority %d): %s", kind.value, tag.id, alarm.priority, alarm.message)
    return alarm
