"""
src/data/models.py
──────────────────
Pydantic v2 data models for process tags, alarms, causal links, fault trees,
bow-ties and shift handover records.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from config.alarms import AlarmCategory, AlarmKind
from config.fault_trees import BowTieEventType
from config.tags import TagStatus
from src.analytics.thresholds import calculate_status


class TagLimits(BaseModel):
    high_alarm: float
    high_warning: float
    low_warning: float
    low_alarm: float

    @model_validator(mode="after")
    def _check_order(self) -> "TagLimits":
        if not (self.low_alarm < self.low_warning < self.high_warning < self.high_alarm):
            raise ValueError("limits must satisfy low_alarm < low_warning < high_warning < high_alarm")
        return self

    @property
    def alarm_range(self) -> float:
        return self.high_alarm - self.low_alarm


class TagPosition(BaseModel):
    x: float = Field(ge=0.0, le=100.0)
    y: float = Field(ge=0.0, le=100.0)


class DataPoint(BaseModel):
    timestamp: datetime
    value: float
    predicted: float | None = None


class TagData(BaseModel):
    id: str
    name: str
    description: str
    unit: str
    current_value: float
    setpoint: float
    predicted_value: float
    limits: TagLimits
    position: TagPosition
    area_id: str | None = None
    history: list[DataPoint] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> TagStatus:
        return calculate_status(self.current_value, self.limits)


class Alarm(BaseModel):
    id: str
    tag_id: str
    tag_name: str
    message: str
    kind: AlarmKind
    timestamp: datetime
    acknowledged: bool = False
    acknowledged_by: str | None = None
    acknowledged_at: datetime | None = None
    priority: int = Field(default=4, ge=1, le=4)
    category: AlarmCategory = AlarmCategory.PROCESS
    risk_score: int = Field(default=0, ge=0, le=100)
    response_deadline: datetime | None = None
    escalated: bool = False
    upstream_causes: list[str] = Field(default_factory=list)

    def acknowledge(self, by: str, at: datetime) -> "Alarm":
        """Return an acknowledged copy. Acknowledgement is never undone."""
        if self.acknowledged:
            return self
        return self.model_copy(update={"acknowledged": True, "acknowledged_by": by, "acknowledged_at": at})


class CausalLink(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    contribution: float = Field(default=50.0, ge=0.0, le=100.0)
    description: str | None = None


class CausalityGraph(BaseModel):
    version: str = "1.0.0"
    links: list[CausalLink] = Field(default_factory=list)


class FaultTree(BaseModel):
    """Causal links converging on one top-event tag."""

    id: str
    name: str
    area_id: str
    top_event_tag_id: str
    links: list[CausalLink] = Field(default_factory=list)


class BowTieEvent(BaseModel):
    id: str
    type: BowTieEventType
    label: str
    tag_id: str | None = None
    position: TagPosition


class BowTieLink(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: str = Field(alias="from")
    to: str


class BowTie(BaseModel):
    """
    Threats and barriers on the left of a top event, recovery measures and
    consequences on the right. Links may only join events of the same bow-tie.
    """

    id: str
    name: str
    area_id: str
    top_event_id: str
    events: list[BowTieEvent]
    links: list[BowTieLink] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> "BowTie":
        ids = {e.id for e in self.events}
        top = next((e for e in self.events if e.id == self.top_event_id), None)
        if top is None or top.type != BowTieEventType.TOP_EVENT:
            raise ValueError(f"top event {self.top_event_id!r} must be one of the top_event events")
        dangling = [f"{link.from_}->{link.to}" for link in self.links if link.from_ not in ids or link.to not in ids]
        if dangling:
            raise ValueError(f"links reference unknown events: {', '.join(dangling)}")
        return self


class AlarmSummary(BaseModel):
    total: int = 0
    acknowledged: int = 0
    unacknowledged: int = 0
    by_kind: dict[str, int] = Field(default_factory=lambda: {"alarm": 0, "warning": 0})


class Shift(BaseModel):
    id: str
    operator_id: str
    operator_name: str
    shift_type: str
    start_time: datetime
    end_time: datetime | None = None
    handover_notes: str | None = None
    alarm_summary: AlarmSummary | None = None
    status: str = "active"


class ShiftEvent(BaseModel):
    id: str
    shift_id: str
    operator_id: str
    operator_name: str
    event_type: str = Field(pattern="^(general|emergency|maintenance|inspection|other)$")
    title: str = Field(min_length=1)
    description: str | None = None
    severity: str = Field(default="info", pattern="^(info|warning|critical)$")
    created_at: datetime
