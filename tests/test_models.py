"""
tests/test_models.py
─────────────────────
Tests for Pydantic v2 data models.
"""
import pytest
from pydantic import ValidationError

from config.alarms import AlarmCategory, AlarmKind
from config.tags import TagStatus
from src.data.models import AlarmSummary, CausalLink, ShiftEvent, TagLimits, TagPosition


class TestTagLimits:
    def test_valid_limits(self):
        limits = TagLimits(high_alarm=550.0, high_warning=540.0, low_warning=500.0, low_alarm=490.0)
        assert limits.alarm_range == 60.0

    def test_out_of_order_rejected(self):
        with pytest.raises(ValidationError):
            TagLimits(high_alarm=540.0, high_warning=550.0, low_warning=500.0, low_alarm=490.0)

    def test_equal_limits_rejected(self):
        with pytest.raises(ValidationError):
            TagLimits(high_alarm=550.0, high_warning=550.0, low_warning=500.0, low_alarm=490.0)


class TestTagData:
    def test_status_follows_value(self, make_tag):
        assert make_tag(520.0).status == TagStatus.NORMAL
        assert make_tag(545.0).status == TagStatus.WARNING
        assert make_tag(551.0).status == TagStatus.ALARM

    def test_status_in_dump(self, make_tag):
        assert make_tag(545.0).model_dump()["status"] == TagStatus.WARNING

    def test_position_bounds(self):
        with pytest.raises(ValidationError):
            TagPosition(x=101.0, y=50.0)


class TestAlarm:
    def test_defaults(self, make_alarm):
        alarm = make_alarm()
        assert alarm.acknowledged is False
        assert alarm.escalated is False
        assert alarm.risk_score == 0
        assert alarm.upstream_causes == []
        assert alarm.kind == AlarmKind.WARNING
        assert alarm.category == AlarmCategory.SAFETY

    @pytest.mark.parametrize("priority", [0, 5])
    def test_priority_bounds(self, make_alarm, priority):
        with pytest.raises(ValidationError):
            make_alarm(priority=priority)

    def test_risk_bounds(self, make_alarm):
        with pytest.raises(ValidationError):
            make_alarm(risk_score=101)

    def test_unknown_kind_rejected(self, make_alarm):
        with pytest.raises(ValidationError):
            make_alarm(kind="critical")

    def test_acknowledge_returns_copy(self, make_alarm, now):
        alarm = make_alarm()
        acked = alarm.acknowledge("alice", now)
        assert acked.acknowledged is True
        assert acked.acknowledged_by == "alice"
        assert acked.acknowledged_at == now
        assert alarm.acknowledged is False

    def test_acknowledge_is_one_way(self, make_alarm, now):
        acked = make_alarm().acknowledge("alice", now)
        again = acked.acknowledge("bob", now)
        assert again.acknowledged_by == "alice"


class TestCausalLink:
    def test_alias_round_trip(self):
        link = CausalLink.model_validate({"from": "FI-101", "to": "TI-101", "contribution": 65})
        assert link.from_ == "FI-101"
        assert link.model_dump(by_alias=True, exclude_none=True) == {"from": "FI-101", "to": "TI-101", "contribution": 65.0}

    def test_optional_description(self):
        assert CausalLink(from_="A", to="B").description is None
        link = CausalLink.model_validate({"from": "A", "to": "B", "description": "A heats B"})
        assert link.model_dump(by_alias=True)["description"] == "A heats B"

    def test_default_contribution(self):
        assert CausalLink(from_="A", to="B").contribution == 50.0

    def test_contribution_bounds(self):
        with pytest.raises(ValidationError):
            CausalLink(from_="A", to="B", contribution=120)

    def test_frozen(self):
        link = CausalLink(from_="A", to="B")
        with pytest.raises(ValidationError):
            link.to = "C"


class TestShiftModels:
    def test_summary_defaults(self):
        assert AlarmSummary().by_kind == {"alarm": 0, "warning": 0}

    def test_event_type_checked(self, now):
        with pytest.raises(ValidationError):
            ShiftEvent(
                id="e1", shift_id="s1", operator_id="op", operator_name="op",
                event_type="party", title="x", created_at=now,
            )

    def test_event_title_required(self, now):
        with pytest.raises(ValidationError):
            ShiftEvent(
                id="e1", shift_id="s1", operator_id="op", operator_name="op",
                event_type="general", title="", created_at=now,
            )
