"""
tests/test_simulator.py
────────────────────────
Tests for the synthetic tag simulator and alarm generation.
"""
from datetime import timedelta

import numpy as np

from config.alarms import AlarmCategory, AlarmKind
from config.tags import TAG_IDS, TagStatus
from src.analytics.causality import default_graph
from src.data.models import DataPoint
from src.data.simulator import append_history, create_initial_tags, generate_alarm, update_tag


class TestCreateInitialTags:
    def test_every_configured_tag(self, rng, now):
        tags = create_initial_tags(rng, now)
        assert [t.id for t in tags] == TAG_IDS
        assert len(tags) == 19

    def test_start_normal_at_base_value(self, rng, now):
        for tag in create_initial_tags(rng, now):
            assert tag.status == TagStatus.NORMAL
            assert tag.predicted_value == tag.current_value

    def test_history_is_minute_spaced(self, rng, now):
        tag = create_initial_tags(rng, now)[0]
        assert len(tag.history) == 30
        assert tag.history[-1].timestamp == now
        assert tag.history[0].timestamp == now - timedelta(minutes=29)

    def test_reproducible_with_seed(self, now):
        a = create_initial_tags(np.random.default_rng(7), now)
        b = create_initial_tags(np.random.default_rng(7), now)
        assert a == b


class TestUpdateTag:
    def test_returns_new_tag(self, make_tag, rng, now):
        tag = make_tag(520.0)
        updated = update_tag(tag, rng, now)
        assert updated is not tag
        assert tag.current_value == 520.0
        assert abs(updated.current_value - 520.0) <= 2.05

    def test_value_rounded_to_one_decimal(self, make_tag, rng, now):
        updated = update_tag(make_tag(520.0), rng, now)
        assert round(updated.current_value, 1) == updated.current_value

    def test_newest_history_sample_matches_current_value(self, make_tag, rng, now):
        tag = make_tag(520.0)
        for i in range(20):
            tag = update_tag(tag, rng, now + timedelta(seconds=2 * i))
            assert tag.history[-1].value == tag.current_value
            assert tag.history[-1].predicted == tag.predicted_value

    def test_stays_within_overshoot_bounds(self, make_tag, rng, now):
        tag = make_tag(559.0)
        for i in range(500):
            tag = update_tag(tag, rng, now + timedelta(seconds=2 * i))
            assert 480.0 <= tag.current_value <= 560.0

    def test_history_ring_capacity(self, make_tag, rng, now):
        tag = make_tag(520.0, history=[520.0] * 30)
        updated = update_tag(tag, rng, now + timedelta(minutes=1))
        assert len(updated.history) == 30
        assert updated.history[-1].timestamp == now + timedelta(minutes=1)
        assert updated.history[0] == tag.history[1]

    def test_append_history_grows_until_full(self, now):
        history: list[DataPoint] = []
        for i in range(5):
            history = append_history(history, DataPoint(timestamp=now, value=float(i)), capacity=3)
        assert [p.value for p in history] == [2.0, 3.0, 4.0]


class TestGenerateAlarm:
    def test_no_alarm_when_status_unchanged(self, make_tag, now):
        assert generate_alarm(make_tag(545.0), TagStatus.WARNING, now) is None

    def test_no_alarm_on_return_to_normal(self, make_tag, now):
        assert generate_alarm(make_tag(520.0), TagStatus.WARNING, now) is None

    def test_high_warning(self, make_tag, now):
        alarm = generate_alarm(make_tag(545.0), TagStatus.NORMAL, now)
        assert alarm is not None
        assert alarm.kind == AlarmKind.WARNING
        assert alarm.message == "Reactor temperature High Warning: 545.0°C"
        assert alarm.priority == 3
        assert alarm.category == AlarmCategory.SAFETY
        assert alarm.response_deadline == now + timedelta(minutes=15)
        assert alarm.risk_score == 36
        assert alarm.acknowledged is False
        assert alarm.timestamp == now

    def test_low_alarm(self, make_tag, now):
        alarm = generate_alarm(make_tag(485.0), TagStatus.WARNING, now)
        assert alarm.kind == AlarmKind.ALARM
        assert alarm.message == "Reactor temperature Low Alarm: 485.0°C"

    def test_escalation_from_warning_to_alarm(self, make_tag, now):
        alarm = generate_alarm(make_tag(552.0), TagStatus.WARNING, now)
        assert alarm.kind == AlarmKind.ALARM

    def test_upstream_causes_from_graph(self, make_tag, now):
        alarm = generate_alarm(make_tag(545.0), TagStatus.NORMAL, now, default_graph())
        assert alarm.upstream_causes == ["FI-101", "TI-201"]

    def test_no_graph_no_causes(self, make_tag, now):
        assert generate_alarm(make_tag(545.0), TagStatus.NORMAL, now).upstream_causes == []

    def test_unique_ids(self, make_tag, now):
        a = generate_alarm(make_tag(545.0), TagStatus.NORMAL, now)
        b = generate_alarm(make_tag(545.0), TagStatus.NORMAL, now)
        assert a.id != b.id
        assert a.id.endswith("TI-101")
