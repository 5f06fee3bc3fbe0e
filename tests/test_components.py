"""
tests/test_components.py
─────────────────────────
Tests for the shared badge and card components.
"""
import inspect

from config.alarms import PRIORITY_COLORS, STATUS_COLORS
from src.layout.components.kpi_card import kpi_card
from src.layout.components.priority_badge import priority_badge, status_badge


class TestPriorityBadge:
    def test_label_and_color(self):
        badge = priority_badge(1)
        assert badge.children == "P1 Emergency"
        assert badge.style["color"] == PRIORITY_COLORS[1]

    def test_every_priority_has_an_english_label(self):
        assert [priority_badge(p).children for p in (1, 2, 3, 4)] == [
            "P1 Emergency", "P2 High", "P3 Medium", "P4 Low",
        ]

    def test_takes_only_the_priority(self):
        assert list(inspect.signature(priority_badge).parameters) == ["priority"]


class TestStatusBadge:
    def test_upper_case_label(self):
        assert status_badge("alarm").children == "ALARM"
        assert status_badge("normal").children == "NORMAL"


class TestKpiCard:
    def test_alarming_color_only_when_non_zero(self):
        hot = kpi_card("In Alarm", 2, alarming="alarm")
        calm = kpi_card("In Alarm", 0, alarming="alarm")
        assert hot.style["borderLeft"] == f"3px solid {STATUS_COLORS['alarm']}"
        assert calm.style["borderLeft"] == f"3px solid {STATUS_COLORS['normal']}"

    def test_total_suffix(self):
        value = kpi_card("Tags Normal", 10, total=12).children[1]
        assert [span.children for span in value.children] == ["10", " / 12"]
