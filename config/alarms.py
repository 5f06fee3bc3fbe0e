"""
config/alarms.py
────────────────
Alarm priority levels, categories, scoring weights and display configuration.

Priority 1 is the most urgent, 4 the least. Response time limits shrink as
urgency grows.
"""

from enum import Enum


class AlarmKind(str, Enum):
    WARNING = "warning"
    ALARM = "alarm"


class AlarmCategory(str, Enum):
    SAFETY = "safety"
    EQUIPMENT = "equipment"
    PROCESS = "process"


PRIORITIES: tuple[int, ...] = (1, 2, 3, 4)

# Minutes allowed before an unacknowledged alarm escalates
RESPONSE_TIME_LIMITS: dict[int, int] = {
    1: 1,
    2: 5,
    3: 15,
    4: 60,
}

# Weighted-sum factors for the initial classification
PRIORITY_WEIGHTS: dict[str, float] = {
    "deviation": 0.35,
    "change_rate": 0.20,
    "criticality": 0.35,
    "time_unacknowledged": 0.10,
}

ALARM_KIND_BONUS = 0.1

# Score strictly above the bound maps to the priority
PRIORITY_THRESHOLDS: list[tuple[float, int]] = [
    (0.75, 1),
    (0.55, 2),
    (0.35, 3),
]

# Risk score components
RISK_BASE_PER_LEVEL = 18
RISK_TIME_BONUS_PER_MIN = 1.5
RISK_TIME_BONUS_CAP = 25
RISK_ALARM_BONUS = 10
RISK_ESCALATION_BONUS = 8

TAG_PREFIX_CATEGORY: dict[str, AlarmCategory] = {
    "TI": AlarmCategory.SAFETY,
    "PI": AlarmCategory.SAFETY,
    "FI": AlarmCategory.EQUIPMENT,
    "LI": AlarmCategory.EQUIPMENT,
    "AI": AlarmCategory.PROCESS,
}

PRIORITY_LABELS_EN: dict[int, str] = {
    1: "Emergency",
    2: "High",
    3: "Medium",
    4: "Low",
}

PRIORITY_COLORS: dict[int, str] = {
    1: "#da3633",
    2: "#f0883e",
    3: "#e8a020",
    4: "#58a6ff",
}

CATEGORY_LABELS: dict[str, str] = {
    AlarmCategory.SAFETY: "Safety",
    AlarmCategory.EQUIPMENT: "Equipment",
    AlarmCategory.PROCESS: "Process",
}

STATUS_COLORS: dict[str, str] = {
    "normal": "#2ea44f",
    "warning": "#e8a020",
    "alarm": "#da3633",
}
