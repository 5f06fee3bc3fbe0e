"""
config/tags.py
──────────────
FCC unit tag definitions, process areas and equipment criticality.

Limits are ordered lowAlarm < lowWarning < highWarning < highAlarm.
Criticality ∈ [0, 1] reflects the safety impact of the measured variable.
"""
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TagDefinition:
    id: str
    description: str
    unit: str
    base_value: float
    setpoint: float
    high_alarm: float
    high_warning: float
    low_warning: float
    low_alarm: float
    area_id: str
    x: float  # display position, % of diagram width
    y: float  # display position, % of diagram height


# ── Reactor ───────────────────────────────────────────────────────────────────
_REACTOR = [
    TagDefinition("TI-101", "Reactor temperature", "°C", 520.0, 525.0, 550.0, 540.0, 500.0, 490.0, "reactor", 25, 30),
    TagDefinition("PI-101", "Reactor pressure", "kPa", 180.0, 175.0, 220.0, 200.0, 150.0, 130.0, "reactor", 30, 50),
    TagDefinition("TI-102", "Riser outlet temperature", "°C", 505.0, 510.0, 540.0, 530.0, 480.0, 470.0, "reactor", 45, 40),
    TagDefinition("TI-103", "Disengager temperature", "°C", 495.0, 500.0, 530.0, 520.0, 470.0, 460.0, "reactor", 50, 20),
    TagDefinition("LI-101", "Reactor stripper level", "%", 50.0, 50.0, 80.0, 70.0, 30.0, 20.0, "reactor", 35, 70),
    TagDefinition("FI-101", "Fresh feed flow", "t/h", 85.0, 90.0, 110.0, 100.0, 70.0, 60.0, "reactor", 15, 65),
]

# ── Regenerator ───────────────────────────────────────────────────────────────
_REGENERATOR = [
    TagDefinition("TI-201", "Regenerator dense bed temperature", "°C", 690.0, 690.0, 730.0, 715.0, 665.0, 650.0, "regenerator", 60, 25),
    TagDefinition("TI-202", "Regenerator dilute phase temperature", "°C", 700.0, 700.0, 745.0, 730.0, 675.0, 660.0, "regenerator", 65, 12),
    TagDefinition("PI-201", "Regenerator pressure", "kPa", 210.0, 210.0, 250.0, 235.0, 185.0, 170.0, "regenerator", 70, 45),
    TagDefinition("AI-201", "Flue gas CO", "ppm", 120.0, 100.0, 300.0, 220.0, 20.0, 5.0, "regenerator", 80, 20),
    TagDefinition("AI-202", "Flue gas O2", "%", 2.5, 2.5, 5.0, 4.0, 1.0, 0.5, "regenerator", 85, 35),
    TagDefinition("FI-201", "Main air flow", "kNm³/h", 150.0, 150.0, 185.0, 175.0, 125.0, 115.0, "regenerator", 55, 60),
]

# ── Fractionator ──────────────────────────────────────────────────────────────
_FRACTIONATOR = [
    TagDefinition("TI-301", "Fractionator top temperature", "°C", 120.0, 120.0, 140.0, 132.0, 108.0, 100.0, "fractionator", 75, 15),
    TagDefinition("TI-302", "Fractionator middle temperature", "°C", 250.0, 250.0, 280.0, 268.0, 232.0, 220.0, "fractionator", 75, 40),
    TagDefinition("TI-303", "Fractionator bottom temperature", "°C", 350.0, 350.0, 375.0, 365.0, 335.0, 325.0, "fractionator", 75, 65),
    TagDefinition("PI-301", "Fractionator top pressure", "kPa", 110.0, 110.0, 140.0, 130.0, 90.0, 80.0, "fractionator", 85, 10),
    TagDefinition("LI-301", "Fractionator bottom level", "%", 52.0, 50.0, 80.0, 70.0, 30.0, 20.0, "fractionator", 85, 75),
    TagDefinition("FI-301", "Top reflux flow", "t/h", 60.0, 60.0, 80.0, 72.0, 48.0, 40.0, "fractionator", 90, 25),
    TagDefinition("FI-302", "Diesel product flow", "t/h", 40.0, 40.0, 55.0, 50.0, 30.0, 25.0, "fractionator", 90, 55),
]

TAG_DEFINITIONS: dict[str, TagDefinition] = {
    t.id: t for t in _REACTOR + _REGENERATOR + _FRACTIONATOR
}

TAG_IDS = list(TAG_DEFINITIONS.keys())

PROCESS_AREAS: dict[str, dict] = {
    "reactor": {"id": "reactor", "name": "Reactor", "tag_ids": [t.id for t in _REACTOR]},
    "regenerator": {"id": "regenerator", "name": "Regenerator", "tag_ids": [t.id for t in _REGENERATOR]},
    "fractionator": {"id": "fractionator", "name": "Fractionator", "tag_ids": [t.id for t in _FRACTIONATOR]},
}

# Safety impact per tag; unlisted tags fall back to DEFAULT_CRITICALITY
EQUIPMENT_CRITICALITY: dict[str, float] = {
    # Reactor: highest
    "TI-101": 0.95,
    "PI-101": 0.90,
    "TI-102": 0.85,
    "TI-103": 0.80,
    "LI-101": 0.75,
    "FI-101": 0.70,
    # Regenerator: high
    "TI-201": 0.90,
    "TI-202": 0.85,
    "PI-201": 0.80,
    "AI-201": 0.75,
    "AI-202": 0.70,
    "FI-201": 0.65,
    # Fractionator: medium
    "TI-301": 0.60,
    "TI-302": 0.55,
    "TI-303": 0.50,
    "PI-301": 0.55,
    "LI-301": 0.50,
    "FI-301": 0.45,
    "FI-302": 0.40,
}

DEFAULT_CRITICALITY = 0.5


class TagStatus(str, Enum):
    NORMAL = "normal"
    WARNING = "warning"
    ALARM = "alarm"
