"""
config/fault_trees.py
─────────────────────
Preset fault trees and bow-tie diagrams for the FCC unit.

A fault tree is a set of cause → effect links (same shape as the causality
graph) converging on one top-event tag. A bow-tie lays out threats and
prevention barriers on the left of a top event, recovery measures and
consequences on the right; positions are % of the diagram.

Area "overview" holds the unit-wide scenarios.
"""

from enum import Enum


class BowTieEventType(str, Enum):
    THREAT = "threat"
    BARRIER = "barrier"
    TOP_EVENT = "top_event"
    RECOVERY = "recovery"
    CONSEQUENCE = "consequence"


# Left to right across the diagram
BOWTIE_COLUMNS: tuple[BowTieEventType, ...] = (
    BowTieEventType.THREAT,
    BowTieEventType.BARRIER,
    BowTieEventType.TOP_EVENT,
    BowTieEventType.RECOVERY,
    BowTieEventType.CONSEQUENCE,
)

BOWTIE_COLUMN_LABELS: dict[str, str] = {
    "threat": "Threats",
    "barrier": "Barriers",
    "top_event": "Top event",
    "recovery": "Recovery",
    "consequence": "Consequences",
}

OVERVIEW_AREA = "overview"


# ── Fault trees ───────────────────────────────────────────────────────────────

DEFAULT_FAULT_TREES: list[dict] = [
    {
        "id": "ft-reactor-runaway",
        "name": "Reactor temperature runaway",
        "area_id": "reactor",
        "top_event_tag_id": "TI-101",
        "links": [
            {"from": "FI-101", "to": "TI-101", "contribution": 65, "description": "Feed flow drives reaction temperature"},
            {"from": "PI-101", "to": "TI-101", "contribution": 35, "description": "Reactor pressure shifts reaction temperature"},
            {"from": "TI-101", "to": "TI-102", "contribution": 80, "description": "Reactor temperature carries to riser outlet"},
            {"from": "TI-102", "to": "TI-103", "contribution": 70, "description": "Riser outlet carries to disengager"},
            {"from": "FI-101", "to": "PI-101", "contribution": 45, "description": "Feed flow raises reactor pressure"},
            {"from": "LI-101", "to": "TI-101", "contribution": 25, "description": "Stripper level affects reaction temperature"},
        ],
    },
    {
        "id": "ft-regenerator-overtemp",
        "name": "Regenerator over-temperature",
        "area_id": "regenerator",
        "top_event_tag_id": "TI-201",
        "links": [
            {"from": "FI-201", "to": "TI-201", "contribution": 75, "description": "Main air drives dense bed temperature"},
            {"from": "AI-201", "to": "TI-201", "contribution": 40, "description": "CO afterburn heats the bed"},
            {"from": "TI-201", "to": "TI-202", "contribution": 85, "description": "Dense bed carries to dilute phase"},
            {"from": "FI-201", "to": "AI-201", "contribution": 50, "description": "Main air sets CO make"},
            {"from": "TI-201", "to": "AI-202", "contribution": 60, "description": "Bed temperature sets O2 consumption"},
            {"from": "AI-201", "to": "AI-202", "contribution": 90, "description": "CO and O2 move together"},
            {"from": "FI-201", "to": "PI-201", "contribution": 55, "description": "Main air raises regenerator pressure"},
        ],
    },
    {
        "id": "ft-flue-gas-o2",
        "name": "Flue gas O2 upset",
        "area_id": "regenerator",
        "top_event_tag_id": "AI-202",
        "links": [
            {"from": "AI-201", "to": "AI-202", "contribution": 90, "description": "CO combustion consumes O2"},
            {"from": "TI-201", "to": "AI-202", "contribution": 60, "description": "Temperature sets combustion efficiency"},
            {"from": "FI-201", "to": "AI-201", "contribution": 50, "description": "Main air sets CO make"},
            {"from": "TI-201", "to": "AI-201", "contribution": 45, "description": "Temperature affects CO make"},
            {"from": "FI-201", "to": "TI-201", "contribution": 75, "description": "Main air drives combustion temperature"},
        ],
    },
    {
        "id": "ft-fractionator-upset",
        "name": "Fractionator temperature upset",
        "area_id": "fractionator",
        "top_event_tag_id": "TI-301",
        "links": [
            {"from": "FI-301", "to": "TI-301", "contribution": 55, "description": "Reflux flow cools the top"},
            {"from": "TI-302", "to": "TI-301", "contribution": 70, "description": "Middle section carries to the top"},
            {"from": "TI-303", "to": "TI-302", "contribution": 75, "description": "Bottom section carries to the middle"},
            {"from": "LI-301", "to": "TI-303", "contribution": 40, "description": "Bottom level affects bottom temperature"},
            {"from": "FI-302", "to": "TI-303", "contribution": 35, "description": "Diesel draw affects bottom temperature"},
            {"from": "TI-301", "to": "PI-301", "contribution": 60, "description": "Top temperature sets top pressure"},
        ],
    },
    {
        "id": "ft-overview-integrated",
        "name": "Unit-wide safety",
        "area_id": OVERVIEW_AREA,
        "top_event_tag_id": "TI-101",
        "links": [
            {"from": "FI-101", "to": "TI-101", "contribution": 65, "description": "Feed flow → reaction temperature"},
            {"from": "PI-101", "to": "TI-101", "contribution": 35, "description": "Reactor pressure → reaction temperature"},
            {"from": "TI-201", "to": "TI-101", "contribution": 30, "description": "Regenerator temperature → reaction temperature (catalyst circulation)"},
            {"from": "FI-201", "to": "TI-201", "contribution": 75, "description": "Main air → regenerator temperature"},
            {"from": "AI-201", "to": "AI-202", "contribution": 90, "description": "Flue gas CO → flue gas O2"},
            {"from": "TI-101", "to": "TI-303", "contribution": 50, "description": "Reaction temperature → fractionator bottom"},
            {"from": "TI-303", "to": "TI-301", "contribution": 65, "description": "Fractionator bottom → fractionator top"},
        ],
    },
]


# ── Bow-ties ──────────────────────────────────────────────────────────────────

def _event(event_id: str, event_type: str, label: str, x: float, y: float, tag_id: str | None = None) -> dict:
    return {"id": event_id, "type": event_type, "label": label, "tag_id": tag_id, "position": {"x": x, "y": y}}


def _links(*pairs: str) -> list[dict]:
    """'a>b' shorthand for one bow-tie link."""
    return [dict(zip(("from", "to"), pair.split(">"))) for pair in pairs]


DEFAULT_BOWTIES: list[dict] = [
    {
        "id": "bt-reactor-runaway",
        "name": "Reactor runaway",
        "area_id": "reactor",
        "top_event_id": "te-reactor",
        "events": [
            _event("t1", "threat", "Excess feed flow", 8, 20, "FI-101"),
            _event("t2", "threat", "Catalyst activity too high", 8, 40),
            _event("t3", "threat", "Cooling system failure", 8, 60),
            _event("t4", "threat", "Instrument failure", 8, 80, "TI-101"),
            _event("b1", "barrier", "Flow control valve", 28, 25),
            _event("b2", "barrier", "Temperature interlock", 28, 50),
            _event("b3", "barrier", "Pressure protection", 28, 75, "PI-101"),
            _event("te-reactor", "top_event", "Reactor temperature runaway", 50, 50, "TI-101"),
            _event("r1", "recovery", "Emergency shutdown", 72, 30),
            _event("r2", "recovery", "Emergency depressurisation", 72, 50),
            _event("r3", "recovery", "Deluge spray", 72, 70),
            _event("c1", "consequence", "Equipment damage", 92, 25),
            _event("c2", "consequence", "Personnel injury", 92, 50),
            _event("c3", "consequence", "Environmental release", 92, 75),
        ],
        "links": _links(
            "t1>b1", "t2>b2", "t3>b2", "t4>b3",
            "b1>te-reactor", "b2>te-reactor", "b3>te-reactor",
            "te-reactor>r1", "te-reactor>r2", "te-reactor>r3",
            "r1>c1", "r2>c2", "r3>c3",
        ),
    },
    {
        "id": "bt-regenerator-fire",
        "name": "Regenerator fire",
        "area_id": "regenerator",
        "top_event_id": "te-regen",
        "events": [
            _event("t-r1", "threat", "Excess coke on catalyst", 8, 20),
            _event("t-r2", "threat", "Main air too high", 8, 40, "FI-201"),
            _event("t-r3", "threat", "Temperature control lost", 8, 60, "TI-201"),
            _event("t-r4", "threat", "Abnormal pressure", 8, 80, "PI-201"),
            _event("b-r1", "barrier", "Main air control valve", 28, 30),
            _event("b-r2", "barrier", "Temperature alarm", 28, 55),
            _event("b-r3", "barrier", "Pressure interlock", 28, 80),
            _event("te-regen", "top_event", "Regenerator over-temperature", 50, 50, "TI-201"),
            _event("r-r1", "recovery", "Emergency air cut-off", 72, 35),
            _event("r-r2", "recovery", "Steam snuffing", 72, 65),
            _event("c-r1", "consequence", "Catalyst sintering", 92, 25),
            _event("c-r2", "consequence", "Vessel burn-through", 92, 50),
            _event("c-r3", "consequence", "Fire and explosion", 92, 75),
        ],
        "links": _links(
            "t-r1>b-r1", "t-r2>b-r1", "t-r3>b-r2", "t-r4>b-r3",
            "b-r1>te-regen", "b-r2>te-regen", "b-r3>te-regen",
            "te-regen>r-r1", "te-regen>r-r2",
            "r-r1>c-r1", "r-r2>c-r2", "r-r2>c-r3",
        ),
    },
    {
        "id": "bt-fractionator-flood",
        "name": "Fractionator flooding",
        "area_id": "fractionator",
        "top_event_id": "te-frac",
        "events": [
            _event("t-f1", "threat", "Excess reflux", 8, 25, "FI-301"),
            _event("t-f2", "threat", "Top temperature too low", 8, 50, "TI-301"),
            _event("t-f3", "threat", "Excess feed", 8, 75),
            _event("b-f1", "barrier", "Reflux control valve", 28, 35),
            _event("b-f2", "barrier", "Temperature interlock", 28, 65),
            _event("te-frac", "top_event", "Fractionator flooding", 50, 50, "LI-301"),
            _event("r-f1", "recovery", "Emergency feed cut", 72, 35),
            _event("r-f2", "recovery", "Increase bottoms draw", 72, 65),
            _event("c-f1", "consequence", "Off-spec product", 92, 30),
            _event("c-f2", "consequence", "Equipment damage", 92, 55),
            _event("c-f3", "consequence", "Production outage", 92, 80),
        ],
        "links": _links(
            "t-f1>b-f1", "t-f2>b-f2", "t-f3>b-f1",
            "b-f1>te-frac", "b-f2>te-frac",
            "te-frac>r-f1", "te-frac>r-f2",
            "r-f1>c-f1", "r-f2>c-f2", "r-f2>c-f3",
        ),
    },
    {
        "id": "bt-overview",
        "name": "Major unit incident",
        "area_id": OVERVIEW_AREA,
        "top_event_id": "te-overview",
        "events": [
            _event("t-o1", "threat", "Reactor upset", 8, 25, "TI-101"),
            _event("t-o2", "threat", "Regenerator upset", 8, 50, "TI-201"),
            _event("t-o3", "threat", "Fractionator upset", 8, 75, "TI-301"),
            _event("b-o1", "barrier", "DCS monitoring", 28, 35),
            _event("b-o2", "barrier", "SIS interlocks", 28, 65),
            _event("te-overview", "top_event", "Major unit incident", 50, 50),
            _event("r-o1", "recovery", "Unit emergency shutdown", 72, 40),
            _event("r-o2", "recovery", "Emergency response", 72, 60),
            _event("c-o1", "consequence", "Major asset loss", 92, 30),
            _event("c-o2", "consequence", "Personnel injury", 92, 55),
            _event("c-o3", "consequence", "Environmental incident", 92, 80),
        ],
        "links": _links(
            "t-o1>b-o1", "t-o2>b-o1", "t-o3>b-o2",
            "b-o1>te-overview", "b-o2>te-overview",
            "te-overview>r-o1", "te-overview>r-o2",
            "r-o1>c-o1", "r-o2>c-o2", "r-o2>c-o3",
        ),
    },
]
