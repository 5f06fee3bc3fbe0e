"""
config/causality.py
───────────────────
Default cause → effect relationships between FCC process variables.

Each link reads "changes in `from` tend to cause changes in `to`", with
`contribution` as a 0–100 weight. The regenerator feeds the reactor through
catalyst circulation (TI-201 → TI-101).
"""

DEFAULT_GRAPH_VERSION = "1.0.0"

DEFAULT_CAUSAL_LINKS: list[dict] = [
    # Reactor
    {"from": "FI-101", "to": "TI-101", "contribution": 65},
    {"from": "TI-101", "to": "TI-102", "contribution": 80},
    {"from": "TI-102", "to": "TI-103", "contribution": 70},
    {"from": "FI-101", "to": "PI-101", "contribution": 45},
    {"from": "TI-101", "to": "PI-101", "contribution": 35},
    # Regenerator
    {"from": "TI-201", "to": "TI-202", "contribution": 85},
    {"from": "FI-201", "to": "AI-201", "contribution": 50},
    {"from": "TI-201", "to": "AI-201", "contribution": 45},
    {"from": "AI-201", "to": "AI-202", "contribution": 90},
    {"from": "FI-201", "to": "PI-201", "contribution": 55},
    # Fractionator
    {"from": "TI-101", "to": "TI-303", "contribution": 50},
    {"from": "TI-303", "to": "TI-302", "contribution": 75},
    {"from": "TI-302", "to": "TI-301", "contribution": 70},
    {"from": "FI-301", "to": "TI-301", "contribution": 55},
    {"from": "TI-301", "to": "PI-301", "contribution": 60},
    # Cross-area
    {"from": "TI-201", "to": "TI-101", "contribution": 30},
]
