"""
src/layout/main.py
───────────────────
Root layout: routing, shared stores, the two timers, navbar and page slot.

  interval-live  → one sampling tick (store-tick is bumped afterwards)
  interval-risk  → risk / escalation refresh of open alarms
"""
from dash import dcc, html

from config.settings import settings
from config.tags import TAG_IDS
from src.layout.navbar import create_navbar

PAGE_BG = "#0d1117"
MUTED = "#8b949e"


def _timers() -> list[dcc.Interval]:
    return [
        dcc.Interval(id="interval-live", interval=settings.UPDATE_INTERVAL_MS, n_intervals=0),
        dcc.Interval(id="interval-risk", interval=settings.RISK_REFRESH_INTERVAL_MS, n_intervals=0),
    ]


def _status_strip() -> html.Footer:
    sample_s = settings.UPDATE_INTERVAL_MS / 1000
    refresh_s = settings.RISK_REFRESH_INTERVAL_MS / 1000
    return html.Footer(
        f"FCC unit · {len(TAG_IDS)} simulated tags · sampling every {sample_s:g}s · risk refresh every {refresh_s:g}s",
        style={"textAlign": "center", "fontSize": ".7rem", "color": MUTED, "padding": "10px", "borderTop": "1px solid #30363d"},
    )


def create_layout() -> html.Div:
    return html.Div(
        [
            dcc.Location(id="url", refresh=False),
            dcc.Store(id="store-tick", data=0),
            dcc.Store(id="store-operator", data=settings.DEFAULT_OPERATOR),
            *_timers(),
            create_navbar(),
            html.Main(id="page-content", style={"minHeight": "calc(100vh - 100px)"}),
            _status_strip(),
        ],
        style={"backgroundColor": PAGE_BG, "minHeight": "100vh", "color": "#c9d1d9"},
    )
