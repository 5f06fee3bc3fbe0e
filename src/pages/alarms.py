"""
src/pages/alarms.py
────────────────────
Alarm console: priority groups, risk, response countdown, acknowledgement,
and the causal chain of the selected alarm.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

MUTED = "#8b949e"

_STATUS_OPTIONS = [
    {"label": "All", "value": "all"},
    {"label": "Unacknowledged", "value": "unacked"},
    {"label": "Acknowledged", "value": "acked"},
]


def layout() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Alarm Console", className="page-title"),
                    html.P("Prioritized alarms with risk score and response deadline", className="page-subtitle"),
                ],
                className="page-header",
            ),
            # ── Summary badges ─────────────────────────────────────────────────
            html.Div(id="alarms-summary-badges", className="mb-3"),
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.Label("Status", style={"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}),
                            dcc.Dropdown(
                                id="alarms-filter-status",
                                options=_STATUS_OPTIONS,
                                value="unacked",
                                clearable=False,
                                className="dark-dropdown",
                            ),
                        ],
                        md=3,
                    ),
                    dbc.Col(
                        [
                            html.Label("Root cause for", style={"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}),
                            dcc.Dropdown(id="alarms-chain-tag", placeholder="Select an alarmed tag", className="dark-dropdown"),
                        ],
                        md=3,
                    ),
                ],
                className="g-3 mb-3",
            ),
            dbc.Row(
                [
                    # ── Grouped alarm table ───────────────────────────────────
                    dbc.Col(html.Div(html.Div(id="alarms-table"), className="chart-card"), md=8),
                    # ── Causal chain ──────────────────────────────────────────
                    dbc.Col(
                        html.Div(
                            [html.Div("Causal chain", className="chart-title"), html.Div(id="alarms-causal-chain")],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                ],
                className="g-3",
            ),
            html.Div(id="alarms-ack-result", style={"display": "none"}),
        ],
        style={"padding": "1.5rem"},
    )
