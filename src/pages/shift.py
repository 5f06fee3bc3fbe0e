"""
src/pages/shift.py
───────────────────
Shift handover: current shift, shift events and the operation log.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from src.data.store import EVENT_SEVERITY_LABELS, EVENT_TYPE_LABELS

MUTED = "#8b949e"


def _label(text: str) -> html.Label:
    return html.Label(text, style={"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"})


def layout() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Shift Handover", className="page-title"),
                    html.P("Shift log, handover notes and operator actions", className="page-subtitle"),
                ],
                className="page-header",
            ),
            dbc.Row(
                [
                    # ── Current shift ─────────────────────────────────────────
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Current shift", className="chart-title"),
                                html.Div(id="shift-current"),
                                _label("Handover notes"),
                                dcc.Textarea(id="shift-notes", style={"width": "100%", "height": "90px"}),
                                html.Div(
                                    [
                                        dbc.Button("Start shift", id="shift-start-btn", size="sm", color="primary", className="me-2"),
                                        dbc.Button("Hand over", id="shift-end-btn", size="sm", color="warning"),
                                    ],
                                    style={"marginTop": "8px"},
                                ),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                    # ── Shift events ──────────────────────────────────────────
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Shift events", className="chart-title"),
                                dbc.Row(
                                    [
                                        dbc.Col(
                                            [
                                                _label("Type"),
                                                dcc.Dropdown(
                                                    id="shift-event-type",
                                                    options=[{"label": v, "value": k} for k, v in EVENT_TYPE_LABELS.items()],
                                                    value="general",
                                                    clearable=False,
                                                    className="dark-dropdown",
                                                ),
                                            ],
                                            md=4,
                                        ),
                                        dbc.Col(
                                            [
                                                _label("Severity"),
                                                dcc.Dropdown(
                                                    id="shift-event-severity",
                                                    options=[{"label": v, "value": k} for k, v in EVENT_SEVERITY_LABELS.items()],
                                                    value="info",
                                                    clearable=False,
                                                    className="dark-dropdown",
                                                ),
                                            ],
                                            md=4,
                                        ),
                                        dbc.Col(
                                            [_label("Title"), dcc.Input(id="shift-event-title", type="text", style={"width": "100%"})],
                                            md=4,
                                        ),
                                    ],
                                    className="g-2",
                                ),
                                _label("Description"),
                                dcc.Textarea(id="shift-event-description", style={"width": "100%", "height": "60px"}),
                                dbc.Button("Add event", id="shift-event-add-btn", size="sm", color="secondary"),
                                html.Div(id="shift-event-feedback", style={"fontSize": ".75rem", "color": MUTED, "marginTop": "6px"}),
                                html.Div(id="shift-events-table", style={"marginTop": "10px"}),
                            ],
                            className="chart-card",
                        ),
                        md=8,
                    ),
                ],
                className="g-3 mb-3",
            ),
            html.Div(
                [html.Div("Operation log", className="chart-title"), html.Div(id="shift-operation-log")],
                className="chart-card",
            ),
            dcc.Store(id="store-shift-version", data=0),
        ],
        style={"padding": "1.5rem"},
    )
