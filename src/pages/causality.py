"""
src/pages/causality.py
───────────────────────
Causality graph configuration (export, import, reset) plus the preset fault
trees and bow-ties of each process area.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.fault_trees import OVERVIEW_AREA
from config.tags import PROCESS_AREAS

MUTED = "#8b949e"

_SCENARIO_AREAS = [
    *({"label": a["name"], "value": a_id} for a_id, a in PROCESS_AREAS.items()),
    {"label": "Unit overview", "value": OVERVIEW_AREA},
]


def _label(text: str) -> html.Div:
    return html.Div(text, style={"fontSize": ".68rem", "color": MUTED, "textTransform": "uppercase", "marginBottom": "6px"})


def _graph_editor() -> dbc.Row:
    return dbc.Row(
        [
            dbc.Col(
                html.Div(
                    [
                        html.Div("Graph JSON", className="chart-title"),
                        dcc.Textarea(
                            id="causality-json",
                            style={"width": "100%", "height": "420px", "fontFamily": "monospace", "fontSize": ".75rem"},
                        ),
                        html.Div(
                            [
                                dbc.Button("Import", id="causality-import-btn", size="sm", color="primary", className="me-2"),
                                dbc.Button("Reload current", id="causality-export-btn", size="sm", color="secondary", className="me-2"),
                                dbc.Button("Reset to default", id="causality-reset-btn", size="sm", color="danger"),
                            ],
                            style={"marginTop": "10px"},
                        ),
                        html.Div(id="causality-status", style={"marginTop": "8px", "fontSize": ".8rem", "color": MUTED}),
                    ],
                    className="chart-card",
                ),
                md=7,
            ),
            dbc.Col(
                html.Div(
                    [html.Div("Links", className="chart-title"), html.Div(id="causality-links-table")],
                    className="chart-card",
                ),
                md=5,
            ),
        ],
        className="g-3",
    )


def _scenarios() -> html.Div:
    """Area picker feeding one fault tree table and one bow-tie column view."""
    selectors = dbc.Row(
        [
            dbc.Col(
                [
                    _label("Area"),
                    dcc.Dropdown(id="scenario-area", options=_SCENARIO_AREAS, value="reactor", clearable=False, className="dark-dropdown"),
                ],
                md=3,
            ),
            dbc.Col(
                [_label("Fault tree"), dcc.Dropdown(id="fault-tree-select", clearable=False, className="dark-dropdown")],
                md=4,
            ),
            dbc.Col(
                [_label("Bow-tie"), dcc.Dropdown(id="bowtie-select", clearable=False, className="dark-dropdown")],
                md=3,
            ),
            dbc.Col(
                dbc.Button("Reset fault trees", id="fault-tree-reset-btn", size="sm", color="secondary", style={"marginTop": "22px"}),
                md=2,
            ),
        ],
        className="g-3 mb-3",
    )
    return html.Div(
        [
            html.Div("Fault Trees & Bow-Ties", className="chart-title"),
            selectors,
            dbc.Row(
                [
                    dbc.Col(html.Div(id="fault-tree-table"), md=5),
                    dbc.Col(html.Div(id="bowtie-view"), md=7),
                ],
                className="g-3",
            ),
        ],
        className="chart-card",
        style={"marginTop": "1rem"},
    )


def layout() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Causality Configuration", className="page-title"),
                    html.P("Cause → effect links used for root-cause guidance", className="page-subtitle"),
                ],
                className="page-header",
            ),
            _graph_editor(),
            _scenarios(),
        ],
        style={"padding": "1.5rem"},
    )
