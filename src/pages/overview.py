"""
src/pages/overview.py
──────────────────────
Process overview page: live tag values per process area and a trend chart.

Static structure; dynamic data injected via callbacks.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.tags import PROCESS_AREAS, TAG_DEFINITIONS

MUTED = "#8b949e"


def layout() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Process Overview", className="page-title"),
                    html.P("Live tag values, limits and predictions · FCC unit", className="page-subtitle"),
                ],
                className="page-header",
            ),
            # ── KPI banner (dynamic) ──────────────────────────────────────────
            html.Div(id="overview-kpi-banner", className="mb-4"),
            dbc.Row(
                [
                    # ── Area selector ─────────────────────────────────────────
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Area", style={"fontSize": ".68rem", "color": MUTED, "textTransform": "uppercase", "marginBottom": "8px"}),
                                dbc.RadioItems(
                                    id="area-selector",
                                    options=[{"label": a["name"], "value": a_id} for a_id, a in PROCESS_AREAS.items()],
                                    value="reactor",
                                    inputStyle={"marginRight": "8px"},
                                    labelStyle={"cursor": "pointer", "marginBottom": "8px"},
                                ),
                            ],
                            className="chart-card",
                        ),
                        md=2,
                    ),
                    # ── Tag table (dynamic) ───────────────────────────────────
                    dbc.Col(
                        html.Div(
                            [html.Div("Tags", className="chart-title"), html.Div(id="overview-tag-table")],
                            className="chart-card",
                        ),
                        md=10,
                    ),
                ],
                className="g-3 mb-3",
            ),
            # ── Trend chart ───────────────────────────────────────────────────
            html.Div(
                [
                    dbc.Row(
                        [
                            dbc.Col(html.Div("Trend", className="chart-title"), md=8),
                            dbc.Col(
                                dcc.Dropdown(
                                    id="trend-tag-select",
                                    options=[{"label": f"{t.id} · {t.description}", "value": t.id} for t in TAG_DEFINITIONS.values()],
                                    value="TI-101",
                                    clearable=False,
                                    className="dark-dropdown",
                                ),
                                md=4,
                            ),
                        ]
                    ),
                    dcc.Graph(id="trend-chart", config={"displayModeBar": False}),
                ],
                className="chart-card",
            ),
        ],
        style={"padding": "1.5rem"},
    )
