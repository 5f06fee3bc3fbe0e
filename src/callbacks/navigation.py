"""
src/callbacks/navigation.py: routing, live sampling tick and process overview callbacks.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
import plotly.graph_objects as go
from dash import Input, Output, State, html

from config.alarms import STATUS_COLORS
from config.tags import PROCESS_AREAS, TagStatus
from src.analytics.thresholds import get_status_color, limit_lines
from src.data import store
from src.data.monitor import PlantMonitor
from src.layout.components.kpi_card import kpi_card
from src.layout.components.priority_badge import status_badge

CARD_BG = "#161b22"
BORDER = "#30363d"
GRID_CLR = "#30363d"
MUTED = "#8b949e"
PLOTLY_TMPL = "plotly_dark"


def _base_layout(title: str = "") -> dict:
    return {
        "template": PLOTLY_TMPL,
        "paper_bgcolor": CARD_BG,
        "plot_bgcolor": CARD_BG,
        "margin": {"l": 10, "r": 10, "t": 30, "b": 10},
        "font": {"color": "#c9d1d9", "size": 11},
        "title": {"text": title, "font": {"size": 12, "color": MUTED}},
        "xaxis": {"gridcolor": GRID_CLR, "showgrid": True},
        "yaxis": {"gridcolor": GRID_CLR, "showgrid": True},
        "legend": {"bgcolor": "rgba(0,0,0,0)", "font": {"size": 10}},
        "height": 280,
    }


def _trend_fig(monitor: PlantMonitor, tag_id: str) -> go.Figure:
    """History and prediction of one tag with its four limit lines."""
    tag = monitor.get_tag(tag_id)
    fig = go.Figure()
    if tag is None:
        fig.update_layout(**_base_layout("No data"))
        return fig

    color = get_status_color(tag.status)
    fig.add_scatter(
        x=[p.timestamp for p in tag.history],
        y=[p.value for p in tag.history],
        line={"color": color, "width": 1.8},
        name="Value",
        mode="lines",
        hovertemplate="%{x|%H:%M:%S}<br>%{y:.2f}<extra></extra>",
    )
    fig.add_scatter(
        x=[p.timestamp for p in tag.history],
        y=[p.predicted for p in tag.history],
        line={"color": "#8b949e", "width": 1, "dash": "dot"},
        name="Predicted",
        mode="lines",
    )
    for line in limit_lines(tag.limits):
        fig.add_hline(
            y=line["y"], line_dash=line["dash"], line_color=line["color"], line_width=1,
            annotation_text=line["label"], annotation_font_color=line["color"], annotation_font_size=9,
        )
    fig.update_layout(**_base_layout(f"{tag.id} · {tag.description} ({tag.unit})"))
    return fig


def _tag_table(monitor: PlantMonitor, area_id: str) -> html.Table:
    tag_ids = PROCESS_AREAS.get(area_id, {}).get("tag_ids", [])
    rows = []
    for tag_id in tag_ids:
        tag = monitor.get_tag(tag_id)
        if tag is None:
            continue
        lim = tag.limits
        rows.append(html.Tr(
            [
                html.Td(html.Span(tag.id, style={"color": "#58a6ff", "fontWeight": "600"})),
                html.Td(tag.description, style={"color": MUTED, "fontSize": ".75rem"}),
                html.Td(f"{tag.current_value:.1f} {tag.unit}", style={"color": get_status_color(tag.status), "fontWeight": "700"}),
                html.Td(status_badge(tag.status.value)),
                html.Td(f"{tag.setpoint:.1f}", style={"color": MUTED}),
                html.Td(f"{tag.predicted_value:.1f}", style={"color": MUTED}),
                html.Td(
                    f"{lim.low_alarm:g} / {lim.low_warning:g} / {lim.high_warning:g} / {lim.high_alarm:g}",
                    style={"fontSize": ".72rem", "color": MUTED},
                ),
            ],
            style={"borderBottom": f"1px solid {BORDER}"},
        ))

    return html.Table(
        [
            html.Thead(html.Tr(
                [html.Th(h) for h in ["Tag", "Description", "Value", "Status", "SP", "Pred.", "LL / L / H / HH"]],
                style={"color": MUTED, "fontSize": ".68rem", "textTransform": "uppercase"},
            )),
            html.Tbody(rows),
        ],
        style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".82rem"},
    )


def register(app, monitor: PlantMonitor) -> None:
    """Register routing, live tick and overview page callbacks."""

    # ── Page routing ──────────────────────────────────────────────────────────
    from src.pages import alarms, causality, overview, shift

    @app.callback(
        Output("page-content", "children"),
        Input("url", "pathname"),
    )
    def display_page(pathname: str):
        routes = {
            "/": overview.layout,
            "/alarms": alarms.layout,
            "/causality": causality.layout,
            "/shift": shift.layout,
        }
        return routes.get(pathname, overview.layout)()

    # ── Navbar collapse ───────────────────────────────────────────────────────
    @app.callback(
        Output("navbar-collapse", "is_open"),
        Input("navbar-toggler", "n_clicks"),
        State("navbar-collapse", "is_open"),
        prevent_initial_call=True,
    )
    def toggle_navbar(n_clicks: int, is_open: bool) -> bool:
        return not is_open

    # ── Sampling tick ─────────────────────────────────────────────────────────
    @app.callback(
        Output("store-tick", "data"),
        Input("interval-live", "n_intervals"),
    )
    def on_tick(n_intervals: int) -> int:
        monitor.tick()
        return n_intervals

    # ── Risk / escalation refresh + navbar counter ────────────────────────────
    @app.callback(
        [
            Output("nav-active-alarms", "children"),
            Output("nav-active-alarms", "style"),
        ],
        Input("interval-risk", "n_intervals"),
        State("nav-active-alarms", "style"),
    )
    def on_refresh(n_intervals: int, style: dict | None):
        monitor.refresh()
        active = store.get_active_alarm_count()
        color = STATUS_COLORS["alarm"] if active else STATUS_COLORS["normal"]
        return f"{active} active", {**(style or {}), "color": color, "borderColor": color}

    # ── Overview ──────────────────────────────────────────────────────────────
    @app.callback(
        [
            Output("overview-kpi-banner", "children"),
            Output("overview-tag-table", "children"),
            Output("trend-chart", "figure"),
        ],
        [
            Input("store-tick", "data"),
            Input("area-selector", "value"),
            Input("trend-tag-select", "value"),
        ],
    )
    def update_overview(tick: int, area_id: str, trend_tag: str):
        tags = monitor.tags
        counts = {s: sum(1 for t in tags if t.status == s) for s in TagStatus}
        active = store.get_active_alarm_count()

        kpi_banner = dbc.Row(
            [
                dbc.Col(kpi_card("Tags Normal", counts[TagStatus.NORMAL], total=len(tags)), xs=6, md=3),
                dbc.Col(kpi_card("In Warning", counts[TagStatus.WARNING], alarming="warning"), xs=6, md=3),
                dbc.Col(kpi_card("In Alarm", counts[TagStatus.ALARM], alarming="alarm"), xs=6, md=3),
                dbc.Col(kpi_card("Unacknowledged Alarms", active, alarming="alarm"), xs=6, md=3),
            ],
            className="g-3",
        )

        return kpi_banner, _tag_table(monitor, area_id or "reactor"), _trend_fig(monitor, trend_tag or "TI-101")
