"""
src/callbacks/alarms.py
────────────────────────
Alarm console callbacks.
"""
from __future__ import annotations

from datetime import UTC, datetime

import dash_bootstrap_components as dbc
from dash import ALL, Input, Output, State, ctx, html

from config.alarms import CATEGORY_LABELS, PRIORITIES, PRIORITY_COLORS, PRIORITY_LABELS_EN
from src.analytics.causality import is_critical_link
from src.analytics.priority import calculate_response_deadline, format_remaining_time, group_alarms_by_priority
from src.data import store
from src.data.models import Alarm
from src.data.monitor import PlantMonitor
from src.layout.components.priority_badge import priority_badge

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"


def _ack_button(alarm: Alarm) -> html.Button:
    acked = alarm.acknowledged
    return html.Button(
        f"✓ {alarm.acknowledged_by}" if acked else "Acknowledge",
        id={"type": "ack-btn", "index": alarm.id},
        n_clicks=0,
        disabled=acked,
        style={
            "fontSize": ".68rem",
            "fontWeight": "600",
            "color": "#2ea44f" if acked else "#58a6ff",
            "background": "transparent",
            "border": f"1px solid {'#2ea44f' if acked else '#58a6ff'}",
            "borderRadius": "4px",
            "padding": "2px 8px",
            "cursor": "default" if acked else "pointer",
            "opacity": "0.6" if acked else "1",
        },
    )


def _alarm_row(alarm: Alarm, now: datetime) -> html.Tr:
    deadline = alarm.response_deadline or calculate_response_deadline(alarm)
    remaining = "—" if alarm.acknowledged else format_remaining_time(deadline, now)
    return html.Tr(
        [
            html.Td(alarm.timestamp.strftime("%H:%M:%S"), style={"color": MUTED, "fontSize": ".75rem"}),
            html.Td(priority_badge(alarm.priority)),
            html.Td(html.Span(alarm.tag_id, style={"color": "#58a6ff", "fontWeight": "600"})),
            html.Td(alarm.message, style={"fontSize": ".75rem"}),
            html.Td(CATEGORY_LABELS.get(alarm.category, alarm.category.value), style={"fontSize": ".72rem", "color": MUTED}),
            html.Td(str(alarm.risk_score), style={"fontWeight": "700"}),
            html.Td(
                remaining + (" ↑" if alarm.escalated else ""),
                style={"fontSize": ".75rem", "color": "#da3633" if remaining == "overdue" else "#c9d1d9"},
            ),
            html.Td(_ack_button(alarm)),
        ],
        style={"borderBottom": f"1px solid {BORDER}"},
    )


def _grouped_table(alarms: list[Alarm], now: datetime) -> html.Div:
    if not alarms:
        return html.Div("No alarms for the selected filter.", style={"color": MUTED, "padding": "20px", "textAlign": "center"})

    body = []
    for priority, members in group_alarms_by_priority(alarms).items():
        if not members:
            continue
        body.append(html.Tr(html.Td(
            f"P{priority} · {PRIORITY_LABELS_EN[priority]} ({len(members)})",
            colSpan=8,
            style={"color": PRIORITY_COLORS[priority], "fontSize": ".7rem", "fontWeight": "700", "paddingTop": "10px"},
        )))
        body.extend(_alarm_row(a, now) for a in members)

    return html.Div(
        html.Table(
            [
                html.Thead(html.Tr(
                    [html.Th(h) for h in ["Time", "Priority", "Tag", "Message", "Category", "Risk", "Deadline", "State"]],
                    style={"color": MUTED, "fontSize": ".68rem", "textTransform": "uppercase"},
                )),
                html.Tbody(body),
            ],
            style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".82rem"},
        ),
        style={"overflowX": "auto"},
    )


def _summary_badges(alarms: list[Alarm]) -> dbc.Row:
    open_alarms = [a for a in alarms if not a.acknowledged]
    return dbc.Row(
        [
            dbc.Col(
                html.Div(
                    [
                        html.Div(str(sum(1 for a in open_alarms if a.priority == p)),
                                 style={"fontSize": "1.4rem", "fontWeight": "700", "color": PRIORITY_COLORS[p]}),
                        html.Div(f"P{p} {PRIORITY_LABELS_EN[p]}", style={"fontSize": ".65rem", "color": MUTED, "textTransform": "uppercase"}),
                    ],
                    style={"backgroundColor": CARD_BG, "border": f"1px solid {BORDER}", "borderRadius": "8px", "padding": "10px 16px"},
                ),
                xs=6, md=3,
            )
            for p in PRIORITIES
        ],
        className="g-2",
    )


def register(app, monitor: PlantMonitor) -> None:

    @app.callback(
        [
            Output("alarms-table", "children"),
            Output("alarms-summary-badges", "children"),
            Output("alarms-chain-tag", "options"),
        ],
        [
            Input("store-tick", "data"),
            Input("alarms-filter-status", "value"),
            Input("alarms-ack-result", "children"),
        ],
    )
    def update_alarms_table(tick: int, status_filter: str, ack_result):
        now = datetime.now(tz=UTC)
        alarms = store.get_alarms()

        if status_filter == "unacked":
            shown = [a for a in alarms if not a.acknowledged]
        elif status_filter == "acked":
            shown = [a for a in alarms if a.acknowledged]
        else:
            shown = alarms

        chain_options = [
            {"label": f"{tag_id}", "value": tag_id}
            for tag_id in dict.fromkeys(a.tag_id for a in alarms if not a.acknowledged)
        ]
        return _grouped_table(shown, now), _summary_badges(alarms), chain_options

    @app.callback(
        Output("alarms-ack-result", "children"),
        Input({"type": "ack-btn", "index": ALL}, "n_clicks"),
        State("store-operator", "data"),
        prevent_initial_call=True,
    )
    def acknowledge_alarm(n_clicks_list: list, operator: str) -> str:
        # Re-rendered buttons fire with n_clicks=0; only real clicks count
        if not ctx.triggered_id or not ctx.triggered[0]["value"]:
            return ""
        alarm_id = ctx.triggered_id["index"]
        monitor.acknowledge(alarm_id, operator)
        return alarm_id

    @app.callback(
        Output("alarms-causal-chain", "children"),
        [
            Input("alarms-chain-tag", "value"),
            Input("store-tick", "data"),
        ],
    )
    def update_causal_chain(tag_id: str | None, tick: int):
        if not tag_id:
            return html.Div("Select an alarmed tag to trace its upstream causes.", style={"color": MUTED, "padding": "12px"})

        chain = monitor.causality.find_causal_chain(tag_id)
        if not chain:
            return html.Div(f"No configured causes for {tag_id}.", style={"color": MUTED, "padding": "12px"})

        tags = monitor.tags
        items = []
        for link in chain:
            critical = is_critical_link(link, tags)
            color = "#da3633" if critical else MUTED
            items.append(html.Div(
                [
                    html.Span(link.from_, style={"color": color, "fontWeight": "700"}),
                    html.Span(" → ", style={"color": MUTED}),
                    html.Span(link.to, style={"color": "#58a6ff"}),
                    html.Span(f"  {link.contribution:.0f}%", style={"fontSize": ".72rem", "color": MUTED}),
                    html.Span("  active" if critical else "", style={"fontSize": ".68rem", "color": color}),
                ],
                style={"padding": "4px 0", "borderBottom": f"1px solid {BORDER}"},
            ))
        return html.Div(items)
