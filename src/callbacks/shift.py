"""
src/callbacks/shift.py
───────────────────────
Shift handover page callbacks.
"""
from __future__ import annotations

import pandas as pd
from dash import Input, Output, State, ctx, html
from pydantic import ValidationError

from src.analytics.priority import summarize_alarms
from src.data import store

BORDER = "#30363d"
MUTED = "#8b949e"

_SEVERITY_COLORS = {"info": "#58a6ff", "warning": "#e8a020", "critical": "#da3633"}


def _simple_table(headers: list[str], rows: list[html.Tr]) -> html.Table:
    return html.Table(
        [
            html.Thead(html.Tr(
                [html.Th(h) for h in headers],
                style={"color": MUTED, "fontSize": ".65rem", "textTransform": "uppercase"},
            )),
            html.Tbody(rows),
        ],
        style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".8rem"},
    )


def _events_table(df: pd.DataFrame) -> html.Div | html.Table:
    if df.empty:
        return html.Div("No events recorded for this shift.", style={"color": MUTED, "padding": "12px"})
    rows = [
        html.Tr(
            [
                html.Td(row["created_at"].strftime("%H:%M"), style={"color": MUTED, "fontSize": ".72rem"}),
                html.Td(store.EVENT_TYPE_LABELS.get(row["event_type"], row["event_type"])),
                html.Td(
                    store.EVENT_SEVERITY_LABELS.get(row["severity"], row["severity"]),
                    style={"color": _SEVERITY_COLORS.get(row["severity"], MUTED), "fontWeight": "700", "fontSize": ".72rem"},
                ),
                html.Td(row["title"]),
                html.Td(row["description"] or "", style={"color": MUTED, "fontSize": ".72rem"}),
            ],
            style={"borderBottom": f"1px solid {BORDER}"},
        )
        for _, row in df.iterrows()
    ]
    return _simple_table(["Time", "Type", "Severity", "Title", "Description"], rows)


def _operation_log(df: pd.DataFrame) -> html.Div | html.Table:
    if df.empty:
        return html.Div("No operator actions yet.", style={"color": MUTED, "padding": "12px"})
    rows = [
        html.Tr(
            [
                html.Td(row["created_at"].strftime("%d/%m %H:%M:%S"), style={"color": MUTED, "fontSize": ".72rem"}),
                html.Td(row["user_name"]),
                html.Td(store.get_action_label(row["action"])),
                html.Td(", ".join(f"{k}={v}" for k, v in row["details"].items()), style={"color": MUTED, "fontSize": ".72rem"}),
            ],
            style={"borderBottom": f"1px solid {BORDER}"},
        )
        for _, row in df.iterrows()
    ]
    return _simple_table(["Time", "User", "Action", "Details"], rows)


def register(app) -> None:

    @app.callback(
        Output("store-shift-version", "data"),
        [
            Input("shift-start-btn", "n_clicks"),
            Input("shift-end-btn", "n_clicks"),
        ],
        [
            State("shift-notes", "value"),
            State("store-operator", "data"),
            State("store-shift-version", "data"),
        ],
        prevent_initial_call=True,
    )
    def shift_action(n_start, n_end, notes: str | None, operator: str, version: int) -> int:
        if ctx.triggered_id == "shift-start-btn":
            shift = store.start_shift(operator, operator)
            store.log_operation(operator, operator, "shift_handover", {"started": shift.id})
        elif ctx.triggered_id == "shift-end-btn":
            current = store.get_current_shift(operator)
            if current is None:
                return version
            summary = summarize_alarms(store.get_alarms())
            store.end_shift(current.id, notes or "", summary)
            store.log_operation(operator, operator, "shift_handover", {"ended": current.id, "open_alarms": summary.unacknowledged})
        return (version or 0) + 1

    @app.callback(
        [
            Output("shift-event-feedback", "children"),
            Output("store-shift-version", "data", allow_duplicate=True),
        ],
        Input("shift-event-add-btn", "n_clicks"),
        [
            State("shift-event-type", "value"),
            State("shift-event-severity", "value"),
            State("shift-event-title", "value"),
            State("shift-event-description", "value"),
            State("store-operator", "data"),
            State("store-shift-version", "data"),
        ],
        prevent_initial_call=True,
    )
    def add_event(n_clicks, event_type, severity, title, description, operator: str, version: int):
        current = store.get_current_shift(operator)
        if current is None:
            return "Start a shift before recording events.", version
        try:
            store.add_shift_event(current.id, operator, operator, event_type, title or "", description, severity)
        except ValidationError as exc:
            return f"Event rejected: {exc.errors()[0]['loc'][0]} {exc.errors()[0]['msg']}", version
        return "Event recorded.", (version or 0) + 1

    @app.callback(
        [
            Output("shift-current", "children"),
            Output("shift-events-table", "children"),
            Output("shift-operation-log", "children"),
        ],
        [
            Input("store-shift-version", "data"),
            Input("interval-risk", "n_intervals"),
        ],
        State("store-operator", "data"),
    )
    def render_shift(version: int, n_intervals: int, operator: str):
        current = store.get_current_shift(operator)
        if current is None:
            current_view = html.Div("No active shift.", style={"color": MUTED, "padding": "8px 0"})
            events = html.Div()
        else:
            current_view = html.Div(
                [
                    html.Div(store.SHIFT_TYPE_LABELS.get(current.shift_type, current.shift_type), style={"fontWeight": "700"}),
                    html.Div(f"{current.operator_name} · since {current.start_time.strftime('%d/%m %H:%M')}",
                             style={"fontSize": ".75rem", "color": MUTED}),
                ],
                style={"padding": "8px 0"},
            )
            events = _events_table(store.get_shift_events(current.id))

        return current_view, events, _operation_log(store.get_operation_logs(limit=30))
