"""
src/callbacks/causality.py
───────────────────────────
Causality configuration page callbacks: graph export / import / reset, plus
the fault tree and bow-tie views, which re-render on every sampling tick so
abnormal tags stay highlighted.
"""
from __future__ import annotations

import logging

import dash_bootstrap_components as dbc
from dash import Input, Output, State, ctx, html

from config.fault_trees import BOWTIE_COLUMN_LABELS
from src.analytics.causality import upstream_tag_ids
from src.analytics.fault_tree import (
    abnormal_tag_ids,
    bowtie_columns,
    bowtie_tag_ids,
    fault_tree_chain,
    fault_tree_tag_ids,
    get_bowtie,
    get_bowties_for_area,
)
from src.analytics.thresholds import get_status_color
from src.data import store
from src.data.models import BowTie, CausalityGraph, FaultTree, TagData
from src.data.monitor import PlantMonitor

BORDER = "#30363d"
MUTED = "#8b949e"

logger = logging.getLogger(__name__)


def _links_table(graph: CausalityGraph) -> html.Table:
    rows = [
        html.Tr(
            [
                html.Td(link.from_, style={"color": "#58a6ff"}),
                html.Td(link.to),
                html.Td(f"{link.contribution:.0f}%", style={"color": MUTED}),
            ],
            style={"borderBottom": f"1px solid {BORDER}"},
        )
        for link in graph.links
    ]
    return html.Table(
        [
            html.Thead(html.Tr(
                [html.Th(h) for h in ["Cause", "Effect", "Contribution"]],
                style={"color": MUTED, "fontSize": ".68rem", "textTransform": "uppercase"},
            )),
            html.Tbody(rows),
        ],
        style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".8rem"},
    )


def _fault_tree_table(tree: FaultTree | None, tags: list[TagData]) -> html.Div:
    """Links of one tree; causes currently in warning or alarm are highlighted."""
    if tree is None:
        return html.Div("No fault tree for this area", style={"color": MUTED, "fontSize": ".8rem"})

    status = {t.id: t.status for t in tags}
    abnormal = abnormal_tag_ids(fault_tree_tag_ids(tree), tags)

    def _tag(tag_id: str) -> html.Span:
        color = get_status_color(status[tag_id]) if tag_id in abnormal else "#58a6ff"
        return html.Span(tag_id, style={"color": color, "fontWeight": "700" if tag_id in abnormal else "400"})

    rows = [
        html.Tr(
            [
                html.Td(_tag(link.from_)),
                html.Td(_tag(link.to)),
                html.Td(f"{link.contribution:.0f}%", style={"color": MUTED}),
                html.Td(link.description or "", style={"color": MUTED, "fontSize": ".72rem"}),
            ],
            style={"borderBottom": f"1px solid {BORDER}"},
        )
        for link in tree.links
    ]
    causes = upstream_tag_ids(fault_tree_chain(tree))
    return html.Div(
        [
            html.Div(
                ["Top event ", _tag(tree.top_event_tag_id), f" · causes: {', '.join(causes) or 'none'}"],
                style={"fontSize": ".78rem", "color": MUTED, "marginBottom": "8px"},
            ),
            html.Table(
                [
                    html.Thead(html.Tr(
                        [html.Th(h) for h in ["Cause", "Effect", "Contribution", "Description"]],
                        style={"color": MUTED, "fontSize": ".68rem", "textTransform": "uppercase"},
                    )),
                    html.Tbody(rows),
                ],
                style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".8rem"},
            ),
        ]
    )


def _bowtie_view(bowtie: BowTie | None, tags: list[TagData]) -> html.Div:
    """Five columns, threats to consequences; events bound to an abnormal tag are outlined in its status colour."""
    if bowtie is None:
        return html.Div("No bow-tie for this area", style={"color": MUTED, "fontSize": ".8rem"})

    status = {t.id: t.status for t in tags}
    abnormal = abnormal_tag_ids(bowtie_tag_ids(bowtie), tags)

    def _event_box(event) -> html.Div:
        color = get_status_color(status[event.tag_id]) if event.tag_id in abnormal else BORDER
        return html.Div(
            [
                html.Div(event.label),
                html.Div(event.tag_id or "", style={"fontSize": ".65rem", "color": MUTED}),
            ],
            style={"border": f"1px solid {color}", "borderRadius": "4px", "padding": "4px 6px", "marginBottom": "6px", "fontSize": ".74rem"},
        )

    columns = [
        dbc.Col(
            [
                html.Div(BOWTIE_COLUMN_LABELS[event_type.value], style={"fontSize": ".65rem", "color": MUTED, "textTransform": "uppercase", "marginBottom": "6px"}),
                *(_event_box(e) for e in events),
            ]
        )
        for event_type, events in bowtie_columns(bowtie).items()
    ]
    return html.Div([html.Div(bowtie.name, style={"fontWeight": "600", "marginBottom": "8px"}), dbc.Row(columns, className="g-2")])


def register(app, monitor: PlantMonitor) -> None:

    @app.callback(
        [
            Output("causality-json", "value"),
            Output("causality-status", "children"),
            Output("causality-links-table", "children"),
        ],
        [
            Input("causality-import-btn", "n_clicks"),
            Input("causality-export-btn", "n_clicks"),
            Input("causality-reset-btn", "n_clicks"),
        ],
        [
            State("causality-json", "value"),
            State("store-operator", "data"),
        ],
    )
    def manage_graph(n_import, n_export, n_reset, text: str | None, operator: str):
        causality = monitor.causality
        status = f"Graph v{causality.graph.version} · {len(causality.graph.links)} links"

        if ctx.triggered_id == "causality-import-btn":
            try:
                graph = causality.import_graph(text or "")
            except ValueError as exc:
                first = str(exc).splitlines()[0]
                logger.warning("Causality import rejected, keeping v%s: %s", causality.graph.version, first)
                return text, f"Import rejected: {first}", _links_table(causality.graph)
            store.log_operation(operator, operator, "causality_import", {"version": graph.version, "links": len(graph.links)})
            status = f"Imported v{graph.version} · {len(graph.links)} links"
        elif ctx.triggered_id == "causality-reset-btn":
            causality.reset()
            store.log_operation(operator, operator, "causality_reset")
            status = f"Reset to default v{causality.graph.version}"

        exported = causality.export_graph()
        return exported.model_dump_json(by_alias=True, exclude_none=True, indent=2), status, _links_table(exported)

    # ── Fault trees & bow-ties ────────────────────────────────────────────────
    @app.callback(
        [
            Output("fault-tree-select", "options"),
            Output("fault-tree-select", "value"),
            Output("bowtie-select", "options"),
            Output("bowtie-select", "value"),
        ],
        [
            Input("scenario-area", "value"),
            Input("fault-tree-reset-btn", "n_clicks"),
        ],
        State("store-operator", "data"),
    )
    def select_area(area_id: str, n_reset, operator: str):
        if ctx.triggered_id == "fault-tree-reset-btn":
            monitor.fault_trees.reset()
            store.log_operation(operator, operator, "fault_tree_reset")

        trees = monitor.fault_trees.for_area(area_id)
        bowties = get_bowties_for_area(area_id)
        return (
            [{"label": t.name, "value": t.id} for t in trees],
            trees[0].id if trees else None,
            [{"label": b.name, "value": b.id} for b in bowties],
            bowties[0].id if bowties else None,
        )

    @app.callback(
        Output("fault-tree-table", "children"),
        [
            Input("fault-tree-select", "value"),
            Input("store-tick", "data"),
        ],
    )
    def render_fault_tree(tree_id: str | None, tick):
        tree = monitor.fault_trees.get(tree_id) if tree_id else None
        return _fault_tree_table(tree, monitor.tags)

    @app.callback(
        Output("bowtie-view", "children"),
        [
            Input("bowtie-select", "value"),
            Input("store-tick", "data"),
        ],
    )
    def render_bowtie(bowtie_id: str | None, tick):
        bowtie = get_bowtie(bowtie_id) if bowtie_id else None
        return _bowtie_view(bowtie, monitor.tags)
