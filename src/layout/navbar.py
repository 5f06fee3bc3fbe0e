"""
src/layout/navbar.py
─────────────────────
Top bar: page links plus the unacknowledged-alarm counter, which
callbacks/navigation.py refreshes on every risk refresh.
"""

import dash_bootstrap_components as dbc
from dash import html

BAR_BG = "#0d1117"
LINE = "#30363d"

NAV_PAGES: list[tuple[str, str]] = [
    ("/", "Process"),
    ("/alarms", "Alarms"),
    ("/causality", "Causality"),
    ("/shift", "Shift"),
]


def _alarm_counter() -> dbc.NavItem:
    return dbc.NavItem(html.Span(
        id="nav-active-alarms",
        style={
            "marginLeft": "12px",
            "fontSize": ".72rem",
            "fontWeight": "700",
            "border": f"1px solid {LINE}",
            "borderRadius": "4px",
            "padding": "2px 8px",
        },
    ))


def create_navbar() -> dbc.Navbar:
    links = [dbc.NavItem(dbc.NavLink(label, href=href, active="exact")) for href, label in NAV_PAGES]
    brand = dbc.NavbarBrand(
        [html.B("DCS"), html.Span(" · FCC unit", style={"fontSize": ".75rem", "color": "#8b949e"})],
        href="/",
        style={"color": "#58a6ff"},
    )
    menu = dbc.Collapse(
        dbc.Nav([*links, _alarm_counter()], className="ms-auto", navbar=True),
        id="navbar-collapse",
        is_open=False,
        navbar=True,
    )
    return dbc.Navbar(
        dbc.Container([brand, dbc.NavbarToggler(id="navbar-toggler", n_clicks=0), menu], fluid=True),
        color=BAR_BG,
        dark=True,
        sticky="top",
        style={"borderBottom": f"1px solid {LINE}"},
    )
