"""
src/layout/components/kpi_card.py
──────────────────────────────────
Counter card for the process overview banner.
"""
from dash import html

from config.alarms import STATUS_COLORS

CARD_BG = "#161b22"
MUTED = "#8b949e"
NEUTRAL = "#58a6ff"


def kpi_card(label: str, count: int, total: int | None = None, alarming: str | None = None) -> html.Div:
    """
    Uppercase label over a large count, optionally "of <total>".

    `alarming` names a status ("warning" / "alarm"): a non-zero count is then
    shown in that status colour with a matching left accent, zero in green.
    """
    if alarming is None:
        color = NEUTRAL
    else:
        color = STATUS_COLORS[alarming] if count else STATUS_COLORS["normal"]

    value = [html.Span(str(count))]
    if total is not None:
        value.append(html.Span(f" / {total}", style={"fontSize": ".8rem", "color": MUTED}))

    return html.Div(
        [
            html.Div(label, style={"fontSize": ".68rem", "color": MUTED, "textTransform": "uppercase", "letterSpacing": ".06em"}),
            html.Div(value, style={"fontSize": "1.4rem", "fontWeight": "700", "color": color, "marginTop": "2px"}),
        ],
        style={
            "backgroundColor": CARD_BG,
            "border": "1px solid #30363d",
            "borderLeft": f"3px solid {color}",
            "borderRadius": "6px",
            "padding": "12px 14px",
        },
    )
