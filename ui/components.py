# ui/components.py

import pandas as pd
import plotly.graph_objects as go
from dash import dash_table, html

from analysis.market_trend import format_change, format_price
from models import TradeDirection

PREDEFINED_TOKENS = ["SUI", "SOL", "BERA"]

GREEN = "#4ade80"
RED = "#f87171"
YELLOW = "#facc15"
SLATE = "#94a3b8"

DIRECTION_COLORS = {
    TradeDirection.LONG: GREEN,
    TradeDirection.SHORT: RED,
    TradeDirection.WAIT: YELLOW,
}

CONFIDENCE_COLORS = {"High": GREEN, "Medium": YELLOW, "Low": RED}

SENTIMENT_COLORS = {"Bullish": GREEN, "Bearish": RED}

MANUAL_SENTIMENT_CYCLE = {None: "Neutral", "Neutral": "Bull", "Bull": "Bear", "Bear": "Neutral"}

CARD_STYLE = {"border": "1px solid #ccc", "padding": "15px", "marginTop": "10px"}


def resolve_token(choice, other):
    other = (other or "").strip().upper()
    return other or choice


def next_manual_sentiment(current):
    return MANUAL_SENTIMENT_CYCLE.get(current, "Neutral")


def manual_sentiment_label(current):
    return f"Sentiment: {current}" if current else "Show Sentiment"


def upload_label(filename):
    if filename:
        return f"✓ {filename}"
    return "Click to Upload"


def _metric(label, value, color=None):
    style = {"fontFamily": "monospace", "fontSize": "1.2em"}
    if color:
        style["color"] = color
    return html.Div([
        html.Div(label, style={"fontSize": "0.7em", "textTransform": "uppercase", "color": SLATE}),
        html.Div(value, style=style),
    ], style={"padding": "8px", "border": "1px solid #444"})


def render_analysis(result, token):
    direction_color = DIRECTION_COLORS.get(result.direction, YELLOW)

    return html.Div([
        html.Div([
            html.H3(f"Signal for {token}", style={"display": "inline-block", "marginRight": "15px"}),
            html.Span(f"Action: {result.direction.value}",
                      className="direction-badge",
                      style={"color": direction_color, "border": f"1px solid {direction_color}",
                             "padding": "2px 8px", "fontWeight": "bold"}),
        ]),
        html.Div([
            _metric("Entry Target", result.entry_price),
            _metric("Take Profit", result.target_price, GREEN),
            _metric("PnL Projection", result.pnl_projection),
            _metric("Confidence", result.confidence.value,
                    CONFIDENCE_COLORS.get(result.confidence.value)),
        ], style={"display": "grid", "gridTemplateColumns": "1fr 1fr", "gap": "10px"}),
        html.Div([
            html.H4("Analysis Rationale"),
            html.P(result.rationale, style={"whiteSpace": "pre-line"}),
            html.Small(f"Trend Discovery: {result.trend}", style={"fontStyle": "italic"}),
        ], style=CARD_STYLE),
    ])


def render_error(message):
    return html.Div(message, className="analysis-error",
                    style={"color": RED, "border": f"1px solid {RED}", "padding": "10px",
                           "marginTop": "10px"})


def render_waiting():
    return html.Div([
        html.P("Waiting for Chart Uploads", style={"fontWeight": "bold"}),
        html.Small("Signals will be calculated once 15m and 1h charts are provided."),
    ], style={**CARD_STYLE, "borderStyle": "dashed", "textAlign": "center", "color": SLATE})


def coin_icon(coin):
    if not coin.image:
        return ""
    return f"![{coin.symbol.upper()}]({coin.image})"


def market_frame(coins):
    return pd.DataFrame(
        [{
            "Icon": coin_icon(coin),
            "Asset": coin.symbol.upper(),
            "Price": format_price(coin.current_price),
            "24h %": format_change(coin.price_change_percentage_24h),
        } for coin in coins],
        columns=["Icon", "Asset", "Price", "24h %"],
    )


def render_market(snapshot):
    if snapshot is None:
        return html.Div("Loading market data...", style={"color": SLATE})

    trend_color = GREEN if snapshot.trend == "Bullish" else RED
    header = html.Div([
        html.H2("Market Monitor", style={"display": "inline-block", "marginRight": "15px"}),
        html.Span(snapshot.trend.upper(), className="market-trend", style={"color": trend_color}),
        html.Div([
            html.Span(f"{snapshot.up_count} Up", style={"color": GREEN, "marginRight": "15px"}),
            html.Span(f"{snapshot.down_count} Down", style={"color": RED, "marginRight": "15px"}),
            html.Small("Excl. Stables", style={"color": SLATE}),
        ]),
    ])

    if not snapshot.coins:
        return html.Div([header, html.P("No market data available.", style={"color": SLATE})])

    df = market_frame(snapshot.coins)
    table = dash_table.DataTable(
        data=df.to_dict("records"),
        columns=[
            {"name": "", "id": "Icon", "presentation": "markdown"},
            *({"name": c, "id": c} for c in df.columns if c != "Icon"),
        ],
        css=[{"selector": "td img", "rule": "width: 20px; height: 20px; border-radius: 50%;"}],
        style_cell={"textAlign": "right"},
        style_cell_conditional=[
            {"if": {"column_id": c}, "textAlign": "left"} for c in ("Icon", "Asset")
        ],
        style_data_conditional=[
            {"if": {"filter_query": '{24h %} contains "+"', "column_id": "24h %"}, "color": GREEN},
            {"if": {"filter_query": '{24h %} contains "-"', "column_id": "24h %"}, "color": RED},
        ],
    )

    return html.Div([
        header,
        table,
        html.Small("Updates automatically from live market data.", style={"color": SLATE}),
    ])


def market_figure(snapshot):
    fig = go.Figure()
    if snapshot is not None and snapshot.coins:
        changes = [coin.price_change_percentage_24h or 0.0 for coin in snapshot.coins]
        fig.add_trace(go.Bar(
            x=[coin.symbol.upper() for coin in snapshot.coins],
            y=changes,
            marker_color=[GREEN if change > 0 else RED for change in changes],
        ))
    fig.update_layout(template="plotly_dark", height=300, title="24h Change (%)",
                      margin={"l": 30, "r": 10, "t": 40, "b": 30})
    return fig


def render_sentiment(analysis):
    if analysis is None:
        return html.Div("Loading sentiment...", style={"color": SLATE})

    color = SENTIMENT_COLORS.get(analysis.sentiment, SLATE)
    children = [
        html.Div(f"CURRENT SENTIMENT: {analysis.sentiment.upper()}",
                 className="sentiment-label",
                 style={"color": color, "border": f"1px solid {color}", "padding": "8px",
                        "textAlign": "center", "fontWeight": "bold"}),
        html.P(f'"{analysis.summary}"', style={"fontStyle": "italic"}),
    ]

    if analysis.sources:
        children.append(html.H5("Grounded Sources"))
        children.append(html.Div([
            html.A(f"{idx}. {source.title}", href=source.uri, target="_blank",
                   rel="noopener noreferrer", style={"display": "block"})
            for idx, source in enumerate(analysis.sources, start=1)
        ], className="sentiment-sources"))

    children.append(html.Small("Aggregating: @ThuanCapital, CMC, CG & Social Feeds.",
                               style={"color": SLATE}))
    return html.Div(children)
