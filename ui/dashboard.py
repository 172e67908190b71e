# ui/dashboard.py

import dash
from dash import dcc, html, Input, Output, State, ctx

from ai.chart_signal import ChartImage, analyze_charts
from errors import DashboardError
from ui.components import (
    PREDEFINED_TOKENS,
    manual_sentiment_label,
    market_figure,
    next_manual_sentiment,
    render_analysis,
    render_error,
    render_market,
    render_sentiment,
    render_waiting,
    resolve_token,
    upload_label,
)

UPLOAD_STYLE = {
    "border": "2px dashed #888",
    "padding": "20px",
    "textAlign": "center",
    "cursor": "pointer",
}


def _upload(component_id, title):
    return html.Div([
        html.Label(title, style={"textTransform": "uppercase", "fontSize": "0.8em"}),
        dcc.Upload(
            id=component_id,
            accept="image/*",
            multiple=False,
            children=html.Div(upload_label(None), id=f"{component_id}-label"),
            style=UPLOAD_STYLE,
        ),
    ])


def build_layout(settings):
    return html.Div([

        html.H1("AI Chart Signal Dashboard"),

        html.Div([
            html.H2("Technical Analysis Engine", style={"display": "inline-block",
                                                       "marginRight": "20px"}),
            html.Button(manual_sentiment_label(None), id="sentiment-toggle"),
            dcc.Store(id="manual-sentiment"),
        ]),
        html.P("Upload charts to analyze MACD patterns and generate signals."),

        html.Label("Select Token"),
        dcc.RadioItems(
            id="token-choice",
            options=PREDEFINED_TOKENS,
            value=PREDEFINED_TOKENS[0],
            inline=True,
        ),
        dcc.Input(id="token-other", type="text", placeholder="Other...", debounce=True),

        html.Div([
            _upload("upload-15m", "15m Chart (Entry)"),
            _upload("upload-1h", "1H Chart (Trend)"),
        ], style={"display": "grid", "gridTemplateColumns": "1fr 1fr", "gap": "15px",
                  "marginTop": "15px"}),

        html.Button("Generate Signal", id="analyze-button", disabled=True,
                    style={"width": "100%", "padding": "12px", "marginTop": "15px"}),

        dcc.Loading(html.Div(id="analysis-error")),
        html.Div(render_waiting(), id="analysis-result"),

        html.Hr(),

        html.Div(render_market(None), id="market-panel"),
        dcc.Graph(id="market-chart", figure=market_figure(None)),

        html.Hr(),

        html.Div([
            html.H2("Market Sentiment Hub", style={"display": "inline-block",
                                                  "marginRight": "20px"}),
            html.Button("Refresh", id="sentiment-refresh", title="Refresh sentiment"),
        ]),
        html.Div(render_sentiment(None), id="sentiment-panel"),

        dcc.Interval(id="view-refresh", interval=int(settings.view_refresh_seconds * 1000)),
    ])


def sentiment_panel(sentiment_task, triggered_id):
    """Manual refresh runs the poller now; heartbeat ticks only read its last result."""
    if triggered_id == "sentiment-refresh":
        return render_sentiment(sentiment_task.trigger())
    return render_sentiment(sentiment_task.latest)


def create_dashboard(client, settings, market_task, sentiment_task):
    """
    Wire the three flows into a Dash app. The market and sentiment pollers
    are owned by the caller; the view only reads their latest results.
    """
    app = dash.Dash(__name__, title="AI Chart Signal Dashboard")
    app.layout = build_layout(settings)

    @app.callback(
        Output("upload-15m-label", "children"),
        Output("upload-1h-label", "children"),
        Output("analyze-button", "disabled"),
        Input("upload-15m", "filename"),
        Input("upload-1h", "filename"),
    )
    def handle_uploads(filename_15m, filename_1h):
        ready = bool(filename_15m) and bool(filename_1h)
        return upload_label(filename_15m), upload_label(filename_1h), not ready

    @app.callback(
        Output("analysis-result", "children"),
        Output("analysis-error", "children"),
        Input("analyze-button", "n_clicks"),
        State("token-choice", "value"),
        State("token-other", "value"),
        State("upload-15m", "contents"),
        State("upload-15m", "filename"),
        State("upload-1h", "contents"),
        State("upload-1h", "filename"),
        running=[(Output("analyze-button", "disabled"), True, False)],
        prevent_initial_call=True,
    )
    def handle_analyze(n_clicks, choice, other, contents_15m, filename_15m,
                       contents_1h, filename_1h):
        token = resolve_token(choice, other)
        try:
            chart_15m = ChartImage.from_upload(contents_15m, filename_15m) if contents_15m else None
            chart_1h = ChartImage.from_upload(contents_1h, filename_1h) if contents_1h else None
            result = analyze_charts(
                client, chart_15m, chart_1h, token,
                model=settings.openai_model,
                policy=settings.retry,
            )
        except DashboardError as exc:
            return render_waiting(), render_error(str(exc))

        return render_analysis(result, token), None

    @app.callback(
        Output("manual-sentiment", "data"),
        Output("sentiment-toggle", "children"),
        Input("sentiment-toggle", "n_clicks"),
        State("manual-sentiment", "data"),
        prevent_initial_call=True,
    )
    def handle_sentiment_toggle(n_clicks, current):
        value = next_manual_sentiment(current)
        return value, manual_sentiment_label(value)

    @app.callback(
        Output("market-panel", "children"),
        Output("market-chart", "figure"),
        Input("view-refresh", "n_intervals"),
    )
    def refresh_market(n_intervals):
        snapshot = market_task.latest
        return render_market(snapshot), market_figure(snapshot)

    @app.callback(
        Output("sentiment-panel", "children"),
        Input("view-refresh", "n_intervals"),
        Input("sentiment-refresh", "n_clicks"),
    )
    def refresh_sentiment(n_intervals, n_clicks):
        return sentiment_panel(sentiment_task, ctx.triggered_id)

    return app
