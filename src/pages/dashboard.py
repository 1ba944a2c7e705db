import logging
from typing import Any

import dash
import dash_bootstrap_components as dbc
import plotly.graph_objects as go
from dash import (
    ALL,
    Input,
    Output,
    State,
    callback,
    dash_table,
    dcc,
    html,
    register_page,
)
from dash.dash_table.Format import Format, Group, Scheme, Sign, Symbol
from dash.exceptions import PreventUpdate

from settings import settings
from utils.aggregate import aggregate, aggregate_by_fiscal_year, grand_total
from utils.definitions import (
    ALL_FISCAL_YEARS,
    CHART_TYPES,
    COUNTRIES,
    FISCAL_YEARS,
    RECORD_TYPES,
    SECTORS,
    ChartTypeLiteral,
    fiscal_year_filter,
)
from utils.figures import generate_allocation_figure, generate_fiscal_year_figure
from utils.store import record_store, target_store
from utils.table import (
    add_table_row,
    apply_record_edits,
    apply_target_edits,
    records_to_rows,
    summaries_to_rows,
    targets_to_rows,
)
from utils.transform import FiscalYearTransformer, SummaryTransformer

logger = logging.getLogger(__name__)

register_page(__name__, path="/", title="Allocation Dashboard")

GRAPH_CONFIG = dcc.Graph.Config(
    displayModeBar=False,
    displaylogo=False,
    responsive=True,
)

COUNTRY_OPTIONS: list[tuple[str, str]] = [(country, country) for country in COUNTRIES]
FISCAL_YEAR_OPTIONS: list[tuple[str, str]] = [("All years", ALL_FISCAL_YEARS)] + [
    (fiscal_year, fiscal_year) for fiscal_year in FISCAL_YEARS
]
CHART_TYPE_OPTIONS: list[tuple[str, str]] = [
    ("Pie", "PIE"),
    ("Bar", "BAR"),
    ("Line", "LINE"),
]

MONEY = Format(
    precision=0, scheme=Scheme.fixed, group=Group.yes, symbol=Symbol.yes, symbol_prefix="$"
)
PERCENT = Format(precision=1, scheme=Scheme.fixed, symbol=Symbol.yes, symbol_suffix="%")
POINTS = Format(precision=1, scheme=Scheme.fixed, sign=Sign.positive)

# Numeric cells keep whatever was typed, the store turns it into a number
NUMERIC_INPUT = {"action": "coerce", "failure": "accept"}

RECORD_COLUMNS: list[dict[str, Any]] = [
    {"name": "ID", "id": "id"},
    {"name": "Name", "id": "name"},
    {"name": "Type", "id": "record_type", "presentation": "dropdown"},
    {"name": "Country", "id": "country"},
    {"name": "Fiscal year", "id": "fiscal_year"},
    {
        "name": "Budget",
        "id": "budget",
        "type": "numeric",
        "format": MONEY,
        "on_change": NUMERIC_INPUT,
    },
    *[
        {
            "name": f"{sector} %",
            "id": sector,
            "type": "numeric",
            "format": PERCENT,
            "on_change": NUMERIC_INPUT,
        }
        for sector in SECTORS
    ],
    {
        "name": "Split total",
        "id": "split_total",
        "type": "numeric",
        "format": PERCENT,
        "editable": False,
    },
]

TARGET_COLUMNS: list[dict[str, Any]] = [
    {"name": "Sector", "id": "sector", "editable": False},
    {
        "name": "Target %",
        "id": "target",
        "type": "numeric",
        "format": PERCENT,
        "on_change": NUMERIC_INPUT,
        "editable": True,
    },
]

SUMMARY_COLUMNS: list[dict[str, Any]] = [
    {"name": "Sector", "id": "sector"},
    {"name": "Actual $", "id": "dollar_total", "type": "numeric", "format": MONEY},
    {"name": "Actual %", "id": "actual_percent", "type": "numeric", "format": PERCENT},
    {"name": "Target %", "id": "target_percent", "type": "numeric", "format": PERCENT},
    {"name": "Deviation (pts)", "id": "deviation", "type": "numeric", "format": POINTS},
    {"name": "Projected %", "id": "projected_percent", "type": "numeric", "format": PERCENT},
    {"name": "Projected $", "id": "projected_dollars", "type": "numeric", "format": MONEY},
]


def _menu_items(item_type: str, options: list[tuple[str, str]]) -> list[dbc.DropdownMenuItem]:
    return [
        dbc.DropdownMenuItem(
            html.Span(label, title=label),
            id={"type": item_type, "value": value},
        )
        for label, value in options
    ]


def fetch_dashboard_data(
    country: str | None,
    fiscal_year: str | None,
    chart_type: ChartTypeLiteral = "BAR",
    projected: bool = False,
) -> tuple[go.Figure, go.Figure, list[dict[str, Any]], str]:
    """Recompute every derived view from the current store contents."""
    records = record_store.all()
    targets = target_store.all()
    year_filter = fiscal_year_filter(fiscal_year)

    summaries = aggregate(records, targets, country, year_filter, projected=projected)
    transformer = SummaryTransformer(summaries)
    allocation_fig = generate_allocation_figure(
        transformer.transform_data(),
        transformer.transform_long(),
        chart_type=chart_type,
        title=(
            f"Sector allocation, {country or 'all countries'}, "
            f"{year_filter or 'all years'}"
        ),
    )

    breakdown = aggregate_by_fiscal_year(records, targets, country)
    fiscal_year_fig = generate_fiscal_year_figure(
        FiscalYearTransformer(breakdown).transform_data(),
        title=f"Actual allocation by fiscal year, {country or 'all countries'}",
    )

    projects = [record for record in records if not record.is_country_note]
    total = grand_total(projects, country, year_filter)
    total_text = f"Committed project budget: ${total:,.0f}"
    if projected:
        combined_total = grand_total(records, country, year_filter)
        total_text += f" | incl. country notes: ${combined_total:,.0f}"

    return allocation_fig, fiscal_year_fig, summaries_to_rows(summaries), total_text


def layout(**other_kwargs) -> html.Div:
    """
    Page layout. The tables are filled from the stores on every page load,
    figures are rendered by callbacks.
    """
    dashboard_settings = settings.dashboard
    return html.Div(
        [
            # Currently selected filter values
            dcc.Store(id="store-country", data=dashboard_settings.default_country),
            dcc.Store(id="store-fiscal-year", data=dashboard_settings.default_fiscal_year),
            dcc.Store(id="store-chart-type", data=dashboard_settings.default_chart_type),
            # Bumped after every store mutation so the views recompute
            dcc.Store(id="store-records-revision", data=0),
            dcc.Store(id="store-targets-revision", data=0),
            dbc.Stack(
                [
                    html.H3("Allocation Dashboard", style={"margin": "0 20px 0 0"}),
                    dbc.Stack(
                        [
                            dbc.DropdownMenu(
                                label="Country",
                                children=_menu_items("country-item", COUNTRY_OPTIONS),
                                id="menu-country",
                                direction="down",
                                class_name="me-2",
                            ),
                            dbc.DropdownMenu(
                                label="Fiscal year",
                                children=_menu_items("fiscal-year-item", FISCAL_YEAR_OPTIONS),
                                id="menu-fiscal-year",
                                direction="down",
                                class_name="me-2",
                            ),
                            dbc.DropdownMenu(
                                label="Chart",
                                children=_menu_items("chart-type-item", CHART_TYPE_OPTIONS),
                                id="menu-chart-type",
                                direction="down",
                                class_name="me-2",
                            ),
                            dbc.Switch(
                                id="switch-projected",
                                label="Include country notes (projected)",
                                value=False,
                            ),
                        ],
                        direction="horizontal",
                        gap=2,
                        class_name="me-auto",
                    ),
                    dbc.Button("About", href="/about", title="About This Dashboard"),
                ],
                direction="horizontal",
                style={"margin": "10px 15px"},
            ),
            dbc.Row(html.Hr()),
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.Div(id="total-text", className="fw-bold"),
                            dcc.Graph(id="allocation-graph", config=GRAPH_CONFIG),
                        ],
                        md=7,
                    ),
                    dbc.Col(
                        [
                            html.H5("Strategic targets"),
                            dash_table.DataTable(
                                id="targets-table",
                                columns=TARGET_COLUMNS,
                                data=targets_to_rows(
                                    target_store.get(dashboard_settings.default_country)
                                ),
                                editable=True,
                                style_cell={"textAlign": "left"},
                            ),
                            html.H5("Allocation vs. target", style={"margin-top": "20px"}),
                            dash_table.DataTable(
                                id="summary-table",
                                columns=SUMMARY_COLUMNS,
                                data=[],
                                style_cell={"textAlign": "left"},
                                style_data_conditional=[
                                    {
                                        "if": {
                                            "filter_query": "{deviation} < 0",
                                            "column_id": "deviation",
                                        },
                                        "color": "#c0392b",
                                    },
                                    {
                                        "if": {
                                            "filter_query": "{deviation} > 0",
                                            "column_id": "deviation",
                                        },
                                        "color": "#1e8449",
                                    },
                                ],
                            ),
                        ],
                        md=5,
                    ),
                ],
                style={"margin": "0 15px"},
            ),
            dbc.Row(
                dbc.Col(dcc.Graph(id="fiscal-year-graph", config=GRAPH_CONFIG)),
                style={"margin": "0 15px"},
            ),
            dbc.Row(
                dbc.Col(
                    [
                        dbc.Stack(
                            [
                                html.H5("Projects and country notes", className="me-auto"),
                                dbc.Button("Add row", id="btn-add-row", color="secondary"),
                            ],
                            direction="horizontal",
                        ),
                        dash_table.DataTable(
                            id="records-table",
                            columns=RECORD_COLUMNS,
                            data=records_to_rows(record_store.all()),
                            editable=True,
                            row_deletable=True,
                            dropdown={
                                "record_type": {
                                    "options": [{"label": t, "value": t} for t in RECORD_TYPES],
                                    "clearable": False,
                                }
                            },
                            style_table={"overflowX": "auto"},
                            style_cell={"textAlign": "left", "minWidth": "90px"},
                            style_data_conditional=[
                                {
                                    "if": {
                                        "filter_query": "{split_total} != 100",
                                        "column_id": "split_total",
                                    },
                                    "color": "#c0392b",
                                },
                            ],
                        ),
                    ]
                ),
                style={"margin": "20px 15px"},
            ),
        ]
    )


def _selected_value(item_type: str) -> Any:
    ctx = dash.callback_context
    if not ctx.triggered:
        raise PreventUpdate
    trig = getattr(ctx, "triggered_id", None)
    if isinstance(trig, dict) and trig.get("type") == item_type:
        return trig.get("value")
    raise PreventUpdate


@callback(
    Output("store-country", "data"),
    Input({"type": "country-item", "value": ALL}, "n_clicks"),
    prevent_initial_call=True,
)
def select_country(_clicks):
    return _selected_value("country-item")


@callback(
    Output("store-fiscal-year", "data"),
    Input({"type": "fiscal-year-item", "value": ALL}, "n_clicks"),
    prevent_initial_call=True,
)
def select_fiscal_year(_clicks):
    return _selected_value("fiscal-year-item")


@callback(
    Output("store-chart-type", "data"),
    Input({"type": "chart-type-item", "value": ALL}, "n_clicks"),
    prevent_initial_call=True,
)
def select_chart_type(_clicks):
    return _selected_value("chart-type-item")


@callback(
    Output("menu-country", "label"),
    Output("menu-fiscal-year", "label"),
    Output("menu-chart-type", "label"),
    Input("store-country", "data"),
    Input("store-fiscal-year", "data"),
    Input("store-chart-type", "data"),
)
def update_menu_labels(country: str | None, fiscal_year: str | None, chart_type: str | None):
    fiscal_year_labels = dict((value, label) for label, value in FISCAL_YEAR_OPTIONS)
    chart_type_labels = dict((value, label) for label, value in CHART_TYPE_OPTIONS)
    return (
        f"Country: {country}" if country else "Country",
        f"Fiscal year: {fiscal_year_labels.get(fiscal_year or '', fiscal_year)}"
        if fiscal_year
        else "Fiscal year",
        f"Chart: {chart_type_labels.get(chart_type or '', chart_type)}" if chart_type else "Chart",
    )


@callback(
    Output("records-table", "data"),
    Output("store-records-revision", "data"),
    Input("records-table", "data_timestamp"),
    Input("btn-add-row", "n_clicks"),
    State("records-table", "data"),
    State("records-table", "data_previous"),
    State("store-country", "data"),
    State("store-fiscal-year", "data"),
    State("store-records-revision", "data"),
    prevent_initial_call=True,
)
def sync_records(
    _timestamp: int | None,
    _add_clicks: int | None,
    data: list[dict[str, Any]] | None,
    data_previous: list[dict[str, Any]] | None,
    country: str | None,
    fiscal_year: str | None,
    revision: int | None,
) -> tuple[list[dict[str, Any]], int]:
    """Forward table edits, row deletions and added rows to the record store."""
    if dash.ctx.triggered_id == "btn-add-row":
        add_table_row(record_store, country, fiscal_year)
        logger.info("Added a blank record row (%s, %s)", country, fiscal_year)
    elif not apply_record_edits(record_store, data_previous, data):
        raise PreventUpdate
    return records_to_rows(record_store.all()), (revision or 0) + 1


@callback(
    Output("targets-table", "data"),
    Output("store-targets-revision", "data"),
    Input("store-country", "data"),
    Input("targets-table", "data_timestamp"),
    State("targets-table", "data"),
    State("targets-table", "data_previous"),
    State("store-targets-revision", "data"),
)
def sync_targets(
    country: str | None,
    _timestamp: int | None,
    data: list[dict[str, Any]] | None,
    data_previous: list[dict[str, Any]] | None,
    revision: int | None,
) -> tuple[list[dict[str, Any]], int]:
    """Show the targets of the selected country and store edited target values."""
    if dash.ctx.triggered_id == "targets-table":
        if not apply_target_edits(target_store, country, data_previous, data):
            raise PreventUpdate
        revision = (revision or 0) + 1
    return targets_to_rows(target_store.get(country)), revision or 0


@callback(
    Output("allocation-graph", "figure"),
    Output("fiscal-year-graph", "figure"),
    Output("summary-table", "data"),
    Output("total-text", "children"),
    Input("store-records-revision", "data"),
    Input("store-targets-revision", "data"),
    Input("store-country", "data"),
    Input("store-fiscal-year", "data"),
    Input("store-chart-type", "data"),
    Input("switch-projected", "value"),
)
def update_views(
    _records_revision: int | None,
    _targets_revision: int | None,
    country: str | None,
    fiscal_year: str | None,
    chart_type: ChartTypeLiteral | None,
    projected: bool | None,
):
    if chart_type not in CHART_TYPES:
        chart_type = settings.dashboard.default_chart_type
    return fetch_dashboard_data(country, fiscal_year, chart_type, bool(projected))
