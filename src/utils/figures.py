"""Plotly figures for the allocation dashboard."""

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from utils.definitions import FISCAL_YEARS, SECTORS, ChartTypeLiteral
from utils.helper import wrap_label

SECTOR_COLORS: dict[str, str] = {
    "Education": "#4c78a8",
    "Food Security & Livelihoods": "#f58518",
    "Health": "#54a24b",
    "Humanitarian Assistance": "#e45756",
    "Peacebuilding": "#b279a2",
}

MEASURE_COLORS: dict[str, str] = {
    "Actual": "#1f3b5c",
    "Target": "#a0a0a0",
    "Projected": "#7fb3d5",
}


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text=message, showarrow=False, x=0.5, y=0.5, xref="paper", yref="paper")
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    return fig


def generate_allocation_figure(
    summary_df: pd.DataFrame,
    long_df: pd.DataFrame,
    chart_type: ChartTypeLiteral = "BAR",
    title: str | None = None,
) -> go.Figure:
    """
    Render the sector allocation as a pie (actual dollars), a grouped bar or a line
    (actual vs. target vs. projected percentages).
    """
    if chart_type == "PIE":
        if summary_df.empty or summary_df["dollar_total"].sum() <= 0:
            return _empty_figure("No budget allocated for this selection")
        fig = px.pie(
            summary_df,
            names="sector",
            values="dollar_total",
            color="sector",
            color_discrete_map=SECTOR_COLORS,
            category_orders={"sector": list(SECTORS)},
            hole=0.35,
        )
        fig.update_traces(
            hovertemplate="<b>%{label}</b><br>$%{value:,.0f}<br>%{percent}<extra></extra>",
            sort=False,
        )
    elif chart_type in ("BAR", "LINE"):
        plot_df = long_df.assign(sector=long_df["sector"].map(wrap_label))
        common = dict(
            x="sector",
            y="percent",
            color="measure",
            color_discrete_map=MEASURE_COLORS,
            category_orders={"sector": [wrap_label(s) for s in SECTORS]},
            labels={"sector": "", "percent": "% of budget", "measure": ""},
        )
        if chart_type == "BAR":
            fig = px.bar(plot_df, barmode="group", **common)
        else:
            fig = px.line(plot_df, markers=True, **common)
        fig.update_traces(hovertemplate="%{y:.1f}%<extra></extra>")
    else:
        raise ValueError(f"Unknown chart type: {chart_type}")

    fig.update_layout(
        title=title,
        margin=dict(t=50, l=25, r=25, b=25),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, x=0),
    )
    return fig


def generate_fiscal_year_figure(
    fiscal_year_df: pd.DataFrame, title: str | None = None
) -> go.Figure:
    """Actual percentage per sector across fiscal years, one line per sector."""
    if fiscal_year_df.empty:
        return _empty_figure("No fiscal years to compare")
    fig = px.line(
        fiscal_year_df,
        x="fiscal_year",
        y="actual_percent",
        color="sector",
        markers=True,
        color_discrete_map=SECTOR_COLORS,
        category_orders={"sector": list(SECTORS), "fiscal_year": list(FISCAL_YEARS)},
        labels={"fiscal_year": "", "actual_percent": "% of budget", "sector": ""},
        custom_data=["dollar_total"],
    )
    fig.update_traces(
        hovertemplate="%{x}: %{y:.1f}%<br>$%{customdata[0]:,.0f}<extra></extra>",
    )
    fig.update_layout(title=title, margin=dict(t=50, l=25, r=25, b=25))
    return fig
