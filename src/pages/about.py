"""About page for the allocation dashboard."""

from dash import html, register_page

from utils.definitions import COUNTRIES, FISCAL_YEARS, SECTORS

# Register this page with Dash
register_page(__name__, path="/about", title="About")

# Define the layout of the about page using Dash HTML components
layout = html.Div(
    [
        # Header section
        html.Header(
            [
                html.A("Back to dashboard", href="/", title="Go to Home Page"),
                html.H1("About this dashboard"),
            ],
            style={"margin": "15px"},
        ),
        # Main content section
        html.Main(
            [
                # "What you are looking at" section
                html.H2("What you are looking at"),
                html.P(
                    "The dashboard records development-aid projects and country notes (CNs), "
                    "splits each budget across a fixed set of sectors and compares the resulting "
                    "sector shares with the strategic targets of each country."
                ),
                html.Ul([html.Li(sector) for sector in SECTORS]),
                # "How the numbers are computed" section
                html.H2("How the numbers are computed"),
                html.Ul(
                    [
                        html.Li(
                            [
                                html.Strong("Sector dollars:"),
                                " the sum over the selected records of budget times the "
                                "sector's share (in percent) of that budget.",
                            ]
                        ),
                        html.Li(
                            [
                                html.Strong("Actual %:"),
                                " sector dollars of committed projects divided by the total "
                                "budget of those projects. Budget not assigned to any sector "
                                "is not redistributed.",
                            ]
                        ),
                        html.Li(
                            [
                                html.Strong("Projected %:"),
                                " the same computation over projects and country notes "
                                "together, showing where spending is headed if the notes turn "
                                "into projects.",
                            ]
                        ),
                        html.Li(
                            [
                                html.Strong("Deviation:"),
                                " actual minus target, in percentage points.",
                            ]
                        ),
                    ]
                ),
                # Limitations section
                html.H2("Limitations and notes"),
                html.P(
                    f"Countries: {', '.join(COUNTRIES)}. Fiscal years: {', '.join(FISCAL_YEARS)}. "
                    "Edits are kept in memory only and are lost when the server restarts. "
                    "Values that are not numbers are stored as 0."
                ),
            ],
            style={"margin": "15px"},
        ),
    ]
)
