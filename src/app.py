"""Dash Plotly App."""

import logging

from dash import Dash, html, page_container
import dash_bootstrap_components as dbc

from database import init_database
from settings import settings
from utils.sample_data import seed_stores
from utils.store import record_store, target_store

logging.basicConfig(
    level=settings.dashboard.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

init_database()
if settings.dashboard.seed_sample_data:
    seed_stores(record_store, target_store)

app = Dash(
    __name__,
    use_pages=True,
    external_stylesheets=[dbc.themes.BOOTSTRAP],
    title="Allocation Dashboard",
)
server = app.server


app.layout = html.Div(
    children=[
        page_container,
    ]
)


@app.server.route("/healthz")
def healthz():
    return {"status": "ok", "records": len(record_store)}


if __name__ == "__main__":
    # Without the reloader a second process would start with its own in-memory store
    app.run(debug=settings.dashboard.debug, use_reloader=False)
