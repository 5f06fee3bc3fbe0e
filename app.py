"""
app.py
──────
FCC Unit DCS Monitor: application entry point.

Startup sequence:
  1. Configure logging, initialize SQLite tables
  2. Load the causality graph (persisted override or default) and the plant monitor
  3. Create Dash app with DARKLY bootstrap theme and register callbacks
  4. Run dev server (or expose `server` for gunicorn in production)
"""
import logging

import dash
import dash_bootstrap_components as dbc

from config.settings import settings
from src.analytics.causality import CausalityStore
from src.data.monitor import PlantMonitor
from src.data.store import SQLiteKeyValue, initialize_db
from src.layout.main import create_layout

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("dcs")

# ── 1. Database ───────────────────────────────────────────────────────────────
initialize_db()
logger.info("Database ready at %s", settings.DATABASE_URL)

# ── 2. Plant state ────────────────────────────────────────────────────────────
causality = CausalityStore(SQLiteKeyValue())
monitor = PlantMonitor(causality)

# ── 3. Dash app ───────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.DARKLY],
    suppress_callback_exceptions=True,
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    title="DCS Monitor",
)

server = app.server  # gunicorn entry point
app.layout = create_layout()

from src.callbacks import alarms, causality as causality_callbacks, navigation, shift

navigation.register(app, monitor)
alarms.register(app, monitor)
causality_callbacks.register(app, monitor)
shift.register(app)

# ── 4. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    app.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
    )
