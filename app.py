"""Application entry point for the KennelDesk slideout service."""

import logging
import os

from kenneldesk.webapp import create_app

logging.basicConfig(
    level=getattr(logging, os.environ.get("KENNELDESK_LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app("kenneldesk_cache.db")


if __name__ == "__main__":
    # One controller and one SQLite connection per app: serve requests on one thread.
    app.run(debug=True, threaded=False)
