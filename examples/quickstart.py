"""Example service shipping logs to the POGR intake.

Run with:
    POGR_ACCESS=... POGR_SECRET=... python examples/quickstart.py

Environment:
    POGR_ACCESS       - access key
    POGR_SECRET       - secret key
    POGR_INTAKE_URL   - optional intake URL override

Demonstrates:
    - process-wide initialization with a configuration mapping
    - direct structured calls with data and tags
    - routing stdlib ``logging`` calls through PogrHandler
    - flushing queued records at exit
"""

import logging
import os

from pogrlog import (
    get_logger,
    init_logger,
    install_handler,
    shutdown,
    structured_log,
    structured_message,
)

logging.basicConfig(level=logging.INFO)

init_logger(
    {
        "mode": "access_keys",
        "access_key": os.environ.get("POGR_ACCESS", "demo-access"),
        "secret_key": os.environ.get("POGR_SECRET", "demo-secret"),
        "service": "quickstart",
        "environment": "development",
        "default_type": "demo",
    },
    "info",
)

# Direct calls
structured_log("info", "service started", data={"pid": os.getpid()})
structured_log("debug", "below threshold, never sent")
get_logger().warn("low disk", event_type="disk", data={"free_mb": 120}, tags={"host": "db1"})

# Stdlib logging
app_logger = logging.getLogger("quickstart")
install_handler(app_logger)
app_logger.error("payment failed", extra={"data": {"order_id": 42}})
app_logger.info(structured_message("User logged in", "login", {"user_id": 123}))

try:
    1 / 0
except ZeroDivisionError:
    app_logger.exception("division failed")

dispatcher = get_logger().dispatcher
shutdown(timeout=5)
print(dispatcher.stats())
