"""
Root logger setup.

Every module logs through its own `logging.getLogger(__name__)`; this
function attaches a single stdout handler to the root logger so those
records share one format. Called once from main.py at import time.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger. Safe to call more than once."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    # Re-running (uvicorn --reload, test imports) must not stack handlers
    for handler in root_logger.handlers:
        if getattr(handler, "_houseledger", False):
            return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler._houseledger = True
    root_logger.addHandler(console_handler)

    # SQL echo is controlled by DEBUG via the engine, keep the pool quiet
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
