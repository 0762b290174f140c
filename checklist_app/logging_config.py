import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
NOISY_LOGGERS = ("urllib3", "requests", "watchdog")


def configure_logging(level_name=None):
    """Root logging for the Streamlit client; ``DASHBOARD_LOG_LEVEL`` sets the level."""
    level_name = (level_name or os.getenv("DASHBOARD_LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("checklist_app").setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return logging.getLogger("checklist_app")
