"""Logging setup shared by the CLI and the Streamlit front-end."""

import logging
from typing import Optional

from bmi_tracker.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a stderr handler to the root logger at the configured level."""
    logging.basicConfig(format=LOG_FORMAT, level=(level or LOG_LEVEL).upper())
