from __future__ import annotations
import logging
from typing import Optional

from config.settings import LOG_FORMAT, LOG_LEVEL


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the Streamlit app and the CLI."""
    root = logging.getLogger()
    if root.handlers:
        # Streamlit reruns the script on every interaction
        root.setLevel(level or LOG_LEVEL)
        return
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
