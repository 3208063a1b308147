"""Logging setup for the server process.

stdout carries the stdio protocol framing, so every handler installed here
writes either to a file under ``LOG_DIR`` or to stderr.
"""

import logging
import os
import sys

from .config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
LOG_FILE_NAME = "weather_server.log"


def configure_logging(settings: Settings) -> str:
    """Configure root logging and return the path of the log file."""
    os.makedirs(settings.log_dir, exist_ok=True)
    log_file = os.path.abspath(os.path.join(settings.log_dir, LOG_FILE_NAME))
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stderr),
        ],
        force=True,
    )
    # httpx logs every request URL at INFO, and those URLs carry the API key.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return log_file
